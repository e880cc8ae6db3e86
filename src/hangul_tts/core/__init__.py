"""
Core Infrastructure for hangul-tts.

    - config.py: Run configuration resolution and validation
    - logging/: Structured logging with numeric levels
"""
