"""
Utility Modules for hangul-tts.

    - timeit.py: Performance measurement utilities
"""
