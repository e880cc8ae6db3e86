"""
hangul-tts: Speech audio generator for a Hangul flashcard deck.

Pre-generates one Supertone text-to-speech clip per practice syllable and
writes a manifest the flashcard web UI can rely on.

Key Features:
    - Deterministic 140-syllable deck (14 consonants x 10 vowels)
    - Fail-fast configuration validation before any request
    - Paced, strictly sequential requests (provider rate limit)
    - Resume after interruption by skipping clips already on disk
    - JSON manifest with per-clip durations

Example Usage:
    >>> import os
    >>> from hangul_tts.core.config import load_run_config
    >>> from hangul_tts.services import BatchRunner
    >>> from hangul_tts.tts.client import SupertoneClient
    >>> from hangul_tts.tts.manifest import write_manifest
    >>> from hangul_tts.tts.syllables import enumerate_syllables
    >>>
    >>> config = load_run_config(os.environ)
    >>> with SupertoneClient(config) as client:
    ...     manifest = BatchRunner(config, client).run(enumerate_syllables())
    >>> write_manifest(config, manifest.items, manifest.total)
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
