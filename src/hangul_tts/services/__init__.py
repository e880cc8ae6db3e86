"""
hangul-tts Services Layer.

    - generation_service.py: BatchRunner (resumable, paced generation)
    - validators.py: Input validation functions
"""
from .generation_service import BatchRunner, BatchStats
from .validators import ValidationError

__all__ = [
    "BatchRunner",
    "BatchStats",
    "ValidationError",
]
