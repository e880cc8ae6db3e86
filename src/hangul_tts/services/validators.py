"""
Input Validation for Synthesis Requests.

Validation happens before a request is sent so that oversized input is
rejected locally instead of being billed and refused by the provider.

Validation Rules:
    - Text: Required, max 300 characters (Supertone per-request limit)
    - Voice ID: Required, no path separators

Error Handling:
    All validation functions raise ValidationError with:
        - message: Human-readable error description
        - code: Machine-readable error code (e.g., "TEXT_TOO_LONG")

Usage:
    from hangul_tts.services.validators import validate_text, ValidationError

    try:
        text = validate_text(character)
    except ValidationError as e:
        print(e.code, e.message)
"""
from __future__ import annotations

# Supertone rejects text longer than this in a single request
MAX_TEXT_LENGTH = 300


class ValidationError(Exception):
    """
    Exception raised when input validation fails.

    Attributes:
        message: Human-readable error description.
        code: Machine-readable error code.
    """

    def __init__(self, message: str, code: str = "VALIDATION_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


def validate_text(text: str, max_length: int = MAX_TEXT_LENGTH) -> str:
    """
    Validate text input.

    Unlike a form field, the text is not stripped: a syllable is sent
    exactly as enumerated.

    Raises:
        ValidationError: TEXT_REQUIRED or TEXT_TOO_LONG.
    """
    if not text:
        raise ValidationError("Text is required", "TEXT_REQUIRED")

    if len(text) > max_length:
        raise ValidationError(
            f"Text exceeds maximum length ({len(text)} > {max_length}): {text!r}",
            "TEXT_TOO_LONG",
        )

    return text


def validate_voice_id(voice_id: str) -> str:
    """
    Validate a voice identifier before it is placed in a URL path.

    Raises:
        ValidationError: VOICE_ID_REQUIRED or VOICE_ID_INVALID.
    """
    if not voice_id:
        raise ValidationError("Voice ID is required", "VOICE_ID_REQUIRED")

    if "/" in voice_id or "?" in voice_id:
        raise ValidationError(
            f"Voice ID contains invalid characters: {voice_id!r}",
            "VOICE_ID_INVALID",
        )

    return voice_id
