"""
Error Codes and Exceptions for the generation pipeline.

    - GenerationError: Base exception with a code and optional details
    - InvalidInputError: Text rejected before sending
    - ProviderError: Non-success HTTP response or transport failure

None of these are retried. A raised GenerationError aborts the run; the
files written so far stay on disk and are skipped on the next invocation.
"""
from __future__ import annotations

from typing import Any, Dict, Optional


class ErrorCode:
    """Standardized error codes reported by the CLI."""
    INVALID_INPUT = "INVALID_INPUT"
    TEXT_TOO_LONG = "TEXT_TOO_LONG"
    PROVIDER_ERROR = "PROVIDER_ERROR"
    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    IO_ERROR = "IO_ERROR"
    CONFIG_ERROR = "CONFIG_ERROR"


class GenerationError(Exception):
    """
    Base exception for generation failures.

    Attributes:
        message: Human-readable error message.
        code: Error code from ErrorCode.
        details: Optional dictionary with additional context.
    """

    def __init__(self, message: str, code: str = ErrorCode.PROVIDER_ERROR, details: Optional[Dict] = None):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the error payload printed by ``--json``."""
        result: Dict[str, Any] = {
            "ok": False,
            "error": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


class InvalidInputError(GenerationError):
    """Raised when text is rejected locally (empty or over the length limit)."""

    def __init__(self, message: str, code: str = ErrorCode.INVALID_INPUT, details: Optional[Dict] = None):
        super().__init__(message, code, details)


class ProviderError(GenerationError):
    """
    Raised when the TTS provider call fails.

    Attributes:
        status: HTTP status code, or None for transport failures.
        reason: HTTP reason phrase.
        body: Response body text (may be empty).
    """

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        reason: str = "",
        body: str = "",
        code: str = ErrorCode.PROVIDER_ERROR,
    ):
        self.status = status
        self.reason = reason
        self.body = body
        details: Dict[str, Any] = {}
        if status is not None:
            details["status"] = status
            details["reason"] = reason
        if body:
            details["body"] = body
        super().__init__(message, code, details)
