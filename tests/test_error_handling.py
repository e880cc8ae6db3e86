"""
Tests for error classes.

Tests cover:
- ErrorCode values
- GenerationError serialization (to_dict)
- ProviderError status, reason and body details
- Exception inheritance
"""
import pytest

from hangul_tts.core.errors import ErrorCode, GenerationError, InvalidInputError, ProviderError


class TestErrorCode:
    """Tests for ErrorCode constants."""

    @pytest.mark.parametrize("name", [
        "INVALID_INPUT", "TEXT_TOO_LONG", "PROVIDER_ERROR",
        "TRANSPORT_ERROR", "IO_ERROR", "CONFIG_ERROR",
    ])
    def test_code_equals_name(self, name):
        assert getattr(ErrorCode, name) == name


class TestGenerationError:
    """Tests for GenerationError base exception."""

    def test_creation_with_message(self):
        error = GenerationError("Test error message")
        assert error.message == "Test error message"
        assert str(error) == "Test error message"
        assert error.code == ErrorCode.PROVIDER_ERROR
        assert error.details == {}

    def test_to_dict_without_details(self):
        error = GenerationError("boom", ErrorCode.IO_ERROR)
        assert error.to_dict() == {"ok": False, "error": "IO_ERROR", "message": "boom"}

    def test_to_dict_with_details(self):
        error = GenerationError("boom", details={"order": 7})
        assert error.to_dict()["details"] == {"order": 7}


class TestInvalidInputError:
    """Tests for InvalidInputError."""

    def test_default_code(self):
        assert InvalidInputError("bad").code == ErrorCode.INVALID_INPUT

    def test_too_long_code(self):
        error = InvalidInputError("long", code=ErrorCode.TEXT_TOO_LONG, details={"text": "가"})
        assert error.code == ErrorCode.TEXT_TOO_LONG
        assert error.details["text"] == "가"


class TestProviderError:
    """Tests for ProviderError."""

    def test_http_details(self):
        error = ProviderError("failed", status=401, reason="Unauthorized", body="invalid key")
        assert error.status == 401
        assert error.details == {"status": 401, "reason": "Unauthorized", "body": "invalid key"}

    def test_empty_body_omitted(self):
        error = ProviderError("failed", status=500, reason="Internal Server Error")
        assert "body" not in error.details

    def test_transport_error_has_no_status(self):
        error = ProviderError("connect failed", code=ErrorCode.TRANSPORT_ERROR)
        assert error.status is None
        assert error.details == {}
        assert error.to_dict()["error"] == "TRANSPORT_ERROR"


class TestInheritance:
    """All generation errors share a base class."""

    def test_subclasses(self):
        assert issubclass(InvalidInputError, GenerationError)
        assert issubclass(ProviderError, GenerationError)

    def test_catch_as_base(self):
        with pytest.raises(GenerationError):
            raise ProviderError("x", status=503)
