"""
Tests for the Supertone client.

Tests cover:
- Request URL, query, header and JSON body
- Optional style field
- Duration header parsing
- Local text length check (no request sent)
- Non-success responses and transport failures
"""
import json

import httpx
import pytest

from hangul_tts.core.errors import ErrorCode, InvalidInputError, ProviderError
from hangul_tts.core.config import VoiceSettings
from hangul_tts.services.validators import MAX_TEXT_LENGTH
from hangul_tts.tts.client import SupertoneClient, parse_audio_length

from conftest import FakeSupertone


def client_for(config, api):
    return SupertoneClient(config, http_client=api.http_client())


class TestRequestShape:
    """What goes over the wire."""

    def test_url_query_and_header(self, make_config):
        api = FakeSupertone()
        config = make_config(base_url="https://api.example.test", output_format="wav")
        client_for(config, api).synthesize("가")

        request = api.requests[0]
        assert request.method == "POST"
        assert request.url.path == "/v1/text-to-speech/voice-123"
        assert request.url.params["output_format"] == "wav"
        assert request.url.host == "api.example.test"
        assert request.headers["x-sup-api-key"] == "test-key"

    def test_json_body(self, make_config):
        api = FakeSupertone()
        config = make_config(
            language="ja",
            style="happy",
            model_id="sona_speech_2",
            voice_settings=VoiceSettings(pitch_shift=-2, pitch_variance=1.2, speed=0.8),
        )
        client_for(config, api).synthesize("나")

        body = json.loads(api.requests[0].content)
        assert body == {
            "text": "나",
            "language": "ja",
            "style": "happy",
            "model": "sona_speech_2",
            "voice_settings": {"pitch_shift": -2, "pitch_variance": 1.2, "speed": 0.8},
        }

    def test_style_omitted_when_unset(self, make_config):
        api = FakeSupertone()
        client_for(make_config(style=None), api).synthesize("다")
        assert "style" not in json.loads(api.requests[0].content)


class TestResponse:
    """Successful responses."""

    def test_returns_audio_and_duration(self, make_config):
        api = FakeSupertone(audio_length="0.75")
        result = client_for(make_config(), api).synthesize("가")
        assert result.audio_bytes == "AUDIO:가".encode("utf-8")
        assert result.audio_length_seconds == 0.75

    def test_missing_duration_header(self, make_config):
        api = FakeSupertone(audio_length=None)
        result = client_for(make_config(), api).synthesize("가")
        assert result.audio_length_seconds is None

    @pytest.mark.parametrize("raw,expected", [
        ("1.5", 1.5),
        (" 2 ", 2.0),
        ("abc", None),
        ("nan", None),
        ("inf", None),
        ("", None),
        (None, None),
    ])
    def test_parse_audio_length(self, raw, expected):
        assert parse_audio_length(raw) == expected


class TestInputLimit:
    """Text length is checked before sending."""

    def test_too_long_text_not_sent(self, make_config):
        api = FakeSupertone()
        text = "가" * (MAX_TEXT_LENGTH + 1)
        with pytest.raises(InvalidInputError) as exc_info:
            client_for(make_config(), api).synthesize(text)
        assert exc_info.value.code == ErrorCode.TEXT_TOO_LONG
        assert text in exc_info.value.message
        assert api.requests == []

    def test_text_at_limit_sent(self, make_config):
        api = FakeSupertone()
        client_for(make_config(), api).synthesize("가" * MAX_TEXT_LENGTH)
        assert len(api.requests) == 1

    def test_empty_text_rejected(self, make_config):
        api = FakeSupertone()
        with pytest.raises(InvalidInputError) as exc_info:
            client_for(make_config(), api).synthesize("")
        assert exc_info.value.code == ErrorCode.INVALID_INPUT
        assert api.requests == []


class TestFailures:
    """Provider and transport failures."""

    def test_non_success_status(self, make_config):
        api = FakeSupertone()
        api.fail_on["가"] = 429
        with pytest.raises(ProviderError) as exc_info:
            client_for(make_config(), api).synthesize("가")

        err = exc_info.value
        assert err.code == ErrorCode.PROVIDER_ERROR
        assert err.status == 429
        assert err.reason == "Too Many Requests"
        assert err.body == "quota exceeded"
        assert "429" in err.message
        assert "Too Many Requests" in err.message
        assert "quota exceeded" in err.message

    def test_empty_body_not_appended(self, make_config):
        def handler(request):
            return httpx.Response(500)

        client = SupertoneClient(make_config(), http_client=httpx.Client(transport=httpx.MockTransport(handler)))
        with pytest.raises(ProviderError) as exc_info:
            client.synthesize("가")
        assert exc_info.value.message == "Supertone request failed: 500 Internal Server Error"
        assert "body" not in exc_info.value.details

    def test_transport_error_wrapped(self, make_config):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = SupertoneClient(make_config(), http_client=httpx.Client(transport=httpx.MockTransport(handler)))
        with pytest.raises(ProviderError) as exc_info:
            client.synthesize("가")
        assert exc_info.value.code == ErrorCode.TRANSPORT_ERROR
        assert exc_info.value.status is None


class TestLifecycle:
    """Ownership of the underlying httpx.Client."""

    def test_injected_client_not_closed(self, make_config):
        api = FakeSupertone()
        http = api.http_client()
        with SupertoneClient(make_config(), http_client=http):
            pass
        assert not http.is_closed

    def test_owned_client_closed(self, make_config):
        client = SupertoneClient(make_config())
        with client:
            pass
        assert client._http.is_closed
