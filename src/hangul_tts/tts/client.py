"""
Supertone Text-to-Speech Client.

One blocking HTTP request per syllable:

    POST {base_url}/v1/text-to-speech/{voice_id}?output_format={fmt}
    x-sup-api-key: <key>
    {
        "text": "가",
        "language": "ko",
        "style": "neutral",          # omitted when not configured
        "model": "sona_speech_1",
        "voice_settings": {"pitch_shift": 0, "pitch_variance": 1, "speed": 1}
    }

The response body is the raw audio. The optional ``x-audio-length`` header
carries the clip duration in seconds.

Failures are not retried. Text over the provider limit is rejected before
sending; a non-2xx response or a transport failure raises ProviderError.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from hangul_tts.core.config import RunConfig
from hangul_tts.core.errors import ErrorCode, InvalidInputError, ProviderError
from hangul_tts.core.logging import debug, get_logger
from hangul_tts.services.validators import ValidationError, validate_text, validate_voice_id

_LOG = get_logger("hangul-tts.client")

API_KEY_HEADER = "x-sup-api-key"
AUDIO_LENGTH_HEADER = "x-audio-length"


@dataclass
class SynthesisResult:
    """
    Result of one synthesis call.

    Attributes:
        audio_bytes: Encoded audio in the configured output format.
        audio_length_seconds: Duration reported by the provider, if any.
    """
    audio_bytes: bytes
    audio_length_seconds: Optional[float] = None


def parse_audio_length(value: Optional[str]) -> Optional[float]:
    """Parse the duration header; anything but a finite number yields None."""
    if value is None:
        return None
    try:
        seconds = float(value)
    except ValueError:
        return None
    return seconds if math.isfinite(seconds) else None


class SupertoneClient:
    """
    Blocking Supertone API client.

    The client owns its httpx.Client unless one is passed in (tests pass a
    client built on httpx.MockTransport). Use it as a context manager so the
    connection pool is closed.

    Example:
        with SupertoneClient(config) as client:
            result = client.synthesize("가")
    """

    def __init__(self, config: RunConfig, http_client: Optional[httpx.Client] = None):
        self.config = config
        self._owns_client = http_client is None
        # No timeout beyond what the transport imposes
        self._http = http_client or httpx.Client(timeout=None)

    def __enter__(self) -> "SupertoneClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    @property
    def endpoint(self) -> str:
        return f"{self.config.base_url}/v1/text-to-speech/{self.config.voice_id}"

    def build_payload(self, text: str) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "text": text,
            "language": self.config.language,
        }
        if self.config.style:
            payload["style"] = self.config.style
        payload["model"] = self.config.model_id
        payload["voice_settings"] = self.config.voice_settings.to_dict()
        return payload

    def synthesize(self, text: str) -> SynthesisResult:
        """
        Synthesize ``text`` into audio bytes.

        Raises:
            InvalidInputError: Text is empty or over the provider limit.
            ProviderError: Non-success status or transport failure.
        """
        try:
            validate_text(text)
            validate_voice_id(self.config.voice_id)
        except ValidationError as e:
            raise InvalidInputError(e.message, code=_input_code(e.code), details={"text": text}) from e

        payload = self.build_payload(text)
        debug(_LOG, "synth_request", url=self.endpoint, payload=payload)

        try:
            response = self._http.post(
                self.endpoint,
                params={"output_format": self.config.output_format},
                headers={API_KEY_HEADER: self.config.api_key},
                json=payload,
            )
        except httpx.TransportError as e:
            raise ProviderError(
                f"Supertone request failed: {type(e).__name__}: {e}",
                code=ErrorCode.TRANSPORT_ERROR,
            ) from e

        if not response.is_success:
            body = response.text.strip()
            message = f"Supertone request failed: {response.status_code} {response.reason_phrase}"
            if body:
                message += f" - {body}"
            raise ProviderError(
                message,
                status=response.status_code,
                reason=response.reason_phrase,
                body=body,
            )

        return SynthesisResult(
            audio_bytes=response.content,
            audio_length_seconds=parse_audio_length(response.headers.get(AUDIO_LENGTH_HEADER)),
        )


def _input_code(validation_code: str) -> str:
    if validation_code == "TEXT_TOO_LONG":
        return ErrorCode.TEXT_TOO_LONG
    return ErrorCode.INVALID_INPUT
