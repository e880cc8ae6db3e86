"""Shared fixtures: run configs, a fake clock, and a mock Supertone API."""
from __future__ import annotations

import json
from dataclasses import replace
from typing import Callable, Dict, List, Optional

import httpx
import pytest

from hangul_tts.core.config import RunConfig, VoiceSettings


class FakeClock:
    """Monotonic clock that only advances when told to (or when slept on)."""

    def __init__(self, start: float = 1000.0):
        self.now = start
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeSupertone:
    """
    httpx.MockTransport handler that records requests.

    ``fail_on`` maps syllable text to an HTTP status to return instead of
    audio. ``latency`` advances the fake clock during each request.
    """

    def __init__(self, clock: Optional[FakeClock] = None, latency: float = 0.0,
                 audio_length: Optional[str] = "0.61"):
        self.clock = clock
        self.latency = latency
        self.audio_length = audio_length
        self.fail_on: Dict[str, int] = {}
        self.requests: List[httpx.Request] = []
        self.start_times: List[float] = []

    @property
    def texts(self) -> List[str]:
        return [json.loads(r.content)["text"] for r in self.requests]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.clock is not None:
            self.start_times.append(self.clock())
            self.clock.advance(self.latency)
        text = json.loads(request.content)["text"]
        if text in self.fail_on:
            return httpx.Response(self.fail_on[text], text="quota exceeded")
        headers = {"content-type": "audio/mpeg"}
        if self.audio_length is not None:
            headers["x-audio-length"] = self.audio_length
        return httpx.Response(200, content=f"AUDIO:{text}".encode("utf-8"), headers=headers)

    def http_client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self))


@pytest.fixture
def make_config(tmp_path) -> Callable[..., RunConfig]:
    """Build a valid RunConfig writing into tmp_path/audio."""
    base = RunConfig(
        api_key="test-key",
        voice_id="voice-123",
        output_dir=str(tmp_path / "audio"),
        voice_settings=VoiceSettings(),
    )

    def _make(**overrides) -> RunConfig:
        return replace(base, **overrides)

    return _make


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fake_api(clock) -> FakeSupertone:
    return FakeSupertone(clock=clock)
