"""
Generation Manifest.

The manifest records one run's configuration and the ordered per-syllable
results. It is written once at the end of a successful run to
``{output_dir}/manifest.json``; an aborted run writes nothing.

Example manifest.json:
    {
      "generatedAt": "2026-01-15T05:30:05.123Z",
      "provider": "supertone",
      "baseUrl": "https://supertoneapi.com",
      "voiceId": "voice-123",
      "modelId": "sona_speech_1",
      "language": "ko",
      "outputFormat": "mp3",
      "voiceSettings": {"pitch_shift": 0.0, "pitch_variance": 1.0, "speed": 1.0},
      "total": 140,
      "items": [
        {"id": "letter-001", "character": "가", "order": 1,
         "fileName": "001.mp3", "path": "/audio/001.mp3", "audioLengthSeconds": 0.61}
      ]
    }

Keys are camelCase for the web UI, except ``voiceSettings`` which mirrors
the provider's request body. Absent optional values (``style``,
``audioLengthSeconds``) are omitted, not null. The API key is never written.
"""
from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from hangul_tts.core.config import RunConfig
from hangul_tts.tts.storage import write_bytes_atomic

MANIFEST_FILE_NAME = "manifest.json"
PROVIDER = "supertone"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class GenerationItem(_CamelModel):
    """
    Outcome for one syllable.

    ``audio_length_seconds`` is None on the skip path and when the provider
    did not report a duration.
    """
    id: str
    character: str
    order: int
    file_name: str
    path: str
    audio_length_seconds: Optional[float] = None


class ManifestVoiceSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    pitch_shift: float
    pitch_variance: float
    speed: float


class Manifest(_CamelModel):
    """Run metadata plus the ordered item sequence."""
    generated_at: str
    provider: str = PROVIDER
    base_url: str
    voice_id: str
    model_id: str
    language: str
    style: Optional[str] = None
    output_format: str
    voice_settings: ManifestVoiceSettings
    total: int
    items: List[GenerationItem] = Field(default_factory=list)

    def to_json(self) -> str:
        """Pretty-printed JSON with a trailing newline."""
        data = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        return json.dumps(data, ensure_ascii=False, indent=2) + "\n"


def format_timestamp(moment: Optional[datetime] = None) -> str:
    """UTC ISO-8601 with millisecond precision and a ``Z`` suffix."""
    dt = (moment or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return f"{dt:%Y-%m-%dT%H:%M:%S}.{dt.microsecond // 1000:03d}Z"


def manifest_path(output_dir: Union[str, Path]) -> Path:
    return Path(output_dir) / MANIFEST_FILE_NAME


def build_manifest(
    config: RunConfig,
    items: Sequence[GenerationItem],
    total: int,
    generated_at: Optional[datetime] = None,
) -> Manifest:
    """Derive a Manifest from a run's config and items."""
    vs = config.voice_settings
    return Manifest(
        generated_at=format_timestamp(generated_at),
        base_url=config.base_url,
        voice_id=config.voice_id,
        model_id=config.model_id,
        language=config.language,
        style=config.style,
        output_format=config.output_format,
        voice_settings=ManifestVoiceSettings(
            pitch_shift=vs.pitch_shift,
            pitch_variance=vs.pitch_variance,
            speed=vs.speed,
        ),
        total=total,
        items=list(items),
    )


def write_manifest(
    config: RunConfig,
    items: Sequence[GenerationItem],
    total: int,
    generated_at: Optional[datetime] = None,
) -> Path:
    """
    Write manifest.json into the configured output directory.

    Returns:
        Path of the manifest file.
    """
    manifest = build_manifest(config, items, total, generated_at=generated_at)
    path = manifest_path(config.output_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    write_bytes_atomic(path, manifest.to_json().encode("utf-8"))
    return path


def load_manifest(path: Union[str, Path]) -> Manifest:
    """Read a manifest written by write_manifest()."""
    return Manifest.model_validate_json(Path(path).read_text(encoding="utf-8"))
