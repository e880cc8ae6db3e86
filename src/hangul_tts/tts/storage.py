"""
Audio File Storage.

Generated clips live flat in the output directory, named by the
syllable's zero-padded order:

    {output_dir}/
        001.mp3
        002.mp3
        ...
        140.mp3
        manifest.json

The web UI fetches them from ``{public_base_path}/NNN.<ext>``.

Writes are atomic (temp file, then rename) so an interrupted run never
leaves a truncated clip that would be mistaken for a finished one on the
next resume.
"""
from __future__ import annotations

from pathlib import Path
from typing import Union

from hangul_tts.core.logging import get_logger, verbose
from hangul_tts.utils.timeit import timeit

_LOG = get_logger("hangul-tts.storage")

PathLike = Union[str, Path]


def audio_file_name(order: int, extension: str) -> str:
    """
    File name for a syllable's clip.

    Example:
        >>> audio_file_name(7, "mp3")
        '007.mp3'
    """
    return f"{order:03d}.{extension}"


def public_path(public_base_path: str, file_name: str) -> str:
    """URL path the web UI uses for a clip (e.g. ``/audio/007.mp3``)."""
    return f"{public_base_path.rstrip('/')}/{file_name}"


def audio_exists(output_dir: PathLike, file_name: str) -> bool:
    return (Path(output_dir) / file_name).is_file()


def ensure_output_dir(output_dir: PathLike) -> Path:
    p = Path(output_dir)
    p.mkdir(parents=True, exist_ok=True)
    return p


def write_bytes_atomic(target: Path, data: bytes) -> None:
    """
    Write bytes to ``target`` via a sibling temp file.

    Raises:
        OSError: On any filesystem failure; the temp file is removed.
    """
    tmp = target.with_name(target.name + ".tmp")
    try:
        tmp.write_bytes(data)
        tmp.replace(target)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise


def write_audio(output_dir: PathLike, file_name: str, audio_bytes: bytes) -> Path:
    """
    Save a clip into the output directory.

    Unlike a cache, a failed write here is fatal to the run and is not
    swallowed.

    Returns:
        Path of the written file.
    """
    target = Path(output_dir) / file_name
    with timeit("audio_write") as t:
        write_bytes_atomic(target, audio_bytes)
    verbose(_LOG, "audio_written", file=file_name, bytes=len(audio_bytes), seconds=round(t.seconds, 4))
    return target
