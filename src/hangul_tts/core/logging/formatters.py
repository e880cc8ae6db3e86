"""
Log formatters.

    JsonlFormatter           one JSON object per line (log file)
    ColoredConsoleFormatter  "14:30:05 [ INFO  ] (run) synth_done order=7 0.412s"

Durations on the console are green under 0.5s, yellow under 2s, red above.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Dict

from .colors import Colors, colorize, get_tag_color
from .context import NO_RUN

# Keyword fields that identify a syllable stand out on the console
_HIGHLIGHT_FIELDS = ("order", "character")


def _timing_color(seconds: float) -> str:
    if seconds < 0.5:
        return Colors.GREEN
    if seconds < 2.0:
        return Colors.YELLOW
    return Colors.RED


class JsonlFormatter(logging.Formatter):
    """
    One JSON object per record.

    Example line:
        {"ts": "2026-01-15T14:30:05+09:00", "level": 2, "tag": "INFO",
         "message": "synth_done", "run_id": "3f2a9c1b7d4e",
         "seconds": 0.41, "extra": {"order": 7, "file": "007.mp3"}}
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created).astimezone().isoformat(),
            "level": getattr(record, "numeric_level", 2),
            "tag": getattr(record, "tag", record.levelname),
            "message": record.getMessage(),
            "run_id": getattr(record, "run_id", NO_RUN),
        }
        optional = {
            "event": getattr(record, "event", None),
            "seconds": getattr(record, "seconds", None),
            "extra": getattr(record, "extra_data", None) or None,
        }
        payload.update({k: v for k, v in optional.items() if v is not None and v != ""})
        return json.dumps(payload, ensure_ascii=False)


class ColoredConsoleFormatter(logging.Formatter):

    def format(self, record: logging.LogRecord) -> str:
        tag = getattr(record, "tag", record.levelname)
        parts = [
            colorize(datetime.fromtimestamp(record.created).strftime("%H:%M:%S"), Colors.DIM),
            colorize(f"[{tag:^7}]", get_tag_color(tag)),
        ]

        run_id = getattr(record, "run_id", NO_RUN)
        if run_id != NO_RUN:
            parts.append(colorize(f"({run_id})", Colors.DIM + Colors.CYAN))
        parts.append(record.getMessage())

        event = getattr(record, "event", None)
        if event:
            parts.append(colorize(f"event={event}", Colors.BLUE))

        seconds = getattr(record, "seconds", None)
        if seconds is not None:
            parts.append(colorize(f"{seconds:.3f}s", _timing_color(seconds)))

        for key, value in (getattr(record, "extra_data", None) or {}).items():
            parts.append(colorize(f"{key}={value}", Colors.MAGENTA if key in _HIGHLIGHT_FIELDS else Colors.DIM))

        return " ".join(parts)
