"""
Logging state shared across the process.

The run id lives in a ContextVar so every line emitted during one
generation run can be correlated (console and JSONL). Level and file
options are resolved once by configure_logging().

Environment Variables:
    HANGUL_TTS_LOG_LEVEL          1-4 or a level name
    HANGUL_TTS_LOG_DIR            enables the JSONL file when set
    HANGUL_TTS_JSONL_FILE         file name inside the log dir
    HANGUL_TTS_LOG_ROTATE_BYTES   rotate after this many bytes
    HANGUL_TTS_LOG_ROTATE_BACKUP  rotated files to keep
"""
from __future__ import annotations

import os
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, Dict

from .levels import LEVEL_NAMES, LogLevel

NO_RUN = "-"

_run_id: ContextVar[str] = ContextVar("run_id", default=NO_RUN)

_ENV_OPTIONS = (
    # (env suffix, option key, parser)
    ("LOG_LEVEL", "level", str),
    ("LOG_DIR", "log_dir", str),
    ("JSONL_FILE", "jsonl_file", str),
    ("LOG_ROTATE_BYTES", "rotate_max_bytes", int),
    ("LOG_ROTATE_BACKUP", "rotate_backup_count", int),
)


@dataclass
class LoggingState:
    configured: bool = False
    level: LogLevel = LogLevel.NORMAL
    options: Dict[str, Any] = field(default_factory=dict)


STATE = LoggingState()


def get_run_id() -> str:
    return _run_id.get()


def set_run_id(rid: str) -> None:
    """Tag subsequent log lines in this context with ``rid``."""
    _run_id.set(rid)


def get_level() -> LogLevel:
    return STATE.level


def get_level_name() -> str:
    return LEVEL_NAMES[int(STATE.level)]


def read_logging_config() -> Dict[str, Any]:
    """
    Collect HANGUL_TTS_* logging options from the environment.

    Unset or blank variables are left out; unparseable integers are
    ignored so configure_logging() falls back to its defaults.
    """
    options: Dict[str, Any] = {}
    for suffix, key, parse in _ENV_OPTIONS:
        raw = os.getenv(f"HANGUL_TTS_{suffix}")
        if not raw:
            continue
        try:
            options[key] = parse(raw)
        except ValueError:
            continue
    return options
