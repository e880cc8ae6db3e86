"""
hangul-tts Structured Logging.

stdlib logging with numeric verbosity levels (1-4), a colored console
formatter, an optional rotating JSONL file, and a per-run correlation id.

Configuration:
    export HANGUL_TTS_LOG_LEVEL=3   # VERBOSE
    export HANGUL_TTS_LOG_DIR=logs  # enable JSONL file
    export HANGUL_TTS_NO_COLOR=1

Usage:
    from hangul_tts.core.logging import get_logger, info, verbose

    log = get_logger("hangul-tts.batch")
    info(log, "synth_done", order=7, character="사", seconds=0.42)
    verbose(log, "pacing_wait", seconds=3.1)
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional, Union

from . import colors
from .colors import Colors, colorize, get_tag_color, supports_color
from .context import STATE, get_level, get_level_name, get_run_id, read_logging_config, set_run_id
from .formatters import ColoredConsoleFormatter, JsonlFormatter
from .levels import LEVEL_MAP, LEVEL_NAMES, LogLevel, coerce_level

DEFAULT_JSONL_FILE = "hangul-tts.jsonl"
DEFAULT_ROTATE_BYTES = 10 * 1024 * 1024
DEFAULT_ROTATE_BACKUPS = 5

# Root passes everything; handlers filter
_ROOT_LEVEL = logging.DEBUG - 10


def _file_handler(options: Dict[str, Any]) -> Optional[logging.Handler]:
    log_dir = options.get("log_dir")
    if not log_dir:
        return None
    Path(log_dir).mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        Path(log_dir) / options.get("jsonl_file", DEFAULT_JSONL_FILE),
        maxBytes=options.get("rotate_max_bytes", DEFAULT_ROTATE_BYTES),
        backupCount=options.get("rotate_backup_count", DEFAULT_ROTATE_BACKUPS),
        encoding="utf-8",
        delay=True,
    )
    handler.setLevel(_ROOT_LEVEL)
    handler.setFormatter(JsonlFormatter())
    return handler


def configure_logging(level: Union[int, str, LogLevel, None] = None, force: bool = False) -> None:
    """
    Install console (and optional JSONL) handlers on the root logger.

    Args:
        level: 1-4, a level name, or LogLevel. Falls back to
            HANGUL_TTS_LOG_LEVEL, then NORMAL.
        force: Replace handlers installed by an earlier call.
    """
    if STATE.configured and not force:
        return

    colors.USE_COLORS = supports_color()
    STATE.options = read_logging_config()
    STATE.level = coerce_level(level or STATE.options.get("level"))

    root = logging.getLogger()
    root.setLevel(_ROOT_LEVEL)
    root.handlers = []

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(LEVEL_MAP[STATE.level])
    console.setFormatter(ColoredConsoleFormatter())
    root.addHandler(console)

    file_handler = _file_handler(STATE.options)
    if file_handler is not None:
        root.addHandler(file_handler)

    STATE.configured = True


def _log(logger: logging.Logger, py_level: int, tag: str, msg: str, numeric_level: int, **fields: Any) -> None:
    if numeric_level > STATE.level:
        return
    event = fields.pop("event", None)
    seconds = fields.pop("seconds", None)
    logger.log(
        py_level,
        msg,
        extra={
            "tag": tag,
            "run_id": get_run_id(),
            "event": event,
            "seconds": seconds,
            "extra_data": fields or None,
            "numeric_level": numeric_level,
        },
    )


def get_logger(name: str = "hangul-tts") -> logging.Logger:
    """Named logger; configures logging on first use."""
    configure_logging()
    return logging.getLogger(name)


def info(logger: logging.Logger, msg: str, **fields: Any) -> None:
    _log(logger, logging.INFO, "INFO", msg, LogLevel.NORMAL, **fields)


def warn(logger: logging.Logger, msg: str, **fields: Any) -> None:
    _log(logger, logging.WARNING, "WARN", msg, LogLevel.NORMAL, **fields)


def error(logger: logging.Logger, msg: str, **fields: Any) -> None:
    """Shown even at MINIMAL."""
    _log(logger, logging.ERROR, "ERROR", msg, LogLevel.MINIMAL, **fields)


def success(logger: logging.Logger, msg: str, **fields: Any) -> None:
    _log(logger, logging.INFO, "SUCCESS", msg, LogLevel.NORMAL, **fields)


def fail(logger: logging.Logger, msg: str, **fields: Any) -> None:
    """A failed operation; shown even at MINIMAL."""
    _log(logger, logging.ERROR, "FAIL", msg, LogLevel.MINIMAL, **fields)


def verbose(logger: logging.Logger, msg: str, **fields: Any) -> None:
    _log(logger, logging.DEBUG, "INFO", msg, LogLevel.VERBOSE, **fields)


def debug(logger: logging.Logger, msg: str, **fields: Any) -> None:
    _log(logger, logging.DEBUG - 5, "DEBUG", msg, LogLevel.DEBUG, **fields)


__all__ = [
    "LogLevel",
    "LEVEL_MAP",
    "LEVEL_NAMES",
    "coerce_level",
    "Colors",
    "supports_color",
    "colorize",
    "get_tag_color",
    "get_run_id",
    "set_run_id",
    "get_level",
    "get_level_name",
    "JsonlFormatter",
    "ColoredConsoleFormatter",
    "configure_logging",
    "get_logger",
    "info",
    "warn",
    "error",
    "success",
    "fail",
    "verbose",
    "debug",
]
