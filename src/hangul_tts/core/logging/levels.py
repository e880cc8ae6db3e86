"""
Numeric log levels.

Four verbosity steps, each mapped onto a stdlib logging level:

    1 MINIMAL -> WARNING   run summary and fatal failures
    2 NORMAL  -> INFO      one line per syllable (default)
    3 VERBOSE -> DEBUG     skips, pacing waits, file writes
    4 DEBUG   -> 5         request payloads
"""
from __future__ import annotations

import logging
from enum import IntEnum
from typing import Any, Dict


class LogLevel(IntEnum):
    MINIMAL = 1
    NORMAL = 2
    VERBOSE = 3
    DEBUG = 4


LEVEL_MAP = {
    LogLevel.MINIMAL: logging.WARNING,
    LogLevel.NORMAL: logging.INFO,
    LogLevel.VERBOSE: logging.DEBUG,
    LogLevel.DEBUG: logging.DEBUG - 5,
}

LEVEL_NAMES = {int(level): level.name for level in LogLevel}

# Accepted spellings: our names, their digits, and stdlib level names
_ALIASES: Dict[str, LogLevel] = {level.name: level for level in LogLevel}
_ALIASES.update({str(int(level)): level for level in LogLevel})
_ALIASES.update({
    "TRACE": LogLevel.DEBUG,
    "CRITICAL": LogLevel.MINIMAL,
    "ERROR": LogLevel.MINIMAL,
    "WARNING": LogLevel.MINIMAL,
    "WARN": LogLevel.MINIMAL,
    "INFO": LogLevel.NORMAL,
})


def coerce_level(value: Any) -> LogLevel:
    """
    Turn CLI/env input into a LogLevel.

    Ints 1-4 are taken as-is, larger ints as stdlib levels. Anything
    unrecognised means NORMAL.

    Examples:
        >>> coerce_level("3")
        <LogLevel.VERBOSE: 3>
        >>> coerce_level(logging.ERROR)
        <LogLevel.MINIMAL: 1>
    """
    if isinstance(value, bool) or value is None:
        return LogLevel.NORMAL
    if isinstance(value, int):
        if value in LEVEL_NAMES:
            return LogLevel(value)
        for level in (LogLevel.MINIMAL, LogLevel.NORMAL):
            if value >= LEVEL_MAP[level]:
                return level
        return LogLevel.DEBUG
    return _ALIASES.get(str(value).strip().upper(), LogLevel.NORMAL)
