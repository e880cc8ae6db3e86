"""
ANSI colors for the console formatter.

Off when stdout is not a terminal, when NO_COLOR is set, or when
HANGUL_TTS_NO_COLOR=1. configure_logging() re-evaluates USE_COLORS.
"""
from __future__ import annotations

import os
import sys


class Colors:
    RESET = "\033[0m"
    DIM = "\033[2m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    MAGENTA = "\033[35m"
    CYAN = "\033[36m"
    WHITE = "\033[37m"
    GRAY = "\033[90m"

    BRIGHT_RED = "\033[91m"
    BRIGHT_GREEN = "\033[92m"
    BRIGHT_YELLOW = "\033[93m"
    BRIGHT_CYAN = "\033[96m"


TAG_COLORS = {
    "SUCCESS": Colors.BRIGHT_GREEN,
    "FAIL": Colors.BRIGHT_RED,
    "ERROR": Colors.BRIGHT_RED,
    "WARN": Colors.BRIGHT_YELLOW,
    "INFO": Colors.BRIGHT_CYAN,
    "DEBUG": Colors.GRAY,
}


def supports_color() -> bool:
    """True when ANSI escapes should be written to stdout."""
    if os.getenv("HANGUL_TTS_NO_COLOR") == "1" or os.getenv("NO_COLOR"):
        return False
    isatty = getattr(sys.stdout, "isatty", None)
    return bool(isatty and isatty())


USE_COLORS = supports_color()


def colorize(text: str, color: str) -> str:
    return f"{color}{text}{Colors.RESET}" if USE_COLORS else text


def get_tag_color(tag: str) -> str:
    return TAG_COLORS.get(tag.upper(), Colors.WHITE)
