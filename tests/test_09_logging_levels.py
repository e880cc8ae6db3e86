"""Tests for numeric log levels, filtering, and JSONL output."""
from __future__ import annotations

import io
import json
import logging
import os
from unittest.mock import patch

import pytest

from hangul_tts.core.logging import (
    LogLevel,
    configure_logging,
    coerce_level,
    debug,
    fail,
    get_level,
    get_level_name,
    get_logger,
    info,
    set_run_id,
    verbose,
)


def emit_all(level):
    """Configure at ``level``, emit one line per helper, return console text."""
    captured = io.StringIO()
    with patch("sys.stdout", captured):
        configure_logging(level=level, force=True)
        log = get_logger("test_levels")
        fail(log, "synth_failed", order=3)
        info(log, "synth_done", order=1)
        verbose(log, "pacing_wait", seconds=3.1)
        debug(log, "synth_request", url="https://example.test")
    return captured.getvalue()


class TestLogLevel:
    """LogLevel values and ordering."""

    def test_numeric_values(self):
        assert [int(level) for level in LogLevel] == [1, 2, 3, 4]

    def test_ordering(self):
        assert LogLevel.MINIMAL < LogLevel.NORMAL < LogLevel.VERBOSE < LogLevel.DEBUG


class TestCoerceLevel:
    """coerce_level() accepts ints, digits, and names."""

    @pytest.mark.parametrize("raw,expected", [
        (1, LogLevel.MINIMAL),
        (4, LogLevel.DEBUG),
        ("3", LogLevel.VERBOSE),
        ("minimal", LogLevel.MINIMAL),
        (" Verbose ", LogLevel.VERBOSE),
        ("INFO", LogLevel.NORMAL),
        ("WARNING", LogLevel.MINIMAL),
        ("trace", LogLevel.DEBUG),
        (logging.ERROR, LogLevel.MINIMAL),
        (logging.INFO, LogLevel.NORMAL),
        (LogLevel.VERBOSE, LogLevel.VERBOSE),
    ])
    def test_accepted(self, raw, expected):
        assert coerce_level(raw) == expected

    @pytest.mark.parametrize("raw", ["loud", None, "", True])
    def test_unknown_is_normal(self, raw):
        assert coerce_level(raw) == LogLevel.NORMAL


class TestLevelFiltering:
    """Console output respects the configured level."""

    def test_minimal_only_failures(self):
        output = emit_all(1)
        assert "synth_failed" in output
        assert "synth_done" not in output
        assert "pacing_wait" not in output

    def test_normal_hides_verbose(self):
        output = emit_all(2)
        assert "synth_done" in output
        assert "order=1" in output
        assert "pacing_wait" not in output

    def test_verbose_hides_debug(self):
        output = emit_all(3)
        assert "pacing_wait" in output
        assert "3.100s" in output
        assert "synth_request" not in output

    def test_debug_shows_everything(self):
        output = emit_all(4)
        for name in ("synth_failed", "synth_done", "pacing_wait", "synth_request"):
            assert name in output


class TestRunId:
    """The run id is attached to console lines."""

    def test_run_id_in_console_line(self):
        captured = io.StringIO()
        with patch("sys.stdout", captured):
            configure_logging(level=2, force=True)
            set_run_id("3f2a9c1b7d4e")
            info(get_logger("test_rid"), "run_start", total=140)

        assert "(3f2a9c1b7d4e)" in captured.getvalue()


class TestEnvOverride:
    """HANGUL_TTS_LOG_LEVEL and explicit levels."""

    def test_env_sets_level(self):
        with patch.dict(os.environ, {"HANGUL_TTS_LOG_LEVEL": "3"}):
            configure_logging(force=True)
        assert get_level() == LogLevel.VERBOSE
        assert get_level_name() == "VERBOSE"

    def test_explicit_level_wins(self):
        with patch.dict(os.environ, {"HANGUL_TTS_LOG_LEVEL": "3"}):
            configure_logging(level="MINIMAL", force=True)
        assert get_level_name() == "MINIMAL"

    def test_not_reconfigured_without_force(self):
        configure_logging(level=2, force=True)
        configure_logging(level=4)
        assert get_level() == LogLevel.NORMAL


class TestJsonlFile:
    """HANGUL_TTS_LOG_DIR enables the JSONL file."""

    def test_record_fields(self, tmp_path):
        env = {"HANGUL_TTS_LOG_DIR": str(tmp_path), "HANGUL_TTS_JSONL_FILE": "run.jsonl"}
        with patch.dict(os.environ, env):
            configure_logging(level=2, force=True)
            info(get_logger("test_jsonl"), "synth_done", character="가", seconds=0.25)

        root = logging.getLogger()
        for handler in root.handlers:
            handler.flush()
            handler.close()
        configure_logging(level=2, force=True)

        lines = (tmp_path / "run.jsonl").read_text(encoding="utf-8").splitlines()
        data = json.loads(lines[-1])
        assert data["message"] == "synth_done"
        assert data["level"] == 2
        assert data["tag"] == "INFO"
        assert data["seconds"] == 0.25
        assert data["extra"] == {"character": "가"}
        assert "event" not in data
