"""
Command-Line Interface for hangul-tts.

Generates one Supertone clip per practice syllable into the output
directory, then writes manifest.json. Re-running resumes: clips already on
disk are skipped unless --overwrite is given.

Usage Examples:
    # Generate missing clips
    SUPERTONE_API_KEY=... SUPERTONE_VOICE_ID=... hangul-tts

    # Regenerate everything
    hangul-tts --overwrite

    # Show what would be generated, without any request
    hangul-tts --dry-run --json

    # Write the deck (order -> character -> audio path) for the web UI
    hangul-tts --export-deck public/deck.json

Environment Variables:
    SUPERTONE_API_KEY, SUPERTONE_VOICE_ID: Required
    SUPERTONE_BASE_URL, SUPERTONE_MODEL_ID, SUPERTONE_LANGUAGE,
    SUPERTONE_STYLE, SUPERTONE_OUTPUT_DIR, SUPERTONE_OUTPUT_FORMAT,
    SUPERTONE_PITCH_SHIFT, SUPERTONE_PITCH_VARIANCE, SUPERTONE_SPEED,
    SUPERTONE_REQUEST_INTERVAL_MS, SUPERTONE_PUBLIC_PATH: Optional
    HANGUL_TTS_LOG_LEVEL: Log verbosity (1-4)

Exit codes:
    0 success, 1 generation or filesystem failure, 2 configuration error.
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from typing import List, Mapping, Optional, Sequence
from uuid import uuid4

import yaml

from hangul_tts.core.config import ConfigIssue, Defaults, load_settings, resolve_config, resolve_deck_options
from hangul_tts.core.errors import ErrorCode, GenerationError
from hangul_tts.core.logging import configure_logging, get_logger, info, set_run_id
from hangul_tts.services.generation_service import ACTION_GENERATE, BatchRunner
from hangul_tts.tts.client import SupertoneClient
from hangul_tts.tts.manifest import write_manifest
from hangul_tts.tts.syllables import enumerate_syllables, export_deck

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG = 2


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="hangul-tts CLI (Supertone syllable audio generator)")

    parser.add_argument("--overwrite", action="store_true",
                        help="Regenerate clips that already exist")
    parser.add_argument("--dry-run", action="store_true",
                        help="List planned skips/requests without calling the API")
    parser.add_argument("--json", action="store_true",
                        help="Print JSON summary")
    parser.add_argument("--settings", metavar="PATH",
                        help=f"YAML settings file (default: {Defaults.SETTINGS_PATH} if present)")
    parser.add_argument("--export-deck", metavar="PATH",
                        help="Write the syllable deck as JSON and exit")
    parser.add_argument("--log-level",
                        help="Log level override (1-4 or MINIMAL/NORMAL/VERBOSE/DEBUG)")

    return parser.parse_args(argv)


def _print_error(payload: dict, as_json: bool) -> None:
    if as_json:
        print(json.dumps(payload, ensure_ascii=False))
    else:
        print(f"Error [{payload['error']}]: {payload['message']}", file=sys.stderr)


def _print_issues(issues: Sequence[ConfigIssue], as_json: bool) -> None:
    if as_json:
        print(json.dumps({
            "ok": False,
            "error": ErrorCode.CONFIG_ERROR,
            "issues": [{"field": i.field, "code": i.code, "message": i.message} for i in issues],
        }, ensure_ascii=False))
    else:
        print("Configuration error:", file=sys.stderr)
        for issue in issues:
            print(f"  - {issue}", file=sys.stderr)


def main(argv: Optional[List[str]] = None, env: Optional[Mapping[str, str]] = None) -> int:
    """
    CLI entry point.

    Configuration is resolved and fully validated before any client is
    built, so a bad setting never costs a request.

    Args:
        argv: Command-line arguments (defaults to sys.argv).
        env: Environment mapping (defaults to os.environ).

    Returns:
        Exit code.
    """
    args = _parse_args(argv)
    env = os.environ if env is None else env

    configure_logging(level=args.log_level, force=bool(args.log_level))
    log = get_logger("hangul-tts.cli")
    set_run_id(str(uuid4())[:12])

    try:
        settings = load_settings(args.settings)
    except yaml.YAMLError as e:
        _print_error({"ok": False, "error": ErrorCode.CONFIG_ERROR,
                      "message": f"invalid settings file: {e}"}, args.json)
        return EXIT_CONFIG
    except OSError as e:
        _print_error({"ok": False, "error": ErrorCode.CONFIG_ERROR, "message": str(e)}, args.json)
        return EXIT_CONFIG

    if args.export_deck:
        output_format, public_base, issues = resolve_deck_options(env, settings)
        if issues:
            _print_issues(issues, args.json)
            return EXIT_CONFIG
        path = export_deck(args.export_deck, output_format, public_base)
        info(log, "deck_exported", path=str(path))
        print(json.dumps({"ok": True, "deck": str(path)}) if args.json else f"Deck written to {path}")
        return EXIT_OK

    resolution = resolve_config(env, settings, overwrite=args.overwrite)
    if not resolution.ok:
        _print_issues(resolution.issues, args.json)
        return EXIT_CONFIG
    config = resolution.unwrap()

    syllables = enumerate_syllables()

    if args.dry_run:
        planned = BatchRunner(config).plan(syllables)
        to_generate = [item for item, action in planned if action == ACTION_GENERATE]
        payload = {
            "ok": True,
            "dry_run": True,
            "total": len(planned),
            "generate": len(to_generate),
            "skip": len(planned) - len(to_generate),
            "items": [{"order": item.order, "character": item.character,
                       "fileName": item.file_name, "action": action} for item, action in planned],
        }
        if args.json:
            print(json.dumps(payload, ensure_ascii=False))
        else:
            print(f"{payload['generate']} to generate, {payload['skip']} to skip, {payload['total']} total")
        return EXIT_OK

    try:
        with SupertoneClient(config) as client:
            runner = BatchRunner(config, client)
            manifest = runner.run(syllables)
        manifest_file = write_manifest(config, manifest.items, manifest.total)
    except GenerationError as e:
        _print_error(e.to_dict(), args.json)
        return EXIT_FAILED
    except OSError as e:
        _print_error({"ok": False, "error": ErrorCode.IO_ERROR, "message": str(e)}, args.json)
        return EXIT_FAILED

    info(log, "manifest_written", path=str(manifest_file))
    stats = runner.stats
    summary = {
        "ok": True,
        "generated": stats.generated,
        "skipped": stats.skipped,
        "total": stats.total,
        "manifest": str(manifest_file),
    }
    if args.json:
        print(json.dumps(summary, ensure_ascii=False))
    else:
        print(f"Generated {stats.generated}, skipped {stats.skipped}, total {stats.total}. "
              f"Manifest: {manifest_file}")
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
