"""
Configuration Management for hangul-tts.

This module resolves every tunable parameter of a generation run into a
single immutable RunConfig before any network activity starts:
    - Default values (Defaults class)
    - Optional YAML settings file (``supertone:`` section)
    - Environment overrides (SUPERTONE_* variables)
    - Validation that collects every problem instead of stopping at the first

Configuration Hierarchy (highest priority first):
    1. Environment mapping passed to resolve_config()
    2. YAML config file (config/settings.yaml)
    3. Defaults class values

Example settings.yaml:
    supertone:
      model_id: sona_speech_1
      language: ko
      output_format: wav
      speed: 0.9
      request_interval_ms: 4500

The resolver never reads os.environ and never exits the process. It returns
a ConfigResolution; the CLI decides what to do with the issues.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml


ENV_PREFIX = "SUPERTONE_"


class IssueCode:
    """Machine-readable codes for configuration issues."""
    API_KEY_REQUIRED = "API_KEY_REQUIRED"
    VOICE_ID_REQUIRED = "VOICE_ID_REQUIRED"
    VOICE_ID_INVALID = "VOICE_ID_INVALID"
    NOT_A_NUMBER = "NOT_A_NUMBER"
    OUT_OF_RANGE = "OUT_OF_RANGE"
    INVALID_CHOICE = "INVALID_CHOICE"
    INTERVAL_TOO_SHORT = "INTERVAL_TOO_SHORT"


@dataclass(frozen=True)
class ConfigIssue:
    """A single configuration problem, keyed by the environment variable name."""
    field: str
    code: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class ConfigValidationError(Exception):
    """
    Raised when a resolved configuration is unwrapped with issues.

    Attributes:
        issues: Every ConfigIssue found, in resolution order.
    """

    def __init__(self, issues: List[ConfigIssue]):
        self.issues = list(issues)
        super().__init__("; ".join(str(issue) for issue in self.issues))


class Defaults:
    """
    Centralized default values and bounds.

    Supertone limits callers to one request every four seconds, so the
    request interval has a hard floor rather than just a default.
    """

    # ─────────────────────────────────────────────────────────────────────────
    # Provider
    # ─────────────────────────────────────────────────────────────────────────
    BASE_URL = "https://supertoneapi.com"
    MODEL_ID = "sona_speech_1"
    LANGUAGE = "ko"
    STYLE: Optional[str] = None
    SUPPORTED_LANGUAGES = ("ko", "en", "ja")

    # ─────────────────────────────────────────────────────────────────────────
    # Output
    # ─────────────────────────────────────────────────────────────────────────
    OUTPUT_DIR = "public/audio"
    OUTPUT_FORMAT = "mp3"
    SUPPORTED_FORMATS = ("mp3", "wav")
    PUBLIC_BASE_PATH = "/audio"

    # ─────────────────────────────────────────────────────────────────────────
    # Voice shaping (inclusive ranges)
    # ─────────────────────────────────────────────────────────────────────────
    PITCH_SHIFT = 0.0
    PITCH_SHIFT_RANGE = (-12.0, 12.0)
    PITCH_VARIANCE = 1.0
    PITCH_VARIANCE_RANGE = (0.1, 2.0)
    SPEED = 1.0
    SPEED_RANGE = (0.5, 2.0)

    # ─────────────────────────────────────────────────────────────────────────
    # Pacing
    # ─────────────────────────────────────────────────────────────────────────
    REQUEST_INTERVAL_MS = 4000.0
    MIN_REQUEST_INTERVAL_MS = 4000.0

    SETTINGS_PATH = "config/settings.yaml"


@dataclass(frozen=True)
class VoiceSettings:
    """Voice-shaping knobs sent to the provider as ``voice_settings``."""
    pitch_shift: float = Defaults.PITCH_SHIFT
    pitch_variance: float = Defaults.PITCH_VARIANCE
    speed: float = Defaults.SPEED

    def to_dict(self) -> Dict[str, float]:
        return {
            "pitch_shift": self.pitch_shift,
            "pitch_variance": self.pitch_variance,
            "speed": self.speed,
        }


@dataclass(frozen=True)
class RunConfig:
    """
    Validated parameters for one generation run.

    Built once by resolve_config() and handed to every downstream
    component; nothing downstream reads the process environment.
    """
    api_key: str = field(repr=False)
    voice_id: str
    base_url: str = Defaults.BASE_URL
    model_id: str = Defaults.MODEL_ID
    language: str = Defaults.LANGUAGE
    style: Optional[str] = Defaults.STYLE
    output_dir: str = Defaults.OUTPUT_DIR
    output_format: str = Defaults.OUTPUT_FORMAT
    voice_settings: VoiceSettings = field(default_factory=VoiceSettings)
    request_interval_ms: float = Defaults.REQUEST_INTERVAL_MS
    overwrite: bool = False
    public_base_path: str = Defaults.PUBLIC_BASE_PATH

    @property
    def output_path(self) -> Path:
        return Path(self.output_dir)

    @property
    def extension(self) -> str:
        """File extension of generated clips (same as the output format)."""
        return self.output_format


@dataclass
class ConfigResolution:
    """
    Outcome of resolve_config(): either a RunConfig or a list of issues.

    Usage:
        resolution = resolve_config(os.environ)
        if not resolution.ok:
            for issue in resolution.issues:
                print(issue)
        config = resolution.unwrap()
    """
    config: Optional[RunConfig] = None
    issues: List[ConfigIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.config is not None and not self.issues

    def unwrap(self) -> RunConfig:
        """
        Return the config or raise.

        Raises:
            ConfigValidationError: If any issue was recorded.
        """
        if not self.ok:
            raise ConfigValidationError(self.issues)
        assert self.config is not None
        return self.config


@dataclass(frozen=True)
class Settings:
    """
    Raw settings loaded from YAML.

    Attributes:
        raw: Parsed YAML document (empty when no file was loaded).
    """
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def supertone(self) -> Dict[str, Any]:
        """The ``supertone:`` section, or an empty dict."""
        section = self.raw.get("supertone", {})
        return section if isinstance(section, dict) else {}


def load_settings(path: Optional[str] = None) -> Settings:
    """
    Load settings from a YAML file.

    When no path is given the default config/settings.yaml is used if it
    exists; an explicitly requested file must exist.

    Raises:
        FileNotFoundError: If an explicit path does not exist.
    """
    explicit = path is not None
    p = Path(path or Defaults.SETTINGS_PATH)
    if not p.exists():
        if explicit:
            raise FileNotFoundError(f"settings file not found: {p.resolve()}")
        return Settings()

    with p.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raw = {}
    return Settings(raw=raw)


class _Resolver:
    """Reads values from env + settings and records issues as it goes."""

    def __init__(self, env: Mapping[str, str], settings: Settings):
        self.env = env
        self.section = settings.supertone
        self.issues: List[ConfigIssue] = []

    def _raw(self, key: str) -> Tuple[str, Any]:
        name = ENV_PREFIX + key.upper()
        value = self.env.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            value = self.section.get(key)
        if isinstance(value, str):
            value = value.strip() or None
        return name, value

    def issue(self, name: str, code: str, message: str) -> None:
        self.issues.append(ConfigIssue(field=name, code=code, message=message))

    def text(self, key: str, default: Optional[str]) -> Optional[str]:
        _, value = self._raw(key)
        if value is None:
            return default
        return str(value)

    def required(self, key: str, code: str) -> str:
        name, value = self._raw(key)
        if value is None:
            self.issue(name, code, "is required")
            return ""
        return str(value)

    def choice(self, key: str, default: str, choices: Tuple[str, ...]) -> str:
        name, value = self._raw(key)
        if value is None:
            return default
        normalized = str(value).lower()
        if normalized not in choices:
            self.issue(
                name,
                IssueCode.INVALID_CHOICE,
                f"must be one of {', '.join(choices)}, got {value!r}",
            )
            return default
        return normalized

    def number(self, key: str, default: float) -> Optional[float]:
        name, value = self._raw(key)
        if value is None:
            return default
        if isinstance(value, bool):
            number = math.nan
        elif isinstance(value, (int, float)):
            number = float(value)
        else:
            try:
                number = float(value)
            except (TypeError, ValueError):
                number = math.nan
        if not math.isfinite(number):
            self.issue(name, IssueCode.NOT_A_NUMBER, f"must be a finite number, got {value!r}")
            return None
        return number

    def voice_id(self) -> str:
        """Required voice id that is also safe to place in the request URL path."""
        from hangul_tts.services.validators import ValidationError, validate_voice_id

        name = ENV_PREFIX + "VOICE_ID"
        voice_id = self.required("voice_id", IssueCode.VOICE_ID_REQUIRED)
        if voice_id:
            try:
                validate_voice_id(voice_id)
            except ValidationError as e:
                self.issue(name, IssueCode.VOICE_ID_INVALID, e.message)
        return voice_id

    def public_path(self) -> str:
        return (self.text("public_path", Defaults.PUBLIC_BASE_PATH) or "").rstrip("/")

    def ranged(self, key: str, default: float, bounds: Tuple[float, float]) -> float:
        value = self.number(key, default)
        if value is None:
            return default
        low, high = bounds
        if not (low <= value <= high):
            self.issue(
                ENV_PREFIX + key.upper(),
                IssueCode.OUT_OF_RANGE,
                f"must be between {low:g} and {high:g}, got {value:g}",
            )
            return default
        return value


def resolve_config(
    env: Mapping[str, str],
    settings: Optional[Settings] = None,
    overwrite: bool = False,
) -> ConfigResolution:
    """
    Resolve and validate a RunConfig.

    Every parameter is checked even after a failure so the operator sees
    all problems at once.

    Args:
        env: Environment-style mapping (usually os.environ).
        settings: Optional YAML settings; env values take precedence.
        overwrite: Regenerate clips whose files already exist.

    Returns:
        ConfigResolution with a config when no issues were found.
    """
    r = _Resolver(env, settings or Settings())

    api_key = r.required("api_key", IssueCode.API_KEY_REQUIRED)
    voice_id = r.voice_id()
    base_url = (r.text("base_url", Defaults.BASE_URL) or Defaults.BASE_URL).rstrip("/")
    model_id = r.text("model_id", Defaults.MODEL_ID) or Defaults.MODEL_ID
    language = r.choice("language", Defaults.LANGUAGE, Defaults.SUPPORTED_LANGUAGES)
    style = r.text("style", Defaults.STYLE)
    output_dir = r.text("output_dir", Defaults.OUTPUT_DIR) or Defaults.OUTPUT_DIR
    output_format = r.choice("output_format", Defaults.OUTPUT_FORMAT, Defaults.SUPPORTED_FORMATS)
    public_base_path = r.public_path()

    voice_settings = VoiceSettings(
        pitch_shift=r.ranged("pitch_shift", Defaults.PITCH_SHIFT, Defaults.PITCH_SHIFT_RANGE),
        pitch_variance=r.ranged("pitch_variance", Defaults.PITCH_VARIANCE, Defaults.PITCH_VARIANCE_RANGE),
        speed=r.ranged("speed", Defaults.SPEED, Defaults.SPEED_RANGE),
    )

    interval = r.number("request_interval_ms", Defaults.REQUEST_INTERVAL_MS)
    if interval is None:
        interval = Defaults.REQUEST_INTERVAL_MS
    elif interval < Defaults.MIN_REQUEST_INTERVAL_MS:
        r.issue(
            ENV_PREFIX + "REQUEST_INTERVAL_MS",
            IssueCode.INTERVAL_TOO_SHORT,
            f"must be at least {Defaults.MIN_REQUEST_INTERVAL_MS:g} ms, got {interval:g}",
        )

    if r.issues:
        return ConfigResolution(config=None, issues=r.issues)

    config = RunConfig(
        api_key=api_key,
        voice_id=voice_id,
        base_url=base_url,
        model_id=model_id,
        language=language,
        style=style,
        output_dir=output_dir,
        output_format=output_format,
        voice_settings=voice_settings,
        request_interval_ms=interval,
        overwrite=overwrite,
        public_base_path=public_base_path,
    )
    return ConfigResolution(config=config)


def load_run_config(
    env: Mapping[str, str],
    settings: Optional[Settings] = None,
    overwrite: bool = False,
) -> RunConfig:
    """
    Resolve a RunConfig or raise.

    Raises:
        ConfigValidationError: With every issue found.
    """
    return resolve_config(env, settings, overwrite=overwrite).unwrap()


def resolve_deck_options(
    env: Mapping[str, str],
    settings: Optional[Settings] = None,
) -> Tuple[str, str, List[ConfigIssue]]:
    """
    Resolve only what deck export needs; no credentials are required.

    Returns:
        (output_format, public_base_path, issues). Values fall back to the
        defaults when an issue is recorded.
    """
    r = _Resolver(env, settings or Settings())
    output_format = r.choice("output_format", Defaults.OUTPUT_FORMAT, Defaults.SUPPORTED_FORMATS)
    return output_format, r.public_path(), r.issues
