"""Persistent settings for tintswitch."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path

from tintswitch.appearance.environment import Platform, env_flag, parse_platform
from tintswitch.appearance.fonts import DEFAULT_FONT_SIZE
from tintswitch.logger import get_logger
from tintswitch.themes import COLORSCHEMES_BY_ID, DEFAULT_COLORSCHEME

logger = get_logger(__name__)

LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
PLATFORM_CHOICES: tuple[str, ...] = ("auto", *(platform.value for platform in Platform))

# Font size hint (points)
MIN_FONT_SIZE = 6
MAX_FONT_SIZE = 72

# Pause between switching modes and sampling highlights (milliseconds)
MIN_SETTLE_DELAY_MS = 0
MAX_SETTLE_DELAY_MS = 5000
DEFAULT_SETTLE_DELAY_MS = 200

FORCE_TERMINAL_ENV = "TINTSWITCH_FORCE_TERMINAL"
DEBUG_FONTS_ENV = "TINTSWITCH_DEBUG_FONTS"
PLATFORM_ENV = "TINTSWITCH_PLATFORM"


@dataclass(frozen=True)
class Settings:
    """User-configurable settings stored on disk."""

    colorscheme: str = DEFAULT_COLORSCHEME
    # Pin Basic mode even when a GUI host is detected
    force_terminal_mode: bool = False
    debug_fonts: bool = False
    platform: str = "auto"
    font_size: int = DEFAULT_FONT_SIZE
    settle_delay_ms: int = DEFAULT_SETTLE_DELAY_MS
    log_level: str = "WARNING"

    @property
    def resolved_platform(self) -> Platform | None:
        """The configured platform, or None to detect it."""
        return parse_platform(self.platform)

    @property
    def settle_delay(self) -> float:
        """Settle delay in seconds."""
        return self.settle_delay_ms / 1000

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> Settings:
        """Create settings from a mapping, applying defaults for invalid values.

        Args:
            data: Mapping containing raw settings values.

        Returns:
            A Settings instance with validated values.
        """
        colorscheme_value = _coerce_str(data.get("colorscheme"))
        colorscheme = (
            colorscheme_value
            if colorscheme_value is not None and colorscheme_value in COLORSCHEMES_BY_ID
            else DEFAULT_COLORSCHEME
        )

        force_terminal_mode = _coerce_bool(data.get("force_terminal_mode"))
        if force_terminal_mode is None:
            force_terminal_mode = False

        debug_fonts = _coerce_bool(data.get("debug_fonts"))
        if debug_fonts is None:
            debug_fonts = False

        platform_value = _coerce_str(data.get("platform"))
        platform = platform_value.lower() if platform_value is not None else "auto"
        if platform not in PLATFORM_CHOICES:
            platform = "auto"

        font_size = _coerce_int(data.get("font_size"))
        if font_size is None or font_size < MIN_FONT_SIZE or font_size > MAX_FONT_SIZE:
            font_size = DEFAULT_FONT_SIZE

        settle_delay_ms = _coerce_int(data.get("settle_delay_ms"))
        if settle_delay_ms is None or settle_delay_ms < MIN_SETTLE_DELAY_MS or settle_delay_ms > MAX_SETTLE_DELAY_MS:
            settle_delay_ms = DEFAULT_SETTLE_DELAY_MS

        log_level_value = _coerce_str(data.get("log_level"))
        log_level = log_level_value if log_level_value is not None and log_level_value in LOG_LEVELS else "WARNING"

        return cls(
            colorscheme=colorscheme,
            force_terminal_mode=force_terminal_mode,
            debug_fonts=debug_fonts,
            platform=platform,
            font_size=font_size,
            settle_delay_ms=settle_delay_ms,
            log_level=log_level,
        )

    def with_env_overrides(self, env: Mapping[str, str] | None = None) -> Settings:
        """Apply ``TINTSWITCH_*`` environment overrides.

        Args:
            env: Environment to read, defaults to ``os.environ``.

        Returns:
            Settings with any recognised overrides applied.
        """
        environ = os.environ if env is None else env
        changes: dict[str, object] = {}

        force_terminal = env_flag(FORCE_TERMINAL_ENV, environ)
        if force_terminal is not None:
            changes["force_terminal_mode"] = force_terminal

        debug_fonts = env_flag(DEBUG_FONTS_ENV, environ)
        if debug_fonts is not None:
            changes["debug_fonts"] = debug_fonts

        platform_value = environ.get(PLATFORM_ENV)
        if platform_value:
            if platform_value.lower() in PLATFORM_CHOICES:
                changes["platform"] = platform_value.lower()
            else:
                logger.warning(f"Ignoring unknown {PLATFORM_ENV} value {platform_value!r}")

        if not changes:
            return self
        logger.debug(f"Environment overrides: {changes}")
        return replace(self, **changes)

    def to_dict(self) -> dict[str, object]:
        """Serialize settings to a dictionary.

        Returns:
            Dictionary representation of settings.
        """
        return {
            "colorscheme": self.colorscheme,
            "force_terminal_mode": self.force_terminal_mode,
            "debug_fonts": self.debug_fonts,
            "platform": self.platform,
            "font_size": self.font_size,
            "settle_delay_ms": self.settle_delay_ms,
            "log_level": self.log_level,
        }


def get_config_dir() -> Path:
    """Get the directory used for persistent configuration.

    Returns:
        Path to the configuration directory.
    """
    override_dir = os.environ.get("TINTSWITCH_CONFIG_DIR")
    if override_dir:
        return Path(override_dir).expanduser()

    base_dir = os.environ.get("XDG_CONFIG_HOME")
    if base_dir:
        return Path(base_dir).expanduser() / "tintswitch"

    return Path.home() / ".config" / "tintswitch"


def get_settings_path() -> Path:
    """Get the full path to the settings file."""
    return get_config_dir() / "settings.json"


def load_settings() -> Settings:
    """Load settings from disk.

    Returns:
        Loaded settings, or defaults if none exist or the file is unreadable.
    """
    settings_path = get_settings_path()
    if not settings_path.exists():
        return Settings()

    try:
        raw = json.loads(settings_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        logger.warning(f"Failed to parse settings file {settings_path}: {exc}")
        return Settings()
    except OSError as exc:
        logger.warning(f"Failed to read settings file {settings_path}: {exc}")
        return Settings()

    if not isinstance(raw, dict):
        logger.warning(f"Settings file {settings_path} contains invalid data")
        return Settings()

    return Settings.from_mapping(raw)


def save_settings(settings: Settings) -> None:
    """Persist settings to disk.

    Args:
        settings: Settings to persist.
    """
    settings_path = get_settings_path()
    try:
        settings_path.parent.mkdir(parents=True, exist_ok=True)
        settings_path.write_text(json.dumps(settings.to_dict(), indent=2), encoding="utf-8")
    except OSError as exc:
        logger.warning(f"Failed to save settings to {settings_path}: {exc}")


def _coerce_str(value: object) -> str | None:
    if isinstance(value, str):
        return value
    return None


def _coerce_int(value: object) -> int | None:
    """Coerce a value into an integer, accepting numeric strings."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _coerce_bool(value: object) -> bool | None:
    """Coerce a value into a boolean, accepting the usual string spellings."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        if value.lower() in ("true", "1", "yes", "on"):
            return True
        if value.lower() in ("false", "0", "no", "off"):
            return False
    return None
