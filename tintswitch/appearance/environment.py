"""Platform and GUI-host detection."""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from enum import Enum

from tintswitch.logger import get_logger

logger = get_logger(__name__)

# Environment variables set by graphical editor front-ends
GUI_ENV_MARKERS: tuple[str, ...] = ("NVIM_GUI", "NEOVIDE", "NVIM_QT", "GUI_RUNNING", "TINTSWITCH_GUI")

_TRUTHY = ("1", "true", "yes", "on")


class Platform(Enum):
    """Platform families with distinct font locations."""

    MACOS = "macos"
    WINDOWS = "windows"
    LINUX = "linux"
    OTHER = "other"


def detect_platform(sys_platform: str | None = None) -> Platform:
    """Map ``sys.platform`` onto a platform family.

    Args:
        sys_platform: Value to classify, defaults to ``sys.platform``.

    Returns:
        The detected platform.
    """
    value = sys.platform if sys_platform is None else sys_platform
    if value == "darwin":
        return Platform.MACOS
    if value in ("win32", "cygwin"):
        return Platform.WINDOWS
    if value.startswith(("linux", "freebsd", "openbsd", "netbsd")):
        return Platform.LINUX
    return Platform.OTHER


def parse_platform(value: str | None) -> Platform | None:
    """Parse a configured platform name; ``"auto"`` and unknown values give None."""
    if not value:
        return None
    try:
        return Platform(value.strip().lower())
    except ValueError:
        return None


def is_gui_environment(env: Mapping[str, str] | None = None, *, gui_flag: bool = False) -> bool:
    """Decide whether we are hosted by a graphical front-end.

    Args:
        env: Environment to inspect, defaults to ``os.environ``.
        gui_flag: Explicit signal from the host (e.g. a GUI-loaded event).

    Returns:
        True if any GUI signal is present.
    """
    if gui_flag:
        return True
    environ = os.environ if env is None else env
    for marker in GUI_ENV_MARKERS:
        value = environ.get(marker, "")
        if value and value.lower() not in ("0", "false", "no", "off"):
            logger.debug(f"GUI environment detected via {marker}")
            return True
    return False


def env_flag(name: str, env: Mapping[str, str] | None = None) -> bool | None:
    """Read a boolean environment flag.

    Returns:
        True/False for recognised values, None when unset or unrecognised.
    """
    environ = os.environ if env is None else env
    value = environ.get(name)
    if value is None or value == "":
        return None
    lowered = value.strip().lower()
    if lowered in _TRUTHY:
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    return None
