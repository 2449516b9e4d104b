"""Logging configuration using loguru.

Logs are written to a daily file under the tintswitch data directory and
kept for one week. Nothing is written to stdout so the TUI stays clean;
the front-end attaches its own sink while it is running.
"""

import os
import sys
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    import loguru

# Remove default handler
logger.remove()

# Default ~/.local/share/tintswitch/logs, overridable via TINTSWITCH_LOG_DIR
_default_log_dir = Path.home() / ".local" / "share" / "tintswitch" / "logs"
LOG_DIR = Path(os.environ.get("TINTSWITCH_LOG_DIR", str(_default_log_dir))).expanduser().resolve()
LOG_DIR.mkdir(parents=True, exist_ok=True)

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


class _LoggingState:
    """Internal state tracker for logging configuration."""

    def __init__(self) -> None:
        """Initialize logging state without a console handler."""
        self.console_handler_id: int | None = None


_state = _LoggingState()

logger.add(
    LOG_DIR / "tintswitch_{time:YYYY-MM-DD}.log",
    level="DEBUG",
    format=LOG_FORMAT,
    rotation="00:00",  # New file at midnight
    retention="1 week",
    compression="gz",
    backtrace=True,
    diagnose=False,
)


def get_logger(name: str) -> "loguru.Logger":
    """Get a logger instance with the given name.

    Args:
        name: The name for the logger (typically __name__).

    Returns:
        A configured logger instance.
    """
    return logger.bind(name=name)


def enable_console(level: str = "WARNING") -> int:
    """Mirror log records to stderr, used by the non-interactive CLI commands.

    Calling it again replaces the previous console handler.

    Args:
        level: Minimum log level for the console handler.

    Returns:
        The handler ID.
    """
    if _state.console_handler_id is not None:
        logger.remove(_state.console_handler_id)
    _state.console_handler_id = logger.add(sys.stderr, level=level, format="{level: <8} | {message}")
    return _state.console_handler_id


def add_tui_sink(sink_func: Callable[[object], None], level: str = "WARNING") -> int:
    """Add a TUI sink for displaying logs in the application.

    Removes the console handler first so records do not leak onto the
    terminal underneath the TUI.

    Args:
        sink_func: A callable that accepts loguru message objects.
        level: Minimum log level for the TUI sink.

    Returns:
        The sink ID that can be used to remove the sink later.
    """
    if _state.console_handler_id is not None:
        logger.remove(_state.console_handler_id)
        _state.console_handler_id = None

    return logger.add(sink_func, level=level, format="{message}")


def remove_tui_sink(sink_id: int) -> None:
    """Remove the TUI sink.

    Args:
        sink_id: The sink ID returned by add_tui_sink.
    """
    logger.remove(sink_id)
