"""Log pane that mirrors loguru records inside the TUI."""

from datetime import datetime
from typing import ClassVar

from rich.text import Text
from textual.widgets import RichLog


class LogPane(RichLog):
    """Scrolling view of recent log records."""

    DEFAULT_CSS: ClassVar[str] = """
    LogPane {
        height: 8;
        width: 100%;
        border-top: solid $panel;
        scrollbar-size: 1 1;
    }
    """

    LEVEL_STYLES: ClassVar[dict[str, str]] = {
        "DEBUG": "dim cyan",
        "INFO": "green",
        "SUCCESS": "bold green",
        "WARNING": "yellow",
        "ERROR": "bold red",
        "CRITICAL": "bold white on red",
    }

    def __init__(
        self,
        max_lines: int | None = 500,
        *,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        """Initialize the log pane.

        Args:
            max_lines: Maximum number of lines kept (None for unlimited).
            name: The name of the widget.
            id: The ID of the widget in the DOM.
            classes: The CSS classes for the widget.
        """
        super().__init__(
            highlight=False,
            markup=False,
            wrap=True,
            max_lines=max_lines,
            auto_scroll=True,
            name=name,
            id=id,
            classes=classes,
        )

    def add_log(self, level: str, message: str, timestamp: datetime | None = None) -> None:
        """Append one record.

        Args:
            level: Log level name.
            message: The log message.
            timestamp: Record time, defaults to now.
        """
        stamp = (timestamp or datetime.now()).strftime("%H:%M:%S")
        level_name = level.upper()

        line = Text()
        line.append(f"{stamp} ", style="dim")
        line.append(f"[{level_name:^8}] ", style=self.LEVEL_STYLES.get(level_name, "white"))
        line.append(message)
        self.write(line)

    def sink(self, message: object) -> None:
        """Loguru sink receiving formatted messages.

        Args:
            message: Loguru message object.
        """
        if not hasattr(message, "record"):
            return
        record = message.record  # type: ignore[union-attr]
        level = record["level"].name  # type: ignore[index]
        timestamp = record["time"].replace(tzinfo=None)  # type: ignore[index]
        self.add_log(level, str(record["message"]), timestamp)  # type: ignore[index]
