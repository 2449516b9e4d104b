"""Full-screen views for the analysis report and notification history."""

from typing import ClassVar

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container, Vertical, VerticalScroll
from textual.screen import Screen
from textual.widgets import Button, Static

from tintswitch.appearance.notifications import Notification, Notifier, Severity
from tintswitch.color.analyze import AnalysisReport
from tintswitch.logger import get_logger

logger = get_logger(__name__)

SEVERITY_STYLES: dict[Severity, str] = {
    Severity.INFO: "green",
    Severity.WARNING: "yellow",
    Severity.ERROR: "bold red",
}


class ReportScreen(Screen[None]):
    """Read-only view of a color analysis report."""

    DEFAULT_CSS = """
    #report-title, #history-title {
        height: 1;
        padding: 0 1;
    }
    #report-scroll, #history-scroll {
        height: 1fr;
    }
    #report-footer {
        height: 3;
        layout: horizontal;
    }
    #report-hint, #history-hint {
        width: 1fr;
        padding: 0 1;
    }
    """

    BINDINGS: ClassVar[tuple[tuple[str, str, str], ...]] = (
        ("escape", "close", "Close"),
        ("q", "close", "Close"),
        ("g", "scroll_top", "Go to top"),
        ("G", "scroll_bottom", "Go to bottom"),
    )

    def __init__(self, report: AnalysisReport) -> None:
        """Initialize the report screen.

        Args:
            report: The report to display.
        """
        super().__init__()
        self.report = report

    def compose(self) -> ComposeResult:
        """Create the report layout.

        Yields:
            The widgets that make up the report view.
        """
        with Vertical(id="report-container"):
            title = f"[bold]Color Analysis[/bold] [dim]({self.report.colorscheme})[/dim]"
            if self.report.limited:
                title += "  [yellow]limited: only one mode was sampled[/yellow]"
            yield Static(title, id="report-title")
            with VerticalScroll(id="report-scroll"):
                yield Static(Text("\n".join(self.report.lines())), id="report-text")
            with Container(id="report-footer"):
                yield Static("[bold]g/G[/bold] Top/Bottom  [bold]Esc[/bold] Close", id="report-hint")
                yield Button("Close", variant="default", id="report-close-button")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Close on the close button."""
        if event.button.id == "report-close-button":
            self.action_close()

    def action_scroll_top(self) -> None:
        """Scroll to the start of the report."""
        self.query_one("#report-scroll", VerticalScroll).scroll_home(animate=False)

    def action_scroll_bottom(self) -> None:
        """Scroll to the end of the report."""
        self.query_one("#report-scroll", VerticalScroll).scroll_end(animate=False)

    def action_close(self) -> None:
        """Close the report."""
        self.app.pop_screen()


def format_notification(notification: Notification) -> Text:
    """Render one history entry."""
    line = Text()
    line.append(notification.timestamp.strftime("%H:%M:%S "), style="dim")
    line.append(f"{notification.severity.value:<8}", style=SEVERITY_STYLES[notification.severity])
    line.append(notification.message, style="dim" if notification.dismissed else "")
    if notification.persistent and not notification.dismissed:
        line.append("  (pending)", style="yellow")
    return line


class NotificationHistoryScreen(Screen[None]):
    """Shows the bounded notification history, newest last."""

    DEFAULT_CSS = ReportScreen.DEFAULT_CSS

    BINDINGS: ClassVar[tuple[tuple[str, str, str], ...]] = (
        ("escape", "close", "Close"),
        ("q", "close", "Close"),
        ("d", "dismiss_all", "Dismiss warnings"),
    )

    def __init__(self, notifier: Notifier) -> None:
        """Initialize the history screen.

        Args:
            notifier: Notifier whose history is shown.
        """
        super().__init__()
        self.notifier = notifier

    def compose(self) -> ComposeResult:
        """Create the history layout.

        Yields:
            The widgets that make up the history view.
        """
        with Vertical(id="history-container"):
            yield Static(id="history-title")
            with VerticalScroll(id="history-scroll"):
                yield Static(id="history-text")
            yield Static("[bold]d[/bold] Dismiss all  [bold]Esc[/bold] Close", id="history-hint")

    def on_mount(self) -> None:
        """Fill in the history once mounted."""
        self._render_history()

    def _render_history(self) -> None:
        entries = self.notifier.history.entries()
        pending = len(self.notifier.pending())
        self.query_one("#history-title", Static).update(
            f"[bold]Notifications[/bold] [dim]({len(entries)}/{self.notifier.history.max_entries}, "
            f"{pending} pending)[/dim]"
        )
        body = Text("\n").join(format_notification(entry) for entry in entries) if entries else Text("No notifications")
        self.query_one("#history-text", Static).update(body)

    def action_dismiss_all(self) -> None:
        """Dismiss every pending warning and error."""
        count = self.notifier.dismiss_all()
        logger.debug(f"Dismissed {count} notifications")
        self.app.clear_notifications()
        self._render_history()

    def action_close(self) -> None:
        """Close the history view."""
        self.app.pop_screen()
