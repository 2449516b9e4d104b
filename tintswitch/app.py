"""Main Textual TUI application for tintswitch."""

from typing import ClassVar

from textual.app import App, ComposeResult
from textual.containers import VerticalScroll
from textual.widgets import Footer, Header, Static
from textual.worker import Worker, WorkerState

from tintswitch.appearance.host import MemoryHost
from tintswitch.appearance.notifications import Notification
from tintswitch.appearance.scheduler import LoopScheduler
from tintswitch.color.analyze import AnalysisReport
from tintswitch.color.highlights import ANALYZED_GROUPS
from tintswitch.commands import Commands
from tintswitch.logger import add_tui_sink, get_logger, remove_tui_sink
from tintswitch.models import AppearanceMode
from tintswitch.settings import Settings, load_settings
from tintswitch.themes import REGISTERED_THEMES, TERMINAL_THEME_NAME, get_colorscheme
from tintswitch.widgets.highlight_preview import HighlightPreview
from tintswitch.widgets.log_pane import LogPane
from tintswitch.widgets.mode_status import ModeStatus
from tintswitch.widgets.screens import NotificationHistoryScreen, ReportScreen

logger = get_logger(__name__)

# Persistent notifications stay up until dismissed from the history screen
PERSISTENT_TIMEOUT = 24 * 60 * 60.0
TRANSIENT_TIMEOUT = 3.0


class TintswitchApp(App[None]):
    """Textual front-end for the appearance engine."""

    ENABLE_COMMAND_PALETTE = False
    TITLE = "tintswitch"
    CSS = """
    #preview-panel {
        height: 1fr;
    }
    #preview-title {
        padding: 0 1;
    }
    """
    BINDINGS: ClassVar[tuple[tuple[str, str, str], ...]] = (
        ("q", "quit", "Quit"),
        ("b", "basic_mode", "Basic mode"),
        ("g", "gui_mode", "GUI mode"),
        ("t", "toggle_mode", "Toggle mode"),
        ("a", "analyze_colors", "Analyze colors"),
        ("f", "rescan_fonts", "Rescan fonts"),
        ("h", "show_history", "Notifications"),
    )

    def __init__(self, settings: Settings | None = None, host: MemoryHost | None = None) -> None:
        """Initialize the app.

        Args:
            settings: Settings to use, loaded from disk when omitted.
            host: Editor host to drive, defaults to a fresh in-memory host.
        """
        super().__init__()
        self.settings = settings if settings is not None else load_settings().with_env_overrides()
        self.host = host if host is not None else MemoryHost()
        self.commands = Commands.from_settings(self.settings, host=self.host, scheduler=LoopScheduler())
        self._log_sink_id: int | None = None
        self._analysis_worker: Worker[AnalysisReport] | None = None
        # Views exist only once on_mount has finished
        self._views_ready = False
        self._unsubscribers = [
            self.commands.engine.subscribe(self._on_mode_applied),
            self.commands.notifier.subscribe(self._on_notification),
        ]
        for theme in REGISTERED_THEMES:
            self.register_theme(theme)
        logger.info("Initializing tintswitch app")

    def compose(self) -> ComposeResult:
        """Create the UI layout.

        Yields:
            The widgets that make up the application UI.
        """
        yield Header()
        yield ModeStatus(id="mode_status")
        with VerticalScroll(id="preview-panel"):
            yield Static("[bold]Highlight groups[/bold]", id="preview-title")
            yield HighlightPreview(id="highlight_preview")
        yield LogPane(id="log_pane")
        yield Footer()

    def on_mount(self) -> None:
        """Route logs into the pane, apply Basic mode and run GUI detection."""
        log_pane = self.query_one("#log_pane", LogPane)
        self._log_sink_id = add_tui_sink(log_pane.sink, level=self.settings.log_level)

        engine = self.commands.engine
        with self.commands.notifier.quiet():
            engine.enter_basic()
        engine.startup()
        self._views_ready = True
        self._refresh_view()

    def on_unmount(self) -> None:
        """Detach listeners and the log sink."""
        self._detach()

    def _detach(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
        if self._log_sink_id is not None:
            remove_tui_sink(self._log_sink_id)
            self._log_sink_id = None

    def _on_mode_applied(self, mode: AppearanceMode) -> None:
        if mode is AppearanceMode.GUI and get_colorscheme(self.commands.engine.colorscheme) is not None:
            self.theme = self.commands.engine.colorscheme
        else:
            self.theme = TERMINAL_THEME_NAME
        if self._views_ready:
            self._refresh_view()

    def _on_notification(self, notification: Notification) -> None:
        timeout = PERSISTENT_TIMEOUT if notification.persistent else TRANSIENT_TIMEOUT
        self.notify(notification.message, severity=notification.severity.textual, timeout=timeout)
        if self._views_ready:
            self._refresh_status()

    def _refresh_view(self) -> None:
        self._refresh_status()
        self.query_one("#highlight_preview", HighlightPreview).show(
            self.host, ANALYZED_GROUPS, self.commands.engine.mode
        )

    def _refresh_status(self) -> None:
        self.query_one("#mode_status", ModeStatus).update_status(
            self.commands.engine.mode,
            font=self.host.font,
            colorscheme=self.host.colorscheme,
            pending_warnings=len(self.commands.notifier.pending()),
        )

    def action_basic_mode(self) -> None:
        """Switch to Basic mode."""
        self.commands.enter_basic_mode()

    def action_gui_mode(self) -> None:
        """Switch to GUI mode."""
        self.commands.enter_gui_mode()

    def action_toggle_mode(self) -> None:
        """Switch to the other mode."""
        self.commands.toggle_mode()

    def action_analyze_colors(self) -> None:
        """Run a color analysis in the background and show the report."""
        if self._analysis_worker is not None and self._analysis_worker.state == WorkerState.RUNNING:
            logger.debug("Analysis already running, skipping")
            return
        self._analysis_worker = self.run_worker(self.commands.analyze_colors(), name="analyze", exclusive=True)

    def on_worker_state_changed(self, event: Worker.StateChanged) -> None:
        """Show the report when the analysis worker finishes."""
        if event.worker is not self._analysis_worker:
            return
        if event.state == WorkerState.SUCCESS and event.worker.result is not None:
            self.push_screen(ReportScreen(event.worker.result))
        elif event.state == WorkerState.ERROR:
            self.commands.notifier.error(f"Color analysis failed: {event.worker.error}")

    def action_rescan_fonts(self) -> None:
        """Forget cached font checks and probe again."""
        self.commands.rescan_fonts()
        if self.commands.engine.mode is AppearanceMode.GUI:
            self.commands.font_resolver.apply_best_font(self.host)
            self._refresh_status()

    def action_show_history(self) -> None:
        """Show the notification history."""
        self.push_screen(NotificationHistoryScreen(self.commands.notifier))

    async def action_quit(self) -> None:
        """Quit the application."""
        logger.info("Quitting application")
        self.commands.engine.cancel_deferred()
        self._detach()
        self.exit()


def main(settings: Settings | None = None) -> None:
    """Run the tintswitch TUI app."""
    logger.info("Starting tintswitch")
    app = TintswitchApp(settings)
    app.run()
    logger.info("tintswitch exited")
