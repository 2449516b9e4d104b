"""TUI widgets for tintswitch."""

from tintswitch.widgets.highlight_preview import HighlightPreview
from tintswitch.widgets.log_pane import LogPane
from tintswitch.widgets.mode_status import ModeStatus
from tintswitch.widgets.screens import NotificationHistoryScreen, ReportScreen

__all__ = [
    "HighlightPreview",
    "LogPane",
    "ModeStatus",
    "NotificationHistoryScreen",
    "ReportScreen",
]
