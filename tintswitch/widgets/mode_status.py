"""Status line showing the active appearance mode."""

from textual.widgets import Static

from tintswitch.models import AppearanceMode


class ModeStatus(Static):
    """Shows the mode, the applied font and outstanding warnings."""

    DEFAULT_CSS = """
    ModeStatus {
        height: 3;
        padding: 0 1;
        border-bottom: solid $panel;
    }
    """

    def __init__(self, *, id: str | None = None) -> None:
        """Initialize the status line."""
        super().__init__(id=id)
        self.mode: AppearanceMode = AppearanceMode.BASIC
        self.font: str | None = None
        self.colorscheme: str | None = None
        self.pending_warnings: int = 0

    def update_status(
        self,
        mode: AppearanceMode,
        *,
        font: str | None = None,
        colorscheme: str | None = None,
        pending_warnings: int = 0,
    ) -> None:
        """Refresh the display.

        Args:
            mode: The active mode.
            font: Applied GUI font spec, if any.
            colorscheme: Loaded colorscheme, if any.
            pending_warnings: Number of undismissed warnings and errors.
        """
        self.mode = mode
        self.font = font
        self.colorscheme = colorscheme
        self.pending_warnings = pending_warnings
        self.update(self._render_status())

    def _render_status(self) -> str:
        style = "bold green" if self.mode is AppearanceMode.GUI else "bold cyan"
        parts = [f"[{style}]{self.mode.label}[/{style}]"]
        if self.mode is AppearanceMode.GUI:
            parts.append(f"Colorscheme: {self.colorscheme or 'none'}")
            parts.append(f"Font: {self.font or 'unchanged'}")
        if self.pending_warnings:
            parts.append(f"[yellow]{self.pending_warnings} warning(s), press h to review[/yellow]")
        return "  |  ".join(parts)
