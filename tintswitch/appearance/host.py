"""The editor-side collaborator driven by the appearance engine.

``EditorHost`` is what the engine needs from an editor: switching true
color on and off, defining highlight groups, loading a colorscheme,
toggling the richer syntax engine and setting the GUI font.
``MemoryHost`` keeps all of that in memory; the front-end renders from it
and the tests inspect it.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol

from tintswitch.color.palette import RGBColor
from tintswitch.errors import ThemeApplicationFailure
from tintswitch.logger import get_logger
from tintswitch.models import HighlightAttributes, TerminalHighlight
from tintswitch.themes import COLORSCHEMES_BY_ID, Colorscheme, GuiHighlight

logger = get_logger(__name__)


class EditorHost(Protocol):
    """Operations the appearance engine performs on the editor."""

    def set_true_color(self, enabled: bool) -> None:
        """Enable or disable 24-bit color rendering."""
        ...

    def clear_highlights(self) -> None:
        """Drop every highlight definition."""
        ...

    def apply_highlight(self, highlight: TerminalHighlight) -> None:
        """Define one terminal highlight group."""
        ...

    def apply_colorscheme(self, name: str) -> None:
        """Load a GUI colorscheme. Raises ThemeApplicationFailure when it cannot."""
        ...

    def enable_rich_syntax(self) -> None:
        """Turn on the richer syntax engine. Raises ThemeApplicationFailure when it cannot."""
        ...

    def disable_rich_syntax(self) -> None:
        """Turn off the richer syntax engine."""
        ...

    def refresh_display(self) -> None:
        """Re-highlight whatever is currently displayed."""
        ...

    def set_font(self, font: str) -> None:
        """Apply a GUI font spec such as ``"Menlo:h13"``."""
        ...

    def get_highlight(self, group: str) -> HighlightAttributes | None:
        """Read back a highlight group, or None if it is not defined."""
        ...

    def is_headless(self) -> bool:
        """Whether there is no UI attached."""
        ...

    def is_gui(self) -> bool:
        """Whether the host is a graphical front-end."""
        ...


def _attributes(
    group: str,
    terminal: TerminalHighlight | None,
    gui: GuiHighlight | None,
) -> HighlightAttributes:
    fg = RGBColor.from_hex(gui.fg) if gui is not None and gui.fg else None
    bg = RGBColor.from_hex(gui.bg) if gui is not None and gui.bg else None
    styles = frozenset(gui.styles) if gui is not None else frozenset()

    ctermfg = ctermbg = cterm = "none"
    if terminal is not None:
        if terminal.ctermfg is not None:
            ctermfg = str(terminal.ctermfg)
        if terminal.ctermbg is not None:
            ctermbg = str(terminal.ctermbg)
        if terminal.cterm.upper() != "NONE":
            cterm = terminal.cterm.lower()

    return HighlightAttributes(
        name=group,
        fg=fg,
        bg=bg,
        styles=styles,
        ctermfg=ctermfg,
        ctermbg=ctermbg,
        cterm=cterm,
        gui=",".join(gui.styles) if gui is not None and gui.styles else "none",
    )


class MemoryHost:
    """In-memory editor host.

    Attributes:
        true_color: Whether 24-bit rendering is on.
        colorscheme: Name of the loaded colorscheme, if any.
        font: The GUI font spec last applied.
        rich_syntax_enabled: State of the richer syntax engine.
        refresh_count: Number of full re-highlight refreshes requested.
    """

    def __init__(
        self,
        *,
        colorschemes: Mapping[str, Colorscheme] | None = None,
        headless: bool = False,
        gui: bool = False,
        rich_syntax_available: bool = True,
    ) -> None:
        """Initialize the host.

        Args:
            colorschemes: Installed colorschemes, defaults to the bundled ones.
            headless: Report that no UI is attached.
            gui: Report a graphical front-end.
            rich_syntax_available: Whether the richer syntax engine can be enabled.
        """
        self._colorschemes = COLORSCHEMES_BY_ID if colorschemes is None else colorschemes
        self._headless = headless
        self._gui = gui
        self._rich_syntax_available = rich_syntax_available
        self._terminal_groups: dict[str, TerminalHighlight] = {}
        self._gui_groups: dict[str, GuiHighlight] = {}
        self.true_color = False
        self.colorscheme: str | None = None
        self.font: str | None = None
        self.rich_syntax_enabled = False
        self.refresh_count = 0

    def set_true_color(self, enabled: bool) -> None:
        self.true_color = enabled

    def clear_highlights(self) -> None:
        self._terminal_groups.clear()
        self._gui_groups.clear()
        self.colorscheme = None

    def apply_highlight(self, highlight: TerminalHighlight) -> None:
        self._terminal_groups[highlight.group] = highlight

    def apply_colorscheme(self, name: str) -> None:
        scheme = self._colorschemes.get(name)
        if scheme is None:
            raise ThemeApplicationFailure(f"colorscheme {name}", "not installed")
        # Loading a colorscheme resets every group first
        self.clear_highlights()
        self._gui_groups.update(scheme.groups)
        self.colorscheme = name
        logger.debug(f"Loaded colorscheme {name} ({len(scheme.groups)} groups)")

    def enable_rich_syntax(self) -> None:
        if not self._rich_syntax_available:
            raise ThemeApplicationFailure("rich syntax highlighting", "no syntax engine installed")
        self.rich_syntax_enabled = True

    def disable_rich_syntax(self) -> None:
        self.rich_syntax_enabled = False

    def refresh_display(self) -> None:
        self.refresh_count += 1

    def set_font(self, font: str) -> None:
        self.font = font

    def get_highlight(self, group: str) -> HighlightAttributes | None:
        terminal = self._terminal_groups.get(group)
        gui = self._gui_groups.get(group)
        if terminal is None and gui is None:
            return None
        return _attributes(group, terminal, gui)

    def defined_groups(self) -> list[str]:
        """Names of all defined groups, sorted."""
        return sorted(set(self._terminal_groups) | set(self._gui_groups))

    def is_headless(self) -> bool:
        return self._headless

    def is_gui(self) -> bool:
        return self._gui
