"""Shared value types for highlight groups and appearance modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from tintswitch.color.palette import RGBColor

STYLE_FLAGS: tuple[str, ...] = ("bold", "italic", "underline")


class AppearanceMode(Enum):
    """The two appearance modes. Exactly one is active at a time."""

    BASIC = "BasicMode"
    GUI = "GUIMode"

    @property
    def other(self) -> AppearanceMode:
        """The mode this one switches to."""
        return AppearanceMode.GUI if self is AppearanceMode.BASIC else AppearanceMode.BASIC

    @property
    def label(self) -> str:
        """Human-readable label."""
        return "Basic (256-color)" if self is AppearanceMode.BASIC else "GUI (true color)"


@dataclass(frozen=True)
class TerminalHighlight:
    """One row of the static Basic-mode highlight table.

    ``None`` colors are rendered as ``NONE``.
    """

    group: str
    ctermfg: int | None
    ctermbg: int | None
    cterm: str = "NONE"

    def as_command(self) -> str:
        """Render the row as a ``highlight`` command."""
        fg = "NONE" if self.ctermfg is None else str(self.ctermfg)
        bg = "NONE" if self.ctermbg is None else str(self.ctermbg)
        return f"highlight {self.group} cterm={self.cterm} ctermfg={fg} ctermbg={bg}"


@dataclass(frozen=True)
class HighlightAttributes:
    """Captured attributes of one highlight group in one mode."""

    name: str
    fg: RGBColor | None = None
    bg: RGBColor | None = None
    styles: frozenset[str] = field(default_factory=frozenset)
    ctermfg: str = "none"
    ctermbg: str = "none"
    cterm: str = "none"
    gui: str = "none"

    @property
    def fg_hex(self) -> str:
        """Foreground as ``#rrggbb`` or ``"none"``."""
        return self.fg.hex if self.fg is not None else "none"

    @property
    def bg_hex(self) -> str:
        """Background as ``#rrggbb`` or ``"none"``."""
        return self.bg.hex if self.bg is not None else "none"

    @property
    def attr_str(self) -> str:
        """Style flags joined by commas, else the gui or cterm attribute string."""
        flags = [flag for flag in STYLE_FLAGS if flag in self.styles]
        if flags:
            return ",".join(flags)
        if self.gui != "none":
            return self.gui
        if self.cterm != "none":
            return self.cterm
        return "none"
