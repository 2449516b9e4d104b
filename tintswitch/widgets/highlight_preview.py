"""Preview of the host's highlight groups, rendered in their own colors."""

from collections.abc import Iterable

from rich.style import Style
from rich.text import Text
from textual.widgets import Static

from tintswitch.appearance.host import EditorHost
from tintswitch.models import AppearanceMode, HighlightAttributes

SAMPLE_TEXT = "The quick brown fox 0123"
GROUP_COLUMN_WIDTH = 22


def _terminal_color(value: str) -> str | None:
    return f"color({value})" if value.isdigit() else None


def highlight_style(info: HighlightAttributes, mode: AppearanceMode) -> Style:
    """Build the rich style a group renders with in ``mode``.

    Args:
        info: Captured group attributes.
        mode: GUI uses the true-color values, Basic the 256-color indexes.

    Returns:
        The matching rich style.
    """
    if mode is AppearanceMode.GUI:
        color = info.fg.hex if info.fg is not None else None
        bgcolor = info.bg.hex if info.bg is not None else None
        flags = info.styles
    else:
        color = _terminal_color(info.ctermfg)
        bgcolor = _terminal_color(info.ctermbg)
        flags = frozenset(info.cterm.split(",")) if info.cterm != "none" else frozenset()
    return Style(
        color=color,
        bgcolor=bgcolor,
        bold="bold" in flags,
        italic="italic" in flags,
        underline="underline" in flags,
    )


class HighlightPreview(Static):
    """Renders each analyzed group with its current attributes."""

    DEFAULT_CSS = """
    HighlightPreview {
        height: auto;
        padding: 0 1;
    }
    """

    def show(self, host: EditorHost, groups: Iterable[str], mode: AppearanceMode) -> int:
        """Render the groups the host defines.

        Args:
            host: Host to read highlights from.
            groups: Group names in display order.
            mode: Mode used to pick true-color or 256-color values.

        Returns:
            Number of groups rendered.
        """
        text = Text()
        count = 0
        for group in groups:
            info = host.get_highlight(group)
            if info is None:
                continue
            if count:
                text.append("\n")
            text.append(group.ljust(GROUP_COLUMN_WIDTH), style="dim")
            text.append(SAMPLE_TEXT, style=highlight_style(info, mode))
            count += 1
        if not count:
            text.append("No highlight groups defined", style="dim italic")
        self.update(text)
        return count
