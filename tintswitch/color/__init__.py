"""Color approximation and highlight group tables."""

from tintswitch.color.highlights import (
    ANALYZED_GROUPS,
    BASIC_HIGHLIGHTS,
    KEY_GROUPS,
    basic_highlight,
    capture_highlights,
    combine_mode_results,
)
from tintswitch.color.palette import (
    KNOWN_COLOR_MAP,
    PaletteRegion,
    RGBColor,
    nearest_palette_index,
    palette_region,
    suggest_terminal_color,
)

__all__ = [
    "ANALYZED_GROUPS",
    "BASIC_HIGHLIGHTS",
    "KEY_GROUPS",
    "KNOWN_COLOR_MAP",
    "PaletteRegion",
    "RGBColor",
    "basic_highlight",
    "capture_highlights",
    "combine_mode_results",
    "nearest_palette_index",
    "palette_region",
    "suggest_terminal_color",
]
