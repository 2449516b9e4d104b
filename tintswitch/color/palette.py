"""Approximate true-color values with xterm 256-color palette indices.

The search is a heuristic, not a perceptual nearest neighbour: a color
whose channels stay close to their mean is treated as gray and mapped onto
the 24-step grayscale ramp, anything more colorful goes to the 6x6x6 cube.
The hand-picked entries in ``KNOWN_COLOR_MAP`` were tuned against exactly
this behaviour, so the constants below must not drift.

Usage:
    from tintswitch.color.palette import RGBColor, nearest_palette_index

    nearest_palette_index(RGBColor.from_hex("#abb2bf"))  # 249
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

CUBE_VALUES: tuple[int, ...] = (0, 95, 135, 175, 215, 255)
CUBE_START = 16
GRAYSCALE_START = 232
GRAYSCALE_END = 255
NEUTRAL_STD_DEV_THRESHOLD = 20.0

_MAX_COMPONENT = 255
_HEX_DIGITS = 6


class PaletteRegion(Enum):
    """Regions of the 256-color palette."""

    ANSI = "ansi"
    BRIGHT_ANSI = "bright-ansi"
    CUBE = "cube"
    GRAYSCALE = "grayscale"


@dataclass(frozen=True)
class RGBColor:
    """A 24-bit color with 8-bit components."""

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for channel, value in (("r", self.r), ("g", self.g), ("b", self.b)):
            if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= _MAX_COMPONENT:
                msg = f"RGB component {channel} must be an integer in 0-255, got {value!r}"
                raise ValueError(msg)

    @classmethod
    def from_hex(cls, value: str) -> RGBColor:
        """Parse a ``#rrggbb`` string (the leading ``#`` is optional).

        Args:
            value: Hex color string, any case.

        Returns:
            The parsed color.

        Raises:
            ValueError: If the string is not a 6-digit hex color.
        """
        digits = value.strip().removeprefix("#")
        if len(digits) != _HEX_DIGITS:
            msg = f"Not a #rrggbb color: {value!r}"
            raise ValueError(msg)
        try:
            packed = int(digits, 16)
        except ValueError:
            msg = f"Not a #rrggbb color: {value!r}"
            raise ValueError(msg) from None
        return cls.from_int(packed)

    @classmethod
    def from_int(cls, value: int) -> RGBColor:
        """Unpack a 24-bit integer such as ``0xabb2bf``."""
        if not 0 <= value <= 0xFFFFFF:
            msg = f"Packed color out of range: {value!r}"
            raise ValueError(msg)
        return cls((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)

    @property
    def hex(self) -> str:
        """Lowercase ``#rrggbb`` representation."""
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    @property
    def gray(self) -> float:
        """Mean of the three components."""
        return (self.r + self.g + self.b) / 3

    @property
    def std_dev(self) -> float:
        """Population standard deviation of the components around their mean.

        Used as a colorfulness measure: 0 for pure grays.
        """
        gray = self.gray
        return math.sqrt(((self.r - gray) ** 2 + (self.g - gray) ** 2 + (self.b - gray) ** 2) / 3)

    def __str__(self) -> str:
        return self.hex


def _known(hex_value: str, index: int) -> tuple[RGBColor, int]:
    return RGBColor.from_hex(hex_value), index


# Hand-tuned overrides taken from the active theme configuration.
KNOWN_COLOR_MAP: Mapping[RGBColor, int] = MappingProxyType(
    dict(
        [
            # Base colors of the lw-rubber colorscheme
            _known("#abb2bf", 249),  # Normal fg
            _known("#21252b", 235),  # Normal bg
            _known("#e06c75", 168),  # Statement
            _known("#98c379", 108),  # String
            _known("#bf79c3", 139),  # Number, Boolean
            _known("#61afef", 75),  # Function
            _known("#d19a66", 173),  # Search
            _known("#df334a", 167),  # Error
            _known("#c678dd", 176),  # PreProc
            _known("#3b4049", 237),  # Visual bg
            _known("#e0e0e0", 252),  # Identifier
            # Terminal ANSI reference colors
            _known("#000000", 0),
            _known("#CC0000", 1),
            _known("#4E9A06", 2),
            _known("#C4A000", 3),
            _known("#3465A4", 4),
            _known("#75507B", 5),
            _known("#06989A", 6),
            _known("#D3D7CF", 7),
            _known("#555753", 8),
            _known("#EF2929", 9),
            _known("#8AE234", 10),
            _known("#FCE94F", 11),
            _known("#729FCF", 12),
            _known("#AD7FA8", 13),
            _known("#34E2E2", 14),
            _known("#EEEEEC", 15),
        ]
    )
)


def closest_cube_step(component: int) -> int:
    """Return the index (0-5) of the cube value nearest to ``component``.

    Ties resolve to the lower index.
    """
    closest_idx = 0
    min_diff = abs(component - CUBE_VALUES[0])
    for idx in range(1, len(CUBE_VALUES)):
        diff = abs(component - CUBE_VALUES[idx])
        if diff < min_diff:
            min_diff = diff
            closest_idx = idx
    return closest_idx


def cube_index(color: RGBColor) -> int:
    """Map a color onto the 6x6x6 cube (indices 16-231)."""
    r_idx = closest_cube_step(color.r)
    g_idx = closest_cube_step(color.g)
    b_idx = closest_cube_step(color.b)
    return CUBE_START + 36 * r_idx + 6 * g_idx + b_idx


def grayscale_index(color: RGBColor) -> int:
    """Map a color onto the grayscale ramp (indices 232-255)."""
    gray_idx = math.floor((color.gray - 8) / 10) + GRAYSCALE_START
    return max(GRAYSCALE_START, min(GRAYSCALE_END, gray_idx))


def nearest_palette_index(color: RGBColor, known: Mapping[RGBColor, int] | None = None) -> int:
    """Find the palette index that best stands in for ``color``.

    Args:
        color: The true-color value.
        known: Exact overrides consulted first. Defaults to KNOWN_COLOR_MAP.

    Returns:
        A palette index in 0-255.
    """
    overrides = KNOWN_COLOR_MAP if known is None else known
    override = overrides.get(color)
    if override is not None:
        return override

    if color.std_dev < NEUTRAL_STD_DEV_THRESHOLD:
        return grayscale_index(color)
    return cube_index(color)


def suggest_terminal_color(hex_value: str | None, known: Mapping[RGBColor, int] | None = None) -> str:
    """Suggest a ``ctermfg``-style value for a GUI color string.

    Args:
        hex_value: ``#rrggbb`` string, ``"none"`` or None.
        known: Exact overrides, defaults to KNOWN_COLOR_MAP.

    Returns:
        The palette index as a string, or ``"none"`` when there is no usable color.
    """
    if not hex_value or hex_value == "none":
        return "none"
    try:
        color = RGBColor.from_hex(hex_value)
    except ValueError:
        return "none"
    return str(nearest_palette_index(color, known))


def palette_region(index: int) -> PaletteRegion:
    """Name the palette region an index belongs to.

    Raises:
        ValueError: If ``index`` is outside 0-255.
    """
    if not 0 <= index <= GRAYSCALE_END:
        msg = f"Palette index out of range: {index}"
        raise ValueError(msg)
    if index < 8:  # noqa: PLR2004
        return PaletteRegion.ANSI
    if index < CUBE_START:
        return PaletteRegion.BRIGHT_ANSI
    if index < GRAYSCALE_START:
        return PaletteRegion.CUBE
    return PaletteRegion.GRAYSCALE
