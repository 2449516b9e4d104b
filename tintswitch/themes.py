"""GUI colorscheme definitions for tintswitch.

Each colorscheme carries the true-color highlight groups applied in GUI
mode and the handful of semantic colors used to build a matching Textual
theme for the front-end. In Basic mode the front-end falls back to the
terminal's own ANSI palette.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from textual.theme import Theme

TERMINAL_THEME_NAME = "textual-ansi"

LW_RUBBER_THEME_NAME = "lw-rubber"
LW_DARK_THEME_NAME = "lw-dark"

DEFAULT_COLORSCHEME = LW_RUBBER_THEME_NAME


@dataclass(frozen=True)
class GuiHighlight:
    """True-color attributes of one group. Colors are ``#rrggbb`` strings."""

    fg: str | None = None
    bg: str | None = None
    styles: tuple[str, ...] = ()


@dataclass(frozen=True)
class Colorscheme:
    """A GUI colorscheme and its front-end palette."""

    name: str
    theme_id: str
    primary: str
    secondary: str
    accent: str
    warning: str
    error: str
    success: str
    foreground: str
    background: str
    surface: str
    panel: str
    text_muted: str
    groups: Mapping[str, GuiHighlight] = field(default_factory=dict)


def _groups(**links: GuiHighlight) -> Mapping[str, GuiHighlight]:
    return MappingProxyType(dict(links))


_FG = "#abb2bf"
_BG = "#21252b"
_RED = "#e06c75"
_GREEN = "#98c379"
_PURPLE = "#bf79c3"
_BLUE = "#61afef"
_ORANGE = "#d19a66"
_ERROR = "#df334a"
_MAGENTA = "#c678dd"
_SELECTION = "#3b4049"
_IDENT = "#e0e0e0"
_COMMENT = "#5c6370"
_GUTTER = "#282c34"
_CYAN = "#56b6c2"
_YELLOW = "#e5c07b"

_RUBBER_GROUPS = _groups(
    Normal=GuiHighlight(_FG, _BG),
    Comment=GuiHighlight(_COMMENT, None, ("italic",)),
    Constant=GuiHighlight(_PURPLE),
    String=GuiHighlight(_GREEN),
    Character=GuiHighlight(_GREEN),
    Number=GuiHighlight(_PURPLE),
    Boolean=GuiHighlight(_PURPLE),
    Float=GuiHighlight(_PURPLE),
    Identifier=GuiHighlight(_IDENT),
    Function=GuiHighlight(_BLUE),
    Statement=GuiHighlight(_RED),
    Conditional=GuiHighlight(_RED),
    Repeat=GuiHighlight(_RED),
    Label=GuiHighlight(_RED),
    Operator=GuiHighlight(_RED),
    Keyword=GuiHighlight(_RED),
    Exception=GuiHighlight(_RED),
    PreProc=GuiHighlight(_MAGENTA),
    Include=GuiHighlight(_MAGENTA),
    Define=GuiHighlight(_MAGENTA),
    Macro=GuiHighlight(_MAGENTA),
    PreCondit=GuiHighlight(_MAGENTA),
    Type=GuiHighlight(_YELLOW),
    StorageClass=GuiHighlight(_YELLOW),
    Structure=GuiHighlight(_YELLOW),
    Typedef=GuiHighlight(_YELLOW),
    Special=GuiHighlight(_CYAN),
    SpecialChar=GuiHighlight(_CYAN),
    Tag=GuiHighlight(_CYAN),
    Delimiter=GuiHighlight(_FG),
    SpecialComment=GuiHighlight(_COMMENT, None, ("italic",)),
    Debug=GuiHighlight(_ORANGE),
    Underlined=GuiHighlight(_BLUE, None, ("underline",)),
    Error=GuiHighlight(_ERROR, _BG),
    Todo=GuiHighlight(_ORANGE, _BG, ("bold",)),
    Directory=GuiHighlight(_BLUE),
    Search=GuiHighlight(_BG, _ORANGE),
    MatchParen=GuiHighlight(_ORANGE, None, ("bold",)),
    Visual=GuiHighlight(None, _SELECTION),
    LineNr=GuiHighlight(_COMMENT, _GUTTER),
    CursorLine=GuiHighlight(None, _GUTTER),
    StatusLine=GuiHighlight(_FG, _SELECTION),
    StatusLineNC=GuiHighlight(_COMMENT, _GUTTER),
    Pmenu=GuiHighlight(_FG, _SELECTION),
    PmenuSel=GuiHighlight(_BG, _BLUE),
    SignColumn=GuiHighlight(None, _GUTTER),
    VertSplit=GuiHighlight(_SELECTION, _GUTTER),
    luaFunction=GuiHighlight(_RED),
    luaTable=GuiHighlight(_FG),
    luaFuncCall=GuiHighlight(_BLUE),
    pythonFunction=GuiHighlight(_BLUE),
    pythonStatement=GuiHighlight(_RED),
    pythonBuiltin=GuiHighlight(_CYAN),
    pythonDecorator=GuiHighlight(_MAGENTA),
    jsFunction=GuiHighlight(_RED),
    jsThis=GuiHighlight(_ORANGE, None, ("italic",)),
    markdownH1=GuiHighlight(_RED, None, ("bold",)),
    markdownLink=GuiHighlight(_BLUE, None, ("underline",)),
    htmlTag=GuiHighlight(_FG),
    cssClassName=GuiHighlight(_ORANGE),
)

_DARK_GROUPS = _groups(
    **{name: hl for name, hl in _RUBBER_GROUPS.items() if name not in {"Normal", "Comment", "Visual"}},
    Normal=GuiHighlight(_IDENT, "#1b1d23"),
    Comment=GuiHighlight("#7f848e", None, ("italic",)),
    Visual=GuiHighlight(None, "#2c313c"),
)

COLORSCHEMES: tuple[Colorscheme, ...] = (
    Colorscheme(
        name="Little Wonder Rubber",
        theme_id=LW_RUBBER_THEME_NAME,
        primary=_BLUE,
        secondary=_MAGENTA,
        accent=_ORANGE,
        warning=_YELLOW,
        error=_ERROR,
        success=_GREEN,
        foreground=_FG,
        background=_BG,
        surface=_GUTTER,
        panel=_SELECTION,
        text_muted=_COMMENT,
        groups=_RUBBER_GROUPS,
    ),
    Colorscheme(
        name="Little Wonder Dark",
        theme_id=LW_DARK_THEME_NAME,
        primary=_BLUE,
        secondary=_PURPLE,
        accent=_CYAN,
        warning=_ORANGE,
        error=_RED,
        success=_GREEN,
        foreground=_IDENT,
        background="#1b1d23",
        surface="#23262d",
        panel="#2c313c",
        text_muted="#7f848e",
        groups=_DARK_GROUPS,
    ),
)

COLORSCHEMES_BY_ID: Mapping[str, Colorscheme] = MappingProxyType({scheme.theme_id: scheme for scheme in COLORSCHEMES})


def get_colorscheme(theme_id: str) -> Colorscheme | None:
    """Look up a colorscheme by id."""
    return COLORSCHEMES_BY_ID.get(theme_id)


def _is_hex_color(value: str) -> bool:
    """Check if a string is a hex color.

    Args:
        value: Value to check.

    Returns:
        True if value is a hex color string.
    """
    return value.startswith("#") and len(value) in {4, 7}


def _normalize_color(value: str, fallback: str) -> str:
    """Normalize a color value to a hex string.

    Args:
        value: Candidate color value.
        fallback: Fallback color when value is not a hex color.

    Returns:
        Hex color string.
    """
    return value if _is_hex_color(value) else fallback


def _theme_from_colorscheme(scheme: Colorscheme) -> Theme:
    """Build a Textual Theme from a colorscheme.

    Args:
        scheme: Colorscheme data.

    Returns:
        A Textual Theme instance.
    """
    background = _normalize_color(scheme.background, "#0c0c0e")
    surface = _normalize_color(scheme.surface, background)
    panel = _normalize_color(scheme.panel, surface)
    foreground = _normalize_color(scheme.foreground, "#e0e0e0")
    text_muted = _normalize_color(scheme.text_muted, foreground)

    return Theme(
        name=scheme.theme_id,
        primary=scheme.primary,
        secondary=scheme.secondary,
        accent=scheme.accent,
        warning=scheme.warning,
        error=scheme.error,
        success=scheme.success,
        foreground=foreground,
        background=background,
        surface=surface,
        panel=panel,
        dark=True,
        variables={
            "border": panel,
            "text-muted": text_muted,
        },
    )


REGISTERED_THEMES = tuple(_theme_from_colorscheme(scheme) for scheme in COLORSCHEMES)

THEME_LABELS: dict[str, str] = {
    TERMINAL_THEME_NAME: "Terminal (ANSI)",
    **{scheme.theme_id: scheme.name for scheme in COLORSCHEMES},
}
