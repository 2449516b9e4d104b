"""Highlight group tables and capture helpers.

``BASIC_HIGHLIGHTS`` is the fixed 256-color table applied whenever Basic
mode is entered. The values were tuned by eye against the GUI
colorscheme; keep them as they are.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

from tintswitch.logger import get_logger
from tintswitch.models import AppearanceMode, HighlightAttributes, TerminalHighlight

if TYPE_CHECKING:
    from tintswitch.appearance.host import EditorHost

logger = get_logger(__name__)

CombinedResults = dict[str, dict[AppearanceMode, HighlightAttributes]]


def _hl(group: str, ctermfg: int | None, ctermbg: int | None, cterm: str = "NONE") -> TerminalHighlight:
    return TerminalHighlight(group=group, ctermfg=ctermfg, ctermbg=ctermbg, cterm=cterm)


BASIC_HIGHLIGHTS: tuple[TerminalHighlight, ...] = (
    # Base UI
    _hl("Normal", 252, 234),
    _hl("LineNr", 240, 235),
    _hl("CursorLineNr", 214, 235),
    _hl("CursorLine", None, 236),
    _hl("EndOfBuffer", 237, 234),
    _hl("VertSplit", 240, 235),
    _hl("SignColumn", None, 235),
    _hl("FoldColumn", 242, 235),
    _hl("Folded", 242, 235),
    # Comments
    _hl("Comment", 242, None),
    # Constants
    _hl("Constant", 141, None),
    _hl("String", 36, None),
    _hl("Character", 114, None),
    _hl("Number", 173, None),
    _hl("Boolean", 173, None),
    _hl("Float", 173, None),
    # Identifiers
    _hl("Identifier", 81, None),
    _hl("Function", 81, None),
    # Statements
    _hl("Statement", 204, None),
    _hl("Conditional", 204, None),
    _hl("Repeat", 204, None),
    _hl("Label", 204, None),
    _hl("Operator", 204, None),
    _hl("Keyword", 204, None),
    _hl("Exception", 204, None),
    # Preprocessor
    _hl("PreProc", 176, None),
    _hl("Include", 176, None),
    _hl("Define", 176, None),
    _hl("Macro", 176, None),
    _hl("PreCondit", 176, None),
    # Types
    _hl("Type", 81, None),
    _hl("StorageClass", 81, None),
    _hl("Structure", 81, None),
    _hl("Typedef", 81, None),
    # Special characters
    _hl("Special", 117, None),
    _hl("SpecialChar", 117, None),
    _hl("Tag", 117, None),
    _hl("Delimiter", 245, None),
    _hl("SpecialComment", 242, None),
    _hl("Debug", 225, None),
    # Selection and search
    _hl("Visual", None, 59),
    _hl("Search", 232, 215),
    _hl("IncSearch", 232, 33),
    _hl("MatchParen", 214, None, "bold"),
    # Status line and tabs
    _hl("StatusLine", 252, 238),
    _hl("StatusLineNC", 240, 236),
    _hl("TabLine", 240, 236),
    _hl("TabLineFill", 240, 236),
    _hl("TabLineSel", 252, 238),
    # Code structure
    _hl("Title", 214, None),
    _hl("Underlined", 81, None, "underline"),
    _hl("Todo", 228, 234, "bold"),
    _hl("Error", 203, 234),
    _hl("ErrorMsg", 203, 234),
    _hl("WarningMsg", 214, 234),
    _hl("Question", 81, None),
    _hl("Directory", 81, None),
    # Non-text and whitespace
    _hl("NonText", 237, None),
    _hl("SpecialKey", 237, None),
    _hl("Whitespace", 237, None),
    # Completion menu
    _hl("Pmenu", 252, 238),
    _hl("PmenuSel", 232, 214),
    _hl("PmenuSbar", None, 240),
    _hl("PmenuThumb", None, 252),
    # Diffs
    _hl("DiffAdd", None, 22),
    _hl("DiffChange", None, 24),
    _hl("DiffDelete", None, 52),
    _hl("DiffText", None, 60),
    # Spell checking
    _hl("SpellBad", 203, None, "undercurl"),
    _hl("SpellCap", 33, None, "undercurl"),
    _hl("SpellRare", 117, None, "undercurl"),
    _hl("SpellLocal", 36, None, "undercurl"),
    # Messages
    _hl("ModeMsg", 214, None, "bold"),
    _hl("MoreMsg", 36, None, "bold"),
    # Diagnostics
    _hl("DiagnosticError", 203, None),
    _hl("DiagnosticWarn", 214, None),
    _hl("DiagnosticInfo", 33, None),
    _hl("DiagnosticHint", 36, None),
    _hl("DiagnosticUnderlineError", 203, None, "underline"),
    _hl("DiagnosticUnderlineWarn", 214, None, "underline"),
    _hl("DiagnosticUnderlineInfo", 33, None, "underline"),
    _hl("DiagnosticUnderlineHint", 36, None, "underline"),
)

# Groups compared by the color analysis
ANALYZED_GROUPS: tuple[str, ...] = (
    # Basic syntax
    "Normal", "Comment", "Constant", "String", "Character", "Number", "Boolean",
    "Float", "Identifier", "Function", "Statement", "Conditional", "Repeat",
    "Label", "Operator", "Keyword", "Exception", "PreProc", "Include", "Define",
    "Macro", "PreCondit", "Type", "StorageClass", "Structure", "Typedef",
    "Special", "SpecialChar", "Tag", "Delimiter", "SpecialComment", "Debug",
    "Underlined", "Error", "Todo",
    # UI elements
    "Directory", "Search", "MatchParen", "Visual", "LineNr", "CursorLine",
    "StatusLine", "StatusLineNC", "Pmenu", "PmenuSel", "SignColumn", "VertSplit",
    # Lua
    "luaFunction", "luaTable", "luaIn", "luaStatement", "luaFuncCall", "luaSpecial",
    # Python
    "pythonFunction", "pythonStatement", "pythonBuiltin", "pythonDecorator",
    # JavaScript/TypeScript
    "jsFunction", "jsGlobalObjects", "jsOperator", "jsThis",
    "tsxTag", "tsxAttrib",
    # Ruby
    "rubyClass", "rubyDefine", "rubySymbol", "rubyInstanceVariable",
    # Markup
    "markdownH1", "markdownLink", "htmlTag", "cssClassName",
)  # fmt: skip

# Groups for which suggested highlight commands are generated
KEY_GROUPS: tuple[str, ...] = (
    "Normal", "Comment", "String", "Number", "Boolean", "Float", "Constant",
    "Function", "Keyword", "Type", "Statement", "Conditional", "Repeat",
    "Operator", "PreProc", "Special", "Identifier", "Todo", "Error",
    "Search", "MatchParen", "Visual", "Directory",
)  # fmt: skip


def basic_highlight(group: str) -> TerminalHighlight | None:
    """Look up a group in the Basic-mode table."""
    for row in BASIC_HIGHLIGHTS:
        if row.group == group:
            return row
    return None


def capture_highlights(host: EditorHost, groups: Iterable[str] = ANALYZED_GROUPS) -> list[HighlightAttributes]:
    """Capture the attributes of every defined group from the host.

    Groups the host does not define are skipped, as are groups whose lookup
    raises.

    Args:
        host: The editor host to read from.
        groups: Group names to capture, in order.

    Returns:
        Captured attributes in the order of ``groups``.
    """
    results: list[HighlightAttributes] = []
    for group in groups:
        try:
            info = host.get_highlight(group)
        except Exception as exc:
            logger.debug(f"Could not read highlight group {group}: {exc}")
            continue
        if info is not None:
            results.append(info)
    return results


def combine_mode_results(
    current_results: Iterable[HighlightAttributes],
    current_mode: AppearanceMode,
    other_results: Iterable[HighlightAttributes],
    other_mode: AppearanceMode,
) -> CombinedResults:
    """Merge captures from both modes into one record per group.

    Args:
        current_results: Captures from the mode that was active first.
        current_mode: Mode of ``current_results``.
        other_results: Captures from the other mode.
        other_mode: Mode of ``other_results``.

    Returns:
        Mapping of group name to a per-mode mapping of attributes.
    """
    combined: CombinedResults = {}
    for results, mode in ((current_results, current_mode), (other_results, other_mode)):
        for info in results:
            combined.setdefault(info.name, {})[mode] = info
    return combined


def gui_view(combined: Mapping[str, Mapping[AppearanceMode, HighlightAttributes]]) -> dict[str, HighlightAttributes]:
    """Return only the groups that exist in GUI mode."""
    return {
        group: modes[AppearanceMode.GUI] for group, modes in combined.items() if AppearanceMode.GUI in modes
    }
