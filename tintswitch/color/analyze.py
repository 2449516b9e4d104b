"""Compare highlight groups between Basic and GUI mode.

The analyzer samples every analyzed group in the current mode, switches to
the other mode, lets the redraw settle, samples again and switches back.
The two captures are merged into a report that shows where the Basic
table drifts from the GUI colorscheme, and suggests 256-color values for
the groups that matter most.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field

from rich.table import Table

from tintswitch.appearance.modes import ModeEngine, TransitionStatus
from tintswitch.color.highlights import (
    ANALYZED_GROUPS,
    KEY_GROUPS,
    CombinedResults,
    capture_highlights,
    combine_mode_results,
)
from tintswitch.color.palette import KNOWN_COLOR_MAP, RGBColor, suggest_terminal_color
from tintswitch.logger import get_logger
from tintswitch.models import AppearanceMode, HighlightAttributes

logger = get_logger(__name__)

SETTLE_DELAY = 0.2
LIMITED_ANALYSIS_WARNING = "Error switching color modes. Analysis will be limited."

# Column widths of the plain-text comparison table
COLUMN_WIDTHS: tuple[int, ...] = (22, 12, 12, 10, 10, 10, 15)
COLUMN_TITLES: tuple[str, ...] = ("Group", "GUI FG", "GUI BG", "Term FG", "Term BG", "Suggested", "Attributes")
RULE_WIDTH = 95
MAPPING_WIDTH = 25
MAPPINGS_PER_ROW = 3

TERMINAL_REFERENCE: tuple[str, ...] = (
    "0-7:   Standard ANSI colors (black, red, green, yellow, blue, magenta, cyan, white)",
    "8-15:  Bright ANSI colors (bright versions of the above)",
    "16-231: 6×6×6 color cube (216 colors)",
    "232-255: Grayscale from dark to light (24 steps)",
)

AnalysisCallback = Callable[["AnalysisReport"], None]


@dataclass(frozen=True)
class ComparisonRow:
    """One line of the Basic/GUI comparison table."""

    group: str
    gui_fg: str
    gui_bg: str
    term_fg: str
    term_bg: str
    suggested: str
    attributes: str

    def cells(self) -> tuple[str, ...]:
        """Row values in column order."""
        return (self.group, self.gui_fg, self.gui_bg, self.term_fg, self.term_bg, self.suggested, self.attributes)


def _suggested_fg(
    gui: HighlightAttributes,
    term: HighlightAttributes | None,
    known: Mapping[RGBColor, int],
) -> str:
    if gui.fg is None:
        return term.ctermfg if term is not None else "none"
    return suggest_terminal_color(gui.fg.hex, known)


def comparison_rows(
    combined: CombinedResults,
    known: Mapping[RGBColor, int] = KNOWN_COLOR_MAP,
) -> list[ComparisonRow]:
    """Build the comparison rows for every group present in GUI mode.

    The suggested column is left empty when it agrees with the current
    terminal foreground. Attribute differences are shown as ``basic ≠ gui``.

    Args:
        combined: Captures from both modes.
        known: Exact color overrides consulted before approximation.

    Returns:
        Rows sorted by group name.
    """
    rows: list[ComparisonRow] = []
    for group in sorted(combined):
        gui = combined[group].get(AppearanceMode.GUI)
        if gui is None:
            continue
        term = combined[group].get(AppearanceMode.BASIC)
        term_fg = term.ctermfg if term is not None else "none"
        term_bg = term.ctermbg if term is not None else "none"

        suggested = _suggested_fg(gui, term, known)
        attributes = gui.attr_str
        if term is not None and term.attr_str != attributes:
            attributes = f"{term.attr_str} ≠ {attributes}"

        rows.append(
            ComparisonRow(
                group=group,
                gui_fg=gui.fg_hex,
                gui_bg=gui.bg_hex,
                term_fg=term_fg,
                term_bg=term_bg,
                suggested=suggested if suggested != term_fg else "",
                attributes=attributes,
            )
        )
    return rows


def _pad_row(cells: Sequence[str]) -> str:
    return "".join(cell.ljust(width) for cell, width in zip(cells, COLUMN_WIDTHS, strict=True))


def format_highlights_table(
    combined: CombinedResults,
    known: Mapping[RGBColor, int] = KNOWN_COLOR_MAP,
) -> list[str]:
    """Render the comparison table as fixed-width text lines."""
    lines = [_pad_row(COLUMN_TITLES), "-" * RULE_WIDTH]
    lines.extend(_pad_row(row.cells()) for row in comparison_rows(combined, known))
    return lines


def format_terminal_reference() -> list[str]:
    """Render the palette region reference."""
    return ["", "Terminal Color Reference:", "========================", *TERMINAL_REFERENCE]


def format_mapping_table(known: Mapping[RGBColor, int] = KNOWN_COLOR_MAP) -> list[str]:
    """Render the known overrides, three per row, sorted by hex value."""
    lines = ["", "GUI to Terminal Color Mappings:", "============================"]
    mappings = sorted((color.hex, index) for color, index in known.items())
    for start in range(0, len(mappings), MAPPINGS_PER_ROW):
        chunk = mappings[start : start + MAPPINGS_PER_ROW]
        lines.append("".join(f"{hex_value} → {index}".ljust(MAPPING_WIDTH) for hex_value, index in chunk))
    return lines


def generate_highlight_commands(
    combined: CombinedResults,
    known: Mapping[RGBColor, int] = KNOWN_COLOR_MAP,
    groups: Iterable[str] = KEY_GROUPS,
) -> list[str]:
    """Suggest ``hi`` commands that bring Basic mode closer to GUI mode.

    Only groups defined in GUI mode are considered, and commands with no
    attributes to set are left out.

    Args:
        combined: Captures from both modes.
        known: Exact color overrides consulted before approximation.
        groups: Groups to generate commands for, in order.

    Returns:
        The section lines, header included.
    """
    lines = [
        "",
        "Vim Highlight Commands for BasicMode:",
        "===================================",
        "Use these commands in your BasicMode configuration:",
        "",
    ]
    for group in groups:
        modes = combined.get(group, {})
        gui = modes.get(AppearanceMode.GUI)
        if gui is None:
            continue
        best_fg = _suggested_fg(gui, modes.get(AppearanceMode.BASIC), known)

        parts = [f"hi {group}"]
        if best_fg != "none":
            parts.append(f"ctermfg={best_fg}")
        if gui.attr_str != "none":
            parts.append(f"cterm={gui.attr_str}")
        if len(parts) > 1:
            lines.append(" ".join(parts))
    return lines


@dataclass(frozen=True)
class AnalysisReport:
    """Result of a color analysis run.

    Attributes:
        colorscheme: Name of the GUI colorscheme the modes were compared under.
        combined: Captures from both modes, keyed by group.
        starting_mode: Mode that was active when the analysis started.
        limited: True when only the starting mode could be sampled.
    """

    colorscheme: str
    combined: CombinedResults
    starting_mode: AppearanceMode
    limited: bool = False
    known: Mapping[RGBColor, int] = field(default_factory=lambda: KNOWN_COLOR_MAP, repr=False)

    @property
    def rows(self) -> list[ComparisonRow]:
        """Comparison rows for the groups present in GUI mode."""
        return comparison_rows(self.combined, self.known)

    def lines(self) -> list[str]:
        """Render the full report as text lines."""
        lines = [
            f"Color Scheme Analysis - {self.colorscheme}",
            "============================================",
            "",
            "This analysis compares highlight groups between BasicMode and GUIMode",
            f"Both modes use the {self.colorscheme} colorscheme with different settings.",
            "",
        ]
        lines.extend(format_highlights_table(self.combined, self.known))
        lines.extend(format_terminal_reference())
        lines.extend(format_mapping_table(self.known))
        lines.extend(generate_highlight_commands(self.combined, self.known))
        return lines

    def text(self) -> str:
        """Render the full report as a single string."""
        return "\n".join(self.lines())

    def as_table(self) -> Table:
        """Render the comparison as a rich table."""
        table = Table(title=f"Color Scheme Analysis - {self.colorscheme}", show_header=True, header_style="bold")
        for title in COLUMN_TITLES:
            table.add_column(title, no_wrap=True)
        for row in self.rows:
            table.add_row(*row.cells())
        return table


class ColorAnalyzer:
    """Runs the capture, switch, settle, capture, restore sequence."""

    def __init__(
        self,
        engine: ModeEngine,
        *,
        settle_delay: float = SETTLE_DELAY,
        groups: Sequence[str] = ANALYZED_GROUPS,
        known: Mapping[RGBColor, int] = KNOWN_COLOR_MAP,
    ) -> None:
        """Initialize the analyzer.

        Args:
            engine: Mode engine to switch; its scheduler times the settle delay.
            settle_delay: Seconds to wait after switching before sampling.
            groups: Highlight groups to sample.
            known: Exact color overrides used for suggestions.
        """
        self.engine = engine
        self.settle_delay = settle_delay
        self.groups = tuple(groups)
        self.known = known
        self._running = False

    @property
    def running(self) -> bool:
        """Whether an analysis is waiting for its settle delay."""
        return self._running

    def start(self, on_complete: AnalysisCallback) -> bool:
        """Start an analysis and report through ``on_complete``.

        ``on_complete`` may run before this method returns, when the mode
        switch fails right away. A switch that only partly applied counts
        as failed, since the other mode cannot be sampled reliably. The
        analysis switches leave the GUI font alone.

        Args:
            on_complete: Receives the finished report.

        Returns:
            False if another analysis is already running.
        """
        if self._running:
            logger.warning("Color analysis already running; ignoring request")
            return False

        engine = self.engine
        starting = engine.mode
        other = starting.other
        current_results = capture_highlights(engine.host, self.groups)
        logger.info(f"Analyzing {len(current_results)} groups, starting in {starting.value}")

        def finish(other_results: list[HighlightAttributes] | None) -> None:
            self._running = False
            limited = other_results is None
            if limited:
                engine.notifier.warning(LIMITED_ANALYSIS_WARNING)
            combined = combine_mode_results(current_results, starting, other_results or [], other)
            on_complete(
                AnalysisReport(
                    colorscheme=engine.colorscheme,
                    combined=combined,
                    starting_mode=starting,
                    limited=limited,
                    known=self.known,
                )
            )

        def settled() -> None:
            other_results = capture_highlights(engine.host, self.groups)
            self._restore(starting)
            finish(other_results)

        def superseded() -> None:
            logger.warning("Color analysis interrupted by a mode change")
            finish(None)

        self._running = True
        with engine.notifier.quiet():
            result = engine.transition(other, with_font=False)

        if result.status is TransitionStatus.SKIPPED:
            finish(None)
            return True
        if result.status is TransitionStatus.PARTIAL:
            logger.warning(f"Switching to {other.value} for analysis failed: {'; '.join(result.warnings)}")
            self._restore(starting)
            finish(None)
            return True

        try:
            engine.defer(self.settle_delay, settled, on_cancel=superseded)
        except RuntimeError as exc:
            logger.warning(f"Cannot wait for highlights to settle: {exc}")
            self._restore(starting)
            finish(None)
        return True

    def _restore(self, mode: AppearanceMode) -> None:
        if self.engine.mode is mode:
            return
        with self.engine.notifier.quiet():
            result = self.engine.transition(mode, with_font=False)
        if not result.ok:
            logger.warning(f"Restoring {mode.value} after analysis was incomplete: {result.status.value}")

    async def analyze(self) -> AnalysisReport:
        """Run an analysis on the running event loop and return the report.

        Raises:
            RuntimeError: If another analysis is already running.
        """
        future: asyncio.Future[AnalysisReport] = asyncio.get_running_loop().create_future()

        def complete(report: AnalysisReport) -> None:
            if not future.done():
                future.set_result(report)

        if not self.start(complete):
            msg = "Color analysis already running"
            raise RuntimeError(msg)
        return await future
