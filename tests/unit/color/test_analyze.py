"""Tests for the Basic/GUI color analysis."""

from __future__ import annotations

import pytest
from rich.table import Table

from tests.fakes import CountingProbe, ExplodingHost, FakeScheduler
from tintswitch.appearance.environment import Platform
from tintswitch.appearance.fonts import FontResolver
from tintswitch.appearance.host import MemoryHost
from tintswitch.appearance.modes import ModeEngine
from tintswitch.appearance.notifications import Notifier, Severity
from tintswitch.appearance.scheduler import LoopScheduler
from tintswitch.color.analyze import (
    LIMITED_ANALYSIS_WARNING,
    RULE_WIDTH,
    SETTLE_DELAY,
    AnalysisReport,
    ColorAnalyzer,
    comparison_rows,
    format_highlights_table,
    format_mapping_table,
    generate_highlight_commands,
)
from tintswitch.color.highlights import combine_mode_results
from tintswitch.color.palette import KNOWN_COLOR_MAP, RGBColor
from tintswitch.models import AppearanceMode, HighlightAttributes


def _run(analyzer: ColorAnalyzer, scheduler: FakeScheduler) -> AnalysisReport:
    reports: list[AnalysisReport] = []
    assert analyzer.start(reports.append)
    scheduler.advance(SETTLE_DELAY)
    assert len(reports) == 1
    return reports[0]


class TestColorAnalyzer:
    """Tests for the capture, switch, settle, capture, restore sequence."""

    def test_switches_and_waits_for_settle_delay(self, engine: ModeEngine, scheduler: FakeScheduler) -> None:
        engine.enter_basic()
        reports: list[AnalysisReport] = []
        analyzer = ColorAnalyzer(engine)

        analyzer.start(reports.append)

        assert engine.mode is AppearanceMode.GUI
        assert analyzer.running
        assert reports == []
        scheduler.advance(SETTLE_DELAY / 2)
        assert reports == []
        scheduler.advance(SETTLE_DELAY / 2)
        assert len(reports) == 1

    def test_restores_starting_mode(self, engine: ModeEngine, scheduler: FakeScheduler) -> None:
        engine.enter_basic()
        report = _run(ColorAnalyzer(engine), scheduler)
        assert engine.mode is AppearanceMode.BASIC
        assert report.starting_mode is AppearanceMode.BASIC
        assert not report.limited

    def test_captures_both_modes(self, engine: ModeEngine, scheduler: FakeScheduler) -> None:
        engine.enter_basic()
        report = _run(ColorAnalyzer(engine), scheduler)

        normal = report.combined["Normal"]
        assert normal[AppearanceMode.BASIC].ctermfg == "252"
        assert normal[AppearanceMode.GUI].fg == RGBColor.from_hex("#abb2bf")

    def test_starting_in_gui_mode(self, engine: ModeEngine, scheduler: FakeScheduler) -> None:
        engine.enter_gui()
        report = _run(ColorAnalyzer(engine), scheduler)
        assert engine.mode is AppearanceMode.GUI
        assert report.starting_mode is AppearanceMode.GUI
        assert AppearanceMode.BASIC in report.combined["Normal"]

    def test_mode_change_during_settle_limits_report(
        self, engine: ModeEngine, scheduler: FakeScheduler, notifier: Notifier
    ) -> None:
        engine.enter_basic()
        reports: list[AnalysisReport] = []
        ColorAnalyzer(engine).start(reports.append)

        engine.enter_basic()

        assert len(reports) == 1
        assert reports[0].limited
        assert all(AppearanceMode.GUI not in modes for modes in reports[0].combined.values())
        warnings = [entry.message for entry in notifier.history.entries(Severity.WARNING)]
        assert LIMITED_ANALYSIS_WARNING in warnings
        # Nothing left to fire later
        assert scheduler.advance(1.0) == 0

    def test_failed_switch_limits_report_and_restores(self, scheduler: FakeScheduler, notifier: Notifier) -> None:
        host = ExplodingHost()
        engine = ModeEngine(host, notifier=notifier, scheduler=scheduler)
        engine.enter_basic()
        reports: list[AnalysisReport] = []

        ColorAnalyzer(engine).start(reports.append)

        assert len(reports) == 1
        assert reports[0].limited
        assert engine.mode is AppearanceMode.BASIC
        assert not engine.in_progress

    def test_partial_switch_limits_report(self, scheduler: FakeScheduler, notifier: Notifier) -> None:
        host = MemoryHost()
        engine = ModeEngine(host, notifier=notifier, scheduler=scheduler, colorscheme="nope")
        engine.enter_basic()
        reports: list[AnalysisReport] = []

        ColorAnalyzer(engine).start(reports.append)

        assert reports[0].limited
        assert engine.mode is AppearanceMode.BASIC
        assert host.get_highlight("Normal") is not None

    def test_leaves_font_alone(self, scheduler: FakeScheduler, notifier: Notifier) -> None:
        host = MemoryHost()
        probe = CountingProbe()
        resolver = FontResolver(Platform.LINUX, probe=probe, notifier=notifier)
        engine = ModeEngine(host, resolver, notifier=notifier, scheduler=scheduler)
        engine.enter_basic()

        report = _run(ColorAnalyzer(engine), scheduler)

        assert not report.limited
        assert host.font is None
        assert probe.calls == []
        warnings = [entry.message for entry in notifier.history.entries(Severity.WARNING)]
        assert not any(message.startswith("No preferred fonts") for message in warnings)

    def test_engine_without_scheduler(self, notifier: Notifier) -> None:
        engine = ModeEngine(MemoryHost(), notifier=notifier)
        engine.enter_basic()
        reports: list[AnalysisReport] = []

        ColorAnalyzer(engine).start(reports.append)

        assert reports[0].limited
        assert engine.mode is AppearanceMode.BASIC

    def test_skipped_switch_limits_report(self, engine: ModeEngine) -> None:
        reports: list[AnalysisReport] = []
        engine._in_progress = True
        try:
            ColorAnalyzer(engine).start(reports.append)
        finally:
            engine._in_progress = False
        assert reports[0].limited

    def test_second_start_is_rejected(self, engine: ModeEngine, scheduler: FakeScheduler) -> None:
        analyzer = ColorAnalyzer(engine)
        assert analyzer.start(lambda _report: None)
        assert not analyzer.start(lambda _report: None)
        scheduler.advance(SETTLE_DELAY)
        assert not analyzer.running

    def test_switch_messages_are_quiet(self, engine: ModeEngine, scheduler: FakeScheduler, notifier: Notifier) -> None:
        engine.startup(env={})
        before = len(notifier.history.entries(Severity.INFO))
        _run(ColorAnalyzer(engine), scheduler)
        assert len(notifier.history.entries(Severity.INFO)) == before

    async def test_analyze_on_event_loop(self) -> None:
        engine = ModeEngine(MemoryHost(), notifier=Notifier(), scheduler=LoopScheduler())
        engine.enter_basic()
        report = await ColorAnalyzer(engine, settle_delay=0.01).analyze()
        assert not report.limited
        assert engine.mode is AppearanceMode.BASIC


@pytest.fixture
def combined() -> dict[str, dict[AppearanceMode, HighlightAttributes]]:
    basic = [
        HighlightAttributes(name="Normal", ctermfg="252", ctermbg="234"),
        HighlightAttributes(name="Comment", ctermfg="242"),
        HighlightAttributes(name="Todo", ctermfg="228", ctermbg="234", cterm="bold"),
        HighlightAttributes(name="LineNr", ctermfg="240", ctermbg="235"),
    ]
    gui = [
        HighlightAttributes(name="Normal", fg=RGBColor.from_hex("#abb2bf"), bg=RGBColor.from_hex("#21252b")),
        HighlightAttributes(name="Comment", fg=RGBColor.from_hex("#5c6370"), styles=frozenset({"italic"})),
        HighlightAttributes(
            name="Todo", fg=RGBColor.from_hex("#d19a66"), bg=RGBColor.from_hex("#21252b"), styles=frozenset({"bold"})
        ),
        HighlightAttributes(name="Visual", bg=RGBColor.from_hex("#3b4049")),
    ]
    return combine_mode_results(basic, AppearanceMode.BASIC, gui, AppearanceMode.GUI)


class TestComparisonRows:
    """Tests for the comparison table rows."""

    def test_only_gui_groups_sorted(self, combined: dict) -> None:
        assert [row.group for row in comparison_rows(combined)] == ["Comment", "Normal", "Todo", "Visual"]

    def test_suggested_from_known_mapping(self, combined: dict) -> None:
        rows = {row.group: row for row in comparison_rows(combined)}
        assert rows["Normal"].suggested == "249"
        assert rows["Todo"].suggested == "173"

    def test_suggested_from_approximation(self, combined: dict) -> None:
        rows = {row.group: row for row in comparison_rows(combined)}
        assert rows["Comment"].suggested == "241"

    def test_suggested_hidden_when_equal(self, combined: dict) -> None:
        rows = {row.group: row for row in comparison_rows(combined, known={RGBColor.from_hex("#abb2bf"): 252})}
        assert rows["Normal"].suggested == ""

    def test_group_without_fg_or_basic_capture(self, combined: dict) -> None:
        visual = {row.group: row for row in comparison_rows(combined)}["Visual"]
        assert (visual.gui_fg, visual.gui_bg, visual.term_fg, visual.suggested) == ("none", "#3b4049", "none", "")

    def test_attribute_difference(self, combined: dict) -> None:
        rows = {row.group: row for row in comparison_rows(combined)}
        assert rows["Comment"].attributes == "none ≠ italic"
        assert rows["Todo"].attributes == "bold"


class TestReportFormatting:
    """Tests for the text report sections."""

    def test_table_header_and_rule(self, combined: dict) -> None:
        lines = format_highlights_table(combined)
        assert lines[0].startswith("Group".ljust(22) + "GUI FG".ljust(12))
        assert lines[1] == "-" * RULE_WIDTH

    def test_table_row_is_fixed_width(self, combined: dict) -> None:
        lines = format_highlights_table(combined)
        normal = next(line for line in lines if line.startswith("Normal"))
        expected = (
            "Normal".ljust(22)
            + "#abb2bf".ljust(12)
            + "#21252b".ljust(12)
            + "252".ljust(10)
            + "234".ljust(10)
            + "249".ljust(10)
            + "none".ljust(15)
        )
        assert normal == expected

    def test_mapping_table_three_per_row_sorted(self) -> None:
        lines = format_mapping_table()
        rows = lines[3:]
        assert lines[1] == "GUI to Terminal Color Mappings:"
        assert len(rows) == 9
        assert rows[0].startswith("#000000 → 0".ljust(25) + "#06989a → 6".ljust(25))

    def test_mapping_table_last_row_may_be_short(self) -> None:
        known = {RGBColor(0, 0, 1): 17, RGBColor(0, 0, 2): 18, RGBColor(0, 0, 3): 19, RGBColor(0, 0, 4): 20}
        rows = format_mapping_table(known)[3:]
        assert len(rows) == 2
        assert rows[1] == "#000004 → 20".ljust(25)

    def test_highlight_commands(self, combined: dict) -> None:
        lines = generate_highlight_commands(combined)
        assert "hi Normal ctermfg=249" in lines
        assert "hi Comment ctermfg=241 cterm=italic" in lines
        assert "hi Todo ctermfg=173 cterm=bold" in lines
        assert not any(line.startswith("hi Visual") for line in lines)

    def test_full_report_sections(self, combined: dict) -> None:
        report = AnalysisReport(colorscheme="lw-rubber", combined=combined, starting_mode=AppearanceMode.BASIC)
        lines = report.lines()
        assert lines[0] == "Color Scheme Analysis - lw-rubber"
        assert "Terminal Color Reference:" in lines
        assert "GUI to Terminal Color Mappings:" in lines
        assert "Vim Highlight Commands for BasicMode:" in lines
        assert report.text().count("\n") == len(lines) - 1

    def test_rich_table(self, combined: dict) -> None:
        report = AnalysisReport(colorscheme="lw-rubber", combined=combined, starting_mode=AppearanceMode.BASIC)
        table = report.as_table()
        assert isinstance(table, Table)
        assert len(table.columns) == 7
        assert table.row_count == 4

    def test_report_uses_known_map_by_default(self, combined: dict) -> None:
        report = AnalysisReport(colorscheme="x", combined=combined, starting_mode=AppearanceMode.GUI)
        assert report.known is KNOWN_COLOR_MAP
