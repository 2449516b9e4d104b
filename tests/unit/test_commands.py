"""Tests for the shared command surface."""

import pytest

from tests.fakes import CountingProbe, FakeScheduler
from tintswitch.appearance.environment import Platform
from tintswitch.appearance.fonts import FontResolver
from tintswitch.appearance.host import MemoryHost
from tintswitch.appearance.modes import ModeEngine
from tintswitch.appearance.notifications import Notifier, Severity
from tintswitch.color.analyze import ColorAnalyzer
from tintswitch.commands import Commands
from tintswitch.models import AppearanceMode
from tintswitch.settings import Settings


@pytest.fixture
def commands(engine: ModeEngine, resolver: FontResolver) -> Commands:
    """Commands wired to the fake scheduler and probe."""
    return Commands(engine, resolver, ColorAnalyzer(engine))


class TestFromSettings:
    """Tests for Commands.from_settings."""

    def test_wires_settings_through(self, scheduler: FakeScheduler) -> None:
        settings = Settings(
            colorscheme="lw-dark",
            force_terminal_mode=True,
            debug_fonts=True,
            platform="windows",
            font_size=10,
            settle_delay_ms=500,
        )
        host = MemoryHost()
        commands = Commands.from_settings(settings, host=host, scheduler=scheduler)

        assert commands.engine.host is host
        assert commands.engine.colorscheme == "lw-dark"
        assert commands.engine.force_terminal
        assert commands.font_resolver.platform is Platform.WINDOWS
        assert commands.font_resolver.debug
        assert commands.font_resolver.candidates[0].spec == "Consolas:h10"
        assert commands.analyzer.settle_delay == pytest.approx(0.5)
        assert commands.analyzer.engine is commands.engine

    def test_shares_one_notifier(self, scheduler: FakeScheduler) -> None:
        notifier = Notifier()
        commands = Commands.from_settings(Settings(), scheduler=scheduler, notifier=notifier)
        assert commands.notifier is notifier
        assert commands.font_resolver.notifier is notifier

    def test_does_not_run_startup(self, scheduler: FakeScheduler) -> None:
        commands = Commands.from_settings(Settings(), scheduler=scheduler)
        assert not commands.engine.started
        assert commands.engine.mode is AppearanceMode.BASIC


class TestModeCommands:
    """Tests for the mode operations."""

    def test_enter_modes(self, commands: Commands) -> None:
        assert commands.enter_gui_mode().mode is AppearanceMode.GUI
        assert commands.enter_basic_mode().mode is AppearanceMode.BASIC

    def test_toggle(self, commands: Commands) -> None:
        assert commands.toggle_mode().mode is AppearanceMode.GUI
        assert commands.toggle_mode().mode is AppearanceMode.BASIC

    async def test_analyze_colors(self, notifier: Notifier) -> None:
        from tintswitch.appearance.scheduler import LoopScheduler

        engine = ModeEngine(MemoryHost(), notifier=notifier, scheduler=LoopScheduler())
        resolver = FontResolver(Platform.LINUX, probe=CountingProbe(), notifier=notifier)
        commands = Commands(engine, resolver, ColorAnalyzer(engine, settle_delay=0.01))
        commands.enter_basic_mode()

        report = await commands.analyze_colors()

        assert not report.limited
        assert "Normal" in report.combined


class TestFontCommands:
    """Tests for the font operations."""

    def test_resolve_font_does_not_apply(self, commands: Commands, host: MemoryHost) -> None:
        assert commands.resolve_font().spec == "DejaVu Sans Mono:h13"
        assert host.font is None

    def test_rescan_fonts(self, commands: Commands, probe: CountingProbe, notifier: Notifier) -> None:
        commands.resolve_font()
        probe.available.add("Noto Sans Mono")

        results = commands.rescan_fonts()

        assert results["Noto Sans Mono"] is True
        assert probe.count("DejaVu Sans Mono") == 2
        infos = [entry.message for entry in notifier.history.entries(Severity.INFO)]
        assert infos == ["Font rescan complete: 2 of 4 candidates available"]
