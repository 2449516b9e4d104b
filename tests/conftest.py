"""Shared test fixtures for tintswitch."""

from pathlib import Path

import pytest

from tests.fakes import CountingProbe, FakeScheduler
from tintswitch.appearance.environment import GUI_ENV_MARKERS, Platform
from tintswitch.appearance.fonts import FontResolver, FontValidationCache
from tintswitch.appearance.host import MemoryHost
from tintswitch.appearance.modes import ModeEngine
from tintswitch.appearance.notifications import Notifier


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep tests away from the real config directory and GUI markers."""
    monkeypatch.setenv("TINTSWITCH_CONFIG_DIR", str(tmp_path / "config"))
    for name in (*GUI_ENV_MARKERS, "TINTSWITCH_FORCE_TERMINAL", "TINTSWITCH_DEBUG_FONTS", "TINTSWITCH_PLATFORM"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def scheduler() -> FakeScheduler:
    """A manually advanced scheduler."""
    return FakeScheduler()


@pytest.fixture
def notifier(scheduler: FakeScheduler) -> Notifier:
    """A notifier whose transient messages close on the fake clock."""
    return Notifier(scheduler=scheduler)


@pytest.fixture
def host() -> MemoryHost:
    """An in-memory editor host."""
    return MemoryHost()


@pytest.fixture
def probe() -> CountingProbe:
    """Probe where only DejaVu Sans Mono is installed."""
    return CountingProbe(available={"DejaVu Sans Mono"})


@pytest.fixture
def resolver(probe: CountingProbe, notifier: Notifier) -> FontResolver:
    """Linux font resolver backed by the counting probe."""
    return FontResolver(Platform.LINUX, cache=FontValidationCache(), probe=probe, notifier=notifier)


@pytest.fixture
def engine(host: MemoryHost, resolver: FontResolver, notifier: Notifier, scheduler: FakeScheduler) -> ModeEngine:
    """Mode engine wired to the fakes."""
    return ModeEngine(host, resolver, notifier=notifier, scheduler=scheduler)
