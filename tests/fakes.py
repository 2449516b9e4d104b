"""Deterministic stand-ins for the scheduler, font probe and host."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from tintswitch.appearance.host import MemoryHost
from tintswitch.errors import ProbeFailure, ThemeApplicationFailure
from tintswitch.models import TerminalHighlight


class FakeHandle:
    """Cancel handle returned by FakeScheduler."""

    def __init__(self, due: float, callback: Callable[[], None]) -> None:
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Manual clock: callbacks run only when ``advance`` passes their due time."""

    def __init__(self) -> None:
        self.now = 0.0
        self.handles: list[FakeHandle] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> FakeHandle:
        handle = FakeHandle(self.now + delay, callback)
        self.handles.append(handle)
        return handle

    @property
    def pending(self) -> list[FakeHandle]:
        return [handle for handle in self.handles if not handle.cancelled]

    def advance(self, seconds: float) -> int:
        """Move the clock forward and run everything that became due.

        Returns:
            Number of callbacks run.
        """
        target = self.now + seconds
        ran = 0
        while True:
            due = sorted(
                (h for h in self.handles if not h.cancelled and h.due <= target),
                key=lambda h: h.due,
            )
            if not due:
                break
            handle = due[0]
            self.handles.remove(handle)
            self.now = handle.due
            handle.callback()
            ran += 1
        self.now = target
        return ran


class CountingProbe:
    """Font probe answering from fixed sets and counting calls."""

    def __init__(self, available: Iterable[str] = (), failing: Iterable[str] = ()) -> None:
        self.available = set(available)
        self.failing = set(failing)
        self.calls: list[str] = []

    def probe(self, family: str, log: list[str] | None = None) -> bool:
        self.calls.append(family)
        if log is not None:
            log.append(f"probed {family}")
        if family in self.failing:
            raise ProbeFailure(family, "permission denied")
        return family in self.available

    def count(self, family: str) -> int:
        return self.calls.count(family)


class BrokenFontHost(MemoryHost):
    """Host whose font setter always fails."""

    def set_font(self, font: str) -> None:
        raise ThemeApplicationFailure(f"font {font}", "display surface unavailable")


class ExplodingHost(MemoryHost):
    """Host that raises when switching true color on, to simulate a failed switch."""

    def set_true_color(self, enabled: bool) -> None:
        if enabled:
            msg = "true color unsupported"
            raise RuntimeError(msg)
        super().set_true_color(enabled)


class RejectingHighlightHost(MemoryHost):
    """Host that refuses every highlight definition."""

    def apply_highlight(self, highlight: TerminalHighlight) -> None:
        msg = "highlight rejected"
        raise RuntimeError(msg)
