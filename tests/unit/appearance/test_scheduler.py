"""Tests for one-shot continuations."""

import asyncio

from tests.fakes import FakeScheduler
from tintswitch.appearance.scheduler import LoopScheduler, SingleShot


class TestSingleShot:
    """Tests for SingleShot."""

    def test_runs_once_after_delay(self, scheduler: FakeScheduler) -> None:
        shot = SingleShot(scheduler)
        ran: list[int] = []
        shot.schedule(0.5, lambda: ran.append(1))

        assert shot.pending
        assert scheduler.advance(0.4) == 0
        assert scheduler.advance(0.1) == 1
        assert ran == [1]
        assert not shot.pending
        assert scheduler.advance(10) == 0

    def test_schedule_supersedes_pending(self, scheduler: FakeScheduler) -> None:
        shot = SingleShot(scheduler)
        events: list[str] = []
        shot.schedule(0.5, lambda: events.append("first"), on_cancel=lambda: events.append("first cancelled"))
        shot.schedule(0.5, lambda: events.append("second"))

        scheduler.advance(1)

        assert events == ["first cancelled", "second"]
        assert len(scheduler.handles) == 1
        assert scheduler.handles[0].cancelled

    def test_cancel(self, scheduler: FakeScheduler) -> None:
        shot = SingleShot(scheduler)
        cancelled: list[bool] = []
        shot.schedule(0.5, lambda: None, on_cancel=lambda: cancelled.append(True))

        assert shot.cancel() is True
        assert shot.cancel() is False
        assert cancelled == [True]
        assert scheduler.pending == []

    def test_callback_may_schedule_follow_up(self, scheduler: FakeScheduler) -> None:
        shot = SingleShot(scheduler)
        events: list[str] = []

        def first() -> None:
            events.append("first")
            shot.schedule(0.5, lambda: events.append("second"))

        shot.schedule(0.5, first, on_cancel=lambda: events.append("cancelled"))
        scheduler.advance(1)

        assert events == ["first", "second"]

    def test_on_cancel_not_called_after_firing(self, scheduler: FakeScheduler) -> None:
        shot = SingleShot(scheduler)
        events: list[str] = []
        shot.schedule(0.1, lambda: events.append("ran"), on_cancel=lambda: events.append("cancelled"))
        scheduler.advance(0.1)
        shot.cancel()
        assert events == ["ran"]


class TestLoopScheduler:
    """Tests for the asyncio-backed scheduler."""

    async def test_uses_running_loop(self) -> None:
        done = asyncio.Event()
        LoopScheduler().call_later(0.01, done.set)
        await asyncio.wait_for(done.wait(), timeout=1)

    async def test_explicit_loop_and_cancel(self) -> None:
        ran: list[bool] = []
        handle = LoopScheduler(asyncio.get_running_loop()).call_later(0.01, lambda: ran.append(True))
        handle.cancel()
        await asyncio.sleep(0.05)
        assert ran == []

    async def test_single_shot_on_loop(self) -> None:
        done = asyncio.Event()
        SingleShot(LoopScheduler(), name="test").schedule(0.01, done.set)
        await asyncio.wait_for(done.wait(), timeout=1)
