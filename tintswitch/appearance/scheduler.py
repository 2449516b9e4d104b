"""One-shot deferred continuations.

Everything in tintswitch runs on a single thread. Work that has to wait
(letting a redraw settle before sampling highlights, auto-closing a
transient message) is scheduled as a continuation with a cancel handle
instead of sleeping.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Protocol

from tintswitch.logger import get_logger

logger = get_logger(__name__)


class Cancellable(Protocol):
    """Handle returned for a scheduled continuation."""

    def cancel(self) -> object:
        """Prevent the continuation from running."""
        ...


class Scheduler(Protocol):
    """Something that can run a callback once after a delay."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> Cancellable:
        """Schedule ``callback`` to run once after ``delay`` seconds."""
        ...


class LoopScheduler:
    """Scheduler backed by the running asyncio event loop.

    The loop is looked up at scheduling time, so one instance can be shared
    by the Textual front-end and ``asyncio.run`` based CLI commands.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)


class SingleShot:
    """Holds at most one pending continuation.

    Scheduling again supersedes (cancels) the pending continuation rather
    than queueing a second one.
    """

    def __init__(self, scheduler: Scheduler, name: str = "continuation") -> None:
        self._scheduler = scheduler
        self._name = name
        self._handle: Cancellable | None = None
        self._on_cancel: Callable[[], None] | None = None

    @property
    def pending(self) -> bool:
        """Whether a continuation is waiting to run."""
        return self._handle is not None

    def schedule(
        self,
        delay: float,
        callback: Callable[[], None],
        on_cancel: Callable[[], None] | None = None,
    ) -> None:
        """Schedule ``callback``, cancelling whatever was pending.

        Args:
            delay: Seconds to wait.
            callback: Continuation to run.
            on_cancel: Called if this continuation is later superseded or cancelled.
        """
        self.cancel()

        def fire() -> None:
            # Clear first so the callback may schedule a follow-up
            self._handle = None
            self._on_cancel = None
            callback()

        self._on_cancel = on_cancel
        self._handle = self._scheduler.call_later(delay, fire)
        logger.debug(f"Scheduled {self._name} in {delay:.3f}s")

    def cancel(self) -> bool:
        """Cancel the pending continuation, if any.

        Returns:
            True if something was cancelled.
        """
        if self._handle is None:
            return False
        handle, on_cancel = self._handle, self._on_cancel
        self._handle = None
        self._on_cancel = None
        handle.cancel()
        logger.debug(f"Cancelled pending {self._name}")
        if on_cancel is not None:
            on_cancel()
        return True
