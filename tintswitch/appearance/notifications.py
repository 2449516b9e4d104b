"""User-visible notifications with a bounded history.

Warnings and errors stay on screen until dismissed. Informational messages
are transient: each one replaces the previous and closes itself after a
short timeout. Every notification is also appended to a history of at most
``MAX_HISTORY`` entries (oldest evicted first) and written to the log.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from tintswitch.appearance.scheduler import Scheduler, SingleShot
from tintswitch.logger import get_logger

logger = get_logger(__name__)

MAX_HISTORY = 100
TRANSIENT_TIMEOUT = 3.0


class Severity(Enum):
    """Notification severities, named after the loguru levels they log at."""

    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"

    @property
    def textual(self) -> str:
        """The matching Textual ``notify`` severity."""
        return "information" if self is Severity.INFO else self.value.lower()


@dataclass
class Notification:
    """A single message shown to the user."""

    message: str
    severity: Severity
    persistent: bool
    timestamp: datetime = field(default_factory=datetime.now)
    dismissed: bool = False


NotificationListener = Callable[[Notification], None]


class NotificationHistory:
    """Append-only, size-bounded record of notifications."""

    def __init__(self, max_entries: int = MAX_HISTORY) -> None:
        if max_entries < 1:
            msg = f"History must hold at least one entry, got {max_entries}"
            raise ValueError(msg)
        self._entries: deque[Notification] = deque(maxlen=max_entries)

    @property
    def max_entries(self) -> int:
        """Capacity of the history."""
        return self._entries.maxlen or 0

    def append(self, notification: Notification) -> None:
        """Record a notification, evicting the oldest when full."""
        self._entries.append(notification)

    def entries(self, severity: Severity | None = None) -> list[Notification]:
        """Recorded notifications, oldest first, optionally filtered by severity."""
        if severity is None:
            return list(self._entries)
        return [entry for entry in self._entries if entry.severity is severity]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Notification]:
        return iter(list(self._entries))


class Notifier:
    """Routes notifications to the log, the history and any listeners."""

    def __init__(
        self,
        history: NotificationHistory | None = None,
        scheduler: Scheduler | None = None,
        transient_timeout: float = TRANSIENT_TIMEOUT,
    ) -> None:
        """Initialize the notifier.

        Args:
            history: History to append to. A fresh one is created if omitted.
            scheduler: Used for auto-closing transient messages. Without one,
                transient messages stay current until replaced.
            transient_timeout: Seconds before a transient message closes.
        """
        self.history = history if history is not None else NotificationHistory()
        self._transient_timeout = transient_timeout
        self._close_timer = SingleShot(scheduler, name="notification auto-close") if scheduler else None
        self._listeners: list[NotificationListener] = []
        self._current: Notification | None = None
        self._quiet = 0

    @property
    def current(self) -> Notification | None:
        """The transient message currently on display, if any."""
        return self._current

    def subscribe(self, listener: NotificationListener) -> Callable[[], None]:
        """Register a listener.

        Returns:
            A callable that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def quiet(self) -> _QuietContext:
        """Context manager that suppresses informational messages.

        Warnings and errors are still delivered.
        """
        return _QuietContext(self)

    def info(self, message: str) -> Notification | None:
        """Show a transient informational message."""
        return self.notify(message, Severity.INFO)

    def warning(self, message: str) -> Notification | None:
        """Show a persistent warning."""
        return self.notify(message, Severity.WARNING)

    def error(self, message: str) -> Notification | None:
        """Show a persistent error."""
        return self.notify(message, Severity.ERROR)

    def notify(self, message: str, severity: Severity = Severity.INFO) -> Notification | None:
        """Log, record and deliver a notification.

        Args:
            message: Text to show.
            severity: Notification severity.

        Returns:
            The notification, or None if it was suppressed.
        """
        logger.log(severity.value, message)
        if severity is Severity.INFO and self._quiet:
            return None

        notification = Notification(message=message, severity=severity, persistent=severity is not Severity.INFO)
        self.history.append(notification)

        if not notification.persistent:
            self._show_transient(notification)

        for listener in list(self._listeners):
            try:
                listener(notification)
            except Exception:
                logger.exception("Notification listener failed")
        return notification

    def pending(self) -> list[Notification]:
        """Persistent notifications that have not been dismissed yet."""
        return [entry for entry in self.history if entry.persistent and not entry.dismissed]

    def dismiss(self, notification: Notification) -> None:
        """Dismiss a notification."""
        notification.dismissed = True
        if notification is self._current:
            self._close_current()

    def dismiss_all(self) -> int:
        """Dismiss every pending notification.

        Returns:
            Number of notifications dismissed.
        """
        pending = self.pending()
        for entry in pending:
            entry.dismissed = True
        return len(pending)

    def _show_transient(self, notification: Notification) -> None:
        self._current = notification
        if self._close_timer is not None:
            # SingleShot cancels the previous auto-close before arming a new one
            self._close_timer.schedule(self._transient_timeout, self._close_current)

    def _close_current(self) -> None:
        if self._close_timer is not None:
            self._close_timer.cancel()
        if self._current is not None:
            self._current.dismissed = True
            self._current = None


class _QuietContext:
    def __init__(self, notifier: Notifier) -> None:
        self._notifier = notifier

    def __enter__(self) -> Notifier:
        self._notifier._quiet += 1  # noqa: SLF001
        return self._notifier

    def __exit__(self, *exc_info: object) -> None:
        self._notifier._quiet -= 1  # noqa: SLF001
