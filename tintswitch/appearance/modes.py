"""The Basic/GUI appearance state machine.

The engine owns a single current-mode value and one guarded transition
function. Entering Basic mode turns off true color and applies the static
256-color table; entering GUI mode turns true color on, picks a font,
loads the colorscheme and enables the richer syntax engine. Failures in
any of those steps are reported as warnings and never roll the mode back.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum

from tintswitch.appearance.environment import is_gui_environment
from tintswitch.appearance.fonts import FontResolution, FontResolver
from tintswitch.appearance.host import EditorHost
from tintswitch.appearance.notifications import Notifier
from tintswitch.appearance.scheduler import Scheduler, SingleShot
from tintswitch.color.highlights import BASIC_HIGHLIGHTS
from tintswitch.errors import ThemeApplicationFailure
from tintswitch.logger import get_logger
from tintswitch.models import AppearanceMode
from tintswitch.themes import DEFAULT_COLORSCHEME

logger = get_logger(__name__)

ModeListener = Callable[[AppearanceMode], None]


class TransitionStatus(Enum):
    """How a transition request ended."""

    APPLIED = "applied"
    PARTIAL = "partial"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class TransitionResult:
    """Outcome of a transition request."""

    mode: AppearanceMode
    previous: AppearanceMode
    status: TransitionStatus
    warnings: tuple[str, ...] = ()
    font: FontResolution | None = None

    @property
    def changed(self) -> bool:
        """Whether the mode value actually changed."""
        return self.status is not TransitionStatus.SKIPPED and self.mode is not self.previous

    @property
    def ok(self) -> bool:
        """Whether every step succeeded."""
        return self.status is TransitionStatus.APPLIED


class ModeEngine:
    """Two-state appearance machine driving an editor host.

    The mode starts as BASIC. ``startup`` may auto-switch to GUI once when a
    graphical host is detected; after that only explicit transition
    requests change the mode.
    """

    def __init__(
        self,
        host: EditorHost,
        font_resolver: FontResolver | None = None,
        *,
        notifier: Notifier | None = None,
        scheduler: Scheduler | None = None,
        colorscheme: str = DEFAULT_COLORSCHEME,
        force_terminal: bool = False,
    ) -> None:
        """Initialize the engine in BASIC mode.

        Args:
            host: The editor host to drive.
            font_resolver: Resolver consulted on every GUI transition. When
                omitted, GUI transitions leave the font alone.
            notifier: Destination for warnings and mode messages.
            scheduler: Scheduler for deferred continuations.
            colorscheme: Colorscheme loaded in GUI mode.
            force_terminal: Pin the terminal mode; auto-detection will not switch to GUI.
        """
        self.host = host
        self.font_resolver = font_resolver
        self.notifier = notifier if notifier is not None else Notifier()
        self.colorscheme = colorscheme
        self.force_terminal = force_terminal
        self._mode = AppearanceMode.BASIC
        self._in_progress = False
        self._started = False
        self._auto_detected = False
        self._listeners: list[ModeListener] = []
        self._deferred = SingleShot(scheduler, name="mode continuation") if scheduler is not None else None
        self._guarded("disable true color", lambda: host.set_true_color(False), [])

    @property
    def mode(self) -> AppearanceMode:
        """The active mode."""
        return self._mode

    @property
    def in_progress(self) -> bool:
        """Whether a transition is running right now."""
        return self._in_progress

    @property
    def started(self) -> bool:
        """Whether startup has completed."""
        return self._started

    def subscribe(self, listener: ModeListener) -> Callable[[], None]:
        """Listen for the "mode applied" event.

        Args:
            listener: Called with the new mode after every completed transition.

        Returns:
            A callable that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def startup(self, env: Mapping[str, str] | None = None, *, gui_flag: bool = False) -> TransitionResult | None:
        """Finish startup, switching to GUI once if a graphical host is detected.

        Only the first call does anything; later environment changes do not
        trigger detection again.

        Args:
            env: Environment to inspect, defaults to ``os.environ``.
            gui_flag: Explicit GUI signal from the host.

        Returns:
            The auto-transition result, or None if none happened.
        """
        if self._auto_detected:
            return None
        self._auto_detected = True

        result: TransitionResult | None = None
        try:
            if self.force_terminal:
                logger.info("Terminal mode pinned; skipping GUI auto-detection")
            elif self._in_progress:
                logger.info("Transition in flight; skipping GUI auto-detection")
            elif is_gui_environment(env, gui_flag=gui_flag or self.host.is_gui()):
                logger.info("GUI environment detected, switching to GUI mode")
                with self.notifier.quiet():
                    result = self.transition(AppearanceMode.GUI)
        finally:
            self._started = True
        return result

    def enter_basic(self) -> TransitionResult:
        """Switch to Basic (256-color) mode."""
        return self.transition(AppearanceMode.BASIC)

    def enter_gui(self) -> TransitionResult:
        """Switch to GUI (true color) mode."""
        return self.transition(AppearanceMode.GUI)

    def transition(self, target: AppearanceMode, *, with_font: bool = True) -> TransitionResult:
        """Apply ``target`` and its side effects.

        Re-entering the current mode is safe: the side effects are applied
        again and the state stays consistent. A request made while another
        transition is running is skipped. A host error in any step becomes
        a warning and the result is PARTIAL.

        Args:
            target: Mode to enter.
            with_font: Resolve and apply a font when entering GUI mode.
                Temporary switches such as color analysis turn this off.

        Returns:
            The outcome, including any warnings raised along the way.
        """
        previous = self._mode
        if self._in_progress:
            logger.warning(f"Ignoring request for {target.value}: a transition is already running")
            return TransitionResult(mode=previous, previous=previous, status=TransitionStatus.SKIPPED)

        self._in_progress = True
        warnings: list[str] = []
        font: FontResolution | None = None
        try:
            self.cancel_deferred()
            if target is AppearanceMode.BASIC:
                self._apply_basic(previous, warnings)
            else:
                font = self._apply_gui(warnings, with_font=with_font)
        finally:
            self._in_progress = False

        status = TransitionStatus.PARTIAL if warnings else TransitionStatus.APPLIED
        result = TransitionResult(
            mode=self._mode,
            previous=previous,
            status=status,
            warnings=tuple(warnings),
            font=font,
        )
        logger.info(f"Transition {previous.value} -> {self._mode.value}: {status.value}")
        self._fire_mode_applied()
        if self._started:
            if target is AppearanceMode.BASIC:
                self.notifier.info("Basic color mode applied")
            else:
                self.notifier.info("Switched to GUI mode with rich syntax highlighting")
        return result

    def defer(
        self,
        delay: float,
        callback: Callable[[], None],
        on_cancel: Callable[[], None] | None = None,
    ) -> None:
        """Schedule a continuation tied to the current mode.

        A pending continuation is superseded by a new one and cancelled by
        the next transition request. The callback should read ``mode`` when
        it runs rather than rely on values captured now.

        Args:
            delay: Seconds to wait.
            callback: Continuation to run.
            on_cancel: Called if the continuation is superseded or cancelled.

        Raises:
            RuntimeError: If the engine was created without a scheduler.
        """
        if self._deferred is None:
            msg = "ModeEngine has no scheduler for deferred work"
            raise RuntimeError(msg)
        self._deferred.schedule(delay, callback, on_cancel)

    def cancel_deferred(self) -> bool:
        """Cancel the pending continuation, if any."""
        if self._deferred is None:
            return False
        return self._deferred.cancel()

    @property
    def has_deferred(self) -> bool:
        """Whether a continuation is pending."""
        return self._deferred is not None and self._deferred.pending

    def _apply_basic(self, previous: AppearanceMode, warnings: list[str]) -> None:
        self._guarded("disable rich syntax highlighting", self.host.disable_rich_syntax, warnings)
        self._guarded("disable true color", lambda: self.host.set_true_color(False), warnings)
        self._mode = AppearanceMode.BASIC

        if self.host.is_headless():
            logger.debug("Headless host; skipping Basic highlight table")
            return

        self._guarded("apply the Basic highlight table", self._apply_basic_table, warnings)

        if previous is AppearanceMode.GUI:
            self._guarded("refresh the display", self.host.refresh_display, warnings)

    def _apply_basic_table(self) -> None:
        self.host.clear_highlights()
        for highlight in BASIC_HIGHLIGHTS:
            self.host.apply_highlight(highlight)
        logger.debug(f"Applied {len(BASIC_HIGHLIGHTS)} Basic highlight groups")

    def _apply_gui(self, warnings: list[str], *, with_font: bool) -> FontResolution | None:
        self._mode = AppearanceMode.GUI
        self._guarded("enable true color", lambda: self.host.set_true_color(True), warnings)

        font: FontResolution | None = None
        if self.font_resolver is not None and with_font:
            try:
                font = self.font_resolver.apply_best_font(self.host)
            except Exception as exc:
                self._warn(f"Font selection failed: {exc}", warnings)

        self._guarded(
            f"apply colorscheme {self.colorscheme}",
            lambda: self.host.apply_colorscheme(self.colorscheme),
            warnings,
        )
        self._guarded("enable rich syntax highlighting", self.host.enable_rich_syntax, warnings)
        return font

    def _guarded(self, what: str, action: Callable[[], None], warnings: list[str]) -> None:
        try:
            action()
        except Exception as exc:
            reason = exc.reason if isinstance(exc, ThemeApplicationFailure) else str(exc)
            self._warn(f"Could not {what}: {reason}", warnings)

    def _warn(self, message: str, warnings: list[str]) -> None:
        warnings.append(message)
        self.notifier.warning(message)

    def _fire_mode_applied(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self._mode)
            except Exception:
                logger.exception(f"Mode listener failed for {self._mode.value}")
