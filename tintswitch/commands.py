"""The command surface shared by the TUI and the CLI.

``Commands`` wires a host, a notifier, a font resolver, the mode engine and
the color analyzer together from ``Settings`` and exposes the handful of
operations a user can trigger.
"""

from __future__ import annotations

from tintswitch.appearance.fonts import FontCandidate, FontResolver
from tintswitch.appearance.host import EditorHost, MemoryHost
from tintswitch.appearance.modes import ModeEngine, TransitionResult
from tintswitch.appearance.notifications import Notifier
from tintswitch.appearance.scheduler import LoopScheduler, Scheduler
from tintswitch.color.analyze import AnalysisReport, ColorAnalyzer
from tintswitch.logger import get_logger
from tintswitch.settings import Settings

logger = get_logger(__name__)


class Commands:
    """User-facing operations over one appearance session."""

    def __init__(
        self,
        engine: ModeEngine,
        font_resolver: FontResolver,
        analyzer: ColorAnalyzer,
    ) -> None:
        self.engine = engine
        self.font_resolver = font_resolver
        self.analyzer = analyzer

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        host: EditorHost | None = None,
        scheduler: Scheduler | None = None,
        notifier: Notifier | None = None,
    ) -> Commands:
        """Build a session from settings.

        Args:
            settings: Validated settings, environment overrides included.
            host: Editor host to drive, defaults to an in-memory host.
            scheduler: Scheduler for deferred work, defaults to the running
                asyncio loop.
            notifier: Notifier to share, created on ``scheduler`` if omitted.

        Returns:
            A ready-to-use command surface. The engine has not run startup yet.
        """
        scheduler = scheduler if scheduler is not None else LoopScheduler()
        notifier = notifier if notifier is not None else Notifier(scheduler=scheduler)
        resolver = FontResolver(
            settings.resolved_platform,
            size=settings.font_size,
            notifier=notifier,
            debug=settings.debug_fonts,
        )
        engine = ModeEngine(
            host if host is not None else MemoryHost(),
            resolver,
            notifier=notifier,
            scheduler=scheduler,
            colorscheme=settings.colorscheme,
            force_terminal=settings.force_terminal_mode,
        )
        analyzer = ColorAnalyzer(engine, settle_delay=settings.settle_delay)
        logger.debug(f"Session ready for {resolver.platform.value} with colorscheme {settings.colorscheme}")
        return cls(engine, resolver, analyzer)

    @property
    def notifier(self) -> Notifier:
        """The session notifier."""
        return self.engine.notifier

    def enter_basic_mode(self) -> TransitionResult:
        """Switch to Basic (256-color) mode."""
        return self.engine.enter_basic()

    def enter_gui_mode(self) -> TransitionResult:
        """Switch to GUI (true color) mode."""
        return self.engine.enter_gui()

    def toggle_mode(self) -> TransitionResult:
        """Switch to whichever mode is not active."""
        return self.engine.transition(self.engine.mode.other)

    async def analyze_colors(self) -> AnalysisReport:
        """Compare the highlight groups of both modes."""
        return await self.analyzer.analyze()

    def resolve_font(self) -> FontCandidate:
        """Return the best available font without applying it."""
        return self.font_resolver.resolve_best_font()

    def rescan_fonts(self) -> dict[str, bool]:
        """Forget cached font checks and probe every candidate again.

        Returns:
            Availability per candidate family, in preference order.
        """
        results = self.font_resolver.revalidate()
        available = [family for family, ok in results.items() if ok]
        self.notifier.info(f"Font rescan complete: {len(available)} of {len(results)} candidates available")
        return results
