"""GUI font selection with cached availability checks.

Fonts are tried in a platform-specific order of preference. Each family is
probed at most once per session: the result (available or not) is cached
under the base family name, with any ``:h<size>`` suffix stripped. If no
candidate is available a hard-coded platform default is used and a single
warning is recorded.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from tintswitch.appearance.environment import Platform, detect_platform
from tintswitch.appearance.notifications import Notifier
from tintswitch.errors import ProbeFailure
from tintswitch.logger import get_logger

if TYPE_CHECKING:
    from tintswitch.appearance.host import EditorHost

logger = get_logger(__name__)

DEFAULT_FONT_SIZE = 13

FONT_VARIANTS: tuple[str, ...] = (
    "Regular", "Bold", "Italic", "BoldItalic", "Medium", "Light",
    "MediumItalic", "LightItalic", "Thin", "ThinItalic", "Heavy", "HeavyItalic",
)  # fmt: skip
FONT_EXTENSIONS: tuple[str, ...] = (".ttf", ".otf")

# Families that ship with the OS and need no file check
BUILTIN_FONTS: dict[Platform, frozenset[str]] = {
    Platform.MACOS: frozenset({"Menlo", "Monaco"}),
    Platform.WINDOWS: frozenset({"Courier New"}),
}

CANDIDATE_FAMILIES: dict[Platform, tuple[str, ...]] = {
    Platform.MACOS: ("SF Mono", "Menlo", "Monaco", "Consolas", "DejaVu Sans Mono"),
    Platform.WINDOWS: ("Consolas", "DejaVu Sans Mono", "Cascadia Mono", "Courier New"),
    Platform.LINUX: ("DejaVu Sans Mono", "Liberation Mono", "Ubuntu Mono", "Noto Sans Mono"),
    Platform.OTHER: ("DejaVu Sans Mono", "Liberation Mono", "Ubuntu Mono", "Noto Sans Mono"),
}

LAST_RESORT_FAMILIES: dict[Platform, str] = {
    Platform.WINDOWS: "Courier New",
}
GENERIC_LAST_RESORT = "monospace"

# Subdirectory depth searched below each font directory (e.g. truetype/dejavu/)
_MAX_SUBDIR_DEPTH = 2


@dataclass(frozen=True)
class FontCandidate:
    """A font family plus a size hint."""

    family: str
    size: int = DEFAULT_FONT_SIZE

    @property
    def spec(self) -> str:
        """The ``Family:h<size>`` form understood by GUI front-ends."""
        return f"{self.family}:h{self.size}"

    @classmethod
    def parse(cls, spec: str, default_size: int = DEFAULT_FONT_SIZE) -> FontCandidate:
        """Parse ``"SF Mono:h13"`` (the size part is optional).

        Args:
            spec: Font spec string.
            default_size: Size used when the spec has none or it is malformed.

        Returns:
            The parsed candidate.
        """
        family, _, rest = spec.partition(":")
        size = default_size
        if rest.startswith("h") and rest[1:].isdigit():
            size = int(rest[1:])
        return cls(family=family.strip(), size=size)

    def __str__(self) -> str:
        return self.spec


def base_family(font: FontCandidate | str) -> str:
    """Strip the size suffix from a font spec."""
    if isinstance(font, FontCandidate):
        return font.family
    return font.partition(":")[0].strip()


def candidates_for(platform: Platform, size: int = DEFAULT_FONT_SIZE) -> tuple[FontCandidate, ...]:
    """Ordered font preferences for a platform."""
    return tuple(FontCandidate(family, size) for family in CANDIDATE_FAMILIES[platform])


def last_resort_for(platform: Platform, size: int = DEFAULT_FONT_SIZE) -> FontCandidate:
    """The font used when no candidate is available."""
    return FontCandidate(LAST_RESORT_FAMILIES.get(platform, GENERIC_LAST_RESORT), size)


def system_font_dirs(platform: Platform, home: Path | None = None, windir: str | None = None) -> list[Path]:
    """Standard font directories for a platform, most specific first.

    Args:
        platform: Platform family.
        home: Home directory, defaults to ``Path.home()``.
        windir: Windows directory, defaults to ``C:\\Windows``.

    Returns:
        Directories to search.
    """
    home_dir = Path.home() if home is None else home
    if platform is Platform.MACOS:
        return [
            home_dir / "Library" / "Fonts",
            Path("/Library/Fonts"),
            Path("/System/Library/Fonts"),
            Path("/System/Library/Fonts/Supplemental"),
        ]
    if platform is Platform.LINUX:
        return [
            home_dir / ".local" / "share" / "fonts",
            home_dir / ".fonts",
            Path("/usr/local/share/fonts"),
            Path("/usr/share/fonts"),
        ]
    if platform is Platform.WINDOWS:
        return [
            Path(windir or "C:\\Windows") / "Fonts",
            home_dir / "AppData" / "Local" / "Microsoft" / "Windows" / "Fonts",
        ]
    return [home_dir / ".fonts", Path("/usr/share/fonts")]


class FontValidationCache:
    """Availability results keyed by base family name.

    Entries are never overwritten by normal use: only ``invalidate`` and
    ``clear`` remove them, which is what an explicit rescan does.
    """

    def __init__(self) -> None:
        self._results: dict[str, bool] = {}

    def get(self, family: str) -> bool | None:
        """Cached result for a family, or None on a miss."""
        return self._results.get(base_family(family))

    def record(self, family: str, available: bool) -> bool:
        """Store a result unless one is already cached.

        Returns:
            The cached value, which is the existing one if there was any.
        """
        key = base_family(family)
        existing = self._results.get(key)
        if existing is not None:
            if existing != available:
                logger.debug(f"Ignoring new result for {key}; cached value is {existing}")
            return existing
        self._results[key] = available
        return available

    def invalidate(self, families: Iterable[str]) -> int:
        """Drop cached results for the given families.

        Returns:
            Number of entries removed.
        """
        removed = 0
        for family in families:
            if self._results.pop(base_family(family), None) is not None:
                removed += 1
        return removed

    def clear(self) -> None:
        """Drop every cached result."""
        self._results.clear()

    def snapshot(self) -> dict[str, bool]:
        """Copy of the cached results."""
        return dict(self._results)

    def __contains__(self, family: object) -> bool:
        return isinstance(family, str) and base_family(family) in self._results

    def __len__(self) -> int:
        return len(self._results)


class Probe(Protocol):
    """Checks whether a font family is installed."""

    def probe(self, family: str, log: list[str] | None = None) -> bool:
        """Return availability; raise ProbeFailure if the check cannot complete."""
        ...


class FontProbe:
    """File-existence based font probe."""

    def __init__(self, platform: Platform, font_dirs: Iterable[Path] | None = None) -> None:
        """Initialize the probe.

        Args:
            platform: Platform whose built-ins and naming rules apply.
            font_dirs: Directories to search, defaults to the platform's standard ones.
        """
        self.platform = platform
        self.font_dirs = list(font_dirs) if font_dirs is not None else system_font_dirs(platform)

    def probe(self, family: str, log: list[str] | None = None) -> bool:
        """Look for a family's font files.

        Args:
            family: Base family name.
            log: Detection log to append to, if verbose output is wanted.

        Returns:
            True if the family is built in or a matching file exists.

        Raises:
            ProbeFailure: If a file check fails with an OS error.
        """
        if family in BUILTIN_FONTS.get(self.platform, frozenset()):
            _note(log, f"Built-in system font: {family} is available by default")
            return True

        _note(log, "Searching system font directories:")
        for font_dir in self.font_dirs:
            _note(log, f"  • {font_dir}")
            try:
                found = self._search_tree(font_dir, family, log)
            except OSError as exc:
                raise ProbeFailure(family, str(exc)) from exc
            if found is not None:
                _note(log, f"  ✓ Found {found}")
                return True

        _note(log, "  ✗ Font not found in any system directories")
        return False

    def _search_tree(self, root: Path, family: str, log: list[str] | None) -> Path | None:
        directories = [root]
        for depth in range(_MAX_SUBDIR_DEPTH + 1):
            next_level: list[Path] = []
            for directory in directories:
                found = self._search_dir(directory, family)
                if found is not None:
                    return found
                if depth < _MAX_SUBDIR_DEPTH:
                    next_level.extend(_subdirectories(directory, log))
            directories = next_level
        return None

    def _search_dir(self, directory: Path, family: str) -> Path | None:
        if not directory.is_dir():
            return None
        for filename in _candidate_filenames(family):
            path = directory / filename
            if path.is_file():
                return path
        return None


def _candidate_filenames(family: str) -> list[str]:
    stems = list(dict.fromkeys((family, family.replace(" ", ""), family.replace(" ", "-"))))
    names: list[str] = []
    for stem in stems:
        for variant in FONT_VARIANTS:
            names.extend(f"{stem}-{variant}{ext}" for ext in FONT_EXTENSIONS)
        names.extend(f"{stem}{ext}" for ext in FONT_EXTENSIONS)
    return names


def _subdirectories(directory: Path, log: list[str] | None) -> list[Path]:
    if not directory.is_dir():
        return []
    try:
        return sorted(child for child in directory.iterdir() if child.is_dir())
    except PermissionError:
        _note(log, f"  ! Skipping unreadable directory {directory}")
        return []


def _note(log: list[str] | None, message: str) -> None:
    if log is not None:
        log.append(message)


@dataclass(frozen=True)
class FontResolution:
    """Outcome of a font resolution."""

    font: FontCandidate
    first_choice: bool
    last_resort: bool


class FontResolver:
    """Picks the first available font from a platform's preference list."""

    def __init__(
        self,
        platform: Platform | None = None,
        *,
        cache: FontValidationCache | None = None,
        probe: Probe | None = None,
        candidates: Iterable[FontCandidate | str] | None = None,
        size: int = DEFAULT_FONT_SIZE,
        notifier: Notifier | None = None,
        debug: bool = False,
    ) -> None:
        """Initialize the resolver.

        Args:
            platform: Platform to resolve for, detected when omitted.
            cache: Validation cache, shared between resolvers if injected.
            probe: Availability probe, defaults to file checks for ``platform``.
            candidates: Preference list overriding the platform default.
            size: Size hint for default candidates and the last resort.
            notifier: Where warnings and font notices go.
            debug: Record a per-family detection log and always announce the font.
        """
        self.platform = platform if platform is not None else detect_platform()
        self.cache = cache if cache is not None else FontValidationCache()
        self.notifier = notifier if notifier is not None else Notifier()
        self.debug = debug
        self._probe: Probe = probe if probe is not None else FontProbe(self.platform)
        self._size = size
        if candidates is None:
            self._candidates = candidates_for(self.platform, size)
        else:
            self._candidates = tuple(
                c if isinstance(c, FontCandidate) else FontCandidate.parse(c, size) for c in candidates
            )
        self.detection_log: dict[str, list[str]] = {}
        self.probe_count = 0

    @property
    def candidates(self) -> tuple[FontCandidate, ...]:
        """The preference list, most preferred first."""
        return self._candidates

    def is_available(self, font: FontCandidate | str) -> bool:
        """Check a font, probing only on a cache miss.

        Probe failures count as unavailable and are reported as warnings.
        """
        family = base_family(font)
        log = self.detection_log.setdefault(family, []) if self.debug else None
        _note(log, f"Checking availability of font: {family}")

        cached = self.cache.get(family)
        if cached is not None:
            _note(log, f"Using cached result: {'Available' if cached else 'Not available'}")
            return cached

        self.probe_count += 1
        try:
            available = self._probe.probe(family, log)
        except ProbeFailure as exc:
            self.notifier.warning(f"{exc}; treating it as unavailable")
            available = False

        _note(log, "✓ Font found and marked as available" if available else "Cached as unavailable for future checks")
        return self.cache.record(family, available)

    def resolve(self) -> FontResolution:
        """Find the best available font.

        Returns:
            The chosen font and how it was chosen.
        """
        for position, candidate in enumerate(self._candidates):
            if self.is_available(candidate):
                logger.debug(f"Resolved font {candidate.spec} (preference {position + 1})")
                return FontResolution(font=candidate, first_choice=position == 0, last_resort=False)

        fallback = last_resort_for(self.platform, self._size)
        self.notifier.warning(f"No preferred fonts available, using system default {fallback.spec}")
        return FontResolution(font=fallback, first_choice=False, last_resort=True)

    def resolve_best_font(self) -> FontCandidate:
        """Return the best available font for this resolver's platform."""
        return self.resolve().font

    def apply_best_font(self, host: EditorHost) -> FontResolution:
        """Resolve a font and apply it to the host's display surface.

        An informational notice is shown when a fallback was chosen or when
        debug is on.

        Args:
            host: Editor host to apply the font to.

        Returns:
            The resolution that was applied.
        """
        resolution = self.resolve()
        try:
            host.set_font(resolution.font.spec)
        except Exception as exc:
            self.notifier.warning(f"Could not apply font {resolution.font.spec}: {exc}")
            return resolution

        if self.debug or (not resolution.first_choice and not resolution.last_resort):
            self.notifier.info(f"Using font: {resolution.font.spec}")
        return resolution

    def revalidate(self) -> dict[str, bool]:
        """Forget cached results for every candidate and probe them all again.

        Returns:
            Availability per candidate family, in preference order.
        """
        families = [candidate.family for candidate in self._candidates]
        removed = self.cache.invalidate(families)
        for family in families:
            self.detection_log.pop(family, None)
        logger.info(f"Re-validating {len(families)} fonts ({removed} cached results cleared)")
        return {family: self.is_available(family) for family in families}
