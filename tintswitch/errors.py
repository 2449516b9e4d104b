"""Exception types raised inside tintswitch.

None of these escape a mode transition or a font resolution: they are
caught at the operation boundary and turned into warnings.
"""


class TintswitchError(Exception):
    """Base class for tintswitch errors."""


class ProbeFailure(TintswitchError):
    """A font existence check could not complete."""

    def __init__(self, family: str, reason: str) -> None:
        self.family = family
        self.reason = reason
        super().__init__(f"Could not probe font {family!r}: {reason}")


class ThemeApplicationFailure(TintswitchError):
    """Applying a colorscheme or enabling the richer syntax engine failed."""

    def __init__(self, target: str, reason: str) -> None:
        self.target = target
        self.reason = reason
        super().__init__(f"Failed to apply {target}: {reason}")
