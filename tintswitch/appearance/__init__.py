"""Appearance mode switching, font resolution and notifications."""

from tintswitch.appearance.environment import Platform, detect_platform, is_gui_environment
from tintswitch.appearance.fonts import FontCandidate, FontProbe, FontResolver, FontValidationCache
from tintswitch.appearance.host import EditorHost, MemoryHost
from tintswitch.appearance.modes import ModeEngine, TransitionResult, TransitionStatus
from tintswitch.appearance.notifications import Notification, NotificationHistory, Notifier, Severity
from tintswitch.appearance.scheduler import LoopScheduler, Scheduler, SingleShot

__all__ = [
    "EditorHost",
    "FontCandidate",
    "FontProbe",
    "FontResolver",
    "FontValidationCache",
    "LoopScheduler",
    "MemoryHost",
    "ModeEngine",
    "Notification",
    "NotificationHistory",
    "Notifier",
    "Platform",
    "Scheduler",
    "Severity",
    "SingleShot",
    "TransitionResult",
    "TransitionStatus",
    "detect_platform",
    "is_gui_environment",
]
