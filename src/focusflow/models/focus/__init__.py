"""Focus mode - Pomodoro timer system for FocusFlow CLI."""

from .notifier import SessionNotifier
from .settings import DEFAULT_SETTINGS, DurationSettings, DurationSettingsStore, TimerMode
from .ticks import AsyncioTickSource, TickSource
from .timer import FocusTimer, TimerState

__all__ = [
    "AsyncioTickSource",
    "DEFAULT_SETTINGS",
    "DurationSettings",
    "DurationSettingsStore",
    "FocusTimer",
    "SessionNotifier",
    "TickSource",
    "TimerMode",
    "TimerState",
]
