"""Habit tracking core: store, ranking, streaks, challenges and badges."""

from .errors import CosmosError, DecryptionError, StateImportError
from .models import AppState, Badge, Challenge, Habit, LogEntry, RankedHabit, WeekState
from .persistence import StateStorage
from .store import EventStore
from .tracker import HabitTracker

__all__ = [
    "AppState",
    "Badge",
    "Challenge",
    "CosmosError",
    "DecryptionError",
    "EventStore",
    "Habit",
    "HabitTracker",
    "LogEntry",
    "RankedHabit",
    "StateImportError",
    "StateStorage",
    "WeekState",
]
