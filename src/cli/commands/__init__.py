"""CLI command modules."""

from .badges import badges
from .challenges import challenges
from .export import export
from .habit import habit
from .reminders import reminders
from .stats import stats

__all__ = [
    "habit",
    "stats",
    "challenges",
    "badges",
    "export",
    "reminders",
]
