"""Streak and consistency statistics over the completion log."""

import math
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from .dates import day_key, parse_day_key, trailing_window
from .models import LogEntry

STREAK_WINDOW_DAYS = 180


@dataclass(frozen=True)
class StreakStats:
    current: int
    longest: int
    consistency: int


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def streaks(
    active_days: set[str], today: date | datetime, window_days: int = STREAK_WINDOW_DAYS
) -> tuple[int, int]:
    """Current and longest streak within the trailing window.

    Walks the window oldest to newest. The current streak is the run that
    ends on `today`; a single inactive day (including today) resets it to 0.
    """
    current = longest = run = 0
    for d in trailing_window(today, window_days):
        if day_key(d) in active_days:
            run += 1
            current = run
            longest = max(longest, run)
        else:
            run = 0
            current = 0
    return current, longest


def consistency(active_days: set[str]) -> int:
    """Percent of days with activity between the first and last active day.

    A single active day spans one day and scores 100.
    """
    if not active_days:
        return 0
    ordered = sorted(active_days)
    span = (parse_day_key(ordered[-1]) - parse_day_key(ordered[0])).days + 1
    return _round_half_up(len(active_days) / max(1, span) * 100)


def analyze(
    logs: Iterable[LogEntry],
    today: Optional[date | datetime] = None,
    window_days: int = STREAK_WINDOW_DAYS,
) -> StreakStats:
    """Compute current streak, longest streak and consistency percentage."""
    today = today or datetime.now()
    active = {entry.day for entry in logs}
    current, longest = streaks(active, today, window_days)
    return StreakStats(current=current, longest=longest, consistency=consistency(active))
