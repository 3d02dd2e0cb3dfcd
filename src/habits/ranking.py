"""Habit ranking by priority, recency and volume."""

from collections import Counter
from collections.abc import Iterable, Sequence
from datetime import datetime
from typing import Optional

from .dates import day_key, trailing_window
from .models import Habit, LogEntry, RankedHabit

# Weights for the composite score
PRIORITY_WEIGHT = 2.0
RECENCY_WEIGHT = 3.0
VOLUME_WEIGHT = 0.1
RECENT_WINDOW_DAYS = 14
FOCUS_LIMIT = 3


def score_habit(priority: int, recent: int, total: int) -> float:
    """Composite score for one habit.

    recency = recent / (total + 1); the +1 keeps habits with no history
    finite and damps habits with only a handful of entries.
    """
    recency_score = recent / (total + 1)
    return priority * PRIORITY_WEIGHT + recency_score * RECENCY_WEIGHT + total * VOLUME_WEIGHT


def rank(
    habits: Sequence[Habit],
    logs: Iterable[LogEntry],
    now: Optional[datetime] = None,
    recent_days: int = RECENT_WINDOW_DAYS,
) -> list[RankedHabit]:
    """Rank habits by score, highest first.

    Args:
        habits: Habits in insertion order
        logs: All completion entries
        now: Reference instant (defaults to now)
        recent_days: Size of the trailing recency window, ending at `now`

    Returns:
        RankedHabit list. Equal scores keep insertion order.
    """
    now = now or datetime.now()
    window = trailing_window(now, recent_days)
    recent_keys = {day_key(d) for d in window}

    totals: Counter[str] = Counter()
    recents: Counter[str] = Counter()
    for entry in logs:
        totals[entry.habit] += 1
        if entry.day in recent_keys:
            recents[entry.habit] += 1

    ranked = [
        RankedHabit(
            id=h.id,
            name=h.name,
            emoji=h.emoji,
            priority=h.priority,
            color=h.color,
            score=score_habit(h.priority, recents[h.id], totals[h.id]),
            total=totals[h.id],
        )
        for h in habits
    ]
    # sorted() is stable, so ties stay in insertion order
    return sorted(ranked, key=lambda r: r.score, reverse=True)


def focus(ranked: Sequence[RankedHabit], limit: int = FOCUS_LIMIT) -> list[RankedHabit]:
    """Top habits for focus mode."""
    return list(ranked[:limit])


def top_habit(
    habits: Sequence[Habit], logs: Iterable[LogEntry], now: Optional[datetime] = None
) -> Optional[RankedHabit]:
    ranked = rank(habits, logs, now)
    return ranked[0] if ranked else None
