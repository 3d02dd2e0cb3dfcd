"""Derived views for display: heatmap, trend line, textual insights."""

from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from .dates import day_key, parse_day_key, trailing_window
from .models import LogEntry, RankedHabit

HEATMAP_DAYS = 90
TREND_DAYS = 30
PRIORITY_LIST_LIMIT = 5
STRONG_TOTAL = 10
WEAK_TOTAL = 3

# Sunday-first, matching week_start()
WEEKDAY_NAMES = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


@dataclass(frozen=True)
class HeatmapCell:
    day: str
    count: int
    level: int


def level_for_count(count: int) -> int:
    """Bucket a daily completion count into heatmap intensity 0-4."""
    if count <= 0:
        return 0
    if count == 1:
        return 1
    if count == 2:
        return 2
    if count < 5:
        return 3
    return 4


def _counts_by_day(logs: Iterable[LogEntry]) -> Counter[str]:
    return Counter(entry.day for entry in logs)


def heatmap(
    logs: Iterable[LogEntry],
    today: Optional[date | datetime] = None,
    days: int = HEATMAP_DAYS,
) -> list[HeatmapCell]:
    """One cell per day for the trailing `days` days, oldest first."""
    counts = _counts_by_day(logs)
    cells = []
    for d in trailing_window(today or datetime.now(), days):
        key = day_key(d)
        cells.append(HeatmapCell(day=key, count=counts[key], level=level_for_count(counts[key])))
    return cells


def trend(
    logs: Iterable[LogEntry],
    today: Optional[date | datetime] = None,
    days: int = TREND_DAYS,
) -> list[int]:
    """Daily completion counts for the trailing `days` days, oldest first."""
    counts = _counts_by_day(logs)
    return [counts[day_key(d)] for d in trailing_window(today or datetime.now(), days)]


def best_weekday(logs: Iterable[LogEntry]) -> Optional[str]:
    """Weekday with the most completions. Ties go to the earliest (Sunday first)."""
    by_weekday: Counter[int] = Counter()
    for entry in logs:
        by_weekday[(parse_day_key(entry.day).weekday() + 1) % 7] += 1
    if not by_weekday:
        return None
    best = max(sorted(by_weekday), key=lambda k: by_weekday[k])
    return WEEKDAY_NAMES[best]


def insights(ranked: Sequence[RankedHabit], logs: Sequence[LogEntry]) -> list[str]:
    """Short coaching messages derived from the ranking and log."""
    if not ranked:
        return ["Add some habits to get insights."]

    out = []
    top, low = ranked[0], ranked[-1]
    if top.total > STRONG_TOTAL:
        out.append(
            f'You\'re strongest at "{top.name}" ({top.total} times). '
            "Use it to chain new habits."
        )
    if low.total < WEAK_TOTAL:
        out.append(f'"{low.name}" barely appears. Try a 1-2 minute micro-version this week.')

    day = best_weekday(logs)
    if day is not None:
        out.append(f"You're most active on {day}. Place high-effort tasks there.")
    return out


def priority_list(ranked: Sequence[RankedHabit], limit: int = PRIORITY_LIST_LIMIT) -> list[str]:
    return [f"{h.emoji} {h.name} ({h.total})" for h in ranked[:limit]]


def sparkline(counts: Sequence[int]) -> str:
    """Render counts as a unicode block sparkline."""
    blocks = " ▁▂▃▄▅▆▇█"
    peak = max(1, *counts) if counts else 1
    return "".join(blocks[round(c / peak * (len(blocks) - 1))] for c in counts)
