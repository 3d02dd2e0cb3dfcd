"""Calendar-day helpers. All day-keys are local-calendar `YYYY-MM-DD` strings."""

from collections.abc import Iterator
from datetime import date, datetime, timedelta
from typing import Optional

ONE_DAY = timedelta(days=1)


def _as_date(instant: date | datetime) -> date:
    if isinstance(instant, datetime):
        if instant.tzinfo is not None:
            instant = instant.astimezone()
        return instant.date()
    return instant


def day_key(instant: date | datetime) -> str:
    """Normalize an instant to its local calendar day key."""
    return _as_date(instant).isoformat()


def parse_day_key(key: str) -> date:
    """Parse a day key back to a date. Raises ValueError on malformed keys."""
    return date.fromisoformat(key)


def days_ago(n: int, now: Optional[datetime] = None) -> datetime:
    """Return `now` minus n calendar days (time of day preserved)."""
    now = now or datetime.now()
    return now - timedelta(days=n)


def week_start(instant: date | datetime) -> date:
    """Most recent Sunday at or before the instant."""
    d = _as_date(instant)
    # date.weekday(): Monday=0 .. Sunday=6
    return d - timedelta(days=(d.weekday() + 1) % 7)


class DateRange:
    """Inclusive, ascending range of calendar days.

    Iterating yields `date` objects lazily; the range can be iterated any
    number of times.
    """

    def __init__(self, start: date | datetime, end: date | datetime):
        self.start = _as_date(start)
        self.end = _as_date(end)

    def __iter__(self) -> Iterator[date]:
        current = self.start
        while current <= self.end:
            yield current
            current += ONE_DAY

    def __len__(self) -> int:
        return max(0, (self.end - self.start).days + 1)

    def __contains__(self, item: date | datetime) -> bool:
        d = _as_date(item)
        return self.start <= d <= self.end

    def __repr__(self) -> str:
        return f"DateRange({self.start.isoformat()}, {self.end.isoformat()})"


def date_range(start: date | datetime, end: date | datetime) -> DateRange:
    """Inclusive range of calendar days from start to end."""
    return DateRange(start, end)


def trailing_window(today: date | datetime, days: int) -> DateRange:
    """The `days` calendar days ending at (and including) today."""
    end = _as_date(today)
    return DateRange(end - timedelta(days=days - 1), end)
