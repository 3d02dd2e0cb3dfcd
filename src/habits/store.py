"""In-memory habit and completion-log store."""

from datetime import datetime
from typing import Optional

import structlog

from shared_types import ToggleOutcome

from .models import AppState, Habit, LogEntry

logger = structlog.get_logger()


class EventStore:
    """Query and mutation surface over an AppState's habits and logs.

    The store works on the lists owned by the AppState it wraps, so mutations
    are visible to whoever persists that state. Log uniqueness on
    (habit, day) is enforced here through an index, not left to callers.
    """

    def __init__(self, state: AppState):
        self.state = state
        self._habits_by_id: dict[str, Habit] = {h.id: h for h in state.habits}
        self._index: dict[tuple[str, str], LogEntry] = {}
        deduped: list[LogEntry] = []
        for entry in state.logs:
            key = (entry.habit, entry.day)
            if key in self._index:
                logger.warning("duplicate_log_dropped", habit=entry.habit, day=entry.day)
                continue
            self._index[key] = entry
            deduped.append(entry)
        if len(deduped) != len(state.logs):
            state.logs[:] = deduped

    def habits(self) -> list[Habit]:
        """Habits in insertion order."""
        return list(self.state.habits)

    def habit(self, habit_id: str) -> Optional[Habit]:
        return self._habits_by_id.get(habit_id)

    def all_logs(self) -> list[LogEntry]:
        return list(self.state.logs)

    def logs_for(self, habit_id: str) -> set[LogEntry]:
        return {e for e in self.state.logs if e.habit == habit_id}

    def has_completion(self, habit_id: str, day: str) -> bool:
        return (habit_id, day) in self._index

    def active_days(self) -> set[str]:
        """Day keys with at least one completion for any habit."""
        return {day for _, day in self._index}

    def add_habit(self, habit: Habit) -> Habit:
        """Append a habit.

        Raises:
            ValueError: If a habit with the same id already exists
        """
        if habit.id in self._habits_by_id:
            raise ValueError(f"Habit already exists: {habit.id}")
        self.state.habits.append(habit)
        self._habits_by_id[habit.id] = habit
        logger.info("habit_added", habit=habit.id, name=habit.name, priority=habit.priority)
        return habit

    def toggle(
        self, habit_id: str, day: str, now: Optional[datetime] = None
    ) -> Optional[ToggleOutcome]:
        """Flip completion of a habit on a day.

        Returns None (and changes nothing) for an unknown habit id.
        """
        if habit_id not in self._habits_by_id:
            logger.warning("toggle_unknown_habit", habit=habit_id, day=day)
            return None

        key = (habit_id, day)
        existing = self._index.pop(key, None)
        if existing is not None:
            self.state.logs.remove(existing)
            outcome = ToggleOutcome.UNMARKED
        else:
            entry = LogEntry(habit=habit_id, day=day, timestamp=now or datetime.now())
            self._index[key] = entry
            self.state.logs.append(entry)
            outcome = ToggleOutcome.MARKED

        logger.debug("habit_toggled", habit=habit_id, day=day, outcome=str(outcome))
        return outcome

    def restore(self, habit_id: str, day: str, now: Optional[datetime] = None) -> bool:
        """Re-insert a completion if it is missing. Returns True if inserted."""
        if habit_id not in self._habits_by_id or (habit_id, day) in self._index:
            return False
        entry = LogEntry(habit=habit_id, day=day, timestamp=now or datetime.now())
        self._index[(habit_id, day)] = entry
        self.state.logs.append(entry)
        return True

    def remove(self, habit_id: str, day: str) -> bool:
        """Drop a completion if present. Returns True if removed."""
        existing = self._index.pop((habit_id, day), None)
        if existing is None:
            return False
        self.state.logs.remove(existing)
        return True
