"""Shared test fixtures for cosmos."""

import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


@pytest.fixture
def now():
    """Fixed reference instant: Wednesday 2024-03-13 at noon."""
    return datetime(2024, 3, 13, 12, 0, 0)


@pytest.fixture
def state_file(tmp_path):
    return tmp_path / "cosmos" / "state.json"


@pytest.fixture
def storage(state_file):
    from habits.persistence import StateStorage

    return StateStorage(state_file)


@pytest.fixture
def make_habit():
    """Factory for habits with predictable ids."""
    from habits.models import Habit

    def _make(id_: str, priority: int = 3, name: str | None = None):
        return Habit(id=id_, name=name or f"Habit {id_}", emoji="⭐", priority=priority)

    return _make


@pytest.fixture
def make_logs():
    """Factory: completion entries for a habit on the given days before `now`."""
    from habits.dates import day_key
    from habits.models import LogEntry

    def _make(habit_id: str, now: datetime, offsets):
        return [
            LogEntry(habit=habit_id, day=day_key(now - timedelta(days=n)), timestamp=now)
            for n in offsets
        ]

    return _make


@pytest.fixture
def tracker(storage, make_habit):
    """Tracker with three habits and no history, backed by a temp state file."""
    from habits.models import AppState
    from habits.tracker import HabitTracker

    state = AppState(habits=[make_habit("a", 3), make_habit("b", 4), make_habit("c", 2)])
    t = HabitTracker(state, storage=storage)
    storage.save(state)
    return t
