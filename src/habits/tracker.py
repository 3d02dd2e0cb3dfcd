"""Command functions over an explicit AppState.

Every mutating command updates state through the EventStore, saves it, and
only then returns, so derived views computed afterwards always see a
complete update.
"""

from datetime import datetime
from typing import Optional

import structlog

from shared_types import ActionType, ToggleOutcome

from . import challenges, ranking, streaks
from .badges import BadgeAwarder
from .dates import day_key
from .models import AppState, Badge, Habit, LastAction, RankedHabit, WeekState
from .persistence import StateStorage
from .store import EventStore
from .streaks import StreakStats

logger = structlog.get_logger()


class HabitTracker:
    """Front-end agnostic entry point for tracker commands."""

    def __init__(
        self,
        state: AppState,
        storage: Optional[StateStorage] = None,
        recent_days: int = ranking.RECENT_WINDOW_DAYS,
        streak_window_days: int = streaks.STREAK_WINDOW_DAYS,
    ):
        self.state = state
        self.storage = storage
        self.recent_days = recent_days
        self.streak_window_days = streak_window_days
        self.store = EventStore(state)

    @classmethod
    def open(cls, storage: StateStorage, **kwargs) -> "HabitTracker":
        """Load state from storage, seeding it when missing or corrupt."""
        return cls(storage.load_or_seed(), storage=storage, **kwargs)

    def _save(self):
        if self.storage is not None:
            self.storage.save(self.state)

    def replace_state(self, state: AppState):
        """Swap in a fully validated state (e.g. after import) and save it."""
        self.state = state
        self.store = EventStore(state)
        self._save()
        logger.info("state_replaced", habits=len(state.habits), logs=len(state.logs))

    # --- Habits ---

    def add_habit(
        self,
        name: str,
        emoji: Optional[str] = None,
        priority: int = 3,
        color: Optional[str] = None,
    ) -> Habit:
        habit = self.store.add_habit(Habit.create(name, emoji=emoji, priority=priority, color=color))
        self._save()
        return habit

    def find_habit(self, ref: str) -> Optional[Habit]:
        """Look up a habit by id, then by case-insensitive name."""
        habit = self.store.habit(ref)
        if habit is not None:
            return habit
        lowered = ref.strip().lower()
        return next((h for h in self.state.habits if h.name.lower() == lowered), None)

    def toggle_habit(
        self,
        habit_id: str,
        day: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Optional[ToggleOutcome]:
        """Mark or unmark a habit for a day (today by default)."""
        now = now or datetime.now()
        day = day or day_key(now)
        outcome = self.store.toggle(habit_id, day, now)
        if outcome is None:
            return None
        action = ActionType.MARK if outcome == ToggleOutcome.MARKED else ActionType.UNMARK
        self.state.last_action = LastAction(type=action, habit=habit_id, day=day)
        self._save()
        return outcome

    def undo(self, now: Optional[datetime] = None) -> Optional[LastAction]:
        """Revert the most recent toggle. Only one level of undo is kept."""
        action = self.state.last_action
        if action is None:
            return None
        if action.type == ActionType.MARK:
            self.store.remove(action.habit, action.day)
        else:
            self.store.restore(action.habit, action.day, now)
        self.state.last_action = None
        self._save()
        logger.info("action_undone", type=str(action.type), habit=action.habit, day=action.day)
        return action

    # --- Analytics ---

    def ranked(self, now: Optional[datetime] = None) -> list[RankedHabit]:
        return ranking.rank(
            self.store.habits(), self.store.all_logs(), now, recent_days=self.recent_days
        )

    def streak_stats(self, now: Optional[datetime] = None) -> StreakStats:
        return streaks.analyze(self.store.all_logs(), now, window_days=self.streak_window_days)

    # --- Challenges ---

    def generate_challenges(self, now: Optional[datetime] = None) -> WeekState:
        """Regenerate this week's challenges unconditionally."""
        self.state.challenges = challenges.generate(
            self.ranked(now), now, habit_count=len(self.state.habits)
        )
        self._save()
        return self.state.challenges

    def ensure_challenges(self, now: Optional[datetime] = None) -> WeekState:
        """Return this week's challenges, regenerating if stale."""
        if challenges.is_stale(self.state.challenges, now):
            return self.generate_challenges(now)
        return self.state.challenges

    def complete_challenge(
        self, challenge_id: str, now: Optional[datetime] = None
    ) -> Optional[Badge]:
        """Complete a challenge and award its badge.

        Returns:
            The new Badge, or None if the challenge was already completed

        Raises:
            KeyError: If no challenge with that id exists this week
        """
        challenge = self.state.challenges.find(challenge_id)
        if challenge is None:
            raise KeyError(challenge_id)
        badge = challenges.complete(
            challenge, BadgeAwarder(self.state.badges), now or datetime.now()
        )
        if badge is not None:
            self._save()
        return badge

    # --- Settings ---

    def enable_reminders(self):
        self.state.settings.reminders = True
        self._save()

    def disable_reminders(self):
        self.state.settings.reminders = False
        self._save()
