"""Data models for habits, completion logs, challenges and badges."""

import random
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from shared_types import ActionType, ChallengeType

MAX_NAME_LENGTH = 40
MIN_PRIORITY = 1
MAX_PRIORITY = 5
DEFAULT_EMOJI = "✅"
PALETTE = ("#7bdff6", "#a78bfa", "#ffd6a5", "#ff7ab6", "#8ef6a7")


def new_id() -> str:
    return uuid.uuid4().hex[:8]


def random_color() -> str:
    return random.choice(PALETTE)


@dataclass(frozen=True)
class Habit:
    id: str
    name: str
    emoji: str = DEFAULT_EMOJI
    priority: int = 3
    color: str = PALETTE[0]

    @classmethod
    def create(
        cls,
        name: str,
        emoji: Optional[str] = None,
        priority: int = 3,
        color: Optional[str] = None,
    ) -> "Habit":
        """Build a new habit from user input.

        Raises:
            ValueError: If name is blank or priority is outside 1-5
        """
        name = name.strip()
        if not name:
            raise ValueError("Habit name must not be empty")
        if not MIN_PRIORITY <= priority <= MAX_PRIORITY:
            raise ValueError(
                f"Priority must be between {MIN_PRIORITY} and {MAX_PRIORITY}, got {priority}"
            )
        return cls(
            id=new_id(),
            name=name[:MAX_NAME_LENGTH],
            emoji=emoji or DEFAULT_EMOJI,
            priority=priority,
            color=color or random_color(),
        )


@dataclass(frozen=True)
class RankedHabit(Habit):
    score: float = 0.0
    total: int = 0


@dataclass(frozen=True)
class LogEntry:
    habit: str
    day: str
    timestamp: datetime = field(default_factory=datetime.now, compare=False)


@dataclass
class Challenge:
    text: str
    type: ChallengeType
    habit: Optional[str] = None
    completed: bool = False
    id: str = field(default_factory=new_id, compare=False)


@dataclass(frozen=True)
class Badge:
    title: str
    note: str
    date: str
    id: str = field(default_factory=new_id, compare=False)


@dataclass
class WeekState:
    week_start: Optional[str] = None
    items: list[Challenge] = field(default_factory=list)

    def find(self, challenge_id: str) -> Optional[Challenge]:
        return next((c for c in self.items if c.id == challenge_id), None)


@dataclass(frozen=True)
class LastAction:
    """Most recent toggle, kept so it can be undone once."""

    type: ActionType
    habit: str
    day: str


@dataclass
class Settings:
    reminders: bool = False


@dataclass
class AppState:
    """Everything the tracker persists. Passed explicitly to each command."""

    habits: list[Habit] = field(default_factory=list)
    logs: list[LogEntry] = field(default_factory=list)
    badges: list[Badge] = field(default_factory=list)
    settings: Settings = field(default_factory=Settings)
    last_action: Optional[LastAction] = None
    challenges: WeekState = field(default_factory=WeekState)
