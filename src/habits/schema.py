"""Pydantic schema for the serialized state document.

Field names follow the JSON layout written by earlier versions of the app
(camelCase `lastAction`, `weekStart`, epoch-millisecond `ts`).
"""

import math
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from shared_types import ActionType, ChallengeType

from .dates import parse_day_key
from .errors import StateImportError
from .models import (
    MAX_NAME_LENGTH,
    AppState,
    Badge,
    Challenge,
    Habit,
    LastAction,
    LogEntry,
    Settings,
    WeekState,
)


def _check_day(v: str) -> str:
    parse_day_key(v)
    return v


def _to_ms(ts: datetime) -> int:
    return int(ts.timestamp() * 1000)


def _from_ms(ms: float) -> datetime:
    return datetime.fromtimestamp(ms / 1000)


class HabitSchema(BaseModel):
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    emoji: str = "✅"
    priority: int = Field(3, ge=1, le=5)
    color: str = "#7bdff6"


class LogSchema(BaseModel):
    habit: str
    day: str
    ts: float = 0

    @field_validator("day")
    @classmethod
    def validate_day(cls, v: str) -> str:
        return _check_day(v)

    @field_validator("ts")
    @classmethod
    def validate_ts(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError(f"ts must be a finite number, got {v}")
        try:
            _from_ms(v)
        except (OverflowError, OSError, ValueError) as e:
            raise ValueError(f"ts out of range: {v}") from e
        return v


class BadgeSchema(BaseModel):
    id: str
    title: str
    note: str
    date: str


class ChallengeSchema(BaseModel):
    id: str
    text: str
    type: ChallengeType
    habit: Optional[str] = None
    completed: bool = False


class WeekSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    week_start: Optional[str] = Field(None, alias="weekStart")
    items: list[ChallengeSchema] = Field(default_factory=list)


class LastActionSchema(BaseModel):
    type: ActionType
    habit: str
    day: str


class SettingsSchema(BaseModel):
    reminders: bool = False


class StateSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    habits: list[HabitSchema] = Field(default_factory=list)
    logs: list[LogSchema] = Field(default_factory=list)
    badges: list[BadgeSchema] = Field(default_factory=list)
    settings: SettingsSchema = Field(default_factory=SettingsSchema)
    last_action: Optional[LastActionSchema] = Field(None, alias="lastAction")
    challenges: WeekSchema = Field(default_factory=WeekSchema)


def to_state(doc: StateSchema) -> AppState:
    """Convert a validated document into domain records."""
    week = doc.challenges
    return AppState(
        habits=[Habit(**h.model_dump()) for h in doc.habits],
        logs=[LogEntry(habit=l.habit, day=l.day, timestamp=_from_ms(l.ts)) for l in doc.logs],
        badges=[Badge(**b.model_dump()) for b in doc.badges],
        settings=Settings(reminders=doc.settings.reminders),
        last_action=LastAction(**doc.last_action.model_dump()) if doc.last_action else None,
        challenges=WeekState(
            week_start=week.week_start,
            items=[Challenge(**c.model_dump()) for c in week.items],
        ),
    )


def parse_state(data: Any) -> AppState:
    """Validate a decoded JSON object and build an AppState.

    Raises:
        StateImportError: If the document does not match the schema
    """
    if not isinstance(data, dict):
        raise StateImportError(f"State must be a JSON object, got {type(data).__name__}")
    try:
        doc = StateSchema.model_validate(data)
    except ValidationError as e:
        raise StateImportError(f"State validation failed: {e}") from e
    try:
        return to_state(doc)
    except (OverflowError, OSError, TypeError, ValueError) as e:
        raise StateImportError(f"State conversion failed: {e}") from e


def dump_state(state: AppState) -> dict:
    """Serialize an AppState to a JSON-compatible dict."""
    la = state.last_action
    return {
        "habits": [
            {"id": h.id, "name": h.name, "emoji": h.emoji, "priority": h.priority, "color": h.color}
            for h in state.habits
        ],
        "logs": [{"habit": e.habit, "day": e.day, "ts": _to_ms(e.timestamp)} for e in state.logs],
        "badges": [
            {"id": b.id, "title": b.title, "note": b.note, "date": b.date} for b in state.badges
        ],
        "settings": {"reminders": state.settings.reminders},
        "lastAction": {"type": str(la.type), "habit": la.habit, "day": la.day} if la else None,
        "challenges": {
            "weekStart": state.challenges.week_start,
            "items": [
                {
                    "id": c.id,
                    "text": c.text,
                    "type": str(c.type),
                    "habit": c.habit,
                    "completed": c.completed,
                }
                for c in state.challenges.items
            ],
        },
    }
