"""Shared enums and types for cosmos."""

from enum import StrEnum


class ChallengeType(StrEnum):
    MICRO = "micro"
    BUNDLE = "bundle"
    SPRINT = "sprint"
    SOCIAL = "social"


class ToggleOutcome(StrEnum):
    MARKED = "marked"
    UNMARKED = "unmarked"


class ActionType(StrEnum):
    """Kinds of undoable action. Values match the serialized `lastAction.type`."""

    MARK = "mark"
    UNMARK = "undo"
