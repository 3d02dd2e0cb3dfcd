"""Weekly adaptive challenge generation."""

from collections.abc import Sequence
from datetime import date, datetime, timedelta
from typing import Optional

import structlog

from shared_types import ChallengeType

from .badges import BadgeAwarder
from .dates import day_key, parse_day_key, week_start
from .models import Badge, Challenge, RankedHabit, WeekState

logger = structlog.get_logger()

LOW_PERFORMER_TOTAL = 5
LOW_PERFORMER_POOL = 4
MAX_MICRO = 2
BUNDLE_MIN_HABITS = 4

MICRO_TEMPLATE = 'Micro: Do 2 minutes of "{name}" on 5 days this week'
BUNDLE_TEXT = "Bundle: Pair a short habit + 5 pushups, do 4 times this week"
SPRINT_TEMPLATE = 'Sprint: Do "{name}" first thing 6 days this week'
SOCIAL_TEXT = "Social: Share a small win from this week with a friend"


def generate(
    ranked: Sequence[RankedHabit],
    now: Optional[datetime] = None,
    habit_count: Optional[int] = None,
) -> WeekState:
    """Derive this week's challenges from ranked habits.

    Output order is fixed: micro challenges for up to two low performers
    (fewer than 5 completions, in ranked order), a bundle when there are
    more than three habits, a sprint for the top habit, then a social
    challenge which is always present.

    Args:
        ranked: Output of ranking.rank()
        now: Reference instant (defaults to now)
        habit_count: Number of habits if different from len(ranked)
    """
    now = now or datetime.now()
    if habit_count is None:
        habit_count = len(ranked)

    items: list[Challenge] = []

    low_performers = [h for h in ranked if h.total < LOW_PERFORMER_TOTAL][:LOW_PERFORMER_POOL]
    for habit in low_performers[:MAX_MICRO]:
        items.append(
            Challenge(
                text=MICRO_TEMPLATE.format(name=habit.name),
                type=ChallengeType.MICRO,
                habit=habit.id,
            )
        )

    if habit_count >= BUNDLE_MIN_HABITS:
        items.append(Challenge(text=BUNDLE_TEXT, type=ChallengeType.BUNDLE))

    if ranked:
        top = ranked[0]
        items.append(
            Challenge(
                text=SPRINT_TEMPLATE.format(name=top.name),
                type=ChallengeType.SPRINT,
                habit=top.id,
            )
        )

    items.append(Challenge(text=SOCIAL_TEXT, type=ChallengeType.SOCIAL))

    week = WeekState(week_start=day_key(week_start(now)), items=items)
    logger.info("challenges_generated", week_start=week.week_start, count=len(items))
    return week


def is_stale(week: WeekState, now: Optional[datetime] = None) -> bool:
    """True when the week has never been generated or belongs to another week."""
    if not week.week_start:
        return True
    now = now or datetime.now()
    return week.week_start != day_key(week_start(now))


def week_range(week: WeekState) -> Optional[tuple[date, date]]:
    """Sunday through Saturday of the week, or None if never generated."""
    if not week.week_start:
        return None
    start = parse_day_key(week.week_start)
    return start, start + timedelta(days=6)


def complete(
    challenge: Challenge,
    awarder: BadgeAwarder,
    today: Optional[date | datetime] = None,
) -> Optional[Badge]:
    """Mark a challenge completed and award its badge.

    Completion is one-way: a challenge that is already completed is left
    alone and no second badge is awarded.
    """
    if challenge.completed:
        return None
    challenge.completed = True
    return awarder.award_to(challenge, today)
