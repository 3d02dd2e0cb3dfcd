"""Badges awarded for completed challenges."""

from datetime import date, datetime
from typing import Optional

import structlog

from .dates import day_key
from .models import Badge, Challenge

logger = structlog.get_logger()

BADGE_TITLE = "Challenge Complete"


def award(challenge: Challenge, today: Optional[date | datetime] = None) -> Badge:
    """Build the badge for a completed challenge."""
    return Badge(
        title=BADGE_TITLE,
        note=challenge.text,
        date=day_key(today or datetime.now()),
    )


class BadgeAwarder:
    """Appends badges to a badge list. No deduplication."""

    def __init__(self, badges: list[Badge]):
        self.badges = badges

    def award_to(self, challenge: Challenge, today: Optional[date | datetime] = None) -> Badge:
        badge = award(challenge, today)
        self.badges.append(badge)
        logger.info("badge_awarded", challenge=challenge.id, type=str(challenge.type))
        return badge
