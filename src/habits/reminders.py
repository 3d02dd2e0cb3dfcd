"""Periodic reminders for the current top-ranked habit."""

from datetime import datetime
from typing import Callable, Optional

import structlog
from apscheduler.events import EVENT_JOB_ERROR
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from .models import AppState
from .ranking import top_habit

logger = structlog.get_logger().bind(source="reminders")

DEFAULT_INTERVAL_HOURS = 8
JOB_ID = "habit_reminder"


def reminder_message(name: str) -> str:
    return f"Quick reminder: {name}"


class ReminderScheduler:
    """Fires a reminder for the top habit on a fixed interval.

    Args:
        state_provider: Returns the current AppState each time a reminder fires
        notifier: Called with the reminder text
        interval_hours: Hours between reminders
    """

    def __init__(
        self,
        state_provider: Callable[[], AppState],
        notifier: Callable[[str], None],
        interval_hours: float = DEFAULT_INTERVAL_HOURS,
    ):
        self.state_provider = state_provider
        self.notifier = notifier
        self.interval_hours = interval_hours
        self.scheduler = BackgroundScheduler()

    def fire(self, now: Optional[datetime] = None) -> Optional[str]:
        """Send one reminder now. Returns the message, or None without habits."""
        state = self.state_provider()
        top = top_habit(state.habits, state.logs, now)
        if top is None:
            logger.debug("reminder_skipped", reason="no_habits")
            return None
        message = reminder_message(top.name)
        self.notifier(message)
        logger.info("reminder_fired", habit=top.id)
        return message

    def _default_error_handler(self, event):
        logger.error("reminder_job_failed", job_id=event.job_id, error=str(event.exception))

    def start(self):
        """Start the interval job.

        Raises:
            PermissionError: If reminders have not been enabled by the user
        """
        if not self.state_provider().settings.reminders:
            raise PermissionError("Reminders are not enabled")
        self.scheduler.add_job(
            self.fire,
            trigger=IntervalTrigger(hours=self.interval_hours),
            id=JOB_ID,
            replace_existing=True,
        )
        self.scheduler.add_listener(self._default_error_handler, EVENT_JOB_ERROR)
        self.scheduler.start()
        logger.info("reminders_started", interval_hours=self.interval_hours)

    def stop(self):
        if self.scheduler.running:
            self.scheduler.shutdown()

    @property
    def running(self) -> bool:
        return self.scheduler.running
