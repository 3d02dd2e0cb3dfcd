"""Shared CLI utilities."""

import structlog
from rich.console import Console

console = Console()
logger = structlog.get_logger()


def get_components():
    """Initialize config, storage and tracker."""
    from cli.config import load_config_model
    from habits.persistence import StateStorage
    from habits.tracker import HabitTracker

    config = load_config_model()
    storage = StateStorage(config.paths.state_file)
    tracker = HabitTracker.open(
        storage,
        recent_days=config.ranking.recent_window_days,
        streak_window_days=config.streaks.window_days,
    )
    return {
        "config": config,
        "storage": storage,
        "tracker": tracker,
    }


def resolve_habit(tracker, ref: str):
    """Find a habit by id or name, printing an error when missing."""
    habit = tracker.find_habit(ref)
    if habit is None:
        console.print(f"[red]Not found:[/] {ref}")
    return habit
