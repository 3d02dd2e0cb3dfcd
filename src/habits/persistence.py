"""JSON file persistence for tracker state."""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional

import structlog

from .errors import StateImportError
from .models import AppState, Habit, new_id
from .schema import dump_state, parse_state

logger = structlog.get_logger()


def seed_state() -> AppState:
    """Starter habits for a fresh install."""
    return AppState(
        habits=[
            Habit(id=new_id(), name="Morning walk", emoji="🚶", priority=3, color="#7bdff6"),
            Habit(id=new_id(), name="Guitar practice", emoji="🎸", priority=4, color="#a78bfa"),
            Habit(id=new_id(), name="Read 20 min", emoji="📚", priority=2, color="#ffd6a5"),
        ]
    )


class StateStorage:
    """Reads and writes the state document at a single path."""

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()

    def load(self) -> Optional[AppState]:
        """Load saved state.

        Returns:
            AppState, or None if the file is missing, unreadable or invalid
        """
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return parse_state(data)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, StateImportError) as e:
            logger.warning("state_load_failed", path=str(self.path), error=str(e))
            return None

    def save(self, state: AppState) -> None:
        """Write state atomically (temp file in the same dir, then rename)."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(dump_state(state), indent=2, ensure_ascii=False)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=".state-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp, self.path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

    def load_or_seed(self) -> AppState:
        """Load saved state, falling back to (and saving) the seed set."""
        state = self.load()
        if state is None:
            state = seed_state()
            self.save(state)
            logger.info("state_seeded", path=str(self.path), habits=len(state.habits))
        return state
