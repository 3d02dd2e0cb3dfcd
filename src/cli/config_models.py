"""Pydantic configuration models for cosmos."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class PathsConfig(BaseModel):
    """File paths configuration."""

    state_file: Path = Path("~/cosmos/state.json")
    backup_dir: Path = Path("~/cosmos/backups")
    log_file: Optional[Path] = None

    @model_validator(mode="after")
    def expand_paths(self):
        """Expand ~ in all paths."""
        self.state_file = self.state_file.expanduser()
        self.backup_dir = self.backup_dir.expanduser()
        if self.log_file is not None:
            self.log_file = self.log_file.expanduser()
        return self


class RankingConfig(BaseModel):
    """Habit ranking configuration."""

    recent_window_days: int = Field(14, ge=1, le=365)
    focus_limit: int = Field(3, ge=1)


class StreakConfig(BaseModel):
    """Streak analysis configuration."""

    window_days: int = Field(180, ge=1, le=3650)


class ReminderConfig(BaseModel):
    """Local reminder configuration."""

    interval_hours: float = 8.0

    @field_validator("interval_hours")
    @classmethod
    def validate_interval(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"interval_hours must be positive, got {v}")
        return v


VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "WARNING"
    json_mode: bool = Field(False, alias="json")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        v_upper = v.upper()
        if v_upper not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of {VALID_LOG_LEVELS}")
        return v_upper


class CosmosConfig(BaseModel):
    """Main configuration model."""

    paths: PathsConfig = Field(default_factory=PathsConfig)
    ranking: RankingConfig = Field(default_factory=RankingConfig)
    streaks: StreakConfig = Field(default_factory=StreakConfig)
    reminders: ReminderConfig = Field(default_factory=ReminderConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: dict) -> "CosmosConfig":
        """Create config from a parsed YAML dict."""
        return cls.model_validate(data)

    def to_dict(self) -> dict:
        return self.model_dump(mode="python")
