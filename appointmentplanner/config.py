"""
Configuration management using Pydantic models loaded from YAML.
"""

import logging
from datetime import date, time
from pathlib import Path
from typing import Optional

import pendulum
import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .domain.local_day import LocalDay
from .domain.priority import Priority
from .domain.time_slot import Slot

logger = logging.getLogger(__name__)


class DefaultsConfig(BaseModel):
    """Default settings for slot queries."""
    duration_minutes: int = 30
    day_start_hour: int = 9
    day_end_hour: int = 17
    priority: Priority = Priority.MEDIUM

    @field_validator("duration_minutes")
    @classmethod
    def validate_duration(cls, value: int) -> int:
        """Ensure the appointment duration is positive."""
        if value <= 0:
            raise ValueError("duration_minutes must be greater than zero")
        return value

    @field_validator("day_start_hour", "day_end_hour")
    @classmethod
    def validate_hour(cls, v: int) -> int:
        """Validate hour is between 0 and 23."""
        if not 0 <= v <= 23:
            raise ValueError(f"Hour must be between 0 and 23, got {v}")
        return v

    @field_validator("priority", mode="before")
    @classmethod
    def parse_priority(cls, value):
        """Accept priority names such as 'high' from YAML."""
        if isinstance(value, str):
            return Priority.from_name(value)
        return value

    @model_validator(mode="after")
    def validate_hours_order(self) -> "DefaultsConfig":
        """Ensure the configured day opens before it closes."""
        if self.day_end_hour <= self.day_start_hour:
            raise ValueError("day_end_hour must be later than day_start_hour")
        return self

    def get_start_time(self) -> time:
        """Get start time as time object."""
        return time(hour=self.day_start_hour, minute=0)

    def get_end_time(self) -> time:
        """Get end time as time object."""
        return time(hour=self.day_end_hour, minute=0)


class PlannerConfig(BaseModel):
    """Application configuration."""
    timezone: str = "Europe/Berlin"
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Ensure the timezone is known to pendulum."""
        try:
            pendulum.timezone(value)
        except (ValueError, KeyError) as exc:
            raise ValueError(f"Unknown timezone: '{value}'") from exc
        return value

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "PlannerConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            PlannerConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        logger.debug("Loaded configuration from %s", config_path)
        return cls(**data)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "PlannerConfig":
        """
        Load an explicit config file, or the default one if it exists.

        Without an explicit path and without a default file the built-in
        defaults are used.
        """
        if config_path is not None:
            return cls.load_from_yaml(config_path)

        default_path = get_default_config_path()
        if default_path.exists():
            return cls.load_from_yaml(default_path)

        logger.debug("No config file found, using built-in defaults")
        return cls()

    def local_day(self, day: date) -> LocalDay:
        """Get the given calendar day in the configured timezone."""
        return LocalDay(timezone=self.timezone, day=day)

    def working_slot(self, day: date) -> Slot:
        """Get the configured day window as a slot."""
        return self.local_day(day).slot(
            self.defaults.get_start_time(),
            self.defaults.get_end_time()
        )


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    config_path = Path.cwd() / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
