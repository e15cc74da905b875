"""Configuration management for cadence."""

from __future__ import annotations

import json
import os
from datetime import time as dt_time
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from ..scheduler.policy import Weekday, WeeklySchedule, parse_time
from .errors import ConfigError

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "configs" / "default.json"


class GeneralConfig(BaseModel):
    """General application configuration."""

    log_level: str = "INFO"
    log_format: str = "console"


class WeeklyReportConfig(BaseModel):
    """Weekly report schedule."""

    enabled: bool = True
    weekday: Weekday = Weekday.SUNDAY
    time: dt_time = dt_time(10, 0)

    @field_validator("weekday", mode="before")
    @classmethod
    def validate_weekday(cls, value: Any) -> Weekday:
        return Weekday.parse(value)

    @field_validator("time", mode="before")
    @classmethod
    def validate_time(cls, value: Any) -> dt_time:
        return parse_time(value)

    @property
    def schedule(self) -> WeeklySchedule | None:
        """Schedule input for WeeklyPolicy, None if disabled."""
        if not self.enabled:
            return None
        return WeeklySchedule(weekday=self.weekday, time=self.time)


class HourlyConfig(BaseModel):
    """Fixed-interval schedule. No interval means disabled."""

    interval_hours: int | None = Field(default=None, ge=1)


class RunnerConfig(BaseModel):
    """Runner behaviour."""

    max_history: int = Field(default=100, ge=1)
    stop_timeout_seconds: float = Field(default=10.0, ge=0)
    wait_for_task_on_stop: bool = True


class Config(BaseModel):
    """Main configuration container."""

    general: GeneralConfig = Field(default_factory=GeneralConfig)
    weekly_report: WeeklyReportConfig = Field(default_factory=WeeklyReportConfig)
    hourly: HourlyConfig = Field(default_factory=HourlyConfig)
    runner: RunnerConfig = Field(default_factory=RunnerConfig)


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from JSON file.

    Args:
        config_path: Path to config file. Defaults to $CADENCE_CONFIG
            (also read from .env), then configs/default.json.

    Returns:
        Loaded configuration object.

    Raises:
        ConfigError: If the file is not valid JSON or fails validation.
    """
    if config_path is None:
        load_dotenv()
        config_path = os.getenv("CADENCE_CONFIG") or DEFAULT_CONFIG_PATH

    config_path = Path(config_path)

    if not config_path.exists():
        return Config()

    try:
        with open(config_path) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a JSON object in {config_path}")

    try:
        return Config.model_validate(data)
    except ValidationError as e:
        raise ConfigError(
            f"Invalid configuration in {config_path}: {e.error_count()} error(s)",
            details=e.errors(),
        ) from e
