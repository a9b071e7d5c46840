"""
Settings of the application.

The rules themselves are not configurable. Only the surroundings are: how long the finished board stays visible
before it gets reset, and how chatty the logs are.
"""

import logging
import os
from typing import Self

from pydantic import BaseModel, Field, field_validator

RESET_DELAY_ENV = "CHESS_RESET_DELAY_SECONDS"
LOG_LEVEL_ENV = "CHESS_LOG_LEVEL"


class Settings(BaseModel):
    reset_delay_seconds: float = Field(default=3.0, ge=0)
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    @classmethod
    def from_env(cls) -> Self:
        """Read overrides from the environment. Anything not set keeps its default."""
        overrides: dict[str, str] = {}
        if RESET_DELAY_ENV in os.environ:
            overrides["reset_delay_seconds"] = os.environ[RESET_DELAY_ENV]
        if LOG_LEVEL_ENV in os.environ:
            overrides["log_level"] = os.environ[LOG_LEVEL_ENV]
        return cls.model_validate(overrides)


def setup_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
