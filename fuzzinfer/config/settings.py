"""
fuzzinfer Settings - Runtime configuration management.

Settings are read from environment variables (and a .env file loaded at
package import) with the FUZZINFER_ prefixes below.
"""

import logging
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    """Numeric defaults of the inference engine.

    Environment variables:
        FUZZINFER_RESOLUTION: Default number of samples taken by integral
            defuzzifiers. Default: 100
        FUZZINFER_MACHINE_EPSILON: Tolerance of fuzzy equality comparisons.
            Default: 1e-6
        FUZZINFER_DECIMALS: Decimals used when rendering values as text.
            Default: 3
    """

    resolution: int = Field(
        default=100,
        gt=0,
        description="Default resolution of integral defuzzifiers",
    )
    machine_epsilon: float = Field(
        default=1e-6,
        gt=0.0,
        description="Tolerance used to compare floating point degrees",
    )
    decimals: int = Field(
        default=3,
        ge=0,
        description="Decimals used to render values as text",
    )

    model_config = SettingsConfigDict(env_prefix="FUZZINFER_")


class LoggingSettings(BaseSettings):
    """Logging Settings."""

    level: str = Field(default="INFO")
    log_dir: Optional[str] = Field(default=None)

    model_config = SettingsConfigDict(env_prefix="FUZZINFER_LOGGING_")

    @field_validator("level")
    @classmethod
    def validate_level(cls, level: str) -> str:
        """Ensure the level is a standard logging level name."""
        level = level.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown logging level: {level}")
        return level

    def console_level(self) -> int:
        return logging.getLevelName(self.level)


@lru_cache
def get_engine_settings() -> EngineSettings:
    """Get engine settings with caching."""
    return EngineSettings()


@lru_cache
def get_logging_settings() -> LoggingSettings:
    """Get logging settings with caching."""
    return LoggingSettings()


def clear_settings_cache() -> None:
    """Clear cached settings so that environment changes take effect."""
    get_engine_settings.cache_clear()
    get_logging_settings.cache_clear()
