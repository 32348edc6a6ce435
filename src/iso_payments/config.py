"""
Application configuration and environment variables.

Uses pydantic-settings. Values come from, in order of priority:
1. Environment variables prefixed with ISO_PAYMENTS_
2. .env file
3. Default values

Example:
    ISO_PAYMENTS_LOG_LEVEL=DEBUG
    ISO_PAYMENTS_BUSINESS_TIMEZONE=Europe/Paris
"""

from functools import lru_cache
from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Unified configuration for the payments core."""

    model_config = SettingsConfigDict(
        env_prefix="ISO_PAYMENTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ============================================================================
    # LOGGING SETTINGS
    # ============================================================================
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_format: str = Field(
        default="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
        description="Loguru log format",
    )
    logger_enqueue: bool = Field(
        default=False,
        description="Route log records through a queue (multiprocess-safe)",
    )

    # ============================================================================
    # PAYMENT SETTINGS
    # ============================================================================
    business_timezone: str = Field(
        default="UTC",
        description="IANA timezone whose calendar date is 'today' for execution date checks",
    )
    event_publisher: Literal["memory", "logging"] = Field(
        default="logging",
        description="Where drained domain events are delivered",
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level

    @field_validator("business_timezone")
    @classmethod
    def _validate_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {value}") from e
        return value

    @property
    def business_tz(self) -> ZoneInfo:
        return ZoneInfo(self.business_timezone)


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide Settings instance (cached)."""
    return Settings()
