"""Session Settings and Configuration

Pydantic-based settings management using environment variables.
Settings are loaded from ``MPRIS_``-prefixed environment variables with
support for .env files, type validation, and sensible defaults. All nested
settings are frozen after initialization.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..domain.players.value_objects import MEDIA_PLAYER2_PREFIX
from ..domain.shared.messages import ErrorMessages


class BusSettings(BaseModel):
    """Message bus configuration."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    name_prefix: str = Field(
        default=MEDIA_PLAYER2_PREFIX,
        validation_alias=AliasChoices("name_prefix", "prefix"),
    )
    timeout_s: float = Field(
        default=25.0,
        gt=0.0,
        le=300.0,
        validation_alias=AliasChoices("timeout_s", "timeout"),
    )

    @field_validator("name_prefix")
    @classmethod
    def validate_name_prefix(cls, v: str) -> str:
        """Reject an empty prefix, which would match every bus name."""
        if not v.strip():
            raise ValueError(ErrorMessages.EMPTY_NAME_PREFIX)
        return v


class SessionSettings(BaseModel):
    """Player tracking configuration."""

    model_config = SettingsConfigDict(frozen=True)

    # Abort construction on the first player that fails during enumeration.
    strict_enumeration: bool = False


class Settings(BaseSettings):
    """Settings container.

    Environment variable naming:
    - MPRIS_ENVIRONMENT, MPRIS_LOG_LEVEL (top-level)
    - MPRIS_BUS__NAME_PREFIX, MPRIS_BUS__TIMEOUT_S (nested)
    - MPRIS_SESSION__STRICT_ENUMERATION (nested)
    """

    model_config = SettingsConfigDict(
        env_prefix="MPRIS_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    environment: Literal["development", "production", "test"] = "development"
    log_level: str = "INFO"

    bus: BusSettings = Field(default_factory=BusSettings)
    session: SessionSettings = Field(default_factory=SessionSettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(
                ErrorMessages.INVALID_LOG_LEVEL.format(level=v, valid_levels=valid_levels)
            )
        return v_upper


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings.

    Settings are automatically loaded from:
    1. .env file (if present)
    2. Environment variables
    3. Default values
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing)."""
    get_settings.cache_clear()
