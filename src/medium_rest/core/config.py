"""Configuration management for the medium rest library.

Uses pydantic-settings, supporting environment variables, .env files, and
runtime overrides. The recovery policy flags resolve behaviors that differ
between rules interpretations (see RecoverySettings).

Example:
    >>> from medium_rest.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.recovery.slot_overflow
    <SlotOverflowPolicy.SKIP: 'skip'>

Environment Variables:
    MEDIUM_REST_DEBUG: Enable debug mode
    MEDIUM_REST_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    MEDIUM_REST_RECOVERY_SLOT_OVERFLOW: "skip" or "reject"
    MEDIUM_REST_RECOVERY_UNKNOWN_PROGRESSION: "raise" or "ignore"
    MEDIUM_REST_RECOVERY_MAX_RECOVERY_SLOT_LEVEL: Highest recoverable slot level (1-5)
    MEDIUM_REST_RECOVERY_WOUND_CLEARS_LABEL: Label of the wound clears counter
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from medium_rest.core.constants import (
    DEFAULT_WOUND_CLEARS_LABEL,
    MAX_RECOVERY_SLOT_LEVEL,
    MIN_SPELL_LEVEL,
)
from medium_rest.core.exceptions import ConfigurationError
from medium_rest.models.enums import SlotOverflowPolicy, UnknownProgressionPolicy


class RecoverySettings(BaseSettings):
    """Configuration for recovery calculation policies.

    Attributes:
        slot_overflow: What to do when a spell slot request exceeds the
            number of missing slots at that level.
        unknown_progression: What to do with an unrecognized spellcasting
            progression tag.
        max_recovery_slot_level: Highest slot level eligible for recovery.
            May lower the 5th level ceiling, never raise it.
        wound_clears_label: Label of the host counter reset by a medium rest.
    """

    model_config = SettingsConfigDict(
        env_prefix="MEDIUM_REST_RECOVERY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    slot_overflow: SlotOverflowPolicy = Field(
        default=SlotOverflowPolicy.SKIP,
        description="Spell slot overflow policy",
    )
    unknown_progression: UnknownProgressionPolicy = Field(
        default=UnknownProgressionPolicy.RAISE,
        description="Unknown spellcasting progression policy",
    )
    max_recovery_slot_level: int = Field(
        default=MAX_RECOVERY_SLOT_LEVEL,
        description="Highest recoverable spell slot level",
    )
    wound_clears_label: str = Field(
        default=DEFAULT_WOUND_CLEARS_LABEL,
        min_length=1,
        description="Label of the wound clears counter",
    )

    @field_validator("max_recovery_slot_level", mode="after")
    @classmethod
    def validate_slot_level(cls, value: int) -> int:
        """Ensure the ceiling stays within the arcane recovery limit.

        Args:
            value: The configured ceiling.

        Returns:
            The validated ceiling.

        Raises:
            ConfigurationError: If the value is outside 1-5.
        """
        if not MIN_SPELL_LEVEL <= value <= MAX_RECOVERY_SLOT_LEVEL:
            raise ConfigurationError(
                f"max_recovery_slot_level must be between {MIN_SPELL_LEVEL} "
                f"and {MAX_RECOVERY_SLOT_LEVEL}, got {value}",
                config_key="max_recovery_slot_level",
            )
        return value


class Settings(BaseSettings):
    """Main library settings.

    Attributes:
        app_name: Library name.
        app_version: Library version string.
        debug: Enable debug mode.
        log_level: Logging level.
        recovery: Recovery policy settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="MEDIUM_REST_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="Medium Rest",
        description="Library name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Library version",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )

    recovery: RecoverySettings = Field(default_factory=RecoverySettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the settings singleton.

    Returns:
        The cached Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access.

    Primarily useful for testing or when environment variables change
    at runtime.
    """
    get_settings.cache_clear()


__all__ = [
    "RecoverySettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
