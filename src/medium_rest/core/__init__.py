"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        MediumRestError: Base exception for all library errors.
        InvalidDataError: Malformed or incomplete character data.
        ConfigurationError: Configuration-related errors.

    Configuration:
        Settings: Main settings class.
        RecoverySettings: Recovery policy flags.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from medium_rest.core.config import (
    RecoverySettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from medium_rest.core.exceptions import (
    ConfigurationError,
    InvalidDataError,
    MediumRestError,
)
from medium_rest.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)


__all__ = [
    # Exceptions
    "MediumRestError",
    "InvalidDataError",
    "ConfigurationError",
    # Configuration
    "Settings",
    "RecoverySettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
