"""Custom exception hierarchy for the medium rest recovery library.

All exceptions inherit from MediumRestError, enabling unified error handling
at the host boundary while preserving context about what went wrong.

Selections that exceed a recovery budget are NOT exceptions: validation
functions report them through ``valid=False`` on their result so the host
can re-prompt the player.

Example:
    >>> from medium_rest.core.exceptions import InvalidDataError
    >>> raise InvalidDataError("Class is missing hit dice data", class_name="Wizard")
"""

from __future__ import annotations

from typing import Any


class MediumRestError(Exception):
    """Base exception for all medium rest errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        """Return a detailed string representation of the exception."""
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Data Exceptions
# =============================================================================


class InvalidDataError(MediumRestError):
    """Raised when character data supplied by the host is malformed or incomplete.

    Typical causes are an empty class list where at least one class is
    required, a class without a hit dice block, or an unrecognized
    spellcasting progression tag.
    """

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        class_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize invalid data error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the field that failed validation.
            class_name: Character class the bad data belongs to.
            invalid_value: The value that failed validation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        if class_name:
            combined_details["class_name"] = class_name
        if invalid_value is not None:
            combined_details["invalid_value"] = invalid_value
        super().__init__(message, details=combined_details)


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationError(MediumRestError):
    """Raised when library configuration is invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


__all__ = [
    "MediumRestError",
    "InvalidDataError",
    "ConfigurationError",
]
