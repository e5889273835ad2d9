"""Exception hierarchy for the provider packages.

All exceptions inherit from ProviderIntegrationError so callers embedding the
codec can catch every integration-related error at a single point.

Exception Hierarchy:
    ProviderIntegrationError (base)
    ├── ConfigurationError
    │   └── InvalidConfigValueError
    └── NotificationCodecError (packages.alerting.notifications.exceptions)

Example:
    >>> try:
    ...     config = CodecConfig.from_env()
    ... except InvalidConfigValueError as e:
    ...     logger.error(f"Bad setting {e.config_key}: {e.value!r}")
"""

from __future__ import annotations

from typing import Any


class ProviderIntegrationError(Exception):
    """Base exception for all provider integration errors.

    Attributes:
        message: Human-readable error description.
        details: Dictionary with additional error context.
        cause: Original exception that caused this error, if any.

    Example:
        >>> try:
        ...     raise ProviderIntegrationError("Something went wrong", details={"key": "value"})
        ... except ProviderIntegrationError as e:
        ...     print(f"Error: {e.message}, Details: {e.details}")
    """

    def __init__(
        self,
        message: str,
        *,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"details={self.details!r}, "
            f"cause={self.cause!r})"
        )

    def with_context(self, **kwargs: Any) -> ProviderIntegrationError:
        """Create a copy with additional context details.

        The original instance is left untouched.

        Example:
            >>> e = ProviderIntegrationError("Error", details={"key": "value"})
            >>> e.with_context(field="notifications").details
            {'key': 'value', 'field': 'notifications'}
        """
        # Bypass __init__: subclasses take different constructor arguments.
        clone = self.__class__.__new__(self.__class__, *self.args)
        clone.__dict__.update(self.__dict__)
        clone.details = {**self.details, **kwargs}
        return clone


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(ProviderIntegrationError):
    """Exception for configuration-related errors.

    Attributes:
        config_key: Key that caused the error, if known.
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        details = details or {}
        if config_key:
            details["config_key"] = config_key
        super().__init__(message, details=details, cause=cause)
        self.config_key = config_key


class InvalidConfigValueError(ConfigurationError):
    """Exception for invalid configuration values.

    Attributes:
        config_key: The configuration key with invalid value.
        value: The invalid value that was provided.
        expected: Description of what was expected.
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: str,
        value: Any = None,
        expected: str | None = None,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        details = details or {}
        details["value"] = value
        if expected:
            details["expected"] = expected
        super().__init__(message, config_key=config_key, details=details, cause=cause)
        self.value = value
        self.expected = expected
