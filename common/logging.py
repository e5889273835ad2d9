"""Structured logging for the provider notification packages.

Supports:

- Structured logging with context propagation
- Sensitive data masking (webhook secrets never reach a handler)
- Text and JSON output
- Log level filtering

The notification codec itself never logs; its callers at the configuration
boundary (see ``packages.alerting.notifications.check``) do.

Example:
    >>> from common.logging import get_logger, LogContext
    >>> logger = get_logger(__name__)
    >>> with LogContext(operation="validate", resource="team"):
    ...     logger.debug("Rejected notification", path="notifications_major.0")
"""

from __future__ import annotations

import json
import re
import sys
from abc import abstractmethod
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import (
    TYPE_CHECKING,
    Any,
    ClassVar,
    Protocol,
    Self,
    runtime_checkable,
)


if TYPE_CHECKING:
    from collections.abc import Callable, Mapping


# =============================================================================
# Constants and Configuration
# =============================================================================


class LogLevel(Enum):
    """Log severity levels with numeric values for comparison."""

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50

    @classmethod
    def from_string(cls, level: str) -> LogLevel:
        """Create from string representation, falling back to INFO."""
        try:
            return cls[level.upper()]
        except KeyError:
            return cls.INFO


MASK_VALUE = "***MASKED***"

# Regex masks applied to free-form strings. The first two hide the secret slot
# of a textual Webhook descriptor ("Webhook,<credential>,<secret>,<url>") and
# the value quoted by the invalid Webhook URL message, which is the secret.
DEFAULT_SENSITIVE_PATTERNS: tuple[tuple[str, str], ...] = (
    (r"(Webhook,[^,]*,)[^,]+", rf"\1{MASK_VALUE}"),
    (r'(invalid Webhook URL ")(?:[^"\\]|\\.)*(")', rf"\1{MASK_VALUE}\2"),
    (r"(secret=)[^&\s;]+", rf"\1{MASK_VALUE}"),
    (r"(token=)[^&\s;]+", rf"\1{MASK_VALUE}"),
    (r"(://[^:/]+:)[^@/]+(@)", rf"\1{MASK_VALUE}\2"),
)

# Keys whose values are always masked in structured data
DEFAULT_SENSITIVE_KEYS: frozenset[str] = frozenset({
    "secret",
    "password",
    "token",
    "api_key",
    "access_token",
    "authorization",
})


# =============================================================================
# Context Management
# =============================================================================


@dataclass(frozen=True, slots=True)
class LogContextData:
    """Immutable container for log context data.

    Attributes:
        operation: Current operation name (decode, encode, validate).
        resource: Resource kind whose configuration is being processed.
        correlation_id: Request/transaction correlation ID.
        extra: Additional context fields.
    """

    operation: str | None = None
    resource: str | None = None
    correlation_id: str | None = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    def merge(self, other: LogContextData) -> LogContextData:
        """Create a new context with merged data; ``other`` takes precedence."""
        return LogContextData(
            operation=other.operation or self.operation,
            resource=other.resource or self.resource,
            correlation_id=other.correlation_id or self.correlation_id,
            extra={**self.extra, **other.extra},
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result: dict[str, Any] = {}
        if self.operation:
            result["operation"] = self.operation
        if self.resource:
            result["resource"] = self.resource
        if self.correlation_id:
            result["correlation_id"] = self.correlation_id
        result.update(self.extra)
        return result


_log_context: ContextVar[LogContextData] = ContextVar("log_context", default=LogContextData())


class LogContext:
    """Context manager for log context propagation.

    Supports nesting with context merging.

    Example:
        >>> with LogContext(operation="validate", resource="detector"):
        ...     logger.info("Starting")
        ...     with LogContext(rule="cpu high"):
        ...         logger.info("Checking rule")
    """

    def __init__(
        self,
        *,
        operation: str | None = None,
        resource: str | None = None,
        correlation_id: str | None = None,
        **extra: Any,
    ) -> None:
        self._new_context = LogContextData(
            operation=operation,
            resource=resource,
            correlation_id=correlation_id,
            extra=extra,
        )
        self._token: Any = None

    def __enter__(self) -> Self:
        current = _log_context.get()
        self._token = _log_context.set(current.merge(self._new_context))
        return self

    def __exit__(self, *args: Any) -> None:
        if self._token is not None:
            _log_context.reset(self._token)


def get_current_context() -> LogContextData:
    """Get the current log context (empty if none set)."""
    return _log_context.get()


# =============================================================================
# Log Record
# =============================================================================


@dataclass(slots=True)
class LogRecord:
    """Structured log record.

    Attributes:
        level: Log severity level.
        message: Log message.
        logger_name: Name of the logger.
        timestamp: When the log was created.
        context: Associated context data.
        extra: Additional structured fields.
        exc_info: Exception information if any.
    """

    level: LogLevel
    message: str
    logger_name: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    context: LogContextData = field(default_factory=LogContextData)
    extra: dict[str, Any] = field(default_factory=dict)
    exc_info: BaseException | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        result = {
            "level": self.level.name,
            "message": self.message,
            "logger": self.logger_name,
            "timestamp": self.timestamp.isoformat(),
            **self.context.to_dict(),
            **self.extra,
        }
        if self.exc_info:
            result["exception"] = str(self.exc_info)
            result["exception_type"] = type(self.exc_info).__name__
        return result


# =============================================================================
# Protocols
# =============================================================================


@runtime_checkable
class LogHandler(Protocol):
    """Protocol for log handlers."""

    @abstractmethod
    def handle(self, record: LogRecord) -> None:
        """Handle a log record."""
        ...

    @abstractmethod
    def flush(self) -> None:
        """Flush any buffered output."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Close the handler and release resources."""
        ...


@runtime_checkable
class LogFormatter(Protocol):
    """Protocol for log formatters."""

    @abstractmethod
    def format(self, record: LogRecord) -> str:
        """Format a log record."""
        ...


# =============================================================================
# Sensitive Data Masking
# =============================================================================


class SensitiveDataMasker:
    """Masks sensitive data in log messages and structured data.

    Example:
        >>> masker = SensitiveDataMasker()
        >>> masker.mask_string("Webhook,,hunter2,https://example.com")
        'Webhook,,***MASKED***,https://example.com'
        >>> masker.mask_dict({"secret": "hunter2", "type": "Webhook"})
        {'secret': '***MASKED***', 'type': 'Webhook'}
    """

    MASK_VALUE: ClassVar[str] = MASK_VALUE

    def __init__(
        self,
        patterns: tuple[tuple[str, str], ...] | None = None,
        sensitive_keys: frozenset[str] | None = None,
        enabled: bool = True,
    ) -> None:
        self.enabled = enabled
        self._sensitive_keys = sensitive_keys or DEFAULT_SENSITIVE_KEYS
        self._compiled_patterns = tuple(
            (re.compile(pattern, re.IGNORECASE), replacement)
            for pattern, replacement in (patterns or DEFAULT_SENSITIVE_PATTERNS)
        )

    def mask_string(self, value: str) -> str:
        """Mask sensitive data in a string."""
        if not self.enabled or not value:
            return value

        result = value
        for pattern, replacement in self._compiled_patterns:
            result = pattern.sub(replacement, result)
        return result

    def mask_value(self, value: Any) -> Any:
        """Mask a single value based on type."""
        if not self.enabled:
            return value

        if isinstance(value, str):
            return self.mask_string(value)
        elif isinstance(value, dict):
            return self.mask_dict(value)
        elif isinstance(value, (list, tuple)):
            return type(value)(self.mask_value(v) for v in value)
        return value

    def mask_dict(self, data: dict[str, Any]) -> dict[str, Any]:
        """Mask sensitive data in a dictionary, recursing into nested values."""
        if not self.enabled:
            return data

        result: dict[str, Any] = {}
        for key, value in data.items():
            if key.lower() in self._sensitive_keys:
                result[key] = self.MASK_VALUE
            else:
                result[key] = self.mask_value(value)
        return result


_default_masker = SensitiveDataMasker()


def get_masker() -> SensitiveDataMasker:
    """Get the default sensitive data masker."""
    return _default_masker


# =============================================================================
# Formatters
# =============================================================================


class TextFormatter:
    """Plain text log formatter.

    Example output:
        2024-01-15T10:30:45.123456+00:00 [DEBUG] packages.alerting.notifications.check: Message | resource=team
    """

    def __init__(
        self,
        include_context: bool = True,
        include_extra: bool = True,
        timestamp_format: str | None = None,
    ) -> None:
        self.include_context = include_context
        self.include_extra = include_extra
        self.timestamp_format = timestamp_format

    def format(self, record: LogRecord) -> str:
        """Format log record as text."""
        if self.timestamp_format:
            timestamp = record.timestamp.strftime(self.timestamp_format)
        else:
            timestamp = record.timestamp.isoformat()

        parts = [
            timestamp,
            f"[{record.level.name}]",
            f"{record.logger_name}:",
            record.message,
        ]

        if self.include_context:
            context_dict = record.context.to_dict()
            if context_dict:
                parts.append("| " + " ".join(f"{k}={v}" for k, v in context_dict.items()))

        if self.include_extra and record.extra:
            parts.append("| " + " ".join(f"{k}={v}" for k, v in record.extra.items()))

        if record.exc_info:
            parts.append(f"| exception={record.exc_info!r}")

        return " ".join(parts)


class JSONFormatter:
    """JSON log formatter for structured logging systems."""

    def __init__(
        self,
        masker: SensitiveDataMasker | None = None,
        indent: int | None = None,
    ) -> None:
        self._masker = masker or _default_masker
        self._indent = indent

    def format(self, record: LogRecord) -> str:
        """Format log record as JSON."""
        masked_data = self._masker.mask_dict(record.to_dict())
        return json.dumps(masked_data, indent=self._indent, default=str)


# =============================================================================
# Handlers
# =============================================================================


class StreamHandler:
    """Handler that writes to a stream (stderr by default)."""

    def __init__(
        self,
        stream: Any = None,
        formatter: LogFormatter | None = None,
        level: LogLevel = LogLevel.DEBUG,
    ) -> None:
        self._stream = stream or sys.stderr
        self._formatter = formatter or TextFormatter()
        self._level = level
        self._closed = False

    def handle(self, record: LogRecord) -> None:
        """Write a formatted record unless closed or below level."""
        if self._closed or record.level.value < self._level.value:
            return

        try:
            self._stream.write(self._formatter.format(record) + "\n")
        except Exception:
            # Fail silently to avoid logging loops
            pass

    def flush(self) -> None:
        """Flush the stream."""
        if not self._closed and hasattr(self._stream, "flush"):
            try:
                self._stream.flush()
            except Exception:
                pass

    def close(self) -> None:
        """Close the handler."""
        self.flush()
        self._closed = True


class BufferingHandler:
    """Handler that keeps records in memory until flushed.

    Callers that surface diagnostics in bulk (one message per rejected
    configuration field) collect records here.
    """

    def __init__(
        self,
        capacity: int = 100,
        flush_callback: Callable[[list[LogRecord]], None] | None = None,
    ) -> None:
        self._capacity = capacity
        self._flush_callback = flush_callback
        self._buffer: list[LogRecord] = []
        self._closed = False

    @property
    def records(self) -> tuple[LogRecord, ...]:
        """Records currently buffered."""
        return tuple(self._buffer)

    def handle(self, record: LogRecord) -> None:
        """Buffer the record, flushing when capacity is reached."""
        if self._closed:
            return

        self._buffer.append(record)
        if len(self._buffer) >= self._capacity:
            self.flush()

    def flush(self) -> None:
        """Flush buffered records."""
        if self._buffer and self._flush_callback:
            try:
                self._flush_callback(list(self._buffer))
            except Exception:
                pass
        self._buffer.clear()

    def close(self) -> None:
        """Close the handler."""
        self.flush()
        self._closed = True


class NullHandler:
    """Handler that discards all records."""

    def handle(self, record: LogRecord) -> None:
        pass

    def flush(self) -> None:
        pass

    def close(self) -> None:
        pass


# =============================================================================
# Logger Implementation
# =============================================================================


class ProviderLogger:
    """Structured logger with context propagation and masking.

    Example:
        >>> logger = ProviderLogger("packages.alerting.notifications.check")
        >>> logger.debug("Rejected notification", path="notifications.0")
    """

    def __init__(
        self,
        name: str,
        level: LogLevel = LogLevel.DEBUG,
        handlers: list[LogHandler] | None = None,
        masker: SensitiveDataMasker | None = None,
    ) -> None:
        self.name = name
        self.level = level
        self._handlers: list[LogHandler] = handlers or []
        self._masker = masker or _default_masker
        self._disabled = False

    def add_handler(self, handler: LogHandler) -> None:
        """Add a handler to the logger."""
        if handler not in self._handlers:
            self._handlers.append(handler)

    def is_enabled_for(self, level: LogLevel) -> bool:
        """Check if logger is enabled for the given level."""
        return not self._disabled and level.value >= self.level.value

    def _log(
        self,
        level: LogLevel,
        message: str,
        exc_info: BaseException | None = None,
        **kwargs: Any,
    ) -> None:
        if not self.is_enabled_for(level):
            return

        record = LogRecord(
            level=level,
            message=self._masker.mask_string(message),
            logger_name=self.name,
            context=get_current_context(),
            extra=self._masker.mask_dict(kwargs),
            exc_info=exc_info,
        )

        for handler in self._handlers:
            try:
                handler.handle(record)
            except Exception:
                # Fail silently to avoid logging loops
                pass

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log at DEBUG level."""
        self._log(LogLevel.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        """Log at INFO level."""
        self._log(LogLevel.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log at WARNING level."""
        self._log(LogLevel.WARNING, message, **kwargs)

    def error(self, message: str, exc_info: BaseException | None = None, **kwargs: Any) -> None:
        """Log at ERROR level."""
        self._log(LogLevel.ERROR, message, exc_info=exc_info, **kwargs)


# =============================================================================
# Logger Registry
# =============================================================================


class LoggerRegistry:
    """Registry handing out one logger per name."""

    def __init__(self) -> None:
        self._loggers: dict[str, ProviderLogger] = {}
        self._root_handlers: list[LogHandler] = [NullHandler()]
        self._root_level: LogLevel = LogLevel.INFO

    def get_logger(self, name: str, level: LogLevel | None = None) -> ProviderLogger:
        """Get or create a logger by name."""
        if name not in self._loggers:
            self._loggers[name] = ProviderLogger(
                name=name,
                level=level or self._root_level,
                handlers=list(self._root_handlers),
            )
        return self._loggers[name]

    def configure(
        self,
        level: LogLevel = LogLevel.INFO,
        handlers: list[LogHandler] | None = None,
        format: str = "text",
    ) -> None:
        """Configure the root logging settings and apply them to existing loggers.

        Args:
            level: Default log level.
            handlers: Default handlers; a stderr stream handler when omitted.
            format: Format type ('text' or 'json') for the default handler.
        """
        self._root_level = level
        if handlers is not None:
            self._root_handlers = list(handlers)
        else:
            formatter: LogFormatter = JSONFormatter() if format == "json" else TextFormatter()
            self._root_handlers = [StreamHandler(formatter=formatter, level=level)]

        for logger in self._loggers.values():
            logger.level = level
            logger._handlers = list(self._root_handlers)

    def disable(self) -> None:
        """Disable all logging."""
        for logger in self._loggers.values():
            logger._disabled = True

    def enable(self) -> None:
        """Enable all logging."""
        for logger in self._loggers.values():
            logger._disabled = False


_registry = LoggerRegistry()


def get_logger(name: str, level: LogLevel | None = None) -> ProviderLogger:
    """Get a logger by name.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Codec configured")
    """
    return _registry.get_logger(name, level)


def configure_logging(
    level: LogLevel | str = LogLevel.INFO,
    handlers: list[LogHandler] | None = None,
    format: str = "text",
) -> None:
    """Configure global logging settings.

    Example:
        >>> configure_logging(level="DEBUG", format="json")
    """
    if isinstance(level, str):
        level = LogLevel.from_string(level)
    _registry.configure(level=level, handlers=handlers, format=format)
