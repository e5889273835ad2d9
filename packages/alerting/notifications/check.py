"""Field validators for user-authored notification settings.

These adapt the codec to the shape a configuration schema expects from a
per-field validator: take an arbitrary value and the path of the field it
came from, and return diagnostics instead of raising. An empty tuple means
the value is valid.

Rejections are logged at DEBUG level with the field path; Webhook secrets
are masked before they reach any handler.

Example:
    >>> from packages.alerting.notifications.check import check_notification
    >>>
    >>> check_notification("Slack,creds,#ops", path=("notifications", 0))
    (Diagnostic(severity=<DiagnosticSeverity.ERROR: 'error'>, summary='exclude the # from channel names in "#ops"', path=('notifications', 0)),)
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from common.logging import LogContext, get_logger
from packages.alerting.notifications.config import CodecConfig
from packages.alerting.notifications.decoder import decode
from packages.alerting.notifications.exceptions import NotificationCodecError
from packages.alerting.notifications.validators import EmailSyntaxError, parse_email_address


logger = get_logger(__name__)

PathElement = str | int


class DiagnosticSeverity(str, Enum):
    """Severity of a diagnostic."""

    ERROR = "error"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A problem found in a configuration value.

    Attributes:
        severity: Diagnostic severity
        summary: Message shown to the user
        path: Location of the offending value, outermost key first
    """

    severity: DiagnosticSeverity
    summary: str
    path: tuple[PathElement, ...] = ()

    @property
    def is_error(self) -> bool:
        return self.severity == DiagnosticSeverity.ERROR

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "severity": self.severity.value,
            "summary": self.summary,
            "path": list(self.path),
        }


def format_path(path: Iterable[PathElement]) -> str:
    """Render a path as dotted text, e.g. ``notifications_major.0``."""
    return ".".join(str(element) for element in path)


def _error(summary: str, path: tuple[PathElement, ...]) -> tuple[Diagnostic, ...]:
    return (Diagnostic(severity=DiagnosticSeverity.ERROR, summary=summary, path=path),)


def _type_error(value: Any, path: tuple[PathElement, ...]) -> tuple[Diagnostic, ...]:
    logger.debug("Rejected non-string value", path=format_path(path), value_type=type(value).__name__)
    return _error(f"expected {value} to be of type string", path)


def check_notification(
    value: Any,
    path: Iterable[PathElement] = (),
    *,
    config: CodecConfig | None = None,
) -> tuple[Diagnostic, ...]:
    """Validate one textual notification descriptor.

    Args:
        value: Value read from the configuration.
        path: Location of the value.
        config: Codec configuration used to decode.

    Returns:
        No diagnostics when ``value`` decodes, otherwise one error carrying
        the decoder's message.
    """
    path = tuple(path)
    if not isinstance(value, str):
        return _type_error(value, path)

    with LogContext(operation="check_notification"):
        try:
            decode(value, config=config)
        except NotificationCodecError as e:
            logger.debug(
                f"Rejected notification {value}",
                path=format_path(path),
                kind=e.kind,
                reason=e.message,
            )
            return _error(e.message, path)
    return ()


def check_email(value: Any, path: Iterable[PathElement] = ()) -> tuple[Diagnostic, ...]:
    """Validate one email address.

    Returns:
        No diagnostics for a valid address, otherwise one error carrying the
        address parser's message.
    """
    path = tuple(path)
    if not isinstance(value, str):
        return _type_error(value, path)

    try:
        parse_email_address(value)
    except EmailSyntaxError as e:
        logger.debug("Rejected email address", path=format_path(path), reason=str(e))
        return _error(str(e), path)
    return ()


def check_notification_list(
    values: Any,
    path: Iterable[PathElement] = (),
    *,
    config: CodecConfig | None = None,
) -> tuple[Diagnostic, ...]:
    """Validate every element of a notification list.

    Unlike ``decode_list`` this does not stop at the first invalid element:
    each one gets its own diagnostic, with its index appended to ``path``.
    None is treated as an empty list.
    """
    path = tuple(path)
    if values is None:
        return ()
    if isinstance(values, str) or not isinstance(values, Iterable):
        return _error(f"expected {values} to be a list of strings", path)

    diagnostics: list[Diagnostic] = []
    with LogContext(operation="check_notification_list"):
        for index, value in enumerate(values):
            diagnostics.extend(check_notification(value, (*path, index), config=config))
    return tuple(diagnostics)
