"""Notification descriptor types.

A descriptor is one decoded notification destination: where an alert is sent
when a team, an org access token, or a detector rule fires. There are exactly
fifteen descriptor shapes, one per ``NotificationType``. All of them are
immutable value objects.

Example:
    >>> from packages.alerting.notifications.types import (
    ...     NotificationType,
    ...     SlackNotification,
    ... )
    >>>
    >>> slack = SlackNotification(credential_id="cred", channel="alerts")
    >>> slack.tag
    <NotificationType.SLACK: 'Slack'>
    >>> slack.fields()
    ('cred', 'alerts')
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Union


class NotificationType(str, Enum):
    """Tags of the supported notification destinations.

    The value is the literal first field of the textual form.
    """

    AMAZON_EVENT_BRIDGE = "AmazonEventBridge"
    BIG_PANDA = "BigPanda"
    EMAIL = "Email"
    JIRA = "Jira"
    OFFICE_365 = "Office365"
    OPSGENIE = "Opsgenie"
    PAGER_DUTY = "PagerDuty"
    SERVICE_NOW = "ServiceNow"
    SLACK = "Slack"
    SPLUNK_PLATFORM = "SplunkPlatform"
    TEAM = "Team"
    TEAM_EMAIL = "TeamEmail"
    VICTOR_OPS = "VictorOps"
    WEBHOOK = "Webhook"
    X_MATTERS = "XMatters"

    def __str__(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        """Name used in user-facing error messages."""
        if self is NotificationType.OPSGENIE:
            return "OpsGenie"
        return self.value

    @classmethod
    def from_tag(cls, tag: str) -> NotificationType | None:
        """Look up a tag, returning None when it is not a known type."""
        try:
            return cls(tag)
        except ValueError:
            return None


# =============================================================================
# Descriptors
# =============================================================================


class _Descriptor:
    """Behaviour shared by every descriptor dataclass."""

    __slots__ = ()

    tag: ClassVar[NotificationType]
    field_names: ClassVar[tuple[str, ...]]

    def fields(self) -> tuple[str, ...]:
        """Payload values in wire order (the tag excluded)."""
        return tuple(getattr(self, name) for name in self.field_names)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"type": self.tag.value, **dict(zip(self.field_names, self.fields()))}


@dataclass(frozen=True, slots=True)
class AmazonEventBridgeNotification(_Descriptor):
    """Send alerts to an Amazon EventBridge integration."""

    tag: ClassVar[NotificationType] = NotificationType.AMAZON_EVENT_BRIDGE
    field_names: ClassVar[tuple[str, ...]] = ("credential_id",)

    credential_id: str


@dataclass(frozen=True, slots=True)
class BigPandaNotification(_Descriptor):
    """Send alerts to a BigPanda integration."""

    tag: ClassVar[NotificationType] = NotificationType.BIG_PANDA
    field_names: ClassVar[tuple[str, ...]] = ("credential_id",)

    credential_id: str


@dataclass(frozen=True, slots=True)
class EmailNotification(_Descriptor):
    """Send alerts to a single email address."""

    tag: ClassVar[NotificationType] = NotificationType.EMAIL
    field_names: ClassVar[tuple[str, ...]] = ("email",)

    email: str


@dataclass(frozen=True, slots=True)
class JiraNotification(_Descriptor):
    """Open issues through a Jira integration."""

    tag: ClassVar[NotificationType] = NotificationType.JIRA
    field_names: ClassVar[tuple[str, ...]] = ("credential_id",)

    credential_id: str


@dataclass(frozen=True, slots=True)
class Office365Notification(_Descriptor):
    """Send alerts to an Office 365 integration."""

    tag: ClassVar[NotificationType] = NotificationType.OFFICE_365
    field_names: ClassVar[tuple[str, ...]] = ("credential_id",)

    credential_id: str


@dataclass(frozen=True, slots=True)
class OpsgenieNotification(_Descriptor):
    """Page an Opsgenie responder.

    Attributes:
        credential_id: Opsgenie integration credential
        responder_name: Display name of the responder
        responder_id: Opsgenie responder ID
        responder_type: Responder kind (Team, User, Escalation, Schedule)
    """

    tag: ClassVar[NotificationType] = NotificationType.OPSGENIE
    field_names: ClassVar[tuple[str, ...]] = (
        "credential_id",
        "responder_name",
        "responder_id",
        "responder_type",
    )

    credential_id: str
    responder_name: str
    responder_id: str
    responder_type: str


@dataclass(frozen=True, slots=True)
class PagerDutyNotification(_Descriptor):
    """Trigger a PagerDuty incident."""

    tag: ClassVar[NotificationType] = NotificationType.PAGER_DUTY
    field_names: ClassVar[tuple[str, ...]] = ("credential_id",)

    credential_id: str


@dataclass(frozen=True, slots=True)
class ServiceNowNotification(_Descriptor):
    """Open a ServiceNow incident."""

    tag: ClassVar[NotificationType] = NotificationType.SERVICE_NOW
    field_names: ClassVar[tuple[str, ...]] = ("credential_id",)

    credential_id: str


@dataclass(frozen=True, slots=True)
class SlackNotification(_Descriptor):
    """Post to a Slack channel.

    Attributes:
        credential_id: Slack integration credential
        channel: Channel name without the leading ``#``
    """

    tag: ClassVar[NotificationType] = NotificationType.SLACK
    field_names: ClassVar[tuple[str, ...]] = ("credential_id", "channel")

    credential_id: str
    channel: str


@dataclass(frozen=True, slots=True)
class SplunkPlatformNotification(_Descriptor):
    """Send alerts to a Splunk Platform integration."""

    tag: ClassVar[NotificationType] = NotificationType.SPLUNK_PLATFORM
    field_names: ClassVar[tuple[str, ...]] = ("credential_id",)

    credential_id: str


@dataclass(frozen=True, slots=True)
class TeamNotification(_Descriptor):
    """Notify the members of a team through the team's own notification lists."""

    tag: ClassVar[NotificationType] = NotificationType.TEAM
    field_names: ClassVar[tuple[str, ...]] = ("team",)

    team: str


@dataclass(frozen=True, slots=True)
class TeamEmailNotification(_Descriptor):
    """Email every member of a team."""

    tag: ClassVar[NotificationType] = NotificationType.TEAM_EMAIL
    field_names: ClassVar[tuple[str, ...]] = ("team",)

    team: str


@dataclass(frozen=True, slots=True)
class VictorOpsNotification(_Descriptor):
    """Route an alert through VictorOps (Splunk On-Call).

    Attributes:
        credential_id: VictorOps integration credential
        routing_key: Routing key selecting the escalation policy
    """

    tag: ClassVar[NotificationType] = NotificationType.VICTOR_OPS
    field_names: ClassVar[tuple[str, ...]] = ("credential_id", "routing_key")

    credential_id: str
    routing_key: str


@dataclass(frozen=True, slots=True)
class WebhookNotification(_Descriptor):
    """Call a webhook.

    Either ``credential_id`` references a pre-registered webhook integration,
    or ``secret`` and ``url`` describe an ad-hoc one. The unused side is empty.

    Attributes:
        credential_id: Webhook integration credential
        secret: Shared secret sent with each call
        url: Absolute URL to call
    """

    tag: ClassVar[NotificationType] = NotificationType.WEBHOOK
    field_names: ClassVar[tuple[str, ...]] = ("credential_id", "secret", "url")

    credential_id: str = ""
    secret: str = ""
    url: str = ""

    @property
    def uses_credential(self) -> bool:
        """Whether this webhook points at a registered integration."""
        return self.credential_id != ""


@dataclass(frozen=True, slots=True)
class XMattersNotification(_Descriptor):
    """Send alerts to an xMatters integration."""

    tag: ClassVar[NotificationType] = NotificationType.X_MATTERS
    field_names: ClassVar[tuple[str, ...]] = ("credential_id",)

    credential_id: str


NotificationDescriptor = Union[
    AmazonEventBridgeNotification,
    BigPandaNotification,
    EmailNotification,
    JiraNotification,
    Office365Notification,
    OpsgenieNotification,
    PagerDutyNotification,
    ServiceNowNotification,
    SlackNotification,
    SplunkPlatformNotification,
    TeamNotification,
    TeamEmailNotification,
    VictorOpsNotification,
    WebhookNotification,
    XMattersNotification,
]


# =============================================================================
# Severity Lists
# =============================================================================

SEVERITIES: tuple[str, ...] = ("critical", "major", "minor", "warning", "info", "default")


@dataclass(frozen=True, slots=True)
class SeverityNotificationLists:
    """Notification destinations of a team, one ordered list per alert severity.

    Attributes:
        critical: Destinations for critical alerts
        major: Destinations for major alerts
        minor: Destinations for minor alerts
        warning: Destinations for warning alerts
        info: Destinations for info alerts
        default: Destinations used when a severity has no list of its own
    """

    critical: tuple[NotificationDescriptor, ...] = field(default_factory=tuple)
    major: tuple[NotificationDescriptor, ...] = field(default_factory=tuple)
    minor: tuple[NotificationDescriptor, ...] = field(default_factory=tuple)
    warning: tuple[NotificationDescriptor, ...] = field(default_factory=tuple)
    info: tuple[NotificationDescriptor, ...] = field(default_factory=tuple)
    default: tuple[NotificationDescriptor, ...] = field(default_factory=tuple)

    def get(self, severity: str) -> tuple[NotificationDescriptor, ...]:
        """Get the list for a severity name.

        Raises:
            KeyError: If the severity is not one of SEVERITIES.
        """
        if severity not in SEVERITIES:
            raise KeyError(severity)
        return getattr(self, severity)

    def items(self) -> list[tuple[str, tuple[NotificationDescriptor, ...]]]:
        """Severity name and list pairs in SEVERITIES order."""
        return [(severity, getattr(self, severity)) for severity in SEVERITIES]

    @property
    def is_empty(self) -> bool:
        """Whether no severity has any destination."""
        return not any(values for _, values in self.items())
