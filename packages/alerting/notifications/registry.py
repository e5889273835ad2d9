"""Variant registry.

The closed table of notification types the codec understands. Each entry
knows how many comma separated fields its textual form has and which rule,
if any, its payload must satisfy beyond that.

The table is built once at import and exposed through a read-only mapping;
it is safe to read from any number of threads. The module refuses to import
if the table and ``NotificationType`` ever drift apart.

Example:
    >>> from packages.alerting.notifications.registry import lookup_variant
    >>>
    >>> spec = lookup_variant("Slack")
    >>> spec.arity
    3
    >>> lookup_variant("Carrier Pigeon") is None
    True
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from packages.alerting.notifications.config import CodecConfig
from packages.alerting.notifications.exceptions import SemanticValidationError, quote
from packages.alerting.notifications.types import (
    AmazonEventBridgeNotification,
    BigPandaNotification,
    EmailNotification,
    JiraNotification,
    NotificationDescriptor,
    NotificationType,
    Office365Notification,
    OpsgenieNotification,
    PagerDutyNotification,
    ServiceNowNotification,
    SlackNotification,
    SplunkPlatformNotification,
    TeamEmailNotification,
    TeamNotification,
    VictorOpsNotification,
    WebhookNotification,
    XMattersNotification,
)
from packages.alerting.notifications.validators import (
    EmailSyntaxError,
    URLSyntaxError,
    validate_absolute_url,
    validate_email_address,
)


WEBHOOK_EXCLUSIVITY_REASON = "use one of URL and secret or credential id"


@dataclass(frozen=True, slots=True)
class FieldSet:
    """The split fields of one textual descriptor, tag first.

    Attributes:
        text: The original text
        values: All comma separated fields, including the tag
        config: Codec configuration in effect
    """

    text: str
    values: tuple[str, ...]
    config: CodecConfig

    @property
    def tag(self) -> str:
        return self.values[0]

    @property
    def count(self) -> int:
        return len(self.values)

    def semantic_error(
        self,
        message: str,
        *,
        reason: str | None = None,
        cause: Exception | None = None,
    ) -> SemanticValidationError:
        """Build a SemanticValidationError carrying this field set's context."""
        return SemanticValidationError(
            message,
            reason=reason,
            text=self.text,
            tag=self.tag,
            cause=cause,
        )


Validator = Callable[[FieldSet], None]


@dataclass(frozen=True, slots=True)
class VariantSpec:
    """Registry entry for one notification type.

    Attributes:
        tag: The notification type
        descriptor_type: Dataclass built for this type
        arity: Exact number of comma separated fields, tag included
        validate: Payload rule run after the field count check, if any
    """

    tag: NotificationType
    descriptor_type: type[NotificationDescriptor]
    arity: int
    validate: Validator | None = None

    @property
    def display_name(self) -> str:
        return self.tag.display_name

    def accepts_count(self, count: int, config: CodecConfig) -> bool:
        """Whether ``count`` fields are acceptable under ``config``."""
        if count == self.arity:
            return True
        # Only single-payload types ever tolerated trailing fields.
        return not config.strict_arity and self.arity == 2 and count > self.arity

    def construct(self, fields: FieldSet) -> NotificationDescriptor:
        """Run the payload rule and build the descriptor."""
        if self.validate is not None:
            self.validate(fields)
        return self.descriptor_type(*fields.values[1:self.arity])


# =============================================================================
# Payload rules
# =============================================================================


def _validate_email(fields: FieldSet) -> None:
    try:
        validate_email_address(fields.values[1])
    except EmailSyntaxError as e:
        # The parser's message is surfaced as is.
        raise fields.semantic_error(str(e), reason=str(e), cause=e) from e


def _validate_slack(fields: FieldSet) -> None:
    channel = fields.values[2]
    if "#" in channel:
        raise fields.semantic_error(
            f"exclude the # from channel names in {quote(channel)}",
            reason="channel contains #",
        )


def _validate_webhook(fields: FieldSet) -> None:
    _, credential_id, secret, url = fields.values
    if credential_id != "":
        exclusive = secret == "" and url == ""
    else:
        exclusive = secret != "" and url != ""
    if not exclusive:
        raise fields.semantic_error(
            "invalid Webhook notification string, please consult the documentation "
            f"({WEBHOOK_EXCLUSIVITY_REASON})",
            reason=WEBHOOK_EXCLUSIVITY_REASON,
        )

    if url == "":
        return
    try:
        validate_absolute_url(url)
    except URLSyntaxError as e:
        # Historically the secret was quoted here, not the URL.
        reported = url if fields.config.report_webhook_url else secret
        raise fields.semantic_error(
            f"invalid Webhook URL {quote(reported)}",
            reason="invalid url",
            cause=e,
        ) from e


# =============================================================================
# Registry
# =============================================================================


def _entry(
    descriptor_type: type[NotificationDescriptor],
    validate: Validator | None = None,
) -> tuple[NotificationType, VariantSpec]:
    spec = VariantSpec(
        tag=descriptor_type.tag,
        descriptor_type=descriptor_type,
        arity=len(descriptor_type.field_names) + 1,
        validate=validate,
    )
    return spec.tag, spec


VARIANT_REGISTRY: Mapping[NotificationType, VariantSpec] = MappingProxyType(dict([
    _entry(AmazonEventBridgeNotification),
    _entry(BigPandaNotification),
    _entry(EmailNotification, _validate_email),
    _entry(JiraNotification),
    _entry(Office365Notification),
    _entry(OpsgenieNotification),
    _entry(PagerDutyNotification),
    _entry(ServiceNowNotification),
    _entry(SlackNotification, _validate_slack),
    _entry(SplunkPlatformNotification),
    _entry(TeamNotification),
    _entry(TeamEmailNotification),
    _entry(VictorOpsNotification),
    _entry(WebhookNotification, _validate_webhook),
    _entry(XMattersNotification),
]))


def _verify_registry() -> None:
    missing = [tag.value for tag in NotificationType if tag not in VARIANT_REGISTRY]
    if missing:
        raise RuntimeError(f"notification types without a registry entry: {missing}")


_verify_registry()


def get_variant_spec(tag: NotificationType) -> VariantSpec:
    """Get the registry entry for a notification type."""
    return VARIANT_REGISTRY[tag]


def lookup_variant(tag: str) -> VariantSpec | None:
    """Get the registry entry for a textual tag, or None if it is unknown.

    Tags are matched exactly; ``slack`` is not ``Slack``.
    """
    notification_type = NotificationType.from_tag(tag)
    if notification_type is None:
        return None
    return VARIANT_REGISTRY[notification_type]


def known_tags() -> tuple[str, ...]:
    """All textual tags, in registry order."""
    return tuple(tag.value for tag in VARIANT_REGISTRY)
