"""REST API mapping for notification descriptors.

The remote API represents a notification as a JSON object with a ``type``
discriminator and camelCase payload keys. Objects coming back from the API
are trusted and not re-validated; only the type has to be known.

Example:
    >>> to_api_dict(SlackNotification(credential_id="cred", channel="ops"))
    {'type': 'Slack', 'credentialId': 'cred', 'channel': 'ops'}
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from packages.alerting.notifications.exceptions import UnknownVariantError
from packages.alerting.notifications.registry import get_variant_spec
from packages.alerting.notifications.types import (
    NotificationDescriptor,
    NotificationType,
    OpsgenieNotification,
    TeamEmailNotification,
    TeamNotification,
    WebhookNotification,
)


API_FIELD_NAMES: dict[str, str] = {
    "credential_id": "credentialId",
    "email": "email",
    "team": "team",
    "channel": "channel",
    "routing_key": "routingKey",
    "responder_name": "responderName",
    "responder_id": "responderId",
    "responder_type": "responderType",
    "secret": "secret",
    "url": "url",
}

# Spellings of the type discriminator the API is known to return.
API_TYPE_ALIASES: dict[str, NotificationType] = {
    "OpsGenie": NotificationType.OPSGENIE,
}

# Fields the API client leaves out of the object when they are empty.
_OMIT_EMPTY: dict[type, frozenset[str]] = {
    OpsgenieNotification: frozenset({"responder_name", "responder_id", "responder_type"}),
    TeamNotification: frozenset({"team"}),
    TeamEmailNotification: frozenset({"team"}),
    WebhookNotification: frozenset({"credential_id", "secret", "url"}),
}


def to_api_dict(descriptor: NotificationDescriptor) -> dict[str, Any]:
    """Render a descriptor as the API's JSON object.

    Raises:
        TypeError: If ``descriptor`` is not a notification descriptor.
    """
    tag = getattr(descriptor, "tag", None)
    if not isinstance(tag, NotificationType):
        raise TypeError(f"unknown type {type(descriptor).__name__} provided")

    omit_empty = _OMIT_EMPTY.get(type(descriptor), frozenset())
    data: dict[str, Any] = {"type": tag.value}
    for name, value in zip(descriptor.field_names, descriptor.fields()):
        if value == "" and name in omit_empty:
            continue
        data[API_FIELD_NAMES[name]] = value
    return data


def api_type(value: str) -> NotificationType | None:
    """Resolve an API type discriminator, or None if it is unknown."""
    return API_TYPE_ALIASES.get(value) or NotificationType.from_tag(value)


def from_api_dict(data: Mapping[str, Any]) -> NotificationDescriptor:
    """Build a descriptor from the API's JSON object.

    Missing payload keys are read as empty strings.

    Raises:
        UnknownVariantError: If ``type`` is missing or not a known type.
    """
    raw_type = data.get("type")
    notification_type = api_type(raw_type) if isinstance(raw_type, str) else None
    if notification_type is None:
        raise UnknownVariantError(str(raw_type))

    spec = get_variant_spec(notification_type)
    values = [
        data.get(API_FIELD_NAMES[name]) or ""
        for name in spec.descriptor_type.field_names
    ]
    return spec.descriptor_type(*values)


def to_api_list(items: Iterable[NotificationDescriptor] | None) -> list[dict[str, Any]]:
    """Render descriptors as API objects, keeping their order."""
    if items is None:
        return []
    return [to_api_dict(descriptor) for descriptor in items]


def from_api_list(items: Iterable[Mapping[str, Any]] | None) -> list[NotificationDescriptor]:
    """Build descriptors from API objects, keeping their order.

    Raises:
        UnknownVariantError: For the first object of unknown type, with ``index`` set.
    """
    if items is None:
        return []

    descriptors: list[NotificationDescriptor] = []
    for index, data in enumerate(items):
        try:
            descriptors.append(from_api_dict(data))
        except UnknownVariantError as e:
            e.at_index(index)
            raise
    return descriptors
