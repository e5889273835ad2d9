"""Textual notification encoder.

The inverse of the decoder: renders a descriptor in its canonical
``Tag,field1[,field2...]`` form. Encoding never fails for a descriptor; the
only error is being handed something that is not one.
"""

from __future__ import annotations

from typing import Any

from packages.alerting.notifications.decoder import SEPARATOR
from packages.alerting.notifications.types import (
    AmazonEventBridgeNotification,
    BigPandaNotification,
    EmailNotification,
    JiraNotification,
    NotificationDescriptor,
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


def encode_fields(descriptor: NotificationDescriptor | Any) -> tuple[str, ...]:
    """Return the tag followed by the payload fields in wire order.

    Raises:
        TypeError: If ``descriptor`` is not a notification descriptor.
    """
    match descriptor:
        case (
            AmazonEventBridgeNotification(credential_id=credential_id)
            | BigPandaNotification(credential_id=credential_id)
            | JiraNotification(credential_id=credential_id)
            | Office365Notification(credential_id=credential_id)
            | PagerDutyNotification(credential_id=credential_id)
            | ServiceNowNotification(credential_id=credential_id)
            | SplunkPlatformNotification(credential_id=credential_id)
            | XMattersNotification(credential_id=credential_id)
        ):
            payload: tuple[str, ...] = (credential_id,)
        case EmailNotification(email=email):
            payload = (email,)
        case TeamNotification(team=team) | TeamEmailNotification(team=team):
            payload = (team,)
        case OpsgenieNotification():
            payload = (
                descriptor.credential_id,
                descriptor.responder_name,
                descriptor.responder_id,
                descriptor.responder_type,
            )
        case SlackNotification(credential_id=credential_id, channel=channel):
            payload = (credential_id, channel)
        case VictorOpsNotification(credential_id=credential_id, routing_key=routing_key):
            payload = (credential_id, routing_key)
        case WebhookNotification(credential_id=credential_id, secret=secret, url=url):
            payload = (credential_id, secret, url)
        case _:
            raise TypeError(f"unknown type {type(descriptor).__name__} provided")
    return (descriptor.tag.value, *payload)


def encode(descriptor: NotificationDescriptor) -> str:
    """Encode a descriptor as its canonical textual form.

    Example:
        >>> encode(VictorOpsNotification(credential_id="iii", routing_key="sre"))
        'VictorOps,iii,sre'

    Raises:
        TypeError: If ``descriptor`` is not a notification descriptor.
    """
    return SEPARATOR.join(encode_fields(descriptor))
