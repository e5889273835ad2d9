"""Batch codec for notification lists.

Teams, org access tokens and detector rules carry ordered lists of textual
descriptors. Lists keep their order in both directions, and decoding stops at
the first invalid element: its error is raised unchanged apart from the
element's position being recorded on ``error.index``.

Teams keep one list per alert severity; ``decode_severity_lists`` and
``encode_severity_lists`` convert those between the
``notifications_<severity>`` keyed form and ``SeverityNotificationLists``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from packages.alerting.notifications.config import CodecConfig
from packages.alerting.notifications.decoder import decode
from packages.alerting.notifications.encoder import encode
from packages.alerting.notifications.exceptions import NotificationCodecError
from packages.alerting.notifications.types import (
    SEVERITIES,
    NotificationDescriptor,
    SeverityNotificationLists,
)


SEVERITY_KEY_PREFIX = "notifications_"


def severity_key(severity: str) -> str:
    """Key under which a severity's list is stored, e.g. ``notifications_info``."""
    return f"{SEVERITY_KEY_PREFIX}{severity}"


def decode_list(
    items: Iterable[str] | None,
    *,
    config: CodecConfig | None = None,
) -> list[NotificationDescriptor]:
    """Decode textual descriptors in order, failing on the first invalid one.

    Args:
        items: Textual descriptors. None is treated as an empty list.
        config: Codec configuration passed to every decode.

    Returns:
        Descriptors in input order.

    Raises:
        NotificationCodecError: The first element's error, with ``index`` set.
    """
    if items is None:
        return []

    descriptors: list[NotificationDescriptor] = []
    for index, text in enumerate(items):
        try:
            descriptors.append(decode(text, config=config))
        except NotificationCodecError as e:
            e.at_index(index)
            raise
    return descriptors


def encode_list(items: Iterable[NotificationDescriptor] | None) -> list[str]:
    """Encode descriptors in order.

    Raises:
        TypeError: If an element is not a notification descriptor.
    """
    if items is None:
        return []
    return [encode(descriptor) for descriptor in items]


def decode_severity_lists(
    data: Mapping[str, Sequence[str] | None],
    *,
    config: CodecConfig | None = None,
) -> SeverityNotificationLists:
    """Decode the ``notifications_<severity>`` lists of a team.

    Missing keys give empty lists. The first invalid element aborts decoding;
    its error carries the list key in ``details["field"]``.

    Raises:
        NotificationCodecError: For the first invalid element.
    """
    decoded: dict[str, tuple[NotificationDescriptor, ...]] = {}
    for severity in SEVERITIES:
        key = severity_key(severity)
        try:
            decoded[severity] = tuple(decode_list(data.get(key), config=config))
        except NotificationCodecError as e:
            e.details["field"] = key
            raise
    return SeverityNotificationLists(**decoded)


def encode_severity_lists(lists: SeverityNotificationLists) -> dict[str, Any]:
    """Encode a team's lists under ``notifications_<severity>`` keys.

    Severities without destinations are left out.
    """
    return {
        severity_key(severity): encode_list(descriptors)
        for severity, descriptors in lists.items()
        if descriptors
    }
