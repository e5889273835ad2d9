"""Textual notification decoder.

Turns one ``Tag,field1[,field2...]`` string into a typed descriptor. Commas
are never escaped, so splitting on every comma is the whole of the syntax.

Decoding proceeds in a fixed order, and the first failing step decides the
error kind:

1. fewer than two fields: ``MalformedSyntaxError``
2. unknown tag: ``UnknownVariantError``
3. wrong field count for the tag: ``ArityMismatchError``
4. a payload rule fails: ``SemanticValidationError``

Example:
    >>> from packages.alerting.notifications.decoder import decode
    >>>
    >>> decode("VictorOps,iii,sre")
    VictorOpsNotification(credential_id='iii', routing_key='sre')
"""

from __future__ import annotations

from packages.alerting.notifications.config import DEFAULT_CODEC_CONFIG, CodecConfig
from packages.alerting.notifications.exceptions import (
    ArityMismatchError,
    MalformedSyntaxError,
    UnknownVariantError,
)
from packages.alerting.notifications.registry import FieldSet, lookup_variant
from packages.alerting.notifications.types import NotificationDescriptor


SEPARATOR = ","


def decode(text: str, *, config: CodecConfig | None = None) -> NotificationDescriptor:
    """Decode a textual notification descriptor.

    Args:
        text: Comma separated descriptor, tag first.
        config: Codec configuration. Defaults to DEFAULT_CODEC_CONFIG.

    Returns:
        The immutable descriptor for the tag.

    Raises:
        MalformedSyntaxError: If there is no comma in ``text``.
        UnknownVariantError: If the tag is not a known notification type.
        ArityMismatchError: If the field count does not fit the tag.
        SemanticValidationError: If a payload rule of the tag fails.
    """
    config = config or DEFAULT_CODEC_CONFIG

    values = tuple(text.split(SEPARATOR))
    if len(values) < 2:
        raise MalformedSyntaxError(text)

    tag = values[0]
    spec = lookup_variant(tag)
    if spec is None:
        raise UnknownVariantError(tag, text=text)

    if not spec.accepts_count(len(values), config):
        raise ArityMismatchError(
            spec.display_name,
            expected=spec.arity,
            actual=len(values),
            text=text,
            tag=tag,
        )

    return spec.construct(FieldSet(text=text, values=values, config=config))
