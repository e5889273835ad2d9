"""Notification codec exceptions.

Every failure to decode a textual notification falls into one of four kinds.
The message of each exception is the exact text users have always seen for
that failure, so ``str(error)`` never carries extra decoration; structured
context is available on attributes and in ``details``.

Exception Hierarchy:
    NotificationCodecError (base)
    ├── MalformedSyntaxError (fewer than two comma separated fields)
    ├── UnknownVariantError (tag is not a known notification type)
    ├── ArityMismatchError (wrong number of fields for the tag)
    └── SemanticValidationError (a variant specific rule failed)

Example:
    >>> try:
    ...     decode("Slack,creds,#alerts")
    ... except SemanticValidationError as e:
    ...     print(e)
    exclude the # from channel names in "#alerts"
"""

from __future__ import annotations

from typing import Any

from common.exceptions import ProviderIntegrationError


_SIMPLE_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
    '"': '\\"',
}


def quote(value: str) -> str:
    """Double-quote a value the way the legacy messages did.

    Printable characters are kept, backslash and double quote are escaped,
    and anything else becomes a ``\\x``, ``\\u`` or ``\\U`` escape.

    Example:
        >>> quote('say "hi"')
        '"say \\\\"hi\\\\""'
    """
    out = ['"']
    for char in value:
        if char in _SIMPLE_ESCAPES:
            out.append(_SIMPLE_ESCAPES[char])
        elif char.isprintable():
            out.append(char)
        else:
            code = ord(char)
            if code < 0x80:
                out.append(f"\\x{code:02x}")
            elif code < 0x10000:
                out.append(f"\\u{code:04x}")
            else:
                out.append(f"\\U{code:08x}")
    out.append('"')
    return "".join(out)


class NotificationCodecError(ProviderIntegrationError):
    """Base exception for notification decoding failures.

    Attributes:
        text: The textual descriptor that failed to decode
        tag: The tag (first field), when one was present
        index: Position of the descriptor in a list, when decoded as part of one
    """

    def __init__(
        self,
        message: str,
        *,
        text: str | None = None,
        tag: str | None = None,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        details = details or {}
        if text is not None:
            details["text"] = text
        if tag is not None:
            details["tag"] = tag
        super().__init__(message, details=details, cause=cause)
        self.text = text
        self.tag = tag
        self.index: int | None = None

    def __str__(self) -> str:
        return self.message

    @property
    def kind(self) -> str:
        """Short name of the failure kind."""
        return self.__class__.__name__.removesuffix("Error")

    def at_index(self, index: int) -> NotificationCodecError:
        """Record the list position of the failing descriptor and return self."""
        self.index = index
        self.details["index"] = index
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "kind": self.kind,
            "message": self.message,
            "text": self.text,
            "tag": self.tag,
            "index": self.index,
            "details": dict(self.details),
        }


class MalformedSyntaxError(NotificationCodecError):
    """Raised when a descriptor has fewer than two comma separated fields."""

    def __init__(self, text: str) -> None:
        super().__init__(
            f"invalid notification string {quote(text)}, not enough commas",
            text=text,
        )


class UnknownVariantError(NotificationCodecError):
    """Raised when the tag does not name a known notification type."""

    def __init__(self, tag: str, *, text: str | None = None) -> None:
        super().__init__(
            f"invalid notification type {quote(tag)}",
            text=text,
            tag=tag,
        )


class ArityMismatchError(NotificationCodecError):
    """Raised when a known tag is followed by the wrong number of fields.

    Attributes:
        expected: Field count the tag requires, tag included
        actual: Field count that was found
        reason: Short reason quoted in the message
    """

    reason = "not enough parts"

    def __init__(
        self,
        display_name: str,
        *,
        expected: int,
        actual: int,
        text: str | None = None,
        tag: str | None = None,
    ) -> None:
        super().__init__(
            f"invalid {display_name} notification string, "
            f"please consult the documentation ({self.reason})",
            text=text,
            tag=tag,
            details={"expected": expected, "actual": actual},
        )
        self.expected = expected
        self.actual = actual


class SemanticValidationError(NotificationCodecError):
    """Raised when the field count is right but a variant rule is violated.

    Attributes:
        reason: Short description of the violated rule
    """

    def __init__(
        self,
        message: str,
        *,
        reason: str | None = None,
        text: str | None = None,
        tag: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, text=text, tag=tag, cause=cause)
        self.reason = reason or message
