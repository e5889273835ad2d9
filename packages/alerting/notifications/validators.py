"""Syntax validators for notification payloads.

Two checks are needed by the decoder:

- Email addresses are parsed with the RFC 5322 ``address`` grammar (a mailbox
  such as ``ops@example.com`` or ``Ops Team <ops@example.com>``, or a group
  holding exactly one mailbox). Failures carry the ``mail: ...`` messages
  users already know from the provider's documentation.
- Webhook URLs must be absolute URIs in the RFC 3986 sense: a scheme followed
  by ``:`` and a hierarchical or opaque part.

Both are pure functions with no state.

Example:
    >>> parse_email_address("Ops Team <ops@example.com>")
    EmailAddress(name='Ops Team', address='ops@example.com')
    >>> validate_email_address("derp")
    Traceback (most recent call last):
    ...
    EmailSyntaxError: mail: missing '@' or angle-addr
    >>> is_absolute_url("https://hooks.example.com/alert")
    True
"""

from __future__ import annotations

import re
import urllib.parse
from dataclasses import dataclass

from packages.alerting.notifications.exceptions import quote


__all__ = [
    "EmailAddress",
    "EmailSyntaxError",
    "URLSyntaxError",
    "is_absolute_url",
    "is_valid_email_address",
    "parse_email_address",
    "validate_absolute_url",
    "validate_email_address",
]


class EmailSyntaxError(ValueError):
    """Raised when a string is not an RFC 5322 address."""


class URLSyntaxError(ValueError):
    """Raised when a string is not an absolute URI."""


@dataclass(frozen=True, slots=True)
class EmailAddress:
    """A parsed mailbox.

    Attributes:
        name: Display name, empty when absent
        address: The ``local@domain`` part
    """

    name: str
    address: str


# =============================================================================
# RFC 5322 address parsing
# =============================================================================

# RFC 5322 3.2.3 specials, which may not appear in an atom.
_SPECIALS = frozenset('()<>[]:;@\\,"')


def _is_vchar(char: str) -> bool:
    return "!" <= char <= "~" or ord(char) >= 0x80


def _is_atext(char: str, dot: bool) -> bool:
    if char == ".":
        return dot
    if char in _SPECIALS:
        return False
    return _is_vchar(char)


def _is_qtext(char: str) -> bool:
    if char in ('\\', '"'):
        return False
    return _is_vchar(char)


def _is_wsp(char: str) -> bool:
    return char in (" ", "\t")


def _is_dtext(char: str) -> bool:
    if char in ("[", "]", "\\"):
        return False
    return _is_vchar(char)


class _AddressParser:
    """Recursive descent parser over the remaining, unconsumed input."""

    def __init__(self, text: str) -> None:
        self.s = text

    # -- primitives ---------------------------------------------------------

    def empty(self) -> bool:
        return not self.s

    def peek(self) -> str:
        return self.s[0]

    def consume(self, char: str) -> bool:
        if self.empty() or self.peek() != char:
            return False
        self.s = self.s[1:]
        return True

    def skip_space(self) -> None:
        self.s = self.s.lstrip(" \t")

    def skip_cfws(self) -> bool:
        """Skip folding whitespace and comments; False on a broken comment."""
        self.skip_space()
        while self.consume("("):
            _, ok = self.consume_comment()
            if not ok:
                return False
            self.skip_space()
        return True

    def consume_comment(self) -> tuple[str, bool]:
        # The opening parenthesis has already been consumed.
        depth = 1
        comment: list[str] = []
        while not self.empty() and depth > 0:
            char = self.peek()
            if char == "\\" and len(self.s) > 1:
                self.s = self.s[1:]
                char = self.peek()
            elif char == "(":
                depth += 1
            elif char == ")":
                depth -= 1
            if depth > 0:
                comment.append(char)
            self.s = self.s[1:]
        return "".join(comment), depth == 0

    # -- grammar ------------------------------------------------------------

    def parse_single_address(self) -> EmailAddress:
        addresses = self.parse_address(handle_group=True)
        if not self.skip_cfws():
            raise EmailSyntaxError("mail: misformatted parenthetical comment")
        if not self.empty():
            raise EmailSyntaxError(f"mail: expected single address, got {quote(self.s)}")
        if not addresses:
            raise EmailSyntaxError("mail: empty group")
        if len(addresses) > 1:
            raise EmailSyntaxError("mail: group with multiple addresses")
        return addresses[0]

    def parse_address(self, handle_group: bool) -> list[EmailAddress]:
        self.skip_space()
        if self.empty():
            raise EmailSyntaxError("mail: no address")

        # addr-spec has a more restricted grammar than name-addr, so try it
        # first and fall back to name-addr.
        saved = self.s
        try:
            spec = self.consume_addr_spec()
        except EmailSyntaxError:
            self.s = saved
        else:
            display_name = ""
            self.skip_space()
            if not self.empty() and self.peek() == "(":
                display_name = self.consume_display_name_comment()
            return [EmailAddress(name=display_name, address=spec)]

        display_name = ""
        if self.peek() != "<":
            display_name = self.consume_phrase()

        self.skip_space()
        if handle_group and self.consume(":"):
            return self.consume_group_list()

        if not self.consume("<"):
            if all(_is_atext(char, True) for char in display_name):
                # Input like "foo.bar" probably meant "foo.bar@domain".
                raise EmailSyntaxError("mail: missing '@' or angle-addr")
            # Input like "Full Name" probably meant "Full Name <...>".
            raise EmailSyntaxError("mail: no angle-addr")

        spec = self.consume_addr_spec()
        if not self.consume(">"):
            raise EmailSyntaxError("mail: unclosed angle-addr")
        return [EmailAddress(name=display_name, address=spec)]

    def consume_group_list(self) -> list[EmailAddress]:
        group: list[EmailAddress] = []
        self.skip_space()
        if self.consume(";"):
            if not self.skip_cfws():
                raise EmailSyntaxError("mail: misformatted parenthetical comment")
            return group

        while True:
            self.skip_space()
            # Nested groups are not allowed.
            group.extend(self.parse_address(handle_group=False))
            if not self.skip_cfws():
                raise EmailSyntaxError("mail: misformatted parenthetical comment")
            if self.consume(";"):
                if not self.skip_cfws():
                    raise EmailSyntaxError("mail: misformatted parenthetical comment")
                return group
            if not self.consume(","):
                raise EmailSyntaxError("mail: expected comma")

    def consume_addr_spec(self) -> str:
        saved = self.s
        try:
            return self._consume_addr_spec()
        except EmailSyntaxError:
            self.s = saved
            raise

    def _consume_addr_spec(self) -> str:
        # local-part = dot-atom / quoted-string
        self.skip_space()
        if self.empty():
            raise EmailSyntaxError("mail: no addr-spec")
        if self.peek() == '"':
            local_part = self.consume_quoted_string()
            if local_part == "":
                raise EmailSyntaxError("mail: empty quoted-string in addr-spec")
        else:
            local_part = self.consume_atom(dot=True, permissive=False)

        if not self.consume("@"):
            raise EmailSyntaxError("mail: missing @ in addr-spec")

        # domain = dot-atom / domain-literal
        self.skip_space()
        if self.empty():
            raise EmailSyntaxError("mail: no domain in addr-spec")
        if self.peek() == "[":
            domain = self.consume_domain_literal()
        else:
            domain = self.consume_atom(dot=True, permissive=False)

        return f"{local_part}@{domain}"

    def consume_domain_literal(self) -> str:
        # The caller has seen the opening bracket.
        self.s = self.s[1:]
        end = self.s.find("]")
        if end < 0:
            raise EmailSyntaxError("mail: unclosed domain-literal")
        literal = self.s[:end]
        if not literal or not all(_is_dtext(char) for char in literal):
            raise EmailSyntaxError(f"mail: invalid domain-literal: {literal}")
        self.s = self.s[end + 1:]
        return f"[{literal}]"

    def consume_phrase(self) -> str:
        # phrase = 1*word
        words: list[str] = []
        error: EmailSyntaxError | None = None
        while True:
            # obs-phrase allows CFWS after one word
            if words and not self.skip_cfws():
                raise EmailSyntaxError("mail: misformatted parenthetical comment")
            self.skip_space()
            if self.empty():
                break
            try:
                if self.peek() == '"':
                    word = self.consume_quoted_string()
                else:
                    # dot-atom, more permissive than RFC 5322 asks for
                    word = self.consume_atom(dot=True, permissive=True)
            except EmailSyntaxError as e:
                error = e
                break
            words.append(word)

        # Any error is ignored once at least one word was read.
        if error is not None and not words:
            raise EmailSyntaxError(f"mail: missing word in phrase: {error}") from error
        return " ".join(words)

    def consume_quoted_string(self) -> str:
        # The caller has seen the opening quote.
        i = 1
        chars: list[str] = []
        escaped = False
        while True:
            if i >= len(self.s):
                raise EmailSyntaxError("mail: unclosed quoted-string")
            char = self.s[i]
            if escaped:
                # quoted-pair = "\" (VCHAR / WSP)
                if not _is_vchar(char) and not _is_wsp(char):
                    raise EmailSyntaxError(f"mail: bad character in quoted-string: {char!r}")
                chars.append(char)
                escaped = False
            elif _is_qtext(char) or _is_wsp(char):
                chars.append(char)
            elif char == '"':
                break
            elif char == "\\":
                escaped = True
            else:
                raise EmailSyntaxError(f"mail: bad character in quoted-string: {char!r}")
            i += 1
        self.s = self.s[i + 1:]
        return "".join(chars)

    def consume_atom(self, *, dot: bool, permissive: bool) -> str:
        i = 0
        while i < len(self.s) and _is_atext(self.s[i], dot):
            i += 1
        if i == 0:
            raise EmailSyntaxError("mail: invalid string")
        atom, self.s = self.s[:i], self.s[i:]
        if not permissive:
            if atom.startswith("."):
                raise EmailSyntaxError("mail: leading dot in atom")
            if ".." in atom:
                raise EmailSyntaxError("mail: double dot in atom")
            if atom.endswith("."):
                raise EmailSyntaxError("mail: trailing dot in atom")
        return atom

    def consume_display_name_comment(self) -> str:
        if not self.consume("("):
            raise EmailSyntaxError("mail: comment does not start with (")
        comment, ok = self.consume_comment()
        if not ok:
            raise EmailSyntaxError("mail: misformatted parenthetical comment")
        return " ".join(comment.split())


def parse_email_address(value: str) -> EmailAddress:
    """Parse a single RFC 5322 address.

    Args:
        value: Text such as ``ops@example.com`` or ``Ops <ops@example.com>``.

    Returns:
        The parsed mailbox.

    Raises:
        EmailSyntaxError: With a ``mail: ...`` message describing the problem.
    """
    return _AddressParser(value).parse_single_address()


def validate_email_address(value: str) -> None:
    """Raise EmailSyntaxError unless ``value`` parses as an address."""
    parse_email_address(value)


def is_valid_email_address(value: str) -> bool:
    """Check whether ``value`` parses as an address."""
    try:
        parse_email_address(value)
    except EmailSyntaxError:
        return False
    return True


# =============================================================================
# RFC 3986 absolute URI
# =============================================================================

_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")
_FORBIDDEN = re.compile(r"[\x00-\x20\x7f]")
_BAD_PERCENT = re.compile(r"%(?![0-9A-Fa-f]{2})")
_REG_NAME = re.compile(r"^(?:[A-Za-z0-9\-._~!$&'()*+,;=]|%[0-9A-Fa-f]{2})*$")


def validate_absolute_url(value: str) -> None:
    """Raise URLSyntaxError unless ``value`` is an absolute URI.

    Relative references (``zzz``, ``/path``, ``//host``) are rejected, as are
    values containing whitespace, control characters or malformed
    percent-encoding, and authorities whose host, port or IPv6 brackets do
    not parse.
    """
    if not value:
        raise URLSyntaxError("empty url")
    if _FORBIDDEN.search(value):
        raise URLSyntaxError(f"invalid character in url {quote(value)}")
    if _BAD_PERCENT.search(value):
        raise URLSyntaxError(f"invalid percent-encoding in url {quote(value)}")

    try:
        parts = urllib.parse.urlsplit(value)
        # Accessing the port validates it.
        _ = parts.port
    except ValueError as e:
        raise URLSyntaxError(f"invalid url {quote(value)}: {e}") from e

    if not parts.scheme or not _SCHEME.match(parts.scheme):
        raise URLSyntaxError(f"missing scheme in url {quote(value)}")

    # IP literals are checked by urlsplit; registered names are checked here.
    host = parts.netloc.rpartition("@")[2]
    if not host.startswith("[") and not _REG_NAME.match(parts.hostname or ""):
        raise URLSyntaxError(f"invalid host in url {quote(value)}")


def is_absolute_url(value: str) -> bool:
    """Check whether ``value`` is an absolute URI."""
    try:
        validate_absolute_url(value)
    except URLSyntaxError:
        return False
    return True
