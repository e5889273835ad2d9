"""Tests for notification codec exceptions."""

import pytest

from common.exceptions import ProviderIntegrationError
from packages.alerting.notifications.exceptions import (
    ArityMismatchError,
    MalformedSyntaxError,
    NotificationCodecError,
    SemanticValidationError,
    UnknownVariantError,
    quote,
)


class TestQuote:
    """Tests for message quoting."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("plain", '"plain"'),
            ("", '""'),
            ('say "hi"', '"say \\"hi\\""'),
            ("back\\slash", '"back\\\\slash"'),
            ("tab\there", '"tab\\there"'),
            ("bell\x07", '"bell\\a"'),
            ("nul\x00", '"nul\\x00"'),
            ("café", '"café"'),
            ("\u200b", '"\\u200b"'),
        ],
    )
    def test_quote(self, value: str, expected: str) -> None:
        """Test escaping of special and non-printable characters."""
        assert quote(value) == expected


class TestNotificationCodecError:
    """Tests for the codec error hierarchy."""

    @pytest.mark.parametrize(
        "error_class",
        [MalformedSyntaxError, UnknownVariantError, ArityMismatchError, SemanticValidationError],
    )
    def test_hierarchy(self, error_class) -> None:
        """Test every kind derives from the codec and project bases."""
        assert issubclass(error_class, NotificationCodecError)
        assert issubclass(error_class, ProviderIntegrationError)

    def test_str_is_message_only(self) -> None:
        """Test details never leak into the message."""
        error = UnknownVariantError("Fax", text="Fax,123")
        assert error.details == {"text": "Fax,123", "tag": "Fax"}
        assert str(error) == 'invalid notification type "Fax"'

    def test_malformed(self) -> None:
        """Test the malformed syntax message."""
        error = MalformedSyntaxError("Email")
        assert str(error) == 'invalid notification string "Email", not enough commas'
        assert error.kind == "MalformedSyntax"
        assert error.tag is None

    def test_arity(self) -> None:
        """Test the arity message and counts."""
        error = ArityMismatchError("OpsGenie", expected=5, actual=4, tag="Opsgenie")
        assert str(error) == (
            "invalid OpsGenie notification string, please consult the documentation (not enough parts)"
        )
        assert error.details["expected"] == 5
        assert error.details["actual"] == 4

    def test_semantic_reason_defaults_to_message(self) -> None:
        """Test reason falls back to the message."""
        assert SemanticValidationError("mail: no address").reason == "mail: no address"
        assert SemanticValidationError("long message", reason="short").reason == "short"

    def test_at_index(self) -> None:
        """Test recording a list position."""
        error = UnknownVariantError("Fax")
        assert error.at_index(3) is error
        assert error.index == 3
        assert error.details["index"] == 3
        assert str(error) == 'invalid notification type "Fax"'

    def test_with_context(self) -> None:
        """Test context is added to a copy."""
        error = UnknownVariantError("Fax")
        enriched = error.with_context(field="notifications")
        assert isinstance(enriched, UnknownVariantError)
        assert enriched.details["field"] == "notifications"
        assert "field" not in error.details
        assert str(enriched) == str(error)

    def test_to_dict(self) -> None:
        """Test serialization."""
        error = SemanticValidationError(
            'exclude the # from channel names in "#x"',
            reason="channel contains #",
            text="Slack,c,#x",
            tag="Slack",
        ).at_index(0)
        data = error.to_dict()
        assert data["error_type"] == "SemanticValidationError"
        assert data["kind"] == "SemanticValidation"
        assert data["message"] == 'exclude the # from channel names in "#x"'
        assert data["text"] == "Slack,c,#x"
        assert data["tag"] == "Slack"
        assert data["index"] == 0
