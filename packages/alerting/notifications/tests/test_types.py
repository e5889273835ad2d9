"""Tests for notification descriptor types."""

import dataclasses

import pytest

from packages.alerting.notifications.types import (
    SEVERITIES,
    NotificationType,
    OpsgenieNotification,
    SeverityNotificationLists,
    SlackNotification,
    TeamNotification,
    WebhookNotification,
)


class TestNotificationType:
    """Tests for NotificationType enum."""

    def test_fifteen_types(self) -> None:
        """Test the closed set of types."""
        assert len(NotificationType) == 15

    def test_values_are_tags(self) -> None:
        """Test enum values are the literal tags."""
        assert NotificationType.SLACK.value == "Slack"
        assert NotificationType.OFFICE_365.value == "Office365"
        assert NotificationType.X_MATTERS.value == "XMatters"
        assert str(NotificationType.TEAM_EMAIL) == "TeamEmail"

    def test_display_name(self) -> None:
        """Test display names used in error messages."""
        assert NotificationType.OPSGENIE.display_name == "OpsGenie"
        assert NotificationType.WEBHOOK.display_name == "Webhook"

    def test_from_tag(self) -> None:
        """Test exact tag lookup."""
        assert NotificationType.from_tag("PagerDuty") is NotificationType.PAGER_DUTY
        assert NotificationType.from_tag("pagerduty") is None
        assert NotificationType.from_tag("") is None


class TestDescriptors:
    """Tests for descriptor dataclasses."""

    def test_immutable(self, slack_notification: SlackNotification) -> None:
        """Test descriptors cannot be modified."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            slack_notification.channel = "other"  # type: ignore[misc]

    def test_tag_is_class_constant(self, slack_notification: SlackNotification) -> None:
        """Test the tag is fixed by the class, not stored per instance."""
        assert slack_notification.tag is NotificationType.SLACK
        assert "tag" not in [f.name for f in dataclasses.fields(slack_notification)]

    def test_equality(self) -> None:
        """Test descriptors compare by value."""
        assert TeamNotification(team="t1") == TeamNotification(team="t1")
        assert TeamNotification(team="t1") != TeamNotification(team="t2")
        assert hash(TeamNotification(team="t1")) == hash(TeamNotification(team="t1"))

    def test_fields(self) -> None:
        """Test payload values in wire order."""
        descriptor = OpsgenieNotification(
            credential_id="c",
            responder_name="n",
            responder_id="i",
            responder_type="t",
        )
        assert descriptor.fields() == ("c", "n", "i", "t")

    def test_field_names_match_dataclass(self, valid_notification) -> None:
        """Test field_names lists every dataclass field in order."""
        _, descriptor = valid_notification
        assert descriptor.field_names == tuple(f.name for f in dataclasses.fields(descriptor))

    def test_to_dict(self, webhook_notification: WebhookNotification) -> None:
        """Test dictionary form."""
        assert webhook_notification.to_dict() == {
            "type": "Webhook",
            "credential_id": "",
            "secret": "hunter2",
            "url": "https://hooks.example.com/alert",
        }

    def test_webhook_defaults(self) -> None:
        """Test unused Webhook fields default to empty."""
        webhook = WebhookNotification(credential_id="cred")
        assert webhook.secret == ""
        assert webhook.url == ""
        assert webhook.uses_credential


class TestSeverityNotificationLists:
    """Tests for SeverityNotificationLists."""

    def test_default_empty(self) -> None:
        """Test all lists default to empty."""
        lists = SeverityNotificationLists()
        assert lists.is_empty
        assert all(values == () for _, values in lists.items())

    def test_get(self) -> None:
        """Test access by severity name."""
        team = TeamNotification(team="t1")
        lists = SeverityNotificationLists(major=(team,))
        assert lists.get("major") == (team,)
        assert not lists.is_empty

    def test_get_unknown(self) -> None:
        """Test unknown severity names are rejected."""
        with pytest.raises(KeyError):
            SeverityNotificationLists().get("urgent")

    def test_items_order(self) -> None:
        """Test items follow SEVERITIES."""
        assert [severity for severity, _ in SeverityNotificationLists().items()] == list(SEVERITIES)
