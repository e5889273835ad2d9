"""Pytest fixtures for notification codec tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from common.logging import BufferingHandler, LogLevel, NullHandler, configure_logging
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


# One valid textual form per notification type, with its decoded value.
VALID_NOTIFICATIONS: list[tuple[str, NotificationDescriptor]] = [
    ("AmazonEventBridge,cred-aeb", AmazonEventBridgeNotification(credential_id="cred-aeb")),
    ("BigPanda,cred-bp", BigPandaNotification(credential_id="cred-bp")),
    ("Email,example@localhost", EmailNotification(email="example@localhost")),
    ("Jira,cred-jira", JiraNotification(credential_id="cred-jira")),
    ("Office365,cred-o365", Office365Notification(credential_id="cred-o365")),
    (
        "Opsgenie,cred-og,Platform,AAAA1111,Team",
        OpsgenieNotification(
            credential_id="cred-og",
            responder_name="Platform",
            responder_id="AAAA1111",
            responder_type="Team",
        ),
    ),
    ("PagerDuty,cred-pd", PagerDutyNotification(credential_id="cred-pd")),
    ("ServiceNow,cred-sn", ServiceNowNotification(credential_id="cred-sn")),
    ("Slack,cred-slack,alerts", SlackNotification(credential_id="cred-slack", channel="alerts")),
    ("SplunkPlatform,cred-splunk", SplunkPlatformNotification(credential_id="cred-splunk")),
    ("Team,ABCD1234", TeamNotification(team="ABCD1234")),
    ("TeamEmail,ABCD1234", TeamEmailNotification(team="ABCD1234")),
    ("VictorOps,iii,sre", VictorOpsNotification(credential_id="iii", routing_key="sre")),
    ("Webhook,cred-hook,,", WebhookNotification(credential_id="cred-hook")),
    (
        "Webhook,,hunter2,https://hooks.example.com/alert",
        WebhookNotification(secret="hunter2", url="https://hooks.example.com/alert"),
    ),
    ("XMatters,cred-xm", XMattersNotification(credential_id="cred-xm")),
]


@pytest.fixture(params=VALID_NOTIFICATIONS, ids=lambda case: case[0])
def valid_notification(request: pytest.FixtureRequest) -> tuple[str, NotificationDescriptor]:
    """A valid textual notification and its decoded descriptor."""
    return request.param


@pytest.fixture
def slack_notification() -> SlackNotification:
    """Create a sample Slack descriptor."""
    return SlackNotification(credential_id="cred-slack", channel="alerts")


@pytest.fixture
def webhook_notification() -> WebhookNotification:
    """Create a sample ad-hoc Webhook descriptor."""
    return WebhookNotification(secret="hunter2", url="https://hooks.example.com/alert")


@pytest.fixture
def log_buffer() -> Iterator[BufferingHandler]:
    """Route all logging at DEBUG level into a buffer for the test's duration."""
    handler = BufferingHandler(capacity=1000)
    configure_logging(level=LogLevel.DEBUG, handlers=[handler])
    yield handler
    configure_logging(level=LogLevel.INFO, handlers=[NullHandler()])
