"""Provider Notifications Module.

Codec between the comma separated notification descriptors users write in
their configuration and typed, immutable descriptor values.

Features:
    - Fifteen notification types behind one closed registry
    - Exact legacy error messages, classified into four error kinds
    - Order preserving, fail-fast list decoding
    - Severity keyed team lists and the REST API object form
    - Per-field validators returning diagnostics for configuration schemas

Quick Start:
    >>> from packages.alerting.notifications import (
    ...     decode,
    ...     decode_list,
    ...     encode,
    ...     SlackNotification,
    ... )
    >>>
    >>> decode("Slack,cred,alerts")
    SlackNotification(credential_id='cred', channel='alerts')
    >>>
    >>> encode(SlackNotification(credential_id="cred", channel="alerts"))
    'Slack,cred,alerts'
    >>>
    >>> decode_list(["Email,oncall@example.com", "Team,ABC123"])
    [EmailNotification(email='oncall@example.com'), TeamNotification(team='ABC123')]

Handling Errors:
    >>> from packages.alerting.notifications import NotificationCodecError
    >>>
    >>> try:
    ...     decode_list(["Team,ABC123", "Webhook,,,"])
    ... except NotificationCodecError as e:
    ...     print(e.index, e)
    1 invalid Webhook notification string, please consult the documentation (use one of URL and secret or credential id)
"""

# =============================================================================
# Types and Enums
# =============================================================================
from packages.alerting.notifications.types import (
    SEVERITIES,
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
    SeverityNotificationLists,
    SlackNotification,
    SplunkPlatformNotification,
    TeamEmailNotification,
    TeamNotification,
    VictorOpsNotification,
    WebhookNotification,
    XMattersNotification,
)

# =============================================================================
# Exceptions
# =============================================================================
from packages.alerting.notifications.exceptions import (
    ArityMismatchError,
    MalformedSyntaxError,
    NotificationCodecError,
    SemanticValidationError,
    UnknownVariantError,
)

# =============================================================================
# Configuration
# =============================================================================
from packages.alerting.notifications.config import (
    CodecConfig,
    # Presets
    CORRECTED_CODEC_CONFIG,
    DEFAULT_CODEC_CONFIG,
    LENIENT_CODEC_CONFIG,
)

# =============================================================================
# Validators
# =============================================================================
from packages.alerting.notifications.validators import (
    EmailAddress,
    EmailSyntaxError,
    URLSyntaxError,
    is_absolute_url,
    is_valid_email_address,
    parse_email_address,
    validate_absolute_url,
    validate_email_address,
)

# =============================================================================
# Registry
# =============================================================================
from packages.alerting.notifications.registry import (
    VARIANT_REGISTRY,
    VariantSpec,
    get_variant_spec,
    known_tags,
    lookup_variant,
)

# =============================================================================
# Codec
# =============================================================================
from packages.alerting.notifications.decoder import decode
from packages.alerting.notifications.encoder import encode, encode_fields
from packages.alerting.notifications.batch import (
    decode_list,
    decode_severity_lists,
    encode_list,
    encode_severity_lists,
)

# =============================================================================
# API Objects
# =============================================================================
from packages.alerting.notifications.api import (
    from_api_dict,
    from_api_list,
    to_api_dict,
    to_api_list,
)

# =============================================================================
# Field Checks
# =============================================================================
from packages.alerting.notifications.check import (
    Diagnostic,
    DiagnosticSeverity,
    check_email,
    check_notification,
    check_notification_list,
)

__all__ = [
    # Types and Enums
    "NotificationType",
    "NotificationDescriptor",
    "AmazonEventBridgeNotification",
    "BigPandaNotification",
    "EmailNotification",
    "JiraNotification",
    "Office365Notification",
    "OpsgenieNotification",
    "PagerDutyNotification",
    "ServiceNowNotification",
    "SlackNotification",
    "SplunkPlatformNotification",
    "TeamNotification",
    "TeamEmailNotification",
    "VictorOpsNotification",
    "WebhookNotification",
    "XMattersNotification",
    "SEVERITIES",
    "SeverityNotificationLists",
    # Exceptions
    "NotificationCodecError",
    "MalformedSyntaxError",
    "UnknownVariantError",
    "ArityMismatchError",
    "SemanticValidationError",
    # Configuration
    "CodecConfig",
    "DEFAULT_CODEC_CONFIG",
    "LENIENT_CODEC_CONFIG",
    "CORRECTED_CODEC_CONFIG",
    # Validators
    "EmailAddress",
    "EmailSyntaxError",
    "URLSyntaxError",
    "parse_email_address",
    "validate_email_address",
    "is_valid_email_address",
    "validate_absolute_url",
    "is_absolute_url",
    # Registry
    "VariantSpec",
    "VARIANT_REGISTRY",
    "get_variant_spec",
    "lookup_variant",
    "known_tags",
    # Codec
    "decode",
    "encode",
    "encode_fields",
    "decode_list",
    "encode_list",
    "decode_severity_lists",
    "encode_severity_lists",
    # API Objects
    "to_api_dict",
    "from_api_dict",
    "to_api_list",
    "from_api_list",
    # Field Checks
    "Diagnostic",
    "DiagnosticSeverity",
    "check_notification",
    "check_email",
    "check_notification_list",
]
