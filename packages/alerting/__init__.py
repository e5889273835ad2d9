"""Provider Alerting Module.

This module holds the alerting side of the provider: the notification
destinations attached to teams, org access tokens and detector rules.

Submodules:
    - notifications: Codec for the textual notification descriptors
      (``Slack,<credential>,<channel>``, ``Email,<address>``, ...)

Quick Start:
    >>> from packages.alerting.notifications import decode, encode
    >>>
    >>> descriptor = decode("PagerDuty,cred123")
    >>> encode(descriptor)
    'PagerDuty,cred123'
"""

__version__ = "0.1.0"
