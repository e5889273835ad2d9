"""Notification codec configuration.

The codec is a pure function of its input and this immutable configuration.
The defaults reproduce the historical wire-format contract exactly; the two
switches exist for callers that need the legacy leniency or the corrected
Webhook message.

Example:
    >>> from packages.alerting.notifications.config import (
    ...     CodecConfig,
    ...     DEFAULT_CODEC_CONFIG,
    ... )
    >>>
    >>> # Use preset
    >>> config = DEFAULT_CODEC_CONFIG
    >>>
    >>> # Or customize with builder pattern
    >>> config = CodecConfig().with_strict_arity(False)
    >>>
    >>> # Or read notifications.yaml and NOTIFICATION_CODEC_* variables
    >>> config = CodecConfig.load()
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from common.config import EnvReader, find_config_file, load_config_file
from common.exceptions import InvalidConfigValueError


ENV_PREFIX = "NOTIFICATION_CODEC"


@dataclass(frozen=True, slots=True)
class CodecConfig:
    """Configuration for decoding textual notifications.

    Attributes:
        strict_arity: Require the exact field count for every tag. When
            False, tags with a single payload field (credential-only types,
            Email, Team, TeamEmail) ignore trailing fields.
        report_webhook_url: Quote the URL field in the invalid Webhook URL
            message instead of the secret field.
    """

    strict_arity: bool = True
    report_webhook_url: bool = False

    def with_strict_arity(self, strict_arity: bool = True) -> CodecConfig:
        """Create a copy with strict arity setting."""
        return CodecConfig(
            strict_arity=strict_arity,
            report_webhook_url=self.report_webhook_url,
        )

    def with_report_webhook_url(self, report_webhook_url: bool = True) -> CodecConfig:
        """Create a copy with the Webhook URL reporting setting."""
        return CodecConfig(
            strict_arity=self.strict_arity,
            report_webhook_url=report_webhook_url,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "strict_arity": self.strict_arity,
            "report_webhook_url": self.report_webhook_url,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CodecConfig:
        """Create from dictionary.

        Raises:
            InvalidConfigValueError: If a known key holds a non-boolean value.
        """
        values: dict[str, bool] = {}
        for key in ("strict_arity", "report_webhook_url"):
            if key not in data:
                continue
            value = data[key]
            if not isinstance(value, bool):
                raise InvalidConfigValueError(
                    f"Invalid value for {key}",
                    config_key=key,
                    value=value,
                    expected="boolean",
                )
            values[key] = value
        return cls(**values)

    @classmethod
    def from_env(
        cls,
        prefix: str = ENV_PREFIX,
        base: CodecConfig | None = None,
    ) -> CodecConfig:
        """Create from ``<prefix>_STRICT_ARITY`` and ``<prefix>_REPORT_WEBHOOK_URL``.

        Unset variables keep the value from ``base`` (the defaults when omitted).

        Raises:
            InvalidConfigValueError: If a variable is not a boolean.
        """
        reader = EnvReader(prefix=prefix)
        base = base or cls()
        return cls(
            strict_arity=reader.get_bool("STRICT_ARITY", default=base.strict_arity),
            report_webhook_url=reader.get_bool(
                "REPORT_WEBHOOK_URL",
                default=base.report_webhook_url,
            ),
        )

    @classmethod
    def from_file(cls, path: Path | str, section: str = "codec") -> CodecConfig:
        """Create from a JSON or YAML file.

        The settings are read from ``section`` when the file has one,
        otherwise from the top level.
        """
        data = load_config_file(Path(path))
        nested = data.get(section)
        return cls.from_dict(nested if isinstance(nested, dict) else data)

    @classmethod
    def load(
        cls,
        start_dir: Path | None = None,
        prefix: str = ENV_PREFIX,
    ) -> CodecConfig:
        """Resolve the configuration from file and environment.

        The nearest configuration file (see ``common.config.find_config_file``)
        is read first, if there is one; environment variables override it.
        """
        path = find_config_file(start_dir)
        base = cls.from_file(path) if path is not None else cls()
        return cls.from_env(prefix=prefix, base=base)


# =============================================================================
# Preset Configurations
# =============================================================================

# Exact field counts and the historical messages
DEFAULT_CODEC_CONFIG = CodecConfig()

# Accept trailing fields after single-field payloads, as older releases did
LENIENT_CODEC_CONFIG = CodecConfig(strict_arity=False)

# Report the URL, not the secret, when a Webhook URL does not parse
CORRECTED_CODEC_CONFIG = CodecConfig(report_webhook_url=True)
