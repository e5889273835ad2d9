"""Provider Common Module.

Shared infrastructure for the provider packages: the exception hierarchy,
configuration loading, and structured logging.

Configuration:
    >>> from common import EnvReader, find_config_file, load_config_file
    >>> reader = EnvReader(prefix="NOTIFICATION_CODEC")
    >>> strict = reader.get_bool("STRICT_ARITY", default=True)
    >>> path = find_config_file()
    >>> settings = load_config_file(path) if path else {}

Logging:
    >>> from common import get_logger, LogContext
    >>> logger = get_logger(__name__)
    >>> with LogContext(operation="validate", resource="team"):
    ...     logger.debug("Rejected notification", path="notifications_major.0")

Exceptions:
    >>> from common import ProviderIntegrationError
    >>> try:
    ...     config = CodecConfig.from_env()
    ... except ProviderIntegrationError as e:
    ...     print(e.message, e.details)
"""

__version__ = "0.1.0"

# =============================================================================
# Exceptions
# =============================================================================
from common.exceptions import (
    ConfigurationError,
    InvalidConfigValueError,
    ProviderIntegrationError,
)

# =============================================================================
# Configuration
# =============================================================================
from common.config import (
    CONFIG_FILE_NAMES,
    DEFAULT_ENV_PREFIX,
    EnvReader,
    find_config_file,
    load_config_file,
)

# =============================================================================
# Logging
# =============================================================================
from common.logging import (
    MASK_VALUE,
    BufferingHandler,
    JSONFormatter,
    LogContext,
    LogContextData,
    LogFormatter,
    LogHandler,
    LogLevel,
    LogRecord,
    NullHandler,
    ProviderLogger,
    SensitiveDataMasker,
    StreamHandler,
    TextFormatter,
    configure_logging,
    get_current_context,
    get_logger,
    get_masker,
)

__all__ = [
    "__version__",
    # Exceptions
    "ProviderIntegrationError",
    "ConfigurationError",
    "InvalidConfigValueError",
    # Configuration
    "CONFIG_FILE_NAMES",
    "DEFAULT_ENV_PREFIX",
    "EnvReader",
    "find_config_file",
    "load_config_file",
    # Logging
    "MASK_VALUE",
    "LogLevel",
    "LogContext",
    "LogContextData",
    "LogRecord",
    "LogHandler",
    "LogFormatter",
    "ProviderLogger",
    "SensitiveDataMasker",
    "TextFormatter",
    "JSONFormatter",
    "StreamHandler",
    "BufferingHandler",
    "NullHandler",
    "configure_logging",
    "get_current_context",
    "get_logger",
    "get_masker",
]
