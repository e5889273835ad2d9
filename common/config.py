"""Configuration loading utilities.

Settings for the provider packages come from three places, applied in this
order so that later sources win:

    1. Defaults of the package's config dataclass
    2. A configuration file (JSON or YAML) found near the working directory
    3. Environment variables with the package's prefix

Example:
    >>> from common.config import EnvReader
    >>> reader = EnvReader(prefix="NOTIFICATION_CODEC")
    >>> strict = reader.get_bool("STRICT_ARITY", default=True)
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import yaml

from common.exceptions import ConfigurationError, InvalidConfigValueError


DEFAULT_ENV_PREFIX = "PROVIDER"

# Searched for in each directory, in order.
CONFIG_FILE_NAMES = (
    "notifications.yaml",
    "notifications.yml",
    "notifications.json",
    ".notifications.yaml",
    ".notifications.json",
)

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"0", "false", "no", "off"})


# =============================================================================
# Environment Variables
# =============================================================================


class EnvReader:
    """Reads ``<PREFIX>_<NAME>`` environment variables.

    Example:
        >>> reader = EnvReader(prefix="NOTIFICATION_CODEC")
        >>> reader.key("STRICT_ARITY")
        'NOTIFICATION_CODEC_STRICT_ARITY'
    """

    def __init__(self, prefix: str = DEFAULT_ENV_PREFIX) -> None:
        self.prefix = prefix

    def key(self, name: str) -> str:
        """Full variable name for ``name``."""
        if self.prefix:
            return f"{self.prefix}_{name}"
        return name

    def get(self, name: str, default: str | None = None) -> str | None:
        """Get a string variable, or ``default`` when unset."""
        return os.environ.get(self.key(name), default)

    def get_bool(self, name: str, default: bool | None = None) -> bool | None:
        """Get a boolean variable.

        Accepts 1/0, true/false, yes/no and on/off in any case.

        Raises:
            InvalidConfigValueError: If the value is none of those.
        """
        value = self.get(name)
        if value is None:
            return default
        lower_value = value.strip().lower()
        if lower_value in _TRUTHY:
            return True
        if lower_value in _FALSY:
            return False
        raise InvalidConfigValueError(
            f"Invalid boolean value for {self.key(name)}",
            config_key=self.key(name),
            value=value,
            expected="boolean (1/0, true/false, yes/no, on/off)",
        )


# =============================================================================
# Configuration Files
# =============================================================================


def _load_yaml(path: Path) -> Any:
    try:
        with path.open() as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse YAML configuration: {path}",
            details={"path": str(path)},
            cause=e,
        ) from e


def _load_json(path: Path) -> Any:
    try:
        with path.open() as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Failed to parse JSON configuration: {path}",
            details={"path": str(path)},
            cause=e,
        ) from e


def load_config_file(path: Path) -> dict[str, Any]:
    """Load a JSON or YAML configuration file.

    An empty file, or one whose document is not a mapping, gives ``{}``.

    Raises:
        ConfigurationError: If the file is missing, unparsable, or of an
            unsupported format.
    """
    if not path.exists():
        raise ConfigurationError(
            f"Configuration file not found: {path}",
            details={"path": str(path)},
        )

    suffix = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _load_yaml(path)
    elif suffix == ".json":
        data = _load_json(path)
    else:
        raise ConfigurationError(
            f"Unsupported configuration file format: {suffix}",
            details={"path": str(path), "suffix": suffix},
        )
    return data if isinstance(data, dict) else {}


def find_config_file(
    start_dir: Path | None = None,
    max_depth: int = 5,
) -> Path | None:
    """Search ``start_dir`` and its parents for a configuration file.

    Args:
        start_dir: Directory to start from (default: cwd).
        max_depth: Number of directories to look in, ``start_dir`` included.

    Returns:
        The first file named in CONFIG_FILE_NAMES, or None.
    """
    current = start_dir or Path.cwd()
    for _ in range(max_depth):
        for name in CONFIG_FILE_NAMES:
            candidate = current / name
            if candidate.is_file():
                return candidate
        if current.parent == current:
            break
        current = current.parent
    return None
