"""Configuration utilities for SYNAPPS.

This module centralizes small helpers and constants related to configuration.
Settings come from environment variables; every getter has a default so the
library works without any configuration.
"""

import os
from pathlib import Path

from platformdirs import user_cache_dir

APP_NAME = "synapps"  # pragma: no mutate

CACHE_ENABLED_ENV = "SYNAPPS_CACHE_ENABLED"  # pragma: no mutate
CACHE_DIR_ENV = "SYNAPPS_CACHE_DIR"  # pragma: no mutate

# Widest possible access when creating files/directories (masked by the umask).
DEFAULT_MODE = 0o777
# Code page used by file names on the Windows family.
WINDOWS_FS_ENCODING = "cp1252"  # pragma: no mutate
PORTABLE_SEPARATOR = "/"  # pragma: no mutate

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


class InvalidSettingError(Exception):
    """Raised when an environment variable holds an unusable value."""

    def __init__(self, name: str, value: str) -> None:
        super().__init__(f"Invalid value for {name}: {value!r}")
        self.name = name
        self.value = value


def get_cache_enabled() -> bool:
    """Tell whether caching is enabled.

    Returns:
        The boolean value of `SYNAPPS_CACHE_ENABLED`, True when unset or empty.

    Raises:
        InvalidSettingError: If the variable is set to an unrecognized value.
    """
    if not (raw := os.environ.get(CACHE_ENABLED_ENV, "").strip()):
        return True
    value = raw.lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise InvalidSettingError(CACHE_ENABLED_ENV, raw)


def get_cache_dir() -> Path:
    """Get the directory of the persistent second-level cache.

    Returns:
        `SYNAPPS_CACHE_DIR` if set, otherwise the per-user cache directory
        provided by `platformdirs`.
    """
    if raw := os.environ.get(CACHE_DIR_ENV):
        return Path(raw)
    return Path(user_cache_dir(APP_NAME, appauthor=False))
