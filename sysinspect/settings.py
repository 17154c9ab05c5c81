"""
Settings access for sysinspect.

Settings are read from SYSINSPECT_<KEY> environment variables and coerced
to the type of the supplied default.
"""

from __future__ import annotations

import logging
import os
from typing import Any

from .constants import SETTINGS_ENV_PREFIX

logger = logging.getLogger(__name__)

_TRUE_VALUES = ('1', 'true', 'yes', 'on')
_FALSE_VALUES = ('0', 'false', 'no', 'off', '')


def get_setting(key: str, default: Any = None) -> Any:
    """
    Get a setting value.

    Args:
        key: Setting name, e.g. 'command_timeout'.
        default: Value returned when the setting is absent or unusable.
            Its type decides how the raw string is converted.

    Returns:
        The converted setting value, or default.
    """
    raw = os.environ.get(f"{SETTINGS_ENV_PREFIX}{key.upper()}")
    if raw is None:
        return default

    raw = raw.strip()
    try:
        if isinstance(default, bool):
            lowered = raw.lower()
            if lowered in _TRUE_VALUES:
                return True
            if lowered in _FALSE_VALUES:
                return False
            raise ValueError(f"not a boolean: {raw!r}")
        if isinstance(default, int):
            return int(raw)
        if isinstance(default, float):
            return float(raw)
    except ValueError as e:
        logger.warning(f"Ignoring setting {key}: {e}")
        return default

    return raw


def get_list_setting(key: str, default: str) -> list[str]:
    """Get a comma separated setting as a list of non-empty items."""
    value = get_setting(key, default)
    return [item.strip() for item in value.split(',') if item.strip()]
