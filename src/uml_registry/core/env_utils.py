#!/usr/bin/env python3
"""
Utility functions for reading environment variables with cross-platform support.

Handles Windows CRLF line endings and other whitespace issues that can occur
when .env files are edited on different operating systems.
"""

import os
import logging
from typing import Optional

logger = logging.getLogger(__name__)

# Values that switch an optional field name (e.g. the created/modified audit
# fields) off entirely
DISABLED_VALUES = ("", "none", "null", "disabled")


def getenv_clean(key: str, default: str = None, strip: bool = True) -> Optional[str]:
    """Get environment variable with automatic cleaning of line endings and whitespace.

    Args:
        key: Environment variable name
        default: Default value if variable is not set
        strip: If True, strip whitespace and line endings (default: True)

    Returns:
        Cleaned environment variable value, or default if not set

    Example:
        >>> # .env file has: UML_REGISTRY_UUIDS=true\r\n
        >>> value = getenv_clean("UML_REGISTRY_UUIDS", "false")
        >>> # Returns: "true" (without \r\n)
    """
    raw_value = os.getenv(key, default)

    if raw_value is None:
        return None

    if not strip:
        return raw_value

    cleaned = raw_value.strip().rstrip("\r\n")

    # Log warning if cleaning changed the value (indicates line ending issues)
    if raw_value != cleaned:
        logger.warning(
            f"Environment variable {key} had trailing whitespace/line endings: "
            f"raw={repr(raw_value)}, cleaned={repr(cleaned)}"
        )

    return cleaned


def getenv_bool(key: str, default: bool = False) -> bool:
    """Get environment variable as boolean with automatic cleaning.

    Handles line endings and converts string values to boolean:
    - "true", "True", "TRUE", "1", "yes", "on" → True
    - "false", "False", "FALSE", "0", "no", "off" → False
    - Empty string → False, unset → default value

    Args:
        key: Environment variable name
        default: Default boolean value if variable is not set

    Returns:
        Boolean value
    """
    raw_value = getenv_clean(key, None)

    if raw_value is None:
        return default

    cleaned_lower = raw_value.lower()
    if cleaned_lower in ("true", "1", "yes", "on"):
        return True
    elif cleaned_lower in ("false", "0", "no", "off", ""):
        return False
    else:
        logger.warning(
            f"Environment variable {key} has unexpected boolean value: {repr(raw_value)}. "
            f"Using default: {default}"
        )
        return default


def getenv_optional_name(key: str, default: Optional[str] = None) -> Optional[str]:
    """Get environment variable as an optional identifier.

    Unset variables return the default. A variable that is set to an empty
    string or to one of "none", "null", "disabled" (any case) returns None,
    which lets a deployment switch off a field that a config file enables.

    Args:
        key: Environment variable name
        default: Value to return if the variable is not set

    Returns:
        The cleaned value, None when explicitly disabled, or the default
    """
    raw_value = getenv_clean(key, None)

    if raw_value is None:
        return default

    if raw_value.lower() in DISABLED_VALUES:
        return None

    return raw_value
