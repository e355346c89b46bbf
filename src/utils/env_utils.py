"""Environment variable parsing for configuration overrides."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import overload

_LOGGER = logging.getLogger(__name__)

_TRUE_VALUES = frozenset({"1", "true", "yes", "y", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "n", "off"})


def env_value(name: str) -> str | None:
    """Return stripped env var value, or None if empty/not set.

    Returns
    -------
    str | None
        Stripped value or None.
    """
    raw = os.environ.get(name)
    if raw is None:
        return None
    stripped = raw.strip()
    return stripped if stripped else None


def env_path(name: str) -> Path | None:
    """Return the env var as an expanded path, or None when unset.

    Returns
    -------
    Path | None
        Path with ``~`` expanded.
    """
    raw = env_value(name)
    if raw is None:
        return None
    return Path(raw).expanduser()


@overload
def env_bool(name: str) -> bool | None: ...


@overload
def env_bool(name: str, *, default: bool) -> bool: ...


def env_bool(name: str, *, default: bool | None = None) -> bool | None:
    """Parse environment variable as boolean.

    Unrecognised values are logged and fall back to ``default``.

    Returns
    -------
    bool | None
        Parsed boolean or default/None.
    """
    raw = env_value(name)
    if raw is None:
        return default
    value = raw.lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    _LOGGER.warning("Invalid boolean for %s: %r", name, raw)
    return default


@overload
def env_float(name: str) -> float | None: ...


@overload
def env_float(name: str, *, default: float) -> float: ...


def env_float(name: str, *, default: float | None = None) -> float | None:
    """Parse environment variable as float with error logging.

    Returns
    -------
    float | None
        Parsed float or default/None.
    """
    raw = env_value(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        _LOGGER.warning("Invalid float for %s: %r", name, raw)
        return default


__all__ = ["env_bool", "env_float", "env_path", "env_value"]
