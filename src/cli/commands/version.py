"""Version reporting for the comfortable CLI."""

from __future__ import annotations

import json
import platform
import sys
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version

PACKAGE_NAME = "comfortable-data"


def get_version() -> str:
    """Return the installed package version, or ``0.0.0-dev``."""
    return _package_version(PACKAGE_NAME) or "0.0.0-dev"


def get_version_info() -> dict[str, object]:
    """Get version information for the package and its serialization stack.

    Returns
    -------
    dict[str, object]
        Structured version payload.
    """
    return {
        PACKAGE_NAME: get_version(),
        "python": sys.version.split()[0],
        "platform": platform.platform(),
        "dependencies": {
            name: _package_version(name) for name in ("msgspec", "pyyaml", "cyclopts", "pydantic")
        },
    }


def version_command() -> int:
    """Show version information.

    Returns
    -------
    int
        Exit status code.
    """
    payload = json.dumps(get_version_info(), indent=2, sort_keys=True)
    sys.stdout.write(payload + "\n")
    return 0


def _package_version(name: str) -> str | None:
    try:
        return pkg_version(name)
    except PackageNotFoundError:
        return None


__all__ = ["get_version", "get_version_info", "version_command"]
