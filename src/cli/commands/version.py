"""Version reporting for the nologs CLI."""

from __future__ import annotations

import json
import platform
import sys
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version

DISTRIBUTION_NAME = "nologs"


def get_version() -> str:
    """Get the nologs package version string.

    Returns
    -------
    str
        Version string, or "0.0.0-dev" if not installed.
    """
    return _package_version(DISTRIBUTION_NAME) or "0.0.0-dev"


def get_version_info() -> dict[str, object]:
    """Get version information for nologs and its main dependencies.

    Returns
    -------
    dict[str, object]
        Structured version payload.
    """
    return {
        DISTRIBUTION_NAME: get_version(),
        "python": sys.version.split()[0],
        "platform": platform.platform(),
        "dependencies": {
            name: _package_version(name)
            for name in ("cyclopts", "msgspec", "pathspec", "pydantic", "rich")
        },
    }


def version_command() -> int:
    """Show version information as JSON.

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
