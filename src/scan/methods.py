"""Diagnostic receiver and method allow-list defaults."""

from __future__ import annotations

from collections.abc import Iterable

DEFAULT_RECEIVER: str = "console"

DEFAULT_METHODS: frozenset[str] = frozenset(
    {
        "log",
        "error",
        "warn",
        "info",
        "debug",
        "trace",
        "assert",
        "dir",
        "dirxml",
        "group",
        "groupEnd",
        "groupCollapsed",
        "profile",
        "profileEnd",
        "time",
        "timeEnd",
        "timeLog",
        "timeStamp",
        "table",
        "count",
        "countReset",
        "clear",
    }
)


def normalize_methods(methods: Iterable[str] | None) -> frozenset[str]:
    """Return an immutable allow-list, falling back to the defaults.

    Returns
    -------
    frozenset[str]
        Method names recognized as removable diagnostic calls.
    """
    if methods is None:
        return DEFAULT_METHODS
    return frozenset(name.strip() for name in methods if name.strip())


__all__ = ["DEFAULT_METHODS", "DEFAULT_RECEIVER", "normalize_methods"]
