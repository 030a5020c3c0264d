"""UUID generation helpers with time-ordered defaults.

Use UUIDv7 for run identifiers and backup snapshot names so that they sort
by creation time.
"""

from __future__ import annotations

import threading
import uuid
from collections.abc import Callable
from typing import Final, cast

import uuid6

UUID7_HEX_LENGTH: Final[int] = 32
_UUID_LOCK: Final[threading.Lock] = threading.Lock()


def uuid7() -> uuid.UUID:
    """Return a time-ordered UUIDv7 (thread-safe, monotone)."""
    with _UUID_LOCK:
        uuid7_func = getattr(uuid, "uuid7", None)
        if callable(uuid7_func):
            return cast("Callable[[], uuid.UUID]", uuid7_func)()
        return uuid6.uuid7()


def uuid7_str() -> str:
    """Return a UUIDv7 as a string.

    Returns:
    -------
    str
        String representation of UUIDv7.
    """
    return str(uuid7())


def uuid7_suffix(length: int = 12) -> str:
    """Return a short suffix from the UUIDv7 random tail.

    Returns:
    -------
    str
        Suffix string from the UUIDv7 value.

    Raises:
        ValueError: If ``length`` is not in ``1..32``.
    """
    if length <= 0:
        msg = "length must be positive."
        raise ValueError(msg)
    if length > UUID7_HEX_LENGTH:
        msg = "length must not exceed 32."
        raise ValueError(msg)
    return uuid7().hex[-length:]


__all__ = ["UUID7_HEX_LENGTH", "uuid7", "uuid7_str", "uuid7_suffix"]
