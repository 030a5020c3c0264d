"""Shared type aliases and small typing helpers."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Annotated

from msgspec import Meta
from pydantic import Field

type PathLike = str | Path

IDENTIFIER_PATTERN = "^[A-Za-z_$][A-Za-z0-9_$]*$"

type JsonPrimitive = str | int | float | bool | None
type JsonValue = JsonPrimitive | Mapping[str, JsonValue] | Sequence[JsonValue]

IdentifierStr = Annotated[
    str,
    Meta(
        pattern=IDENTIFIER_PATTERN,
        title="Identifier",
        description="Source-language identifier (receiver or method name).",
    ),
    Field(pattern=IDENTIFIER_PATTERN),
]


def ensure_path(value: PathLike) -> Path:
    """Return a Path for a str or Path input.

    Returns
    -------
    Path
        Normalized path value.
    """
    return value if isinstance(value, Path) else Path(value)


__all__ = [
    "IDENTIFIER_PATTERN",
    "IdentifierStr",
    "JsonPrimitive",
    "JsonValue",
    "PathLike",
    "ensure_path",
]
