"""File I/O utilities with consistent encoding handling."""

from __future__ import annotations

import os
import tempfile
from collections.abc import Mapping
from pathlib import Path

import msgspec

DEFAULT_ENCODING = "utf-8"


def write_bytes_atomic(path: Path, data: bytes) -> None:
    """Replace a file's contents via a temporary sibling file.

    Parameters
    ----------
    path
        Target path; parent directories are created when missing.
    data
        New contents.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
        if path.exists():
            tmp_path.chmod(path.stat().st_mode)
        tmp_path.replace(path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


def write_text_atomic(path: Path, text: str, *, encoding: str = DEFAULT_ENCODING) -> None:
    """Replace a file's text; line breaks are written verbatim."""
    write_bytes_atomic(path, text.encode(encoding))


def read_toml(path: Path) -> Mapping[str, object]:
    """Read and parse a TOML file.

    Parameters
    ----------
    path
        Path to the TOML file.

    Returns
    -------
    Mapping[str, object]
        Parsed TOML content.

    Raises
    ------
    TypeError
        Raised when the TOML content is not a mapping.
    """
    payload = msgspec.toml.decode(path.read_text(encoding="utf-8"), type=object, strict=True)
    if not isinstance(payload, dict):
        msg = f"Expected TOML mapping in {path}, got {type(payload).__name__}."
        raise TypeError(msg)
    return payload


def decode_source(data: bytes, *, encoding: str = DEFAULT_ENCODING) -> str | None:
    """Decode source bytes strictly.

    Returns
    -------
    str | None
        Decoded text, or ``None`` when the bytes are not valid text.
    """
    if b"\x00" in data:
        return None
    try:
        text = data.decode(encoding)
    except (LookupError, UnicodeDecodeError):
        return None
    return text


__all__ = [
    "DEFAULT_ENCODING",
    "decode_source",
    "read_toml",
    "write_bytes_atomic",
    "write_text_atomic",
]
