"""Tests for file I/O and hashing helpers."""

from __future__ import annotations

import stat
from pathlib import Path

from utils.file_io import decode_source, read_toml, write_bytes_atomic, write_text_atomic
from utils.hashing import hash_sha256_hex


def test_write_text_atomic_keeps_line_breaks(tmp_path: Path) -> None:
    """Ensure CRLF text round-trips without translation."""
    target = tmp_path / "nested" / "a.js"
    write_text_atomic(target, "a\r\nb\n")
    assert target.read_bytes() == b"a\r\nb\n"


def test_write_bytes_atomic_preserves_mode(tmp_path: Path) -> None:
    """Ensure replacing a file keeps its permission bits."""
    target = tmp_path / "script.js"
    target.write_bytes(b"old")
    target.chmod(0o640)
    write_bytes_atomic(target, b"new")
    assert target.read_bytes() == b"new"
    assert stat.S_IMODE(target.stat().st_mode) == 0o640
    assert [path.name for path in tmp_path.iterdir()] == ["script.js"]


def test_decode_source_rejects_binary() -> None:
    """Ensure NUL bytes and invalid UTF-8 are not treated as text."""
    assert decode_source(b"console.log(1);") == "console.log(1);"
    assert decode_source(b"\x00abc") is None
    assert decode_source(b"\xff\xfe\xfa") is None


def test_read_toml(tmp_path: Path) -> None:
    """Ensure TOML tables decode to mappings."""
    path = tmp_path / "c.toml"
    path.write_text('[scan]\nreceiver = "logger"\n', encoding="utf-8")
    assert read_toml(path) == {"scan": {"receiver": "logger"}}


def test_hash_sha256_hex_truncates() -> None:
    """Ensure digests can be shortened to a prefix."""
    assert hash_sha256_hex(b"x", length=12) == hash_sha256_hex(b"x")[:12]
    assert len(hash_sha256_hex(b"x", length=12)) == 12
