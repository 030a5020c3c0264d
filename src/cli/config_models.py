"""Typed configuration models for nologs."""

from __future__ import annotations

from serde_msgspec import StructBaseStrict


class ScanConfig(StructBaseStrict, frozen=True):
    """Which files are scanned and which calls count as diagnostics."""

    receiver: str | None = None
    methods: tuple[str, ...] | None = None
    include_globs: tuple[str, ...] | None = None
    exclude_globs: tuple[str, ...] | None = None
    exclude_dirs: tuple[str, ...] | None = None
    respect_gitignore: bool | None = None
    follow_symlinks: bool | None = None
    max_file_bytes: int | None = None


class RemovalConfig(StructBaseStrict, frozen=True):
    """Context windows and risk policy for removals."""

    lookbehind_chars: int | None = None
    lookahead_chars: int | None = None
    skip_risky: bool | None = None


class BackupConfig(StructBaseStrict, frozen=True):
    """Pre-cleanup snapshot settings."""

    enabled: bool | None = None
    directory: str | None = None


class RootConfig(StructBaseStrict, frozen=True):
    """Root configuration payload for nologs."""

    scan: ScanConfig | None = None
    removal: RemovalConfig | None = None
    backup: BackupConfig | None = None
    log_level: str | None = None


__all__ = [
    "BackupConfig",
    "RemovalConfig",
    "RootConfig",
    "ScanConfig",
]
