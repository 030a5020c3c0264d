"""Runtime validation models for root CLI configuration."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import Field

from core_types import IdentifierStr
from runtime_models.base import RuntimeBase


class ScanConfigRuntime(RuntimeBase):
    """Validated scan configuration."""

    receiver: IdentifierStr | None = None
    methods: Annotated[tuple[IdentifierStr, ...], Field(min_length=1)] | None = None
    include_globs: tuple[str, ...] | None = None
    exclude_globs: tuple[str, ...] | None = None
    exclude_dirs: tuple[str, ...] | None = None
    respect_gitignore: bool | None = None
    follow_symlinks: bool | None = None
    max_file_bytes: int | None = Field(default=None, gt=0)


class RemovalConfigRuntime(RuntimeBase):
    """Validated removal configuration."""

    lookbehind_chars: int | None = Field(default=None, ge=0)
    lookahead_chars: int | None = Field(default=None, ge=0)
    skip_risky: bool | None = None


class BackupConfigRuntime(RuntimeBase):
    """Validated backup configuration."""

    enabled: bool | None = None
    directory: Annotated[str, Field(min_length=1)] | None = None


class RootConfigRuntime(RuntimeBase):
    """Validated root configuration."""

    scan: ScanConfigRuntime | None = None
    removal: RemovalConfigRuntime | None = None
    backup: BackupConfigRuntime | None = None
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] | None = None


__all__ = [
    "BackupConfigRuntime",
    "RemovalConfigRuntime",
    "RootConfigRuntime",
    "ScanConfigRuntime",
]
