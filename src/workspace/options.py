"""Options shared by the scan and cleanup pipeline."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

import msgspec

from removal.context import DEFAULT_LOOKAHEAD_CHARS, DEFAULT_LOOKBEHIND_CHARS
from scan.methods import DEFAULT_METHODS, DEFAULT_RECEIVER
from serde_msgspec import StructBaseStrict
from workspace.discovery import DiscoveryOptions

DEFAULT_MAX_FILE_BYTES = 5_000_000
DEFAULT_BACKUP_DIRECTORY = "~/.no-logs-backup"

_DISCOVERY_KEYS = (
    "include_globs",
    "exclude_globs",
    "exclude_dirs",
    "respect_gitignore",
    "follow_symlinks",
)


class BackupOptions(StructBaseStrict, frozen=True):
    """Where pre-cleanup copies of files are written."""

    enabled: bool = True
    directory: str = DEFAULT_BACKUP_DIRECTORY

    def resolve_directory(self) -> Path:
        """Return the backup root with ``~`` expanded.

        Returns
        -------
        Path
            Backup root directory.
        """
        return Path(self.directory).expanduser()


class PipelineOptions(StructBaseStrict, frozen=True):
    """Settings for one scan or cleanup run."""

    discovery: DiscoveryOptions = msgspec.field(default_factory=DiscoveryOptions)
    receiver: str = DEFAULT_RECEIVER
    methods: tuple[str, ...] = tuple(sorted(DEFAULT_METHODS))
    max_file_bytes: int = DEFAULT_MAX_FILE_BYTES
    lookbehind_chars: int = DEFAULT_LOOKBEHIND_CHARS
    lookahead_chars: int = DEFAULT_LOOKAHEAD_CHARS
    skip_risky: bool = False
    backup: BackupOptions = msgspec.field(default_factory=BackupOptions)


def _section(config: Mapping[str, object], name: str) -> Mapping[str, object]:
    value = config.get(name)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        msg = f"Config section {name!r} must be a table."
        raise TypeError(msg)
    return value


def pipeline_options_from_config(config: Mapping[str, object]) -> PipelineOptions:
    """Build pipeline options from a loaded configuration mapping.

    Parameters
    ----------
    config
        Mapping with optional ``scan``, ``removal`` and ``backup`` tables.

    Returns
    -------
    PipelineOptions
        Options with configured values over the defaults.
    """
    scan = _section(config, "scan")
    removal = _section(config, "removal")
    backup = _section(config, "backup")
    payload: dict[str, object] = {
        "discovery": {key: scan[key] for key in _DISCOVERY_KEYS if key in scan},
        "backup": dict(backup),
    }
    for key in ("receiver", "methods", "max_file_bytes"):
        if key in scan:
            payload[key] = scan[key]
    for key in ("lookbehind_chars", "lookahead_chars", "skip_risky"):
        if key in removal:
            payload[key] = removal[key]
    return msgspec.convert(payload, type=PipelineOptions)


__all__ = [
    "DEFAULT_BACKUP_DIRECTORY",
    "DEFAULT_MAX_FILE_BYTES",
    "BackupOptions",
    "PipelineOptions",
    "pipeline_options_from_config",
]
