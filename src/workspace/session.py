"""Caller-owned state carried between scan and cleanup steps."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from workspace.backup import BackupSnapshot
    from workspace.pipeline import WorkspaceScan


@dataclass
class CleanupSession:
    """Most recent scan and backup of one interactive run."""

    last_scan: WorkspaceScan | None = None
    last_backup: BackupSnapshot | None = None
    backups: list[BackupSnapshot] = field(default_factory=list)

    def record_scan(self, scan: WorkspaceScan) -> None:
        """Remember ``scan`` as the basis for the next cleanup."""
        self.last_scan = scan

    def scan_for(self, root: str) -> WorkspaceScan | None:
        """Return the remembered scan when it covers ``root``.

        Returns
        -------
        WorkspaceScan | None
            Cached scan for the same resolved root.
        """
        if self.last_scan is not None and self.last_scan.root == root:
            return self.last_scan
        return None

    def record_backup(self, snapshot: BackupSnapshot) -> None:
        """Remember a snapshot written during cleanup."""
        self.last_backup = snapshot
        self.backups.append(snapshot)

    def clear_scan(self) -> None:
        """Forget the remembered scan once its offsets are stale."""
        self.last_scan = None


__all__ = ["CleanupSession"]
