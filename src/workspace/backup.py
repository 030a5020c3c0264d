"""Pre-cleanup snapshots of rewritten files and their restoration."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path, PurePosixPath

import msgspec

from core_types import PathLike, ensure_path
from serde_msgspec import StructBaseCompat, StructBaseStrict, dumps_json, loads_json
from utils.file_io import write_bytes_atomic
from utils.hashing import hash_sha256_hex
from utils.uuid_factory import uuid7_suffix

logger = logging.getLogger(__name__)

MANIFEST_NAME = "manifest.json"
MANIFEST_VERSION = 1


class BackupError(RuntimeError):
    """Raised when a snapshot cannot be written, read or restored."""


class BackupEntry(StructBaseCompat, frozen=True):
    """One file captured in a snapshot."""

    rel_path: str
    sha256: str
    size: int


class BackupManifest(StructBaseCompat, frozen=True):
    """Persisted index of a snapshot directory."""

    snapshot_id: str
    root: str
    created_at: str
    version: int = MANIFEST_VERSION
    entries: tuple[BackupEntry, ...] = ()


class BackupSnapshot(StructBaseStrict, frozen=True):
    """A written snapshot and its manifest."""

    directory: str
    manifest: BackupManifest

    @property
    def file_count(self) -> int:
        """Return the number of files in the snapshot.

        Returns
        -------
        int
            Entry count.
        """
        return len(self.manifest.entries)


def new_snapshot_id() -> str:
    """Return a sortable snapshot directory name.

    Returns
    -------
    str
        UTC timestamp with a short random suffix.
    """
    return f"{datetime.now(UTC):%Y%m%dT%H%M%SZ}-{uuid7_suffix(8)}"


def _safe_relative(rel_path: str) -> PurePosixPath:
    candidate = PurePosixPath(rel_path)
    if candidate.is_absolute() or ".." in candidate.parts or not candidate.parts:
        msg = f"Refusing unsafe backup path: {rel_path!r}."
        raise BackupError(msg)
    return candidate


class BackupWriter:
    """Incrementally copy original file bytes into a snapshot directory.

    The snapshot directory is only created when the first file is added.
    The manifest is rewritten after every addition so an interrupted run
    still leaves a restorable snapshot.
    """

    def __init__(
        self,
        root: PathLike,
        *,
        backup_root: PathLike,
        snapshot_id: str | None = None,
    ) -> None:
        self._root = ensure_path(root).resolve()
        self._snapshot_id = snapshot_id or new_snapshot_id()
        self._directory = ensure_path(backup_root).expanduser() / self._snapshot_id
        self._created_at = datetime.now(UTC).isoformat()
        self._entries: list[BackupEntry] = []

    @property
    def directory(self) -> Path:
        """Return the snapshot directory.

        Returns
        -------
        Path
            Directory receiving the copies.
        """
        return self._directory

    @property
    def has_entries(self) -> bool:
        """Return True once a file has been captured.

        Returns
        -------
        bool
            Whether the snapshot holds at least one file.
        """
        return bool(self._entries)

    def add(self, rel_path: str, data: bytes) -> Path:
        """Copy the bytes of one file into the snapshot.

        Returns
        -------
        Path
            Location of the copy.

        Raises
        ------
        BackupError
            Raised when the copy or manifest cannot be written.
        """
        safe = _safe_relative(rel_path)
        target = self._directory.joinpath(*safe.parts)
        try:
            write_bytes_atomic(target, data)
            self._entries.append(
                BackupEntry(rel_path=safe.as_posix(), sha256=hash_sha256_hex(data), size=len(data))
            )
            write_bytes_atomic(
                self._directory / MANIFEST_NAME,
                dumps_json(self.manifest(), pretty=True),
            )
        except OSError as exc:
            msg = f"Failed to back up {rel_path} into {self._directory}: {exc}"
            raise BackupError(msg) from exc
        logger.debug("Backed up %s to %s.", rel_path, target)
        return target

    def manifest(self) -> BackupManifest:
        """Return the manifest for the files captured so far.

        Returns
        -------
        BackupManifest
            Current manifest.
        """
        return BackupManifest(
            snapshot_id=self._snapshot_id,
            root=str(self._root),
            created_at=self._created_at,
            entries=tuple(self._entries),
        )

    def finalize(self) -> BackupSnapshot | None:
        """Return the finished snapshot, or ``None`` when nothing was captured.

        Returns
        -------
        BackupSnapshot | None
            Snapshot description.
        """
        if not self._entries:
            return None
        snapshot = BackupSnapshot(directory=str(self._directory), manifest=self.manifest())
        logger.info("Backed up %d file(s) to %s.", snapshot.file_count, self._directory)
        return snapshot


def create_backup(
    root: PathLike,
    files: Iterable[PathLike],
    *,
    backup_root: PathLike,
) -> BackupSnapshot | None:
    """Copy the current contents of ``files`` into a new snapshot.

    Parameters
    ----------
    root
        Workspace root the paths are relative to.
    files
        Root-relative paths of the files to capture.
    backup_root
        Directory receiving the snapshot directory.

    Returns
    -------
    BackupSnapshot | None
        Snapshot description, or ``None`` when ``files`` is empty.

    Raises
    ------
    BackupError
        Raised when a file cannot be read or copied.
    """
    root_path = ensure_path(root).resolve()
    writer = BackupWriter(root_path, backup_root=backup_root)
    for rel in files:
        rel_posix = ensure_path(rel).as_posix()
        try:
            data = (root_path / rel_posix).read_bytes()
        except OSError as exc:
            msg = f"Failed to read {rel_posix} for backup: {exc}"
            raise BackupError(msg) from exc
        writer.add(rel_posix, data)
    return writer.finalize()


def load_manifest(snapshot_dir: PathLike) -> BackupManifest:
    """Read and validate the manifest of a snapshot directory.

    Returns
    -------
    BackupManifest
        Decoded manifest.

    Raises
    ------
    BackupError
        Raised when the manifest is missing or malformed.
    """
    manifest_path = ensure_path(snapshot_dir).expanduser() / MANIFEST_NAME
    try:
        payload = manifest_path.read_bytes()
    except OSError as exc:
        msg = f"Backup manifest not readable: {manifest_path}: {exc}"
        raise BackupError(msg) from exc
    try:
        return loads_json(payload, target_type=BackupManifest)
    except (msgspec.DecodeError, msgspec.ValidationError) as exc:
        msg = f"Backup manifest is corrupt: {manifest_path}: {exc}"
        raise BackupError(msg) from exc


def restore_backup(snapshot_dir: PathLike, *, root: PathLike | None = None) -> list[Path]:
    """Write every file of a snapshot back into the workspace.

    All copies are verified against their recorded digests before any file
    is written.

    Parameters
    ----------
    snapshot_dir
        Snapshot directory containing ``manifest.json``.
    root
        Target root; defaults to the root recorded in the manifest.

    Returns
    -------
    list[Path]
        Restored file paths.

    Raises
    ------
    BackupError
        Raised when a copy is missing or does not match its digest.
    """
    directory = ensure_path(snapshot_dir).expanduser()
    manifest = load_manifest(directory)
    target_root = ensure_path(root) if root is not None else Path(manifest.root)
    staged: list[tuple[Path, bytes]] = []
    for entry in manifest.entries:
        safe = _safe_relative(entry.rel_path)
        copy_path = directory.joinpath(*safe.parts)
        try:
            data = copy_path.read_bytes()
        except OSError as exc:
            msg = f"Backup copy missing for {entry.rel_path}: {exc}"
            raise BackupError(msg) from exc
        if hash_sha256_hex(data) != entry.sha256:
            msg = f"Backup copy of {entry.rel_path} does not match its recorded digest."
            raise BackupError(msg)
        staged.append((target_root.joinpath(*safe.parts), data))
    restored: list[Path] = []
    for target, data in staged:
        try:
            write_bytes_atomic(target, data)
        except OSError as exc:
            msg = f"Failed to restore {target}: {exc}"
            raise BackupError(msg) from exc
        restored.append(target)
    logger.info("Restored %d file(s) from %s.", len(restored), directory)
    return restored


__all__ = [
    "MANIFEST_NAME",
    "BackupEntry",
    "BackupError",
    "BackupManifest",
    "BackupSnapshot",
    "BackupWriter",
    "create_backup",
    "load_manifest",
    "new_snapshot_id",
    "restore_backup",
]
