"""Workspace-level scan and cleanup orchestration."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

from core_types import PathLike, ensure_path
from removal.applier import RemovalOutcome, apply_removals, plan_file_removals
from scan import scan_text
from scan.matcher import Match
from serde_msgspec import StructBaseStrict
from utils.file_io import decode_source, write_text_atomic
from utils.hashing import hash_sha256_hex
from workspace.backup import BackupError, BackupWriter
from workspace.discovery import iter_source_files
from workspace.options import PipelineOptions
from workspace.session import CleanupSession

logger = logging.getLogger(__name__)

type FileStage = Literal["read", "decode", "backup", "write"]


class FileError(StructBaseStrict, frozen=True):
    """A per-file failure that did not abort the run."""

    rel_path: str
    stage: FileStage
    message: str


class FileFindings(StructBaseStrict, frozen=True):
    """Matches found in one file at scan time."""

    path: str
    rel_path: str
    content_hash: str
    matches: tuple[Match, ...]


class WorkspaceScan(StructBaseStrict, frozen=True):
    """Result of scanning every candidate file under a root."""

    root: str
    files: tuple[FileFindings, ...] = ()
    scanned: int = 0
    skipped: int = 0
    errors: tuple[FileError, ...] = ()

    @property
    def total_matches(self) -> int:
        """Return the number of matches across all files.

        Returns
        -------
        int
            Match count.
        """
        return sum(len(item.matches) for item in self.files)


class RemovalRecord(StructBaseStrict, frozen=True):
    """One applied removal, for reporting."""

    line: int
    method_name: str
    classification: str
    risk_flag: bool
    preview: str
    replacement: str | None = None


class FileCleanup(StructBaseStrict, frozen=True):
    """Outcome of cleaning one file."""

    rel_path: str
    removed: int = 0
    risky: int = 0
    deferred: int = 0
    skipped_risky: int = 0
    changed: bool = False
    error: str | None = None
    removals: tuple[RemovalRecord, ...] = ()


class CleanupReport(StructBaseStrict, frozen=True):
    """Result of a cleanup run."""

    root: str
    dry_run: bool
    files: tuple[FileCleanup, ...] = ()
    errors: tuple[FileError, ...] = ()
    backup_dir: str | None = None

    @property
    def total_removed(self) -> int:
        """Return the number of applied removals.

        Returns
        -------
        int
            Removal count.
        """
        return sum(item.removed for item in self.files)

    @property
    def total_risky(self) -> int:
        """Return the number of applied placeholder substitutions.

        Returns
        -------
        int
            Risky removal count.
        """
        return sum(item.risky for item in self.files)

    @property
    def files_changed(self) -> int:
        """Return how many files were (or would be) rewritten.

        Returns
        -------
        int
            Changed file count.
        """
        return sum(1 for item in self.files if item.changed)


def scan_workspace(
    root: PathLike,
    *,
    options: PipelineOptions | None = None,
    session: CleanupSession | None = None,
) -> WorkspaceScan:
    """Find diagnostic calls in every candidate file under ``root``.

    Files above ``max_file_bytes`` and files that are not valid text are
    skipped. Read failures are recorded per file.

    Returns
    -------
    WorkspaceScan
        Findings and counters for the run.

    Raises
    ------
    FileNotFoundError
        Raised when ``root`` is not a directory.
    """
    options = options or PipelineOptions()
    root_path = ensure_path(root).expanduser().resolve()
    if not root_path.is_dir():
        msg = f"Scan root is not a directory: {root_path}"
        raise FileNotFoundError(msg)
    findings: list[FileFindings] = []
    errors: list[FileError] = []
    scanned = 0
    skipped = 0
    for rel_path in iter_source_files(root_path, options.discovery):
        rel_posix = rel_path.as_posix()
        path = root_path / rel_path
        try:
            size = path.stat().st_size
            if size > options.max_file_bytes:
                logger.info("Skipping %s: %d bytes exceeds the size limit.", rel_posix, size)
                skipped += 1
                continue
            data = path.read_bytes()
        except OSError as exc:
            logger.warning("Failed to read %s: %s", rel_posix, exc)
            errors.append(FileError(rel_path=rel_posix, stage="read", message=str(exc)))
            continue
        text = decode_source(data)
        if text is None:
            logger.debug("Skipping %s: not valid text.", rel_posix)
            skipped += 1
            continue
        scanned += 1
        matches = scan_text(text, receiver=options.receiver, methods=options.methods)
        if matches:
            findings.append(
                FileFindings(
                    path=str(path),
                    rel_path=rel_posix,
                    content_hash=hash_sha256_hex(data),
                    matches=tuple(matches),
                )
            )
    scan = WorkspaceScan(
        root=str(root_path),
        files=tuple(findings),
        scanned=scanned,
        skipped=skipped,
        errors=tuple(errors),
    )
    logger.info(
        "Scanned %d file(s) under %s: %d match(es) in %d file(s).",
        scanned,
        root_path,
        scan.total_matches,
        len(findings),
    )
    if session is not None:
        session.record_scan(scan)
    return scan


def _removal_records(outcome: RemovalOutcome) -> tuple[RemovalRecord, ...]:
    return tuple(
        RemovalRecord(
            line=item.match.start_line + 1,
            method_name=item.match.method_name,
            classification=str(item.strategy.classification),
            risk_flag=item.strategy.risk_flag,
            preview=item.match.preview,
            replacement=item.strategy.replacement,
        )
        for item in outcome.applied
    )


def _file_cleanup(rel_path: str, outcome: RemovalOutcome, *, changed: bool) -> FileCleanup:
    return FileCleanup(
        rel_path=rel_path,
        removed=len(outcome.applied),
        risky=outcome.risky_count,
        deferred=len(outcome.deferred),
        skipped_risky=len(outcome.skipped_risky),
        changed=changed,
        removals=_removal_records(outcome),
    )


def _current_matches(
    findings: FileFindings,
    text: str,
    data: bytes,
    options: PipelineOptions,
) -> tuple[Match, ...]:
    if hash_sha256_hex(data) == findings.content_hash:
        return findings.matches
    logger.info("%s changed since the scan; rescanning.", findings.rel_path)
    return tuple(scan_text(text, receiver=options.receiver, methods=options.methods))


def clean_workspace(
    scan: WorkspaceScan,
    *,
    options: PipelineOptions | None = None,
    session: CleanupSession | None = None,
    dry_run: bool = False,
) -> CleanupReport:
    """Remove the calls found by ``scan`` from the files on disk.

    Each file is re-read first. When its content no longer matches the scan
    it is rescanned so offsets stay valid. Original bytes are copied into
    the backup snapshot before a file is rewritten; a file whose backup fails
    is left untouched.

    Parameters
    ----------
    scan
        Findings to act on.
    options
        Pipeline options; defaults apply when omitted.
    session
        Optional session receiving the written snapshot.
    dry_run
        When True, compute the outcome without writing anything.

    Returns
    -------
    CleanupReport
        Per-file outcome and errors.
    """
    options = options or PipelineOptions()
    root_path = Path(scan.root)
    writer: BackupWriter | None = None
    if options.backup.enabled and not dry_run:
        writer = BackupWriter(root_path, backup_root=options.backup.resolve_directory())
    files: list[FileCleanup] = []
    errors: list[FileError] = []
    for findings in scan.files:
        rel_path = findings.rel_path
        path = root_path / rel_path
        try:
            data = path.read_bytes()
        except OSError as exc:
            logger.warning("Failed to read %s: %s", rel_path, exc)
            errors.append(FileError(rel_path=rel_path, stage="read", message=str(exc)))
            files.append(FileCleanup(rel_path=rel_path, error=str(exc)))
            continue
        text = decode_source(data)
        if text is None:
            message = "file is no longer valid text"
            errors.append(FileError(rel_path=rel_path, stage="decode", message=message))
            files.append(FileCleanup(rel_path=rel_path, error=message))
            continue
        planned = plan_file_removals(
            text,
            _current_matches(findings, text, data, options),
            lookbehind_chars=options.lookbehind_chars,
            lookahead_chars=options.lookahead_chars,
        )
        outcome = apply_removals(text, planned, skip_risky=options.skip_risky)
        changed = outcome.text != text
        if changed and not dry_run:
            if writer is not None:
                try:
                    writer.add(rel_path, data)
                except BackupError as exc:
                    logger.error("Leaving %s unchanged: %s", rel_path, exc)
                    errors.append(FileError(rel_path=rel_path, stage="backup", message=str(exc)))
                    files.append(FileCleanup(rel_path=rel_path, error=str(exc)))
                    continue
            try:
                write_text_atomic(path, outcome.text)
            except OSError as exc:
                logger.warning("Failed to write %s: %s", rel_path, exc)
                errors.append(FileError(rel_path=rel_path, stage="write", message=str(exc)))
                files.append(FileCleanup(rel_path=rel_path, error=str(exc)))
                continue
        files.append(_file_cleanup(rel_path, outcome, changed=changed))
    snapshot = writer.finalize() if writer is not None else None
    if session is not None:
        if snapshot is not None:
            session.record_backup(snapshot)
        if not dry_run:
            session.clear_scan()
    report = CleanupReport(
        root=scan.root,
        dry_run=dry_run,
        files=tuple(files),
        errors=tuple(errors),
        backup_dir=snapshot.directory if snapshot is not None else None,
    )
    logger.info(
        "%s %d call(s) in %d file(s).",
        "Would remove" if dry_run else "Removed",
        report.total_removed,
        report.files_changed,
    )
    return report


__all__ = [
    "CleanupReport",
    "FileCleanup",
    "FileError",
    "FileFindings",
    "RemovalRecord",
    "WorkspaceScan",
    "clean_workspace",
    "scan_workspace",
]
