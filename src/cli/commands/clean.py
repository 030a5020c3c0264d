"""Remove diagnostic calls from a workspace."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import msgspec
from cyclopts import Parameter
from rich.prompt import Confirm

from cli.config_loader import load_effective_config
from cli.context import RunContext
from cli.exit_codes import ExitCode
from cli.groups import backup_group, output_group, removal_group
from cli.result import CliResult
from utils.file_io import write_text_atomic
from workspace.options import PipelineOptions, pipeline_options_from_config
from workspace.pipeline import CleanupReport, WorkspaceScan, clean_workspace, scan_workspace
from workspace.report import render_cleanup_markdown
from workspace.session import CleanupSession

logger = logging.getLogger(__name__)


def _apply_overrides(
    options: PipelineOptions,
    *,
    skip_risky: bool | None,
    no_backup: bool,
    backup_dir: Path | None,
) -> PipelineOptions:
    backup = options.backup
    if no_backup:
        backup = msgspec.structs.replace(backup, enabled=False)
    if backup_dir is not None:
        backup = msgspec.structs.replace(backup, directory=str(backup_dir))
    return msgspec.structs.replace(
        options,
        skip_risky=options.skip_risky if skip_risky is None else skip_risky,
        backup=backup,
    )


def _scan_for_cleanup(
    root: Path,
    options: PipelineOptions,
    session: CleanupSession,
) -> WorkspaceScan:
    cached = session.scan_for(str(root.expanduser().resolve()))
    if cached is not None:
        logger.debug("Reusing the scan of %s from this session.", cached.root)
        return cached
    return scan_workspace(root, options=options, session=session)


def _details(report: CleanupReport) -> list[str]:
    lines: list[str] = []
    deferred = sum(item.deferred for item in report.files)
    skipped_risky = sum(item.skipped_risky for item in report.files)
    if report.total_risky:
        lines.append(
            f"{report.total_risky} call(s) were replaced by a placeholder value; review them."
        )
    if deferred:
        lines.append(f"{deferred} overlapping call(s) were left in place; run clean again.")
    if skipped_risky:
        lines.append(f"{skipped_risky} risky call(s) were left in place.")
    lines.extend(
        f"{error.rel_path}: {error.stage} failed: {error.message}" for error in report.errors
    )
    return lines


def clean_command(
    root: Annotated[
        Path,
        Parameter(help="Directory to clean."),
    ] = Path(),
    *,
    yes: Annotated[
        bool,
        Parameter(
            name=["--yes", "-y"],
            help="Do not ask for confirmation.",
            negative=(),
        ),
    ] = False,
    dry_run: Annotated[
        bool,
        Parameter(
            name="--dry-run",
            help="Report what would be removed without writing any file.",
            negative=(),
            group=removal_group,
        ),
    ] = False,
    skip_risky: Annotated[
        bool | None,
        Parameter(
            name="--skip-risky",
            help="Leave calls that need a placeholder value in place.",
            group=removal_group,
        ),
    ] = None,
    no_backup: Annotated[
        bool,
        Parameter(
            name="--no-backup",
            help="Do not snapshot files before rewriting them.",
            negative=(),
            group=backup_group,
        ),
    ] = False,
    backup_dir: Annotated[
        Path | None,
        Parameter(
            name="--backup-dir",
            help="Directory receiving backup snapshots.",
            group=backup_group,
        ),
    ] = None,
    report: Annotated[
        Path | None,
        Parameter(
            name="--report",
            help="Write a Markdown report of the removals to this path.",
            group=output_group,
        ),
    ] = None,
    run_context: Annotated[RunContext | None, Parameter(parse=False)] = None,
) -> CliResult:
    """Scan ROOT and remove every diagnostic call found.

    Returns
    -------
    CliResult
        Summary of the cleanup.
    """
    config = run_context.config_contents if run_context is not None else load_effective_config(None)
    options = _apply_overrides(
        pipeline_options_from_config(config),
        skip_risky=skip_risky,
        no_backup=no_backup,
        backup_dir=backup_dir,
    )
    session = run_context.session if run_context is not None else CleanupSession()
    scan = _scan_for_cleanup(root, options, session)
    if not scan.total_matches:
        return CliResult.success(
            summary=f"No diagnostic calls found ({scan.scanned} file(s) scanned).",
            metrics={"files_scanned": scan.scanned, "matches": 0},
        )

    if not (yes or dry_run) and not Confirm.ask(
        f"Remove {scan.total_matches} diagnostic call(s) from {len(scan.files)} file(s)?",
        default=False,
    ):
        return CliResult.success(summary="Cleanup cancelled; no files were changed.")

    result = clean_workspace(scan, options=options, session=session, dry_run=dry_run)
    artifacts: dict[str, Path] = {}
    if result.backup_dir is not None:
        artifacts["backup"] = Path(result.backup_dir)
    if report is not None:
        write_text_atomic(report, render_cleanup_markdown(result))
        artifacts["report"] = report

    verb = "Would remove" if dry_run else "Removed"
    summary = (
        f"{verb} {result.total_removed} diagnostic call(s) from {result.files_changed} file(s)."
    )
    metrics = {
        "matches": scan.total_matches,
        "removed": result.total_removed,
        "risky": result.total_risky,
        "files_changed": result.files_changed,
        "errors": len(result.errors),
    }
    if result.errors and not result.total_removed:
        return CliResult.error(
            ExitCode.REMOVAL_ERROR,
            summary=summary,
            details=_details(result),
            metrics=metrics,
        )
    return CliResult(
        exit_code=ExitCode.SUCCESS,
        summary=summary,
        details=tuple(_details(result)),
        artifacts=artifacts,
        metrics=metrics,
    )


__all__ = ["clean_command"]
