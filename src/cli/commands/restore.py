"""Restore files from a backup snapshot."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

from cyclopts import Parameter

from cli.groups import backup_group
from cli.result import CliResult
from workspace.backup import load_manifest, restore_backup


def restore_command(
    snapshot: Annotated[
        Path,
        Parameter(help="Snapshot directory containing manifest.json."),
    ],
    *,
    root: Annotated[
        Path | None,
        Parameter(
            name="--root",
            help="Restore into this directory instead of the recorded root.",
            group=backup_group,
        ),
    ] = None,
) -> CliResult:
    """Write the files of a backup snapshot back to disk.

    Returns
    -------
    CliResult
        Summary of the restored files.
    """
    manifest = load_manifest(snapshot)
    restored = restore_backup(snapshot, root=root)
    target = root if root is not None else Path(manifest.root)
    return CliResult.success(
        summary=f"Restored {len(restored)} file(s) into {target}.",
        details=[str(path) for path in restored],
        metrics={"restored": len(restored)},
    )


__all__ = ["restore_command"]
