"""Workspace discovery, cleanup pipeline, backups and reports."""

from workspace.backup import BackupError, BackupSnapshot, create_backup, restore_backup
from workspace.discovery import DiscoveryOptions, iter_source_files
from workspace.options import BackupOptions, PipelineOptions, pipeline_options_from_config
from workspace.pipeline import (
    CleanupReport,
    FileCleanup,
    FileFindings,
    WorkspaceScan,
    clean_workspace,
    scan_workspace,
)
from workspace.session import CleanupSession

__all__ = [
    "BackupError",
    "BackupOptions",
    "BackupSnapshot",
    "CleanupReport",
    "CleanupSession",
    "DiscoveryOptions",
    "FileCleanup",
    "FileFindings",
    "PipelineOptions",
    "WorkspaceScan",
    "clean_workspace",
    "create_backup",
    "iter_source_files",
    "pipeline_options_from_config",
    "restore_backup",
    "scan_workspace",
]
