"""Shared help-panel groups for the nologs CLI."""

from __future__ import annotations

from cyclopts import Group

session_group = Group(
    "Session",
    help="Session and run context options.",
    sort_key=0,
)

output_group = Group(
    "Output",
    help="Choose the output format and report destination.",
    sort_key=1,
)

removal_group = Group(
    "Removal",
    help="Control how diagnostic calls are removed.",
    sort_key=2,
)

backup_group = Group(
    "Backup",
    help="Control pre-cleanup snapshots.",
    sort_key=3,
)

admin_group = Group(
    "Admin",
    help="Administrative commands and help.",
    sort_key=99,
)

__all__ = [
    "admin_group",
    "backup_group",
    "output_group",
    "removal_group",
    "session_group",
]
