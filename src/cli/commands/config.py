"""Configuration management commands."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Annotated

from cyclopts import Parameter

from cli.config_loader import CONFIG_FILENAME, load_effective_config_with_sources
from cli.context import RunContext
from cli.groups import admin_group
from cli.validation import validate_config_consistency

_TEMPLATE = """# nologs.toml

[scan]
receiver = "console"
# methods = ["log", "debug", "info", "warn", "error", "trace", "table"]
include_globs = ["**/*.js", "**/*.jsx", "**/*.ts", "**/*.tsx", "**/*.mjs", "**/*.cjs", "**/*.vue", "**/*.svelte"]
exclude_globs = ["**/*.min.js", "**/*.bundle.js", "**/public/assets/**", "**/static/js/**"]
# exclude_dirs = ["node_modules", "dist", "build", "out", "coverage", ".git", "vendor"]
respect_gitignore = true
follow_symlinks = false
max_file_bytes = 5000000

[removal]
lookbehind_chars = 100
lookahead_chars = 50
skip_risky = false

[backup]
enabled = true
directory = "~/.no-logs-backup"

# log_level = "INFO"
"""


def show_config(
    *,
    with_sources: Annotated[
        bool,
        Parameter(
            name="--with-sources",
            help="Show the source of each configuration value.",
        ),
    ] = False,
    run_context: Annotated[RunContext | None, Parameter(parse=False)] = None,
) -> int:
    """Show the effective configuration, defaults included.

    Returns
    -------
    int
        Exit status code.
    """
    config_with_sources = (
        run_context.config_sources
        if run_context is not None and run_context.config_sources is not None
        else load_effective_config_with_sources(None)
    )
    if with_sources:
        payload = json.dumps(config_with_sources.to_display_dict(), indent=2, sort_keys=True)
        sys.stdout.write(payload + "\n")
        return 0

    effective = config_with_sources.to_nested_dict(include_defaults=True)
    validate_config_consistency(effective)
    payload = json.dumps(effective, indent=2, sort_keys=True)
    sys.stdout.write(payload + "\n")
    return 0


def init_config(
    *,
    path: Annotated[
        Path | None,
        Parameter(
            name="--path",
            help=f"Path to write the configuration template (default: {CONFIG_FILENAME}).",
        ),
    ] = None,
    force: Annotated[
        bool,
        Parameter(
            name="--force",
            help="Overwrite existing config file.",
            group=admin_group,
        ),
    ] = False,
) -> int:
    """Write a configuration template to disk.

    Args:
        path: Optional output path for the template file.
        force: Whether to overwrite an existing file.

    Returns:
        int: Exit status code.

    Raises:
        FileExistsError: If the target path exists and `force` is false.
    """
    target_path = path if path is not None else Path(CONFIG_FILENAME)
    if target_path.exists() and not force:
        msg = f"Config file already exists: {target_path}."
        raise FileExistsError(msg)
    target_path.write_text(_TEMPLATE, encoding="utf-8")
    return 0


__all__ = ["init_config", "show_config"]
