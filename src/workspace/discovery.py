"""Pathspec-backed discovery of script files under a workspace root."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import cast

from pathspec import GitIgnoreSpec, PathSpec

from core_types import PathLike, ensure_path
from serde_msgspec import StructBaseStrict

DEFAULT_INCLUDE_GLOBS: tuple[str, ...] = (
    "**/*.js",
    "**/*.jsx",
    "**/*.ts",
    "**/*.tsx",
    "**/*.mjs",
    "**/*.cjs",
    "**/*.vue",
    "**/*.svelte",
)
DEFAULT_EXCLUDE_GLOBS: tuple[str, ...] = (
    "**/*.min.js",
    "**/*.bundle.js",
    "**/public/assets/**",
    "**/static/js/**",
)
DEFAULT_EXCLUDE_DIRS: tuple[str, ...] = (
    "node_modules",
    "dist",
    "build",
    "out",
    ".output",
    "coverage",
    ".git",
    ".vscode",
    ".idea",
    "bin",
    "obj",
    "vendor",
    "vendors",
)


class DiscoveryOptions(StructBaseStrict, frozen=True):
    """Which files under a root are candidates for scanning."""

    include_globs: tuple[str, ...] = DEFAULT_INCLUDE_GLOBS
    exclude_globs: tuple[str, ...] = DEFAULT_EXCLUDE_GLOBS
    exclude_dirs: tuple[str, ...] = DEFAULT_EXCLUDE_DIRS
    respect_gitignore: bool = True
    follow_symlinks: bool = False


@dataclass(frozen=True)
class DiscoveryFilters:
    """Compiled pathspec filters for one root."""

    include_spec: PathSpec | None
    exclude_spec: PathSpec | None
    ignore_spec: GitIgnoreSpec | None
    exclude_dirs: frozenset[str]


def build_discovery_filters(root: PathLike, options: DiscoveryOptions) -> DiscoveryFilters:
    """Compile include/exclude globs and the repository ignore rules.

    Returns
    -------
    DiscoveryFilters
        Compiled filters.
    """
    root_path = ensure_path(root)
    from_lines = cast("Callable[[str, Iterable[str]], PathSpec]", PathSpec.from_lines)
    include_spec = (
        from_lines("gitwildmatch", list(options.include_globs)) if options.include_globs else None
    )
    exclude_spec = (
        from_lines("gitwildmatch", list(options.exclude_globs)) if options.exclude_globs else None
    )
    ignore_spec = _gitignore_spec(root_path) if options.respect_gitignore else None
    return DiscoveryFilters(
        include_spec=include_spec,
        exclude_spec=exclude_spec,
        ignore_spec=ignore_spec,
        exclude_dirs=frozenset(options.exclude_dirs),
    )


def should_include_path(rel_path: Path, filters: DiscoveryFilters) -> bool:
    """Return True when a root-relative file path passes every filter.

    Returns
    -------
    bool
        ``True`` when the file should be scanned.
    """
    if any(part in filters.exclude_dirs for part in rel_path.parts[:-1]):
        return False
    rel_posix = rel_path.as_posix()
    if filters.include_spec is not None and not filters.include_spec.match_file(rel_posix):
        return False
    if filters.exclude_spec is not None and filters.exclude_spec.match_file(rel_posix):
        return False
    return not (filters.ignore_spec is not None and filters.ignore_spec.match_file(rel_posix))


def _prune_dir(rel_dir: Path, filters: DiscoveryFilters) -> bool:
    if rel_dir.name in filters.exclude_dirs:
        return True
    if filters.ignore_spec is None:
        return False
    return filters.ignore_spec.match_file(f"{rel_dir.as_posix()}/")


def iter_source_files(root: PathLike, options: DiscoveryOptions | None = None) -> Iterator[Path]:
    """Yield candidate files below ``root`` with directory pruning.

    Parameters
    ----------
    root
        Directory to walk.
    options
        Discovery options; defaults apply when omitted.

    Yields
    ------
    Path
        Root-relative file paths, sorted within each directory.
    """
    options = options or DiscoveryOptions()
    root_path = ensure_path(root).resolve()
    filters = build_discovery_filters(root_path, options)
    for current, dirs, files in os.walk(root_path, followlinks=options.follow_symlinks):
        current_path = Path(current)
        rel_current = current_path.relative_to(root_path)
        kept_dirs: list[str] = []
        for name in sorted(dirs):
            if not options.follow_symlinks and (current_path / name).is_symlink():
                continue
            if _prune_dir(rel_current / name, filters):
                continue
            kept_dirs.append(name)
        dirs[:] = kept_dirs
        for filename in sorted(files):
            abs_path = current_path / filename
            if not options.follow_symlinks and abs_path.is_symlink():
                continue
            rel_path = rel_current / filename
            if should_include_path(rel_path, filters):
                yield rel_path


def _gitignore_spec(root: Path) -> GitIgnoreSpec | None:
    lines: list[str] = []
    root_ignore = root / ".gitignore"
    if root_ignore.is_file():
        lines.extend(_read_lines(root_ignore))
    info_exclude = root / ".git" / "info" / "exclude"
    if info_exclude.is_file():
        lines.extend(_read_lines(info_exclude))
    if not lines:
        return None
    ignore_from_lines = cast("Callable[[Iterable[str]], GitIgnoreSpec]", GitIgnoreSpec.from_lines)
    return ignore_from_lines(lines)


def _read_lines(path: Path) -> list[str]:
    try:
        return path.read_text(encoding="utf-8", errors="replace").splitlines()
    except OSError:
        return []


__all__ = [
    "DEFAULT_EXCLUDE_DIRS",
    "DEFAULT_EXCLUDE_GLOBS",
    "DEFAULT_INCLUDE_GLOBS",
    "DiscoveryFilters",
    "DiscoveryOptions",
    "build_discovery_filters",
    "iter_source_files",
    "should_include_path",
]
