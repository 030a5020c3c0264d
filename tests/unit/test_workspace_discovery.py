"""Tests for workspace file discovery."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from workspace.discovery import (
    DiscoveryOptions,
    build_discovery_filters,
    iter_source_files,
    should_include_path,
)


def _touch(root: Path, rel: str, content: str = "console.log(1);\n") -> None:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def test_default_extensions_and_excluded_dirs(tmp_path: Path) -> None:
    """Ensure script files are found and dependency folders are pruned."""
    for rel in (
        "src/app.js",
        "src/view.tsx",
        "src/widget.vue",
        "src/readme.md",
        "node_modules/pkg/index.js",
        "dist/app.js",
        "lib/vendor/thing.js",
        "lib/util.mjs",
    ):
        _touch(tmp_path, rel)
    found = [path.as_posix() for path in iter_source_files(tmp_path)]
    assert found == ["lib/util.mjs", "src/app.js", "src/view.tsx", "src/widget.vue"]


def test_exclude_globs_skip_minified_and_bundled(tmp_path: Path) -> None:
    """Ensure generated bundles are not candidates."""
    for rel in ("a.js", "a.min.js", "b.bundle.js", "public/assets/x.js", "static/js/y.js"):
        _touch(tmp_path, rel)
    assert [path.as_posix() for path in iter_source_files(tmp_path)] == ["a.js"]


def test_gitignore_is_respected(tmp_path: Path) -> None:
    """Ensure ignored files and directories are skipped."""
    _touch(tmp_path, ".gitignore", "generated/\n*.gen.ts\n")
    for rel in ("keep.ts", "skip.gen.ts", "generated/out.js"):
        _touch(tmp_path, rel)
    assert [path.as_posix() for path in iter_source_files(tmp_path)] == ["keep.ts"]


def test_gitignore_can_be_disabled(tmp_path: Path) -> None:
    """Ensure ignore rules only apply when requested."""
    _touch(tmp_path, ".gitignore", "*.gen.ts\n")
    _touch(tmp_path, "skip.gen.ts")
    options = DiscoveryOptions(respect_gitignore=False)
    assert [path.as_posix() for path in iter_source_files(tmp_path, options)] == ["skip.gen.ts"]


def test_custom_include_globs(tmp_path: Path) -> None:
    """Ensure include globs replace the default extension set."""
    for rel in ("a.js", "b.ts", "c.es6"):
        _touch(tmp_path, rel)
    options = DiscoveryOptions(include_globs=("**/*.es6",))
    assert [path.as_posix() for path in iter_source_files(tmp_path, options)] == ["c.es6"]


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
def test_symlinks_are_not_followed_by_default(tmp_path: Path) -> None:
    """Ensure linked files and directories are skipped unless enabled."""
    outside = tmp_path / "outside"
    _touch(outside, "linked.js")
    root = tmp_path / "root"
    _touch(root, "real.js")
    try:
        (root / "link_dir").symlink_to(outside, target_is_directory=True)
        (root / "link.js").symlink_to(outside / "linked.js")
    except OSError:
        pytest.skip("cannot create symlinks")
    assert [path.as_posix() for path in iter_source_files(root)] == ["real.js"]
    followed = iter_source_files(root, DiscoveryOptions(follow_symlinks=True))
    assert sorted(path.as_posix() for path in followed) == [
        "link.js",
        "link_dir/linked.js",
        "real.js",
    ]


def test_should_include_path_checks_each_filter(tmp_path: Path) -> None:
    """Ensure the single-path predicate agrees with the walker."""
    filters = build_discovery_filters(tmp_path, DiscoveryOptions())
    assert should_include_path(Path("src/app.ts"), filters)
    assert not should_include_path(Path("src/app.py"), filters)
    assert not should_include_path(Path("node_modules/x/app.js"), filters)
    assert not should_include_path(Path("src/app.min.js"), filters)
