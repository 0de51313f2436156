"""Shared fixtures for treefind tests."""

from __future__ import annotations

import os
from pathlib import Path

import pytest


@pytest.fixture
def search_tree(tmp_path: Path) -> Path:
    """Create the standard search tree.

    Structure::

        root/
        ├── a.txt
        └── sub/
            ├── b.txt
            └── c.exe      (mode 0o755)
    """
    (tmp_path / "a.txt").write_text("a")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "b.txt").write_text("b")
    exe = tmp_path / "sub" / "c.exe"
    exe.write_text("#!/bin/sh\n")
    exe.chmod(0o755)
    return tmp_path


@pytest.fixture
def deep_tree(tmp_path: Path) -> Path:
    """Create a linear chain of directories five levels deep.

    Structure::

        root/
        └── l1/
            ├── f1.txt
            └── l2/
                ├── f2.txt
                └── l3/ ... l5/
                            └── f5.txt
    """
    current = tmp_path
    for level in range(1, 6):
        current = current / f"l{level}"
        current.mkdir()
        (current / f"f{level}.txt").write_text(str(level))
    return tmp_path


@pytest.fixture
def mixed_tree(tmp_path: Path) -> Path:
    """Tree with symlinks, executables, dot-files and multi-dot names.

    Structure::

        root/
        ├── .bashrc
        ├── README
        ├── archive.tar.gz
        ├── bin/
        │   ├── run.sh       (mode 0o755)
        │   └── tool -> run.sh
        ├── docs/
        │   ├── guide.md
        │   └── notes.txt
        ├── docs-link -> docs
        └── notes.txt -> docs/notes.txt
    """
    (tmp_path / ".bashrc").write_text("rc")
    (tmp_path / "README").write_text("readme")
    (tmp_path / "archive.tar.gz").write_bytes(b"\x1f\x8b")
    (tmp_path / "bin").mkdir()
    run = tmp_path / "bin" / "run.sh"
    run.write_text("#!/bin/sh\n")
    run.chmod(0o755)
    os.symlink("run.sh", tmp_path / "bin" / "tool")
    (tmp_path / "docs").mkdir()
    (tmp_path / "docs" / "guide.md").write_text("guide")
    (tmp_path / "docs" / "notes.txt").write_text("notes")
    os.symlink("docs", tmp_path / "docs-link")
    os.symlink(os.path.join("docs", "notes.txt"), tmp_path / "notes.txt")
    return tmp_path


def collect_paths(root: Path, **kwargs) -> list[str]:
    """Walk *root* and return visited paths relative to it, in visit order."""
    from treefind.walker import walk

    visited: list[str] = []
    walk(
        str(root),
        kwargs.pop("exclude_paths", None),
        kwargs.pop("max_depth", None),
        lambda entry: visited.append(os.path.relpath(entry.path, root)),
        **kwargs,
    )
    return visited
