"""Recursive pre-order directory walker with subtree pruning and depth bound."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Protocol

from treefind import WalkError
from treefind.classifier import Entry, EntryKind, classify
from treefind.filter import PathExcluder

logger = logging.getLogger(__name__)

Visitor = Callable[[Entry], None]


class EntryFilter(Protocol):
    """Protocol for relative-path pruning filters (e.g. gitignore)."""

    def should_exclude(self, relative_path: str, is_dir: bool) -> bool: ...


def walk(
    directory: str | Path,
    exclude_paths: list[Path] | tuple[Path, ...] | None,
    max_depth: int | None,
    visit: Visitor,
    *,
    entry_filter: EntryFilter | None = None,
) -> None:
    """Walk *directory* depth-first and call *visit* for every kept entry.

    Entries are reported in filesystem enumeration order, each directory
    before its descendants. Any error aborts the whole walk.

    Args:
        directory: Start directory. Entry paths are built from it as given.
        exclude_paths: Subtrees to prune, compared by canonical path.
        max_depth: Maximum number of levels below *directory* to visit.
            ``None`` means unlimited.
        visit: Callback receiving each entry.
        entry_filter: Optional filter consulted with root-relative paths.

    Raises:
        WalkError: If a directory cannot be read or a path cannot be resolved.
        ClassifyError: If an entry's metadata cannot be read.
    """
    excluder = PathExcluder(exclude_paths)
    _walk_dir(
        os.fspath(directory),
        os.fspath(directory),
        excluder,
        entry_filter,
        max_depth,
        visit,
    )


def _list_dir(directory: str) -> list[os.DirEntry[str]]:
    try:
        with os.scandir(directory) as it:
            return list(it)
    except OSError as exc:
        raise WalkError(f"cannot read directory '{directory}': {exc}") from exc


def _relative_key(path: str, root: str) -> str:
    return os.path.relpath(path, root).replace(os.sep, "/")


def _walk_dir(
    directory: str,
    root: str,
    excluder: PathExcluder,
    entry_filter: EntryFilter | None,
    remaining_depth: int | None,
    visit: Visitor,
) -> None:
    if remaining_depth is not None and remaining_depth <= 0:
        logger.debug("Depth bound reached: %s", directory)
        return

    logger.debug("Entering %s", directory)
    # Handle is closed before any child is visited or recursed into.
    raw_entries = _list_dir(directory)
    child_depth = None if remaining_depth is None else remaining_depth - 1

    for raw_entry in raw_entries:
        entry = classify(raw_entry)
        is_dir = entry.kind is EntryKind.DIRECTORY

        if excluder and excluder.is_excluded(entry.path):
            logger.debug("Avoided: %s", entry.path)
            continue

        if entry_filter is not None and entry_filter.should_exclude(
            _relative_key(entry.path, root), is_dir
        ):
            logger.debug("Ignored: %s", entry.path)
            continue

        visit(entry)

        if is_dir:
            _walk_dir(entry.path, root, excluder, entry_filter, child_depth, visit)
