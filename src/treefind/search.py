"""Search configuration and walk/match composition."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from treefind.classifier import Entry
from treefind.filter import GitignoreFilter
from treefind.matcher import SearchMode, matches
from treefind.walker import walk

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SearchConfig:
    """Immutable description of one search.

    Attributes:
        start_directory: Directory the walk starts from.
        mode: Active search mode.
        exclude_paths: Subtrees pruned from the walk.
        max_depth: Maximum levels below the start directory. ``None`` means unlimited.
        gitignore: Whether to prune entries matched by the start directory's ``.gitignore``.
    """

    start_directory: Path
    mode: SearchMode
    exclude_paths: tuple[Path, ...] = ()
    max_depth: int | None = None
    gitignore: bool = False


def run_search(config: SearchConfig, on_match: Callable[[Entry], None]) -> int:
    """Walk the configured tree and hand every match to *on_match*.

    Matches are reported as they are discovered.

    Args:
        config: Search configuration.
        on_match: Callback invoked once per matching entry.

    Returns:
        int: Number of matches.

    Raises:
        WalkError: If the walk cannot complete.
        ClassifyError: If an entry cannot be classified.
    """
    count = 0

    def visit(entry: Entry) -> None:
        nonlocal count
        if matches(entry, config.mode):
            count += 1
            on_match(entry)

    entry_filter = GitignoreFilter.from_root(config.start_directory) if config.gitignore else None

    walk(
        config.start_directory,
        config.exclude_paths,
        config.max_depth,
        visit,
        entry_filter=entry_filter,
    )
    logger.debug("Search finished with %d match(es)", count)
    return count
