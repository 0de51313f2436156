"""Entry pruning: canonical-path exclusion and gitignore matching."""

from __future__ import annotations

import logging
from pathlib import Path

from pathspec import GitIgnoreSpec

from treefind import WalkError

logger = logging.getLogger(__name__)


def canonicalize(path: str | Path) -> Path:
    """Return the absolute, symlink-resolved form of *path*.

    Raises:
        WalkError: If the path (or a link along it) cannot be resolved.
    """
    try:
        return Path(path).resolve(strict=True)
    except (OSError, RuntimeError) as exc:
        raise WalkError(f"cannot resolve '{path}': {exc}") from exc


class PathExcluder:
    """Prune subtrees rooted at excluded paths.

    Implements ``--avoid`` behavior. Exclusions are canonicalized once
    on construction; candidates are canonicalized on every check.
    """

    def __init__(self, paths: list[Path] | tuple[Path, ...] | None = None) -> None:
        """Initialize the excluder.

        Args:
            paths: Paths whose subtrees are excluded.

        Raises:
            WalkError: If an exclusion path cannot be resolved.
        """
        self._roots: list[Path] = [canonicalize(p) for p in paths or ()]

    def __bool__(self) -> bool:
        return bool(self._roots)

    def is_excluded(self, path: str) -> bool:
        """Return whether *path* equals or lies under an excluded path.

        Args:
            path: Candidate path as produced by enumeration.

        Returns:
            bool: ``True`` when the canonical path is inside an exclusion.

        Raises:
            WalkError: If the candidate cannot be resolved.
        """
        if not self._roots:
            return False
        resolved = canonicalize(path)
        return any(resolved.is_relative_to(root) for root in self._roots)


class GitignoreFilter:
    """Filter entries by a compiled ``.gitignore`` spec.

    Implements ``--gitignore`` pruning for the walker.
    """

    def __init__(self, spec: GitIgnoreSpec) -> None:
        self._spec = spec

    @classmethod
    def from_root(cls, root: str | Path) -> GitignoreFilter | None:
        """Build a filter from the ``.gitignore`` at the walk root.

        Patterns are relative to *root*, the same root the walker
        computes relative paths from.

        Returns:
            The filter, or ``None`` when *root* has no readable ``.gitignore``.
        """
        gitignore_path = Path(root) / ".gitignore"
        try:
            with gitignore_path.open(encoding="utf-8") as fh:
                spec = GitIgnoreSpec.from_lines(fh)
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("Not using %s: %s", gitignore_path, exc)
            return None
        return cls(spec)

    def should_exclude(self, relative_path: str, is_dir: bool) -> bool:
        """Return whether an entry should be pruned.

        Args:
            relative_path: Entry path relative to the walk root, ``/``-separated.
            is_dir: Whether the entry is a directory.

        Returns:
            bool: ``True`` when the spec matches the entry.
        """
        candidate = f"{relative_path}/" if is_dir else relative_path
        return self._spec.match_file(candidate)
