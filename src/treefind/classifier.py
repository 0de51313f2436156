"""Entry classification: directory, regular file, symlink or executable."""

from __future__ import annotations

import errno
import logging
import os
import stat
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from treefind import ClassifyError

logger = logging.getLogger(__name__)

_EXEC_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


class EntryKind(Enum):
    """Kind of a filesystem entry. Values double as ``--type`` tokens."""

    DIRECTORY = "dir"
    REGULAR_FILE = "file"
    SYMLINK = "link"
    EXECUTABLE = "exec"


@dataclass(frozen=True, slots=True)
class Entry:
    """A single classified filesystem entry.

    Attributes:
        kind: Classified entry kind.
        name: Basename of the entry.
        path: Path from the walk root as given, not canonicalized.
    """

    kind: EntryKind
    name: str
    path: str


class RawEntry(Protocol):
    """Directory entry as yielded by ``os.scandir``."""

    @property
    def name(self) -> str: ...

    @property
    def path(self) -> str: ...

    def is_dir(self, *, follow_symlinks: bool = True) -> bool: ...

    def is_symlink(self) -> bool: ...

    def stat(self, *, follow_symlinks: bool = True) -> os.stat_result: ...


def is_executable(mode: int) -> bool:
    """Return whether any of the owner/group/other execute bits is set."""
    return bool(mode & _EXEC_BITS)


def _read_mode(raw_entry: RawEntry, is_link: bool) -> int | None:
    """Return the permission mode relevant for the execute check.

    For symlinks this is the mode of the link target. Links to
    directories, dangling links and link loops yield ``None``.
    """
    if not is_link:
        return raw_entry.stat(follow_symlinks=False).st_mode
    try:
        mode = raw_entry.stat(follow_symlinks=True).st_mode
    except OSError as exc:
        if exc.errno not in (errno.ENOENT, errno.ELOOP):
            raise
        logger.debug("Unresolvable symlink: %s", raw_entry.path)
        return None
    # "x" on a directory means traversable
    if stat.S_ISDIR(mode):
        return None
    return mode


def classify(raw_entry: RawEntry) -> Entry:
    """Classify a raw directory entry.

    Directories are checked first and are never executables. Among the
    rest, a set execute bit wins over the regular-file/symlink split.

    Args:
        raw_entry: Entry produced by directory enumeration.

    Returns:
        Entry: Classified entry.

    Raises:
        ClassifyError: If the type or permission query fails.
    """
    try:
        if raw_entry.is_dir(follow_symlinks=False):
            kind = EntryKind.DIRECTORY
        else:
            is_link = raw_entry.is_symlink()
            mode = _read_mode(raw_entry, is_link)
            if mode is not None and is_executable(mode):
                kind = EntryKind.EXECUTABLE
            elif is_link:
                kind = EntryKind.SYMLINK
            else:
                kind = EntryKind.REGULAR_FILE
    except OSError as exc:
        raise ClassifyError(f"cannot read metadata of '{raw_entry.path}': {exc}") from exc

    return Entry(kind=kind, name=raw_entry.name, path=raw_entry.path)
