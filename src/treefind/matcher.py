"""Search modes and per-entry match dispatch."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Union

from treefind import ConfigError
from treefind.classifier import Entry, EntryKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ByName:
    target: str


@dataclass(frozen=True, slots=True)
class ByKind:
    kind: EntryKind


@dataclass(frozen=True, slots=True)
class ByNameAndKind:
    target: str
    kind: EntryKind


@dataclass(frozen=True, slots=True)
class ByExtension:
    extensions: frozenset[str]


@dataclass(frozen=True, slots=True)
class ByRegex:
    pattern: re.Pattern[str]


SearchMode = Union[ByName, ByKind, ByNameAndKind, ByExtension, ByRegex]


def extract_extension(name: str) -> str | None:
    """Return the text after the last ``.`` of *name*.

    ``archive.tar.gz`` gives ``gz``. Names without a dot, names ending
    in a dot and dot-files such as ``.bashrc`` have no extension.
    """
    stem, dot, suffix = name.rpartition(".")
    if not dot or not stem or not suffix:
        return None
    return suffix


def matches(entry: Entry, mode: SearchMode) -> bool:
    """Return whether *entry* satisfies the active search mode."""
    match mode:
        case ByName(target=target):
            return entry.name == target
        case ByKind(kind=kind):
            return entry.kind is kind
        case ByNameAndKind(target=target, kind=kind):
            return entry.name == target and entry.kind is kind
        case ByExtension(extensions=extensions):
            ext = extract_extension(entry.name)
            return ext is not None and ext in extensions
        case ByRegex(pattern=pattern):
            return pattern.search(entry.path) is not None
    raise TypeError(f"unknown search mode: {mode!r}")


def _normalize_extensions(extensions: list[str]) -> frozenset[str]:
    normalized: set[str] = set()
    for ext in extensions:
        stripped = ext.lstrip(".")
        if not stripped:
            raise ConfigError(f"Invalid extension '{ext}'")
        normalized.add(stripped)
    return frozenset(normalized)


def _compile_regex(pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise ConfigError(f"invalid regex '{pattern}': {exc}") from exc


def resolve_mode(
    target: str | None = None,
    kind: EntryKind | None = None,
    extensions: list[str] | None = None,
    regex: str | None = None,
) -> SearchMode:
    """Determine the single active search mode from the supplied options.

    Extension and regex searches take precedence over name/kind and
    cannot be combined with each other.

    Args:
        target: Exact entry name.
        kind: Entry kind.
        extensions: Accepted extensions, with or without a leading dot.
        regex: Pattern searched for in the full entry path.

    Returns:
        SearchMode: The resolved mode.

    Raises:
        ConfigError: If the options are ambiguous, insufficient or invalid.
    """
    if extensions and regex is not None:
        raise ConfigError("--extension and --regex cannot be combined")

    if extensions or regex is not None:
        ignored = [
            label
            for label, value in (("target name", target), ("--type", kind))
            if value is not None
        ]
        if ignored:
            winner = "--regex" if regex is not None else "--extension"
            logger.warning("%s takes precedence; ignoring %s", winner, ", ".join(ignored))
        if regex is not None:
            return ByRegex(_compile_regex(regex))
        return ByExtension(_normalize_extensions(extensions or []))

    if target is not None and kind is not None:
        return ByNameAndKind(target, kind)
    if target is not None:
        return ByName(target)
    if kind is not None:
        return ByKind(kind)

    raise ConfigError("nothing to search for: give a target name, --type, --extension or --regex")
