"""CLI entry point for treefind — I/O boundary only."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TextIO

from treefind import ConfigError, TreefindError, __version__
from treefind.classifier import EntryKind
from treefind.matcher import SearchMode, resolve_mode
from treefind.report import CsvReporter, PlainReporter, Reporter
from treefind.search import SearchConfig, run_search


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser.

    Returns:
        argparse.ArgumentParser: Configured parser for the ``treefind`` command.
    """
    parser = argparse.ArgumentParser(
        prog="treefind",
        description="Recursively search a directory tree by name, kind, extension or regex",
    )
    parser.add_argument(
        "target",
        nargs="?",
        default=None,
        help="Exact entry name to find",
    )
    parser.add_argument(
        "-f",
        "--from",
        default=".",
        dest="start_directory",
        metavar="DIR",
        help="Directory to start from (default: current directory)",
    )
    parser.add_argument(
        "-t",
        "--type",
        choices=[kind.value for kind in EntryKind],
        default=None,
        dest="kind",
        help="Entry kind to find",
    )
    parser.add_argument(
        "-a",
        "--avoid",
        nargs="+",
        action="extend",
        default=[],
        dest="avoid",
        metavar="PATH",
        help=(
            "Skip these subtrees (can be specified multiple times). Takes every "
            "following value, so put the target name first or after --"
        ),
    )
    parser.add_argument(
        "-e",
        "--extension",
        nargs="+",
        action="extend",
        default=[],
        dest="extensions",
        metavar="EXT",
        help=(
            "Find files with any of these extensions. Takes every following "
            "value, so put the target name first or after --"
        ),
    )
    parser.add_argument(
        "-d",
        "--depth",
        type=int,
        default=None,
        dest="max_depth",
        help="Maximum recursion depth (default: unlimited)",
    )
    parser.add_argument(
        "-r",
        "--regex",
        default=None,
        help="Find entries whose full path contains a match for this pattern",
    )
    parser.add_argument(
        "--gitignore",
        action="store_true",
        help="Also skip entries matched by the start directory's .gitignore",
    )
    parser.add_argument(
        "--csv",
        action="store_true",
        dest="csv_mode",
        help="Output matches as CSV (kind, name, path)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def _validate_depth(depth_arg: int | None) -> int | None:
    """Validate the ``--depth`` value.

    Raises:
        ConfigError: If depth is negative.
    """
    if depth_arg is not None and depth_arg < 0:
        raise ConfigError("Invalid depth, must be 0 or greater.")
    return depth_arg


def _build_mode(args: argparse.Namespace) -> SearchMode:
    kind = EntryKind(args.kind) if args.kind is not None else None
    return resolve_mode(
        target=args.target,
        kind=kind,
        extensions=args.extensions,
        regex=args.regex,
    )


def build_config(args: argparse.Namespace) -> SearchConfig:
    """Validate parsed arguments and freeze them into a search config.

    Args:
        args: Parsed CLI namespace.

    Returns:
        SearchConfig: Immutable configuration for the walk.

    Raises:
        ConfigError: On missing, ambiguous or invalid options.
    """
    mode = _build_mode(args)
    return SearchConfig(
        start_directory=Path(args.start_directory),
        mode=mode,
        exclude_paths=tuple(Path(p) for p in args.avoid),
        max_depth=_validate_depth(args.max_depth),
        gitignore=args.gitignore,
    )


def _make_reporter(args: argparse.Namespace, stream: TextIO) -> Reporter:
    if args.csv_mode:
        return CsvReporter(stream)
    return PlainReporter(stream)


def _run_with_args(args: argparse.Namespace, stream: TextIO) -> int:
    """Run the search pipeline for parsed arguments.

    Raises:
        TreefindError: On configuration errors or an aborted walk.
    """
    config = build_config(args)
    reporter = _make_reporter(args, stream)
    reporter.start()
    return run_search(config, reporter.report)


def run_treefind(argv: list[str] | None = None, stream: TextIO | None = None) -> int:
    """Run treefind with provided CLI args, streaming matches to *stream*.

    This is the primary test target for CLI behavior.

    Args:
        argv: Command-line argument list without program name. If ``None``,
            uses process arguments via ``argparse`` defaults.
        stream: Output stream. Defaults to ``sys.stdout``.

    Returns:
        int: Number of matches reported.

    Raises:
        TreefindError: On any user-facing validation or I/O error.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    return _run_with_args(args, stream or sys.stdout)


def main() -> None:
    """Run the CLI entry point with process arguments.

    Exits with code 1 on user-facing errors. Matches printed before an
    aborted walk stay printed.
    """
    parser = build_parser()
    args = parser.parse_args()

    try:
        _run_with_args(args, sys.stdout)
    except TreefindError as exc:
        sys.stdout.flush()
        sys.stderr.write(f"treefind: {exc}\n")
        sys.exit(1)
