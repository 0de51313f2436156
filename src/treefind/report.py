"""Streaming match reporters: plain lines or CSV rows."""

from __future__ import annotations

import csv
from typing import Protocol, TextIO

from treefind.classifier import Entry

CSV_HEADER: list[str] = ["kind", "name", "path"]


class Reporter(Protocol):
    def start(self) -> None: ...

    def report(self, entry: Entry) -> None: ...


class PlainReporter:
    """Write ``Found <name> in <path>`` per match."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream

    def start(self) -> None:
        pass

    def report(self, entry: Entry) -> None:
        self._stream.write(f"Found {entry.name} in {entry.path}\n")
        self._stream.flush()


class CsvReporter:
    """Write a ``kind,name,path`` header and one CSV row per match.

    Rows use LF line endings and are flushed as they are written.
    """

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._writer = csv.writer(stream, lineterminator="\n")

    def start(self) -> None:
        self._writer.writerow(CSV_HEADER)

    def report(self, entry: Entry) -> None:
        self._writer.writerow([entry.kind.value, entry.name, entry.path])
        self._stream.flush()
