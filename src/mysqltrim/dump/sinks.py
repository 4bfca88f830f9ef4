"""Output strategies plugged into the shared scan loop.

Each sink receives the lines of tables that survived filtering and either
writes them out or folds them into per-table totals.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import BinaryIO

from mysqltrim.core.logging import get_logger
from mysqltrim.core.models import ScanResult, TableStats
from mysqltrim.dump.cursor import ScanCursor
from mysqltrim.dump.identifiers import is_insert_line
from mysqltrim.dump.tuples import count_tuples

logger = get_logger(__name__)


class LineSink(ABC):
    """Base class for scan output strategies."""

    def start_table(self, cursor: ScanCursor) -> None:
        """Called on every definition line, after the cursor was updated."""
        pass

    @abstractmethod
    def feed(self, line: bytes, cursor: ScanCursor) -> None:
        """Handle one line belonging to a kept table (or to no table yet).

        Args:
            line: Raw line including its terminator
            cursor: Current scan state
        """
        pass

    def close(self) -> None:
        """Release anything the sink opened."""
        pass

    def collect(self, result: ScanResult) -> None:
        """Copy accumulated state into the scan result."""
        pass


class PassThroughSink(LineSink):
    """Copies every kept line verbatim to a single stream."""

    def __init__(self, writer: BinaryIO):
        self.writer = writer

    def feed(self, line: bytes, cursor: ScanCursor) -> None:
        self.writer.write(line)


class SplitSink(LineSink):
    """Writes each table's lines to its own file in a directory.

    Files are created on the first line written for a table and named after
    it. Only the current table's file is open; it is closed when the next
    definition line names another table, and reopened for appending if that
    table shows up again. Lines outside of any table (the dump header, for
    example) have no file to go to and are dropped.
    """

    def __init__(self, directory: Path, extension: str = ".sql"):
        self.directory = directory
        self.extension = extension
        self._handle: BinaryIO | None = None
        self._open_table: str | None = None
        self._paths: dict[str, Path] = {}

    def path_for(self, table: str) -> Path:
        return self.directory / f"{table}{self.extension}"

    def start_table(self, cursor: ScanCursor) -> None:
        if cursor.table != self._open_table:
            self.close()

    def _writer(self, table: str) -> BinaryIO:
        if self._handle is not None and self._open_table == table:
            return self._handle

        self.close()
        path = self._paths.get(table)
        if path is None:
            self.directory.mkdir(parents=True, exist_ok=True)
            path = self.path_for(table)
            # First open truncates files left over from an earlier run
            handle = path.open("wb")
            self._paths[table] = path
            logger.debug("split_file_opened", table=table, path=str(path))
        else:
            handle = path.open("ab")
        self._handle = handle
        self._open_table = table
        return handle

    def feed(self, line: bytes, cursor: ScanCursor) -> None:
        if cursor.table is None:
            return
        self._writer(cursor.table).write(line)

    def close(self) -> None:
        handle = self._handle
        self._handle = None
        self._open_table = None
        if handle is not None:
            handle.close()

    def collect(self, result: ScanResult) -> None:
        result.files.update(self._paths)


class _AccumulatingSink(LineSink):
    """Keeps one TableStats per accepted table."""

    def __init__(self) -> None:
        self.tables: dict[str, TableStats] = {}

    def start_table(self, cursor: ScanCursor) -> None:
        if cursor.table is not None and not cursor.skip:
            self.tables.setdefault(cursor.table, TableStats(name=cursor.table))

    def _current(self, cursor: ScanCursor) -> TableStats | None:
        if cursor.table is None:
            return None
        return self.tables.get(cursor.table)

    def collect(self, result: ScanResult) -> None:
        result.stats.update(self.tables)


class SizeSink(_AccumulatingSink):
    """Adds up the byte length of INSERT lines per table."""

    def feed(self, line: bytes, cursor: ScanCursor) -> None:
        if not is_insert_line(line):
            return
        stats = self._current(cursor)
        if stats is not None:
            stats.size += len(line)


class RowCountSink(_AccumulatingSink):
    """Counts VALUES tuples per table, following statements across lines."""

    def feed(self, line: bytes, cursor: ScanCursor) -> None:
        if is_insert_line(line):
            cursor.in_insert = True
            cursor.values_seen = False
        elif not cursor.in_insert:
            return

        counted = count_tuples(line, cursor.values_seen)
        stats = self._current(cursor)
        if stats is not None:
            stats.rows += counted.tuples

        if counted.terminated:
            cursor.end_statement()
        else:
            cursor.values_seen = counted.values_seen
