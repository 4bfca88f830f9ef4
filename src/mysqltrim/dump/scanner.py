"""Streaming scanner over mysqldump output.

The dump is read one line at a time and never held in memory. Definition
lines (DROP/CREATE TABLE) switch the current table and decide whether its
lines are kept; every kept line is handed to a LineSink.

Read errors end the scan early and are reported on the result, so whatever
was produced so far survives. Write errors are raised, since a half written
extract cannot be trusted.
"""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO

from mysqltrim.core.logging import get_logger
from mysqltrim.core.models import ScanResult
from mysqltrim.dump.cursor import ScanCursor
from mysqltrim.dump.filters import FilterRule
from mysqltrim.dump.identifiers import is_definition_line, table_name_from_definition
from mysqltrim.dump.sinks import LineSink, PassThroughSink, RowCountSink, SizeSink, SplitSink

logger = get_logger(__name__)

_NO_FILTER = FilterRule()


def scan(reader: BinaryIO, sink: LineSink, rule: FilterRule | None = None) -> ScanResult:
    """Run one pass over a dump, feeding kept lines to the sink.

    Args:
        reader: Binary stream supporting readline()
        sink: Output strategy
        rule: Include/exclude filter (keeps everything when None)

    Returns:
        ScanResult with every encountered table name and whatever the sink
        accumulated
    """
    rule = rule or _NO_FILTER
    result = ScanResult()
    cursor = ScanCursor()

    try:
        while True:
            try:
                line = reader.readline()
            except OSError as e:
                logger.error("dump_read_failed", line=cursor.line_number + 1, error=str(e))
                result.truncated = True
                result.error = str(e)
                break

            if not line:
                break

            cursor.line_number += 1
            result.lines += 1
            result.bytes_read += len(line)

            if is_definition_line(line):
                name = table_name_from_definition(line)
                if name is None:
                    logger.debug("dump_definition_unparsed", line=cursor.line_number)
                    cursor.enter_table(None, skip=False)
                else:
                    skip = rule.skips(name)
                    if name not in result.tables:
                        logger.debug("dump_table_encountered", name=name, skipped=skip)
                    result.tables.add(name)
                    cursor.enter_table(name, skip=skip)
                sink.start_table(cursor)

            if not cursor.skip:
                sink.feed(line, cursor)
    finally:
        sink.close()

    sink.collect(result)
    logger.info(
        "dump_scan_finished",
        lines=result.lines,
        bytes=result.bytes_read,
        tables=len(result.tables),
        truncated=result.truncated,
    )
    return result


def extract_sql(reader: BinaryIO, writer: BinaryIO, rule: FilterRule | None = None) -> ScanResult:
    """Copy the lines of kept tables, plus the dump header, to writer."""
    return scan(reader, PassThroughSink(writer), rule)


def extract_split(
    reader: BinaryIO,
    directory: Path,
    rule: FilterRule | None = None,
    extension: str = ".sql",
) -> ScanResult:
    """Write each kept table to ``<directory>/<table><extension>``.

    Returns:
        ScanResult whose ``files`` maps table names to the files written
    """
    return scan(reader, SplitSink(directory, extension), rule)


def compute_table_sizes(reader: BinaryIO, rule: FilterRule | None = None) -> ScanResult:
    """Accumulate INSERT line bytes per kept table."""
    return scan(reader, SizeSink(), rule)


def compute_table_row_counts(reader: BinaryIO, rule: FilterRule | None = None) -> ScanResult:
    """Accumulate inserted row counts per kept table."""
    return scan(reader, RowCountSink(), rule)
