"""Streaming analysis and filtering of mysqldump files."""

from mysqltrim.dump.cursor import ScanCursor
from mysqltrim.dump.filters import FilterRule, load_filter_rule, should_skip
from mysqltrim.dump.identifiers import (
    is_definition_line,
    is_insert_line,
    table_name_from_definition,
)
from mysqltrim.dump.scanner import (
    compute_table_row_counts,
    compute_table_sizes,
    extract_split,
    extract_sql,
    scan,
)
from mysqltrim.dump.sinks import LineSink, PassThroughSink, RowCountSink, SizeSink, SplitSink
from mysqltrim.dump.tuples import TupleCount, count_tuples

__all__ = [
    # Line parsing
    "is_definition_line",
    "is_insert_line",
    "table_name_from_definition",
    "count_tuples",
    "TupleCount",
    # Filtering
    "FilterRule",
    "load_filter_rule",
    "should_skip",
    # Scanning
    "ScanCursor",
    "scan",
    "extract_sql",
    "extract_split",
    "compute_table_sizes",
    "compute_table_row_counts",
    # Sinks
    "LineSink",
    "PassThroughSink",
    "SplitSink",
    "SizeSink",
    "RowCountSink",
]
