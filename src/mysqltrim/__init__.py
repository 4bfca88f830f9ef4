"""mysqltrim - trim and inspect mysqldump files.

Streams a dump line by line to extract selected tables or report per-table
sizes and row counts.
"""

__version__ = "0.1.0"

from mysqltrim.core.models import Result, ScanResult, TableStats
from mysqltrim.dump import (
    FilterRule,
    compute_table_row_counts,
    compute_table_sizes,
    extract_split,
    extract_sql,
)

__all__ = [
    "FilterRule",
    "Result",
    "ScanResult",
    "TableStats",
    "__version__",
    "compute_table_row_counts",
    "compute_table_sizes",
    "extract_split",
    "extract_sql",
]
