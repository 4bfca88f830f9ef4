"""Per-scan state threaded between line-processing calls."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScanCursor:
    """Where the scanner is inside the dump.

    ``table`` is the table named by the most recent definition line, or None
    before the first one or after an unparseable one. ``in_insert`` and
    ``values_seen`` describe the INSERT statement currently being counted.
    """

    table: str | None = None
    skip: bool = False
    in_insert: bool = False
    values_seen: bool = False
    line_number: int = 0

    def enter_table(self, table: str | None, skip: bool) -> None:
        """Switch to a new table and drop any open statement."""
        self.table = table
        self.skip = skip
        self.end_statement()

    def end_statement(self) -> None:
        self.in_insert = False
        self.values_seen = False
