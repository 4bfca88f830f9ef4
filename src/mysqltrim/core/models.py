"""Base models and types used across all modules.

This module contains the result containers shared by the scanner and the
command line layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class Result(BaseModel, Generic[T]):
    """Result type for operations that can fail.

    Use this instead of exceptions for expected failures.
    Exceptions are reserved for unexpected/programming errors.
    """

    success: bool
    value: T | None = None
    error: str | None = None
    warnings: list[str] = Field(default_factory=list)

    @classmethod
    def ok(cls, value: T, warnings: list[str] | None = None) -> Result[T]:
        """Create a successful result."""
        return cls(success=True, value=value, warnings=warnings or [])

    @classmethod
    def fail(cls, error: str) -> Result[T]:
        """Create a failed result."""
        return cls(success=False, error=error)

    def unwrap(self) -> T:
        """Get the value or raise if failed."""
        if not self.success:
            raise ValueError(f"Result failed: {self.error}")
        assert self.value is not None
        return self.value


@dataclass
class TableStats:
    """Running totals for one table within a single scan.

    ``size`` counts the bytes of INSERT lines (terminator included),
    ``rows`` counts VALUES tuples.
    """

    name: str
    size: int = 0
    rows: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {"name": self.name, "size": self.size, "rows": self.rows}


@dataclass
class ScanResult:
    """Outcome of one pass over a dump.

    ``tables`` holds every table name seen on a definition line, skipped or
    not. ``stats`` only holds tables that were accepted by the filter.
    """

    tables: set[str] = field(default_factory=set)
    stats: dict[str, TableStats] = field(default_factory=dict)
    files: dict[str, Path] = field(default_factory=dict)
    lines: int = 0
    bytes_read: int = 0
    truncated: bool = False
    error: str | None = None

    @property
    def skipped(self) -> set[str]:
        """Tables encountered but not accumulated."""
        return self.tables - self.stats.keys()

    def sorted_stats(self, by: Literal["size", "rows"] = "size") -> list[TableStats]:
        """Largest first, ties broken by name."""
        return sorted(self.stats.values(), key=lambda t: (-getattr(t, by), t.name))
