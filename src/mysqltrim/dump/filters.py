"""Include/exclude filtering of table names."""

from __future__ import annotations

import re
from dataclasses import dataclass

from mysqltrim.core.models import Result


def should_skip(
    table: str,
    include: re.Pattern[str] | None = None,
    exclude: re.Pattern[str] | None = None,
) -> bool:
    """Decide whether a table is filtered out.

    A table is kept when it matches ``include`` (if given) and does not
    match ``exclude`` (if given). Patterns are searched, not anchored.
    """
    if include is not None and include.search(table) is None:
        return True
    if exclude is not None and exclude.search(table) is not None:
        return True
    return False


@dataclass(frozen=True)
class FilterRule:
    """Optional include and exclude patterns over bare table names."""

    include: re.Pattern[str] | None = None
    exclude: re.Pattern[str] | None = None

    def skips(self, table: str) -> bool:
        """Check if the table is filtered out by this rule."""
        return should_skip(table, self.include, self.exclude)

    @classmethod
    def compile(cls, include: str | None = None, exclude: str | None = None) -> FilterRule:
        """Build a rule from pattern strings.

        Raises:
            re.error: If either pattern is not a valid regular expression
        """
        return cls(
            include=re.compile(include) if include else None,
            exclude=re.compile(exclude) if exclude else None,
        )


def load_filter_rule(include: str | None = None, exclude: str | None = None) -> Result[FilterRule]:
    """Compile user supplied patterns into a FilterRule.

    Empty pattern strings mean no pattern and are reported as warnings.

    Args:
        include: Regular expression tables must match to be kept
        exclude: Regular expression that drops matching tables

    Returns:
        Result containing the FilterRule, or a failure naming the bad pattern
    """
    warnings: list[str] = []
    for label, pattern in (("include", include), ("exclude", exclude)):
        if pattern is None:
            continue
        if not pattern:
            warnings.append(f"Empty --{label} pattern ignored")
            continue
        try:
            re.compile(pattern)
        except re.error as e:
            return Result.fail(f"Invalid --{label} pattern {pattern!r}: {e}")

    return Result.ok(FilterRule.compile(include, exclude), warnings=warnings)
