"""Line classification and table name parsing for mysqldump output.

All matching happens on raw bytes. Dumps are not guaranteed to be valid
UTF-8, so text decoding only happens when a table name is handed out.
"""

from __future__ import annotations

import re

# Longer prefixes first so "DROP TABLE " never swallows "IF EXISTS".
DEFINITION_PREFIXES: tuple[bytes, ...] = (
    b"DROP TABLE IF EXISTS ",
    b"DROP TABLE ",
    b"CREATE TABLE IF NOT EXISTS ",
    b"CREATE TABLE ",
)

INSERT_PREFIX = b"INSERT "

_IDENTIFIER_RE = re.compile(rb"^\s*`?([A-Za-z0-9_]+)`?")


def is_definition_line(line: bytes) -> bool:
    """Check if the line drops or creates a table."""
    return line.startswith(DEFINITION_PREFIXES)


def is_insert_line(line: bytes) -> bool:
    """Check if the line starts an INSERT statement."""
    return line.startswith(INSERT_PREFIX)


def table_name_from_definition(line: bytes) -> str | None:
    """Extract the table name from a DROP/CREATE TABLE line.

    Accepts bare or backtick-quoted identifiers, with optional leading
    whitespace after the keyword prefix.

    Args:
        line: Raw dump line

    Returns:
        The unquoted table name, or None if no identifier follows the prefix
    """
    rest = line
    for prefix in DEFINITION_PREFIXES:
        if line.startswith(prefix):
            rest = line[len(prefix) :]
            break

    match = _IDENTIFIER_RE.match(rest)
    if match is None:
        return None
    return match.group(1).decode("utf-8", errors="replace")
