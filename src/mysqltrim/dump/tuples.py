"""Counting VALUES tuples in INSERT statements.

mysqldump writes extended inserts such as::

    INSERT INTO `t` VALUES (1,'a'),(2,'b(c)'),(3,'it\\'s');

Every opening parenthesis after the VALUES keyword that sits outside a
quoted string starts a new row. Closing parentheses are not tracked; only
openings matter and dump tools do not nest them inside a tuple.

Long statements may be wrapped over several physical lines. The caller
threads ``values_seen`` from one line to the next and starts over once a
line reports the statement as terminated.
"""

from __future__ import annotations

from typing import NamedTuple

_KEYWORD = b"values"
_KEYWORD_LEN = len(_KEYWORD)

_BACKSLASH = ord("\\")
_SINGLE_QUOTE = ord("'")
_DOUBLE_QUOTE = ord('"')
_OPEN_PAREN = ord("(")
_SEMICOLON = ord(";")


class TupleCount(NamedTuple):
    """Outcome of scanning one physical line."""

    tuples: int
    values_seen: bool
    terminated: bool


def _is_ascii_letter(byte: int) -> bool:
    return 65 <= byte <= 90 or 97 <= byte <= 122


def _keyword_at(line: bytes, pos: int) -> bool:
    """Check for a standalone, case-insensitive VALUES keyword at pos."""
    end = pos + _KEYWORD_LEN
    if end > len(line) or line[pos:end].lower() != _KEYWORD:
        return False
    if pos > 0 and _is_ascii_letter(line[pos - 1]):
        return False
    if end < len(line) and _is_ascii_letter(line[end]):
        return False
    return True


def count_tuples(line: bytes, values_seen: bool = False) -> TupleCount:
    """Count tuple openings on one line of an INSERT statement.

    Quotes toggle only when unescaped and not inside the other quote kind.
    A backslash escapes exactly the following byte.

    Args:
        line: Raw bytes of the line
        values_seen: Whether the VALUES keyword appeared on an earlier line
            of the same statement

    Returns:
        TupleCount with the number of tuples opened on this line, the updated
        VALUES flag and whether a statement-ending semicolon was found
    """
    tuples = 0
    terminated = False
    in_single = False
    in_double = False
    escaped = False

    pos = 0
    length = len(line)
    while pos < length:
        byte = line[pos]

        if escaped:
            escaped = False
        elif byte == _BACKSLASH:
            escaped = True
        elif byte == _SINGLE_QUOTE and not in_double:
            in_single = not in_single
        elif byte == _DOUBLE_QUOTE and not in_single:
            in_double = not in_double
        elif not in_single and not in_double:
            if not values_seen:
                if _keyword_at(line, pos):
                    values_seen = True
                    pos += _KEYWORD_LEN
                    continue
            elif byte == _OPEN_PAREN:
                tuples += 1
            elif byte == _SEMICOLON:
                # Keep scanning so quote state stays correct for the rest of the line
                terminated = True

        pos += 1

    return TupleCount(tuples, values_seen, terminated)
