"""CLI command implementations."""

from mysqltrim.cli.commands import extract, show_tables

__all__ = [
    "extract",
    "show_tables",
]
