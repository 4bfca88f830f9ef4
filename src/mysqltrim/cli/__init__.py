"""CLI for mysqltrim.

Usage:
    mysqltrim extract backup.sql trimmed.sql --include '^wp_'
    mysqltrim extract backup.sql --split-dir ./tables
    mysqltrim show-tables backup.sql --human --rows

Environment:
    Loads .env file from current directory if present.
    MYSQLTRIM_* variables override settings (see mysqltrim.core.config).
"""

from mysqltrim.cli.main import app, main

__all__ = ["app", "main"]
