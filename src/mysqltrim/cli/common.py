"""Shared CLI utilities and constants."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, BinaryIO

import typer
from dotenv import load_dotenv
from rich.console import Console

from mysqltrim.core.config import get_settings
from mysqltrim.core.logging import configure_logging
from mysqltrim.dump.filters import FilterRule, load_filter_rule

# Load .env file from current directory
load_dotenv()

# Shared console instance
console = Console()

# Diagnostics go to stderr so stdout can carry SQL
err_console = Console(stderr=True)

# Common type aliases for typer options
DumpFileArg = Annotated[
    Path,
    typer.Argument(
        help="The SQL dump file to read",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
    ),
]

IncludeOption = Annotated[
    str | None,
    typer.Option(
        "--include",
        help="Only include tables that match this regex",
    ),
]

ExcludeOption = Annotated[
    str | None,
    typer.Option(
        "--exclude",
        help="Exclude tables that match this regex",
    ),
]

JsonFlag = Annotated[
    bool,
    typer.Option(
        "--json",
        help="Output as JSON for scripting",
    ),
]

VerboseOption = Annotated[
    int,
    typer.Option(
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (-v=INFO, -vv=DEBUG)",
    ),
]

LogFormatOption = Annotated[
    str | None,
    typer.Option(
        "--log-format",
        help="Log output format (console or json)",
    ),
]


def setup_logging(verbosity: int = 0, log_format: str | None = None) -> None:
    """Configure structured logging based on verbosity level.

    Args:
        verbosity: 0=configured level (WARNING by default), 1=INFO, 2+=DEBUG
        log_format: "console" or "json"; falls back to the configured format
    """
    settings = get_settings()
    log_format = log_format or settings.log_format

    if verbosity >= 2:
        level = "DEBUG"
    elif verbosity >= 1:
        level = "INFO"
    else:
        level = settings.log_level

    configure_logging(
        log_level=level,
        log_format=log_format,
        show_timestamps=verbosity >= 1,
        color=log_format == "console",
    )


def get_filter_rule(include: str | None, exclude: str | None) -> FilterRule:
    """Compile the filter options or exit with a usage error."""
    result = load_filter_rule(include, exclude)
    if not result.success:
        err_console.print(f"[red]{result.error}[/red]")
        raise typer.Exit(2)
    for warning in result.warnings:
        err_console.print(f"[yellow]Warning: {warning}[/yellow]")
    return result.unwrap()


def open_dump(path: Path) -> BinaryIO:
    """Open a dump for binary line reading."""
    return path.open("rb", buffering=get_settings().read_buffer_size)
