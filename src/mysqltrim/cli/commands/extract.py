"""Extract command - copy selected tables out of a dump."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import typer

from mysqltrim.cli.common import (
    DumpFileArg,
    ExcludeOption,
    IncludeOption,
    LogFormatOption,
    VerboseOption,
    err_console,
    get_filter_rule,
    open_dump,
    setup_logging,
)
from mysqltrim.core.config import get_settings
from mysqltrim.core.logging import log_context
from mysqltrim.core.models import ScanResult
from mysqltrim.dump.filters import FilterRule
from mysqltrim.dump.scanner import extract_split, extract_sql


def extract(
    file: DumpFileArg,
    dest: Annotated[
        Path | None,
        typer.Argument(
            help="The destination file to write to (stdout when omitted)",
            dir_okay=False,
            resolve_path=True,
        ),
    ] = None,
    include: IncludeOption = None,
    exclude: ExcludeOption = None,
    split_dir: Annotated[
        Path | None,
        typer.Option(
            "--split-dir",
            "-s",
            help="Write one file per table into this directory",
            file_okay=False,
            resolve_path=True,
        ),
    ] = None,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress the summary",
        ),
    ] = False,
    verbose: VerboseOption = 0,
    log_format: LogFormatOption = None,
) -> None:
    """Extract tables from a SQL dump.

    Examples:

        mysqltrim extract backup.sql trimmed.sql --include '^wp_'

        mysqltrim extract backup.sql --exclude 'log$' > trimmed.sql

        mysqltrim extract backup.sql --split-dir ./tables
    """
    setup_logging(verbosity=verbose, log_format=log_format)

    if dest is not None and split_dir is not None:
        err_console.print("[red]DEST and --split-dir cannot be used together[/red]")
        raise typer.Exit(2)

    rule = get_filter_rule(include, exclude)

    with log_context(dump=str(file), mode="split" if split_dir else "extract"):
        with open_dump(file) as reader:
            if split_dir is not None:
                result = extract_split(
                    reader, split_dir, rule, extension=get_settings().split_extension
                )
            elif dest is not None:
                with dest.open("wb") as writer:
                    result = extract_sql(reader, writer, rule)
            else:
                result = extract_sql(reader, sys.stdout.buffer, rule)
                sys.stdout.buffer.flush()

    if not quiet:
        _print_summary(result, rule)

    if result.truncated:
        err_console.print(f"[yellow]Warning: dump read stopped early: {result.error}[/yellow]")
        raise typer.Exit(1)


def _print_summary(result: ScanResult, rule: FilterRule) -> None:
    """Print kept/skipped table counts to stderr."""
    skipped = {name for name in result.tables if rule.skips(name)}
    kept = result.tables - skipped

    err_console.print(
        f"[bold]Tables:[/bold] {len(result.tables)} found, "
        f"[green]{len(kept)} kept[/green], [yellow]{len(skipped)} skipped[/yellow]"
    )
    for name, path in sorted(result.files.items()):
        err_console.print(f"  [cyan]{name}[/cyan] -> {path}")
