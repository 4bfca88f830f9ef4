"""Show-tables command - per-table size and row report."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table as RichTable

from mysqltrim.cli.common import (
    DumpFileArg,
    ExcludeOption,
    IncludeOption,
    JsonFlag,
    LogFormatOption,
    VerboseOption,
    console,
    err_console,
    get_filter_rule,
    open_dump,
    setup_logging,
)
from mysqltrim.core.formatting import human_bytes
from mysqltrim.core.logging import log_context
from mysqltrim.core.models import ScanResult
from mysqltrim.dump.filters import FilterRule
from mysqltrim.dump.scanner import compute_table_row_counts, compute_table_sizes


def show_tables(
    file: DumpFileArg,
    human: Annotated[
        bool,
        typer.Option(
            "--human",
            "-H",
            help="Display sizes in human readable units (KiB, MiB, GiB)",
        ),
    ] = False,
    rows: Annotated[
        bool,
        typer.Option(
            "--rows",
            "-r",
            help="Also count inserted rows (reads the dump a second time)",
        ),
    ] = False,
    include: IncludeOption = None,
    exclude: ExcludeOption = None,
    json_output: JsonFlag = False,
    verbose: VerboseOption = 0,
    log_format: LogFormatOption = None,
) -> None:
    """Show the tables in a SQL dump with their INSERT sizes.

    Examples:

        mysqltrim show-tables backup.sql --human

        mysqltrim show-tables backup.sql --rows --include '^wp_'

        mysqltrim show-tables backup.sql --json
    """
    setup_logging(verbosity=verbose, log_format=log_format)

    rule = get_filter_rule(include, exclude)
    result = _scan_stats(file, rule, with_rows=rows)

    if json_output:
        _show_json(result, with_rows=rows)
    else:
        _show_rich(result, human=human, with_rows=rows)

    if result.truncated:
        err_console.print(f"[yellow]Warning: dump read stopped early: {result.error}[/yellow]")
        raise typer.Exit(1)


def _scan_stats(file: Path, rule: FilterRule, with_rows: bool) -> ScanResult:
    """Collect sizes, and optionally row counts, in separate passes."""
    with log_context(dump=str(file), mode="sizes"):
        with open_dump(file) as reader:
            result = compute_table_sizes(reader, rule)

    if not with_rows or result.truncated:
        return result

    with log_context(dump=str(file), mode="rows"):
        with open_dump(file) as reader:
            counted = compute_table_row_counts(reader, rule)

    for name, stats in counted.stats.items():
        result.stats.setdefault(name, stats).rows = stats.rows
    result.tables |= counted.tables
    result.truncated = counted.truncated
    result.error = counted.error
    return result


def _show_json(result: ScanResult, with_rows: bool) -> None:
    """Output table stats as JSON."""
    tables = []
    for stats in result.sorted_stats():
        entry = stats.to_dict()
        if not with_rows:
            entry.pop("rows")
        tables.append(entry)

    output = {
        "tables": tables,
        "skipped": sorted(result.skipped),
        "truncated": result.truncated,
    }
    console.print_json(json.dumps(output))


def _show_rich(result: ScanResult, human: bool, with_rows: bool) -> None:
    """Print table stats with a Rich table."""
    if not result.stats:
        if result.skipped:
            console.print(
                f"[yellow]All {len(result.skipped)} tables in dump were filtered out[/yellow]"
            )
        else:
            console.print("[yellow]No tables found in dump[/yellow]")
        return

    table = RichTable(show_header=True, header_style="bold")
    table.add_column("Table")
    table.add_column("Size" if human else "Bytes", justify="right")
    if with_rows:
        table.add_column("Rows", justify="right")

    for stats in result.sorted_stats():
        size = human_bytes(stats.size) if human else str(stats.size)
        cells = [stats.name, size]
        if with_rows:
            cells.append(f"{stats.rows:,}")
        table.add_row(*cells)

    console.print(table)
