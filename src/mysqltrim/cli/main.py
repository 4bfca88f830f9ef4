"""Main CLI application entry point."""

from __future__ import annotations

import typer

from mysqltrim.cli.commands import extract, show_tables

app = typer.Typer(
    name="mysqltrim",
    help="Trim an SQL dump down to a smaller file, based on table includes / excludes.",
    no_args_is_help=True,
)

# Register commands
app.command()(extract.extract)
app.command(name="show-tables")(show_tables.show_tables)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
