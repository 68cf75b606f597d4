import logging
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from tableedit._export import ExportFormat, export_table
from tableedit._io import load_table, save_recognized_table, write_export
from tableedit._table import EditableTable

from .config import ConfigError, get_config

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Edit and export tables produced by a table recognizer."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Configure rich logging handler to output to stderr
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _load_table_or_exit(input_path: Path) -> EditableTable:
    """Load a table, turning input errors into a red message and exit code 1."""
    if not input_path.exists():
        err_console.print(f"[red]Error: Input file not found: {input_path}[/red]")
        raise typer.Exit(code=1)

    err_console.print(f"[cyan]Loading table from:[/cyan] {input_path}")
    try:
        table = load_table(input_path)
    except ValidationError as e:
        err_console.print(f"[red]Error: Invalid table in {input_path}:[/red]")
        err_console.print(escape(str(e)))
        raise typer.Exit(code=1) from e
    except ValueError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    logger.debug(f"Loaded {table!r}")
    return table


def _parse_move(value: str) -> tuple[int, int]:
    """Parse a ``SOURCE:DESTINATION`` pair."""
    source, sep, destination = value.partition(":")
    try:
        if not sep:
            raise ValueError
        return int(source), int(destination)
    except ValueError:
        msg = f"Invalid move '{value}'. Expected format: 'SOURCE:DESTINATION' (e.g., 0:2)"
        raise typer.BadParameter(msg) from None


def _parse_assignment(value: str) -> tuple[int, int, str]:
    """Parse a ``ROW,COLUMN=TEXT`` cell assignment. TEXT may be empty or contain '='."""
    coords, sep, content = value.partition("=")
    row, comma, column = coords.partition(",")
    try:
        if not sep or not comma:
            raise ValueError
        return int(row), int(column), content
    except ValueError:
        msg = f"Invalid cell assignment '{value}'. Expected format: 'ROW,COLUMN=TEXT' (e.g., 1,2=Total)"
        raise typer.BadParameter(msg) from None


@app.command()
def show(
    input: Annotated[  # noqa: A002
        Path,
        typer.Argument(help="Path to recognized table (.json or .toml)"),
    ],
) -> None:
    """Print a recognized table as a grid."""
    err_console.print()
    table = _load_table_or_exit(input)
    err_console.print()

    grid = Table(show_header=True, header_style="bold cyan", show_lines=True)
    grid.add_column("#", style="dim", justify="right")
    for column_index in range(table.column_count):
        grid.add_column(str(column_index + 1))
    for row_index, row in enumerate(table.contents()):
        grid.add_row(str(row_index + 1), *(escape(content) for content in row))

    out_console.print(
        Panel(
            grid,
            title=f"[bold]{escape(input.name)}[/bold]",
            subtitle=f"[dim]{table.row_count} × {table.column_count}[/dim]",
            border_style="cyan",
        ),
    )


@app.command()
def export(
    input: Annotated[  # noqa: A002
        Path,
        typer.Argument(help="Path to recognized table (.json or .toml)"),
    ],
    *,
    export_format: Annotated[
        ExportFormat | None,
        typer.Option("-f", "--format", help="Export format (defaults to [tool.tableedit].format, then tsv)"),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("-o", "--output", help="Path to output file (defaults to [tool.tableedit].output, then stdout)"),
    ] = None,
) -> None:
    """Export a recognized table as TSV or CSV."""
    try:
        config = get_config()
    except ConfigError as e:
        err_console.print(f"[red]Configuration error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    effective_format = export_format or config.format or ExportFormat.TSV
    effective_output = output if output is not None else config.output

    table = _load_table_or_exit(input)

    if effective_output is None:
        typer.echo(export_table(table, effective_format))
        return

    err_console.print(f"[cyan]Writing {effective_format.label} to:[/cyan] {effective_output}")
    write_export(table, effective_format, effective_output)
    err_console.print("[green]✓ Export complete[/green]")


@app.command()
def edit(  # noqa: PLR0913
    input: Annotated[  # noqa: A002
        Path,
        typer.Argument(help="Path to recognized table (.json or .toml)"),
    ],
    *,
    output: Annotated[
        Path,
        typer.Option("-o", "--output", help="Path to write the edited table (.json or .toml)"),
    ],
    set_cells: Annotated[
        list[str] | None,
        typer.Option("--set", help="Replace cell text, as ROW,COLUMN=TEXT (repeatable)"),
    ] = None,
    move_rows: Annotated[
        list[str] | None,
        typer.Option("--move-row", help="Move a row, as SOURCE:DESTINATION (repeatable)"),
    ] = None,
    move_columns: Annotated[
        list[str] | None,
        typer.Option("--move-column", help="Move a column, as SOURCE:DESTINATION (repeatable)"),
    ] = None,
    delete_rows: Annotated[
        list[int] | None,
        typer.Option("--delete-row", help="Delete a row by index (repeatable)"),
    ] = None,
    delete_columns: Annotated[
        list[int] | None,
        typer.Option("--delete-column", help="Delete a column by index (repeatable)"),
    ] = None,
) -> None:
    """Apply edits to a recognized table and save the result.

    Indices are zero-based and refer to the table as it is when each step runs:
    cell updates first, then moves in the order given, then deletions. Deleted
    indices all refer to the table after the moves. Out-of-range indices are ignored.

    Examples:
        tableedit edit scan.json -o fixed.json --delete-row 0 --delete-row 3
        tableedit edit scan.toml -o fixed.toml --move-column 2:0 --set 0,0=Item

    """
    assignments = [_parse_assignment(value) for value in set_cells or []]
    row_moves = [_parse_move(value) for value in move_rows or []]
    column_moves = [_parse_move(value) for value in move_columns or []]

    err_console.print()
    table = _load_table_or_exit(input)
    err_console.print(f"[cyan]Table:[/cyan] [bold]{table.row_count} × {table.column_count}[/bold]")
    err_console.print()

    for row, column, content in assignments:
        table.update_cell(row, column, content)
    for source, destination in row_moves:
        table.move_row(source, destination)
    for source, destination in column_moves:
        table.move_column(source, destination)
    removed_rows = table.remove_rows(delete_rows or [])
    removed_columns = table.remove_columns(delete_columns or [])

    summary = Table(show_header=True, header_style="bold cyan", box=None)
    summary.add_column("Edit", style="dim")
    summary.add_column("Count", justify="right")
    summary.add_row("Cells updated", str(len(assignments)))
    summary.add_row("Row moves", str(len(row_moves)))
    summary.add_row("Column moves", str(len(column_moves)))
    summary.add_row("Rows removed", str(removed_rows))
    summary.add_row("Columns removed", str(removed_columns))
    err_console.print(Panel(summary, title="[bold]Edits[/bold]", border_style="cyan"))
    err_console.print()

    err_console.print(f"[cyan]Writing table to:[/cyan] {output}")
    try:
        save_recognized_table(table, output)
    except ValueError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    err_console.print()
    err_console.print(f"[green]✓ Saved {table.row_count} × {table.column_count} table[/green]")
    err_console.print()


@app.command()
def blank(
    rows: Annotated[int, typer.Argument(min=0, help="Number of rows")],
    columns: Annotated[int, typer.Argument(min=0, help="Number of columns")],
    *,
    output: Annotated[
        Path,
        typer.Option("-o", "--output", help="Path to write the table (.json or .toml)"),
    ],
) -> None:
    """Create a table of empty cells to fill in by hand."""
    table = EditableTable.empty(rows, columns)

    err_console.print(f"[cyan]Writing blank table to:[/cyan] {output}")
    try:
        save_recognized_table(table, output)
    except ValueError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    err_console.print(f"[green]✓ Created {rows} × {columns} table[/green]")


def main() -> None:
    app()
