"""fieldfmt export: Format every cell of a CSV file."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from fieldfmt.config import get_settings
from fieldfmt.exceptions import FieldFmtError

console = Console(stderr=True)


def export(
    input_file: Annotated[Path, typer.Argument(help="CSV file of raw query results")],
    items: Annotated[Path, typer.Option("--items", "-i", help="YAML/JSON column → item bindings")],
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Output CSV (default: stdout)")] = None,
    utc: Annotated[bool | None, typer.Option("--utc/--local", help="Render dates in UTC")] = None,
    null_token: Annotated[str | None, typer.Option("--null", help="Cell text that means null, e.g. NULL")] = None,
) -> None:
    """Format a CSV export with per-column field formats.

    Output is identical to what the interactive table shows for the same
    values, so it can feed scheduled deliveries directly.
    """
    try:
        settings = get_settings()
        convert_to_utc = settings.fieldfmt_convert_to_utc if utc is None else utc

        if not input_file.exists():
            console.print(f"[red]File not found:[/red] {input_file}")
            raise typer.Exit(1)

        from fieldfmt.export import format_csv, load_items

        bindings = load_items(items)

        with input_file.open(newline="", encoding="utf-8") as source:
            if output is None:
                count = format_csv(source, sys.stdout, bindings, convert_to_utc, null_token)
            else:
                output.parent.mkdir(parents=True, exist_ok=True)
                with output.open("w", newline="", encoding="utf-8") as dest:
                    count = format_csv(source, dest, bindings, convert_to_utc, null_token)

        if output is not None:
            console.print(f"[green]Exported to:[/green] {output}")
            console.print(f"  Rows: {count}")

    except FieldFmtError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e
