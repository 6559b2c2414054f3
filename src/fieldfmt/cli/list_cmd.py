"""fieldfmt list: List currencies, compaction tiers, separators and format types."""

from __future__ import annotations

import json
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from fieldfmt.format.compact import COMPACT_CONFIGS
from fieldfmt.format.numbers import format_number_value
from fieldfmt.format.spec import CURRENCIES, FormatKind, FormatSpec, LegacyFormat, NumberSeparator

console = Console()

VALID_RESOURCES = ["currencies", "compact", "separators", "kinds", "legacy"]

_SAMPLE = 1234567.891


def list_resources(
    resource: Annotated[str, typer.Argument(help=f"Resource type: {', '.join(VALID_RESOURCES)}")],
    fmt: Annotated[str, typer.Option("--format", "-f", help="Output format: table or json")] = "table",
) -> None:
    """List the values format specs accept."""
    if resource not in VALID_RESOURCES:
        console.print(f"[red]Invalid resource. Choose from: {', '.join(VALID_RESOURCES)}[/red]")
        raise typer.Exit(1)

    valid_formats = ("table", "json")
    if fmt not in valid_formats:
        console.print(f"[red]Invalid format '{fmt}'. Choose from: {', '.join(valid_formats)}[/red]")
        raise typer.Exit(1)

    if resource == "currencies":
        _list_values("Currencies", list(CURRENCIES), fmt)
    elif resource == "compact":
        _list_compact(fmt)
    elif resource == "separators":
        _list_separators(fmt)
    elif resource == "kinds":
        _list_values("Format Types", [k.value for k in FormatKind], fmt)
    elif resource == "legacy":
        _list_values("Legacy Formats", [f.value for f in LegacyFormat], fmt)


def _list_values(title: str, values: list[str], fmt: str) -> None:
    if fmt == "json":
        console.print_json(json.dumps(values))
        return

    table = Table(title=title)
    table.add_column("Value", style="cyan")
    for v in values:
        table.add_row(v)
    console.print(table)


def _list_compact(fmt: str) -> None:
    """List compaction tiers with their aliases."""
    rows = [
        {
            "compact": c.compact.value,
            "label": c.label,
            "suffix": c.suffix,
            "alias": list(c.alias),
            "order_of_magnitude": c.order_of_magnitude,
        }
        for c in COMPACT_CONFIGS
    ]

    if fmt == "json":
        console.print_json(json.dumps(rows, indent=2))
        return

    table = Table(title="Compaction Tiers")
    table.add_column("Key", style="cyan")
    table.add_column("Label")
    table.add_column("Suffix", style="green")
    table.add_column("Aliases", style="dim")
    table.add_column("Magnitude", justify="right")
    for r in rows:
        table.add_row(r["compact"], r["label"], r["suffix"], ", ".join(r["alias"]), str(r["order_of_magnitude"]))
    console.print(table)


def _list_separators(fmt: str) -> None:
    """List separator styles with a rendered sample."""
    rows = [
        {
            "separator": s.value,
            "sample": format_number_value(_SAMPLE, FormatSpec(type=FormatKind.NUMBER, round=2, separator=s)),
        }
        for s in NumberSeparator
    ]

    if fmt == "json":
        console.print_json(json.dumps(rows, indent=2))
        return

    table = Table(title="Separator Styles")
    table.add_column("Separator", style="cyan")
    table.add_column("Sample", justify="right")
    for r in rows:
        table.add_row(r["separator"], r["sample"])
    console.print(table)
