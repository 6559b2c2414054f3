"""fieldfmt format: Format a single value."""

from __future__ import annotations

import json
from typing import Annotated

import typer
from rich.console import Console

from fieldfmt.config import get_settings
from fieldfmt.exceptions import FieldFmtError
from fieldfmt.format.items import Dimension, Metric
from fieldfmt.format.resolver import get_custom_format
from fieldfmt.format.spec import (
    DimensionType,
    FormatKind,
    FormatSpec,
    LegacyFormat,
    NumberSeparator,
    TimeFrame,
)
from fieldfmt.format.values import format_item_value

console = Console()


def format_value(
    value: Annotated[str, typer.Argument(help="Raw value, as it comes out of the warehouse")],
    kind: Annotated[FormatKind | None, typer.Option("--type", "-t", help="Format type")] = None,
    round_: Annotated[int | None, typer.Option("--round", "-r", help="Fraction digits, or negative to trim significant digits")] = None,
    compact: Annotated[str | None, typer.Option("--compact", "-c", help="Compaction key, e.g. thousands or M")] = None,
    currency: Annotated[str | None, typer.Option("--currency", help="ISO currency code for --type currency")] = None,
    separator: Annotated[NumberSeparator | None, typer.Option("--separator", "-s", help="Separator style")] = None,
    prefix: Annotated[str | None, typer.Option("--prefix", help="Text before the number")] = None,
    suffix: Annotated[str | None, typer.Option("--suffix", help="Text after the number")] = None,
    legacy_format: Annotated[LegacyFormat | None, typer.Option("--legacy-format", help="Legacy format enum")] = None,
    value_type: Annotated[DimensionType | None, typer.Option("--value-type", help="Primitive type of the field")] = None,
    time_interval: Annotated[TimeFrame | None, typer.Option("--time-interval", help="Date/timestamp granularity")] = None,
    utc: Annotated[bool | None, typer.Option("--utc/--local", help="Render dates in UTC")] = None,
    null: Annotated[bool, typer.Option("--null", help="Format a null value instead of VALUE")] = False,
    as_json: Annotated[bool, typer.Option("--json", help="Print the resolved format as well")] = False,
) -> None:
    """Format one value with a format spec or legacy format.

    Without --value-type the value is treated as a numeric metric.
    """
    try:
        settings = get_settings()
        convert_to_utc = settings.fieldfmt_convert_to_utc if utc is None else utc

        spec = None
        if kind is not None:
            spec = FormatSpec(
                type=kind,
                round=round_,
                compact=compact,
                currency=currency.upper() if currency else None,
                separator=separator,
                prefix=prefix,
                suffix=suffix,
            )

        if value_type is not None:
            item = Dimension(
                name="value",
                type=value_type,
                time_interval=time_interval,
                format_options=spec,
                format=legacy_format,
                compact=compact,
                round=round_,
            )
        else:
            item = Metric(
                name="value",
                format_options=spec,
                format=legacy_format,
                compact=compact,
                round=round_,
            )

        formatted = format_item_value(item, None if null else value, convert_to_utc)

        if as_json:
            resolved = get_custom_format(item)
            console.print_json(json.dumps({
                "value": None if null else value,
                "formatted": formatted,
                "format": resolved.model_dump(mode="json", exclude_none=True) if resolved else None,
            }))
            return

        typer.echo(formatted)

    except FieldFmtError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e
