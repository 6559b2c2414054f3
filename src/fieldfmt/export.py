"""Format whole result rows for CSV exports and scheduled deliveries.

Column → item bindings come from a YAML (or JSON) file::

    columns:
      orders_total:
        item_kind: metric
        type: sum
        format: usd
        round: 0
      orders_created_month:
        item_kind: dimension
        type: date
        time_interval: MONTH

Columns without a binding use default rendering.
"""

from __future__ import annotations

import csv
import logging
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from typing import Any, TextIO

import yaml
from pydantic import ValidationError

from fieldfmt.exceptions import ItemDefinitionError
from fieldfmt.format.items import FormattableItem, formattable_item_adapter
from fieldfmt.format.values import MISSING, format_item_value

logger = logging.getLogger(__name__)


def parse_items(data: Any, source: str = "<memory>") -> dict[str, FormattableItem]:
    """Validate a column → item mapping.

    Raises:
        ItemDefinitionError: Listing every invalid column.
    """
    if not data or not isinstance(data, dict):
        raise ItemDefinitionError(source, ["empty or not a mapping"])

    columns = data.get("columns", data)
    if not isinstance(columns, dict):
        raise ItemDefinitionError(source, ["'columns' must be a mapping"])

    items: dict[str, FormattableItem] = {}
    errors: list[str] = []
    for column, definition in columns.items():
        if not isinstance(definition, dict):
            errors.append(f"{column}: expected a mapping")
            continue
        definition = {"name": str(column), **definition}
        try:
            items[str(column)] = formattable_item_adapter.validate_python(definition)
        except ValidationError as e:
            for err in e.errors():
                loc = ".".join(str(part) for part in err["loc"])
                errors.append(f"{column}: {loc}: {err['msg']}" if loc else f"{column}: {err['msg']}")

    if errors:
        raise ItemDefinitionError(source, errors)
    return items


def load_items(path: Path) -> dict[str, FormattableItem]:
    """Load column → item bindings from a YAML or JSON file."""
    try:
        data = yaml.safe_load(path.read_text())
    except OSError as e:
        raise ItemDefinitionError(str(path), [f"cannot read file: {e}"]) from e
    except yaml.YAMLError as e:
        raise ItemDefinitionError(str(path), [f"invalid YAML: {e}"]) from e
    return parse_items(data, source=str(path))


def format_row(
    row: Mapping[str, Any],
    items: Mapping[str, FormattableItem],
    convert_to_utc: bool = False,
    columns: Iterable[str] | None = None,
) -> dict[str, str]:
    """Format every column of ``row``; columns absent from it render as missing."""
    return {
        column: format_item_value(items.get(column), row.get(column, MISSING), convert_to_utc)
        for column in (columns if columns is not None else row.keys())
    }


def format_rows(
    rows: Iterable[Mapping[str, Any]],
    items: Mapping[str, FormattableItem],
    convert_to_utc: bool = False,
) -> Iterator[dict[str, str]]:
    for row in rows:
        yield format_row(row, items, convert_to_utc)


def format_csv(
    source: TextIO,
    dest: TextIO,
    items: Mapping[str, FormattableItem],
    convert_to_utc: bool = False,
    null_token: str | None = None,
) -> int:
    """Copy a CSV from ``source`` to ``dest`` with every cell formatted.

    Cells equal to ``null_token`` are treated as null; short rows are
    missing their trailing values. Returns the number of data rows written.
    """
    reader = csv.DictReader(source, restval=MISSING)
    fieldnames = list(reader.fieldnames or [])
    unbound = [c for c in fieldnames if c not in items]
    if unbound:
        logger.debug("Columns without item bindings use default rendering: %s", ", ".join(unbound))

    writer = csv.DictWriter(dest, fieldnames=fieldnames, extrasaction="ignore")
    writer.writeheader()

    count = 0
    for raw in reader:
        row = {
            column: None if null_token is not None and value == null_token else value
            for column, value in raw.items()
            if column is not None
        }
        writer.writerow(format_row(row, items, convert_to_utc, columns=fieldnames))
        count += 1

    logger.info("Formatted %d rows across %d columns", count, len(fieldnames))
    return count
