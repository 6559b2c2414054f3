"""Pick the effective format for an item."""

from __future__ import annotations

from fieldfmt.format.items import (
    AdditionalMetric,
    CustomDimension,
    Dimension,
    FormattableItem,
    Metric,
    has_format_options,
    is_table_calculation,
)
from fieldfmt.format.legacy import get_custom_format_from_legacy
from fieldfmt.format.spec import FormatSpec


def get_custom_format(item: FormattableItem | None) -> FormatSpec | None:
    """Resolve the format spec for ``item``.

    First match wins:
      1. Explicit ``format_options`` on the item, verbatim.
      2. A table calculation's own ``format`` (None means no special format).
      3. The legacy ``format``/``compact``/``round`` fields, promoted.
    """
    if item is None:
        return None

    if has_format_options(item):
        return item.format_options

    if is_table_calculation(item):
        return item.format

    if isinstance(item, (Dimension, Metric, AdditionalMetric)):
        return get_custom_format_from_legacy(
            format=item.format,
            compact=item.compact,
            round=item.round,
        )
    if isinstance(item, CustomDimension):
        return get_custom_format_from_legacy()
    raise TypeError(f"Not a formattable item: {type(item).__name__}")
