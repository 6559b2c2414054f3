"""Turn raw query-result values into display strings.

``format_item_value`` is the entry point shared by table rendering, CSV
export and scheduled deliveries. It never raises for bad data: nulls,
missing values, non-numbers and unparseable dates all have a fixed
fallback rendering. It only raises for format variants it has no rule
for.
"""

from __future__ import annotations

import logging
import math
from datetime import date
from typing import Any, Final

from fieldfmt.exceptions import UnhandledFormatKindError
from fieldfmt.format.compact import apply_compact
from fieldfmt.format.items import FormattableItem, is_dimension, item_value_type
from fieldfmt.format.numbers import format_number_value, is_number, to_number, value_is_nan
from fieldfmt.format.resolver import get_custom_format
from fieldfmt.format.spec import DimensionType, FormatKind, FormatSpec, MetricType
from fieldfmt.format.temporal import format_date, format_timestamp, is_date_input

logger = logging.getLogger(__name__)

NULL_DISPLAY = "∅"
MISSING_DISPLAY = "-"
INVALID_DATE_DISPLAY = "NaT"

TRUTHY_TOKENS: Final = frozenset({"True", "true", "yes", "Yes", "1", "T"})

_NBSP = ("\u00a0", "\u202f")


class _Missing:
    """Sentinel for a value that is absent from the row altogether."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Final = _Missing()


def to_display_string(value: Any) -> str:
    """``str()`` with the spellings tables use for booleans and floats.

    Booleans print lowercase, and floats print like JavaScript's
    ``String()``: ``12.0`` is ``"12"``, NaN is ``"NaN"``.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
    return str(value)


def format_boolean(value: Any) -> str:
    return "True" if str(value) in TRUTHY_TOKENS else "False"


def apply_default_format(value: Any) -> str:
    """Rendering used when no format applies."""
    if value is None:
        return NULL_DISPLAY
    if value is MISSING:
        return MISSING_DISPLAY
    if isinstance(value, str) or not is_number(value):
        return to_display_string(value)
    return format_number_value(value)


def apply_custom_format(value: Any, spec: FormatSpec | None = None) -> str:
    """Render ``value`` with a structured format.

    Raises:
        UnhandledFormatKindError: If ``spec.type`` has no rendering rule.
    """
    if spec is None or spec.type is None:
        return apply_default_format(value)

    if value == "":
        return ""

    if isinstance(value, date):
        return format_timestamp(value)

    if value is None or value is MISSING or value_is_nan(value):
        return apply_default_format(value)

    kind = spec.type
    if kind == FormatKind.ID:
        return to_display_string(value)
    if kind == FormatKind.DEFAULT:
        return apply_default_format(value)
    if kind == FormatKind.PERCENT:
        return f"{format_number_value(to_number(value) * 100, spec)}%"
    if kind == FormatKind.CURRENCY:
        compact_value, compact_suffix = apply_compact(value, spec)
        formatted = format_number_value(compact_value, spec)
        for space in _NBSP:
            formatted = formatted.replace(space, " ")
        return f"{formatted}{compact_suffix}"
    if kind == FormatKind.NUMBER:
        compact_value, compact_suffix = apply_compact(value, spec)
        formatted = format_number_value(compact_value, spec)
        return f"{spec.prefix or ''}{formatted}{compact_suffix}{spec.suffix or ''}"
    raise UnhandledFormatKindError(kind)


def format_item_value(
    item: FormattableItem | None,
    value: Any,
    convert_to_utc: bool = False,
) -> str:
    """Format a raw value for display, using the item's type and format."""
    if value is None:
        return NULL_DISPLAY
    if value is MISSING:
        return MISSING_DISPLAY

    if item is None:
        return apply_default_format(value)

    value_type = item_value_type(item)
    time_interval = item.time_interval if is_dimension(item) else None

    if value_type in (DimensionType.STRING, MetricType.STRING):
        return to_display_string(value)
    if value_type in (DimensionType.BOOLEAN, MetricType.BOOLEAN):
        return format_boolean(value)
    if value_type in (DimensionType.DATE, MetricType.DATE):
        if not is_date_input(value):
            logger.debug("Unparseable date value %r for %s", value, item.name or item.item_kind)
            return INVALID_DATE_DISPLAY
        return format_date(value, time_interval, convert_to_utc)
    if value_type in (DimensionType.TIMESTAMP, MetricType.TIMESTAMP):
        if not is_date_input(value):
            logger.debug("Unparseable timestamp value %r for %s", value, item.name or item.item_kind)
            return INVALID_DATE_DISPLAY
        return format_timestamp(value, time_interval, convert_to_utc)
    if value_type in (MetricType.MIN, MetricType.MAX) and isinstance(value, date):
        # MIN/MAX over a date column still prints as a date
        return format_timestamp(value, time_interval, convert_to_utc)

    return apply_custom_format(value, get_custom_format(item))
