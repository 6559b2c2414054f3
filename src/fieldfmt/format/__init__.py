"""Value formatting: format specs, items, number and date rendering."""

from fieldfmt.format.items import (
    AdditionalMetric,
    CustomDimension,
    Dimension,
    FormattableItem,
    Metric,
    TableCalculation,
)
from fieldfmt.format.legacy import get_custom_format_from_legacy
from fieldfmt.format.resolver import get_custom_format
from fieldfmt.format.spec import (
    CURRENCIES,
    DimensionType,
    FormatKind,
    FormatSpec,
    LegacyFormat,
    MetricType,
    NumberSeparator,
    TimeFrame,
)
from fieldfmt.format.values import MISSING, apply_custom_format, format_item_value

__all__ = [
    "CURRENCIES",
    "MISSING",
    "AdditionalMetric",
    "CustomDimension",
    "Dimension",
    "DimensionType",
    "FormatKind",
    "FormatSpec",
    "FormattableItem",
    "LegacyFormat",
    "Metric",
    "MetricType",
    "NumberSeparator",
    "TableCalculation",
    "TimeFrame",
    "apply_custom_format",
    "format_item_value",
    "get_custom_format",
    "get_custom_format_from_legacy",
]
