"""Format specification models and the enums they are built from.

``FormatSpec`` is the structured format attached to a field, metric or
table calculation. Field names match the camelCase wire payloads
(``formatOptions``), which use single words for every key.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class FormatKind(str, Enum):
    """Kinds of structured format."""

    DEFAULT = "default"
    ID = "id"
    NUMBER = "number"
    CURRENCY = "currency"
    PERCENT = "percent"


class NumberSeparator(str, Enum):
    """Grouping and decimal punctuation used when rendering numbers."""

    DEFAULT = "default"
    COMMA_PERIOD = "commaPeriod"  # 1,234.50
    SPACE_PERIOD = "spacePeriod"  # 1 234.50
    PERIOD_COMMA = "periodComma"  # 1.234,50
    NO_SEPARATOR_PERIOD = "noSeparatorPeriod"  # 1234.50


class LegacyFormat(str, Enum):
    """Single-enum format found on items stored before ``FormatSpec``."""

    EUR = "eur"
    GBP = "gbp"
    USD = "usd"
    KM = "km"
    MI = "mi"
    PERCENT = "percent"
    ID = "id"


class TimeFrame(str, Enum):
    """Calendar resolution of a date or timestamp dimension."""

    RAW = "RAW"
    YEAR = "YEAR"
    QUARTER = "QUARTER"
    MONTH = "MONTH"
    WEEK = "WEEK"
    DAY = "DAY"
    HOUR = "HOUR"
    MINUTE = "MINUTE"
    SECOND = "SECOND"
    MILLISECOND = "MILLISECOND"


class DimensionType(str, Enum):
    """Primitive value type of a dimension."""

    STRING = "string"
    NUMBER = "number"
    TIMESTAMP = "timestamp"
    DATE = "date"
    BOOLEAN = "boolean"


class MetricType(str, Enum):
    """Aggregation type of a metric; a few of these imply the value type."""

    PERCENTILE = "percentile"
    AVERAGE = "average"
    COUNT = "count"
    COUNT_DISTINCT = "count_distinct"
    SUM = "sum"
    MIN = "min"
    MAX = "max"
    MEDIAN = "median"
    NUMBER = "number"
    STRING = "string"
    DATE = "date"
    TIMESTAMP = "timestamp"
    BOOLEAN = "boolean"


# ISO 4217 codes offered for currency formats
CURRENCIES: tuple[str, ...] = (
    "USD", "EUR", "GBP", "JPY", "CHF", "CAD", "AUD", "CNY", "ARS", "BRL",
    "CLP", "COP", "CZK", "DKK", "HKD", "HUF", "INR", "ILS", "KRW", "MYR",
    "MXN", "MAD", "NZD", "NOK", "PHP", "PLN", "RUB", "SAR", "SGD", "ZAR",
    "SEK", "TWD", "THB", "TRY", "VND",
)


class FormatSpec(BaseModel):
    """Structured description of how a raw value is rendered."""

    model_config = ConfigDict(frozen=True)

    type: FormatKind
    currency: str | None = None
    round: int | None = None
    compact: str | None = None
    prefix: str | None = None
    suffix: str | None = None
    separator: NumberSeparator | None = None

    @property
    def has_currency(self) -> bool:
        return self.type == FormatKind.CURRENCY and bool(self.currency)
