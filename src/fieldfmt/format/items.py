"""Formattable items: the field-like descriptors a value is formatted for.

``FormattableItem`` is a closed union discriminated by ``item_kind``.
Callers build one per column; the formatter only reads them.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from fieldfmt.format.spec import DimensionType, FormatSpec, LegacyFormat, MetricType, TimeFrame


class _Item(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = ""
    label: str = ""
    table: str = ""


class _LegacyFormatted(_Item):
    """Item that may carry a structured format or the legacy fields."""

    format_options: FormatSpec | None = Field(default=None, alias="formatOptions")
    format: LegacyFormat | str | None = None
    compact: str | None = None
    round: int | None = None


class Dimension(_LegacyFormatted):
    """A dimension field from the semantic layer."""

    item_kind: Literal["dimension"] = "dimension"
    type: DimensionType
    time_interval: TimeFrame | None = Field(default=None, alias="timeInterval")


class Metric(_LegacyFormatted):
    """A metric field from the semantic layer."""

    item_kind: Literal["metric"] = "metric"
    type: MetricType = MetricType.NUMBER


class AdditionalMetric(_LegacyFormatted):
    """A metric computed in the explore rather than declared in the model."""

    item_kind: Literal["additional_metric"] = "additional_metric"
    type: MetricType = MetricType.NUMBER
    sql: str = ""


class TableCalculation(_Item):
    """A calculation over query results; only ever has its own ``format``."""

    item_kind: Literal["table_calculation"] = "table_calculation"
    sql: str = ""
    format: FormatSpec | None = None


class CustomDimension(_Item):
    """A user-defined dimension (bins or SQL) without a primitive type."""

    item_kind: Literal["custom_dimension"] = "custom_dimension"
    format_options: FormatSpec | None = Field(default=None, alias="formatOptions")


FormattableItem = Annotated[
    Union[Dimension, Metric, AdditionalMetric, TableCalculation, CustomDimension],
    Field(discriminator="item_kind"),
]

formattable_item_adapter: TypeAdapter[FormattableItem] = TypeAdapter(FormattableItem)


def has_format_options(item: FormattableItem) -> bool:
    return (
        isinstance(item, (Dimension, Metric, AdditionalMetric, CustomDimension))
        and item.format_options is not None
    )


def is_table_calculation(item: FormattableItem) -> bool:
    return isinstance(item, TableCalculation)


def is_dimension(item: FormattableItem) -> bool:
    return isinstance(item, Dimension)


def is_field(item: FormattableItem) -> bool:
    """Dimensions and metrics declared in the model."""
    return isinstance(item, (Dimension, Metric))


def item_value_type(item: FormattableItem) -> DimensionType | MetricType | None:
    """Primitive type declared by the item, if the variant has one."""
    if isinstance(item, (Dimension, Metric, AdditionalMetric)):
        return item.type
    return None
