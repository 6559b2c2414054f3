"""Promotion of the legacy single-enum ``format`` to a ``FormatSpec``."""

from __future__ import annotations

from fieldfmt.exceptions import assert_unreachable
from fieldfmt.format.spec import FormatKind, FormatSpec, LegacyFormat


def get_custom_format_from_legacy(
    format: LegacyFormat | str | None = None,
    compact: str | None = None,
    round: int | None = None,
) -> FormatSpec:
    """Build the structured format equivalent to legacy item fields.

    Every branch except ``id`` carries ``compact`` and ``round`` through.
    Unrecognised legacy values behave like an absent format.
    """
    legacy = _as_legacy_format(format)

    if legacy is None:
        return FormatSpec(type=FormatKind.NUMBER, round=round, compact=compact)
    if legacy in (LegacyFormat.EUR, LegacyFormat.GBP, LegacyFormat.USD):
        return FormatSpec(
            type=FormatKind.CURRENCY,
            currency=legacy.value.upper(),
            compact=compact,
            round=round,
        )
    if legacy in (LegacyFormat.KM, LegacyFormat.MI):
        return FormatSpec(
            type=FormatKind.NUMBER,
            suffix=f" {legacy.value}",
            compact=compact,
            round=round,
        )
    if legacy == LegacyFormat.PERCENT:
        return FormatSpec(type=FormatKind.PERCENT, compact=compact, round=round)
    if legacy == LegacyFormat.ID:
        # IDs are never scaled or rounded
        return FormatSpec(type=FormatKind.ID)
    assert_unreachable(legacy, "Unknown legacy format")


def _as_legacy_format(value: LegacyFormat | str | None) -> LegacyFormat | None:
    if value is None or isinstance(value, LegacyFormat):
        return value
    try:
        return LegacyFormat(str(value).lower())
    except ValueError:
        return None
