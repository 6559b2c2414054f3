"""Locale-aware number rendering.

A format spec's ``round`` is turned into precision options first, then the
number is rendered with the CLDR pattern of the locale selected by the
spec's separator style. Rounding is half away from zero on the shortest
decimal representation of the value, so ``1.005`` rounds to ``1.01``.
"""

from __future__ import annotations

import copy
import math
import numbers
import re
from dataclasses import dataclass, replace
from decimal import ROUND_HALF_UP, Context, Decimal, localcontext
from typing import Any

from babel import Locale
from babel.numbers import get_currency_precision

from fieldfmt.config import get_settings
from fieldfmt.exceptions import UnhandledSeparatorError
from fieldfmt.format.spec import FormatSpec, NumberSeparator

# Reference locales for the forced separator styles
COMMA_PERIOD_LOCALE = "en_US"
PERIOD_COMMA_LOCALE = "de_DE"

MAX_FRACTION_DIGITS = 20
DEFAULT_MAX_FRACTION_DIGITS = 3

_CONTEXT = Context(prec=1000, rounding=ROUND_HALF_UP)

_DECIMAL_LITERAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_RADIX_LITERAL = re.compile(r"0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)")


def to_number(value: Any) -> float:
    """Coerce ``value`` the way JavaScript's ``Number()`` does.

    Returns NaN for anything that is not numeric. Blank strings and None
    coerce to 0.
    """
    if value is None:
        return 0.0
    if isinstance(value, (numbers.Real, Decimal)):
        return _to_float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        if _DECIMAL_LITERAL.fullmatch(text):
            return float(text)
        if text in ("Infinity", "+Infinity"):
            return math.inf
        if text == "-Infinity":
            return -math.inf
        if _RADIX_LITERAL.fullmatch(text):
            return _to_float(int(text, 0))
    return math.nan


def _to_float(value: numbers.Real | Decimal) -> float:
    try:
        return float(value)
    except OverflowError:
        # Integers past the float range saturate like Number()
        return math.inf if value > 0 else -math.inf
    except ValueError:
        # Decimal("sNaN") refuses conversion
        return math.nan


def value_is_nan(value: Any) -> bool:
    """True when ``value`` is not a number. Booleans always count as NaN."""
    if isinstance(value, bool):
        return True
    return math.isnan(to_number(value))


def is_number(value: Any) -> bool:
    return not value_is_nan(value)


@dataclass(frozen=True)
class NumberOptions:
    """Precision and styling derived from a format spec."""

    min_fraction_digits: int | None = None
    max_fraction_digits: int | None = None
    max_significant_digits: int | None = None
    currency: str | None = None
    grouping: bool = True


def get_format_number_options(value: Decimal | float, spec: FormatSpec | None = None) -> NumberOptions:
    """Derive precision options from the spec's ``round``.

    ``round < 0`` trims significant digits (e.g. -2 rounds 1234 to 1200),
    ``round >= 0`` fixes the number of fraction digits.
    """
    currency = spec.currency if spec is not None and spec.has_currency else None
    round_ = spec.round if spec is not None else None

    if round_ is None:
        return NumberOptions(currency=currency)

    if round_ < 0:
        # Literal floor arithmetic: floor(-0.5) is -1, whose text is two chars
        integer_digits = len(str(math.floor(value)))
        return NumberOptions(
            max_significant_digits=max(integer_digits + round_, 1),
            min_fraction_digits=0,
            max_fraction_digits=0,
            currency=currency,
        )

    fraction_digits = min(round_, MAX_FRACTION_DIGITS)
    return NumberOptions(
        min_fraction_digits=fraction_digits,
        max_fraction_digits=fraction_digits,
        currency=currency,
    )


def format_number_value(value: Any, spec: FormatSpec | None = None) -> str:
    """Render a number following the spec's rounding, currency and separator."""
    number = _to_decimal(value)
    if not number.is_finite():
        return _format_non_finite(number)

    options = get_format_number_options(number, spec)
    separator = (spec.separator if spec is not None else None) or NumberSeparator.DEFAULT

    if separator == NumberSeparator.COMMA_PERIOD:
        return _render(number, options, COMMA_PERIOD_LOCALE)
    if separator == NumberSeparator.SPACE_PERIOD:
        return _render(number, options, COMMA_PERIOD_LOCALE).replace(",", " ")
    if separator == NumberSeparator.PERIOD_COMMA:
        # With a currency this also moves the symbol after the digits
        return _render(number, options, PERIOD_COMMA_LOCALE)
    if separator == NumberSeparator.NO_SEPARATOR_PERIOD:
        return _render(number, replace(options, grouping=False), COMMA_PERIOD_LOCALE)
    if separator == NumberSeparator.DEFAULT:
        return _render(number, options, get_settings().locale)
    raise UnhandledSeparatorError(separator)


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, numbers.Integral):
        return Decimal(int(value))
    # repr gives the shortest round-tripping text, so 0.1 stays 0.1
    return Decimal(repr(float(value)))


def _format_non_finite(number: Decimal) -> str:
    if number.is_nan():
        return "NaN"
    return "-∞" if number.is_signed() else "∞"


def _round_to_significant(number: Decimal, digits: int) -> Decimal:
    if number.is_zero():
        return number
    exponent = number.adjusted() - digits + 1
    return _CONTEXT.quantize(number, Decimal(1).scaleb(exponent))


def _render(number: Decimal, options: NumberOptions, locale: str) -> str:
    loc = Locale.parse(locale)

    if options.max_significant_digits is not None:
        number = _round_to_significant(number, options.max_significant_digits)
        frac_prec = (0, options.max_fraction_digits or 0)
    elif options.max_fraction_digits is not None:
        frac_prec = (options.min_fraction_digits or 0, options.max_fraction_digits)
    elif options.currency:
        digits = get_currency_precision(options.currency)
        frac_prec = (digits, digits)
    else:
        frac_prec = (0, DEFAULT_MAX_FRACTION_DIGITS)
    number = _CONTEXT.quantize(number, Decimal(1).scaleb(-frac_prec[1]))

    if options.currency:
        pattern = copy.copy(loc.currency_formats["standard"])
    else:
        pattern = copy.copy(loc.decimal_formats[None])
    pattern.frac_prec = frac_prec

    # Quantizing inside the pattern follows the active decimal context
    with localcontext(_CONTEXT):
        return pattern.apply(
            number,
            loc,
            currency=options.currency,
            currency_digits=False,
            group_separator=options.grouping,
        )
