"""Custom exception hierarchy for fieldfmt."""

from __future__ import annotations

from typing import Any, NoReturn


class FieldFmtError(Exception):
    """Base exception for all fieldfmt errors."""


class FormatDefectError(FieldFmtError):
    """A closed format mapping met a variant it has no rule for.

    Raised for programmer defects (a variant without a render rule),
    never for bad data.
    """

    def __init__(self, value: Any, message: str):
        self.value = value
        super().__init__(f"{message}: {value!r}")


class UnhandledFormatKindError(FormatDefectError):
    """Format spec ``type`` is outside the known set of kinds."""

    def __init__(self, kind: Any):
        super().__init__(kind, "Format type is not valid")


class UnhandledSeparatorError(FormatDefectError):
    """Number separator style is outside the known set of styles."""

    def __init__(self, separator: Any):
        super().__init__(separator, "Unknown separator")


class DateParseError(FieldFmtError):
    """Text could not be parsed with the pattern for a time interval."""

    def __init__(self, text: str, pattern: str):
        self.text = text
        self.pattern = pattern
        super().__init__(f"Cannot parse '{text}' with format '{pattern}'")


class ItemDefinitionError(FieldFmtError):
    """Error in a field/metric item definition file."""

    def __init__(self, source: str, errors: list[str]):
        self.source = source
        self.errors = errors
        error_list = "\n  - ".join(errors)
        super().__init__(f"Item definitions in '{source}' are invalid:\n  - {error_list}")


class ConfigurationError(FieldFmtError):
    """Invalid or missing configuration."""


def assert_unreachable(value: Any, message: str) -> NoReturn:
    """Fail loudly when a closed match falls through to its default arm."""
    raise FormatDefectError(value, message)
