"""Magnitude compaction (K/M/B-style suffixes).

Compaction is always requested through a format's ``compact`` key; it is
never picked from the magnitude of the value.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from fieldfmt.format.numbers import to_number
from fieldfmt.format.spec import FormatSpec

logger = logging.getLogger(__name__)


class Compact(str, Enum):
    """Canonical compaction keys."""

    THOUSANDS = "thousands"
    MILLIONS = "millions"
    BILLIONS = "billions"
    TRILLIONS = "trillions"
    KILOBYTES = "kilobytes"
    MEGABYTES = "megabytes"
    GIGABYTES = "gigabytes"
    TERABYTES = "terabytes"
    PETABYTES = "petabytes"
    KIBIBYTES = "kibibytes"
    MEBIBYTES = "mebibytes"
    GIBIBYTES = "gibibytes"
    TEBIBYTES = "tebibytes"
    PEBIBYTES = "pebibytes"


@dataclass(frozen=True)
class CompactConfig:
    """One compaction tier: divide by ``base ** exponent``, then append ``suffix``."""

    compact: Compact
    label: str
    suffix: str
    base: int
    exponent: int
    alias: tuple[str, ...] = field(default_factory=tuple)

    @property
    def order_of_magnitude(self) -> int:
        return self.exponent * (3 if self.base == 1000 else 10)

    def convert(self, value: float) -> float:
        return value / self.base**self.exponent


COMPACT_CONFIGS: tuple[CompactConfig, ...] = (
    CompactConfig(Compact.THOUSANDS, "thousands (K)", "K", 1000, 1, ("K", "thousand")),
    CompactConfig(Compact.MILLIONS, "millions (M)", "M", 1000, 2, ("M", "million")),
    CompactConfig(Compact.BILLIONS, "billions (B)", "B", 1000, 3, ("B", "billion")),
    CompactConfig(Compact.TRILLIONS, "trillions (T)", "T", 1000, 4, ("T", "trillion")),
    CompactConfig(Compact.KILOBYTES, "kilobytes (KB)", "KB", 1000, 1, ("KB",)),
    CompactConfig(Compact.MEGABYTES, "megabytes (MB)", "MB", 1000, 2, ("MB",)),
    CompactConfig(Compact.GIGABYTES, "gigabytes (GB)", "GB", 1000, 3, ("GB",)),
    CompactConfig(Compact.TERABYTES, "terabytes (TB)", "TB", 1000, 4, ("TB",)),
    CompactConfig(Compact.PETABYTES, "petabytes (PB)", "PB", 1000, 5, ("PB",)),
    CompactConfig(Compact.KIBIBYTES, "kibibytes (KiB)", "KiB", 1024, 1, ("KiB",)),
    CompactConfig(Compact.MEBIBYTES, "mebibytes (MiB)", "MiB", 1024, 2, ("MiB",)),
    CompactConfig(Compact.GIBIBYTES, "gibibytes (GiB)", "GiB", 1024, 3, ("GiB",)),
    CompactConfig(Compact.TEBIBYTES, "tebibytes (TiB)", "TiB", 1024, 4, ("TiB",)),
    CompactConfig(Compact.PEBIBYTES, "pebibytes (PiB)", "PiB", 1024, 5, ("PiB",)),
)

# key or alias -> config
_LOOKUP = MappingProxyType({
    name: config
    for config in COMPACT_CONFIGS
    for name in (config.compact.value, *config.alias)
})


def find_compact_config(key: str | Compact | None) -> CompactConfig | None:
    """Look up a compaction tier by canonical key or alias."""
    if key is None:
        return None
    if isinstance(key, Compact):
        key = key.value
    return _LOOKUP.get(key)


def apply_compact(value: object, spec: FormatSpec | None = None) -> tuple[float, str]:
    """Scale ``value`` for the spec's compaction key.

    Returns ``(scaled_value, suffix)``. A missing or unknown key leaves the
    value unscaled with an empty suffix.
    """
    number = to_number(value)
    if spec is None or spec.compact is None:
        return number, ""

    config = find_compact_config(spec.compact)
    if config is None:
        logger.debug("Unknown compact key %r, value left unscaled", spec.compact)
        return number, ""

    return config.convert(number), config.suffix
