"""Date and timestamp rendering and parsing by time interval.

Patterns use moment-style tokens (``YYYY``, ``[Q]Q``, ``HH:mm:ss.SSS``,
``Z``). Rendering and parsing compile the same pattern, so
``format_date(parse_date(s, g), g) == s`` for any text ``s`` the pattern
accepts.

Naive datetimes are wall-clock values in the ambient zone
(``FIELDFMT_TIMEZONE``, else the system zone). Numbers are epoch
milliseconds.
"""

from __future__ import annotations

import numbers
import re
from datetime import date, datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Any

from fieldfmt.config import get_settings
from fieldfmt.exceptions import DateParseError
from fieldfmt.format.spec import TimeFrame

_TOKEN = re.compile(r"\[[^\]]*\]|YYYY|SSS|MM|DD|HH|mm|ss|Q|Z")

_TOKEN_PATTERNS = {
    "YYYY": r"(?P<year>\d{4})",
    "Q": r"(?P<quarter>[1-4])",
    "MM": r"(?P<month>\d{2})",
    "DD": r"(?P<day>\d{2})",
    "HH": r"(?P<hour>\d{2})",
    "mm": r"(?P<minute>\d{2})",
    "ss": r"(?P<second>\d{2})",
    "SSS": r"(?P<millisecond>\d{3})",
    "Z": r"(?P<offset>Z|[+-]\d{2}:?\d{2})",
}


def get_date_format(time_interval: TimeFrame | str | None = TimeFrame.DAY) -> str:
    """Pattern for a date at the given interval."""
    interval = _as_time_frame(time_interval, TimeFrame.DAY)
    if interval == TimeFrame.YEAR:
        return "YYYY"
    if interval == TimeFrame.QUARTER:
        return "YYYY-[Q]Q"
    if interval == TimeFrame.MONTH:
        return "YYYY-MM"
    return "YYYY-MM-DD"


def get_timestamp_format(time_interval: TimeFrame | str | None = TimeFrame.MILLISECOND) -> str:
    """Pattern for a timestamp: the day, the time down to the interval, the offset."""
    interval = _as_time_frame(time_interval, TimeFrame.MILLISECOND)
    if interval == TimeFrame.HOUR:
        time_format = "HH"
    elif interval == TimeFrame.MINUTE:
        time_format = "HH:mm"
    elif interval == TimeFrame.SECOND:
        time_format = "HH:mm:ss"
    else:
        time_format = "HH:mm:ss.SSS"
    return f"YYYY-MM-DD, {time_format} (Z)"


def is_date_input(value: Any) -> bool:
    """True when ``value`` can be read as a calendar instant."""
    return _to_datetime(value) is not None


def format_date(
    value: Any,
    time_interval: TimeFrame | str | None = TimeFrame.DAY,
    convert_to_utc: bool = False,
) -> str:
    """Render ``value`` as a date at the given interval."""
    return _render(_instant(value, convert_to_utc), get_date_format(time_interval))


def format_timestamp(
    value: Any,
    time_interval: TimeFrame | str | None = TimeFrame.MILLISECOND,
    convert_to_utc: bool = False,
) -> str:
    """Render ``value`` as a timestamp at the given interval."""
    return _render(_instant(value, convert_to_utc), get_timestamp_format(time_interval))


def parse_date(text: str, time_interval: TimeFrame | str | None = TimeFrame.DAY) -> datetime:
    """Parse text produced by :func:`format_date` back into a naive datetime.

    Raises:
        DateParseError: If the text does not match the interval's pattern.
    """
    return _parse(text, get_date_format(time_interval))


def parse_timestamp(
    text: str,
    time_interval: TimeFrame | str | None = TimeFrame.MILLISECOND,
) -> datetime:
    """Parse text produced by :func:`format_timestamp` into an aware datetime.

    The result is expressed in the ambient zone.

    Raises:
        DateParseError: If the text does not match the interval's pattern.
    """
    parsed = _parse(text, get_timestamp_format(time_interval))
    if parsed.tzinfo is None:
        return parsed
    return parsed.astimezone(_ambient_zone())


def _as_time_frame(value: TimeFrame | str | None, default: TimeFrame) -> TimeFrame:
    if value is None:
        return default
    if isinstance(value, TimeFrame):
        return value
    try:
        return TimeFrame(str(value).upper())
    except ValueError:
        return TimeFrame.RAW


def _ambient_zone() -> tzinfo | None:
    return get_settings().tzinfo


def _localize(naive: datetime) -> datetime:
    zone = _ambient_zone()
    if zone is None:
        # astimezone() on a naive datetime reads it as system local time
        return naive.astimezone()
    return naive.replace(tzinfo=zone)


def _to_datetime(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value if value.tzinfo is not None else _localize(value)
    if isinstance(value, date):
        return _localize(datetime(value.year, value.month, value.day))
    if isinstance(value, bool):
        return None
    if isinstance(value, numbers.Real):
        try:
            return datetime.fromtimestamp(float(value) / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
        return parsed if parsed.tzinfo is not None else _localize(parsed)
    return None


def _instant(value: Any, convert_to_utc: bool) -> datetime:
    instant = _to_datetime(value)
    if instant is None:
        raise DateParseError(str(value), "ISO 8601")
    if convert_to_utc:
        return instant.astimezone(timezone.utc)
    return instant.astimezone(_ambient_zone())


def _format_offset(offset: timedelta | None) -> str:
    minutes = int((offset or timedelta(0)).total_seconds() // 60)
    sign = "-" if minutes < 0 else "+"
    hours, minutes = divmod(abs(minutes), 60)
    return f"{sign}{hours:02d}:{minutes:02d}"


def _render(instant: datetime, pattern: str) -> str:
    def token(match: re.Match[str]) -> str:
        tok = match.group(0)
        if tok.startswith("["):
            return tok[1:-1]
        if tok == "YYYY":
            return f"{instant.year:04d}"
        if tok == "Q":
            return str((instant.month - 1) // 3 + 1)
        if tok == "MM":
            return f"{instant.month:02d}"
        if tok == "DD":
            return f"{instant.day:02d}"
        if tok == "HH":
            return f"{instant.hour:02d}"
        if tok == "mm":
            return f"{instant.minute:02d}"
        if tok == "ss":
            return f"{instant.second:02d}"
        if tok == "SSS":
            return f"{instant.microsecond // 1000:03d}"
        return _format_offset(instant.utcoffset())

    return _TOKEN.sub(token, pattern)


@lru_cache(maxsize=32)
def _compile(pattern: str) -> re.Pattern[str]:
    parts: list[str] = []
    pos = 0
    for match in _TOKEN.finditer(pattern):
        parts.append(re.escape(pattern[pos:match.start()]))
        tok = match.group(0)
        parts.append(re.escape(tok[1:-1]) if tok.startswith("[") else _TOKEN_PATTERNS[tok])
        pos = match.end()
    parts.append(re.escape(pattern[pos:]))
    return re.compile("".join(parts))


def _parse_offset(text: str) -> timezone:
    if text in ("Z", "z"):
        return timezone.utc
    sign = -1 if text[0] == "-" else 1
    digits = text[1:].replace(":", "")
    return timezone(sign * timedelta(hours=int(digits[:2]), minutes=int(digits[2:])))


def _parse(text: str, pattern: str) -> datetime:
    match = _compile(pattern).fullmatch(text.strip())
    if match is None:
        raise DateParseError(text, pattern)
    fields = match.groupdict()

    month = int(fields["month"]) if fields.get("month") else 1
    if fields.get("quarter"):
        month = (int(fields["quarter"]) - 1) * 3 + 1
    offset = fields.get("offset")

    try:
        return datetime(
            int(fields["year"]),
            month,
            int(fields.get("day") or 1),
            int(fields.get("hour") or 0),
            int(fields.get("minute") or 0),
            int(fields.get("second") or 0),
            int(fields.get("millisecond") or 0) * 1000,
            tzinfo=_parse_offset(offset) if offset else None,
        )
    except ValueError as e:
        raise DateParseError(text, pattern) from e
