"""
defect_insights/parsing/date_normalizer.py

Multi-format date resolution for defect exports.

Resolution order
----------------
1. Native parse: ISO-8601, RFC 2822, then plain ``strptime`` formats.
   Offsets that push the instant outside the datetime range count as
   unparseable.
2. ``DD/MMM/YY h:mm AM|PM``       e.g. ``30/May/24 5:20 PM``
3. ``M/D/YYYY H:mm``              e.g. ``5/30/2024 17:20``
4. ``DD.MM.YYYY HH:mm:ss``        e.g. ``30.05.2024 17:20:00``
5. ``M/D/YYYY h:mm:ss AM|PM``     e.g. ``5/30/2024 5:20:00 PM``
6. Native parse of the text before the first space.

Steps 2-5 live in :data:`DATE_PATTERNS`; new formats are added there.
Timestamps without an offset are read as UTC.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Callable

logger = logging.getLogger(__name__)

NATIVE_FORMATS: tuple[str, ...] = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%Y-%m-%d %H:%M:%S",
    "%Y/%m/%d %H:%M:%S",
    "%b %d, %Y",
    "%B %d, %Y",
)

_MONTHS: dict[str, int] = {
    name: index
    for index, name in enumerate(
        ("jan", "feb", "mar", "apr", "may", "jun", "jul", "aug", "sep", "oct", "nov", "dec"),
        start=1,
    )
}


@dataclass(frozen=True)
class DatePattern:
    """
    One non-native source format: a regex plus a match-to-datetime extractor.

    The extractor raises ``ValueError`` (or ``KeyError`` for an unknown
    month name) when the match is not a real calendar instant.
    """

    name: str
    regex: re.Pattern[str]
    extractor: Callable[[re.Match[str]], datetime]


def _to_24h(hour: int, meridiem: str) -> int:
    if not 1 <= hour <= 12:
        raise ValueError(f"hour {hour} is out of range for a 12-hour clock")
    meridiem = meridiem.upper()
    if meridiem == "PM" and hour < 12:
        return hour + 12
    if meridiem == "AM" and hour == 12:
        return 0
    return hour


def _extract_day_month_name_year(match: re.Match[str]) -> datetime:
    day, month_name, year_raw, hour, minute, meridiem = match.groups()
    year = int(year_raw)
    if len(year_raw) == 2:
        year += 2000
    return datetime(
        year,
        _MONTHS[month_name.lower()],
        int(day),
        _to_24h(int(hour), meridiem),
        int(minute),
    )


def _extract_us_24h(match: re.Match[str]) -> datetime:
    month, day, year, hour, minute = (int(part) for part in match.groups())
    return datetime(year, month, day, hour, minute)


def _extract_dotted(match: re.Match[str]) -> datetime:
    day, month, year, hour, minute, second = (int(part) for part in match.groups())
    return datetime(year, month, day, hour, minute, second)


def _extract_us_12h_seconds(match: re.Match[str]) -> datetime:
    month, day, year, hour, minute, second, meridiem = match.groups()
    return datetime(
        int(year),
        int(month),
        int(day),
        _to_24h(int(hour), meridiem),
        int(minute),
        int(second),
    )


DATE_PATTERNS: tuple[DatePattern, ...] = (
    DatePattern(
        name="dd/mmm/yy h:mm am|pm",
        regex=re.compile(
            r"^(\d{1,2})/([A-Za-z]{3})/(\d{4}|\d{2})\s+(\d{1,2}):(\d{2})\s*([AaPp][Mm])$"
        ),
        extractor=_extract_day_month_name_year,
    ),
    DatePattern(
        name="m/d/yyyy h:mm",
        regex=re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})\s+(\d{1,2}):(\d{2})$"),
        extractor=_extract_us_24h,
    ),
    DatePattern(
        name="dd.mm.yyyy hh:mm:ss",
        regex=re.compile(r"^(\d{1,2})\.(\d{1,2})\.(\d{4})\s+(\d{1,2}):(\d{2}):(\d{2})$"),
        extractor=_extract_dotted,
    ),
    DatePattern(
        name="m/d/yyyy h:mm:ss am|pm",
        regex=re.compile(
            r"^(\d{1,2})/(\d{1,2})/(\d{4})\s+(\d{1,2}):(\d{2}):(\d{2})\s*([AaPp][Mm])$"
        ),
        extractor=_extract_us_12h_seconds,
    ),
)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _parse_native(raw: str) -> datetime | None:
    normalized = raw[:-1] + "+00:00" if raw[-1:] in ("Z", "z") else raw
    try:
        return _as_utc(datetime.fromisoformat(normalized))
    except (ValueError, OverflowError):
        pass

    try:
        return _as_utc(parsedate_to_datetime(raw))
    except (TypeError, ValueError, IndexError, OverflowError):
        pass

    for fmt in NATIVE_FORMATS:
        try:
            return _as_utc(datetime.strptime(raw, fmt))
        except ValueError:
            continue
    return None


def parse_date(raw: str | None) -> datetime | None:
    """
    Resolve a free-form date string into an aware UTC datetime.

    Returns ``None`` when no known format matches; the caller decides
    whether that is fatal for the field.
    """

    if raw is None:
        return None
    value = raw.strip()
    if not value:
        return None

    parsed = _parse_native(value)
    if parsed is not None:
        return parsed

    for pattern in DATE_PATTERNS:
        match = pattern.regex.match(value)
        if match is None:
            continue
        try:
            return _as_utc(pattern.extractor(match))
        except (KeyError, ValueError):
            logger.debug("Date %r matched %s but is not a valid instant", value, pattern.name)
            continue

    date_part = value.split(" ", 1)[0]
    if date_part != value:
        return _parse_native(date_part)
    return None


def format_iso(value: datetime) -> str:
    """
    Render a datetime as ``YYYY-MM-DDTHH:MM:SS.mmmZ`` in UTC.
    """

    utc = _as_utc(value)
    # Year is always four digits, zero-padded below 1000.
    return (
        f"{utc.year:04d}-{utc.month:02d}-{utc.day:02d}"
        f"T{utc.hour:02d}:{utc.minute:02d}:{utc.second:02d}"
        f".{utc.microsecond // 1000:03d}Z"
    )


def normalize_date(raw: str | None) -> str | None:
    """
    Parse *raw* and return its canonical ISO string, or ``None``.
    """

    parsed = parse_date(raw)
    return format_iso(parsed) if parsed is not None else None
