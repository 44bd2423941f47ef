"""
defect_insights/analytics/trends.py

Time-bucketed defect trend series.

Bucket keys
-----------
    WEEK    Monday of the ISO week        ``YYYY-MM-DD``
    MONTH   calendar month                ``YYYY-MM``
    YEAR    calendar year                 ``YYYY``
    RANGE   one bucket per day inside an inclusive [start, end] window,
            ``YYYY-MM-DD``

Analysis types
--------------
    CREATION    bucket every defect by ``created_at``
    RESOLUTION  keep defects whose status is ``done`` and that carry an
                ``updated`` timestamp; bucket them by ``updated``

All dates are bucketed on their UTC calendar day. Keys sort
lexicographically in time order, so the output is sorted by key.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Sequence

from defect_insights.domain.defect import Defect
from defect_insights.parsing.date_normalizer import parse_date

logger = logging.getLogger(__name__)

DONE_STATUS = "done"

# Keys every bucket already carries; a domain split may not reuse them.
RESERVED_BUCKET_KEYS: frozenset[str] = frozenset({"date", "count"})


class TrendPeriod(str, enum.Enum):
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    RANGE = "range"


class AnalysisType(str, enum.Enum):
    CREATION = "creation"
    RESOLUTION = "resolution"


@dataclass(frozen=True)
class TrendBucket:
    """
    One period of a trend series.

    ``per_category`` is set only when a domain split was requested and
    then holds one counter per requested domain, zeros included.
    """

    key: str
    count: int
    per_category: dict[str, int] | None = None

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {"date": self.key, "count": self.count}
        if self.per_category:
            payload.update(self.per_category)
        return payload


def is_done(defect: Defect) -> bool:
    return (defect.status or "").strip().casefold() == DONE_STATUS


def period_key(day: date, period: TrendPeriod) -> str:
    """
    Return the bucket key of *day* for *period*.
    """

    if period is TrendPeriod.WEEK:
        return (day - timedelta(days=day.weekday())).isoformat()
    if period is TrendPeriod.MONTH:
        return f"{day.year:04d}-{day.month:02d}"
    if period is TrendPeriod.YEAR:
        return f"{day.year:04d}"
    return day.isoformat()


def _axis_day(defect: Defect, analysis: AnalysisType) -> date | None:
    if analysis is AnalysisType.RESOLUTION:
        if not is_done(defect) or not defect.updated:
            return None
        raw = defect.updated
    else:
        raw = defect.created_at
    parsed = parse_date(raw)
    return parsed.date() if parsed is not None else None


def build_trend(
    defects: Iterable[Defect],
    period: TrendPeriod | str,
    *,
    analysis: AnalysisType | str = AnalysisType.CREATION,
    domains: Sequence[str] | None = None,
    start: date | None = None,
    end: date | None = None,
) -> list[TrendBucket]:
    """
    Bucket defects into a time series.

    Parameters
    ----------
    period:
        Bucket width. ``RANGE`` requires both *start* and *end*.
    analysis:
        Which timestamp drives the time axis (see module docstring).
    domains:
        Optional whitelist. When given, every bucket also counts each listed
        domain separately; ``count`` stays the bucket total.
    start, end:
        Inclusive day bounds. Mandatory for ``RANGE``; for other periods they
        filter defects before bucketing when provided.

    Raises
    ------
    ValueError
        ``RANGE`` without bounds, *start* after *end*, or a domain named
        ``date`` or ``count``.
    """

    period = TrendPeriod(period)
    analysis = AnalysisType(analysis)
    if period is TrendPeriod.RANGE and (start is None or end is None):
        raise ValueError("A custom range trend requires both start and end dates.")
    if start is not None and end is not None and start > end:
        raise ValueError("Trend start date must not be after the end date.")

    categories = list(dict.fromkeys(domain.strip() for domain in domains or () if domain.strip()))
    reserved = sorted(RESERVED_BUCKET_KEYS.intersection(categories))
    if reserved:
        raise ValueError(f"Domain names {reserved} clash with trend bucket keys.")

    counts: dict[str, int] = {}
    per_category: dict[str, dict[str, int]] = {}

    for defect in defects:
        day = _axis_day(defect, analysis)
        if day is None:
            continue
        if start is not None and day < start:
            continue
        if end is not None and day > end:
            continue

        key = period_key(day, period)
        counts[key] = counts.get(key, 0) + 1
        if categories:
            series = per_category.setdefault(key, dict.fromkeys(categories, 0))
            domain = (defect.domain or "").strip()
            if domain in series:
                series[domain] += 1

    buckets = [
        TrendBucket(
            key=key,
            count=counts[key],
            per_category=per_category[key] if categories else None,
        )
        for key in sorted(counts)
    ]
    logger.debug(
        "build_trend period=%s analysis=%s domains=%d buckets=%d",
        period.value,
        analysis.value,
        len(categories),
        len(buckets),
    )
    return buckets
