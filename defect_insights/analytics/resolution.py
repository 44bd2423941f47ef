"""
defect_insights/analytics/resolution.py

Resolution-time statistics over resolved defects.

A defect counts as resolved when its status is ``done`` and it carries an
``updated`` timestamp. Its resolution time is ``updated - created_at`` in
whole hours, truncated toward zero. Negative spans (updated before
created) are data errors and are left out.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from defect_insights.analytics.trends import is_done
from defect_insights.domain.defect import Defect
from defect_insights.parsing.date_normalizer import parse_date

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolutionStats:
    """
    Summary of resolution times in hours. All zero when ``count == 0``.
    """

    count: int
    average_hours: float
    min_hours: int
    max_hours: int

    def to_dict(self) -> dict[str, object]:
        return {
            "count": self.count,
            "average_hours": self.average_hours,
            "min_hours": self.min_hours,
            "max_hours": self.max_hours,
        }


def resolution_hours(defect: Defect) -> int | None:
    """
    Whole hours between creation and resolution, or ``None``.
    """

    if not is_done(defect) or not defect.updated:
        return None
    created = parse_date(defect.created_at)
    updated = parse_date(defect.updated)
    if created is None or updated is None:
        return None
    hours = int((updated - created).total_seconds() / 3600)
    return hours if hours >= 0 else None


def resolution_time_stats(
    defects: Iterable[Defect],
    *,
    domain: str | None = None,
) -> ResolutionStats:
    """
    Average, minimum and maximum resolution time, optionally for one domain.
    """

    durations: list[int] = []
    for defect in defects:
        if domain is not None and (defect.domain or "").strip() != domain.strip():
            continue
        hours = resolution_hours(defect)
        if hours is not None:
            durations.append(hours)

    if not durations:
        logger.debug("resolution_time_stats domain=%r: no resolved defects", domain)
        return ResolutionStats(count=0, average_hours=0.0, min_hours=0, max_hours=0)

    stats = ResolutionStats(
        count=len(durations),
        average_hours=sum(durations) / len(durations),
        min_hours=min(durations),
        max_hours=max(durations),
    )
    logger.debug(
        "resolution_time_stats domain=%r count=%d avg=%.2f",
        domain,
        stats.count,
        stats.average_hours,
    )
    return stats


def format_duration(hours: float) -> str:
    """
    ``"5.0 hours"`` below one day, otherwise ``"1.5 days"``.
    """

    if hours < 24:
        return f"{hours:.1f} hours"
    return f"{hours / 24:.1f} days"
