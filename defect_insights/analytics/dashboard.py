"""
defect_insights/analytics/dashboard.py

Headline counts for the defect dashboard.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Sequence

from defect_insights.domain.defect import Defect
from defect_insights.parsing.date_normalizer import parse_date

READY_FOR_TESTING_STATUS = "ready for testing"
HIGH_SEVERITIES = frozenset({"high", "critical"})


@dataclass(frozen=True)
class DashboardSummary:
    total: int
    created_yesterday: int
    ready_for_testing: int
    high_severity: int

    def to_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "created_yesterday": self.created_yesterday,
            "ready_for_testing": self.ready_for_testing,
            "high_severity": self.high_severity,
        }


def _normalized(value: str | None) -> str:
    return (value or "").strip().casefold()


def dashboard_summary(defects: Sequence[Defect], *, today: date | None = None) -> DashboardSummary:
    """
    Count totals for the dashboard cards.

    "Yesterday" is the UTC day before *today* (defaults to the current UTC
    date).
    """

    if today is None:
        today = datetime.now(tz=timezone.utc).date()
    yesterday = today - timedelta(days=1)

    created_yesterday = 0
    for defect in defects:
        created = parse_date(defect.created_at)
        if created is not None and created.date() == yesterday:
            created_yesterday += 1

    return DashboardSummary(
        total=len(defects),
        created_yesterday=created_yesterday,
        ready_for_testing=sum(
            1 for defect in defects if _normalized(defect.status) == READY_FOR_TESTING_STATUS
        ),
        high_severity=sum(
            1 for defect in defects if _normalized(defect.severity) in HIGH_SEVERITIES
        ),
    )
