from __future__ import annotations

from datetime import date

import pytest

from defect_insights.analytics.dashboard import dashboard_summary
from defect_insights.analytics.resolution import (
    format_duration,
    resolution_hours,
    resolution_time_stats,
)
from tests.factories import build_defect


def _resolved(created_at: str, updated: str, **overrides):
    return build_defect(status="Done", created_at=created_at, updated=updated, **overrides)


def test_resolution_hours_truncates_toward_zero() -> None:
    defect = _resolved("2024-05-30T10:00:00.000Z", "2024-05-31T11:59:00.000Z")

    assert resolution_hours(defect) == 25


def test_unresolved_or_negative_spans_are_skipped() -> None:
    assert resolution_hours(build_defect(status="Open", updated="2024-06-01T00:00:00.000Z")) is None
    assert resolution_hours(build_defect(status="Done")) is None
    assert resolution_hours(_resolved("2024-05-30T10:00:00.000Z", "2024-05-29T10:00:00.000Z")) is None


def test_resolution_stats_by_domain() -> None:
    defects = [
        _resolved("2024-05-01T00:00:00.000Z", "2024-05-01T10:00:00.000Z", domain="Billing"),
        _resolved("2024-05-01T00:00:00.000Z", "2024-05-03T00:00:00.000Z", domain="Billing"),
        _resolved("2024-05-01T00:00:00.000Z", "2024-05-11T00:00:00.000Z", domain="Reporting"),
    ]

    billing = resolution_time_stats(defects, domain="Billing")
    overall = resolution_time_stats(defects)

    assert billing.to_dict() == {
        "count": 2,
        "average_hours": 29.0,
        "min_hours": 10,
        "max_hours": 48,
    }
    assert overall.count == 3
    assert overall.max_hours == 240


def test_resolution_stats_empty() -> None:
    stats = resolution_time_stats([build_defect(status="Open")])

    assert stats.count == 0
    assert stats.average_hours == 0.0


@pytest.mark.parametrize(
    ("hours", "expected"),
    [(0, "0.0 hours"), (5, "5.0 hours"), (23.9, "23.9 hours"), (24, "1.0 days"), (36, "1.5 days")],
)
def test_format_duration(hours: float, expected: str) -> None:
    assert format_duration(hours) == expected


def test_dashboard_summary() -> None:
    defects = [
        build_defect(created_at="2024-06-03T08:00:00.000Z", severity="Critical", status="Ready for Testing"),
        build_defect(created_at="2024-06-03T23:59:00.000Z", severity="high"),
        build_defect(created_at="2024-06-04T00:00:00.000Z", severity="Low", status="ready for testing "),
        build_defect(created_at="2024-06-02T12:00:00.000Z"),
    ]

    summary = dashboard_summary(defects, today=date(2024, 6, 4))

    assert summary.to_dict() == {
        "total": 4,
        "created_yesterday": 2,
        "ready_for_testing": 2,
        "high_severity": 2,
    }
