"""
defect_insights/api/routers/analytics.py

Read-only analytics over the current defect snapshot.

Every endpoint recomputes its view from the immutable snapshot; nothing
is cached or persisted.
"""

from __future__ import annotations

import enum
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status

from defect_insights.analytics.attention import classify_attention
from defect_insights.analytics.dashboard import dashboard_summary
from defect_insights.analytics.grouping import GroupOrder, count_by, unique_values
from defect_insights.analytics.resolution import format_duration, resolution_time_stats
from defect_insights.analytics.trends import AnalysisType, TrendPeriod, build_trend
from defect_insights.api.dependencies import get_current_snapshot
from defect_insights.repositories.defect_snapshot_repository import DefectSnapshot
from defect_insights.schemas.analytics import (
    AttentionDefectResponse,
    DashboardSummaryResponse,
    GroupCountResponse,
    ResolutionStatsResponse,
    TrendPointResponse,
)

router = APIRouter(prefix="/analytics", tags=["analytics"])


class GroupField(str, enum.Enum):
    SEVERITY = "severity"
    PRIORITY = "priority"
    STATUS = "status"
    DOMAIN = "domain"
    REPORTER = "reporter"


@router.get("/groups", response_model=list[GroupCountResponse])
def grouped_counts(
    field: GroupField = Query(default=GroupField.SEVERITY),
    order: GroupOrder = Query(default=GroupOrder.COUNT),
    snapshot: DefectSnapshot = Depends(get_current_snapshot),
) -> list[GroupCountResponse]:
    """
    Count defects per value of one categorical field.
    """

    return [
        GroupCountResponse(name=group.name, count=group.count)
        for group in count_by(snapshot.defects, field.value, order=order)
    ]


@router.get("/trends", response_model=list[TrendPointResponse])
def trend_series(
    period: TrendPeriod = Query(default=TrendPeriod.WEEK),
    analysis: AnalysisType = Query(default=AnalysisType.CREATION),
    domains: list[str] | None = Query(default=None),
    start: date | None = Query(default=None),
    end: date | None = Query(default=None),
    snapshot: DefectSnapshot = Depends(get_current_snapshot),
) -> list[TrendPointResponse]:
    """
    Bucket defects by week, month, year, or a custom day range.
    """

    try:
        buckets = build_trend(
            snapshot.defects,
            period,
            analysis=analysis,
            domains=domains,
            start=start,
            end=end,
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    return [TrendPointResponse(**bucket.to_dict()) for bucket in buckets]


@router.get("/attention", response_model=list[AttentionDefectResponse])
def attention_defects(
    snapshot: DefectSnapshot = Depends(get_current_snapshot),
) -> list[AttentionDefectResponse]:
    """
    Open defects whose descriptions lack the expected structure.
    """

    return [
        AttentionDefectResponse(**record.to_dict())
        for record in classify_attention(snapshot.defects)
    ]


@router.get("/resolution-time", response_model=ResolutionStatsResponse)
def resolution_time(
    domain: str | None = Query(default=None),
    snapshot: DefectSnapshot = Depends(get_current_snapshot),
) -> ResolutionStatsResponse:
    stats = resolution_time_stats(snapshot.defects, domain=domain)
    return ResolutionStatsResponse(
        **stats.to_dict(),
        average_display=format_duration(stats.average_hours),
    )


@router.get("/dashboard", response_model=DashboardSummaryResponse)
def dashboard(
    today: date | None = Query(default=None),
    snapshot: DefectSnapshot = Depends(get_current_snapshot),
) -> DashboardSummaryResponse:
    return DashboardSummaryResponse(**dashboard_summary(snapshot.defects, today=today).to_dict())


@router.get("/domains", response_model=list[str])
def list_domains(snapshot: DefectSnapshot = Depends(get_current_snapshot)) -> list[str]:
    return unique_values(snapshot.defects, "domain")
