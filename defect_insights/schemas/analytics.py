"""
defect_insights/schemas/analytics.py

Response schemas for analytics endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from defect_insights.schemas.defects import DefectResponse


class GroupCountResponse(BaseModel):
    name: str
    count: int = Field(..., ge=0)


class TrendPointResponse(BaseModel):
    """
    One trend bucket. Per-domain counters are extra keys next to ``count``.
    """

    model_config = ConfigDict(extra="allow")

    date: str
    count: int = Field(..., ge=0)


class AttentionDefectResponse(DefectResponse):
    reason_for_attention: str = Field(..., min_length=1)


class ResolutionStatsResponse(BaseModel):
    count: int = Field(..., ge=0)
    average_hours: float = Field(..., ge=0.0)
    min_hours: int = Field(..., ge=0)
    max_hours: int = Field(..., ge=0)
    average_display: str


class DashboardSummaryResponse(BaseModel):
    total: int = Field(..., ge=0)
    created_yesterday: int = Field(..., ge=0)
    ready_for_testing: int = Field(..., ge=0)
    high_severity: int = Field(..., ge=0)
