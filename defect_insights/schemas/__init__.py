"""
defect_insights/schemas package marker.
"""

from defect_insights.schemas.analytics import (
    AttentionDefectResponse,
    DashboardSummaryResponse,
    GroupCountResponse,
    ResolutionStatsResponse,
    TrendPointResponse,
)
from defect_insights.schemas.defects import (
    ClearDefectsResponse,
    DefectResponse,
    DefectSnapshotResponse,
    DefectUploadResponse,
    RowErrorResponse,
)

__all__ = [
    "AttentionDefectResponse",
    "ClearDefectsResponse",
    "DashboardSummaryResponse",
    "DefectResponse",
    "DefectSnapshotResponse",
    "DefectUploadResponse",
    "GroupCountResponse",
    "ResolutionStatsResponse",
    "RowErrorResponse",
    "TrendPointResponse",
]
