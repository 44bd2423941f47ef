"""
defect_insights/analytics package marker.

Pure views over an immutable defect record set. No function here mutates
its input, so views may be computed in any order or in parallel.
"""

from defect_insights.analytics.attention import (
    AttentionReason,
    AttentionRecord,
    attention_reasons,
    classify_attention,
)
from defect_insights.analytics.dashboard import DashboardSummary, dashboard_summary
from defect_insights.analytics.grouping import (
    UNASSIGNED,
    DefectGroup,
    GroupCount,
    GroupOrder,
    count_by,
    group_defects,
    unique_values,
)
from defect_insights.analytics.resolution import ResolutionStats, resolution_time_stats
from defect_insights.analytics.trends import AnalysisType, TrendBucket, TrendPeriod, build_trend

__all__ = [
    "AnalysisType",
    "AttentionReason",
    "AttentionRecord",
    "DashboardSummary",
    "DefectGroup",
    "GroupCount",
    "GroupOrder",
    "ResolutionStats",
    "TrendBucket",
    "TrendPeriod",
    "UNASSIGNED",
    "attention_reasons",
    "build_trend",
    "classify_attention",
    "count_by",
    "dashboard_summary",
    "group_defects",
    "resolution_time_stats",
    "unique_values",
]
