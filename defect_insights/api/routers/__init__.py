"""
defect_insights/api/routers package marker.
"""

from defect_insights.api.routers.analytics import router as analytics_router
from defect_insights.api.routers.defects import router as defects_router

__all__ = [
    "analytics_router",
    "defects_router",
]
