"""
defect_insights/repositories package marker.
"""

from defect_insights.repositories.defect_snapshot_repository import (
    DefectSnapshot,
    DefectSnapshotRepository,
    get_defect_snapshot_repository,
)

__all__ = [
    "DefectSnapshot",
    "DefectSnapshotRepository",
    "get_defect_snapshot_repository",
]
