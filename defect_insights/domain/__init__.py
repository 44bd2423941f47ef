"""
defect_insights/domain package marker.
"""

from defect_insights.domain.defect import Defect, IngestionResult, RowError
from defect_insights.domain.errors import (
    DefectIngestionError,
    EmptyResultError,
    HeaderMappingError,
    MissingHeaderError,
    StructuralError,
)

__all__ = [
    "Defect",
    "DefectIngestionError",
    "EmptyResultError",
    "HeaderMappingError",
    "IngestionResult",
    "MissingHeaderError",
    "RowError",
    "StructuralError",
]
