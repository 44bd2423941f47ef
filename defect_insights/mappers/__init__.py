"""
defect_insights/mappers package marker.
"""

from defect_insights.mappers.header_mapper import (
    HeaderMap,
    HeaderMapper,
    MappedColumn,
    build_header_map,
    normalize_header,
)

__all__ = [
    "HeaderMap",
    "HeaderMapper",
    "MappedColumn",
    "build_header_map",
    "normalize_header",
]
