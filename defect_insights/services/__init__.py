"""
defect_insights/services package marker.
"""

from defect_insights.services.defect_export_service import csv_template, export_defects_csv
from defect_insights.services.defect_ingestion_service import (
    DefectIngestionService,
    get_defect_ingestion_service,
    ingest,
)

__all__ = [
    "DefectIngestionService",
    "csv_template",
    "export_defects_csv",
    "get_defect_ingestion_service",
    "ingest",
]
