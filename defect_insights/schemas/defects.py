"""
defect_insights/schemas/defects.py

Response schemas for defect ingestion endpoints.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from defect_insights.domain.defect import Defect, RowError


class DefectResponse(BaseModel):
    """
    API response model for one validated defect.
    """

    id: str = Field(..., min_length=1)
    summary: str = Field(..., min_length=1)
    description: str | None = None
    domain: str | None = None
    status: str | None = None
    reported_by: str | None = None
    severity: str | None = None
    priority: str | None = None
    created_at: str
    updated: str | None = None
    extra_fields: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_domain(cls, defect: Defect) -> "DefectResponse":
        return cls(**defect.to_dict())


class RowErrorResponse(BaseModel):
    """
    API response model for one row-level validation error.
    """

    row_number: int = Field(..., ge=1)
    message: str
    column: str | None = None
    value: str | None = None

    @classmethod
    def from_domain(cls, error: RowError) -> "RowErrorResponse":
        return cls(**error.to_dict())


class DefectUploadResponse(BaseModel):
    """
    API response model for a CSV upload.
    """

    rows_processed: int = Field(..., ge=0)
    rows_failed: int = Field(..., ge=0)
    uploaded_at: datetime
    validation_errors: list[RowErrorResponse] = Field(default_factory=list)


class DefectSnapshotResponse(BaseModel):
    """
    API response model for the current defect snapshot.
    """

    uploaded_at: datetime
    source_name: str | None = None
    defects: list[DefectResponse] = Field(default_factory=list)
    validation_errors: list[RowErrorResponse] = Field(default_factory=list)


class ClearDefectsResponse(BaseModel):
    cleared: bool
