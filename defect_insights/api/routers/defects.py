"""
defect_insights/api/routers/defects.py

Defect upload and snapshot endpoints.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, UploadFile, status

from defect_insights.api.dependencies import get_csv_upload, get_current_snapshot
from defect_insights.config import get_ingestion_settings
from defect_insights.domain.errors import DefectIngestionError
from defect_insights.repositories.defect_snapshot_repository import (
    DefectSnapshot,
    DefectSnapshotRepository,
    get_defect_snapshot_repository,
)
from defect_insights.schemas.defects import (
    ClearDefectsResponse,
    DefectResponse,
    DefectSnapshotResponse,
    DefectUploadResponse,
    RowErrorResponse,
)
from defect_insights.services.defect_export_service import csv_template, export_defects_csv
from defect_insights.services.defect_ingestion_service import (
    DefectIngestionService,
    get_defect_ingestion_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/defects", tags=["defects"])


@router.post("/upload-csv", response_model=DefectUploadResponse)
def upload_csv(
    file: UploadFile = Depends(get_csv_upload),
    ingestion_service: DefectIngestionService = Depends(get_defect_ingestion_service),
    repository: DefectSnapshotRepository = Depends(get_defect_snapshot_repository),
) -> DefectUploadResponse:
    """
    Ingest one CSV export and replace the current defect snapshot.

    The previous snapshot stays in place when ingestion fails.
    """

    max_bytes = get_ingestion_settings().max_upload_bytes
    try:
        payload = file.file.read(max_bytes + 1)
    finally:
        file.file.close()

    if len(payload) > max_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"CSV upload exceeds the {max_bytes} byte limit.",
        )

    try:
        result = ingestion_service.ingest_bytes(payload)
    except DefectIngestionError as exc:
        logger.warning("CSV upload rejected filename=%r: %s", file.filename, exc.message)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=exc.to_dict(),
        ) from exc

    snapshot = repository.replace(result, source_name=file.filename)
    return DefectUploadResponse(
        rows_processed=result.rows_processed,
        rows_failed=result.rows_failed,
        uploaded_at=snapshot.uploaded_at,
        validation_errors=[RowErrorResponse.from_domain(error) for error in result.errors],
    )


@router.get("/latest", response_model=DefectSnapshotResponse)
def latest_defects(
    snapshot: DefectSnapshot = Depends(get_current_snapshot),
) -> DefectSnapshotResponse:
    """
    Return the most recently uploaded defect set.
    """

    return DefectSnapshotResponse(
        uploaded_at=snapshot.uploaded_at,
        source_name=snapshot.source_name,
        defects=[DefectResponse.from_domain(defect) for defect in snapshot.defects],
        validation_errors=[RowErrorResponse.from_domain(error) for error in snapshot.errors],
    )


@router.delete("", response_model=ClearDefectsResponse)
def clear_defects(
    repository: DefectSnapshotRepository = Depends(get_defect_snapshot_repository),
) -> ClearDefectsResponse:
    return ClearDefectsResponse(cleared=repository.clear())


@router.get("/export")
def export_defects(snapshot: DefectSnapshot = Depends(get_current_snapshot)) -> Response:
    """
    Download the current defect set as CSV.
    """

    return Response(
        content=export_defects_csv(snapshot.defects),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="defects.csv"'},
    )


@router.get("/template")
def download_template() -> Response:
    return Response(
        content=csv_template(),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="defects-template.csv"'},
    )
