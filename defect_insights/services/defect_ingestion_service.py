"""
defect_insights/services/defect_ingestion_service.py

Service layer for defect CSV ingestion.

Pipeline
--------
    text -> tokenize() -> rows
         -> HeaderMapper.build(rows[0])         (once per document)
         -> DefectRowValidator.build(row)       (rows[1:], one pass)
         -> IngestionResult(defects, errors)

Row-level problems are collected as RowError values and never abort the
run. The run fails as a whole only when the document has no usable shape
(StructuralError / MissingHeaderError) or when no row survived
(EmptyResultError).
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Mapping

from defect_insights.config import get_ingestion_settings
from defect_insights.domain.defect import Defect, IngestionResult, RowError
from defect_insights.domain.errors import EmptyResultError, StructuralError
from defect_insights.mappers.header_mapper import HeaderMapper
from defect_insights.parsing.csv_tokenizer import tokenize
from defect_insights.validators.defect_row_validator import DefectRowValidator

logger = logging.getLogger(__name__)


class DefectIngestionService:
    """
    Coordinates CSV tokenizing, header mapping, and row validation.

    The service holds no per-document state, so one instance can serve
    any number of sequential or concurrent ingestions.
    """

    def __init__(
        self,
        *,
        max_validation_errors: int,
        log_validation_errors: bool,
        mapper: HeaderMapper | None = None,
        validator: DefectRowValidator | None = None,
    ) -> None:
        self._max_validation_errors = max(1, max_validation_errors)
        self._log_validation_errors = log_validation_errors
        self._mapper = mapper or HeaderMapper()
        self._validator = validator or DefectRowValidator()

    def ingest(
        self,
        text: str,
        *,
        manual_mapping: Mapping[str, str] | None = None,
    ) -> IngestionResult:
        """
        Parse a whole CSV document into validated defects plus row errors.

        Args:
            text:            Raw CSV text; the first row holds the headers.
            manual_mapping:  Optional canonical-field -> source-header overrides.

        Raises:
            StructuralError:    empty or header-only document.
            MissingHeaderError: mandatory headers absent after alias resolution.
            EmptyResultError:   every data row was rejected.
        """

        rows = tokenize(text)
        if not rows:
            raise StructuralError("CSV file is empty.")
        if len(rows) < 2:
            raise StructuralError("CSV file must have a header and at least one data row.")

        header_map = self._mapper.build(rows[0], manual_overrides=manual_mapping)

        defects: list[Defect] = []
        captured_errors: list[RowError] = []
        rows_failed = 0

        for row_number, values in enumerate(rows[1:], start=2):
            defect, row_errors = self._validator.build(
                values=values,
                header_map=header_map,
                row_number=row_number,
            )
            if row_errors or defect is None:
                rows_failed += 1
                for error in row_errors:
                    self._record_error(captured_errors, error)
                continue
            defects.append(defect)

        if not defects:
            raise EmptyResultError(
                "No valid defect data could be parsed from the file. "
                f"All {rows_failed} data row(s) were rejected.",
                errors=captured_errors,
            )

        logger.info(
            "Defect CSV ingested rows_processed=%d rows_failed=%d",
            len(defects),
            rows_failed,
        )
        return IngestionResult(
            defects=tuple(defects),
            errors=tuple(captured_errors),
            rows_processed=len(defects),
            rows_failed=rows_failed,
        )

    def ingest_bytes(
        self,
        data: bytes,
        *,
        manual_mapping: Mapping[str, str] | None = None,
    ) -> IngestionResult:
        """
        Decode an uploaded payload as UTF-8 (BOM tolerated) and ingest it.
        """

        try:
            text = data.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise StructuralError("CSV must be UTF-8 encoded.") from exc
        return self.ingest(text, manual_mapping=manual_mapping)

    def _record_error(
        self,
        captured_errors: list[RowError],
        error: RowError,
    ) -> None:
        if self._log_validation_errors:
            logger.warning(
                "CSV validation error row=%s column=%s message=%s value=%r",
                error.row_number,
                error.column,
                error.message,
                error.value,
            )

        if len(captured_errors) < self._max_validation_errors:
            captured_errors.append(error)


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_defect_ingestion_service() -> DefectIngestionService:
    """
    Build and cache the ingestion service with env-driven settings.
    """
    settings = get_ingestion_settings()
    return DefectIngestionService(
        max_validation_errors=settings.max_validation_errors,
        log_validation_errors=settings.log_validation_errors,
    )


def ingest(text: str) -> IngestionResult:
    """
    Ingest CSV text with the default service.
    """

    return get_defect_ingestion_service().ingest(text)
