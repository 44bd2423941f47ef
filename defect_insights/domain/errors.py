"""
defect_insights/domain/errors.py

Document-level exceptions raised by the defect ingestion pipeline.

Exception tree::

    DefectIngestionError
    ├── StructuralError
    │   └── HeaderMappingError
    │       └── MissingHeaderError
    └── EmptyResultError

Row-level problems are never raised; they are collected as
:class:`~defect_insights.domain.defect.RowError` values.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Sequence

if TYPE_CHECKING:
    from defect_insights.domain.defect import RowError
    from defect_insights.validators.mapping_validator import MappingErrorDetail


class DefectIngestionError(ValueError):
    """Base exception for fatal, document-level ingestion failures."""

    code = "ingestion_failed"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message}


class StructuralError(DefectIngestionError):
    """
    Raised when the document shape cannot be ingested at all.

    Examples:
        - empty file, or a header row with no data rows
        - undecodable bytes
        - mandatory headers missing after alias resolution
    """

    code = "structural_error"


class HeaderMappingError(StructuralError):
    """
    Raised when the header row cannot be resolved into a header map.
    """

    code = "header_mapping_error"

    def __init__(
        self,
        *,
        message: str,
        errors: Sequence[MappingErrorDetail] = (),
        missing_fields: Sequence[str] = (),
    ) -> None:
        super().__init__(message)
        self.missing_fields = tuple(missing_fields)
        self.errors = tuple(errors)

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "missing_fields": list(self.missing_fields),
            "errors": [
                {
                    "code": error.code,
                    "message": error.message,
                    "canonical_field": error.canonical_field,
                    "source_column": error.source_column,
                    "context": error.context,
                }
                for error in self.errors
            ],
        }


class MissingHeaderError(HeaderMappingError):
    """
    Raised when one or more mandatory canonical fields have no source column.

    Every missing field is reported at once.
    """

    code = "missing_headers"


class EmptyResultError(DefectIngestionError):
    """
    Raised when a structurally valid document yields zero accepted rows.

    Carries the row errors that explain why every row was rejected.
    """

    code = "empty_result"

    def __init__(self, message: str, *, errors: Sequence[RowError] = ()) -> None:
        super().__init__(message)
        self.errors = tuple(errors)

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "errors": [error.to_dict() for error in self.errors],
        }
