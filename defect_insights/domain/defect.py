"""
defect_insights/domain/defect.py

Domain models produced by the defect ingestion flow.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping


@dataclass(frozen=True)
class Defect:
    """
    One validated defect record.

    ``id``, ``summary`` and ``created_at`` are always non-empty.
    ``created_at`` and ``updated`` are ISO-8601 UTC strings
    (``YYYY-MM-DDTHH:MM:SS.mmmZ``). ``extra_fields`` is stored as a
    read-only mapping and does not take part in hashing.
    """

    id: str
    summary: str
    created_at: str
    description: str | None = None
    domain: str | None = None
    status: str | None = None
    reported_by: str | None = None
    severity: str | None = None
    priority: str | None = None
    updated: str | None = None
    extra_fields: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "extra_fields", MappingProxyType(dict(self.extra_fields)))

    def get(self, name: str) -> str | None:
        """
        Return a canonical attribute or pass-through column value by name.
        """

        if name != "extra_fields" and name in self.__dataclass_fields__:
            return getattr(self, name)
        return self.extra_fields.get(name)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "summary": self.summary,
            "description": self.description,
            "domain": self.domain,
            "status": self.status,
            "reported_by": self.reported_by,
            "severity": self.severity,
            "priority": self.priority,
            "created_at": self.created_at,
            "updated": self.updated,
            "extra_fields": dict(self.extra_fields),
        }


@dataclass(frozen=True)
class RowError:
    """
    One rejected CSV row detail.

    ``row_number`` is 1-based over the source document, so the header is
    row 1 and the first data row is row 2.
    """

    row_number: int
    message: str
    column: str | None = None
    value: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "row_number": self.row_number,
            "column": self.column,
            "message": self.message,
            "value": self.value,
        }


@dataclass(frozen=True)
class IngestionResult:
    """
    End-of-run ingestion result.
    """

    defects: tuple[Defect, ...]
    errors: tuple[RowError, ...] = ()
    rows_processed: int = 0
    rows_failed: int = 0
