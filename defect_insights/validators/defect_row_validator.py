"""
defect_insights/validators/defect_row_validator.py

Row-level validation and type parsing for defect CSV ingestion.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from defect_insights.domain.defect import Defect, RowError
from defect_insights.mappers.header_mapper import (
    CANONICAL_FIELDS,
    DATE_FIELDS,
    HeaderMap,
)
from defect_insights.parsing.date_normalizer import normalize_date

logger = logging.getLogger(__name__)

MISSING_VALUE_MESSAGE = "Required value is missing."
INVALID_DATE_MESSAGE = "Invalid or unrecognized date format."
EMPTY_ROW_MESSAGE = "Completely empty rows are not allowed."

_OPTIONAL_TEXT_FIELDS: tuple[str, ...] = tuple(
    field
    for field in CANONICAL_FIELDS
    if field not in {"id", "summary"} and field not in DATE_FIELDS
)


class DefectRowValidator:
    """
    Builds a :class:`Defect` from one tokenized row, or explains why not.
    """

    def build(
        self,
        *,
        values: Sequence[str],
        header_map: HeaderMap,
        row_number: int,
    ) -> tuple[Defect | None, list[RowError]]:
        """
        Validate and parse one data row against the document header map.

        Short rows are padded with empty strings and long rows are truncated
        to the header width. Every problem in the row is reported.
        """

        cells = self._fit_to_width(values, header_map.width)
        if all(self._is_blank(cell) for cell in cells):
            return None, [RowError(row_number=row_number, message=EMPTY_ROW_MESSAGE)]

        errors: list[RowError] = []

        defect_id = self._parse_required_string(
            value=self._first_value(cells, header_map, "id"),
            row_number=row_number,
            column="id",
            errors=errors,
        )
        summary = self._parse_required_string(
            value=self._first_value(cells, header_map, "summary"),
            row_number=row_number,
            column="summary",
            errors=errors,
        )
        created_at = self._parse_required_date(
            value=self._first_value(cells, header_map, "created_at"),
            row_number=row_number,
            column="created_at",
            errors=errors,
        )
        updated = self._parse_optional_date(
            value=self._first_value(cells, header_map, "updated"),
            row_number=row_number,
        )

        if errors:
            return None, errors

        optional = {
            field: self._parse_optional_string(self._first_value(cells, header_map, field))
            for field in _OPTIONAL_TEXT_FIELDS
        }
        extra_fields: dict[str, str] = {}
        for field in header_map.pass_through_fields:
            value = self._parse_optional_string(self._first_value(cells, header_map, field))
            if value is not None:
                extra_fields[field] = value

        return (
            Defect(
                id=defect_id,
                summary=summary,
                created_at=created_at,
                updated=updated,
                extra_fields=extra_fields,
                **optional,
            ),
            [],
        )

    def _first_value(
        self,
        cells: Sequence[str],
        header_map: HeaderMap,
        field: str,
    ) -> str | None:
        for column in header_map.columns_for(field):
            value = cells[column.index]
            if not self._is_blank(value):
                return value
        return None

    def _parse_required_string(
        self,
        *,
        value: str | None,
        row_number: int,
        column: str,
        errors: list[RowError],
    ) -> str:
        if self._is_blank(value):
            errors.append(
                RowError(
                    row_number=row_number,
                    column=column,
                    message=MISSING_VALUE_MESSAGE,
                    value=value,
                )
            )
            return ""
        return str(value).strip()

    def _parse_required_date(
        self,
        *,
        value: str | None,
        row_number: int,
        column: str,
        errors: list[RowError],
    ) -> str:
        if self._is_blank(value):
            errors.append(
                RowError(
                    row_number=row_number,
                    column=column,
                    message=MISSING_VALUE_MESSAGE,
                    value=value,
                )
            )
            return ""

        normalized = normalize_date(value)
        if normalized is None:
            errors.append(
                RowError(
                    row_number=row_number,
                    column=column,
                    message=INVALID_DATE_MESSAGE,
                    value=value,
                )
            )
            return ""
        return normalized

    def _parse_optional_date(self, *, value: str | None, row_number: int) -> str | None:
        if self._is_blank(value):
            return None
        normalized = normalize_date(value)
        if normalized is None:
            logger.debug(
                "Dropping unparseable optional date row=%s value=%r", row_number, value
            )
        return normalized

    def _parse_optional_string(self, value: str | None) -> str | None:
        if self._is_blank(value):
            return None
        return str(value).strip()

    @staticmethod
    def _fit_to_width(values: Sequence[str], width: int) -> list[str]:
        cells = list(values[:width])
        if len(cells) < width:
            cells.extend([""] * (width - len(cells)))
        return cells

    @staticmethod
    def _is_blank(value: Any) -> bool:
        if value is None:
            return True
        return str(value).strip() == ""
