"""
defect_insights/validators/mapping_validator.py

Validation for header map resolution.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Sequence

from defect_insights.domain.errors import HeaderMappingError, MissingHeaderError


@dataclass(frozen=True)
class MappingErrorDetail:
    """
    Structured mapping error detail.
    """

    code: str
    message: str
    canonical_field: str | None = None
    source_column: str | None = None
    context: dict[str, Any] | None = None


class MappingValidator:
    """
    Checks that every required canonical field is fed by some source column.
    """

    def __init__(
        self,
        *,
        required_fields: Sequence[str],
    ) -> None:
        self._required_fields = tuple(required_fields)

    def validate(
        self,
        *,
        mapped_fields: Iterable[str],
        source_headers: Sequence[str],
        pre_errors: Sequence[MappingErrorDetail] | None = None,
    ) -> None:
        """
        Raise a structured error when the mapping is unusable.

        All missing required fields are collected before raising so the
        caller can fix the file in one pass.
        """

        errors: list[MappingErrorDetail] = list(pre_errors or [])
        mapped = set(mapped_fields)

        missing = [field for field in self._required_fields if field not in mapped]
        for required in missing:
            errors.append(
                MappingErrorDetail(
                    code="required_field_unmapped",
                    message="Required canonical field is not mapped.",
                    canonical_field=required,
                    context={"source_headers": list(source_headers)},
                )
            )

        if not errors:
            return

        if missing:
            raise MissingHeaderError(
                message=(
                    "CSV is missing required headers for: "
                    f"{', '.join(missing)}."
                ),
                missing_fields=missing,
                errors=errors,
            )
        raise HeaderMappingError(
            message="Header mapping validation failed.",
            errors=errors,
        )
