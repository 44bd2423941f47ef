"""
defect_insights/mappers/header_mapper.py

Header mapping engine for defect CSV exports.

Source headers are normalized (lower-case, whitespace runs to ``_``,
anything outside ``[a-z0-9_]`` dropped) and resolved to canonical
``Defect`` field names through :data:`DEFAULT_COLUMN_ALIASES`. Headers
that match no alias pass through under their normalized key.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Mapping, Sequence

from defect_insights.validators.mapping_validator import (
    MappingErrorDetail,
    MappingValidator,
)

CANONICAL_FIELDS: tuple[str, ...] = (
    "id",
    "summary",
    "description",
    "domain",
    "status",
    "reported_by",
    "severity",
    "priority",
    "created_at",
    "updated",
)

REQUIRED_CANONICAL_FIELDS: tuple[str, ...] = (
    "id",
    "summary",
    "created_at",
)

DATE_FIELDS: frozenset[str] = frozenset({"created_at", "updated"})

# Order inside each tuple is priority: when several columns resolve to the
# same field, the lower-ranked alias is consulted first.
DEFAULT_COLUMN_ALIASES: dict[str, tuple[str, ...]] = {
    "id": ("issue_key", "issue_id", "id", "key", "defect_id", "bug_id"),
    "summary": ("summary", "title"),
    "created_at": ("created", "created_at", "created_date", "date_created"),
    "description": ("description",),
    "domain": ("custom_field_business_domain", "business_domain", "domain"),
    "status": ("status",),
    "reported_by": ("reporter", "reported_by"),
    "severity": ("severity", "custom_field_severity"),
    "priority": ("priority",),
    "updated": ("updated", "updated_at", "last_updated", "last_modified"),
}

_WHITESPACE_RE = re.compile(r"\s+")
_INVALID_CHARS_RE = re.compile(r"[^a-z0-9_]")

# Rank given to pass-through and manually overridden columns.
_OVERRIDE_RANK = -1
_PASS_THROUGH_RANK = 0


def normalize_header(header: str) -> str:
    """
    Normalize a column name for alias lookup.

    ``"Custom field (Business Domain)"`` becomes
    ``"custom_field_business_domain"``.
    """

    collapsed = _WHITESPACE_RE.sub("_", header.strip().lower())
    return _INVALID_CHARS_RE.sub("", collapsed)


@dataclass(frozen=True)
class MappedColumn:
    """
    One source column and the field it feeds.
    """

    index: int
    source_header: str
    normalized_key: str
    field: str
    rank: int

    @property
    def is_canonical(self) -> bool:
        return self.field in CANONICAL_FIELDS


@dataclass(frozen=True)
class HeaderMap:
    """
    Resolved header layout of one document.

    ``width`` is the header row length; data rows are padded or truncated
    to it.
    """

    columns: tuple[MappedColumn, ...]
    width: int

    def lookup(self, normalized_key: str) -> str | None:
        """
        Return the field fed by a normalized header key, or ``None``.
        """

        for column in self.columns:
            if column.normalized_key == normalized_key:
                return column.field
        return None

    def columns_for(self, field: str) -> tuple[MappedColumn, ...]:
        """
        Columns feeding *field*, in the order their values are consulted.
        """

        matches = [column for column in self.columns if column.field == field]
        return tuple(sorted(matches, key=lambda column: (column.rank, column.index)))

    @property
    def canonical_fields(self) -> frozenset[str]:
        return frozenset(column.field for column in self.columns if column.is_canonical)

    @property
    def pass_through_fields(self) -> tuple[str, ...]:
        seen: dict[str, None] = {}
        for column in self.columns:
            if not column.is_canonical:
                seen.setdefault(column.field, None)
        return tuple(seen)


class HeaderMapper:
    """
    Resolves a header row into a :class:`HeaderMap`.
    """

    def __init__(
        self,
        *,
        aliases: Mapping[str, Sequence[str]] | None = None,
        validator: MappingValidator | None = None,
    ) -> None:
        self._aliases: dict[str, tuple[str, ...]] = {
            canonical: tuple(values)
            for canonical, values in (aliases or DEFAULT_COLUMN_ALIASES).items()
        }
        self._alias_lookup: dict[str, tuple[str, int]] = {}
        for canonical, values in self._aliases.items():
            for rank, alias in enumerate(values, start=1):
                self._alias_lookup.setdefault(normalize_header(alias), (canonical, rank))
        self._validator = validator or MappingValidator(required_fields=REQUIRED_CANONICAL_FIELDS)

    def build(
        self,
        header_row: Sequence[str],
        *,
        manual_overrides: Mapping[str, str] | None = None,
    ) -> HeaderMap:
        """
        Build the header map for one document.

        ``manual_overrides`` maps canonical field -> source header and wins
        over the alias table. Raises
        :class:`~defect_insights.domain.errors.MissingHeaderError` listing
        every missing mandatory field.
        """

        override_fields: dict[str, str] = {}
        override_errors: list[MappingErrorDetail] = []
        normalized_headers = {normalize_header(header) for header in header_row}
        for canonical_field, source_column in (manual_overrides or {}).items():
            canonical = canonical_field.strip()
            normalized_source = normalize_header(source_column)
            if canonical not in CANONICAL_FIELDS:
                override_errors.append(
                    MappingErrorDetail(
                        code="invalid_override_field",
                        message="Manual override contains unknown canonical field.",
                        canonical_field=canonical,
                        source_column=source_column,
                    )
                )
                continue
            if normalized_source not in normalized_headers:
                override_errors.append(
                    MappingErrorDetail(
                        code="override_source_not_found",
                        message="Manual override points to a source column not present in CSV headers.",
                        canonical_field=canonical,
                        source_column=source_column,
                        context={"source_headers": list(header_row)},
                    )
                )
                continue
            override_fields[normalized_source] = canonical

        columns: list[MappedColumn] = []
        for index, header in enumerate(header_row):
            key = normalize_header(header)
            if not key:
                continue
            if key in override_fields:
                field, rank = override_fields[key], _OVERRIDE_RANK
            elif key in self._alias_lookup:
                field, rank = self._alias_lookup[key]
            else:
                field, rank = key, _PASS_THROUGH_RANK
            columns.append(
                MappedColumn(
                    index=index,
                    source_header=header,
                    normalized_key=key,
                    field=field,
                    rank=rank,
                )
            )

        header_map = HeaderMap(columns=tuple(columns), width=len(header_row))
        self._validator.validate(
            mapped_fields=header_map.canonical_fields,
            source_headers=tuple(header_row),
            pre_errors=override_errors,
        )
        return header_map


@lru_cache(maxsize=1)
def _default_mapper() -> HeaderMapper:
    return HeaderMapper()


def build_header_map(
    header_row: Sequence[str],
    *,
    manual_overrides: Mapping[str, str] | None = None,
) -> HeaderMap:
    """
    Build a header map with the default alias table.
    """

    return _default_mapper().build(header_row, manual_overrides=manual_overrides)
