"""
defect_insights/services/defect_export_service.py

CSV export of defect record sets.

The export uses the same headers a tracker export would carry, so the
output ingests back into an equal record set.
"""

from __future__ import annotations

import csv
import io
from typing import Sequence

from defect_insights.domain.defect import Defect

# Canonical field -> header written on export.
EXPORT_HEADERS: tuple[tuple[str, str], ...] = (
    ("id", "Issue key"),
    ("summary", "Summary"),
    ("description", "Description"),
    ("domain", "Custom field (Business Domain)"),
    ("status", "Status"),
    ("reported_by", "Reporter"),
    ("severity", "Severity"),
    ("priority", "Priority"),
    ("created_at", "Created"),
    ("updated", "Updated"),
)


def _extra_keys(defects: Sequence[Defect]) -> list[str]:
    seen: dict[str, None] = {}
    for defect in defects:
        for key in defect.extra_fields:
            seen.setdefault(key, None)
    return list(seen)


def export_defects_csv(defects: Sequence[Defect]) -> str:
    """
    Serialize *defects* to CSV text, canonical columns first.

    Pass-through columns follow in first-seen order; absent values are
    written as empty cells.
    """

    extra_keys = _extra_keys(defects)
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\r\n")
    writer.writerow([header for _, header in EXPORT_HEADERS] + extra_keys)
    for defect in defects:
        row = [getattr(defect, field) or "" for field, _ in EXPORT_HEADERS]
        row.extend(defect.extra_fields.get(key, "") for key in extra_keys)
        writer.writerow(row)
    return buffer.getvalue()


def csv_template() -> str:
    """
    Return an upload template: the header row only.
    """

    return export_defects_csv([])
