"""
Builders for domain objects used across the test suite.
"""

from __future__ import annotations

from typing import Any

from defect_insights.domain.defect import Defect


def build_defect(**overrides: Any) -> Defect:
    values: dict[str, Any] = {
        "id": "BUG-1",
        "summary": "Login fails",
        "created_at": "2024-05-30T10:00:00.000Z",
    }
    values.update(overrides)
    return Defect(**values)
