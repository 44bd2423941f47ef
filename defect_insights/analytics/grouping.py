"""
defect_insights/analytics/grouping.py

Categorical grouping of defect record sets.

Blank or absent values fall into the ``Unassigned`` group. Results are
deterministic for a given input: ties in count order are broken by
group name.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

from defect_insights.domain.defect import Defect

logger = logging.getLogger(__name__)

UNASSIGNED = "Unassigned"

FIELD_ALIASES: dict[str, str] = {
    "reporter": "reported_by",
}


class GroupOrder(str, enum.Enum):
    """
    ``count`` suits charts, ``name`` suits tables.
    """

    COUNT = "count"
    NAME = "name"


@dataclass(frozen=True)
class GroupCount:
    name: str
    count: int

    def to_dict(self) -> dict[str, object]:
        return {"name": self.name, "count": self.count}


@dataclass(frozen=True)
class DefectGroup:
    name: str
    defects: tuple[Defect, ...]

    @property
    def count(self) -> int:
        return len(self.defects)


def resolve_field(field: str) -> str:
    """
    Map a user-facing field name onto the ``Defect`` attribute it reads.
    """

    name = field.strip().lower()
    return FIELD_ALIASES.get(name, name)


def group_key(defect: Defect, field: str) -> str:
    value = defect.get(field)
    if value is None or not value.strip():
        return UNASSIGNED
    return value.strip()


def _sort_key(order: GroupOrder, name: str, count: int) -> tuple:
    if order is GroupOrder.NAME:
        return (name.casefold(), name)
    return (-count, name.casefold(), name)


def group_defects(
    defects: Iterable[Defect],
    field: str,
    *,
    order: GroupOrder = GroupOrder.COUNT,
) -> list[DefectGroup]:
    """
    Partition *defects* by the value of *field*.

    Defects keep their input order inside each group.
    """

    attribute = resolve_field(field)
    buckets: dict[str, list[Defect]] = {}
    for defect in defects:
        buckets.setdefault(group_key(defect, attribute), []).append(defect)

    groups = [DefectGroup(name=name, defects=tuple(items)) for name, items in buckets.items()]
    groups.sort(key=lambda group: _sort_key(order, group.name, group.count))
    logger.debug("group_defects field=%r groups=%d", attribute, len(groups))
    return groups


def count_by(
    defects: Iterable[Defect],
    field: str,
    *,
    order: GroupOrder = GroupOrder.COUNT,
) -> list[GroupCount]:
    """
    Count defects per value of *field*.

    Example: severities ``High, High, Low, <blank>`` give
    ``[High: 2, Low: 1, Unassigned: 1]``.
    """

    return [
        GroupCount(name=group.name, count=group.count)
        for group in group_defects(defects, field, order=order)
    ]


def unique_values(defects: Sequence[Defect], field: str) -> list[str]:
    """
    Sorted distinct non-blank values of *field* (no ``Unassigned`` entry).
    """

    attribute = resolve_field(field)
    values = {
        value.strip()
        for value in (defect.get(attribute) for defect in defects)
        if value is not None and value.strip()
    }
    return sorted(values, key=lambda value: (value.casefold(), value))
