"""
defect_insights/analytics/attention.py

Heuristic "needs attention" classification of defect descriptions.

Rules evaluated (in order)
--------------------------
1. Missing 'Expected'    – description lacks the substring ``expected``.
2. Missing 'Actual'      – description lacks the substring ``actual``.
3. Missing Test Data ID  – no test-data keyword and no run of 7+ digits.
4. Cucumber steps        – at least two of ``given`` / ``when`` / ``then``
                           appear as whole words.

Rules 1-3 flag missing structure. Rule 4 flags content that is present
but reads like raw test steps; it is reported the same way.

Defects whose status is ``done`` are never flagged, and a defect with no
triggered rule is left out of the result.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Any, Iterable, Sequence

from defect_insights.analytics.trends import is_done
from defect_insights.config import get_attention_settings
from defect_insights.domain.defect import Defect

GHERKIN_KEYWORDS: tuple[str, ...] = ("given", "when", "then")
_GHERKIN_PATTERNS = tuple(re.compile(rf"\b{word}\b") for word in GHERKIN_KEYWORDS)
_MIN_GHERKIN_MATCHES = 2


class AttentionReason(str, enum.Enum):
    MISSING_EXPECTED = "Missing 'Expected'"
    MISSING_ACTUAL = "Missing 'Actual'"
    MISSING_TEST_DATA = "Missing Test Data ID"
    CUCUMBER_STEPS = "cucumber steps present"


@dataclass(frozen=True)
class AttentionRecord:
    """
    A defect paired with the reasons it was flagged.

    The source defect is referenced, not copied or modified.
    """

    defect: Defect
    reasons: tuple[AttentionReason, ...]

    @property
    def reason_for_attention(self) -> str:
        return ", ".join(reason.value for reason in self.reasons)

    def to_dict(self) -> dict[str, Any]:
        payload = self.defect.to_dict()
        payload["reason_for_attention"] = self.reason_for_attention
        return payload


def has_test_data_id(
    text: str,
    *,
    keywords: Sequence[str],
    min_identifier_digits: int,
) -> bool:
    """
    True when *text* (already case-folded) names test data.
    """

    if any(keyword in text for keyword in keywords):
        return True
    return re.search(rf"\d{{{min_identifier_digits},}}", text) is not None


def has_gherkin_steps(text: str) -> bool:
    matches = sum(1 for pattern in _GHERKIN_PATTERNS if pattern.search(text))
    return matches >= _MIN_GHERKIN_MATCHES


def attention_reasons(
    description: str | None,
    *,
    keywords: Sequence[str] | None = None,
    min_identifier_digits: int | None = None,
) -> tuple[AttentionReason, ...]:
    """
    Evaluate every rule against one description.

    Returns the triggered reasons in rule order; empty when the
    description is well formed.
    """

    settings = get_attention_settings()
    if keywords is None:
        keywords = settings.test_data_keywords
    if min_identifier_digits is None:
        min_identifier_digits = settings.min_identifier_digits

    text = (description or "").casefold()
    reasons: list[AttentionReason] = []
    if "expected" not in text:
        reasons.append(AttentionReason.MISSING_EXPECTED)
    if "actual" not in text:
        reasons.append(AttentionReason.MISSING_ACTUAL)
    if not has_test_data_id(
        text,
        keywords=[keyword.casefold() for keyword in keywords],
        min_identifier_digits=min_identifier_digits,
    ):
        reasons.append(AttentionReason.MISSING_TEST_DATA)
    if has_gherkin_steps(text):
        reasons.append(AttentionReason.CUCUMBER_STEPS)
    return tuple(reasons)


def classify_attention(
    defects: Iterable[Defect],
    *,
    keywords: Sequence[str] | None = None,
    min_identifier_digits: int | None = None,
) -> list[AttentionRecord]:
    """
    Return the open defects that need attention, in input order.
    """

    records: list[AttentionRecord] = []
    for defect in defects:
        if is_done(defect):
            continue
        reasons = attention_reasons(
            defect.description,
            keywords=keywords,
            min_identifier_digits=min_identifier_digits,
        )
        if reasons:
            records.append(AttentionRecord(defect=defect, reasons=reasons))
    return records
