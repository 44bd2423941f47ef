from __future__ import annotations

import unittest

from defect_insights.analytics.attention import (
    AttentionReason,
    attention_reasons,
    classify_attention,
    has_gherkin_steps,
    has_test_data_id,
)
from defect_insights.config import DEFAULT_TEST_DATA_KEYWORDS
from tests.factories import build_defect


class TestAttentionPredicates(unittest.TestCase):
    def test_test_data_keyword_or_long_number(self) -> None:
        kwargs = {"keywords": DEFAULT_TEST_DATA_KEYWORDS, "min_identifier_digits": 7}

        self.assertTrue(has_test_data_id("see shipment id abc", **kwargs))
        self.assertTrue(has_test_data_id("order 1234567 failed", **kwargs))
        self.assertFalse(has_test_data_id("order 123456 failed", **kwargs))

    def test_gherkin_needs_two_whole_word_keywords(self) -> None:
        self.assertTrue(has_gherkin_steps("given a cart when paying"))
        self.assertFalse(has_gherkin_steps("given a cart"))
        self.assertFalse(has_gherkin_steps("forgiven whenever"))


class TestAttentionReasons(unittest.TestCase):
    def test_gherkin_description_triggers_all_reasons(self) -> None:
        defect = build_defect(
            status="Open",
            description="Steps: Given a user, When they log in, Then error shown",
        )

        records = classify_attention([defect])

        self.assertEqual(len(records), 1)
        self.assertEqual(
            records[0].reason_for_attention,
            "Missing 'Expected', Missing 'Actual', Missing Test Data ID, cucumber steps present",
        )
        self.assertEqual(
            records[0].to_dict()["reason_for_attention"],
            records[0].reason_for_attention,
        )

    def test_well_formed_description_has_no_reasons(self) -> None:
        reasons = attention_reasons("Expected: 200\nActual: 500\nTest data: user42")

        self.assertEqual(reasons, ())

    def test_missing_description_lacks_structure(self) -> None:
        reasons = attention_reasons(None)

        self.assertEqual(
            reasons,
            (
                AttentionReason.MISSING_EXPECTED,
                AttentionReason.MISSING_ACTUAL,
                AttentionReason.MISSING_TEST_DATA,
            ),
        )

    def test_checks_are_case_insensitive(self) -> None:
        reasons = attention_reasons("EXPECTED ok ACTUAL broken OTM-55")

        self.assertEqual(reasons, ())

    def test_explicit_heuristics_override_settings(self) -> None:
        reasons = attention_reasons(
            "expected / actual / ref 12345",
            keywords=(),
            min_identifier_digits=5,
        )

        self.assertEqual(reasons, ())


class TestClassifyAttention(unittest.TestCase):
    def test_done_defects_are_never_flagged(self) -> None:
        defects = [
            build_defect(id="BUG-1", status="Done", description=None),
            build_defect(id="BUG-2", status="Open", description=None),
            build_defect(id="BUG-3", status="Open", description="Expected x Actual y 9999999"),
        ]

        records = classify_attention(defects)

        self.assertEqual([record.defect.id for record in records], ["BUG-2"])
        self.assertIs(records[0].defect, defects[1])


if __name__ == "__main__":
    unittest.main()
