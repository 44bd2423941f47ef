from __future__ import annotations

import unittest

from defect_insights.mappers.header_mapper import build_header_map
from defect_insights.validators.defect_row_validator import (
    EMPTY_ROW_MESSAGE,
    INVALID_DATE_MESSAGE,
    MISSING_VALUE_MESSAGE,
    DefectRowValidator,
)


class TestDefectRowValidator(unittest.TestCase):
    def setUp(self) -> None:
        self.validator = DefectRowValidator()
        self.header_map = build_header_map(
            ["Issue key", "Summary", "Created", "Updated", "Severity", "Sprint"]
        )

    def _build(self, values: list[str], row_number: int = 2):
        return self.validator.build(
            values=values,
            header_map=self.header_map,
            row_number=row_number,
        )

    def test_builds_defect_from_valid_row(self) -> None:
        defect, errors = self._build(
            [" BUG-1 ", "Login fails", "30/May/24 5:20 PM", "5/31/2024 08:00", "High", "Sprint 7"]
        )

        self.assertEqual(errors, [])
        self.assertEqual(defect.id, "BUG-1")
        self.assertEqual(defect.created_at, "2024-05-30T17:20:00.000Z")
        self.assertEqual(defect.updated, "2024-05-31T08:00:00.000Z")
        self.assertEqual(defect.severity, "High")
        self.assertIsNone(defect.status)
        self.assertEqual(defect.extra_fields, {"sprint": "Sprint 7"})

    def test_reports_every_problem_in_row(self) -> None:
        defect, errors = self._build(["", "Login fails", "yesterday", "", "", ""], row_number=7)

        self.assertIsNone(defect)
        self.assertEqual([error.column for error in errors], ["id", "created_at"])
        self.assertEqual(errors[0].message, MISSING_VALUE_MESSAGE)
        self.assertEqual(errors[1].message, INVALID_DATE_MESSAGE)
        self.assertEqual(errors[1].value, "yesterday")
        self.assertTrue(all(error.row_number == 7 for error in errors))

    def test_blank_row_yields_single_error(self) -> None:
        defect, errors = self._build(["", "  ", "", "", "", ""])

        self.assertIsNone(defect)
        self.assertEqual(len(errors), 1)
        self.assertEqual(errors[0].message, EMPTY_ROW_MESSAGE)
        self.assertIsNone(errors[0].column)

    def test_short_row_is_padded(self) -> None:
        defect, errors = self._build(["BUG-2", "Short", "2024-05-30"])

        self.assertEqual(errors, [])
        self.assertIsNone(defect.updated)
        self.assertIsNone(defect.severity)
        self.assertEqual(defect.extra_fields, {})

    def test_long_row_is_truncated(self) -> None:
        defect, errors = self._build(
            ["BUG-3", "Long", "2024-05-30", "", "Low", "", "overflow", "more"]
        )

        self.assertEqual(errors, [])
        self.assertEqual(defect.severity, "Low")
        self.assertNotIn("overflow", defect.extra_fields.values())

    def test_unparseable_optional_date_is_dropped(self) -> None:
        defect, errors = self._build(["BUG-4", "Odd update", "2024-05-30", "soon", "", ""])

        self.assertEqual(errors, [])
        self.assertIsNone(defect.updated)

    def test_lower_ranked_alias_fills_blank_value(self) -> None:
        header_map = build_header_map(["Issue key", "Issue id", "Summary", "Created"])

        defect, errors = self.validator.build(
            values=["", "10001", "Fallback id", "2024-05-30"],
            header_map=header_map,
            row_number=2,
        )

        self.assertEqual(errors, [])
        self.assertEqual(defect.id, "10001")


if __name__ == "__main__":
    unittest.main()
