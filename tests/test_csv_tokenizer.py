"""
tests/test_csv_tokenizer.py

Unit tests for the character-level CSV tokenizer.
"""

from __future__ import annotations

from defect_insights.parsing.csv_tokenizer import tokenize


class TestQuotedFields:
    def test_quoted_field_keeps_commas_newlines_and_escaped_quotes(self) -> None:
        assert tokenize('"a,b\nc""d"') == [['a,b\nc"d']]

    def test_newline_inside_quotes_is_not_a_row_boundary(self) -> None:
        text = 'id,description\nBUG-1,"line one\nline two"\nBUG-2,plain\n'

        assert tokenize(text) == [
            ["id", "description"],
            ["BUG-1", "line one\nline two"],
            ["BUG-2", "plain"],
        ]

    def test_empty_quoted_field(self) -> None:
        assert tokenize('a,"",c') == [["a", "", "c"]]

    def test_quote_in_middle_of_unquoted_field_is_literal(self) -> None:
        assert tokenize('ab"c,d') == [['ab"c', "d"]]

    def test_text_after_closing_quote_is_appended(self) -> None:
        assert tokenize('"ab"c,d') == [["abc", "d"]]


class TestRowBoundaries:
    def test_crlf_and_lf_line_endings(self) -> None:
        assert tokenize("a,b\r\nc,d\ne,f") == [["a", "b"], ["c", "d"], ["e", "f"]]

    def test_bare_carriage_return_ends_row(self) -> None:
        assert tokenize("a\rb") == [["a"], ["b"]]

    def test_end_of_input_flushes_pending_field(self) -> None:
        assert tokenize("a,b") == [["a", "b"]]
        assert tokenize("a,") == [["a", ""]]

    def test_trailing_blank_lines_are_dropped(self) -> None:
        assert tokenize("a,b\n\n\r\n") == [["a", "b"]]

    def test_whitespace_only_line_is_dropped(self) -> None:
        assert tokenize("a\n   \nb") == [["a"], ["b"]]

    def test_row_of_empty_fields_is_kept(self) -> None:
        assert tokenize("a,b\n,\n") == [["a", "b"], ["", ""]]

    def test_rows_of_different_width_are_returned_as_is(self) -> None:
        assert tokenize("a,b,c\n1\n1,2,3,4") == [["a", "b", "c"], ["1"], ["1", "2", "3", "4"]]


class TestDocumentEdges:
    def test_empty_text(self) -> None:
        assert tokenize("") == []

    def test_leading_byte_order_mark_is_dropped(self) -> None:
        assert tokenize("\ufeffIssue key,Summary") == [["Issue key", "Summary"]]

    def test_field_whitespace_is_preserved(self) -> None:
        assert tokenize(" a , b ") == [[" a ", " b "]]
