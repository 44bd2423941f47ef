"""
defect_insights/parsing/csv_tokenizer.py

Character-level CSV tokenizer.

A two-state machine (``UNQUOTED`` / ``QUOTED``) walks the text once:

    UNQUOTED  ,           -> end field
              \\n \\r \\r\\n -> end field and row
              "           -> enter QUOTED, only at the start of a field
              other       -> append (a mid-field quote is literal)
    QUOTED    ""          -> append one literal quote
              "           -> back to UNQUOTED
              other       -> append (commas and newlines included)

Rows are returned as plain string lists. Width checks against the header
row belong to the row builder, not to this module.
"""

from __future__ import annotations

import enum

_BOM = "\ufeff"


class _State(enum.Enum):
    UNQUOTED = "unquoted"
    QUOTED = "quoted"


def tokenize(text: str) -> list[list[str]]:
    """
    Split CSV text into rows of raw string fields.

    Fully empty rows (no fields, or one whitespace-only field) are dropped
    so trailing blank lines never surface as data rows.
    """

    if text.startswith(_BOM):
        text = text[1:]

    rows: list[list[str]] = []
    row: list[str] = []
    chars: list[str] = []
    state = _State.UNQUOTED
    length = len(text)
    i = 0

    while i < length:
        char = text[i]

        if state is _State.QUOTED:
            if char == '"':
                if i + 1 < length and text[i + 1] == '"':
                    chars.append('"')
                    i += 1
                else:
                    state = _State.UNQUOTED
            else:
                chars.append(char)
        elif char == '"' and not chars:
            state = _State.QUOTED
        elif char == ",":
            row.append("".join(chars))
            chars = []
        elif char in "\r\n":
            row.append("".join(chars))
            rows.append(row)
            row = []
            chars = []
            if char == "\r" and i + 1 < length and text[i + 1] == "\n":
                i += 1
        else:
            chars.append(char)
        i += 1

    if chars or row:
        row.append("".join(chars))
        rows.append(row)

    return [candidate for candidate in rows if not _is_blank_row(candidate)]


def _is_blank_row(row: list[str]) -> bool:
    if not row:
        return True
    return len(row) == 1 and row[0].strip() == ""
