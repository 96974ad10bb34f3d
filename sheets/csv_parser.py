"""
CSV Parser Module for Sheet Exports
===================================

Turns the text of a spreadsheet CSV export into positional rows. The splitting
rules match what the published sheets produce, not the full CSV grammar:

- the first non-empty line is a header and is dropped;
- a double quote toggles "inside quotes" unless it follows a backslash;
- one leading and one trailing quote are stripped from every trimmed field.
"""

import re
from typing import List

_EDGE_QUOTES = re.compile(r'^"|"$')


def _clean_field(chars: List[str]) -> str:
    return _EDGE_QUOTES.sub("", "".join(chars).strip())


def split_row(row: str) -> List[str]:
    fields = []
    current = []
    in_quotes = False

    for i, char in enumerate(row):
        if char == '"' and (i == 0 or row[i - 1] != "\\"):
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append(_clean_field(current))
            current = []
        else:
            current.append(char)

    fields.append(_clean_field(current))
    return fields


def parse_csv(csv_text: str) -> List[List[str]]:
    lines = [line.strip() for line in csv_text.split("\n")]
    data_lines = [line for line in lines if line][1:]
    return [split_row(line) for line in data_lines]
