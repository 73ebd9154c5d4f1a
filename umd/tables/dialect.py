# umd/tables/dialect.py
"""
Table block detection and dialect classification.

A block of consecutive lines starting with ``|`` (after at most three spaces)
is a table. It belongs to the extended dialect when any of these hold:

- it is a single line (a pipe table needs a header and a separator)
- its second line is not a separator row (``|---|:--:|``)
- it contains a ``|>`` or ``|^`` merge marker
- a cell carries a decoration prefix or a row carries an ``h``/``f`` marker

Anything else is a plain pipe table and is left to the markdown engine.
"""

import re
from typing import List, Tuple

from ..scanning import find_code_regions

_SEPARATOR = re.compile(r"\|?\s*:?-+:?\s*(?:\|\s*:?-+:?\s*)*\|?")
_MERGE_MARKER = re.compile(r"\|[>^](?=\s|\||$)")
_DECORATED_CELL = re.compile(
    r"\|\s*~(?!~)|\|\s*(?:COLOR\((?:[^()]|\([^()]*\))*\)|SIZE\([^()]*\)|TOP|MIDDLE|BOTTOM|BASELINE|LEFT|CENTER|RIGHT|JUSTIFY|TRUNCATE):"
)
_ROW_MARKER = re.compile(r"\|\s*[hf]\s*$")
# Four spaces of indentation make a code block, not a row
_TABLE_LINE = re.compile(r" {0,3}\|")


def is_table_line(line: str) -> bool:
    return bool(_TABLE_LINE.match(line))


def is_separator(line: str) -> bool:
    return bool(_SEPARATOR.fullmatch(line.strip())) and "|" in line


def is_extended_table(lines: List[str]) -> bool:
    if not lines:
        return False
    if len(lines) == 1:
        return True
    if not is_separator(lines[1]):
        return True

    for line in lines:
        stripped = line.strip()
        if _MERGE_MARKER.search(stripped) or _DECORATED_CELL.search(stripped) or _ROW_MARKER.search(stripped):
            return True

    return False


def find_table_blocks(text: str) -> List[Tuple[int, int]]:
    """
    Locate table blocks outside code blocks.

    Returns:
        (first_line, end_line) index pairs into ``text.split("\\n")``,
        end exclusive
    """
    lines = text.split("\n")
    code_regions = find_code_regions(text, include_spans=False)

    code_lines = set()
    offset = 0
    for index, line in enumerate(lines):
        for start, end in code_regions:
            if start <= offset < end:
                code_lines.add(index)
                break
        offset += len(line) + 1

    blocks = []
    index = 0
    while index < len(lines):
        if index in code_lines or not is_table_line(lines[index]):
            index += 1
            continue
        start = index
        while index < len(lines) and index not in code_lines and is_table_line(lines[index]):
            index += 1
        blocks.append((start, index))

    return blocks
