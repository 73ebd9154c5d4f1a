# umd/tables/grid.py
"""
Grid construction for the extended table dialect.

    | ~Name    | ~Score |> | h
    | Alice    | 10 | 12   |
    |^         | 11 | 13   |
    | CENTER: Bob |> |> |

``|>`` merges a cell into the nearest origin to its left (colspan) and
``|^`` merges it into the origin above it (rowspan). A trailing ``h`` marks a
header row and a trailing ``f`` a footer row. ``~`` makes a cell a header
cell, and decoration prefixes (``COLOR(...)``, ``SIZE(...)``, alignment)
style it.

Rowspans are resolved with a per-column carry that lives only while one
grid is being built.
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from ..decorations import TEXT_ALIGN, Decoration, strip_prefixes
from .dialect import is_separator

logger = logging.getLogger(__name__)

COL_MERGE_MARKER = ">"
ROW_MERGE_MARKER = "^"

_MARKER_FOLLOW = re.compile(r"\s|\||\Z")
_ROW_SUFFIX = re.compile(r"\|\s*([hf])\s*\Z")


class SpanRole(Enum):
    ORIGIN = "origin"
    COL_MERGE = "col_merge"
    ROW_MERGE = "row_merge"
    BOTH = "both"


@dataclass
class Cell:
    raw_text: str
    decorations: Decoration = field(default_factory=Decoration)
    span_role: SpanRole = SpanRole.ORIGIN
    colspan: int = 1
    rowspan: int = 1
    is_header_cell: bool = False
    column: int = 0
    marker: Optional[str] = None

    @property
    def is_origin(self) -> bool:
        return self.span_role == SpanRole.ORIGIN


@dataclass
class Row:
    cells: List[Cell] = field(default_factory=list)
    is_header: bool = False
    is_footer: bool = False

    @property
    def origins(self) -> List[Cell]:
        return [cell for cell in self.cells if cell.is_origin]


@dataclass
class TableGrid:
    rows: List[Row] = field(default_factory=list)
    is_extended_dialect: bool = True
    # Column index -> text alignment class taken from a separator row
    alignments: Dict[int, str] = field(default_factory=dict)


def split_row(line: str) -> Tuple[List[Tuple[str, Optional[str]]], Optional[str]]:
    """
    Split one table line into raw cells.

    Returns:
        ([(text, marker), ...], row_marker) where marker is ``">"``, ``"^"``
        or None and row_marker is ``"h"``, ``"f"`` or None
    """
    text = line.strip()
    row_marker = None
    suffix = _ROW_SUFFIX.search(text)
    if suffix:
        row_marker = suffix.group(1)
        text = text[: suffix.start() + 1]

    cells: List[Tuple[str, Optional[str]]] = []
    current: Optional[List[str]] = None
    marker: Optional[str] = None

    def close():
        cells.append(("".join(current), marker))

    i = 0
    while i < len(text):
        char = text[i]
        if char == "\\" and text.startswith("|", i + 1):
            if current is None:
                current, marker = [], None
            current.append("|")
            i += 2
            continue

        if char == "|":
            follower = text[i + 1 : i + 2]
            if follower in (COL_MERGE_MARKER, ROW_MERGE_MARKER) and _MARKER_FOLLOW.match(text, i + 2):
                if current is not None and ("".join(current).strip() or marker):
                    close()
                    current = None
                if current is None:
                    current = []
                marker = follower
                i += 2
                continue

            if current is not None:
                close()
            current, marker = [], None
            i += 1
            continue

        if current is None:
            current, marker = [], None
        current.append(char)
        i += 1

    # Whatever follows the last bar is a cell only if it carries something
    if current is not None and ("".join(current).strip() or marker):
        close()

    return cells, row_marker


def parse_cell(text: str, marker: Optional[str] = None) -> Cell:
    """Build a cell, consuming ``~`` and decoration prefixes in any order."""
    text = text.strip()
    if marker and not text:
        return Cell(raw_text="", marker=marker)
    if marker:
        # A marker followed by text is just text
        text = f"{marker} {text}"

    decoration = Decoration()
    is_header_cell = False
    while True:
        if text.startswith("~") and not text.startswith("~~"):
            is_header_cell = True
            text = text[1:].lstrip()
            continue
        found, rest, count = strip_prefixes(text)
        if not count:
            break
        decoration.merge(found)
        text = rest.strip()

    return Cell(raw_text=text, decorations=decoration, is_header_cell=is_header_cell)


def parse_separator(line: str) -> Dict[int, str]:
    """Alignment classes per column from a GFM separator row."""
    alignments = {}
    cells = line.strip().strip("|").split("|")
    for index, cell in enumerate(cells):
        cell = cell.strip()
        if cell.startswith(":") and cell.endswith(":"):
            alignments[index] = TEXT_ALIGN["CENTER"]
        elif cell.endswith(":"):
            alignments[index] = TEXT_ALIGN["RIGHT"]
        elif cell.startswith(":"):
            alignments[index] = TEXT_ALIGN["LEFT"]
    return alignments


class _GridBuilder:
    """Resolves merge markers row by row against the per-column carry."""

    def __init__(self):
        # column -> origin whose region currently ends at the previous row
        self.carry: Dict[int, Cell] = {}

    def add_row(self, cells: List[Cell]) -> None:
        extended: Dict[int, Cell] = {}
        origins: List[Cell] = []
        last_origin: Optional[Cell] = None
        column = 0

        for cell in cells:
            if cell.marker and column in extended:
                # Part of a region already carried down in this row
                cell.span_role = SpanRole.BOTH
                cell.column = column
                column += 1
                last_origin = None
                continue

            if cell.marker == ROW_MERGE_MARKER:
                origin = self.carry.get(column)
                if origin is not None and origin.column == column:
                    origin.rowspan += 1
                    for covered in range(origin.column, origin.column + origin.colspan):
                        extended[covered] = origin
                    cell.span_role = SpanRole.ROW_MERGE
                    cell.column = column
                    column += 1
                    last_origin = None
                    continue
                logger.debug(f"Dangling row merge in column {column}; rendering an empty cell")

            elif cell.marker == COL_MERGE_MARKER:
                if last_origin is not None:
                    last_origin.colspan += 1
                    cell.span_role = SpanRole.COL_MERGE
                    cell.column = column
                    column += 1
                    continue
                logger.debug(f"Column merge with nothing to its left in column {column}; rendering an empty cell")

            while column in extended:
                column += 1

            cell.span_role = SpanRole.ORIGIN
            cell.column = column
            cell.marker = None
            origins.append(cell)
            last_origin = cell
            column += 1

        carry: Dict[int, Cell] = {}
        for origin in list(extended.values()) + origins:
            for covered in range(origin.column, origin.column + origin.colspan):
                carry[covered] = origin
        self.carry = carry


def build_grid(lines: List[str]) -> TableGrid:
    """
    Build the logical grid for one extended-dialect table.

    A GFM separator row inside the table is dropped: the row above it becomes
    a header row of header cells and its colons become column alignments.
    """
    grid = TableGrid()
    builder = _GridBuilder()

    for line in lines:
        if is_separator(line):
            grid.alignments = parse_separator(line)
            if grid.rows and not grid.rows[-1].is_header:
                grid.rows[-1].is_header = True
                for cell in grid.rows[-1].cells:
                    cell.is_header_cell = True
            continue

        raw_cells, row_marker = split_row(line)
        cells = [parse_cell(text, marker) for text, marker in raw_cells]
        builder.add_row(cells)
        grid.rows.append(Row(cells=cells, is_header=row_marker == "h", is_footer=row_marker == "f"))

    return grid
