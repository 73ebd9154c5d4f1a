# umd/tables/__init__.py
"""
Extended table dialect: merge markers, header/footer rows and cell decorations.

``expand_tables`` swaps each extended table for a block placeholder whose
payload is the rendered table. Cell text is still markdown, so each cell
becomes a fragment paragraph placed after the table token; the engine
renders those paragraphs along with the rest of the document and
restoration slots the results back into their cells.
"""

import logging
from typing import List

from ..placeholders import PlaceholderRegistry, SpanKind
from .dialect import find_table_blocks, is_extended_table, is_separator
from .grid import Cell, Row, SpanRole, TableGrid, build_grid, parse_cell, split_row
from .render import TABLE_CLASSES, render_table

logger = logging.getLogger(__name__)

__all__ = [
    "Cell",
    "Row",
    "SpanRole",
    "TABLE_CLASSES",
    "TableGrid",
    "build_grid",
    "expand_tables",
    "find_table_blocks",
    "is_extended_table",
    "is_separator",
    "parse_cell",
    "render_table",
    "split_row",
]


def expand_tables(text: str, registry: PlaceholderRegistry) -> str:
    """
    Replace every extended-dialect table in ``text`` with a placeholder.

    Plain pipe tables are left exactly as they are.
    """
    lines = text.split("\n")
    blocks = find_table_blocks(text)
    if not blocks:
        return text

    output: List[str] = []
    cursor = 0
    expanded = 0

    for start, end in blocks:
        table_lines = lines[start:end]
        if not is_extended_table(table_lines):
            continue

        output.extend(lines[cursor:start])
        indent = table_lines[0][: len(table_lines[0]) - len(table_lines[0].lstrip())]

        grid = build_grid(table_lines)
        fragments: List[str] = []

        def cell_fragment(cell: Cell) -> str:
            token = registry.fragment(cell.raw_text)
            fragments.append(f"{indent}{token} {cell.raw_text}")
            return token

        token = registry.register(SpanKind.BLOCK, render_table(grid, cell_fragment))

        if output and output[-1].strip():
            output.append("")
        output.append(f"{indent}{token}")
        for fragment in fragments:
            output.append("")
            output.append(fragment)
        output.append("")

        cursor = end
        expanded += 1

    output.extend(lines[cursor:])
    if expanded:
        logger.debug(f"Expanded {expanded} extended table(s)")

    return "\n".join(output)
