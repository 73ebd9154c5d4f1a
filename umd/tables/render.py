# umd/tables/render.py
"""
HTML rendering of a resolved table grid.

Output shape:

    <table class="table umd-table">
    <thead><tr><td colspan="2">...</td></tr></thead>
    <tbody>...</tbody>
    <tfoot>...</tfoot>
    </table>

Leading header rows form the head section and trailing footer rows the foot
section; a marked row anywhere else stays in the body. Cells default to
``td``; a ``~`` prefix (or a separator-derived header) makes them ``th``.
Only origin cells are rendered, and ``colspan``/``rowspan`` appear only when
greater than one.
"""

import html
from typing import Callable, List, Optional

from ..decorations import TEXT_ALIGN
from .grid import Cell, Row, TableGrid

TABLE_CLASSES = ["table", "umd-table"]

CellRenderer = Callable[[Cell], str]


def escape_cell(cell: Cell) -> str:
    return html.escape(cell.raw_text, quote=False)


def _cell_html(cell: Cell, grid: TableGrid, render_content: CellRenderer) -> str:
    tag = "th" if cell.is_header_cell else "td"

    extra_classes = []
    alignment = grid.alignments.get(cell.column)
    if alignment and not any(cls in TEXT_ALIGN.values() for cls in cell.decorations.classes):
        extra_classes.append(alignment)

    attributes = ""
    if cell.colspan > 1:
        attributes += f' colspan="{cell.colspan}"'
    if cell.rowspan > 1:
        attributes += f' rowspan="{cell.rowspan}"'
    attributes += cell.decorations.attributes(extra_classes)

    content = render_content(cell) if cell.raw_text else ""
    return f"<{tag}{attributes}>{content}</{tag}>"


def _rows_html(rows: List[Row], grid: TableGrid, render_content: CellRenderer) -> str:
    lines = []
    for row in rows:
        cells = "".join(_cell_html(cell, grid, render_content) for cell in row.origins)
        lines.append(f"<tr>{cells}</tr>")
    return "\n".join(lines)


def render_table(
    grid: TableGrid,
    render_content: Optional[CellRenderer] = None,
    extra_classes: Optional[List[str]] = None,
) -> str:
    """
    Render ``grid`` as an HTML table.

    Args:
        grid: Resolved table grid
        render_content: Produces a cell's inner HTML (default: escaped raw text)
        extra_classes: Classes appended to the table element

    Returns:
        The table markup
    """
    render_content = render_content or escape_cell
    rows = grid.rows

    head_end = 0
    while head_end < len(rows) and rows[head_end].is_header:
        head_end += 1
    foot_start = len(rows)
    while foot_start > head_end and rows[foot_start - 1].is_footer:
        foot_start -= 1

    classes = " ".join(TABLE_CLASSES + list(extra_classes or []))
    parts = [f'<table class="{classes}">']
    if head_end:
        parts.append(f"<thead>\n{_rows_html(rows[:head_end], grid, render_content)}\n</thead>")
    if foot_start > head_end:
        parts.append(f"<tbody>\n{_rows_html(rows[head_end:foot_start], grid, render_content)}\n</tbody>")
    if foot_start < len(rows):
        parts.append(f"<tfoot>\n{_rows_html(rows[foot_start:], grid, render_content)}\n</tfoot>")
    parts.append("</table>")

    return "\n".join(parts)
