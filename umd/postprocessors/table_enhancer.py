# umd/postprocessors/table_enhancer.py
"""
Postprocessor that gives engine-rendered tables the same base class as
extended tables.

This postprocessor:
- Adds the ``table`` class to every table that does not have it
- Leaves extended-dialect tables (``umd-table``) alone
- Drops the engine's ``align`` attribute in favour of ``text-*`` classes

Expected structure:
    | a | b |
    |:--|--:|
    | 1 | 2 |

    Output:
        <table class="table">
            <thead><tr><th class="text-start">a</th><th class="text-end">b</th></tr></thead>
            ...
        </table>
"""

import re

from bs4 import BeautifulSoup

from ..decorations import TEXT_ALIGN
from .utils import class_list

_ALIGN_STYLE = re.compile(r"text-align:\s*(left|center|right|justify)\s*;?", re.IGNORECASE)


def _alignment_class(cell) -> str:
    align = cell.get("align", "")
    if not align:
        match = _ALIGN_STYLE.search(cell.get("style", ""))
        align = match.group(1) if match else ""
    return TEXT_ALIGN.get(align.upper(), "")


def table_enhancer(html: str, context: dict) -> str:
    """
    Enhance engine tables with Bootstrap classes.

    Args:
        html: HTML string to process
        context: Context dictionary (unused but required for postprocessor signature)

    Returns:
        Processed HTML with enhanced tables
    """
    if "<table" not in html:
        return html

    soup = BeautifulSoup(html, "html.parser")

    for table in soup.find_all("table"):
        classes = class_list(table)
        if "umd-table" in classes:
            continue
        if "table" not in classes:
            table["class"] = ["table"] + classes

        for cell in table.find_all(["th", "td"]):
            alignment = _alignment_class(cell)
            if not alignment:
                continue
            cell_classes = class_list(cell)
            if alignment not in cell_classes:
                cell["class"] = cell_classes + [alignment]
            if "align" in cell.attrs:
                del cell["align"]
            if "style" in cell.attrs:
                style = _ALIGN_STYLE.sub("", cell["style"]).strip()
                if style:
                    cell["style"] = style
                else:
                    del cell["style"]

    return str(soup)


def table_enhancer_default(html: str, context: dict) -> str:
    """
    Default configuration for table_enhancer.

    This is the function that should be registered in POSTPROCESSORS.
    """
    return table_enhancer(html, context)
