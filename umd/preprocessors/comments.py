# umd/preprocessors/comments.py
"""
Preprocessor that strips author comments.

    /* block comment, may span lines */
    // line comment (at line start or after whitespace)

A ``//`` directly after ``:`` or any other non-space character is kept, so
``https://example.com`` and ``[link](//cdn.example.com)`` survive. Table rows
keep inline ``//`` text since a comment would swallow the rest of the row.
Nothing inside code blocks or inline code is touched.
"""

import re
from typing import Optional

from ..config import get_config
from ..scanning import find_code_regions, map_prose, region_at

BLOCK_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)
LINE_COMMENT = re.compile(r"(?:^|(?<=[ \t]))//")


def _strip_line_comment(line: str) -> Optional[str]:
    """Return the line without its comment, or None if the whole line was one."""
    stripped = line.lstrip()
    if stripped.startswith("//"):
        return None
    if stripped.startswith("|") or "//" not in line:
        return line

    # Code spans only; the line may be an indented paragraph continuation
    indent = len(line) - len(stripped)
    spans = find_code_regions(stripped)
    for match in LINE_COMMENT.finditer(line):
        if region_at(match.start() - indent, spans) is None:
            return line[: match.start()].rstrip()
    return line


def _strip_line_comments(chunk: str) -> str:
    lines = []
    for line in chunk.split("\n"):
        kept = _strip_line_comment(line)
        if kept is not None:
            lines.append(kept)
    return "\n".join(lines)


def strip_comments(text: str, context: dict) -> str:
    """
    Remove comments from prose.

    Args:
        text: Markdown source
        context: Render context; honours the ``strip_comments`` option

    Returns:
        Markdown without comments
    """
    if not get_config(context)["strip_comments"]:
        return text

    text = map_prose(text, lambda segment: BLOCK_COMMENT.sub("", segment))
    return map_prose(text, _strip_line_comments, include_spans=False)


def comments_default(text: str, context: dict) -> str:
    """
    Default configuration for strip_comments.

    This is the function that should be registered in PREPROCESSORS.
    """
    return strip_comments(text, context)
