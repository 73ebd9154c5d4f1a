# umd/preprocessors/quote_blocks.py
"""
Preprocessor for the closed quote form.

    > Quoted text <     -> <blockquote class="umd-blockquote">Quoted text</blockquote>

A normal ``>`` blockquote without the closing ``<`` is left to the engine, as
are nested quotes (``> > text <``), which keep their levels.
"""

import re

from ..placeholders import SpanKind, get_registry
from ..scanning import map_prose
from .utils import append_paragraph

QUOTE_LINE = re.compile(r"^>[ \t]*(?!>)(\S.*?)[ \t]*<[ \t]*$")


def protect_quote_blocks(text: str, context: dict) -> str:
    registry = get_registry(context, text)

    def convert(chunk: str) -> str:
        output = []
        for line in chunk.split("\n"):
            match = QUOTE_LINE.match(line)
            if not match:
                output.append(line)
                continue
            token = registry.register(
                SpanKind.PREFIX,
                '<blockquote class="umd-blockquote">',
                closing="</blockquote>",
            )
            append_paragraph(output, f"{token} {match.group(1)}")
        return "\n".join(output)

    return map_prose(text, convert, include_spans=False)


def quote_blocks_default(text: str, context: dict) -> str:
    """
    Default configuration for protect_quote_blocks.

    This is the function that should be registered in PREPROCESSORS.
    """
    return protect_quote_blocks(text, context)
