# umd/preprocessors/header_ids.py
"""
Preprocessor for custom heading identifiers.

    ## Installation {#install}

The ``{#id}`` suffix is swapped for a directive token; the header_ids
postprocessor moves the id onto the rendered heading and adds an anchor
link. If the token never reaches a heading, the suffix is restored as text.
"""

import html
import re

from ..placeholders import SpanKind, get_registry
from ..scanning import map_prose

HEADER_ID = re.compile(r"^([ ]{0,3}#{1,6}[ \t]+.*?)[ \t]*\{#([A-Za-z][\w:.-]*)\}[ \t]*$", re.MULTILINE)

LABEL = "header_id"


def protect_header_ids(text: str, context: dict) -> str:
    registry = get_registry(context, text)

    def replace(match: re.Match) -> str:
        identifier = match.group(2)
        token = registry.register(
            SpanKind.DIRECTIVE,
            identifier,
            fallback=html.escape(f"{{#{identifier}}}"),
            label=LABEL,
        )
        return f"{match.group(1)} {token}"

    return map_prose(text, lambda chunk: HEADER_ID.sub(replace, chunk), include_spans=False)


def header_ids_default(text: str, context: dict) -> str:
    """
    Default configuration for protect_header_ids.

    This is the function that should be registered in PREPROCESSORS.
    """
    return protect_header_ids(text, context)
