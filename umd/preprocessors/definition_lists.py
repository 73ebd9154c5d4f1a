# umd/preprocessors/definition_lists.py
"""
Preprocessor for one-line definition lists.

    :Term|Definition text
    :Other term|More text

Consecutive ``:term|definition`` lines become a single ``<dl>``. Terms and
definitions are inline markdown, so each is emitted as a fragment paragraph
after the list's block token and rendered by the engine.
"""

import logging
import re
from typing import List, Tuple

from ..placeholders import SpanKind, get_registry
from ..scanning import map_prose
from .utils import append_paragraph

logger = logging.getLogger(__name__)

DEFINITION_LINE = re.compile(r"^:([^|\n]*)\|(.*)$")


def protect_definition_lists(text: str, context: dict) -> str:
    registry = get_registry(context, text)
    count = 0

    def convert(chunk: str) -> str:
        nonlocal count
        lines = chunk.split("\n")
        output: List[str] = []
        index = 0
        while index < len(lines):
            if not DEFINITION_LINE.match(lines[index]):
                output.append(lines[index])
                index += 1
                continue

            entries: List[Tuple[str, str]] = []
            while index < len(lines):
                match = DEFINITION_LINE.match(lines[index])
                if not match:
                    break
                entries.append((match.group(1).strip(), match.group(2).strip()))
                index += 1

            fragments: List[str] = []

            def slot(markdown: str) -> str:
                if not markdown:
                    return ""
                token = registry.fragment(markdown)
                fragments.append(f"{token} {markdown}")
                return token

            items = []
            for term, definition in entries:
                items.append(f"<dt>{slot(term)}</dt>")
                items.append(f"<dd>{slot(definition)}</dd>")

            token = registry.register(SpanKind.BLOCK, "<dl>\n" + "\n".join(items) + "\n</dl>")
            append_paragraph(output, token)
            for fragment in fragments:
                output.append(fragment)
                output.append("")
            count += 1

        return "\n".join(output)

    text = map_prose(text, convert, include_spans=False)
    if count:
        logger.debug(f"Protected {count} definition list(s)")
    return text


def definition_lists_default(text: str, context: dict) -> str:
    """
    Default configuration for protect_definition_lists.

    This is the function that should be registered in PREPROCESSORS.
    """
    return protect_definition_lists(text, context)
