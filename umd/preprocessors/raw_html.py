# umd/preprocessors/raw_html.py
"""
Preprocessor that turns typed HTML into text.

Every ``<`` that could open a tag, comment, declaration or processing
instruction is written as ``&lt;`` before the engine sees it, so the
engine's own raw-HTML handling never comes into play. Autolinks
(``<https://...>``, ``<user@example.com>``), pointy-bracket link
destinations and backslash-escaped ``\\<`` are left for the engine.
"""

import logging
import re

from ..scanning import map_prose

logger = logging.getLogger(__name__)

RAW_HTML_OPEN = re.compile(
    r"(?<!\\)(?<!\]\()<(?=[A-Za-z/!?])"
    r"(?![A-Za-z][A-Za-z0-9+.-]{1,31}:[^\s<>]*>)"  # URI autolink
    r"(?![^\s<>@]+@[^\s<>]+>)"  # email autolink
)


def escape_raw_html(text: str, context: dict) -> str:
    """
    Escape tag openers outside code.

    Args:
        text: Markdown source
        context: Render context

    Returns:
        Markdown in which no raw HTML remains
    """
    count = 0

    def escape(chunk: str) -> str:
        nonlocal count
        escaped, replaced = RAW_HTML_OPEN.subn("&lt;", chunk)
        count += replaced
        return escaped

    text = map_prose(text, escape)
    if count:
        logger.debug(f"Escaped {count} raw HTML opener(s)")
    return text


def raw_html_default(text: str, context: dict) -> str:
    """
    Default configuration for escape_raw_html.

    This is the function that should be registered in PREPROCESSORS.
    """
    return escape_raw_html(text, context)
