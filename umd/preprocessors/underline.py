# umd/preprocessors/underline.py
"""
Preprocessor for ``__underline__``.

Double underscores mean underline here, not strong emphasis. Intra-word
runs such as ``snake__case__name`` and paths are left alone.
"""

import re

from ..placeholders import SpanKind, get_registry
from ..scanning import map_prose

UNDERLINE = re.compile(r"(?<![\w/\\])__(?=[^\s_])([^\n]+?)(?<=\S)__(?![\w/])")


def protect_underline(text: str, context: dict) -> str:
    registry = get_registry(context, text)

    def replace(match: re.Match) -> str:
        opening = registry.register(SpanKind.INLINE, "<u>")
        closing = registry.register(SpanKind.INLINE, "</u>")
        return f"{opening}{match.group(1)}{closing}"

    return map_prose(text, lambda chunk: UNDERLINE.sub(replace, chunk))


def underline_default(text: str, context: dict) -> str:
    """
    Default configuration for protect_underline.

    This is the function that should be registered in PREPROCESSORS.
    """
    return protect_underline(text, context)
