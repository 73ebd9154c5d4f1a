# umd/preprocessors/link_attributes.py
"""
Preprocessor for attribute lists after links and images.

    [Docs](https://example.com){.btn .btn-primary #docs}
    ![Logo](/logo.png){.img-fluid}

The attribute list becomes a directive token right after the link; the
link_attributes postprocessor applies it to the element in front of the
token.
"""

import re

from ..placeholders import SpanKind, get_registry
from ..scanning import map_prose

LINK_ATTRIBUTES = re.compile(
    r"(\]\([^()\s]*(?:[ \t]+\"[^\"\n]*\")?\))\{((?:[ \t]*[#.][A-Za-z][\w-]*)+)[ \t]*\}"
)

LABEL = "link_attributes"


def protect_link_attributes(text: str, context: dict) -> str:
    registry = get_registry(context, text)

    def replace(match: re.Match) -> str:
        attributes = " ".join(match.group(2).split())
        token = registry.register(
            SpanKind.DIRECTIVE,
            attributes,
            fallback=f"{{{attributes}}}",
            label=LABEL,
        )
        return match.group(1) + token

    return map_prose(text, lambda chunk: LINK_ATTRIBUTES.sub(replace, chunk))


def link_attributes_default(text: str, context: dict) -> str:
    """
    Default configuration for protect_link_attributes.

    This is the function that should be registered in PREPROCESSORS.
    """
    return protect_link_attributes(text, context)
