# umd/postprocessors/link_attributes.py
"""
Postprocessor that applies ``{.class #id}`` lists to the link or image
directly in front of them.
"""

import logging

from bs4 import NavigableString, Tag

from ..placeholders import SpanKind
from .utils import class_list, find_token_node, get_shared_soup, soup_to_html

logger = logging.getLogger(__name__)

LABEL = "link_attributes"


def _apply(target: Tag, attributes: str) -> None:
    classes = class_list(target)
    for part in attributes.split():
        if part.startswith("#"):
            target["id"] = part[1:]
        elif part[1:] not in classes:
            classes.append(part[1:])
    if classes:
        target["class"] = classes


def apply_link_attributes(html: str, context: dict) -> str:
    registry = context.get("placeholders")
    if registry is None:
        return html
    spans = [span for span in registry.spans(SpanKind.DIRECTIVE, label=LABEL) if not span.consumed]
    if not spans:
        return html

    soup = get_shared_soup(html, context)

    for span in spans:
        node = find_token_node(soup, span.token)
        if node is None:
            continue
        text = str(node)
        target = node.previous_sibling
        if not text.startswith(span.token) or not isinstance(target, Tag) or target.name not in ("a", "img"):
            logger.debug(f"No link in front of attribute list '{span.payload}'; keeping it as text")
            continue

        _apply(target, span.payload)
        node.replace_with(NavigableString(text[len(span.token) :]))
        registry.consume(span.token)

    return soup_to_html(context, soup)


def link_attributes_default(html: str, context: dict) -> str:
    """
    Default configuration for apply_link_attributes.

    This is the function that should be registered in POSTPROCESSORS.
    """
    return apply_link_attributes(html, context)
