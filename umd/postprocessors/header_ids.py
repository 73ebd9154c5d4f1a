# umd/postprocessors/header_ids.py
"""
Postprocessor that applies ``{#id}`` heading identifiers.

This postprocessor:
- Finds each header_id directive token in the rendered HTML
- Sets the enclosing heading's ``id`` and removes the token
- Appends an empty anchor link (``<a class="anchor" href="#id">``) for
  copy-link styling

A token that did not end up inside a heading is left for restoration, which
puts the ``{#id}`` text back.
"""

import logging

from bs4 import NavigableString

from ..placeholders import SpanKind
from .utils import find_token_node, get_shared_soup, soup_to_html

logger = logging.getLogger(__name__)

LABEL = "header_id"
HEADINGS = ["h1", "h2", "h3", "h4", "h5", "h6"]


def apply_header_ids(html: str, context: dict) -> str:
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
        heading = node.find_parent(HEADINGS)
        if heading is None:
            logger.debug(f"Heading id '{span.payload}' is not inside a heading; keeping it as text")
            continue

        text = str(node).replace(span.token, "").rstrip()
        node.replace_with(NavigableString(text))

        heading["id"] = span.payload
        anchor = soup.new_tag("a", attrs={"class": "anchor", "href": f"#{span.payload}", "aria-hidden": "true"})
        heading.append(anchor)
        registry.consume(span.token)

    return soup_to_html(context, soup)


def header_ids_default(html: str, context: dict) -> str:
    """
    Default configuration for apply_header_ids.

    This is the function that should be registered in POSTPROCESSORS.
    """
    return apply_header_ids(html, context)
