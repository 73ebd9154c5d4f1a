# umd/postprocessors/sanitizer.py
"""
Postprocessor that sanitizes the engine's HTML with bleach.

Runs on the engine output while extension markup is still hidden behind
placeholder tokens, so only what the engine itself produced is filtered.
Raw HTML in the source is already escaped by the engine configuration;
this is the second line of defence.
"""

import logging
from functools import lru_cache

import bleach
from bleach.css_sanitizer import CSSSanitizer

from ..config import get_config

logger = logging.getLogger(__name__)

ALLOWED_ATTRIBUTES = {
    "*": ["class", "id", "title", "lang", "dir", "role", "style"],
    "a": ["href", "title", "rel", "target"],
    "img": ["src", "alt", "title", "width", "height", "loading"],
    "code": ["class"],
    "pre": ["class"],
    "th": ["colspan", "rowspan", "scope", "align"],
    "td": ["colspan", "rowspan", "align"],
    "col": ["span", "width"],
    "input": ["type", "checked", "disabled"],
    "ol": ["start", "type", "reversed"],
    "li": ["value"],
    "blockquote": ["cite"],
    "time": ["datetime"],
    "data": ["value"],
}

ALLOWED_PROTOCOLS = ["http", "https", "mailto", "tel"]

# Engines emit column alignment as an inline style
ALLOWED_CSS_PROPERTIES = ["text-align"]


def _allow_attribute(tag: str, name: str, value: str) -> bool:
    if name.startswith("data-") or name.startswith("aria-"):
        return True
    return name in ALLOWED_ATTRIBUTES["*"] or name in ALLOWED_ATTRIBUTES.get(tag, ())


@lru_cache(maxsize=1)
def _get_cleaner() -> bleach.sanitizer.Cleaner:
    """Cache the bleach cleaner; building the allow lists is not free."""
    allowed_tags = set(bleach.sanitizer.ALLOWED_TAGS).union(
        {
            # text
            "p",
            "br",
            "wbr",
            "div",
            "span",
            "section",
            "cite",
            "mark",
            "ins",
            "del",
            "s",
            "u",
            "sup",
            "sub",
            "small",
            "q",
            "dfn",
            "time",
            "data",
            "bdi",
            "bdo",
            "ruby",
            "rt",
            "rp",
            # headings
            "h1",
            "h2",
            "h3",
            "h4",
            "h5",
            "h6",
            # lists
            "ul",
            "ol",
            "li",
            "hr",
            "blockquote",
            "dl",
            "dt",
            "dd",
            # code
            "pre",
            "code",
            "kbd",
            "samp",
            "var",
            # tables
            "table",
            "thead",
            "tbody",
            "tfoot",
            "tr",
            "th",
            "td",
            "caption",
            "colgroup",
            "col",
            # media
            "img",
            "figure",
            "figcaption",
            # links and task lists
            "a",
            "input",
            "label",
            "abbr",
        }
    )

    return bleach.sanitizer.Cleaner(
        tags=allowed_tags,
        attributes=_allow_attribute,
        protocols=ALLOWED_PROTOCOLS,
        css_sanitizer=CSSSanitizer(allowed_css_properties=ALLOWED_CSS_PROPERTIES),
        strip=False,  # Escape disallowed tags instead of dropping their text
    )


def sanitize_html(html: str, context: dict) -> str:
    """
    Sanitize HTML output using bleach.

    This is the FIRST post-processor and should run before any other HTML
    modifications.
    """
    if not get_config(context)["sanitize"]:
        logger.debug("Sanitization disabled for this render")
        return html

    return _get_cleaner().clean(html)
