# umd/preprocessors/block_decorations.py
"""
Preprocessors for line-level decorations.

Block decorations style a whole paragraph with leading prefixes:

    COLOR(danger): Watch out        -> <p class="text-danger">Watch out</p>
    SIZE(1.25): CENTER: Big title   -> <p class="fs-5 text-center">Big title</p>

Block placement positions the table or block call directly below it:

    CENTER:
    | a | b |                       -> <table class="table umd-table w-auto mx-auto">

Placement runs after tables and calls have been protected, so it adjusts
their recorded payloads instead of rewriting text.
"""

import logging
import re

from ..decorations import BLOCK_PLACEMENT, TABLE_PLACEMENT, strip_prefixes
from ..placeholders import PlaceholderRegistry, SpanKind, get_registry
from ..scanning import map_prose
from .utils import append_paragraph

logger = logging.getLogger(__name__)

PLACEMENT_LINE = re.compile(r"^[ \t]*(LEFT|CENTER|RIGHT|JUSTIFY):[ \t]*$")
TABLE_CLASS = re.compile(r'^<table class="([^"]*)"')


def _place(registry: PlaceholderRegistry, token: str, keyword: str) -> None:
    payload = registry.get(token).payload
    table = TABLE_CLASS.match(payload)
    if table:
        registry.update(
            token,
            payload[: table.end(1)] + " " + TABLE_PLACEMENT[keyword] + payload[table.end(1) :],
        )
    else:
        registry.update(token, f'<div class="{BLOCK_PLACEMENT[keyword]}">{payload}</div>')


def apply_block_placement(text: str, context: dict) -> str:
    registry = get_registry(context, text)
    if not len(registry):
        return text

    def place(chunk: str) -> str:
        lines = chunk.split("\n")
        output = []
        index = 0
        while index < len(lines):
            match = PLACEMENT_LINE.match(lines[index])
            if match:
                following = index + 1
                while following < len(lines) and not lines[following].strip():
                    following += 1
                if following < len(lines) and registry.is_token(lines[following]):
                    token = lines[following].strip()
                    if registry.get(token).kind == SpanKind.BLOCK:
                        _place(registry, token, match.group(1))
                        index += 1
                        continue
            output.append(lines[index])
            index += 1
        return "\n".join(output)

    return map_prose(text, place, include_spans=False)


def apply_block_decorations(text: str, context: dict) -> str:
    """
    Turn prefixed lines into decorated paragraphs.

    Only unindented lines are considered, so list items and code keep their
    text. A line that is nothing but prefixes is left alone.
    """
    registry = get_registry(context, text)
    count = 0

    def decorate(chunk: str) -> str:
        nonlocal count
        output = []
        for line in chunk.split("\n"):
            if line[:1] in (" ", "\t", "|"):
                output.append(line)
                continue
            decoration, rest, consumed = strip_prefixes(line)
            if not consumed or not rest.strip():
                output.append(line)
                continue
            token = registry.register(SpanKind.PREFIX, f"<p{decoration.attributes()}>", closing="</p>")
            append_paragraph(output, f"{token} {rest.strip()}")
            count += 1
        return "\n".join(output)

    text = map_prose(text, decorate, include_spans=False)
    if count:
        logger.debug(f"Protected {count} decorated paragraph(s)")
    return text


def block_placement_default(text: str, context: dict) -> str:
    """
    Default configuration for apply_block_placement.

    This is the function that should be registered in PREPROCESSORS.
    """
    return apply_block_placement(text, context)


def block_decorations_default(text: str, context: dict) -> str:
    """
    Default configuration for apply_block_decorations.

    This is the function that should be registered in PREPROCESSORS.
    """
    return apply_block_decorations(text, context)
