# umd/calls/parser.py
"""
Recognition and dispatch of call syntax.

    &name(args){content};   &name{content};   &name(args);   &name;
    @name(args){{content}}  @name(args){content}  @name(args)  @name()

A bare ``@name`` without parentheses is ordinary text (a mention), and
``&name;`` is left alone when it is an HTML character reference. A sigil
directly after a word character (``user@host(``, ``AT&T;``) or a backslash
does not start a call either.

Each recognised call is replaced by placeholder tokens. Built-ins resolve to
HTML straight away; every other name is packaged as a generic envelope for
an external executor. Unterminated calls are left as literal text.
"""

import logging
import re
from html.entities import html5 as HTML5_ENTITIES
from typing import List, Optional, Sequence, Tuple

from ..placeholders import PlaceholderRegistry, SpanKind
from ..scanning import Region, find_code_regions, region_at
from .builtins import Wrap, get_builtin
from .envelope import DEFAULT_PLUGIN_CLASS, render_envelope
from .grammar import scan_braces, scan_double_braces, scan_name, scan_parens, split_arguments
from .invocation import CallInvocation, CallShape

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 16

_SIGIL = re.compile(r"[&@]")


def _starts_call(text: str, pos: int) -> bool:
    if pos == 0:
        return True
    previous = text[pos - 1]
    return not (previous.isalnum() or previous in "_\\")


def _scan_inline(text: str, pos: int, cursor: int, name: str, regions: Sequence[Region]):
    arguments: List[str] = []
    has_arguments = False
    content: Optional[str] = None

    if text.startswith("(", cursor):
        scanned = scan_parens(text, cursor, regions)
        if scanned is None:
            return None
        length, inner = scanned
        arguments = split_arguments(inner)
        has_arguments = True
        cursor += length

    if text.startswith("{", cursor):
        scanned = scan_braces(text, cursor, regions)
        if scanned is None:
            return None
        length, content = scanned
        cursor += length

    if not text.startswith(";", cursor):
        return None
    cursor += 1

    if content is not None:
        shape = CallShape.INLINE_FULL
    elif has_arguments:
        shape = CallShape.INLINE_ARGS_ONLY
    elif f"{name};" in HTML5_ENTITIES:
        return None
    else:
        shape = CallShape.INLINE_NONE

    return cursor, shape, arguments, content or ""


def _scan_block(text: str, pos: int, cursor: int, name: str, regions: Sequence[Region]):
    # Parentheses are mandatory; "@alice" is a mention, not a call
    scanned = scan_parens(text, cursor, regions)
    if scanned is None:
        return None
    length, inner = scanned
    arguments = split_arguments(inner)
    cursor += length
    content = ""

    if text.startswith("{{", cursor):
        scanned = scan_double_braces(text, cursor, regions)
        if scanned is None:
            return None
        length, content = scanned
        shape = CallShape.BLOCK_MULTI_LINE
        cursor += length
    elif text.startswith("{", cursor):
        scanned = scan_braces(text, cursor, regions)
        if scanned is None:
            return None
        length, content = scanned
        shape = CallShape.BLOCK_SINGLE_LINE
        cursor += length
    elif arguments:
        shape = CallShape.BLOCK_ARGS_ONLY
    else:
        shape = CallShape.BLOCK_NONE

    return cursor, shape, arguments, content


def scan_call(text: str, pos: int, regions: Sequence[Region] = ()) -> Optional[Tuple[int, CallInvocation]]:
    """
    Try to read one call starting at the sigil at ``pos``.

    Returns:
        ``(consumed_length, invocation)``, or ``None`` when there is no
        complete call here
    """
    if pos >= len(text) or text[pos] not in "&@" or not _starts_call(text, pos):
        return None

    named = scan_name(text, pos + 1)
    if named is None:
        return None
    name_length, name = named
    cursor = pos + 1 + name_length

    scan = _scan_inline if text[pos] == "&" else _scan_block
    scanned = scan(text, pos, cursor, name, regions)
    if scanned is None:
        return None

    end, shape, arguments, content = scanned
    invocation = CallInvocation(
        name=name,
        shape=shape,
        arguments=arguments,
        content=content,
        start=pos,
        end=end,
        source=text[pos:end],
    )
    return end - pos, invocation


def _iter_calls(text: str):
    regions = find_code_regions(text)
    pos = 0
    while True:
        match = _SIGIL.search(text, pos)
        if not match:
            return
        start = match.start()

        region = region_at(start, regions)
        if region:
            pos = region[1]
            continue

        scanned = scan_call(text, start, regions)
        if scanned is None:
            pos = start + 1
            continue

        length, invocation = scanned
        yield invocation
        pos = start + length


def find_calls(text: str) -> List[CallInvocation]:
    """Return every top-level call in ``text`` without rendering anything."""
    return list(_iter_calls(text))


class CallParser:
    """
    Replaces calls in a text with placeholder tokens.

    Args:
        registry: The document's placeholder registry
        max_depth: Deepest level at which nested built-in content is still
            parsed; deeper calls stay literal text
        plugin_class: Base class name of the generic envelope
    """

    def __init__(
        self,
        registry: PlaceholderRegistry,
        max_depth: int = DEFAULT_MAX_DEPTH,
        plugin_class: str = DEFAULT_PLUGIN_CLASS,
    ):
        self.registry = registry
        self.max_depth = max_depth
        self.plugin_class = plugin_class
        self.builtin_count = 0
        self.generic_count = 0

    def parse(self, text: str, depth: int = 0) -> str:
        if depth > self.max_depth:
            logger.debug(f"Call nesting deeper than {self.max_depth}; leaving content literal")
            return text

        parts = []
        pos = 0
        for invocation in _iter_calls(text):
            invocation.nesting_depth = depth
            parts.append(text[pos : invocation.start])
            parts.append(self._dispatch(invocation, depth))
            pos = invocation.end
        parts.append(text[pos:])

        return "".join(parts)

    def _dispatch(self, call: CallInvocation, depth: int) -> str:
        kind = SpanKind.BLOCK if call.shape.is_block else SpanKind.INLINE

        builtin = get_builtin(call)
        rendered = builtin(call) if builtin else None

        if rendered is None:
            self.generic_count += 1
            return self.registry.register(kind, render_envelope(call, self.plugin_class))

        self.builtin_count += 1
        if isinstance(rendered, Wrap):
            inner = self.parse(call.content, depth + 1)
            return (
                self.registry.register(SpanKind.INLINE, rendered.open)
                + inner
                + self.registry.register(SpanKind.INLINE, rendered.close)
            )

        return self.registry.register(kind, rendered)


def parse_calls(
    text: str,
    registry: PlaceholderRegistry,
    max_depth: int = DEFAULT_MAX_DEPTH,
    plugin_class: str = DEFAULT_PLUGIN_CLASS,
) -> str:
    """
    Replace every call in ``text`` with placeholders recorded in ``registry``.

    Args:
        text: Markdown source
        registry: Placeholder registry of the current document
        max_depth: Maximum nesting depth for built-in content
        plugin_class: Base class of generic envelopes

    Returns:
        The text with calls swapped for tokens
    """
    parser = CallParser(registry, max_depth=max_depth, plugin_class=plugin_class)
    result = parser.parse(text)
    logger.debug(f"Protected {parser.builtin_count} built-in and {parser.generic_count} generic call(s)")
    return result
