# umd/placeholders.py
"""
Placeholder protocol shielding extension syntax from the markdown engine.

Protection passes swap spans of extension syntax for opaque tokens and record
what each token stands for. The engine only ever sees letters and digits in
their place, so nothing it does can corrupt them. After rendering,
``PlaceholderRegistry.restore`` puts the resolved HTML back.

Token layout: ``umd`` + per-document nonce + ``x`` + index + ``x``. The
trailing ``x`` keeps ``...x1x`` from being a prefix of ``...x12x``. Tokens are
lowercase so they also survive identifier slugging.

A registry lives for exactly one render call. It is stored in the render
context, never at module level.
"""

import html as html_lib
import logging
import re
import secrets
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from .exceptions import PlaceholderError

logger = logging.getLogger(__name__)

CONTEXT_KEY = "placeholders"

_TOKEN_ALPHABET = frozenset("abcdefghijklmnopqrstuvwxyz0123456789")
_ENCODED_RUN = re.compile(r"(?:[0-9a-z]|&#(?:\d+|[xX][0-9a-fA-F]+);)+")
_NUMERIC_REF = re.compile(r"&#(\d+|[xX][0-9a-fA-F]+);")
_TAG = re.compile(r"<[A-Za-z][^<>]*>")
_HTML_TAG = re.compile(r"<[^<>]+>")


class SpanKind(Enum):
    """How a protected span is put back into the rendered HTML."""

    INLINE = "inline"  # token -> payload
    BLOCK = "block"  # <p>token</p> -> payload, else token -> payload
    PREFIX = "prefix"  # <p>token rest</p> -> payload + rest + closing
    FRAGMENT = "fragment"  # deferred inline markdown, harvested from <p>token rest</p>
    DIRECTIVE = "directive"  # consumed by a structural postprocessor


@dataclass
class ProtectedSpan:
    token: str
    kind: SpanKind
    payload: str
    closing: str = ""
    fallback: str = ""
    resolved: Optional[str] = None
    consumed: bool = False
    label: str = ""

    def resolution(self) -> str:
        """HTML that replaces a bare occurrence of the token."""
        if self.kind in (SpanKind.INLINE, SpanKind.BLOCK):
            return self.payload
        if self.kind == SpanKind.PREFIX:
            return ""
        if self.resolved is not None:
            return self.resolved
        return self.fallback


class PlaceholderRegistry:
    """
    Ordered side table of protected spans for one document pass.

    Args:
        source: The raw document. The nonce is chosen so that no token can
            already occur in it.
    """

    def __init__(self, source: str = "") -> None:
        nonce = secrets.token_hex(4)
        while f"umd{nonce}" in source:
            nonce = secrets.token_hex(4)

        self.prefix = f"umd{nonce}x"
        self.pattern = re.compile(re.escape(self.prefix) + r"\d+x")
        self._paragraph = re.compile(
            r"<p>[ \t\n]*(" + self.pattern.pattern + r")[ \t\n]*(.*?)[ \t\n]*</p>\n?",
            re.DOTALL,
        )
        self._spans: Dict[str, ProtectedSpan] = {}

    def __len__(self) -> int:
        return len(self._spans)

    def __contains__(self, token: str) -> bool:
        return token in self._spans

    def register(
        self,
        kind: SpanKind,
        payload: str,
        closing: str = "",
        fallback: str = "",
        label: str = "",
    ) -> str:
        """Record a span and return its freshly allocated token."""
        token = f"{self.prefix}{len(self._spans)}x"
        self._spans[token] = ProtectedSpan(
            token=token,
            kind=kind,
            payload=payload,
            closing=closing,
            fallback=fallback,
            label=label,
        )
        return token

    def protect(
        self,
        text: str,
        kind: SpanKind,
        payload: str,
        start: int = 0,
        end: Optional[int] = None,
    ) -> Tuple[str, str]:
        """Replace ``text[start:end]`` with a new token; return ``(text', token)``."""
        end = len(text) if end is None else end
        token = self.register(kind, payload)
        return text[:start] + token + text[end:], token

    def fragment(self, markdown: str) -> str:
        """
        Register a stretch of inline markdown to be rendered by the engine.

        The caller emits ``token + " " + markdown`` as a paragraph of its own
        and places the bare token wherever the rendered HTML belongs.
        """
        return self.register(
            SpanKind.FRAGMENT,
            markdown,
            fallback=html_lib.escape(markdown, quote=False),
        )

    def get(self, token: str) -> ProtectedSpan:
        return self._spans[token]

    def update(self, token: str, payload: str) -> None:
        self._spans[token].payload = payload

    def consume(self, token: str, resolved: str = "") -> None:
        """Mark a directive as applied; later occurrences render as ``resolved``."""
        span = self._spans[token]
        span.resolved = resolved
        span.consumed = True

    def spans(self, kind: Optional[SpanKind] = None, label: Optional[str] = None) -> List[ProtectedSpan]:
        return [
            span
            for span in self._spans.values()
            if (kind is None or span.kind == kind) and (label is None or span.label == label)
        ]

    def pending(self) -> List[str]:
        """Tokens registered in this pass but not yet restored."""
        return [token for token, span in self._spans.items() if not span.consumed]

    def find_tokens(self, text: str) -> List[str]:
        return self.pattern.findall(text)

    def is_token(self, text: str) -> bool:
        return bool(self.pattern.fullmatch(text.strip()))

    # Restoration

    def restore(self, html: str) -> str:
        """
        Substitute every token in ``html`` with its resolved HTML.

        Raises:
            PlaceholderError: if a token remains or a registered span was
                never restored
        """
        if not self._spans:
            return html

        html = self._decode_encoded_tokens(html)
        self._release_dropped(html)
        html = self.harvest_fragments(html)
        html = self._substitute_attributes(html)

        # Payloads may carry further tokens (table cells, nested calls)
        for _ in range(len(self._spans) + 1):
            if not self.pattern.search(html):
                break
            html = self._paragraph.sub(self._replace_paragraph, html)
            html = self.pattern.sub(self._replace_bare, html)

        leftovers = self.find_tokens(html)
        if leftovers:
            raise PlaceholderError("tokens left in rendered output", leftovers)

        pending = self.pending()
        if pending:
            raise PlaceholderError("registered spans were never restored", pending)

        logger.debug(f"Restored {len(self._spans)} placeholder(s)")
        return html

    def _release_dropped(self, html: str) -> None:
        """
        Mark spans the engine legitimately discarded as restored.

        An unused link reference definition or a raw HTML comment carries its
        tokens away with it. Only spans reachable from ``html``, directly or
        through another reachable payload, still have to be restored.
        """
        reachable = set()
        queue = [token for token in self.find_tokens(html) if token in self._spans]
        while queue:
            token = queue.pop()
            if token in reachable:
                continue
            reachable.add(token)
            span = self._spans[token]
            queue.extend(t for t in self.find_tokens(span.payload + span.closing) if t in self._spans)

        for token, span in self._spans.items():
            if token not in reachable and not span.consumed:
                logger.debug(f"Span {token} ({span.kind.value}) was dropped by the engine")
                span.consumed = True

    def harvest_fragments(self, html: str) -> str:
        """Capture the rendered HTML of every fragment paragraph and remove it."""

        def harvest(match: re.Match) -> str:
            span = self._spans.get(match.group(1))
            if span is None or span.kind != SpanKind.FRAGMENT:
                return match.group(0)
            span.resolved = match.group(2)
            return ""

        return self._paragraph.sub(harvest, html)

    def _replace_paragraph(self, match: re.Match) -> str:
        token, rest = match.group(1), match.group(2)
        span = self._spans.get(token)
        if span is None:
            return match.group(0)

        if span.kind == SpanKind.BLOCK and not rest:
            span.consumed = True
            return span.payload + "\n"
        if span.kind == SpanKind.PREFIX:
            span.consumed = True
            return span.payload + rest + span.closing + "\n"

        return match.group(0)

    def _replace_bare(self, match: re.Match) -> str:
        span = self._spans.get(match.group(0))
        if span is None:
            return match.group(0)
        if span.kind == SpanKind.PREFIX:
            logger.warning(f"Block marker {span.token} was not at the start of a paragraph; dropping it")
        span.consumed = True
        return span.resolution()

    def _text_resolution(self, token: str) -> str:
        """Plain-text form of a token for use inside an attribute value."""
        resolved = self.pattern.sub(lambda m: self._text_resolution(m.group(0)), self._spans[token].resolution())
        self._spans[token].consumed = True
        text = html_lib.unescape(_HTML_TAG.sub("", resolved))
        return html_lib.escape(text, quote=True)

    def _substitute_attributes(self, html: str) -> str:
        def scrub(match: re.Match) -> str:
            tag = match.group(0)
            if not self.pattern.search(tag):
                return tag
            return self.pattern.sub(lambda m: self._text_resolution(m.group(0)) if m.group(0) in self else "", tag)

        return _TAG.sub(scrub, html)

    def _decode_encoded_tokens(self, html: str) -> str:
        """Undo numeric character references that split a token's characters."""
        if "&#" not in html:
            return html

        def decode_reference(match: re.Match) -> str:
            value = match.group(1)
            code = int(value[1:], 16) if value[0] in "xX" else int(value)
            char = chr(code) if code < 0x110000 else ""
            return char if char in _TOKEN_ALPHABET else match.group(0)

        def decode_run(match: re.Match) -> str:
            run = match.group(0)
            if "&#" not in run:
                return run
            decoded = _NUMERIC_REF.sub(decode_reference, run)
            return decoded if self.pattern.search(decoded) else run

        return _ENCODED_RUN.sub(decode_run, html)


def get_registry(context: dict, source: str = "") -> PlaceholderRegistry:
    """Return the document's registry, creating it on first use."""
    registry = context.get(CONTEXT_KEY)
    if registry is None:
        registry = PlaceholderRegistry(source)
        context[CONTEXT_KEY] = registry
    return registry
