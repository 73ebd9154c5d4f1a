# umd/calls/builtins.py
"""
Built-in decorations resolved directly to HTML.

A built-in returns either:

- a string of finished HTML (atomic; the call's content is consumed), or
- a ``Wrap`` pair of opening/closing markup. The parser then re-parses the
  call's content for nested calls and leaves it in the document between the
  two halves, so the engine still renders markdown such as ``**bold**``
  inside ``&color(red){...};``.

Returning ``None`` means the built-in does not apply to this shape; the call
is then packaged as a generic plugin envelope instead.

Supported inline built-ins:
    color, size, sup, sub, lang, abbr, ruby, badge, spoiler, time, data,
    bdo, wbr, br, and the plain element wrappers dfn, kbd, samp, var, cite,
    q, small, u, bdi, s, mark, ins, del

Supported block built-ins:
    clear
"""

import html
import logging
import re
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Union
from urllib.parse import urlparse

from ..decorations import PALETTE, THEME_COLORS, color_decoration, size_decoration
from .invocation import CallInvocation, CallShape

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Wrap:
    open: str
    close: str


Rendered = Optional[Union[str, Wrap]]
Builtin = Callable[[CallInvocation], Rendered]

INLINE_BUILTINS: Dict[str, Builtin] = {}
BLOCK_BUILTINS: Dict[str, Builtin] = {}

# One level of parentheses is allowed inside the URL
_BADGE_LINK = re.compile(r"\s*\[([^\[\]]*)\]\(\s*((?:[^()\s]|\([^()\s]*\))*)\s*\)\s*\Z")
_BLOCKED_SCHEMES = {"javascript", "vbscript", "data", "file"}


def inline(*names: str):
    def register(func: Builtin) -> Builtin:
        for name in names:
            INLINE_BUILTINS[name] = func
        return func

    return register


def block(*names: str):
    def register(func: Builtin) -> Builtin:
        for name in names:
            BLOCK_BUILTINS[name] = func
        return func

    return register


def get_builtin(call: CallInvocation) -> Optional[Builtin]:
    table = BLOCK_BUILTINS if call.shape.is_block else INLINE_BUILTINS
    return table.get(call.name)


def _escape(value: str) -> str:
    return html.escape(value, quote=True)


def safe_url(url: str) -> str:
    """Neutralise script-capable URL schemes; anything else passes unchanged."""
    scheme = urlparse(url.strip()).scheme.lower()
    if scheme in _BLOCKED_SCHEMES:
        logger.warning(f"Blocked {scheme}: URL in badge link")
        return "#"
    return url.strip()


def _with_content(call: CallInvocation, open_tag: str, close_tag: str, text: str = "") -> Rendered:
    """Wrap the content if there is any, else wrap ``text`` (escaped) atomically."""
    if call.shape == CallShape.INLINE_FULL:
        return Wrap(open_tag, close_tag)
    if text:
        return f"{open_tag}{html.escape(text, quote=False)}{close_tag}"
    return None


@inline("dfn", "kbd", "samp", "var", "cite", "q", "small", "u", "bdi", "s", "mark", "ins", "del", "sup", "sub")
def element(call: CallInvocation) -> Rendered:
    """``&kbd(Ctrl+C);`` -> ``<kbd>Ctrl+C</kbd>``; ``&kbd{x};`` wraps markdown content."""
    return _with_content(call, f"<{call.name}>", f"</{call.name}>", call.argument_text)


@inline("color")
def color(call: CallInvocation) -> Rendered:
    if call.shape != CallShape.INLINE_FULL:
        return None
    foreground = call.arguments[0] if call.arguments else ""
    background = call.arguments[1] if len(call.arguments) > 1 else ""
    decoration = color_decoration(foreground, background)
    if not decoration:
        return Wrap("", "")
    return Wrap(f"<span{decoration.attributes()}>", "</span>")


@inline("size")
def size(call: CallInvocation) -> Rendered:
    if call.shape != CallShape.INLINE_FULL:
        return None
    decoration = size_decoration(call.arguments[0] if call.arguments else "")
    if not decoration:
        return Wrap("", "")
    return Wrap(f"<span{decoration.attributes()}>", "</span>")


@inline("lang")
def lang(call: CallInvocation) -> Rendered:
    return _with_content(call, f'<span lang="{_escape(call.argument_text)}">', "</span>")


@inline("time")
def time_element(call: CallInvocation) -> Rendered:
    return _with_content(call, f'<time datetime="{_escape(call.argument_text)}">', "</time>", call.argument_text)


@inline("data")
def data_element(call: CallInvocation) -> Rendered:
    return _with_content(call, f'<data value="{_escape(call.argument_text)}">', "</data>", call.argument_text)


@inline("bdo")
def bdo(call: CallInvocation) -> Rendered:
    direction = call.argument_text.lower()
    if direction not in ("ltr", "rtl"):
        direction = "ltr"
    return _with_content(call, f'<bdo dir="{direction}">', "</bdo>")


@inline("ruby")
def ruby(call: CallInvocation) -> Rendered:
    """``&ruby(かん){漢};`` -> base text with its reading in an ``rt`` annotation."""
    reading = html.escape(call.argument_text, quote=False)
    return _with_content(call, "<ruby>", f"<rp>(</rp><rt>{reading}</rt><rp>)</rp></ruby>")


@inline("abbr")
def abbr(call: CallInvocation) -> Rendered:
    """``&abbr(HTML){HyperText Markup Language};`` -> the content becomes the title."""
    if not call.arguments:
        return None
    text = html.escape(call.argument_text, quote=False)
    if call.content:
        return f'<abbr title="{_escape(call.content.strip())}">{text}</abbr>'
    return f"<abbr>{text}</abbr>"


@inline("spoiler")
def spoiler(call: CallInvocation) -> Rendered:
    return _with_content(
        call,
        '<span class="spoiler" role="button" tabindex="0" aria-expanded="false">',
        "</span>",
        call.argument_text,
    )


@inline("badge")
def badge(call: CallInvocation) -> Rendered:
    """
    ``&badge(primary){New};`` -> ``<span class="badge bg-primary">New</span>``.

    A ``-pill`` suffix adds ``rounded-pill``. When the content is a single
    markdown link the badge itself becomes the link, since an anchor nested
    inside a badge span is not what readers click on.
    """
    if call.shape != CallShape.INLINE_FULL:
        return None

    kind = call.argument_text.strip().lower() or "secondary"
    pill = kind.endswith("-pill")
    color_name = kind[: -len("-pill")] if pill else kind
    if color_name not in PALETTE:
        color_name = THEME_COLORS[1]
    classes = f"badge rounded-pill bg-{color_name}" if pill else f"badge bg-{color_name}"

    link = _BADGE_LINK.match(call.content)
    if link:
        text, url = link.groups()
        return f'<a href="{_escape(safe_url(url))}" class="{classes}">{html.escape(text, quote=False)}</a>'

    return Wrap(f'<span class="{classes}">', "</span>")


@inline("wbr")
def wbr(call: CallInvocation) -> Rendered:
    return "<wbr />" if call.shape == CallShape.INLINE_NONE else None


@inline("br")
def br(call: CallInvocation) -> Rendered:
    return "<br />" if call.shape == CallShape.INLINE_NONE else None


@block("clear")
def clear(call: CallInvocation) -> Rendered:
    if call.shape != CallShape.BLOCK_NONE:
        return None
    return '<div class="clearfix"></div>'
