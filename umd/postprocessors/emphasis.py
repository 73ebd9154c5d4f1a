# umd/postprocessors/emphasis.py
"""
Postprocessor for the quote-style inline emphasis the engine does not know.

    '''italic'''    -> <i>italic</i>
    ''bold''        -> <b>bold</b>
    %%struck%%      -> <s>struck</s>
    ||hidden||      -> <span class="spoiler">hidden</span>

This postprocessor:
- Runs on the engine output, so the markers may enclose inline markup the
  engine already produced (``''a *b* c''``)
- Never matches across block boundaries (paragraphs, list items, cells)
- Leaves code, pre, script and style content untouched
- Never looks inside tag attributes

Extension markup is still hidden behind placeholder tokens at this point, so
markers inside restored call output are never touched either.
"""

import re

_PROTECTED = re.compile(r"<(pre|code|script|style)\b[^>]*>.*?</\1\s*>", re.DOTALL | re.IGNORECASE)
_BLOCK_TAG = re.compile(
    r"</?(?:p|div|h[1-6]|ul|ol|li|dl|dt|dd|table|thead|tbody|tfoot|tr|th|td|blockquote|hr|br|section|figure)\b[^>]*>",
    re.IGNORECASE,
)
_TAG = re.compile(r"<[^<>]*>")
_MASK = re.compile(r"\x00(\d+)\x01")

EMPHASIS_RULES = [
    (re.compile(r"'''(?=\S)(.+?)(?<=\S)'''"), "<i>", "</i>"),
    (re.compile(r"''(?=[^\s'])(.+?)(?<=[^\s'])''"), "<b>", "</b>"),
    (re.compile(r"%%(?=[^\s%])(.+?)(?<=[^\s%])%%"), "<s>", "</s>"),
    (re.compile(r"\|\|(?=[^\s|])(.+?)(?<=[^\s|])\|\|"), '<span class="spoiler">', "</span>"),
]


def _apply_rules(run: str) -> str:
    if not any(marker in run for marker in ("''", "%%", "||")):
        return run

    # Hide inline tags so attribute values cannot match
    tags = []

    def mask(match: re.Match) -> str:
        tags.append(match.group(0))
        return f"\x00{len(tags) - 1}\x01"

    masked = _TAG.sub(mask, run)
    for pattern, opening, closing in EMPHASIS_RULES:
        masked = pattern.sub(lambda m: f"{opening}{m.group(1)}{closing}", masked)

    return _MASK.sub(lambda m: tags[int(m.group(1))], masked)


def _apply_outside_blocks(segment: str) -> str:
    parts = []
    pos = 0
    for match in _BLOCK_TAG.finditer(segment):
        parts.append(_apply_rules(segment[pos : match.start()]))
        parts.append(match.group(0))
        pos = match.end()
    parts.append(_apply_rules(segment[pos:]))
    return "".join(parts)


def emphasis_enhancer(html: str, context: dict) -> str:
    """
    Convert quote-style emphasis markers to HTML.

    Args:
        html: HTML string to process
        context: Context dictionary (unused but required for postprocessor signature)

    Returns:
        Processed HTML
    """
    parts = []
    pos = 0
    for match in _PROTECTED.finditer(html):
        parts.append(_apply_outside_blocks(html[pos : match.start()]))
        parts.append(match.group(0))
        pos = match.end()
    parts.append(_apply_outside_blocks(html[pos:]))
    return "".join(parts)


def emphasis_enhancer_default(html: str, context: dict) -> str:
    """
    Default configuration for emphasis_enhancer.

    This is the function that should be registered in POSTPROCESSORS.
    """
    return emphasis_enhancer(html, context)
