# umd/scanning.py
"""
Code-region awareness shared by every text pass.

None of the extension syntax is recognised inside fenced or indented code
blocks or inline code spans. The helpers here locate those regions once per
pass so that scanners can skip them and regex passes can be applied to the
prose in between.
"""

import bisect
import re
from typing import Callable, List, Optional, Tuple

Region = Tuple[int, int]

_FENCE_LINE = re.compile(r"^[ \t]*(`{3,}|~{3,})(.*)$")
_INDENTED_LINE = re.compile(r"^(?: {0,3}\t| {4})")
_LIST_ITEM = re.compile(r"^ {0,3}(?:[-*+]|\d{1,9}[.)])(?:[ \t]|$)")
_ATX_HEADING = re.compile(r"^ {0,3}#{1,6}(?:[ \t]|$)")
_BACKTICK_RUN = re.compile(r"`+")
_BLANK_LINE = re.compile(r"\n[ \t]*\n")


def _block_regions(text: str) -> List[Region]:
    """Fenced code blocks plus indented code blocks that do not continue a paragraph or list."""
    regions: List[Region] = []
    fence: Optional[Tuple[str, int, int]] = None
    indented: Optional[Tuple[int, int]] = None
    in_list = False
    # A line may open an indented block only after a blank line, a heading or the start
    can_indent = True
    offset = 0

    for line in text.splitlines(keepends=True):
        content = line.rstrip("\n")
        blank = not content.strip()

        if indented is not None:
            if blank or _INDENTED_LINE.match(content):
                if not blank:
                    indented = (indented[0], offset + len(line))
                offset += len(line)
                continue
            regions.append(indented)
            indented = None

        match = _FENCE_LINE.match(content)
        if fence is None:
            if not blank and not in_list and can_indent and _INDENTED_LINE.match(content):
                indented = (offset, offset + len(line))
            # A backtick fence may not carry backticks in its info string
            elif match and not (match.group(1)[0] == "`" and "`" in match.group(2)):
                fence = (match.group(1)[0], len(match.group(1)), offset)
            elif _LIST_ITEM.match(content):
                in_list = True
            elif not blank and not content[0].isspace():
                in_list = False
            can_indent = blank or bool(_ATX_HEADING.match(content))
        elif (
            match
            and match.group(1)[0] == fence[0]
            and len(match.group(1)) >= fence[1]
            and not match.group(2).strip()
        ):
            regions.append((fence[2], offset + len(line)))
            fence = None
            can_indent = True
        offset += len(line)

    if indented is not None:
        regions.append(indented)
    if fence is not None:
        # Unclosed fences run to the end of the document
        regions.append((fence[2], len(text)))

    return regions


def _code_spans(text: str, start: int, end: int) -> List[Region]:
    spans: List[Region] = []
    pos = start

    while True:
        opening = _BACKTICK_RUN.search(text, pos, end)
        if not opening:
            break
        if opening.start() > 0 and text[opening.start() - 1] == "\\":
            pos = opening.end()
            continue

        blank = _BLANK_LINE.search(text, opening.end(), end)
        limit = blank.start() if blank else end
        width = len(opening.group())
        closing = None

        for candidate in _BACKTICK_RUN.finditer(text, opening.end(), limit):
            if len(candidate.group()) == width:
                closing = candidate
                break

        if closing:
            spans.append((opening.start(), closing.end()))
            pos = closing.end()
        else:
            pos = opening.end()

    return spans


def find_code_regions(text: str, include_spans: bool = True) -> List[Region]:
    """
    Locate fenced and indented code blocks and (optionally) inline code spans.

    Args:
        text: Source markdown
        include_spans: Also report inline code spans between fences

    Returns:
        Sorted, non-overlapping (start, end) offsets
    """
    fences = _block_regions(text)
    if not include_spans:
        return fences

    regions: List[Region] = []
    prose_start = 0
    for fence_start, fence_end in fences:
        regions.extend(_code_spans(text, prose_start, fence_start))
        regions.append((fence_start, fence_end))
        prose_start = fence_end
    regions.extend(_code_spans(text, prose_start, len(text)))

    return regions


def region_at(pos: int, regions: List[Region]) -> Optional[Region]:
    """Return the region containing ``pos``, if any."""
    index = bisect.bisect_right(regions, (pos, float("inf"))) - 1
    if index >= 0:
        start, end = regions[index]
        if start <= pos < end:
            return regions[index]
    return None


def map_prose(text: str, transform: Callable[[str], str], include_spans: bool = True) -> str:
    """
    Apply ``transform`` to every stretch of text outside code regions.

    With ``include_spans=False`` only code blocks are skipped, so every
    stretch handed to ``transform`` starts at a line boundary. Line-based
    passes rely on that.
    """
    regions = find_code_regions(text, include_spans=include_spans)
    if not regions:
        return transform(text)

    parts = []
    pos = 0
    for start, end in regions:
        if start > pos:
            parts.append(transform(text[pos:start]))
        parts.append(text[start:end])
        pos = end
    if pos < len(text):
        parts.append(transform(text[pos:]))

    return "".join(parts)
