# umd/calls/grammar.py
"""
Balanced-delimiter scanning for call syntax.

Every scanner takes the immutable source text and the offset of an opening
delimiter and returns ``(consumed_length, result)``, or ``None`` when the
construct is absent or unterminated. Nothing here keeps scan state between
calls.

Code regions (fenced blocks, inline code) are skipped wholesale, so a ``}``
inside backticks never closes a call.
"""

import re
from typing import List, Optional, Sequence, Tuple

from ..scanning import Region, region_at

NAME = re.compile(r"[A-Za-z][A-Za-z0-9_-]*")

# Characters a backslash turns into plain argument text
ESCAPABLE = frozenset("(){},;\\")

_BLANK_LINE = re.compile(r"\n[ \t]*\n")

Scan = Optional[Tuple[int, str]]


def scan_name(text: str, pos: int) -> Scan:
    """Identifier starting at ``pos``: an ASCII letter, then letters, digits, ``_`` or ``-``."""
    match = NAME.match(text, pos)
    if not match:
        return None
    return match.end() - pos, match.group()


def _skip_region(pos: int, regions: Sequence[Region]) -> Optional[int]:
    if not regions:
        return None
    region = region_at(pos, regions)
    return region[1] if region else None


def _scan_depth(
    text: str,
    pos: int,
    opener: str,
    closer: str,
    regions: Sequence[Region],
    allow_blank_lines: bool,
) -> Scan:
    if pos >= len(text) or text[pos] != opener:
        return None

    depth = 0
    i = pos
    while i < len(text):
        skip_to = _skip_region(i, regions)
        if skip_to is not None:
            i = skip_to
            continue

        char = text[i]
        if char == "\\":
            i += 2
            continue
        if char == "\n" and not allow_blank_lines and _BLANK_LINE.match(text, i):
            return None
        if char == opener:
            depth += 1
        elif char == closer:
            depth -= 1
            if depth == 0:
                return i + 1 - pos, text[pos + 1 : i]
        i += 1

    return None


def scan_parens(text: str, pos: int, regions: Sequence[Region] = ()) -> Scan:
    """Match ``(`` at ``pos`` to its closing ``)``; a blank line ends the search."""
    return _scan_depth(text, pos, "(", ")", regions, allow_blank_lines=False)


def scan_braces(text: str, pos: int, regions: Sequence[Region] = (), allow_blank_lines: bool = False) -> Scan:
    """Match ``{`` at ``pos`` to its closing ``}``, tracking nested braces."""
    return _scan_depth(text, pos, "{", "}", regions, allow_blank_lines=allow_blank_lines)


def scan_double_braces(text: str, pos: int, regions: Sequence[Region] = ()) -> Scan:
    """
    Match ``{{`` at ``pos`` to the first ``}}`` at depth zero.

    Braces opened inside the content are counted one by one, so an inner
    ``{{...}}`` or ``{...}`` belonging to a nested call closes itself before
    the outer ``}}`` is considered. A stray ``}`` at depth zero that is not
    part of ``}}`` is plain text. Blank lines are allowed.
    """
    if not text.startswith("{{", pos):
        return None

    depth = 0
    i = pos + 2
    while i < len(text):
        skip_to = _skip_region(i, regions)
        if skip_to is not None:
            i = skip_to
            continue

        char = text[i]
        if char == "\\":
            i += 2
            continue
        if char == "{":
            depth += 1
        elif char == "}":
            if depth > 0:
                depth -= 1
            elif text.startswith("}}", i):
                return i + 2 - pos, text[pos + 2 : i]
        i += 1

    return None


def split_arguments(inner: str) -> List[str]:
    """
    Split an argument list on top-level commas only.

    Commas nested in ``()``, ``{}`` or ``[]`` stay in their argument, and
    ``\\,`` is a literal comma. Each argument is trimmed.

        >>> split_arguments("a,(b,c),d")
        ['a', '(b,c)', 'd']
    """
    if not inner.strip():
        return []

    arguments: List[str] = []
    current: List[str] = []
    depth = 0
    i = 0
    while i < len(inner):
        char = inner[i]
        if char == "\\" and i + 1 < len(inner) and inner[i + 1] in ESCAPABLE:
            current.append(inner[i + 1])
            i += 2
            continue
        if char in "({[":
            depth += 1
        elif char in ")}]" and depth > 0:
            depth -= 1
        elif char == "," and depth == 0:
            arguments.append("".join(current).strip())
            current = []
            i += 1
            continue
        current.append(char)
        i += 1

    arguments.append("".join(current).strip())
    return arguments
