# umd/decorations.py
"""
Decoration vocabulary shared by inline calls, table cells and block prefixes.

Colours, font sizes and alignment all resolve to Bootstrap utility classes
where a fixed class exists, and to an inline style otherwise:

    COLOR(primary,#fff):  -> class="text-primary" style="background-color: #fff"
    SIZE(1.5):            -> class="fs-4"
    SIZE(1.5rem):         -> style="font-size: 1.5rem"
    CENTER: TOP:          -> class="text-center align-top"
"""

import html
import re
from dataclasses import dataclass, field
from typing import List, Tuple

THEME_COLORS = (
    "primary",
    "secondary",
    "success",
    "danger",
    "warning",
    "info",
    "light",
    "dark",
)

# Bootstrap 5.3 colour scale
CUSTOM_COLORS = (
    "blue",
    "indigo",
    "purple",
    "pink",
    "red",
    "orange",
    "yellow",
    "green",
    "teal",
    "cyan",
)

PALETTE = frozenset(
    THEME_COLORS
    + CUSTOM_COLORS
    + tuple(f"{name}-{suffix}" for name in THEME_COLORS + CUSTOM_COLORS for suffix in ("subtle", "emphasis"))
    + ("body", "body-secondary", "body-tertiary", "body-emphasis", "white", "black", "muted")
)

# rem value -> Bootstrap font-size class
FONT_SIZE_CLASSES = {
    2.5: "fs-1",
    2.0: "fs-2",
    1.75: "fs-3",
    1.5: "fs-4",
    1.25: "fs-5",
    0.875: "fs-6",
}

VERTICAL_ALIGN = {
    "TOP": "align-top",
    "MIDDLE": "align-middle",
    "BOTTOM": "align-bottom",
    "BASELINE": "align-baseline",
}

TEXT_ALIGN = {
    "LEFT": "text-start",
    "CENTER": "text-center",
    "RIGHT": "text-end",
    "JUSTIFY": "text-justify",
}

# Wrapper classes for a LEFT:/CENTER:/RIGHT:/JUSTIFY: line placed above a block
TABLE_PLACEMENT = {
    "LEFT": "w-auto",
    "CENTER": "w-auto mx-auto",
    "RIGHT": "w-auto ms-auto me-0",
    "JUSTIFY": "w-100",
}

BLOCK_PLACEMENT = {
    "LEFT": "ms-0 me-auto",
    "CENTER": "mx-auto",
    "RIGHT": "ms-auto me-0",
    "JUSTIFY": "w-100",
}

_HEX_COLOR = re.compile(r"#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})")
# Named CSS colours and rgb()/hsl() values; nothing that could close the declaration
_CSS_COLOR = re.compile(r"[A-Za-z]{3,20}|(?:rgb|rgba|hsl|hsla)\([0-9.%,\s/deg]+\)")
_SIZE_NUMBER = re.compile(r"\d+(?:\.\d+)?|\.\d+")
_SIZE_WITH_UNIT = re.compile(r"(?:\d+(?:\.\d+)?|\.\d+)(?:rem|em|px)")

_PREFIX = re.compile(
    r"(?:(COLOR|SIZE)\(((?:[^()\n]|\([^()\n]*\))*)\)|(TOP|MIDDLE|BOTTOM|BASELINE|LEFT|CENTER|RIGHT|JUSTIFY|TRUNCATE)):[ \t]*"
)


@dataclass
class Decoration:
    """Classes and inline styles collected from one or more decorations."""

    classes: List[str] = field(default_factory=list)
    styles: List[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.classes or self.styles)

    def merge(self, other: "Decoration") -> "Decoration":
        for cls in other.classes:
            if cls not in self.classes:
                self.classes.append(cls)
        self.styles.extend(other.styles)
        return self

    def attributes(self, extra_classes: List[str] = None) -> str:
        """Render as ``' class="..." style="..."'`` (empty string if bare)."""
        classes = list(extra_classes or []) + [cls for cls in self.classes if cls not in (extra_classes or [])]
        parts = []
        if classes:
            parts.append(f' class="{html.escape(" ".join(classes))}"')
        if self.styles:
            parts.append(f' style="{html.escape("; ".join(self.styles))}"')
        return "".join(parts)


def _color_slot(value: str, class_prefix: str, style_property: str) -> Decoration:
    value = value.strip()
    if not value or value == "inherit":
        return Decoration()
    if value in PALETTE:
        return Decoration(classes=[f"{class_prefix}-{value}"])
    if _HEX_COLOR.fullmatch(value) or _CSS_COLOR.fullmatch(value):
        return Decoration(styles=[f"{style_property}: {value}"])
    return Decoration()


def split_color_pair(argument: str) -> Tuple[str, str]:
    """Split ``fg,bg`` at the first comma outside parentheses."""
    depth = 0
    for index, char in enumerate(argument):
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        elif char == "," and depth == 0:
            return argument[:index], argument[index + 1 :]
    return argument, ""


def color_decoration(foreground: str = "", background: str = "") -> Decoration:
    """
    Map a foreground/background pair to classes or styles.

    Palette names become ``text-*``/``bg-*`` classes. Hex values, other CSS
    colour names and ``rgb()``/``hsl()`` values become inline styles.
    ``inherit``, empty and unsafe values are skipped.
    """
    decoration = _color_slot(foreground, "text", "color")
    return decoration.merge(_color_slot(background, "bg", "background-color"))


def size_decoration(value: str) -> Decoration:
    """
    Map a size value to a font-size class or style.

    Unit-less values on the fixed scale get a class, other unit-less numbers
    are taken as rem, and values carrying rem/em/px are passed through as a
    style. These are never conflated: ``1.5`` and ``1.5rem`` differ.
    """
    value = value.strip()
    if _SIZE_WITH_UNIT.fullmatch(value):
        return Decoration(styles=[f"font-size: {value}"])
    if _SIZE_NUMBER.fullmatch(value):
        size_class = FONT_SIZE_CLASSES.get(float(value))
        if size_class:
            return Decoration(classes=[size_class])
        return Decoration(styles=[f"font-size: {value}rem"])
    return Decoration()


def prefix_decoration(keyword: str, argument: str = "") -> Decoration:
    if keyword == "COLOR":
        foreground, background = split_color_pair(argument)
        return color_decoration(foreground, background)
    if keyword == "SIZE":
        return size_decoration(argument)
    if keyword == "TRUNCATE":
        return Decoration(classes=["text-truncate"])
    if keyword in VERTICAL_ALIGN:
        return Decoration(classes=[VERTICAL_ALIGN[keyword]])
    return Decoration(classes=[TEXT_ALIGN[keyword]])


def strip_prefixes(text: str) -> Tuple[Decoration, str, int]:
    """
    Consume leading decoration prefixes from ``text``.

    Prefixes may appear in any order and any number.

    Returns:
        (merged decoration, remaining text, number of prefixes consumed)
    """
    decoration = Decoration()
    count = 0
    pos = 0
    while True:
        match = _PREFIX.match(text, pos)
        if not match:
            break
        keyword = match.group(1) or match.group(3)
        decoration.merge(prefix_decoration(keyword, match.group(2) or ""))
        count += 1
        pos = match.end()

    return decoration, text[pos:], count
