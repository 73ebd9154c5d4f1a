# umd/postprocessors/blockquote_enhancer.py
"""
Postprocessor that styles blockquotes and turns GitHub alerts into Bootstrap
alert boxes.

This postprocessor:
- Adds the "blockquote" class to every engine blockquote
- Leaves closed-form quotes (``umd-blockquote``) alone
- Converts ``> [!NOTE]`` style blockquotes into ``div.alert`` boxes
- Converts the alert divs newer Pandoc versions emit (``div.note`` with a
  ``div.title`` child) the same way
"""

import re
from typing import Optional

from bs4 import BeautifulSoup, NavigableString, Tag

from .utils import class_list

ALERT_CLASSES = {
    "note": "alert-info",
    "tip": "alert-success",
    "important": "alert-primary",
    "warning": "alert-warning",
    "caution": "alert-danger",
}

_ALERT_MARKER = re.compile(r"^\s*\[!(NOTE|TIP|IMPORTANT|WARNING|CAUTION)\]\s*", re.IGNORECASE)


def _alert_div(soup: BeautifulSoup, kind: str) -> Tag:
    return soup.new_tag("div", attrs={"class": ["alert", ALERT_CLASSES[kind]], "role": "alert"})


def _detect_and_remove_alert_marker(blockquote: Tag) -> Optional[str]:
    """
    Detect an alert marker at the start of a blockquote and remove it.

    Returns:
        The lowercase alert kind, or None
    """
    first = blockquote.find(["p", "div"])
    if first is None:
        return None
    text = first.contents[0] if first.contents else None
    if not isinstance(text, NavigableString):
        return None

    match = _ALERT_MARKER.match(str(text))
    if not match:
        return None

    remainder = str(text)[match.end() :]
    if remainder:
        text.replace_with(NavigableString(remainder))
    else:
        text.extract()
        # Drop the line break that followed the marker
        if first.contents and isinstance(first.contents[0], Tag) and first.contents[0].name == "br":
            first.contents[0].extract()
    if not first.get_text(strip=True) and not first.find(True):
        first.extract()

    return match.group(1).lower()


def _convert_pandoc_alert(soup: BeautifulSoup, div: Tag) -> bool:
    kinds = [cls for cls in class_list(div) if cls in ALERT_CLASSES]
    title = div.find("div", class_="title", recursive=False)
    if not kinds or title is None:
        return False

    title.extract()
    alert = _alert_div(soup, kinds[0])
    div.insert_before(alert)
    for child in list(div.contents):
        alert.append(child.extract())
    div.extract()
    return True


def blockquote_enhancer(html: str, context: dict, blockquote_classes=None) -> str:
    """
    Enhance blockquote elements and GitHub-style alerts.

    Args:
        html: HTML string to process
        context: Context dictionary (not used currently)
        blockquote_classes: Classes to add to plain blockquotes (default: ["blockquote"])

    Returns:
        Processed HTML
    """
    if "<blockquote" not in html and 'class="title"' not in html:
        return html

    blockquote_classes = blockquote_classes if blockquote_classes is not None else ["blockquote"]
    soup = BeautifulSoup(html, "html.parser")

    for div in soup.find_all("div"):
        _convert_pandoc_alert(soup, div)

    for blockquote in soup.find_all("blockquote"):
        existing_classes = class_list(blockquote)
        if "umd-blockquote" in existing_classes:
            continue

        kind = _detect_and_remove_alert_marker(blockquote)
        if kind:
            alert = _alert_div(soup, kind)
            blockquote.insert_before(alert)
            for child in list(blockquote.contents):
                alert.append(child.extract())
            blockquote.extract()
            continue

        new_classes = list(existing_classes)
        for cls in blockquote_classes:
            if cls not in new_classes:
                new_classes.append(cls)
        blockquote["class"] = new_classes

    return str(soup)


def blockquote_enhancer_default(html: str, context: dict) -> str:
    """
    Default configuration for blockquote_enhancer.

    This is the function that should be registered in POSTPROCESSORS.
    """
    return blockquote_enhancer(html, context, blockquote_classes=["blockquote"])
