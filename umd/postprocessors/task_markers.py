# umd/postprocessors/task_markers.py
"""
Postprocessor that marks ``[-]`` task items as indeterminate.

This postprocessor:
- Finds the checkbox the engine rendered for the item and sets
  ``data-task="indeterminate"`` and ``aria-checked="mixed"`` on it
- Creates the checkbox when the engine has no task list support and left the
  ``[ ]`` as text
"""

from bs4 import NavigableString

from ..placeholders import SpanKind
from .utils import find_token_node, get_shared_soup, soup_to_html

LABEL = "task_marker"


def apply_task_markers(html: str, context: dict) -> str:
    registry = context.get("placeholders")
    if registry is None:
        return html
    spans = [span for span in registry.spans(SpanKind.DIRECTIVE, label=LABEL) if not span.consumed]
    if not spans:
        return html

    soup = get_shared_soup(html, context)

    for span in spans:
        node = find_token_node(soup, span.token)
        if node is None:
            continue
        item = node.find_parent("li")
        if item is None:
            continue

        before, _, after = str(node).partition(span.token)
        checkbox = item.find("input", attrs={"type": "checkbox"})
        if checkbox is None:
            before = before.rstrip()
            if not before.endswith("[ ]"):
                continue
            before = before[:-3]
            checkbox = soup.new_tag("input", attrs={"type": "checkbox", "disabled": ""})
            if before:
                node.insert_before(NavigableString(before))
            node.insert_before(checkbox)
            before = ""

        checkbox["data-task"] = "indeterminate"
        checkbox["aria-checked"] = "mixed"
        node.replace_with(NavigableString(before + after.lstrip()))
        registry.consume(span.token)

    return soup_to_html(context, soup)


def task_markers_default(html: str, context: dict) -> str:
    """
    Default configuration for apply_task_markers.

    This is the function that should be registered in POSTPROCESSORS.
    """
    return apply_task_markers(html, context)
