# umd/preprocessors/task_markers.py
"""
Preprocessor for indeterminate task list items.

    - [x] Done
    - [-] Partly done
    - [ ] Not started

``[-]`` is rewritten to an unchecked box followed by a directive token, and
the task_markers postprocessor marks that checkbox as indeterminate.
"""

import re

from ..placeholders import SpanKind, get_registry
from ..scanning import map_prose

TASK_MARKER = re.compile(r"^([ \t]*(?:[-*+]|\d+[.)])[ \t]+)\[-\](?=[ \t]|$)", re.MULTILINE)

LABEL = "task_marker"


def protect_task_markers(text: str, context: dict) -> str:
    registry = get_registry(context, text)

    def replace(match: re.Match) -> str:
        token = registry.register(SpanKind.DIRECTIVE, "indeterminate", label=LABEL)
        return f"{match.group(1)}[ ] {token}"

    return map_prose(text, lambda chunk: TASK_MARKER.sub(replace, chunk), include_spans=False)


def task_markers_default(text: str, context: dict) -> str:
    """
    Default configuration for protect_task_markers.

    This is the function that should be registered in PREPROCESSORS.
    """
    return protect_task_markers(text, context)
