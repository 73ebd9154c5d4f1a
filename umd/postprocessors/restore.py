# umd/postprocessors/restore.py
"""
Postprocessor that swaps placeholder tokens for their resolved HTML.

Runs after every pass that still needs extension markup hidden, and before
the passes that style the final document.
"""

from ..placeholders import CONTEXT_KEY


def restore_placeholders(html: str, context: dict) -> str:
    registry = context.get(CONTEXT_KEY)
    if registry is None:
        return html
    return registry.restore(html)


def restore_default(html: str, context: dict) -> str:
    """
    Default configuration for restore_placeholders.

    This is the function that should be registered in POSTPROCESSORS.
    """
    return restore_placeholders(html, context)
