# umd/renderer.py

import logging

from .config import CONFIG_KEY, get_render_config
from .engines import convert
from .placeholders import CONTEXT_KEY, PlaceholderRegistry
from .postprocessors import apply_postprocessors
from .postprocessors.utils import clear_shared_soup
from .preprocessors import apply_preprocessors

logger = logging.getLogger(__name__)


def render_markdown(text, context=None):
    """
    Main rendering function with pre/post processing pipeline.

    Extension syntax is swapped for placeholder tokens, the remaining
    CommonMark is rendered by the configured engine, and the tokens are
    then restored as HTML.

    Args:
        text: Raw markdown text
        context: Optional dict for processors that need additional data.
            ``context["config"]`` may hold render option overrides.

    Returns:
        HTML string

    Raises:
        ConfigurationError: on unknown render options
        EngineError: if the markdown engine fails
        PlaceholderError: if a placeholder could not be restored
    """
    context = context if context is not None else {}
    context[CONFIG_KEY] = get_render_config(context.get(CONFIG_KEY))
    # One registry per render call
    context[CONTEXT_KEY] = PlaceholderRegistry(text)

    try:
        # Pre-processing: protect extension syntax
        text = apply_preprocessors(text, context)

        html = convert(text, context)

        # Post-processing: sanitize, apply directives, restore tokens
        html = apply_postprocessors(html, context)
    finally:
        clear_shared_soup(context)

    logger.debug(f"Rendered document with {len(context[CONTEXT_KEY])} placeholder(s)")
    return html
