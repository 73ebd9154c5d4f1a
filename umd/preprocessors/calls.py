# umd/preprocessors/calls.py
"""
Preprocessor that protects call syntax (``&name(...){...};`` and ``@name(...)``).

Runs before every other protection pass so that call content, which may
contain anything, is opaque to them.
"""

from ..calls import parse_calls
from ..config import get_config
from ..placeholders import get_registry


def protect_calls(text: str, context: dict) -> str:
    config = get_config(context)
    return parse_calls(
        text,
        get_registry(context, text),
        max_depth=config["max_call_depth"],
        plugin_class=config["plugin_class"],
    )


def calls_default(text: str, context: dict) -> str:
    """
    Default configuration for protect_calls.

    This is the function that should be registered in PREPROCESSORS.
    """
    return protect_calls(text, context)
