# umd/preprocessors/tables.py
"""
Preprocessor that renders extended-dialect tables ahead of the engine.

Plain pipe tables are left in place for the engine's own table support.
"""

from ..placeholders import get_registry
from ..tables import expand_tables


def tables_default(text: str, context: dict) -> str:
    """
    Default configuration for expand_tables.

    This is the function that should be registered in PREPROCESSORS.
    """
    return expand_tables(text, get_registry(context, text))
