# umd/__init__.py
"""
Universal Markdown: a CommonMark superset rendered through Pandoc.

    from umd import render_markdown

    html = render_markdown("&color(danger){**Careful**}; with ''bold'' text")
"""

from .exceptions import ConfigurationError, EngineError, PlaceholderError, UMDError
from .placeholders import PlaceholderRegistry, ProtectedSpan, SpanKind
from .renderer import render_markdown

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "EngineError",
    "PlaceholderError",
    "PlaceholderRegistry",
    "ProtectedSpan",
    "SpanKind",
    "UMDError",
    "render_markdown",
]
