# umd/engines.py
"""
Adapters for the CommonMark engines that render the protected text.

Each adapter takes the markdown left after every protection pass and returns
HTML. Placeholder tokens are plain lowercase letters and digits, so any
engine passes them through untouched.
"""

import logging
import re
from functools import lru_cache

import markdown
import pypandoc

from .config import get_config, get_markdown_config, get_pandoc_config
from .exceptions import EngineError

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def pandoc_version():
    """Installed pandoc version as a tuple of ints, e.g. ``(3, 1, 9)``."""
    return tuple(int(part) for part in re.findall(r"\d+", pypandoc.get_pandoc_version()))


def convert_with_pandoc(text, context=None):
    """Render with Pandoc through pypandoc."""
    try:
        pandoc_config = get_pandoc_config(pandoc_version())
    except OSError as e:
        raise EngineError(str(e), engine="pandoc") from e

    try:
        return pypandoc.convert_text(
            text,
            to=pandoc_config["to"],
            format=pandoc_config["format"],
            extra_args=pandoc_config["extra_args"],
        )
    except (OSError, RuntimeError) as e:
        raise EngineError(str(e), engine="pandoc") from e


def convert_with_markdown(text, context=None):
    """Render with Python-Markdown."""
    return markdown.markdown(text, **get_markdown_config())


ENGINES = {
    "pandoc": convert_with_pandoc,
    "markdown": convert_with_markdown,
}


def convert(text, context):
    """Render ``text`` with the engine named in the render options."""
    engine = get_config(context)["engine"]
    logger.debug(f"Rendering {len(text)} characters with {engine}")
    return ENGINES[engine](text, context)


def pandoc_available():
    """Whether a pandoc binary can be found."""
    try:
        pypandoc.get_pandoc_version()
    except OSError:
        return False
    return True
