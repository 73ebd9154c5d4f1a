# umd/config.py

import os

from .exceptions import ConfigurationError

CONFIG_KEY = "config"

ENGINES = ("pandoc", "markdown")


def get_pandoc_config(pandoc_version=None):
    """
    Configuration for pypandoc/Pandoc markdown rendering.

    The input is read as GitHub-flavoured markdown with raw HTML disabled.
    Some pandoc releases ignore that flag, so typed markup is escaped earlier
    by the raw_html preprocessor as well. Automatic heading identifiers are
    off; custom ids come from the ``{#id}`` syntax instead.

    Args:
        pandoc_version: Installed pandoc version as a tuple of ints. Pandoc
            3.8 replaced ``--no-highlight`` with ``--syntax-highlighting``.
    """
    return {
        "format": "gfm-raw_html-gfm_auto_identifiers",
        "to": "html5",
        "extra_args": [
            "--wrap=none",
            # Code highlighting is left to the front end
            "--syntax-highlighting=none" if pandoc_version and pandoc_version >= (3, 8) else "--no-highlight",
        ],
    }


def get_markdown_config():
    """
    Configuration for the pure-Python engine (Python-Markdown).

    Used where no pandoc binary is available. Raw HTML is disabled by the
    ``umd.extensions.escape_html`` extension.
    """
    return {
        "extensions": [
            "tables",
            "fenced_code",
            "sane_lists",
            "umd.extensions.escape_html",
        ],
        "output_format": "html",
    }


def get_render_config(overrides=None):
    """
    Options for one render call.

    Args:
        overrides: Optional dict of option name -> value

    Raises:
        ConfigurationError: on an unknown option name or engine
    """
    config = {
        # Which markdown engine renders the protected text
        "engine": os.environ.get("UMD_ENGINE", "pandoc"),
        # Deepest nesting at which built-in call content is still parsed
        "max_call_depth": 16,
        # Remove // and /* */ comments before rendering
        "strip_comments": True,
        # Run bleach over the engine output
        "sanitize": True,
        # Base class of generic plugin envelopes
        "plugin_class": "umd-plugin",
    }

    for name, value in (overrides or {}).items():
        if name not in config:
            raise ConfigurationError(f"Unknown render option '{name}'", option=name)
        config[name] = value

    if config["engine"] not in ENGINES:
        raise ConfigurationError(
            f"Unknown engine '{config['engine']}', expected one of {', '.join(ENGINES)}",
            option="engine",
        )

    return config


def get_config(context):
    """Return the render options stored in ``context``, resolving defaults on first use."""
    config = context.get(CONFIG_KEY)
    if config is None:
        config = get_render_config()
        context[CONFIG_KEY] = config
    return config
