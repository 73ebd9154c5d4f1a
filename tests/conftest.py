"""Shared test fixtures for the umd test suite."""

import pytest

from umd import render_markdown
from umd.config import get_render_config
from umd.placeholders import PlaceholderRegistry


@pytest.fixture
def registry():
    """Provide a fresh placeholder registry."""
    return PlaceholderRegistry("")


@pytest.fixture
def context(registry):
    """Provide a render context using the pure-Python engine."""
    return {
        "config": get_render_config({"engine": "markdown"}),
        "placeholders": registry,
    }


@pytest.fixture
def render():
    """Render a document with the pure-Python engine; keyword options override the config."""

    def _render(text, **options):
        config = {"engine": "markdown"}
        config.update(options)
        return render_markdown(text, {"config": config})

    return _render
