# umd/calls/envelope.py
"""
HTML envelope for calls the engine does not implement itself.

External plugin executors read the envelope structurally:

    <template class="umd-plugin umd-plugin-{name}">
      <data value="0">first argument</data>
      <data value="1">second argument</data>
      content, HTML-escaped and otherwise verbatim
    </template>

Argument order and 0-based indexes are preserved. Missing arguments or
content simply leave out the corresponding markup. Content is never parsed,
so nested calls inside it survive byte for byte for the executor to re-feed.
"""

import html
import re

DEFAULT_PLUGIN_CLASS = "umd-plugin"

_SAFE_NAME = re.compile(r"[^A-Za-z0-9_-]")


def render_envelope(call, plugin_class: str = DEFAULT_PLUGIN_CLASS) -> str:
    name = _SAFE_NAME.sub("", call.name)
    parts = [f'<template class="{plugin_class} {plugin_class}-{name}">']

    for index, argument in enumerate(call.arguments):
        parts.append(f'<data value="{index}">{html.escape(argument, quote=False)}</data>')

    if call.content:
        parts.append(html.escape(call.content, quote=False))

    parts.append("</template>")
    return "".join(parts)
