# umd/extensions/escape_html.py
"""
Markdown extension that makes Python-Markdown treat raw HTML as text.

Python-Markdown passes raw HTML through by default and no longer has a safe
mode. Removing the HTML block preprocessor and the inline HTML pattern makes
``<b>`` and friends reach the serializer as plain text, where they are
escaped. This matches Pandoc's ``-raw_html`` reader setting.

Usage:
    markdown.markdown(text, extensions=["umd.extensions.escape_html"])
"""

from markdown.extensions import Extension


class EscapeHtmlExtension(Extension):
    def extendMarkdown(self, md):
        md.preprocessors.deregister("html_block", strict=False)
        md.inlinePatterns.deregister("html", strict=False)


def makeExtension(**kwargs):
    return EscapeHtmlExtension(**kwargs)
