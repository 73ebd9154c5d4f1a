"""
End-to-end tests for render_markdown using the pure-Python engine.
"""

import pytest

from umd import ConfigurationError, render_markdown
from umd.config import get_pandoc_config
from umd.engines import convert
from umd.placeholders import CONTEXT_KEY
from umd.preprocessors import apply_preprocessors

PLAIN_DOCUMENTS = [
    "# Title\n\nSome *text* with [a link](https://example.com).\n",
    "- one\n- two\n\n1. first\n2. second\n",
    "> quoted\n> text\n\n```\ncode here\n```\n",
    "| a | b |\n|---|---|\n| 1 | 2 |\n",
    "Hello **world** and `code`.\n\n---\n\nEnd.\n",
    "Para\n\n    indented code\n",
]


class TestInlineSyntax:
    """Test inline extensions through the whole pipeline."""

    def test_quote_emphasis(self, render):
        """Quote-style markers render as b, i and s."""
        html = render("''bold'' '''italic''' %%gone%%")
        assert "<b>bold</b>" in html
        assert "<i>italic</i>" in html
        assert "<s>gone</s>" in html

    def test_underline(self, render):
        """__text__ is underline, not strong."""
        assert "<u>under</u>" in render("Some __under__ text")

    def test_color_call_keeps_markdown(self, render):
        """Content of a wrapping call is still rendered as markdown."""
        html = render("Say &color(danger){**hi**};")
        assert '<span class="text-danger"><strong>hi</strong></span>' in html

    def test_kbd_call(self, render):
        """Atomic calls restore their HTML."""
        assert "<kbd>Ctrl</kbd>" in render("Press &kbd(Ctrl); now")

    def test_mentions_and_entities_untouched(self, render):
        """Text that only looks like a call is left alone."""
        html = render("Ping @alice about AT&T today")
        assert "@alice" in html
        assert "AT&amp;T" in html

    def test_calls_in_code_untouched(self, render):
        """Calls inside code spans stay literal."""
        html = render("Use `&kbd(x);` here")
        assert "<code>&amp;kbd(x);</code>" in html
        assert "<kbd>" not in html


class TestBlockSyntax:
    """Test block extensions through the whole pipeline."""

    def test_block_call(self, render):
        """A block call replaces its paragraph with the envelope."""
        html = render("@youtube(abc)")
        assert html.strip() == (
            '<template class="umd-plugin umd-plugin-youtube"><data value="0">abc</data></template>'
        )

    def test_extended_table(self, render):
        """Merged cells and markdown inside cells both render."""
        html = render("| a |> |\n| *1* | 2 |")
        assert '<td colspan="2">a</td>' in html
        assert "<td><em>1</em></td>" in html
        assert '<table class="table umd-table">' in html

    def test_plain_table_is_styled(self, render):
        """Engine tables get Bootstrap classes for their alignment."""
        html = render("| a | b |\n|:-:|---|\n| 1 | 2 |")
        assert '<table class="table">' in html
        assert 'class="text-center"' in html
        assert "text-align" not in html

    def test_table_placement(self, render):
        """A placement line moves the following table."""
        html = render("CENTER:\n| a |> |\n| 1 | 2 |")
        assert "w-auto mx-auto" in html
        assert "CENTER:" not in html

    def test_decorated_paragraph(self, render):
        """Line prefixes style the paragraph."""
        assert '<p class="text-danger">Watch out</p>' in render("COLOR(danger): Watch out")

    def test_closed_quote(self, render):
        """> text < is a closed blockquote."""
        html = render("> Quoted <")
        assert '<blockquote class="umd-blockquote">Quoted</blockquote>' in html

    def test_plain_blockquote(self, render):
        """Ordinary blockquotes get the Bootstrap class."""
        assert '<blockquote class="blockquote">' in render("> Just a quote")

    def test_alert_blockquote(self, render):
        """GitHub alert markers become alert boxes."""
        html = render("> [!WARNING]\n> Careful now")
        assert 'class="alert alert-warning"' in html
        assert "[!WARNING]" not in html

    def test_definition_list(self, render):
        """:term|definition lines become a dl."""
        html = render(":Term|Some *text*")
        assert "<dt>Term</dt>" in html
        assert "<dd>Some <em>text</em></dd>" in html

    def test_indented_code_is_not_a_table(self, render):
        """Table syntax inside an indented code block stays code."""
        html = render("Para\n\n    | a |> |\n    | b | c |\n")
        assert "umd-table" not in html
        assert "<pre><code>" in html
        assert "| b | c |" in html

    def test_indented_code_keeps_calls(self, render):
        """Call syntax inside an indented code block stays literal."""
        html = render("Para\n\n    &color(red){x};\n")
        assert "&amp;color(red){x};" in html

    def test_named_colour_call(self, render):
        """Bootstrap scale colours map to classes."""
        assert '<span class="text-red">x</span>' in render("&color(red){x};")

    def test_comments_stripped(self, render):
        """Comments never reach the output."""
        html = render("Visible // hidden\n\n/* gone */ shown")
        assert "hidden" not in html
        assert "gone" not in html
        assert "shown" in html


class TestDirectiveSyntax:
    """Test syntax applied by postprocessors."""

    def test_header_id(self, render):
        """{#id} sets the heading id."""
        html = render("## Install {#install}")
        assert 'id="install"' in html
        assert "{#install}" not in html

    def test_link_attributes(self, render):
        """{.class #id} after a link decorates it."""
        html = render("[Docs](https://example.com){.btn #docs}")
        assert 'class="btn"' in html
        assert 'id="docs"' in html

    def test_indeterminate_task(self, render):
        """[-] renders as an indeterminate checkbox."""
        html = render("- [-] Maybe")
        assert 'data-task="indeterminate"' in html
        assert "[-]" not in html


class TestSafety:
    """Test that user HTML cannot get through."""

    def test_raw_html_is_escaped(self, render):
        """Typed tags come out as text."""
        html = render("Hello <script>alert(1)</script>")
        assert "<script>" not in html
        assert "&lt;script&gt;" in html

    def test_raw_link_is_escaped(self, render):
        """A typed anchor is shown, not linked."""
        html = render('Hi <a href="http://evil">x</a>')
        assert '<a href="http://evil"' not in html
        assert "&lt;a" in html

    def test_autolink_survives(self, render):
        """Autolinks are not mistaken for tags."""
        assert 'href="https://example.com"' in render("See <https://example.com>")

    def test_no_tokens_survive(self):
        """Every registered placeholder is consumed."""
        context = {"config": {"engine": "markdown"}}
        html = render_markdown(
            "# Title {#t}\n\n&kbd(x); ''b'' __u__\n\n| a |> |\n| 1 | 2 |\n\n:T|D\n\n- [-] x",
            context,
        )
        registry = context[CONTEXT_KEY]
        assert len(registry) > 0
        assert registry.prefix not in html
        assert registry.pending() == []


class TestDroppedCarriers:
    """Test calls whose surrounding text the engine discards."""

    def test_unused_reference_definition(self, render):
        """A call in an unused link definition vanishes with it."""
        html = render("[ref]: &kbd(x);\n\nText")
        assert "<p>Text</p>" in html
        assert "<kbd>" not in html

    def test_html_comment(self, render):
        """A call inside a typed HTML comment renders without error."""
        html = render("<!-- &kbd(c); -->")
        assert "<!--" not in html


class TestRoundTrip:
    """Test that protection is invisible for plain CommonMark."""

    @pytest.mark.parametrize("text", PLAIN_DOCUMENTS)
    def test_plain_markdown_is_unchanged(self, context, text):
        """Protecting, rendering and restoring equals rendering alone."""
        registry = context[CONTEXT_KEY]
        protected = apply_preprocessors(text, context)
        assert registry.restore(convert(protected, context)) == convert(text, context)


class TestConfiguration:
    """Test render options."""

    def test_unknown_option(self, render):
        """Unknown option names are rejected."""
        with pytest.raises(ConfigurationError):
            render("x", colour="red")

    def test_unknown_engine(self, render):
        """Unknown engines are rejected."""
        with pytest.raises(ConfigurationError):
            render("x", engine="commonmark-rs")

    def test_pandoc_highlight_flag(self):
        """The highlighting switch follows the installed pandoc version."""
        assert "--syntax-highlighting=none" in get_pandoc_config((3, 8))["extra_args"]
        assert "--no-highlight" in get_pandoc_config((3, 1, 9))["extra_args"]
        assert "--no-highlight" in get_pandoc_config()["extra_args"]

    def test_comments_can_be_kept(self, render):
        """Disabling comment stripping keeps the text."""
        assert "// kept" in render("a // kept", strip_comments=False)
