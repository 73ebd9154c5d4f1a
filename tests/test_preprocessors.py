"""
Unit tests for the protection passes that run before the engine.
"""

from umd.placeholders import SpanKind
from umd.preprocessors import PREPROCESSORS, apply_preprocessors
from umd.preprocessors.block_decorations import apply_block_decorations, apply_block_placement
from umd.preprocessors.calls import calls_default, protect_calls
from umd.preprocessors.comments import strip_comments
from umd.preprocessors.definition_lists import protect_definition_lists
from umd.preprocessors.header_ids import protect_header_ids
from umd.preprocessors.link_attributes import protect_link_attributes
from umd.preprocessors.normalize import normalize_line_endings
from umd.preprocessors.quote_blocks import protect_quote_blocks
from umd.preprocessors.raw_html import escape_raw_html
from umd.preprocessors.tables import tables_default
from umd.preprocessors.task_markers import protect_task_markers
from umd.preprocessors.underline import protect_underline


class TestPipeline:
    """Test the preprocessor registry."""

    def test_calls_run_before_tables(self):
        """Calls are protected before any other syntax."""
        assert PREPROCESSORS.index(calls_default) < PREPROCESSORS.index(tables_default)

    def test_apply_preprocessors_leaves_plain_text(self, context):
        """Ordinary markdown passes through unchanged."""
        text = "# Title\n\nSome *text* with [a link](https://example.com).\n"
        assert apply_preprocessors(text, context) == text

    def test_normalize_line_endings(self, context):
        """CRLF and CR become LF."""
        assert normalize_line_endings("a\r\nb\rc", context) == "a\nb\nc"


class TestComments:
    """Test comment stripping."""

    def test_line_comments(self, context):
        """Trailing and whole-line comments are removed."""
        assert strip_comments("keep // drop\n// whole\nnext", context) == "keep\nnext"

    def test_block_comment(self, context):
        """Block comments may span lines."""
        assert strip_comments("a /* x\ny */ b", context) == "a  b"

    def test_urls_survive(self, context):
        """A // directly after a character is not a comment."""
        text = "see https://example.com and [cdn](//cdn.example.com)"
        assert strip_comments(text, context) == text

    def test_code_is_untouched(self, context):
        """Comments inside code are kept."""
        text = "`a // b` x\n```\n// code\n```"
        assert strip_comments(text, context) == text

    def test_table_rows_keep_text(self, context):
        """A // inside a table row is cell text."""
        assert strip_comments("| a // b |", context) == "| a // b |"

    def test_disabled(self, context):
        """The strip_comments option turns the pass off."""
        context["config"]["strip_comments"] = False
        assert strip_comments("a // b", context) == "a // b"


class TestCalls:
    """Test call protection."""

    def test_calls_become_tokens(self, context, registry):
        """Atomic calls are replaced by a single token."""
        result = protect_calls("Press &kbd(Ctrl); now", context)
        token = registry.find_tokens(result)[0]
        assert result == f"Press {token} now"
        assert registry.get(token).payload == "<kbd>Ctrl</kbd>"


class TestBlockDecorations:
    """Test block placement and decorated paragraphs."""

    def test_table_placement(self, context, registry):
        """A placement line above a table adds classes to it."""
        text = tables_default("CENTER:\n| a |> |\n| 1 | 2 |", context)
        result = apply_block_placement(text, context)
        assert "CENTER:" not in result
        table = registry.spans(SpanKind.BLOCK)[0]
        assert table.payload.startswith('<table class="table umd-table w-auto mx-auto">')

    def test_block_call_placement(self, context, registry):
        """Other block tokens are wrapped in a placement div."""
        text = protect_calls("RIGHT:\n\n@clear()", context)
        apply_block_placement(text, context)
        block = registry.spans(SpanKind.BLOCK)[0]
        assert block.payload == '<div class="ms-auto me-0"><div class="clearfix"></div></div>'

    def test_placement_without_block_is_kept(self, context):
        """A lone placement line with no block below stays text."""
        text = protect_calls("LEFT:\n\n&kbd(x);", context)
        assert apply_block_placement(text, context).startswith("LEFT:")

    def test_decorated_paragraph(self, context, registry):
        """Prefixed lines become prefix tokens."""
        result = apply_block_decorations("COLOR(danger): SIZE(1.5): Watch out", context)
        token = registry.find_tokens(result)[0]
        assert result.strip() == f"{token} Watch out"
        span = registry.get(token)
        assert span.kind == SpanKind.PREFIX
        assert span.payload == '<p class="text-danger fs-4">'
        assert span.closing == "</p>"

    def test_prefix_only_and_indented_lines(self, context, registry):
        """Lines that are only prefixes, or are indented, are left alone."""
        text = "CENTER:\n    RIGHT: code"
        assert apply_block_decorations(text, context) == text
        assert len(registry) == 0


class TestQuoteBlocks:
    """Test the closed quote form."""

    def test_closed_quote(self, context, registry):
        """> text < becomes a prefix token."""
        result = protect_quote_blocks("> Quoted text <", context)
        token = registry.find_tokens(result)[0]
        assert result.strip() == f"{token} Quoted text"
        assert registry.get(token).payload == '<blockquote class="umd-blockquote">'

    def test_plain_quote_untouched(self, context):
        """Ordinary blockquotes are for the engine."""
        assert protect_quote_blocks("> just a quote", context) == "> just a quote"

    def test_nested_quote_untouched(self, context):
        """Nested quotes keep their levels."""
        assert protect_quote_blocks("> > q <", context) == "> > q <"


class TestDefinitionLists:
    """Test :term|definition lists."""

    def test_consecutive_lines_form_one_list(self, context, registry):
        """Terms and definitions become fragments of one list."""
        result = protect_definition_lists(":Term|Some *text*\n:Other|", context)
        blocks = registry.spans(SpanKind.BLOCK)
        assert len(blocks) == 1
        fragments = registry.spans(SpanKind.FRAGMENT)
        assert [span.payload for span in fragments] == ["Term", "Some *text*", "Other"]
        assert blocks[0].payload == (
            "<dl>\n"
            f"<dt>{fragments[0].token}</dt>\n"
            f"<dd>{fragments[1].token}</dd>\n"
            f"<dt>{fragments[2].token}</dt>\n"
            "<dd></dd>\n"
            "</dl>"
        )
        assert f"{fragments[1].token} Some *text*" in result.split("\n")


class TestDirectivePasses:
    """Test passes that leave work for postprocessors."""

    def test_header_id(self, context, registry):
        """The {#id} suffix becomes a directive token."""
        result = protect_header_ids("## Install {#install}\n\nText {#not-a-heading}", context)
        span = registry.spans(SpanKind.DIRECTIVE, label="header_id")[0]
        assert result == f"## Install {span.token}\n\nText {{#not-a-heading}}"
        assert span.payload == "install"

    def test_link_attributes(self, context, registry):
        """An attribute list after a link becomes a directive token."""
        result = protect_link_attributes("[Docs](https://example.com){.btn  #docs}", context)
        span = registry.spans(SpanKind.DIRECTIVE, label="link_attributes")[0]
        assert result == f"[Docs](https://example.com){span.token}"
        assert span.payload == ".btn #docs"

    def test_task_marker(self, context, registry):
        """[-] becomes an unchecked box plus a directive token."""
        result = protect_task_markers("- [-] Maybe\n- [ ] No", context)
        span = registry.spans(SpanKind.DIRECTIVE, label="task_marker")[0]
        assert result == f"- [ ] {span.token} Maybe\n- [ ] No"


class TestUnderline:
    """Test __underline__."""

    def test_underline(self, context, registry):
        """Double underscores become u tags outside words and code."""
        result = protect_underline("__under__ and snake__case__ and `__code__`", context)
        opening, closing = registry.find_tokens(result)
        assert result == f"{opening}under{closing} and snake__case__ and `__code__`"
        assert registry.get(opening).payload == "<u>"

    def test_horizontal_rule_untouched(self, context):
        """A line of underscores is a thematic break, not underline."""
        assert protect_underline("_____", context) == "_____"


class TestRawHtml:
    """Test escaping of typed HTML."""

    def test_tags_and_comments_are_escaped(self, context):
        """Tag, closing tag and comment openers become &lt;."""
        text = 'Hi <a href="x">y</a> <!-- c -->'
        assert escape_raw_html(text, context) == 'Hi &lt;a href="x">y&lt;/a> &lt;!-- c -->'

    def test_autolinks_and_comparisons_are_kept(self, context):
        """Autolinks, a lone < and escaped \\< are left for the engine."""
        text = r"<https://e.com> <me@e.com> a < b \<b>"
        assert escape_raw_html(text, context) == text

    def test_code_is_untouched(self, context):
        """Code spans and blocks keep their markup."""
        text = "`<b>`\n\n```\n<i>\n```\n\n    <u>"
        assert escape_raw_html(text, context) == text
