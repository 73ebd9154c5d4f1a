"""
Unit tests for call recognition, dispatch and the built-in decorations.
"""

import pytest

from umd.calls import CallParser, CallShape, find_calls, parse_calls
from umd.placeholders import SpanKind


def payloads(registry, text):
    return [registry.get(token).payload for token in registry.find_tokens(text)]


class TestShapes:
    """Test recognition of the seven call shapes."""

    @pytest.mark.parametrize(
        "source, shape, arguments, content",
        [
            ("&color(red){text};", CallShape.INLINE_FULL, ["red"], "text"),
            ("&note{text};", CallShape.INLINE_FULL, [], "text"),
            ("&icon(star);", CallShape.INLINE_ARGS_ONLY, ["star"], ""),
            ("&hello;", CallShape.INLINE_NONE, [], ""),
            ("@code(py){{\nprint(1)\n}}", CallShape.BLOCK_MULTI_LINE, ["py"], "\nprint(1)\n"),
            ("@box(info){short}", CallShape.BLOCK_SINGLE_LINE, ["info"], "short"),
            ("@youtube(abc, 10)", CallShape.BLOCK_ARGS_ONLY, ["abc", "10"], ""),
            ("@toc()", CallShape.BLOCK_NONE, [], ""),
        ],
    )
    def test_shape(self, source, shape, arguments, content):
        """Each shape is recognised with its arguments and content."""
        calls = find_calls(source)
        assert len(calls) == 1
        call = calls[0]
        assert call.shape == shape
        assert call.arguments == arguments
        assert call.content == content
        assert call.source == source

    def test_positions(self):
        """start/end point at the call within the text."""
        text = "before &kbd(x); after"
        call = find_calls(text)[0]
        assert text[call.start : call.end] == "&kbd(x);"


class TestDisambiguation:
    """Test text that must not be read as a call."""

    @pytest.mark.parametrize(
        "text",
        [
            "Ping @alice today",
            "mail user@host(x)",
            "AT&T; rocks",
            "Fish &amp; chips",
            "a &lt; b",
            r"escaped \&kbd(x);",
            "unterminated &color(red){text",
            "missing semicolon &kbd(x)",
            "`&kbd(x);` in code",
            "```\n@youtube(abc)\n```",
        ],
    )
    def test_not_a_call(self, text):
        """Mentions, entities, escapes, unterminated calls and code are left alone."""
        assert find_calls(text) == []

    def test_nested_calls_are_balanced(self):
        """An inner call's braces do not close the outer call."""
        calls = find_calls("&outer(a){x &inner(b){y}; z};")
        assert len(calls) == 1
        assert calls[0].name == "outer"
        assert calls[0].content == "x &inner(b){y}; z"

    def test_multiple_calls(self):
        """Calls are found left to right."""
        names = [call.name for call in find_calls("&a; and &b(1); then @c()")]
        assert names == ["a", "b", "c"]


class TestGenericEnvelope:
    """Test the envelope used for calls without a built-in."""

    def test_block_envelope(self, registry):
        """Arguments become indexed data elements."""
        result = parse_calls("@youtube(abc, 1)", registry)
        span = registry.get(result)
        assert span.kind == SpanKind.BLOCK
        assert span.payload == (
            '<template class="umd-plugin umd-plugin-youtube">'
            '<data value="0">abc</data><data value="1">1</data></template>'
        )

    def test_content_is_escaped_verbatim(self, registry):
        """Content, nested calls included, is kept byte for byte."""
        result = parse_calls("&custom(x){a <b> &inner; c};", registry)
        span = registry.get(result)
        assert span.kind == SpanKind.INLINE
        assert span.payload.endswith("a &lt;b&gt; &amp;inner; c</template>")
        assert len(registry) == 1

    def test_custom_plugin_class(self, registry):
        """The envelope class is configurable."""
        result = parse_calls("@widget()", registry, plugin_class="ext")
        assert registry.get(result).payload == '<template class="ext ext-widget"></template>'

    def test_builtin_with_unsupported_shape_falls_back(self, registry):
        """A built-in that declines a shape produces an envelope."""
        result = parse_calls("&color(red);", registry)
        assert "umd-plugin-color" in registry.get(result).payload


class TestBuiltins:
    """Test built-in decorations."""

    def test_color_wraps_markdown(self, registry):
        """Wrapping built-ins leave the content in the text."""
        result = parse_calls("&color(danger){**hi**};", registry)
        open_token, close_token = registry.find_tokens(result)
        assert result == f"{open_token}**hi**{close_token}"
        assert registry.get(open_token).payload == '<span class="text-danger">'
        assert registry.get(close_token).payload == "</span>"

    def test_color_hex_and_background(self, registry):
        """Hex colours become styles, palette names classes."""
        result = parse_calls("&color(#f00,warning){x};", registry)
        assert payloads(registry, result)[0] == '<span class="bg-warning" style="color: #f00">'

    def test_color_scale_name(self, registry):
        """Bootstrap 5.3 scale names are classes, not dropped."""
        result = parse_calls("&color(red){x};", registry)
        assert payloads(registry, result)[0] == '<span class="text-red">'

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("1.5", '<span class="fs-4">'),
            ("0.875", '<span class="fs-6">'),
            ("1.5rem", '<span style="font-size: 1.5rem">'),
            ("3", '<span style="font-size: 3rem">'),
            ("12px", '<span style="font-size: 12px">'),
        ],
    )
    def test_size(self, registry, value, expected):
        """Scale values map to classes; others to styles."""
        result = parse_calls(f"&size({value}){{x}};", registry)
        assert payloads(registry, result)[0] == expected

    def test_element_with_arguments(self, registry):
        """Plain elements render their argument text atomically."""
        result = parse_calls("&kbd(Ctrl+C);", registry)
        assert registry.get(result).payload == "<kbd>Ctrl+C</kbd>"

    def test_element_escapes_argument(self, registry):
        """Argument text is escaped."""
        result = parse_calls("&sup(<x>);", registry)
        assert registry.get(result).payload == "<sup>&lt;x&gt;</sup>"

    def test_abbr(self, registry):
        """The content becomes the abbreviation's title."""
        result = parse_calls("&abbr(HTML){HyperText Markup Language};", registry)
        assert registry.get(result).payload == '<abbr title="HyperText Markup Language">HTML</abbr>'

    def test_badge(self, registry):
        """Badges pick up palette colours and the pill suffix."""
        result = parse_calls("&badge(primary){New}; &badge(success-pill){Ok}; &badge(bogus){?};", registry)
        opening = [payload for payload in payloads(registry, result) if payload.startswith("<span")]
        assert opening == [
            '<span class="badge bg-primary">',
            '<span class="badge rounded-pill bg-success">',
            '<span class="badge bg-secondary">',
        ]

    def test_badge_link(self, registry):
        """A badge holding a single link becomes the link."""
        result = parse_calls("&badge(info){[Docs](https://example.com)};", registry)
        assert registry.get(result).payload == '<a href="https://example.com" class="badge bg-info">Docs</a>'

    def test_badge_link_blocks_script_urls(self, registry):
        """Script URLs are neutralised."""
        result = parse_calls("&badge(info){[x](javascript:alert)};", registry)
        assert 'href="#"' in registry.get(result).payload

    def test_badge_link_with_parentheses(self, registry):
        """URLs with one level of parentheses still promote the badge."""
        result = parse_calls("&badge(info){[Wiki](https://en.wikipedia.org/wiki/Foo_(bar))};", registry)
        assert registry.get(result).payload == (
            '<a href="https://en.wikipedia.org/wiki/Foo_(bar)" class="badge bg-info">Wiki</a>'
        )

    def test_badge_link_blocks_script_urls_with_parentheses(self, registry):
        """A blocked scheme with a call in it still promotes the badge."""
        result = parse_calls("&badge(danger){[Err](javascript:alert(1))};", registry)
        assert registry.get(result).payload == '<a href="#" class="badge bg-danger">Err</a>'

    def test_line_breaks(self, registry):
        """br and wbr take no arguments."""
        result = parse_calls("a &br; b &wbr; c", registry)
        assert payloads(registry, result) == ["<br />", "<wbr />"]

    def test_clear(self, registry):
        """The clear block built-in renders a clearfix."""
        result = parse_calls("@clear()", registry)
        span = registry.get(result)
        assert span.kind == SpanKind.BLOCK
        assert span.payload == '<div class="clearfix"></div>'


class TestNesting:
    """Test nested built-ins and the depth limit."""

    def test_nested_builtins(self, registry):
        """Calls inside wrapping built-ins are parsed too."""
        result = parse_calls("&mark{a &kbd(x); b};", registry)
        assert payloads(registry, result) == ["<mark>", "<kbd>x</kbd>", "</mark>"]

    def test_depth_limit_leaves_text_literal(self, registry):
        """Content past the depth limit stays as written."""
        parser = CallParser(registry, max_depth=1)
        result = parser.parse("&mark{a &mark{b &mark{c};};};")
        assert "&mark{c};" in result
        assert len(registry) == 4
        assert parser.builtin_count == 2
