"""
Unit tests for balanced-delimiter scanning and argument splitting.
"""

from umd.calls.grammar import scan_braces, scan_double_braces, scan_name, scan_parens, split_arguments
from umd.scanning import find_code_regions


class TestSplitArguments:
    """Test top-level comma splitting."""

    def test_nested_commas_stay_together(self):
        """Commas inside brackets do not split."""
        assert split_arguments("a,(b,c),d") == ["a", "(b,c)", "d"]
        assert split_arguments("x,{y,z},[1,2]") == ["x", "{y,z}", "[1,2]"]

    def test_arguments_are_trimmed(self):
        """Whitespace around each argument is removed."""
        assert split_arguments(" a ,  b ") == ["a", "b"]

    def test_escaped_comma(self):
        """A backslash-escaped comma is literal."""
        assert split_arguments(r"a\,b,c") == ["a,b", "c"]

    def test_empty(self):
        """An empty or blank list has no arguments."""
        assert split_arguments("") == []
        assert split_arguments("   ") == []

    def test_empty_middle_argument_is_kept(self):
        """Positions are preserved even when an argument is empty."""
        assert split_arguments("a,,b") == ["a", "", "b"]


class TestScanners:
    """Test the delimiter scanners."""

    def test_scan_name(self):
        """Names start with a letter and continue with letters, digits, _ or -."""
        assert scan_name("abc-d_1(x)", 0) == (7, "abc-d_1")
        assert scan_name("1abc", 0) is None

    def test_scan_parens_nested(self):
        """Nested parentheses are balanced."""
        assert scan_parens("(a(b)c) rest", 0) == (7, "a(b)c")

    def test_scan_parens_blank_line_aborts(self):
        """A blank line ends the search."""
        assert scan_parens("(a\n\nb)", 0) is None

    def test_scan_parens_unterminated(self):
        """No closing parenthesis means no match."""
        assert scan_parens("(abc", 0) is None

    def test_scan_braces_nested(self):
        """Nested braces are balanced."""
        assert scan_braces("{a{b}c}", 0) == (7, "a{b}c")

    def test_scan_braces_skips_code(self):
        """A brace inside inline code does not count."""
        text = "{a `}` b}"
        assert scan_braces(text, 0, find_code_regions(text)) == (9, "a `}` b")

    def test_scan_braces_escaped(self):
        """A backslash-escaped brace does not count."""
        assert scan_braces(r"{a\}b}", 0) == (6, r"a\}b")

    def test_double_braces(self):
        """Double braces close at the first depth-zero pair."""
        assert scan_double_braces("{{ x {y} }}", 0) == (11, " x {y} ")

    def test_double_braces_nested_call(self):
        """An inner {{...}} closes itself before the outer pair."""
        text = "{{ @inner(){{a}} }}"
        assert scan_double_braces(text, 0) == (len(text), " @inner(){{a}} ")

    def test_double_braces_stray_close(self):
        """A lone closing brace at depth zero is text."""
        text = "{{ a } b }}"
        assert scan_double_braces(text, 0) == (len(text), " a } b ")

    def test_double_braces_allow_blank_lines(self):
        """Multi-line content may contain blank lines."""
        text = "{{\nfirst\n\nsecond\n}}"
        assert scan_double_braces(text, 0) == (len(text), "\nfirst\n\nsecond\n")
