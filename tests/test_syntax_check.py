# FILE: tests/test_syntax_check.py

from snapcode.services.syntax_check import dangling_quote, is_likely_broken


def test_valid_component_not_broken(valid_component):
    """Balanced, fully quoted, bracket-matched source passes"""
    assert is_likely_broken(valid_component) is False


def test_unterminated_template_literal():
    """A single backtick means an unterminated template literal"""
    assert is_likely_broken("const s = `hello") is True


def test_escaped_backticks_ignored():
    """Escaped backticks do not count"""
    assert is_likely_broken("const s = `a \\` b`;") is False


def test_odd_single_quotes():
    """Unbalanced single quotes are flagged"""
    assert is_likely_broken("const a = 'x;\nconst b = 1;") is True


def test_odd_double_quotes():
    """Unbalanced double quotes are flagged"""
    assert is_likely_broken('<div className="box>hi</div>') is True


def test_quotes_inside_template_ignored():
    """Apostrophes inside template literals are free text"""
    assert is_likely_broken("const msg = `it's fine`;") is False


def test_bracket_imbalance_regardless_of_quotes():
    """Three { and two } is broken even when quotes are balanced"""
    text = "function a() {\n  if (x) {\n    const s = { k: 'v' };\n}\n"
    assert text.count("{") == 3 and text.count("}") == 2
    assert is_likely_broken(text) is True


def test_paren_and_square_imbalance():
    """Unequal () or [] counts are flagged"""
    assert is_likely_broken("foo(bar(1)") is True
    assert is_likely_broken("const a = [1, [2]") is True


def test_dangling_quote_before_closer():
    """Unmatched trailing quote followed by a closing token"""
    text = "const a = {\n  b: 'x' + '\n\n}\nconst c = 'y\"\""
    assert is_likely_broken(text) is True


def test_matched_string_before_closer_is_fine():
    """A complete string literal may end the line before a closer"""
    assert is_likely_broken("const items = [\n  'a',\n  'b'\n]\n") is False


def test_empty_and_none_input():
    """Empty input is not broken and None does not raise"""
    assert is_likely_broken("") is False
    assert is_likely_broken(None) is False


def test_dangling_quote_helper():
    """Only odd, unescaped trailing quotes count as dangling"""
    assert dangling_quote("x ? 'on' : '") == "'"
    assert dangling_quote('title: "') == '"'
    assert dangling_quote("  'b'") is None
    assert dangling_quote("const s = 'it\\'") is None
    assert dangling_quote("return x;") is None
