"""Tests for fixed-pattern detection."""

import pytest

from simplify_lint.rules.fixed_pattern import fixed_pattern_text, is_fixed_pattern


@pytest.mark.parametrize(
    "pattern, fixed",
    [
        ("hello", True),
        ("a.b", False),
        ("\\d+", False),
        ("\\.", True),
        ("[x]", True),
        ("[^x]", False),
        ("", True),
        ("foo bar-baz_1", True),
        ("a\\*b", True),
        ("\\\\", True),
        ("[.]el", True),
        ("ab*", False),
        ("^foo", False),
        ("foo$", False),
        ("a?", False),
        ("\\w", False),
        ("\\bword\\b", False),
        ("\\(foo\\)", False),
        ("[ab]", False),
        ("[]", False),
        ("trailing\\", False),
    ],
)
def test_is_fixed_pattern(pattern, fixed):
    """Test which patterns count as matching a single literal string."""
    assert is_fixed_pattern(pattern) is fixed


def test_fixed_pattern_text_unescapes():
    """Test that escapes and single-character classes unwrap to their literal."""
    assert fixed_pattern_text("hello") == "hello"
    assert fixed_pattern_text("foo\\.el") == "foo.el"
    assert fixed_pattern_text("[*]x") == "*x"
    assert fixed_pattern_text("a\\\\b") == "a\\b"


def test_fixed_pattern_text_not_fixed():
    """Test that non-fixed patterns have no literal text."""
    assert fixed_pattern_text("a.b") is None
    assert fixed_pattern_text("[^x]") is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
