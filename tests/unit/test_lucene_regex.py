"""
Unit tests for the fast regex dialect.

The dialect reads several Java constructs as literals; these tests pin that
behaviour down, since the regex adapter relies on it when deciding which
patterns the fast engine may run.
"""

import pytest

from query_builder.errors import RegexSyntaxError
from query_builder.lucene_regex import (
    alternation, compile_lucene_regex, escape_lucene_regex, is_valid_lucene_regex,
)


def matches(pattern, text):
    return compile_lucene_regex(pattern).fullmatch(text) is not None


class TestOperators:

    def test_union(self):
        assert matches("could|would|should", "would")
        assert not matches("could|would|should", "wouldn")

    def test_repetition(self):
        assert matches("[0-9]+", "2020")
        assert matches("ab?c", "ac")
        assert matches("(ab)*", "abab")
        assert matches("a{2,3}", "aaa")
        assert not matches("a{2,3}", "aaaa")
        assert matches("a{2,}", "aaaaa")
        assert matches("a{2}", "aa")

    def test_whole_term_match(self):
        assert not matches("run", "running")

    def test_dot_matches_any_character(self):
        assert matches("a.c", "a\nc")

    def test_negated_class(self):
        assert matches("[^aeiou]x", "bx")
        assert not matches("[^aeiou]x", "ax")

    def test_empty_pattern_matches_empty_term(self):
        assert matches("", "")
        assert not matches("", "a")

    def test_empty_group(self):
        assert matches("a()b", "ab")


class TestLiteralReadings:
    """Java operators the fast dialect reads as plain characters."""

    def test_escaped_letter_is_literal(self):
        assert matches(r"\d", "d")
        assert not matches(r"\d", "5")

    def test_non_capturing_group_prefix_is_literal(self):
        assert matches("(?:ab)", "?:ab")
        assert not matches("(?:ab)", "ab")

    def test_anchors_are_literal(self):
        assert matches("^a$", "^a$")

    def test_optional_operators_are_literal(self):
        assert matches("a&b", "a&b")
        assert matches("~a", "~a")
        assert matches("<1-5>", "<1-5>")
        assert not matches("<1-5>", "3")
        assert matches("a@", "a@")
        assert matches('"ab"', '"ab"')
        assert matches("#", "#")


class TestSyntaxErrors:

    def test_property_class_is_rejected(self):
        with pytest.raises(RegexSyntaxError) as excinfo:
            compile_lucene_regex(r"\p{Punct}")
        assert "integer expected" in str(excinfo.value)

    def test_unclosed_group(self):
        with pytest.raises(RegexSyntaxError):
            compile_lucene_regex("(ab")

    def test_unclosed_class(self):
        with pytest.raises(RegexSyntaxError):
            compile_lucene_regex("[ab")

    def test_trailing_dash_in_class(self):
        with pytest.raises(RegexSyntaxError):
            compile_lucene_regex("[a-]")

    def test_reversed_range(self):
        with pytest.raises(RegexSyntaxError) as excinfo:
            compile_lucene_regex("[z-a]")
        assert "invalid range" in str(excinfo.value)

    def test_error_reports_position(self):
        with pytest.raises(RegexSyntaxError) as excinfo:
            compile_lucene_regex("ab)")
        assert excinfo.value.position == 2
        assert excinfo.value.pattern == "ab)"

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            compile_lucene_regex("a{x}")


def test_inverted_repeat_bounds_match_nothing():
    assert not matches("a{3,1}", "aa")
    assert not matches("a{3,1}", "")


def test_is_valid_lucene_regex():
    assert is_valid_lucene_regex("_pos_(vb.*)")
    assert not is_valid_lucene_regex(r"\p{Lu}")


def test_escape_lucene_regex():
    assert escape_lucene_regex("a.b") == "a\\.b"
    assert matches(escape_lucene_regex("can't?"), "can't?")


def test_alternation_matches_each_literal():
    pattern = alternation(["run", "runs", "o.k."])
    assert pattern == "run|runs|o\\.k\\."
    assert matches(pattern, "o.k.")
    assert not matches(pattern, "oxkx")
