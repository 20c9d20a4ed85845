"""Tests for word counting and token estimates."""

import pytest

from tone_resizer.utils.word_count import (
    count_words,
    estimate_tokens,
    normalize_whitespace,
    scaled_ceil,
)

from conftest import make_words


class TestCountWords:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("don't stop", 2),
            ("state-of-the-art design", 2),
            ("It is 2024 now", 4),
            ("AI helps", 2),
            ("high school", 2),
            ("New York City", 3),
            ("a", 1),
        ],
    )
    def test_counting_rules(self, text, expected):
        assert count_words(text) == expected

    def test_empty_and_blank(self):
        assert count_words("") == 0
        assert count_words("   \n\t  ") == 0

    def test_line_breaks_and_runs_of_whitespace(self):
        assert count_words("Hello\n\nworld\r\n  again\tand   again ") == 5

    def test_punctuation_attached_to_words(self):
        assert count_words("Hi, Bob. Thanks!") == 3

    def test_standalone_punctuation_is_a_token(self):
        assert count_words("wait - what") == 3

    def test_large_text(self):
        assert count_words(make_words(500)) == 500

    @pytest.mark.parametrize(
        "text",
        ["  leading", "a\n\nb", "x \t y\r\nz", "one", "", "Subject: Hi\n\nBody text here"],
    )
    def test_stable_under_normalization(self, text):
        assert count_words(text) == count_words(normalize_whitespace(text))


class TestNormalizeWhitespace:
    def test_collapses_and_trims(self):
        assert normalize_whitespace("  a \n\n b\t c  ") == "a b c"

    def test_idempotent(self):
        once = normalize_whitespace(" x \n y ")
        assert normalize_whitespace(once) == once


class TestEstimates:
    def test_scaled_ceil_is_exact(self):
        assert scaled_ceil(50, 1.1) == 55
        assert scaled_ceil(10, 1.1) == 11
        assert scaled_ceil(11, 1.1) == 13

    def test_estimate_tokens(self):
        assert estimate_tokens(make_words(100)) == 130
        assert estimate_tokens(make_words(3)) == 4
        assert estimate_tokens("") == 0

    def test_estimate_tokens_custom_ratio(self):
        assert estimate_tokens(make_words(10), tokens_per_word=2) == 20
