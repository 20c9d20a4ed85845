"""Tests for height and preset to word-count mapping."""

import pytest

from tone_resizer.utils.sizing import (
    LengthPreset,
    round_to_multiple,
    target_words_for_preset,
    words_for_height,
)

from conftest import make_words


class TestWordsForHeight:
    def test_default_box(self):
        # (200 - 32) // 24 = 7 lines, 7 * 17 = 119 -> 120
        assert words_for_height(200) == 120

    def test_minimum_floor(self):
        assert words_for_height(0) == 20
        assert words_for_height(32) == 20

    def test_small_box_clamped(self):
        # 2 lines -> 34 words -> 35
        assert words_for_height(80) == 35
        # 0 lines -> 0 words -> clamped
        assert words_for_height(50) == 20

    def test_multiple_of_five(self):
        for height in range(0, 1000, 7):
            assert words_for_height(height) % 5 == 0

    def test_non_decreasing(self):
        previous = words_for_height(0)
        for height in range(1, 1200):
            current = words_for_height(height)
            assert current >= previous
            previous = current

    def test_accepts_float_heights(self):
        assert words_for_height(200.7) == words_for_height(200)


class TestRoundToMultiple:
    @pytest.mark.parametrize(
        "value,expected", [(0, 0), (17, 15), (34, 35), (51, 50), (119, 120), (102, 100)]
    )
    def test_nearest(self, value, expected):
        assert round_to_multiple(value) == expected


class TestPresets:
    def test_balanced_keeps_count(self):
        assert target_words_for_preset(make_words(73), "balanced") == 73

    def test_concise_halves(self):
        assert target_words_for_preset(make_words(100), LengthPreset.CONCISE) == 50

    def test_concise_rounds_half_up(self):
        assert target_words_for_preset(make_words(101), LengthPreset.CONCISE) == 51

    def test_detailed_scales_up(self):
        assert target_words_for_preset(make_words(100), LengthPreset.DETAILED) == 150

    def test_scaled_presets_floor_at_twenty(self):
        assert target_words_for_preset(make_words(10), "concise") == 20
        assert target_words_for_preset(make_words(10), "detailed") == 20

    def test_unknown_preset(self):
        with pytest.raises(ValueError):
            target_words_for_preset("text", "huge")
