"""Map output-box heights and length presets to target word counts."""

from __future__ import annotations

from enum import Enum
from fractions import Fraction

from tone_resizer.utils.word_count import count_words

# Density model of the resizable output box
CHARS_PER_LINE = 85
CHARS_PER_WORD = 5
LINE_HEIGHT_PX = 24
PADDING_PX = 32

MIN_TARGET_WORDS = 20


class LengthPreset(str, Enum):
    CONCISE = "concise"
    BALANCED = "balanced"
    DETAILED = "detailed"


PRESET_RATIOS: dict[LengthPreset, Fraction] = {
    LengthPreset.CONCISE: Fraction(1, 2),
    LengthPreset.BALANCED: Fraction(1),
    LengthPreset.DETAILED: Fraction(3, 2),
}


def round_to_multiple(value: int, step: int = 5) -> int:
    """Round an integer to the nearest multiple of *step*, halves going up."""
    return ((2 * value + step) // (2 * step)) * step


def words_for_height(height: float) -> int:
    """Target word count for an output box *height* pixels tall.

    Always a multiple of 5, never below 20, and non-decreasing in *height*.
    """
    lines = int((height - PADDING_PX) // LINE_HEIGHT_PX)
    words_per_line = CHARS_PER_LINE // CHARS_PER_WORD
    return max(MIN_TARGET_WORDS, round_to_multiple(lines * words_per_line))


def target_words_for_preset(text: str, preset: LengthPreset | str) -> int:
    """Target word count for a length preset applied to *text*.

    ``balanced`` keeps the current count; the other presets scale it and
    never go below 20 words.
    """
    preset = LengthPreset(preset)
    current = count_words(text)
    if preset is LengthPreset.BALANCED:
        return current
    scaled = PRESET_RATIOS[preset] * current
    return max(MIN_TARGET_WORDS, int(scaled + Fraction(1, 2)))
