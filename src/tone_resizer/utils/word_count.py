"""Word counting shared by the request builder, the enhancer and the clients.

Every length decision in the rewrite protocol goes through :func:`count_words`,
so the number shown to the user before a request is the same number the
enhancer validates the model output against.
"""

from __future__ import annotations

import math
import re
from fractions import Fraction

_WHITESPACE_RE = re.compile(r"\s+")

TOKENS_PER_WORD = 1.3


def normalize_whitespace(text: str) -> str:
    """Collapse every whitespace run (line breaks included) to one space and trim."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def count_words(text: str) -> int:
    """Count words under the fixed counting rules.

    - Contractions ("don't"), numerals ("2024"), acronyms ("AI") and
      hyphenated compounds ("state-of-the-art") are one word each.
    - A pre-joined phrase token that still holds an internal space and no
      hyphen counts once per sub-token ("high school" is two words).
    """
    if not text:
        return 0

    total = 0
    for token in normalize_whitespace(text).split(" "):
        if not token:
            continue
        if " " in token and "-" not in token:
            total += len([part for part in token.split(" ") if part])
        else:
            total += 1
    return total


def scaled_ceil(value: int, factor: float) -> int:
    """Return ``ceil(value * factor)`` using the decimal value of *factor*.

    ``50 * 1.1`` is 55.00000000000001 in binary floating point; going through
    :class:`~fractions.Fraction` keeps the ceiling at 55.
    """
    return math.ceil(value * Fraction(str(factor)))


def estimate_tokens(text: str, tokens_per_word: float = TOKENS_PER_WORD) -> int:
    """Rough model-token estimate for *text*."""
    return scaled_ceil(count_words(text), tokens_per_word)
