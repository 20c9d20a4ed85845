"""Strip lightweight markup a language model may add to plain-text output."""

from __future__ import annotations

import re

# (pattern, replacement) pairs; each pass only ever removes characters
_PASSES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"\*\*(.*?)\*\*", re.DOTALL), r"\1"),  # bold
    (re.compile(r"\*(.*?)\*", re.DOTALL), r"\1"),  # italic
    (re.compile(r"`(.*?)`", re.DOTALL), r"\1"),  # inline code
    (re.compile(r"_{2,}"), ""),  # separator runs
    (re.compile(r"(?<![\w_])_[^_\s](?:[^_]*?[^_\s])?_(?![\w_])"), ""),  # _placeholder_ spans
    (re.compile(r"#{1,6}\s"), ""),  # heading markers
    (re.compile(r"\[(.*?)\]\(.*?\)", re.DOTALL), r"\1"),  # links keep their text
]


def _strip_once(text: str) -> str:
    for pattern, replacement in _PASSES:
        text = pattern.sub(replacement, text)
    return text.strip()


def sanitize(raw: str) -> str:
    """Return *raw* as plain text.

    Emphasis, code and link markers are removed but their inner text is kept.
    Underscore-wrapped spans, separator runs and heading markers are dropped.
    Passes repeat until nothing changes, so ``sanitize(sanitize(x)) == sanitize(x)``.
    """
    text = raw.strip()
    while True:
        cleaned = _strip_once(text)
        if cleaned == text:
            return cleaned
        text = cleaned
