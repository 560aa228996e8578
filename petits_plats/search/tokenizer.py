from __future__ import annotations

import re

# Punctuation treated as word separators, plus any whitespace run.
_SEPARATORS = re.compile(r"[.,;:()'\s]+")

DEFAULT_MIN_WORD_LENGTH = 3


def normalize(value: str) -> str:
    return value.strip().lower()


def split_words(text: str, min_length: int = DEFAULT_MIN_WORD_LENGTH) -> list[str]:
    """Split free text into lowercase words, dropping words shorter than *min_length*."""
    return [word for word in _SEPARATORS.split(text.lower()) if len(word) >= min_length]
