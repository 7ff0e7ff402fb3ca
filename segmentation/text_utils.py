"""Text utility functions for reference text preparation."""
from __future__ import annotations

import unicodedata
from typing import List


def _is_punctuation(ch: str) -> bool:
    return unicodedata.category(ch).startswith("P")


def _is_mark(ch: str) -> bool:
    return unicodedata.category(ch).startswith("M")


def remove_punctuation(text: str) -> str:
    """
    Drop every character that is neither alphanumeric, a combining mark nor whitespace.

    Combining marks (Thai vowels and tone marks, Devanagari matras) belong to
    the word they are attached to.

    Args:
        text: Raw reference text

    Returns:
        Text made only of alphanumeric, combining mark and whitespace characters
    """
    return "".join(ch for ch in text if ch.isalnum() or _is_mark(ch) or ch.isspace())


def strip_token_punctuation(token: str) -> str:
    """Trim leading and trailing punctuation and whitespace from a token."""
    start, end = 0, len(token)
    while start < end and (_is_punctuation(token[start]) or token[start].isspace()):
        start += 1
    while end > start and (_is_punctuation(token[end - 1]) or token[end - 1].isspace()):
        end -= 1
    return token[start:end]


def split_reference_words(text: str) -> List[str]:
    """
    Split a space-delimited reference text into comparable words.

    The text is lower-cased and split on whitespace; punctuation is trimmed
    from both ends of each token ("world." -> "world", "don't" stays intact).
    Tokens made only of punctuation are dropped.

    Args:
        text: Reference text

    Returns:
        List of lowercase words
    """
    words: List[str] = []
    for raw in text.lower().split():
        word = strip_token_punctuation(raw)
        if word:
            words.append(word)
    return words
