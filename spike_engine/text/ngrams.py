# spike_engine/text/ngrams.py
"""
Tokenizers.

Character n-grams are the tokens used for frequency statistics: they need
no language-specific segmentation and behave well on short, noisy chat.
"""

from __future__ import annotations

from typing import List, Tuple


def unique_char_ngrams(text: str, min_n: int = 1, max_n: int = 4) -> Tuple[str, ...]:
    """
    Deduplicated, sorted character n-grams of ``text`` for n in [min_n, max_n].

    Both bounds are clipped to the text length, so a message shorter than
    ``min_n`` still contributes itself as a single token.

    Example:
        >>> unique_char_ngrams("abab", 1, 2)
        ('a', 'ab', 'b', 'ba')
    """
    if not text:
        return ()
    size = len(text)
    lo = min(min_n, size)
    hi = min(max_n, size)
    grams = {
        text[i:i + n]
        for n in range(lo, hi + 1)
        for i in range(size - n + 1)
    }
    return tuple(sorted(grams))


def word_ngrams(text: str, n: int = 1) -> List[str]:
    """
    Whitespace-delimited word n-grams joined by a single space.

    Example:
        >>> word_ngrams("one two three", 2)
        ['one two', 'two three']
    """
    words = text.split()
    if n <= 1:
        return words
    return [" ".join(words[i:i + n]) for i in range(len(words) - n + 1)]


__all__ = [
    'unique_char_ngrams',
    'word_ngrams',
]
