# spike_engine/text/normalize.py
"""
Chat message normalization.

Chat lines are full of stretched characters ("ㅋㅋㅋㅋㅋ", "!!!!!", "sooooo")
that would otherwise flood the n-gram statistics. Normalization:

1. Caps runs of an identical character (``derepeat``).
2. Inserts a space after a run of emphasis/punctuation characters when it
   is immediately followed by a different character
   (``space_after_emphasis``), so "ㅋㅋㅋ대박" and "ㅋㅋㅋ 대박" tokenize alike.
"""

from __future__ import annotations

# Korean laughter/crying/surprise jamo plus common punctuation
EMPHASIS_CHARS = frozenset("ㅋㅎㅜㅠㄷ!.,?")

DEFAULT_MAX_REPEAT = 3


def derepeat(text: str, max_repeat: int = DEFAULT_MAX_REPEAT) -> str:
    """Keep at most ``max_repeat`` consecutive copies of any character."""
    out = []
    last = None
    run = 0
    for ch in text:
        if ch == last:
            run += 1
        else:
            last = ch
            run = 0
        if run < max_repeat:
            out.append(ch)
    return "".join(out)


def space_after_emphasis(text: str, separator: str = " ") -> str:
    """
    Insert ``separator`` where an emphasis run meets a different character.

    A single emphasis character is a run of one, so ``"3.14"`` becomes
    ``"3. 14"`` and ``"?!"`` becomes ``"? !"``. Mixed punctuation is split into
    separate runs that tokenize independently.
    """
    out = []
    prev = None
    for ch in text:
        if (
            prev is not None
            and prev in EMPHASIS_CHARS
            and ch != prev
            and not ch.isspace()
        ):
            out.append(separator)
        out.append(ch)
        prev = ch
    return "".join(out)


def normalize(text: str) -> str:
    """Normalize a raw chat line before tokenization."""
    return space_after_emphasis(derepeat(text))


__all__ = [
    'EMPHASIS_CHARS',
    'DEFAULT_MAX_REPEAT',
    'derepeat',
    'space_after_emphasis',
    'normalize',
]
