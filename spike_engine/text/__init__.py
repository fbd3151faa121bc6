# text module
"""
Text processing for chat streams.

- Normalization of stretched characters and emphasis runs
- Character and word n-gram tokenizers
"""

from spike_engine.text.normalize import (
    EMPHASIS_CHARS,
    DEFAULT_MAX_REPEAT,
    derepeat,
    space_after_emphasis,
    normalize,
)
from spike_engine.text.ngrams import (
    unique_char_ngrams,
    word_ngrams,
)

__all__ = [
    # Normalization
    'EMPHASIS_CHARS',
    'DEFAULT_MAX_REPEAT',
    'derepeat',
    'space_after_emphasis',
    'normalize',
    # Tokenizers
    'unique_char_ngrams',
    'word_ngrams',
]
