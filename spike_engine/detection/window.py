# spike_engine/detection/window.py
"""
Sliding window of recent chats with TF-IDF-like summarization.

Each pushed message is normalized, split into unique character n-grams and
recorded in a (caller-owned) token dictionary. ``summary`` picks the most
representative message of the window:

    weight(t)  = ln(L / max(1, dictionary.count(t)))
    u_i        = weights of message i's tokens, L2-normalized
    score_i    = u_i . sum_j(u_j) - 1

i.e. degree centrality in the similarity graph where messages are linked
by the tokens they share, with self-similarity removed. Tokens that are
common in the long run get small weights, so the winner is the message
most typical of *this* burst rather than of the channel in general.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Generic, Iterator, List, Optional, Tuple, TypeVar

import numpy as np

from spike_engine.config import DEFAULT_NGRAM_RANGE, DEFAULT_PREFER_RECENT
from spike_engine.core.ring import RingBuffer
from spike_engine.errors import ConfigError
from spike_engine.stats.dictionary import Dictionary
from spike_engine.text.ngrams import unique_char_ngrams
from spike_engine.text.normalize import normalize

P = TypeVar("P")


@dataclass(frozen=True)
class ChatEntry(Generic[P]):
    """A window member: normalized text, its token set and caller payload."""
    text: str
    tokens: Tuple[str, ...]
    payload: Optional[P] = None


@dataclass(frozen=True)
class Summary(Generic[P]):
    """Top-ranked window member."""
    text: str
    payload: Optional[P]
    score: float


class ChatWindow(Generic[P]):
    """
    Bounded window of the last ``short_horizon`` chats.

    Args:
        short_horizon: S, window capacity
        long_horizon: L, numerator of the token weight
        ngram_range: Inclusive (min_n, max_n) for character n-grams
        prefer_recent: On equal scores, pick the more recent member
    """

    def __init__(
        self,
        short_horizon: int,
        long_horizon: int,
        ngram_range: Tuple[int, int] = DEFAULT_NGRAM_RANGE,
        prefer_recent: bool = DEFAULT_PREFER_RECENT,
    ):
        min_n, max_n = ngram_range
        if long_horizon < 1:
            raise ConfigError(f"long_horizon must be >= 1, got {long_horizon}")
        if min_n < 1 or max_n < min_n:
            raise ConfigError(f"invalid ngram_range {ngram_range!r}")

        self.long_horizon = long_horizon
        self.ngram_range = (min_n, max_n)
        self.prefer_recent = prefer_recent
        self._chats: RingBuffer[ChatEntry[P]] = RingBuffer(short_horizon)
        self._index = 0

    @property
    def capacity(self) -> int:
        return self._chats.capacity

    @property
    def message_index(self) -> int:
        """Logical index of the most recently pushed message (1-based)."""
        return self._index

    def tokenize(self, text: str) -> Tuple[str, ...]:
        return unique_char_ngrams(text, *self.ngram_range)

    def push(self, chat: str, dictionary: Dictionary, payload: Optional[P] = None) -> ChatEntry[P]:
        """Normalize, tokenize and record ``chat``; return the stored entry."""
        self._index += 1
        text = normalize(chat)
        tokens = self.tokenize(text)
        for token in tokens:
            dictionary.observe(token, self._index)
        entry = ChatEntry(text=text, tokens=tokens, payload=payload)
        self._chats.push(entry)
        return entry

    def scores(self, dictionary: Dictionary) -> List[float]:
        """Degree-centrality score of every member, oldest first."""
        entries = list(self._chats)
        if not entries:
            return []

        vocab: Dict[str, int] = {}
        for entry in entries:
            for token in entry.tokens:
                vocab.setdefault(token, len(vocab))

        weights = np.empty(len(vocab), dtype=float)
        for token, col in vocab.items():
            weights[col] = np.log(self.long_horizon / max(1.0, dictionary.count(token)))

        matrix = np.zeros((len(entries), len(vocab)), dtype=float)
        for row, entry in enumerate(entries):
            if entry.tokens:
                cols = [vocab[t] for t in entry.tokens]
                matrix[row, cols] = weights[cols]

        norms = np.linalg.norm(matrix, axis=1)
        # members without tokens (or with all-zero weights) have no direction
        degenerate = ~(norms > 0.0)
        unit = np.zeros_like(matrix)
        unit[~degenerate] = matrix[~degenerate] / norms[~degenerate, np.newaxis]

        centrality = unit @ unit.sum(axis=0) - 1.0
        centrality[degenerate] = 0.0
        centrality = np.nan_to_num(centrality, nan=0.0)
        return [float(v) for v in centrality]

    def summary(self, dictionary: Dictionary) -> Optional[Summary[P]]:
        """Most central member, ties broken by ``prefer_recent``. None if empty."""
        best: Optional[Summary[P]] = None
        for entry, score in zip(self._chats, self.scores(dictionary)):
            if best is None or score > best.score or (self.prefer_recent and score == best.score):
                best = Summary(text=entry.text, payload=entry.payload, score=score)
        return best

    def __len__(self) -> int:
        return len(self._chats)

    def __iter__(self) -> Iterator[ChatEntry[P]]:
        return iter(self._chats)

    def __repr__(self) -> str:
        return (
            f"ChatWindow(capacity={self.capacity}, size={len(self)}, "
            f"long_horizon={self.long_horizon}, ngram_range={self.ngram_range}, "
            f"prefer_recent={self.prefer_recent})"
        )


__all__ = [
    'ChatEntry',
    'Summary',
    'ChatWindow',
]
