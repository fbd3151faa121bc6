# spike_engine/stats/dictionary.py
"""
Decaying token frequency dictionary.

Counts are decayed by a logical event index (one tick per chat message)
rather than wall time. Decay is applied lazily: each entry stores its count
as of its last update, and ``_decayed`` brings it forward whenever it is
read or written. Entries that have decayed to insignificance are vacuumed
opportunistically once the dictionary has grown enough since the last pass.

Example:
    ```python
    from spike_engine.stats import DecayingDictionary

    vocab = DecayingDictionary(long_horizon=100)
    vocab.observe("ㅋㅋ", 1)
    vocab.observe("ㅋㅋ", 2)
    vocab.count("ㅋㅋ")   # ~ 1.99
    ```
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, Iterator, Protocol, runtime_checkable

from spike_engine.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_VACUUM_MIN_SIZE = 8
DEFAULT_VACUUM_GROWTH_RATIO = 1.5
# decay ** L with decay = 1 - 1/L tends to e^-1
DEFAULT_SIGNIFICANCE_FLOOR = math.exp(-1.0)


@runtime_checkable
class Dictionary(Protocol):
    """Token statistics consumed by ``ChatWindow``."""

    def observe(self, token: str, index: int) -> None:
        ...

    def count(self, token: str) -> float:
        ...


@dataclass
class TokenEntry:
    count: float
    last_updated: int


class DecayingDictionary:
    """
    Exponentially decayed per-token occurrence counts.

    Not thread-safe. Several detectors may share one instance as long as
    the caller serializes access.

    Args:
        long_horizon: L; counts decay by ``1 - 1/L`` per logical index
        vacuum_min_size: No vacuum while the dictionary holds this many
            tokens or fewer
        vacuum_growth_ratio: Vacuum once size exceeds the post-vacuum size
            times this ratio
        significance_floor: Entries at or below this decayed count are
            dropped by a vacuum pass
    """

    def __init__(
        self,
        long_horizon: int,
        vacuum_min_size: int = DEFAULT_VACUUM_MIN_SIZE,
        vacuum_growth_ratio: float = DEFAULT_VACUUM_GROWTH_RATIO,
        significance_floor: float = DEFAULT_SIGNIFICANCE_FLOOR,
    ):
        if long_horizon < 1:
            raise ConfigError(f"long_horizon must be >= 1, got {long_horizon}")
        if vacuum_growth_ratio < 1.0:
            raise ConfigError(f"vacuum_growth_ratio must be >= 1, got {vacuum_growth_ratio}")
        if significance_floor < 0.0:
            raise ConfigError(f"significance_floor must be >= 0, got {significance_floor}")

        self.long_horizon = long_horizon
        self.decay = 1.0 - 1.0 / long_horizon
        self.vacuum_min_size = vacuum_min_size
        self.vacuum_growth_ratio = vacuum_growth_ratio
        self.significance_floor = significance_floor

        self._tokens: Dict[str, TokenEntry] = {}
        self._index = 0
        self._last_vacuum_size = 0
        self._last_vacuum_index = 0

    @property
    def index(self) -> int:
        """Latest logical index seen by ``observe``."""
        return self._index

    @property
    def last_vacuum_index(self) -> int:
        return self._last_vacuum_index

    def _decayed(self, entry: TokenEntry, index: int) -> float:
        gap = max(0, index - entry.last_updated)
        return entry.count * self.decay ** gap

    def observe(self, token: str, index: int) -> None:
        """
        Decay ``token`` forward and add one occurrence.

        The dictionary clock only moves forward: an ``index`` behind the
        latest one (a lagging stream sharing this dictionary) is recorded
        at the current clock.
        """
        self._index = max(self._index, index)
        now = self._index
        entry = self._tokens.get(token)
        if entry is None:
            self._tokens[token] = TokenEntry(count=1.0, last_updated=now)
        else:
            entry.count = self._decayed(entry, now) + 1.0
            entry.last_updated = now
        self._vacuum_if_required()

    def count(self, token: str) -> float:
        """Decayed count of ``token`` as of the latest index, 0 if unseen."""
        entry = self._tokens.get(token)
        if entry is None:
            return 0.0
        return self._decayed(entry, self._index)

    def vacuum(self) -> int:
        """
        Drop entries whose decayed count is at or below the floor.

        Returns:
            Number of evicted tokens
        """
        before = len(self._tokens)
        kept: Dict[str, TokenEntry] = {}
        for token, entry in self._tokens.items():
            entry.count = self._decayed(entry, self._index)
            entry.last_updated = max(entry.last_updated, self._index)
            if entry.count > self.significance_floor:
                kept[token] = entry
        self._tokens = kept
        self._last_vacuum_index = self._index
        self._last_vacuum_size = len(kept)

        logger.debug(
            "dictionary vacuum at index %d: %d -> %d tokens",
            self._index, before, len(kept),
        )
        return before - len(kept)

    def _vacuum_if_required(self) -> None:
        size = len(self._tokens)
        if size > self.vacuum_min_size and size > self._last_vacuum_size * self.vacuum_growth_ratio:
            self.vacuum()

    def __len__(self) -> int:
        return len(self._tokens)

    def __contains__(self, token: object) -> bool:
        return token in self._tokens

    def __iter__(self) -> Iterator[str]:
        return iter(self._tokens)


__all__ = [
    'DEFAULT_VACUUM_MIN_SIZE',
    'DEFAULT_VACUUM_GROWTH_RATIO',
    'DEFAULT_SIGNIFICANCE_FLOOR',
    'Dictionary',
    'TokenEntry',
    'DecayingDictionary',
]
