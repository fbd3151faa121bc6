# spike_engine/core/ring.py
"""
Fixed-capacity circular buffer.

Holds the most recent ``capacity`` items and overwrites the oldest one on
overflow. Only ordered iteration is exposed (oldest to newest).
"""

from __future__ import annotations

from typing import Generic, Iterator, List, Optional, TypeVar

from spike_engine.errors import ConfigError

T = TypeVar("T")


class RingBuffer(Generic[T]):
    """
    Bounded FIFO-overwriting buffer.

    Example:
        >>> ring = RingBuffer(3)
        >>> for item in ["1", "2", "3", "4"]:
        ...     _ = ring.push(item)
        >>> list(ring)
        ['2', '3', '4']
    """

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ConfigError(f"ring capacity must be >= 1, got {capacity}")
        self._buf: List[Optional[T]] = [None] * capacity
        self._offset = 0
        self._size = 0

    @property
    def capacity(self) -> int:
        return len(self._buf)

    def push(self, item: T) -> Optional[T]:
        """Insert ``item``; return the evicted item if the buffer was full."""
        evicted = self._buf[self._offset] if self._size == self.capacity else None
        self._buf[self._offset] = item
        self._offset = (self._offset + 1) % self.capacity
        self._size = min(self._size + 1, self.capacity)
        return evicted

    def clear(self) -> None:
        self._buf = [None] * self.capacity
        self._offset = 0
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[T]:
        # while filling, the oldest item sits at slot 0; once full, at the cursor
        start = self._offset if self._size == self.capacity else 0
        for i in range(self._size):
            yield self._buf[(start + i) % self.capacity]

    def __repr__(self) -> str:
        return f"RingBuffer(capacity={self.capacity}, items={list(self)!r})"


__all__ = ['RingBuffer']
