# spike_engine/detection/chat_spike.py
"""
Chat spike detection: burst timing plus content summary.

``ChatSpikeDetector`` binds a ``BurstDetector`` and a ``ChatWindow`` to the
same short/long horizons. Every message is pushed into the window before
the burst detector advances, so the message that triggers a transition can
itself be chosen as the summary.

Example:
    ```python
    from spike_engine import ChatSpikeDetector, DecayingDictionary, DetectorConfig, EventKind

    config = DetectorConfig(short_horizon=30, long_horizon=100)
    detector = ChatSpikeDetector.from_config(config)
    vocab = DecayingDictionary(config.long_horizon)

    for msg, ts in stream:
        event = detector.update(msg, ts, vocab)
        if event.kind is EventKind.SPIKE_BEGIN:
            print(f"spike: {event.summary} ({event.surprise:.2f})")
    ```
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, Tuple, TypeVar

from spike_engine.config import (
    DEFAULT_END_THRESHOLD,
    DEFAULT_NGRAM_RANGE,
    DEFAULT_PREFER_RECENT,
    DEFAULT_START_THRESHOLD,
    DetectorConfig,
)
from spike_engine.detection.burst import BurstDetector, Phase, SignalKind, Timestamp
from spike_engine.detection.window import ChatWindow, Summary
from spike_engine.stats.dictionary import Dictionary

P = TypeVar("P")


class EventKind(str, Enum):
    NONE = "none"
    SPIKE_BEGIN = "spike_begin"
    SPIKE_END = "spike_end"


@dataclass(frozen=True)
class Event(Generic[P]):
    """
    Outcome of one ``ChatSpikeDetector.update`` call.

    ``summary``/``payload``/``surprise`` are only set for SPIKE_BEGIN and
    SPIKE_END. ``bool(event)`` is False for NONE.
    """
    kind: EventKind = EventKind.NONE
    summary: Optional[str] = None
    payload: Optional[P] = None
    surprise: Optional[float] = None

    def __bool__(self) -> bool:
        return self.kind is not EventKind.NONE


_NO_EVENT: Event = Event()

_SIGNAL_TO_EVENT = {
    SignalKind.BEGIN: EventKind.SPIKE_BEGIN,
    SignalKind.END: EventKind.SPIKE_END,
}


class ChatSpikeDetector(Generic[P]):
    """
    Detect spikes in a chat stream and summarize them.

    The token dictionary is passed on every call so several detectors can
    share vocabulary statistics; the caller owns it and must not mutate it
    concurrently from two detectors.
    """

    def __init__(
        self,
        short_horizon: int,
        long_horizon: int,
        start_threshold: float = DEFAULT_START_THRESHOLD,
        end_threshold: float = DEFAULT_END_THRESHOLD,
        ngram_range: Tuple[int, int] = DEFAULT_NGRAM_RANGE,
        check_hysteresis: bool = True,
        prefer_recent: bool = DEFAULT_PREFER_RECENT,
    ):
        self.spike = BurstDetector(
            short_horizon, long_horizon, start_threshold, end_threshold, check_hysteresis
        )
        self.window: ChatWindow[P] = ChatWindow(
            short_horizon, long_horizon, ngram_range, prefer_recent
        )

    @classmethod
    def from_config(cls, config: DetectorConfig) -> "ChatSpikeDetector":
        return cls(
            config.short_horizon,
            config.long_horizon,
            config.start_threshold,
            config.end_threshold,
            config.ngram_range,
            config.check_hysteresis,
            config.prefer_recent,
        )

    def update(
        self,
        chat: str,
        ts: Timestamp,
        dictionary: Dictionary,
        payload: Optional[P] = None,
    ) -> Event[P]:
        """Add a chat message and return an event when a spike starts or ends."""
        self.window.push(chat, dictionary, payload)
        signal = self.spike.push(ts)
        if not signal:
            return _NO_EVENT

        summary: Optional[Summary[P]] = self.window.summary(dictionary)
        return Event(
            kind=_SIGNAL_TO_EVENT[signal.kind],
            summary=summary.text if summary else None,
            payload=summary.payload if summary else None,
            surprise=signal.surprise,
        )

    def summary(self, dictionary: Dictionary) -> Optional[Summary[P]]:
        return self.window.summary(dictionary)

    def current_surprise(self) -> float:
        return self.spike.current_surprise()

    def current_phase(self) -> Phase:
        return self.spike.phase

    def last_updated_at(self) -> Optional[Timestamp]:
        return self.spike.last_event_time


__all__ = [
    'EventKind',
    'Event',
    'ChatSpikeDetector',
]
