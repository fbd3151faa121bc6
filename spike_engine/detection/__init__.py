# detection module
"""
Spike detection layers.

1. ``BurstDetector``     - purely timestamp based burst detector
2. ``ChatWindow``        - sliding window + TF-IDF-like summary
3. ``ChatSpikeDetector`` - combines 1 & 2 into a single API
"""

from spike_engine.detection.burst import (
    Timestamp,
    MIN_GAP,
    Phase,
    SignalKind,
    SpikeSignal,
    to_seconds,
    BurstDetector,
)
from spike_engine.detection.window import (
    ChatEntry,
    Summary,
    ChatWindow,
)
from spike_engine.detection.chat_spike import (
    EventKind,
    Event,
    ChatSpikeDetector,
)

__all__ = [
    # Burst detection
    'Timestamp',
    'MIN_GAP',
    'Phase',
    'SignalKind',
    'SpikeSignal',
    'to_seconds',
    'BurstDetector',
    # Window
    'ChatEntry',
    'Summary',
    'ChatWindow',
    # Composite
    'EventKind',
    'Event',
    'ChatSpikeDetector',
]
