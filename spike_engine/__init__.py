"""
Spike Engine

Detects activity bursts in chat-like message streams and summarizes each
burst with its most representative message.

Modules:
- core: Bounded circular buffer
- text: Normalization and n-gram tokenizers
- stats: Poisson tail surprise and decaying token dictionary
- detection: Burst detector, summarization window, composite detector
- io: Chat log loading and JSONL result writing
- replay: Offline replay of recorded chat logs
"""

__version__ = "0.1.0"

from spike_engine.config import DetectorConfig
from spike_engine.errors import ConfigError, SpikeEngineError
from spike_engine.stats import DecayingDictionary, Dictionary, neg_ln_poisson_tail
from spike_engine.detection import (
    BurstDetector,
    ChatSpikeDetector,
    ChatWindow,
    Event,
    EventKind,
    Phase,
    Summary,
)

# Import submodules for easier access
from spike_engine import core
from spike_engine import text
from spike_engine import stats
from spike_engine import detection

__all__ = [
    # Version info
    "__version__",
    # Configuration & errors
    "DetectorConfig",
    "ConfigError",
    "SpikeEngineError",
    # Core API
    "DecayingDictionary",
    "Dictionary",
    "neg_ln_poisson_tail",
    "BurstDetector",
    "ChatSpikeDetector",
    "ChatWindow",
    "Event",
    "EventKind",
    "Phase",
    "Summary",
    # Submodules
    "core",
    "text",
    "stats",
    "detection",
]
