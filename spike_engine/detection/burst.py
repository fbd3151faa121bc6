# spike_engine/detection/burst.py
"""
Timestamp-driven burst detection.

The detector keeps two exponentially decayed sums of inter-arrival gaps:
a short one (decay ``1 - 1/S``) and a long one (decay ``1 - 1/L``). Their
ratio gives the number of events a long-run cadence would have produced
in the time the last S events took:

    lam = dur_short * L / dur_long

and the surprise of having seen S events anyway is
``neg_ln_poisson_tail(S, lam)``. A spike begins when surprise rises above
``start_threshold`` and ends once it falls below ``end_threshold``.

Because the baseline is the stream's own long-run rate, the detector
calibrates itself to quiet and busy channels alike.
"""

from __future__ import annotations

import logging
import math
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Union

from spike_engine.config import DEFAULT_END_THRESHOLD, DEFAULT_START_THRESHOLD
from spike_engine.errors import ConfigError
from spike_engine.stats.surprise import neg_ln_poisson_tail

logger = logging.getLogger(__name__)

Timestamp = Union[float, int, datetime]

MIN_GAP = sys.float_info.epsilon


class Phase(str, Enum):
    IDLE = "idle"
    IN_SPIKE = "in_spike"


class SignalKind(str, Enum):
    NONE = "none"
    BEGIN = "begin"
    END = "end"


@dataclass(frozen=True)
class SpikeSignal:
    """Result of feeding one timestamp to ``BurstDetector``."""
    kind: SignalKind
    surprise: float

    def __bool__(self) -> bool:
        return self.kind is not SignalKind.NONE


def to_seconds(ts: Timestamp) -> float:
    """Seconds for a monotonic float or a datetime (naive means UTC)."""
    if isinstance(ts, datetime):
        if ts.tzinfo is None:
            ts = ts.replace(tzinfo=timezone.utc)
        return ts.timestamp()
    return float(ts)


class BurstDetector:
    """
    Two-phase (Idle / InSpike) burst detector with hysteresis.

    Args:
        short_horizon: S, number of events the surprise test asks about
        long_horizon: L, horizon of the baseline rate
        start_threshold: Surprise needed to begin a spike
        end_threshold: Surprise below which a spike ends
        check_hysteresis: Require start_threshold > end_threshold
    """

    def __init__(
        self,
        short_horizon: int,
        long_horizon: int,
        start_threshold: float = DEFAULT_START_THRESHOLD,
        end_threshold: float = DEFAULT_END_THRESHOLD,
        check_hysteresis: bool = True,
    ):
        if short_horizon < 1:
            raise ConfigError(f"short_horizon must be >= 1, got {short_horizon}")
        if long_horizon < 1:
            raise ConfigError(f"long_horizon must be >= 1, got {long_horizon}")
        if math.isnan(start_threshold) or math.isnan(end_threshold):
            raise ConfigError("thresholds must not be NaN")
        if end_threshold < 0.0:
            raise ConfigError(f"end_threshold must be >= 0, got {end_threshold}")
        if check_hysteresis and start_threshold <= end_threshold:
            raise ConfigError(
                f"start_threshold ({start_threshold}) must be greater than "
                f"end_threshold ({end_threshold})"
            )

        self.short_horizon = short_horizon
        self.long_horizon = long_horizon
        self.start_threshold = float(start_threshold)
        self.end_threshold = float(end_threshold)
        self._decay_short = 1.0 - 1.0 / short_horizon
        self._decay_long = 1.0 - 1.0 / long_horizon

        self.dur_short = 0.0
        self.dur_long = 0.0
        self.phase = Phase.IDLE
        self._last_ts: Optional[float] = None
        self._last_event_time: Optional[Timestamp] = None
        self._events = 0

    @property
    def last_event_time(self) -> Optional[Timestamp]:
        """Timestamp of the last event as it was passed in, or None."""
        return self._last_event_time

    @property
    def event_count(self) -> int:
        return self._events

    def null_rate(self) -> float:
        """Events the long-run cadence predicts over the short window."""
        if self.dur_long <= 0.0:
            return 0.0
        return self.dur_short * self.long_horizon / self.dur_long

    def current_surprise(self) -> float:
        return neg_ln_poisson_tail(self.short_horizon, self.null_rate())

    def push(self, ts: Timestamp) -> SpikeSignal:
        """Feed the next event timestamp and report any phase transition."""
        now = to_seconds(ts)
        gap = 0.0 if self._last_ts is None else now - self._last_ts
        gap = max(gap, MIN_GAP)

        self.dur_short = self.dur_short * self._decay_short + gap
        self.dur_long = self.dur_long * self._decay_long + gap
        self._last_ts = now
        self._last_event_time = ts
        self._events += 1

        surprise = self.current_surprise()
        if self.phase is Phase.IDLE and surprise > self.start_threshold:
            self.phase = Phase.IN_SPIKE
            logger.info("spike begin at event %d (surprise=%.3f)", self._events, surprise)
            return SpikeSignal(SignalKind.BEGIN, surprise)
        if self.phase is Phase.IN_SPIKE and surprise < self.end_threshold:
            self.phase = Phase.IDLE
            logger.info("spike end at event %d (surprise=%.3f)", self._events, surprise)
            return SpikeSignal(SignalKind.END, surprise)
        return SpikeSignal(SignalKind.NONE, surprise)


__all__ = [
    'Timestamp',
    'MIN_GAP',
    'Phase',
    'SignalKind',
    'SpikeSignal',
    'to_seconds',
    'BurstDetector',
]
