# spike_engine/replay.py
"""
Replay recorded chat logs through a ChatSpikeDetector.

Wall-clock timestamps are translated into seconds since the first chat so
the detector sees the same gaps it would have seen live.

Example:
    ```python
    from pathlib import Path
    from spike_engine import DetectorConfig
    from spike_engine.io import load_chats
    from spike_engine.replay import replay, bursts_to_frame, describe

    chats = load_chats(Path("chats.json"))
    result = replay(chats, DetectorConfig(short_horizon=30, long_horizon=100,
                                          start_threshold=2.0, end_threshold=1.0))
    print(describe(result))
    print(bursts_to_frame(result.bursts).head())
    ```
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd

from spike_engine.config import DetectorConfig
from spike_engine.detection.chat_spike import ChatSpikeDetector, EventKind
from spike_engine.io.chat_log import ChatRecord
from spike_engine.stats.dictionary import DecayingDictionary

logger = logging.getLogger(__name__)

BURST_COLUMNS = ["index", "ts", "summary", "surprise", "begin"]


@dataclass(frozen=True)
class BurstRecord:
    """A spike boundary found during replay."""
    index: int
    ts: datetime
    summary: Optional[str]
    surprise: float
    begin: bool

    def to_dict(self) -> Dict[str, Any]:
        row = asdict(self)
        row["ts"] = self.ts.isoformat().replace("+00:00", "Z")
        return row


@dataclass
class ReplayResult:
    chats: int
    first_ts: Optional[datetime] = None
    last_ts: Optional[datetime] = None
    bursts: List[BurstRecord] = field(default_factory=list)

    @property
    def spike_count(self) -> int:
        return sum(1 for b in self.bursts if b.begin)


def replay(
    chats: Sequence[ChatRecord],
    config: Optional[DetectorConfig] = None,
    detector: Optional[ChatSpikeDetector] = None,
    dictionary: Optional[DecayingDictionary] = None,
) -> ReplayResult:
    """
    Feed ``chats`` in order and collect every spike boundary.

    Args:
        chats: Chat records, in stream order
        config: Detector configuration (default: DetectorConfig())
        detector: Pre-built detector; overrides ``config``
        dictionary: Token dictionary; a private one is created if omitted

    Returns:
        ReplayResult with the burst boundaries and the covered time span
    """
    config = config or DetectorConfig()
    if detector is None:
        detector = ChatSpikeDetector.from_config(config)
    if dictionary is None:
        dictionary = DecayingDictionary(detector.window.long_horizon)

    result = ReplayResult(chats=len(chats))
    if not chats:
        return result

    wall0 = chats[0].ts
    result.first_ts = wall0
    result.last_ts = chats[-1].ts

    for i, chat in enumerate(chats):
        offset = (chat.ts - wall0).total_seconds()
        event = detector.update(chat.msg, offset, dictionary)
        if event.kind is EventKind.NONE:
            continue
        result.bursts.append(BurstRecord(
            index=i,
            ts=chat.ts,
            summary=event.summary,
            surprise=float(event.surprise),
            begin=event.kind is EventKind.SPIKE_BEGIN,
        ))

    logger.info(
        "replayed %d chats: %d spike boundaries",
        result.chats, len(result.bursts),
    )
    return result


def bursts_to_frame(bursts: Sequence[BurstRecord]) -> pd.DataFrame:
    """Burst boundaries as a DataFrame with BURST_COLUMNS."""
    if not bursts:
        return pd.DataFrame(columns=BURST_COLUMNS)
    df = pd.DataFrame([asdict(b) for b in bursts], columns=BURST_COLUMNS)
    df["ts"] = pd.to_datetime(df["ts"], utc=True)
    return df


def pair_spikes(bursts: Sequence[BurstRecord]) -> pd.DataFrame:
    """
    Join each spike begin with the end that follows it.

    Returns:
        DataFrame with begin_ts, end_ts, duration_s, begin_summary,
        end_summary, begin_surprise, end_surprise. A spike still open at
        the end of the log has NaT/NaN end columns.
    """
    rows = []
    current: Optional[BurstRecord] = None
    for b in bursts:
        if b.begin:
            current = b
        elif current is not None:
            rows.append({
                "begin_ts": current.ts,
                "end_ts": b.ts,
                "duration_s": (b.ts - current.ts).total_seconds(),
                "begin_summary": current.summary,
                "end_summary": b.summary,
                "begin_surprise": current.surprise,
                "end_surprise": b.surprise,
            })
            current = None
    if current is not None:
        rows.append({
            "begin_ts": current.ts,
            "end_ts": pd.NaT,
            "duration_s": float("nan"),
            "begin_summary": current.summary,
            "end_summary": None,
            "begin_surprise": current.surprise,
            "end_surprise": float("nan"),
        })
    columns = ["begin_ts", "end_ts", "duration_s", "begin_summary", "end_summary",
               "begin_surprise", "end_surprise"]
    return pd.DataFrame(rows, columns=columns)


def describe(result: ReplayResult) -> str:
    """One-line report in the style of the live console output."""
    if result.chats == 0:
        return "detect 0 spikes among 0 chats"
    return (
        f"detect {result.spike_count} spikes among {result.chats} chats, "
        f"{result.first_ts} ~ {result.last_ts}"
    )


__all__ = [
    'BURST_COLUMNS',
    'BurstRecord',
    'ReplayResult',
    'replay',
    'bursts_to_frame',
    'pair_spikes',
    'describe',
]
