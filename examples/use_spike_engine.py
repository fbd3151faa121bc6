#!/usr/bin/env python
"""
Example: feeding a live chat stream into spike-engine.

Simulates a quiet channel that suddenly erupts around one topic, then
calms down again, and prints the spike boundaries with their summaries.
"""

import random

from spike_engine import ChatSpikeDetector, DecayingDictionary, DetectorConfig, EventKind


def simulated_stream(seed: int = 7):
    rng = random.Random(seed)
    chatter = ["안녕하세요", "오늘 방송 몇시까지?", "배고프다", "ㅋㅋ", "hi all", "lol"]
    t = 0.0
    # quiet: one message every ~5s
    for _ in range(150):
        t += rng.expovariate(1 / 5.0)
        yield rng.choice(chatter), t
    # burst: a goal is scored
    for _ in range(80):
        t += rng.expovariate(1 / 0.2)
        yield rng.choice(["골!!!!!", "골골골 ㅋㅋㅋㅋ", "와 골이다", "GOAL"]), t
    # back to quiet
    for _ in range(150):
        t += rng.expovariate(1 / 5.0)
        yield rng.choice(chatter), t


def main():
    config = DetectorConfig(short_horizon=30, long_horizon=100, start_threshold=2.0, end_threshold=1.0)
    detector = ChatSpikeDetector.from_config(config)
    vocab = DecayingDictionary(config.long_horizon)

    for msg, ts in simulated_stream():
        event = detector.update(msg, ts, vocab)
        if event.kind is EventKind.SPIKE_BEGIN:
            print(f"[{ts:8.1f}s] spike begin  surprise={event.surprise:6.2f}  summary={event.summary!r}")
        elif event.kind is EventKind.SPIKE_END:
            print(f"[{ts:8.1f}s] spike end    surprise={event.surprise:6.2f}  summary={event.summary!r}")

    print(f"final phase: {detector.current_phase().value}, surprise={detector.current_surprise():.2f}")


if __name__ == "__main__":
    main()
