#!/usr/bin/env python
"""
Replay a recorded chat log and report detected spikes.

Usage:
    python scripts/detect_spikes.py examples/data/sample.json
    python scripts/detect_spikes.py chats.jsonl --short 30 --long 100 \
        --start 2.0 --end 1.0 --out bursts.jsonl

Unset options fall back to SPIKE_* environment variables (``.env`` is
honoured), then to the library defaults.
"""

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from spike_engine.config import DetectorConfig
from spike_engine.io import load_chats, write_jsonl
from spike_engine.replay import bursts_to_frame, describe, replay

logger = logging.getLogger("detect_spikes")


def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Detect chat spikes in a recorded log")
    p.add_argument("path", type=Path, help="chat log (.json array or .jsonl)")
    p.add_argument("--short", type=int, dest="short_horizon", help="short horizon S")
    p.add_argument("--long", type=int, dest="long_horizon", help="long horizon L")
    p.add_argument("--start", type=float, dest="start_threshold", help="spike begin threshold")
    p.add_argument("--end", type=float, dest="end_threshold", help="spike end threshold")
    p.add_argument("--ngram-min", type=int, dest="ngram_min")
    p.add_argument("--ngram-max", type=int, dest="ngram_max")
    p.add_argument("--env-file", type=Path, default=None, help="optional .env file")
    p.add_argument("--out", type=Path, default=None, help="write burst boundaries to JSONL")
    p.add_argument("--show", type=int, default=20, help="print at most N boundaries")
    p.add_argument("--log-level", default="INFO")
    return p.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    overrides = {
        k: v for k, v in vars(args).items()
        if k in DetectorConfig.model_fields and v is not None
    }
    try:
        config = DetectorConfig.from_env(env_file=args.env_file, **overrides)
    except ValidationError as e:
        logger.error(f"invalid detector configuration: {e}")
        return 2

    try:
        chats = load_chats(args.path)
    except (FileNotFoundError, ValueError) as e:
        logger.error(str(e))
        return 1

    result = replay(chats, config)
    print(describe(result))

    if result.bursts:
        df = bursts_to_frame(result.bursts)
        print(df.head(args.show).to_string(index=False))

    if args.out is not None:
        n = write_jsonl(args.out, (b.to_dict() for b in result.bursts))
        logger.info(f"wrote {n} burst boundaries to {args.out}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
