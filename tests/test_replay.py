import json
import math
import sys
from pathlib import Path

import pandas as pd
import pytest

from spike_engine import DetectorConfig
from spike_engine.io import load_chats
from spike_engine.replay import BURST_COLUMNS, bursts_to_frame, describe, pair_spikes, replay

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "scripts"))
import detect_spikes  # noqa: E402

CONFIG = DetectorConfig(short_horizon=10, long_horizon=50, start_threshold=2.0, end_threshold=1.0)


def test_replay_finds_one_spike(write_chat_log, burst_rows):
    chats = load_chats(write_chat_log(burst_rows))
    result = replay(chats, CONFIG)

    assert result.chats == 240
    assert result.spike_count == 1
    assert [b.begin for b in result.bursts] == [True, False]
    assert "GOAL" in result.bursts[0].summary
    assert result.first_ts == burst_rows[0]["ts"]
    assert describe(result).startswith("detect 1 spikes among 240 chats")


def test_replay_empty():
    result = replay([], CONFIG)
    assert result.bursts == []
    assert describe(result) == "detect 0 spikes among 0 chats"


def test_bursts_to_frame(write_chat_log, burst_rows):
    result = replay(load_chats(write_chat_log(burst_rows)), CONFIG)
    df = bursts_to_frame(result.bursts)
    assert list(df.columns) == BURST_COLUMNS
    assert len(df) == 2
    assert str(df["ts"].dt.tz) == "UTC"
    assert df["begin"].tolist() == [True, False]

    assert bursts_to_frame([]).empty


def test_pair_spikes(write_chat_log, burst_rows):
    result = replay(load_chats(write_chat_log(burst_rows)), CONFIG)
    spikes = pair_spikes(result.bursts)
    assert len(spikes) == 1
    row = spikes.iloc[0]
    assert row["duration_s"] > 0
    assert row["begin_surprise"] > 2.0
    assert row["end_surprise"] < 1.0


def test_pair_spikes_open_spike(write_chat_log):
    from conftest import make_stream
    rows = make_stream(after=0)
    result = replay(load_chats(write_chat_log(rows)), CONFIG)
    spikes = pair_spikes(result.bursts)
    assert len(spikes) == 1
    assert pd.isna(spikes.iloc[0]["end_ts"])
    assert math.isnan(spikes.iloc[0]["end_surprise"])


def test_cli_writes_bursts(write_chat_log, burst_rows, tmp_path, capsys):
    path = write_chat_log(burst_rows, name="chats.jsonl", lines=True)
    out = tmp_path / "bursts.jsonl"
    code = detect_spikes.main([
        str(path), "--short", "10", "--long", "50",
        "--start", "2.0", "--end", "1.0", "--out", str(out),
    ])
    assert code == 0
    assert "detect 1 spikes among 240 chats" in capsys.readouterr().out
    rows = [json.loads(line) for line in out.read_text(encoding="utf-8").splitlines()]
    assert [r["begin"] for r in rows] == [True, False]
    assert rows[0]["ts"].endswith("Z")


def test_cli_rejects_bad_config(write_chat_log, burst_rows):
    path = write_chat_log(burst_rows)
    assert detect_spikes.main([str(path), "--start", "1.0", "--end", "2.0"]) == 2


def test_cli_missing_file(tmp_path):
    assert detect_spikes.main([str(tmp_path / "nope.json")]) == 1
