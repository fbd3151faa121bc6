# tests/conftest.py

import json
import os
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from spike_engine.stats import DecayingDictionary


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """
    Clears SPIKE_* variables so config tests start from defaults, and drops
    anything a .env load added during the test.
    """
    for key in list(os.environ):
        if key.startswith("SPIKE_"):
            monkeypatch.delenv(key)
    yield
    for key in list(os.environ):
        if key.startswith("SPIKE_"):
            os.environ.pop(key)


@pytest.fixture
def vocab():
    return DecayingDictionary(long_horizon=12)


# ---------- HELPERS ----------

def make_stream(quiet=100, burst=40, after=100, quiet_gap=10.0, burst_gap=0.2):
    """Rows for a quiet -> burst -> quiet chat log, as (msg, datetime) dicts."""
    chatter = ["hi", "how is everyone", "lol", "what time is it", "good evening", "nice"]
    t0 = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)
    rows = []
    t = t0
    for i in range(quiet):
        rows.append({"msg": chatter[i % len(chatter)], "ts": t})
        t += timedelta(seconds=quiet_gap)
    for i in range(burst):
        msg = "GOAL!!! what a strike" if i % 2 else "GOAL!!!"
        rows.append({"msg": msg, "ts": t})
        t += timedelta(seconds=burst_gap)
    for i in range(after):
        rows.append({"msg": chatter[i % len(chatter)], "ts": t})
        t += timedelta(seconds=quiet_gap)
    return rows


@pytest.fixture
def burst_rows():
    return make_stream()


@pytest.fixture
def write_chat_log(tmp_path):
    def _write(rows, name="chats.json", lines=False):
        path = tmp_path / name
        serial = [{**r, "ts": r["ts"].isoformat()} for r in rows]
        if lines:
            path.write_text("\n".join(json.dumps(r, ensure_ascii=False) for r in serial), encoding="utf-8")
        else:
            path.write_text(json.dumps(serial, ensure_ascii=False), encoding="utf-8")
        return Path(path)
    return _write
