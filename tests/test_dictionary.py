import math

import pytest

from spike_engine.errors import ConfigError
from spike_engine.stats import DecayingDictionary, Dictionary


def test_unseen_token_counts_zero(vocab):
    assert vocab.count("nope") == 0.0
    assert "nope" not in vocab


def test_observe_decays_before_increment():
    d = DecayingDictionary(long_horizon=12)
    d.observe("hi", 1)
    d.observe("hi", 2)
    assert d.count("hi") == pytest.approx(1.0 * (11 / 12) + 1.0)


def test_steady_observation_increases_count():
    d = DecayingDictionary(long_horizon=10)
    counts = []
    for idx in range(1, 60):
        d.observe("a", idx)
        counts.append(d.count("a"))
    assert all(b > a for a, b in zip(counts, counts[1:]))
    # bounded by the geometric sum 1 / (1 - decay) == L
    assert counts[-1] < 10.0


def test_count_decreases_while_not_observed():
    d = DecayingDictionary(long_horizon=10)
    d.observe("a", 1)
    seen = [d.count("a")]
    for idx in range(2, 6):
        d.observe("b", idx)
        seen.append(d.count("a"))
    assert all(b < a for a, b in zip(seen, seen[1:]))
    assert seen[-1] == pytest.approx(0.9 ** 4)


def test_count_is_read_only(vocab):
    vocab.observe("x", 1)
    vocab.observe("y", 4)
    first = vocab.count("x")
    assert vocab.count("x") == first
    assert vocab.count("x") == first


def test_vacuum_triggered_by_growth():
    d = DecayingDictionary(long_horizon=2)
    for i in range(9):
        d.observe(f"old{i}", 1)
    # first pass at 9 tokens keeps everything (count 1 > e^-1)
    assert len(d) == 9
    assert d.last_vacuum_index == 1

    for i in range(5):
        d.observe(f"new{i}", 3)
    # 14 > 9 * 1.5 -> second pass; old tokens decayed to 0.25 and are dropped
    assert len(d) == 5
    assert d.last_vacuum_index == 3
    assert d.count("old0") == 0.0
    assert d.count("new4") == pytest.approx(1.0)


def test_no_vacuum_below_min_size():
    d = DecayingDictionary(long_horizon=2)
    for i in range(8):
        d.observe(f"t{i}", i + 1)
    assert len(d) == 8
    assert d.last_vacuum_index == 0


def test_manual_vacuum_returns_evicted_count():
    d = DecayingDictionary(long_horizon=4)
    d.observe("stale", 1)
    d.observe("fresh", 10)
    assert d.vacuum() == 1
    assert list(d) == ["fresh"]


def test_default_floor_is_inverse_e():
    d = DecayingDictionary(long_horizon=100)
    assert d.significance_floor == pytest.approx(math.exp(-1))
    assert d.decay ** 100 == pytest.approx(d.significance_floor, abs=2e-3)


def test_satisfies_protocol(vocab):
    assert isinstance(vocab, Dictionary)


@pytest.mark.parametrize("kwargs", [
    {"long_horizon": 0},
    {"long_horizon": 5, "vacuum_growth_ratio": 0.5},
    {"long_horizon": 5, "significance_floor": -1.0},
])
def test_invalid_arguments_rejected(kwargs):
    with pytest.raises(ConfigError):
        DecayingDictionary(**kwargs)


def test_lagging_index_does_not_rewind_decay():
    d = DecayingDictionary(long_horizon=10)
    d.observe("a", 50)
    d.observe("b", 100)
    before = d.count("a")
    assert before == pytest.approx(0.9 ** 50)

    d.observe("c", 3)
    assert d.index == 100
    assert d.count("a") == pytest.approx(before)
    assert d.count("c") == pytest.approx(1.0)

    d.observe("b", 4)
    assert d.count("b") == pytest.approx(2.0)
