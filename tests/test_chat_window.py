import pytest

from spike_engine.detection import ChatWindow
from spike_engine.errors import ConfigError
from spike_engine.stats import DecayingDictionary


def test_chat_window_summary_nonempty(vocab):
    cw = ChatWindow(3, 12)
    cw.push("hello world", vocab)
    cw.push("hello world", vocab)
    cw.push("some noises", vocab)
    summary = cw.summary(vocab)
    assert summary is not None
    assert summary.text == "hello world"


def test_chat_window_summary_with_payload_prefers_recent_tie(vocab):
    cw = ChatWindow(3, 12)
    cw.push("hello world", vocab, payload=1)
    cw.push("hello world", vocab, payload=2)
    cw.push("some noises", vocab, payload=3)
    summary = cw.summary(vocab)
    assert summary.text == "hello world"
    assert summary.payload == 2


def test_summary_tie_can_prefer_older_member(vocab):
    cw = ChatWindow(3, 12, prefer_recent=False)
    cw.push("hello world", vocab, payload=1)
    cw.push("hello world", vocab, payload=2)
    cw.push("some noises", vocab, payload=3)
    summary = cw.summary(vocab)
    assert summary.text == "hello world"
    assert summary.payload == 1


def test_empty_window_has_no_summary(vocab):
    assert ChatWindow(3, 12).summary(vocab) is None


def test_window_keeps_last_s_messages(vocab):
    cw = ChatWindow(2, 12)
    for msg in ["a", "b", "c"]:
        cw.push(msg, vocab)
    assert [e.text for e in cw] == ["b", "c"]
    assert cw.message_index == 3


def test_push_records_tokens_in_dictionary():
    d = DecayingDictionary(12)
    cw = ChatWindow(3, 12, ngram_range=(1, 2))
    entry = cw.push("abab", d)
    assert entry.tokens == ("a", "ab", "b", "ba")
    # deduplicated per message: "ab" occurs twice but counts once
    assert d.count("ab") == pytest.approx(1.0)
    assert d.index == 1


def test_push_normalizes_text(vocab):
    cw = ChatWindow(3, 12)
    entry = cw.push("ㅋㅋㅋㅋㅋ대박", vocab)
    assert entry.text == "ㅋㅋㅋ 대박"


def test_empty_message_scores_zero(vocab):
    cw = ChatWindow(3, 12)
    cw.push("", vocab)
    summary = cw.summary(vocab)
    assert summary.text == ""
    assert summary.score == 0.0


def test_empty_message_does_not_poison_others(vocab):
    cw = ChatWindow(3, 12)
    cw.push("hello world", vocab)
    cw.push("", vocab)
    cw.push("hello world", vocab)
    scores = cw.scores(vocab)
    assert scores[1] == 0.0
    assert scores[0] == pytest.approx(scores[2])
    assert scores[0] > 0.5


def test_summary_is_repeatable(vocab):
    cw = ChatWindow(4, 12)
    for msg in ["골!!!", "와 골이다", "골골", "배고프다"]:
        cw.push(msg, vocab)
    first = cw.summary(vocab)
    assert cw.summary(vocab) == first
    assert cw.scores(vocab) == cw.scores(vocab)


def test_single_member_scores_zero(vocab):
    cw = ChatWindow(3, 12)
    cw.push("lonely", vocab)
    assert cw.summary(vocab).score == pytest.approx(0.0, abs=1e-12)


@pytest.mark.parametrize("kwargs", [
    {"short_horizon": 0, "long_horizon": 12},
    {"short_horizon": 3, "long_horizon": 0},
    {"short_horizon": 3, "long_horizon": 12, "ngram_range": (0, 2)},
    {"short_horizon": 3, "long_horizon": 12, "ngram_range": (3, 2)},
])
def test_invalid_configuration_rejected(kwargs):
    with pytest.raises(ConfigError):
        ChatWindow(**kwargs)
