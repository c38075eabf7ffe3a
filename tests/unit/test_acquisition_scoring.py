"""Unit tests for lib/acquisition/scoring.py and policy.py: adjustments, clamp, monotonic decide."""
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent))
import pytest
from hypothesis import given, strategies as st

from lib.acquisition.config import AcquisitionConfig
from lib.acquisition.novelty import NoveltyInfo
from lib.acquisition.policy import decide, reason
from lib.acquisition.relational import RelationalSnapshot, stance_band
from lib.acquisition.scoring import BASE_SCORE, score_breakdown, score_candidate

CFG = AcquisitionConfig()
NEW = NoveltyInfo(is_new_for_pair=True, total_for_pair=1)
REPEAT = NoveltyInfo(is_new_for_pair=False, total_for_pair=2)


def _snap(trust=0.5, comfort=0.5, stance="cautious"):
    return RelationalSnapshot(trust, comfort, 0.5, 0.5, stance, stance_band(stance))


def _words(n):
    return " ".join(["word"] * n)


def test_base_with_ideal_length_and_new_text():
    """5 words (4 <= 5 <= 64), internal, no snapshot, new: 0.4 + 0.1 + 0.1."""
    assert score_candidate(_words(5), "internal", [], None, NEW, CFG) == pytest.approx(0.6)


@pytest.mark.parametrize("n,delta", [
    (3, -0.1),    # below min_text_length
    (4, 0.1),     # min bound inclusive
    (64, 0.1),    # ideal max (320 / 5) inclusive
    (65, 0.0),    # neutral band
    (160, 0.0),   # long warn (320 / 2) inclusive, still neutral
    (161, -0.1),  # too long
])
def test_length_shaping(n, delta):
    score = score_candidate(_words(n), "internal", [], None, NEW, CFG)
    assert score == pytest.approx(BASE_SCORE + 0.1 + delta)


def test_length_uses_configured_bounds():
    cfg = AcquisitionConfig(max_text_length=50, min_text_length=2)
    _, adj = score_breakdown(_words(11), "internal", [], None, NEW, cfg)
    assert dict(adj).get("length:ideal") is None
    _, adj = score_breakdown(_words(26), "internal", [], None, NEW, cfg)
    assert dict(adj)["length:long"] == -0.1
    _, adj = score_breakdown(_words(2), "internal", [], None, NEW, cfg)
    assert dict(adj)["length:ideal"] == 0.1


@pytest.mark.parametrize("source,delta", [("user", 0.05), ("system", -0.05), ("internal", 0.0), ("bot", 0.0)])
def test_source_type(source, delta):
    assert score_candidate(_words(5), source, [], None, NEW, CFG) == pytest.approx(0.6 + delta)


@pytest.mark.parametrize("trust,comfort,delta", [
    (0.8, 0.5, 0.15),
    (0.2, 0.5, -0.15),
    (0.7, 0.3, 0.0),   # thresholds are strict
    (0.5, 0.9, 0.1),
    (0.5, 0.1, -0.1),
    (0.9, 0.9, 0.25),
])
def test_trust_and_comfort(trust, comfort, delta):
    score = score_candidate(_words(5), "internal", [], _snap(trust, comfort), NEW, CFG)
    assert score == pytest.approx(0.6 + delta)


@pytest.mark.parametrize("stance,delta", [
    ("collaborative", 0.05), ("intimate", 0.05), ("defensive", -0.05), ("cautious", 0.0), ("weird", 0.0),
])
def test_stance_band_adjustment(stance, delta):
    assert score_candidate(_words(5), "internal", [], _snap(stance=stance), NEW, CFG) == pytest.approx(0.6 + delta)


def test_novelty_repeat_penalty_and_untracked():
    assert score_candidate(_words(5), "internal", [], None, REPEAT, CFG) == pytest.approx(0.48)
    assert score_candidate(_words(5), "internal", [], None, None, CFG) == pytest.approx(0.48)


def test_channels_are_independent():
    both = score_candidate(_words(5), "internal", ["high-engagement", "low-signal"], None, NEW, CFG)
    assert both == pytest.approx(0.6)
    assert score_candidate(_words(5), "internal", {"high-engagement"}, None, NEW, CFG) == pytest.approx(0.65)
    assert score_candidate(_words(5), "internal", ("low-signal",), None, NEW, CFG) == pytest.approx(0.55)
    assert score_candidate(_words(5), "internal", None, None, NEW, CFG) == pytest.approx(0.6)


def test_breakdown_labels():
    score, adj = score_breakdown(_words(5), "user", ["high-engagement"], _snap(0.8, 0.8, "collaborative"), NEW, CFG)
    labels = [label for label, _ in adj]
    assert labels == [
        "length:ideal", "source:user", "trust:high", "comfort:high",
        "stance:supportive", "novelty:new", "channel:high-engagement",
    ]
    assert score == pytest.approx(1.0)


@given(
    words=st.integers(min_value=0, max_value=400),
    source=st.sampled_from(["user", "system", "internal", "other"]),
    trust=st.floats(min_value=-5, max_value=5, allow_nan=False),
    comfort=st.floats(min_value=-5, max_value=5, allow_nan=False),
    stance=st.sampled_from(["defensive", "cautious", "collaborative", "intimate", "odd"]),
    has_snapshot=st.booleans(),
    is_new=st.booleans(),
    channels=st.lists(st.sampled_from(["high-engagement", "low-signal", "other"]), max_size=3),
)
def test_score_always_clamped(words, source, trust, comfort, stance, has_snapshot, is_new, channels):
    snap = _snap(trust, comfort, stance) if has_snapshot else None
    score = score_candidate(_words(words), source, channels, snap, NoveltyInfo(is_new, 1), CFG)
    assert 0.0 <= score <= 1.0


@pytest.mark.parametrize("score,expected", [
    (0.0, "reject"), (0.39, "reject"), (0.4, "defer"), (0.59, "defer"), (0.6, "accept"), (1.0, "accept"),
])
def test_decide_thresholds(score, expected):
    assert decide(score, 0.6, 0.4) == expected


_RANK = {"reject": 0, "defer": 1, "accept": 2}


@given(
    a=st.floats(min_value=0, max_value=1),
    b=st.floats(min_value=0, max_value=1),
    accept=st.floats(min_value=0, max_value=1),
    defer=st.floats(min_value=0, max_value=1),
)
def test_decide_monotonic(a, b, accept, defer):
    lo, hi = sorted((a, b))
    assert _RANK[decide(lo, accept, defer)] <= _RANK[decide(hi, accept, defer)]


def test_reason_mentions_thresholds():
    assert "accept" in reason("accept", 0.7, 0.6, 0.4)
    assert "defer" in reason("defer", 0.5, 0.6, 0.4)
    assert "below" in reason("reject", 0.2, 0.6, 0.4)
    assert reason("reject", 0.0, 0.6, 0.4) == "score floored at 0"
