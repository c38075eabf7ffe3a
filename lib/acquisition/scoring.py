"""
Candidate scorer: base score plus independent additive adjustments, clamped to [0, 1].

Adjustments (in order): text length against configured word bounds, source type,
relational trust/comfort/stance band, pair novelty, channel tags.
Pure; score_breakdown() exposes the individual deltas for logging and explanations.
"""
from __future__ import annotations

from typing import Iterable

from .common import clamp, tokenize
from .config import AcquisitionConfig
from .novelty import NoveltyInfo
from .relational import BAND_DEFENSIVE, BAND_SUPPORTIVE, RelationalSnapshot

BASE_SCORE = 0.4

LENGTH_BONUS = 0.1
LENGTH_PENALTY = 0.1

SOURCE_ADJUSTMENTS = {"user": 0.05, "system": -0.05}

TRUST_HIGH, TRUST_LOW = 0.7, 0.3
TRUST_DELTA = 0.15
COMFORT_HIGH, COMFORT_LOW = 0.7, 0.3
COMFORT_DELTA = 0.1
BAND_ADJUSTMENTS = {BAND_SUPPORTIVE: 0.05, BAND_DEFENSIVE: -0.05}

NOVELTY_NEW_BONUS = 0.1
NOVELTY_REPEAT_PENALTY = 0.02

CHANNEL_ADJUSTMENTS = {"high-engagement": 0.05, "low-signal": -0.05}


def _length_delta(text: str, cfg: AcquisitionConfig) -> tuple[str, float] | None:
    length = len(tokenize(text))
    if cfg.min_text_length <= length <= cfg.ideal_max_words:
        return ("length:ideal", LENGTH_BONUS)
    if length > cfg.long_warn_words:
        return ("length:long", -LENGTH_PENALTY)
    if length < cfg.min_text_length:
        return ("length:short", -LENGTH_PENALTY)
    # (ideal_max, long_warn] gets no adjustment
    return None


def _two_sided(label: str, value: float, high: float, low: float, delta: float) -> tuple[str, float] | None:
    if value > high:
        return (f"{label}:high", delta)
    if value < low:
        return (f"{label}:low", -delta)
    return None


def score_breakdown(
    text: str,
    source_type: str | None,
    channels: Iterable[str] | None,
    snapshot: RelationalSnapshot | None,
    novelty: NoveltyInfo | None,
    cfg: AcquisitionConfig,
) -> tuple[float, list[tuple[str, float]]]:
    """Return (clamped score, [(label, delta), ...]) for one candidate."""
    adjustments: list[tuple[str, float]] = []

    length = _length_delta(text, cfg)
    if length:
        adjustments.append(length)

    if source_type in SOURCE_ADJUSTMENTS:
        adjustments.append((f"source:{source_type}", SOURCE_ADJUSTMENTS[source_type]))

    if snapshot is not None:
        for adj in (
            _two_sided("trust", snapshot.trust, TRUST_HIGH, TRUST_LOW, TRUST_DELTA),
            _two_sided("comfort", snapshot.comfort, COMFORT_HIGH, COMFORT_LOW, COMFORT_DELTA),
        ):
            if adj:
                adjustments.append(adj)
        if snapshot.stance_band in BAND_ADJUSTMENTS:
            adjustments.append((f"stance:{snapshot.stance_band}", BAND_ADJUSTMENTS[snapshot.stance_band]))

    if novelty is not None and novelty.is_new_for_pair:
        adjustments.append(("novelty:new", NOVELTY_NEW_BONUS))
    else:
        adjustments.append(("novelty:repeat", -NOVELTY_REPEAT_PENALTY))

    tags = set(channels or ())
    for tag, delta in CHANNEL_ADJUSTMENTS.items():
        if tag in tags:
            adjustments.append((f"channel:{tag}", delta))

    score = BASE_SCORE
    for _, delta in adjustments:
        score += delta
    return clamp(score), adjustments


def score_candidate(
    text: str,
    source_type: str | None,
    channels: Iterable[str] | None,
    snapshot: RelationalSnapshot | None,
    novelty: NoveltyInfo | None,
    cfg: AcquisitionConfig,
) -> float:
    return score_breakdown(text, source_type, channels, snapshot, novelty, cfg)[0]
