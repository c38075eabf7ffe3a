"""
Relational snapshot reader: bounded, read-only view of speaker->target state.

The relational store is an external collaborator. A missing store, a missing
identity or a failing lookup all yield None ("unknown context"); callers
score with neutral defaults in that case.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, asdict
from typing import Any, Callable, Protocol

logger = logging.getLogger(__name__)

NEUTRAL_LEVEL = 0.5
DEFAULT_STANCE = "cautious"

BAND_DEFENSIVE = "defensive"
BAND_NEUTRAL = "neutral"
BAND_SUPPORTIVE = "supportive"

STANCE_BANDS = {
    "defensive": BAND_DEFENSIVE,
    "cautious": BAND_NEUTRAL,
    "collaborative": BAND_SUPPORTIVE,
    "intimate": BAND_SUPPORTIVE,
}

LookupErrorHook = Callable[[str, str, Exception], None]


class RelationalReader(Protocol):
    def get_interaction(self, speaker_id: str, target_id: str) -> Any:
        """Return {"state": {...}} (or an object with a .state) for the ordered pair."""
        ...


@dataclass(frozen=True)
class RelationalSnapshot:
    trust: float
    comfort: float
    alignment: float
    energy: float
    stance: str
    stance_band: str

    def to_dict(self) -> dict:
        return asdict(self)


def stance_band(stance: str | None) -> str:
    """Map a relational stance label to defensive | neutral | supportive."""
    return STANCE_BANDS.get((stance or "").strip().lower(), BAND_NEUTRAL)


def _field(obj, name: str):
    if obj is None:
        return None
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def _level(state, name: str) -> float:
    value = _field(state, name)
    return NEUTRAL_LEVEL if value is None else value


def read_snapshot(
    relational: RelationalReader | None,
    speaker_id: str | None,
    target_id: str | None,
    on_error: LookupErrorHook | None = None,
) -> RelationalSnapshot | None:
    if relational is None or not speaker_id or not target_id:
        return None
    try:
        interaction = relational.get_interaction(speaker_id, target_id)
        state = _field(interaction, "state") or {}
        stance = _field(state, "stance") or DEFAULT_STANCE
        return RelationalSnapshot(
            trust=_level(state, "trust"),
            comfort=_level(state, "comfort"),
            alignment=_level(state, "alignment"),
            energy=_level(state, "energy"),
            stance=stance,
            stance_band=stance_band(stance),
        )
    except Exception as e:
        logger.warning("relational lookup failed for %s->%s: %s", speaker_id, target_id, e)
        if on_error is not None:
            on_error(speaker_id, target_id, e)
        return None
