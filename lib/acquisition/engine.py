"""
Acquisition engine: decides whether a candidate utterance is learned from.

Pipeline per consider() call:
  trim text (empty -> fast reject) -> relational snapshot -> pair novelty
  -> score -> decide -> stats -> [accept only] merger.observe_utterance + snapshot re-read

Collaborators are optional. A relational store that is absent or fails is treated
as unknown context; a merger that raises propagates to the caller.
Not safe for concurrent consider() calls on the same instance: callers serialize.
"""
from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Protocol

from .common import normalize_text
from .config import AcquisitionConfig
from .novelty import EvictHook, NoveltyTracker
from .policy import ACCEPT, DEFER, REJECT, decide, reason
from .relational import (
    BAND_NEUTRAL,
    NEUTRAL_LEVEL,
    LookupErrorHook,
    RelationalReader,
    RelationalSnapshot,
    read_snapshot,
)
from .schema import validate_candidate
from .scoring import score_breakdown

logger = logging.getLogger(__name__)

_PAYLOAD_ALIASES = {
    "speakerId": "speaker_id",
    "targetId": "target_id",
    "sourceType": "source_type",
}


class UtteranceMerger(Protocol):
    def observe_utterance(self, payload: dict) -> Any:
        """Absorb an accepted utterance; may return an awaitable."""
        ...


@dataclass(frozen=True)
class Candidate:
    text: str | None = None
    speaker_id: str | None = None
    target_id: str | None = None
    direction: str = "incoming"
    source_type: str = "internal"
    channels: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, payload: dict) -> "Candidate":
        """Validate against CANDIDATE_SCHEMA; accepts camelCase or snake_case keys."""
        errors = validate_candidate(payload)
        if errors:
            raise ValueError("invalid candidate: " + "; ".join(errors))
        clashes = sorted(camel for camel, snake in _PAYLOAD_ALIASES.items() if camel in payload and snake in payload)
        if clashes:
            raise ValueError("invalid candidate: both camelCase and snake_case given for " + ", ".join(clashes))
        values = {_PAYLOAD_ALIASES.get(k, k): v for k, v in payload.items()}
        if "channels" in values:
            values["channels"] = tuple(values["channels"])
        return cls(**values)


@dataclass
class Decision:
    decision: str
    score: float
    stance_band: str = BAND_NEUTRAL
    merger_result: Any = None
    snapshot: RelationalSnapshot | None = None

    def to_dict(self) -> dict:
        return {
            "decision": self.decision,
            "score": self.score,
            "stance_band": self.stance_band,
            "merger_result": self.merger_result,
            "snapshot": self.snapshot.to_dict() if self.snapshot else None,
        }


@dataclass
class Stats:
    accepted: int = 0
    rejected: int = 0
    deferred: int = 0

    def record(self, decision: str) -> None:
        if decision == ACCEPT:
            self.accepted += 1
        elif decision == REJECT:
            self.rejected += 1
        elif decision == DEFER:
            self.deferred += 1


class Acquisition:
    def __init__(
        self,
        merger: UtteranceMerger | None = None,
        relational: RelationalReader | None = None,
        config: AcquisitionConfig | None = None,
        *,
        on_lookup_error: LookupErrorHook | None = None,
        pair_capacity: int | None = None,
        on_pair_evict: EvictHook | None = None,
        **options,
    ):
        if config is not None and options:
            raise ValueError("pass either config or keyword options, not both")
        self.merger = merger
        self.relational = relational
        self.cfg = config or AcquisitionConfig.from_options(options)
        self._on_lookup_error = on_lookup_error
        self._stats = Stats()
        self._novelty = NoveltyTracker(
            enabled=self.cfg.track_by_pair, capacity=pair_capacity, on_evict=on_pair_evict
        )

    async def consider(self, candidate: Candidate | dict) -> Decision:
        if isinstance(candidate, dict):
            candidate = Candidate.from_dict(candidate)
        cleaned = normalize_text(candidate.text)
        if not cleaned:
            return Decision(decision=REJECT, score=0.0)

        snapshot = self._snapshot(candidate.speaker_id, candidate.target_id)
        novelty = self._novelty.update(candidate.speaker_id, candidate.target_id, cleaned)
        score, adjustments = score_breakdown(
            cleaned, candidate.source_type, candidate.channels, snapshot, novelty, self.cfg
        )
        decision = decide(score, self.cfg.accept_threshold, self.cfg.defer_threshold)
        self._stats.record(decision)
        logger.debug(
            "consider %s->%s: %s (%s) adjustments=%s",
            candidate.speaker_id, candidate.target_id, decision,
            reason(decision, score, self.cfg.accept_threshold, self.cfg.defer_threshold),
            adjustments,
        )

        band = snapshot.stance_band if snapshot else BAND_NEUTRAL
        merger_result = None
        if decision == ACCEPT and self.merger is not None:
            merger_result = await self._merge(candidate, cleaned, snapshot, score)
            updated = self._snapshot(candidate.speaker_id, candidate.target_id)
            if updated is not None:
                if updated.stance_band != band:
                    logger.info(
                        "stance band shifted %s -> %s for %s->%s after merge",
                        band, updated.stance_band, candidate.speaker_id, candidate.target_id,
                    )
                band = updated.stance_band

        return Decision(
            decision=decision,
            score=score,
            stance_band=band,
            merger_result=merger_result,
            snapshot=snapshot,
        )

    def get_stats(self) -> dict:
        return {
            "accepted": self._stats.accepted,
            "rejected": self._stats.rejected,
            "deferred": self._stats.deferred,
        }

    def get_pair_stats(self, speaker_id: str | None, target_id: str | None) -> dict | None:
        if not self.cfg.track_by_pair:
            return None
        return self._novelty.stats(speaker_id, target_id)

    def _snapshot(self, speaker_id, target_id) -> RelationalSnapshot | None:
        return read_snapshot(self.relational, speaker_id, target_id, on_error=self._on_lookup_error)

    async def _merge(self, candidate: Candidate, text: str, snapshot: RelationalSnapshot | None, score: float):
        payload = {
            "text": text,
            "speaker_id": candidate.speaker_id,
            "target_id": candidate.target_id,
            "direction": candidate.direction,
            "context": {
                "source_type": candidate.source_type,
                "channels": list(candidate.channels or ()),
                "trust_level": snapshot.trust if snapshot else NEUTRAL_LEVEL,
                "comfort_level": snapshot.comfort if snapshot else NEUTRAL_LEVEL,
                "acquisition_score": score,
            },
        }
        result = self.merger.observe_utterance(payload)
        if inspect.isawaitable(result):
            result = await result
        return result


def create_acquisition_module(
    merger: UtteranceMerger | None = None,
    relational: RelationalReader | None = None,
    **options,
) -> dict:
    """Wire collaborators and options into one engine: {"acquisition": Acquisition}."""
    return {"acquisition": Acquisition(merger, relational, **options)}
