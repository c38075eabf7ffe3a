"""Per-pair novelty memory: has this (speaker -> target) pair seen this text before?"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, NamedTuple

from .common import fold_text

logger = logging.getLogger(__name__)


class PairKey(NamedTuple):
    """Ordered identity pair; (a, b) and (b, a) are distinct keys."""
    speaker_id: str
    target_id: str


@dataclass
class PairMemory:
    count: int = 0
    seen_texts: set[str] = field(default_factory=set)


@dataclass(frozen=True)
class NoveltyInfo:
    is_new_for_pair: bool
    total_for_pair: int


UNTRACKED = NoveltyInfo(is_new_for_pair=False, total_for_pair=0)

EvictHook = Callable[[PairKey, PairMemory], None]


class NoveltyTracker:
    """
    Growth-only by default: entries are created lazily and live as long as the
    tracker. capacity (optional) bounds the number of pairs; the oldest pair is
    evicted first and reported to on_evict.
    """

    def __init__(self, enabled: bool = True, capacity: int | None = None, on_evict: EvictHook | None = None):
        if capacity is not None and capacity < 1:
            raise ValueError("capacity must be >= 1 or None")
        self._enabled = enabled
        self._capacity = capacity
        self._on_evict = on_evict
        self._pairs: dict[PairKey, PairMemory] = {}

    @property
    def enabled(self) -> bool:
        return self._enabled

    def __len__(self) -> int:
        return len(self._pairs)

    def update(self, speaker_id: str | None, target_id: str | None, text: str) -> NoveltyInfo:
        if not self._enabled or not speaker_id or not target_id:
            return UNTRACKED
        key = PairKey(speaker_id, target_id)
        entry = self._pairs.get(key)
        if entry is None:
            entry = PairMemory()
            self._pairs[key] = entry
            self._enforce_capacity()
        entry.count += 1
        folded = fold_text(text)
        is_new = folded not in entry.seen_texts
        if is_new:
            entry.seen_texts.add(folded)
        return NoveltyInfo(is_new_for_pair=is_new, total_for_pair=entry.count)

    def stats(self, speaker_id: str | None, target_id: str | None) -> dict:
        """Read-only: {"seen_count", "unique_texts"}; zeros for a pair never considered."""
        entry = self._pairs.get(PairKey(speaker_id, target_id))
        if entry is None:
            return {"seen_count": 0, "unique_texts": 0}
        return {"seen_count": entry.count, "unique_texts": len(entry.seen_texts)}

    def evict(self, speaker_id: str, target_id: str) -> bool:
        key = PairKey(speaker_id, target_id)
        entry = self._pairs.pop(key, None)
        if entry is None:
            return False
        if self._on_evict is not None:
            self._on_evict(key, entry)
        return True

    def _enforce_capacity(self) -> None:
        if self._capacity is None:
            return
        while len(self._pairs) > self._capacity:
            oldest = next(iter(self._pairs))
            logger.debug("novelty capacity %d reached, evicting %s->%s", self._capacity, *oldest)
            self.evict(*oldest)
