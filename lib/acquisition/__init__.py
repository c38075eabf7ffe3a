"""
Utterance acquisition gate for the conversational agent.

Decides per candidate utterance whether to learn from it now (accept), hold it
(defer) or drop it (reject), from:
  - Text shape:  word count against configured bounds
  - Source:      user / system / internal
  - Relational:  trust, comfort and stance band between speaker and target
  - Novelty:     whether the ordered pair has seen this text before
  - Channels:    engagement tags

Accepted candidates are handed to the merger (lexicon/model absorption).
State (pair memory, counters) is in-process only.
"""

from .config import AcquisitionConfig, DEFAULTS
from .engine import Acquisition, Candidate, Decision, UtteranceMerger, create_acquisition_module
from .novelty import NoveltyInfo, NoveltyTracker, PairKey
from .policy import ACCEPT, DEFER, REJECT, decide
from .relational import RelationalReader, RelationalSnapshot, read_snapshot, stance_band
from .scoring import score_breakdown, score_candidate

__all__ = [
    "ACCEPT",
    "DEFER",
    "REJECT",
    "DEFAULTS",
    "Acquisition",
    "AcquisitionConfig",
    "Candidate",
    "Decision",
    "NoveltyInfo",
    "NoveltyTracker",
    "PairKey",
    "RelationalReader",
    "RelationalSnapshot",
    "UtteranceMerger",
    "create_acquisition_module",
    "decide",
    "read_snapshot",
    "score_breakdown",
    "score_candidate",
    "stance_band",
]
