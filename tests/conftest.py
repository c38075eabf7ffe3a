"""Shared pytest fixtures: fake relational store, fake merger, engine wiring."""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest

from lib.acquisition import Acquisition


class FakeMerger:
    """Records observe_utterance payloads; returns a canned lexicon update."""

    def __init__(self):
        self.calls = []

    async def observe_utterance(self, payload):
        self.calls.append(payload)
        return {
            "stance": "supportive",
            "template": "My {noun} is {adjective}",
            "lexicon": {
                "nouns": ["pattern"],
                "verbs": ["notice"],
                "adjectives": ["supportive"],
                "adverbs": [],
                "conjunctions": [],
            },
        }


class FakeRelational:
    """In-memory relational store keyed by (from_id, to_id); new pairs start cautious at 0.5."""

    def __init__(self):
        self.interactions = {}
        self.lookups = 0

    def ensure_interaction(self, from_id, to_id):
        key = (from_id, to_id)
        if key not in self.interactions:
            self.interactions[key] = {
                "from_id": from_id,
                "to_id": to_id,
                "state": {"stance": "cautious", "trust": 0.5, "comfort": 0.5, "alignment": 0.5, "energy": 0.5},
            }
        return self.interactions[key]

    def set_interaction_state(self, from_id, to_id, **patch):
        i = self.ensure_interaction(from_id, to_id)
        i["state"].update(patch)
        return i

    def get_interaction(self, from_id, to_id):
        self.lookups += 1
        return self.ensure_interaction(from_id, to_id)


@pytest.fixture
def merger():
    return FakeMerger()


@pytest.fixture
def relational():
    return FakeRelational()


@pytest.fixture
def engine(merger, relational):
    return Acquisition(merger, relational, accept_threshold=0.6, defer_threshold=0.4)
