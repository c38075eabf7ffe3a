"""Candidate payload schema (JSON Schema 2020-12) and validation."""
from __future__ import annotations

from jsonschema import Draft202012Validator

DIRECTIONS = ("incoming", "outgoing")

_OPTIONAL_ID = {"type": ["string", "null"]}

CANDIDATE_SCHEMA = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "Candidate",
    "type": "object",
    "properties": {
        "text": {"type": ["string", "null"]},
        "speaker_id": _OPTIONAL_ID,
        "speakerId": _OPTIONAL_ID,
        "target_id": _OPTIONAL_ID,
        "targetId": _OPTIONAL_ID,
        "direction": {"enum": list(DIRECTIONS)},
        "source_type": {"type": "string"},
        "sourceType": {"type": "string"},
        "channels": {"type": "array", "items": {"type": "string"}},
    },
    "additionalProperties": False,
}

_validator = Draft202012Validator(CANDIDATE_SCHEMA)


def validate_candidate(payload) -> list[str]:
    """Return '<path>: <message>' for every schema violation (empty when valid)."""
    errors = sorted(_validator.iter_errors(payload), key=lambda e: list(e.path))
    out = []
    for e in errors:
        path = ".".join(map(str, e.path)) if e.path else "<root>"
        out.append(f"{path}: {e.message}")
    return out
