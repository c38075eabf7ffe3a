"""
Decision policy for candidate utterances: accept | defer | reject.

Usage:
  from lib.acquisition.policy import decide
  decision = decide(0.72, accept_threshold=0.6, defer_threshold=0.4)  # "accept"
"""
from __future__ import annotations

ACCEPT = "accept"
DEFER = "defer"
REJECT = "reject"
DECISIONS = (ACCEPT, DEFER, REJECT)


def decide(score: float, accept_threshold: float, defer_threshold: float) -> str:
    if score >= accept_threshold:
        return ACCEPT
    if score >= defer_threshold:
        return DEFER
    return REJECT


def reason(decision: str, score: float, accept_threshold: float, defer_threshold: float) -> str:
    """Short human-readable reason for the decision."""
    if decision == ACCEPT:
        return f"score {score:.2f} >= accept threshold {accept_threshold:.2f}"
    if decision == DEFER:
        return f"score {score:.2f} between defer {defer_threshold:.2f} and accept {accept_threshold:.2f}"
    if score <= 0:
        return "score floored at 0"
    return f"score {score:.2f} below defer threshold {defer_threshold:.2f}"
