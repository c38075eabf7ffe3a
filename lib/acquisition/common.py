"""Shared helpers for acquisition modules."""


def normalize_text(text: str | None) -> str:
    return (text or "").strip()


def fold_text(text: str | None) -> str:
    """Case-folded form used as the novelty key."""
    return normalize_text(text).lower()


def tokenize(text: str | None) -> list[str]:
    """Whitespace tokenization; empty tokens are dropped."""
    return (text or "").split()


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    if value < low:
        return low
    if value > high:
        return high
    return value
