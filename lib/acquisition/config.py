"""
Acquisition thresholds and engine options.

Defaults live here only. Options may be passed as snake_case or camelCase keys;
ACQUISITION_* environment variables override defaults via from_env().

Usage:
  from lib.acquisition.config import AcquisitionConfig
  cfg = AcquisitionConfig.from_options({"acceptThreshold": 0.7})
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields

logger = logging.getLogger(__name__)

# Central defaults (single source of truth)
DEFAULTS = {
    "accept_threshold": 0.6,
    "defer_threshold": 0.4,
    "max_text_length": 320,
    "min_text_length": 4,
    "track_by_pair": True,
}

_CAMEL_ALIASES = {
    "acceptThreshold": "accept_threshold",
    "deferThreshold": "defer_threshold",
    "maxTextLength": "max_text_length",
    "minTextLength": "min_text_length",
    "trackByPair": "track_by_pair",
}

ENV_PREFIX = "ACQUISITION_"
_FALSY = ("0", "false", "no", "off")


def _coerce(name: str, value):
    """Convert an option value to its field type; raises TypeError or ValueError."""
    if name == "track_by_pair":
        if isinstance(value, str):
            return value.strip().lower() not in _FALSY
        return bool(value)
    if name.endswith("_length"):
        return int(value)
    return float(value)


@dataclass(frozen=True)
class AcquisitionConfig:
    accept_threshold: float = DEFAULTS["accept_threshold"]
    defer_threshold: float = DEFAULTS["defer_threshold"]
    max_text_length: int = DEFAULTS["max_text_length"]
    min_text_length: int = DEFAULTS["min_text_length"]
    track_by_pair: bool = DEFAULTS["track_by_pair"]

    def __post_init__(self):
        if self.accept_threshold <= self.defer_threshold:
            logger.warning(
                "accept_threshold %.3f <= defer_threshold %.3f: defer band is empty",
                self.accept_threshold, self.defer_threshold,
            )

    @property
    def ideal_max_words(self) -> float:
        return self.max_text_length / 5

    @property
    def long_warn_words(self) -> float:
        return self.max_text_length / 2

    @classmethod
    def from_options(cls, options: dict | None = None) -> "AcquisitionConfig":
        """Build from a mapping; None values fall back to defaults, unknown keys raise ValueError."""
        values = {}
        unknown = []
        for key, value in (options or {}).items():
            name = _CAMEL_ALIASES.get(key, key)
            if name not in DEFAULTS:
                unknown.append(key)
                continue
            if value is None:
                continue
            try:
                values[name] = _coerce(name, value)
            except (TypeError, ValueError):
                raise ValueError(f"acquisition option {key}={value!r} is not a valid value") from None
        if unknown:
            raise ValueError(f"unknown acquisition option(s): {', '.join(sorted(unknown))}")
        return cls(**values)

    @classmethod
    def from_env(cls, environ: dict | None = None) -> "AcquisitionConfig":
        env = os.environ if environ is None else environ
        values = {}
        for f in fields(cls):
            raw = env.get(ENV_PREFIX + f.name.upper())
            if raw is None or not raw.strip():
                continue
            raw = raw.strip()
            try:
                values[f.name] = _coerce(f.name, raw)
            except ValueError:
                raise ValueError(f"{ENV_PREFIX}{f.name.upper()}={raw!r} is not a valid value") from None
        return cls(**values)

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}
