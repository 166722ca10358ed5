"""
scoring.py — Score normalisation for stored recordings.

Recordings reach the ranking engine as raw metadata documents, and three
generations of upload form have left three different score shapes behind:

  1. averageScore  — a single precomputed number (current uploads)
  2. scores        — {importance, emotion, intensity, aesthetic}, numbers or
                     numeric strings, any of which may be missing
  3. score         — the legacy single 0–10 score

resolve_payload() decides which shape a record carries (in that priority
order) and returns it as a tagged ScorePayload, so every consumer goes
through one resolution rule instead of probing optional fields itself.

Every value read from a record passes through clamp_score(): parse, map
anything non-finite or non-numeric to 0, clip to [0, 10]. Nothing here
raises on bad data.

USAGE
─────
    from app.services.scoring import effective_average, dimension_value

    rec = {"locationId": "roycehall", "scores": {"importance": 8, "emotion": "6"}}
    effective_average(rec)               # → 3.5   ((8 + 6 + 0 + 0) / 4)
    dimension_value(rec, "emotion")      # → 6.0
    dimension_value({"score": 3}, "emotion")  # → 3.0 (falls back to the average)
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Literal

DIMENSIONS = ("importance", "emotion", "intensity", "aesthetic")

SCORE_MIN = 0.0
SCORE_MAX = 10.0

# Leading decimal number of a string; trailing text is ignored ("7abc" -> 7).
_LEADING_NUMBER = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

PayloadKind = Literal["average", "scores", "legacy", "none"]


@dataclass(frozen=True)
class ScorePayload:
    """The one score shape a record resolved to."""

    kind: PayloadKind
    value: float = 0.0                                   # "average" / "legacy"
    scores: dict[str, float] = field(default_factory=dict)  # "scores", clamped


def clamp_score(value: Any) -> float:
    """
    Coerce any score-like value into the closed interval [0, 10].

    Numbers are used as is. Anything else is read as text and its leading
    decimal number is taken ("7abc" -> 7, "1_0" -> 1). None, booleans,
    text without a leading number, NaN and ±inf all become 0.
    """
    if isinstance(value, bool) or value is None:
        return SCORE_MIN
    try:
        if isinstance(value, (int, float)):
            number = float(value)
        else:
            match = _LEADING_NUMBER.match(str(value))
            if match is None:
                return SCORE_MIN
            number = float(match.group())
    except (OverflowError, TypeError, ValueError):
        return SCORE_MIN
    if not math.isfinite(number):
        return SCORE_MIN
    return max(SCORE_MIN, min(SCORE_MAX, number))


def _finite_number(value: Any) -> bool:
    # Only genuine numbers count for averageScore / score; strings do not.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def resolve_payload(rec: Any) -> ScorePayload:
    """Return the tagged score shape of a record, honouring priority order."""
    if not isinstance(rec, Mapping):
        return ScorePayload(kind="none")

    average = rec.get("averageScore")
    if _finite_number(average):
        return ScorePayload(kind="average", value=clamp_score(average))

    scores = rec.get("scores")
    if isinstance(scores, Mapping):
        return ScorePayload(
            kind="scores",
            scores={dim: clamp_score(scores.get(dim, 0)) for dim in DIMENSIONS},
        )

    legacy = rec.get("score")
    if _finite_number(legacy):
        return ScorePayload(kind="legacy", value=clamp_score(legacy))

    return ScorePayload(kind="none")


def effective_average(rec: Any) -> float:
    """Return the single resolved 0–10 score for a recording."""
    payload = resolve_payload(rec)
    if payload.kind == "scores":
        return sum(payload.scores.values()) / len(DIMENSIONS)
    return payload.value


def dimension_value(rec: Any, dim: str) -> float:
    """
    Return the record's value for one scoring dimension.

    Records without a scores object contribute their effective average to
    every dimension, so legacy single-score uploads still take part in
    per-dimension rankings.
    """
    if dim not in DIMENSIONS:
        raise ValueError(f"Unknown scoring dimension '{dim}'")
    if isinstance(rec, Mapping) and isinstance(rec.get("scores"), Mapping):
        return clamp_score(rec["scores"].get(dim, 0))
    return effective_average(rec)


def dimension_values(rec: Any) -> dict[str, float]:
    """All four dimension values for a record, keyed by dimension name."""
    return {dim: dimension_value(rec, dim) for dim in DIMENSIONS}
