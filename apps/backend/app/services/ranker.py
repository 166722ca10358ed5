"""
ranker.py — Flat, sort-based rankings of locations or individual recordings.

USAGE
─────
    from app.services.ranker import rank

    rank(recordings, kind="locations", metric="average", direction="desc")
    # → [LocationAggregate(ackerman, avg=9.0), LocationAggregate(roycehall, avg=5.0)]

    rank(recordings, kind="recordings", metric="emotion", location_id="roycehall", limit=10)
    # → [RankedRecording(...), ...]

Ordering contract:
  - numeric comparison on the chosen metric only; ties are never broken
    explicitly. sorted() is stable in both directions, so equal entries keep
    their pre-sort order (group order for locations, input order for
    recordings).
  - the location_id filter runs before aggregation / sorting
  - limit is clamped to [1, 1000] and applied after sorting
  - zero inputs → empty list
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Callable, Optional, Union

from app.models.ranking import Direction, Kind, LocationAggregate, Metric, RankedRecording
from app.services.aggregation import aggregate_by_location
from app.services.projection import AUDIO_URL_PREFIX, group_key, project_recording

logger = logging.getLogger(__name__)

LIMIT_MIN = 1
LIMIT_MAX = 1000

_DIMENSION_METRICS = ("importance", "emotion", "intensity", "aesthetic")


def clamp_limit(limit: Optional[int]) -> Optional[int]:
    """Clip a requested limit to [1, 1000]; None means "no limit"."""
    if limit is None:
        return None
    return max(LIMIT_MIN, min(LIMIT_MAX, int(limit)))


def _location_key(metric: Metric) -> Callable[[LocationAggregate], float]:
    if metric == "count":
        return lambda agg: float(agg.count)
    if metric == "average":
        return lambda agg: agg.avg
    if metric in _DIMENSION_METRICS:
        return lambda agg: getattr(agg.avg_by_dim, metric)
    raise ValueError(f"Unknown ranking metric '{metric}'")


def _recording_key(metric: Metric) -> Callable[[RankedRecording], float]:
    if metric == "count":
        # Every recording counts once, so this degenerates to input order.
        return lambda _rec: 1.0
    if metric == "average":
        return lambda rec: rec.average
    if metric in _DIMENSION_METRICS:
        return lambda rec: getattr(rec, metric)
    raise ValueError(f"Unknown ranking metric '{metric}'")


def _ordered(items: Sequence, key: Callable, direction: Direction, limit: Optional[int]) -> list:
    if direction not in ("asc", "desc"):
        raise ValueError(f"Unknown ranking direction '{direction}'")
    ordered = sorted(items, key=key, reverse=direction == "desc")
    capped = clamp_limit(limit)
    return ordered if capped is None else ordered[:capped]


def rank_locations(
    aggregates: Sequence[LocationAggregate],
    metric: Metric = "average",
    direction: Direction = "desc",
    limit: Optional[int] = None,
) -> list[LocationAggregate]:
    """Order location aggregates by `metric`."""
    return _ordered(aggregates, _location_key(metric), direction, limit)


def rank_recordings(
    recordings: Iterable[Any],
    metric: Metric = "average",
    direction: Direction = "desc",
    limit: Optional[int] = None,
    audio_url_prefix: str = AUDIO_URL_PREFIX,
) -> list[RankedRecording]:
    """Project each recording and order the projections by `metric`."""
    projected = [project_recording(rec, audio_url_prefix) for rec in recordings if isinstance(rec, Mapping)]
    return _ordered(projected, _recording_key(metric), direction, limit)


def filter_by_location(recordings: Iterable[Any], location_id: Optional[str]) -> list[Any]:
    """Keep recordings whose locationId matches exactly; None keeps everything."""
    if location_id is None:
        return list(recordings)
    return [rec for rec in recordings if isinstance(rec, Mapping) and group_key(rec) == location_id]


def rank(
    recordings: Iterable[Any],
    kind: Kind = "locations",
    metric: Metric = "average",
    direction: Direction = "desc",
    location_id: Optional[str] = None,
    limit: Optional[int] = None,
    top_examples: int = 0,
    audio_url_prefix: str = AUDIO_URL_PREFIX,
) -> Union[list[LocationAggregate], list[RankedRecording]]:
    """Build a ranked view of `recordings` (see module docstring)."""
    selected = filter_by_location(recordings, location_id)

    if kind == "locations":
        result = rank_locations(
            aggregate_by_location(selected, top_examples, audio_url_prefix), metric, direction, limit,
        )
    elif kind == "recordings":
        result = rank_recordings(selected, metric, direction, limit, audio_url_prefix)
    else:
        raise ValueError(f"Unknown ranking kind '{kind}'")

    logger.debug(
        "Ranked %d %s by %s (%s) from %d recordings",
        len(result), kind, metric, direction, len(selected),
    )
    return result
