"""
aggregation.py — Group recordings by location and compute per-location stats.

One aggregator feeds both consumers of location data — the flat ranker and
the max-heap hierarchy — so they always see identical numbers.

Grouping rules:
  - key is the record's locationId, or "unknown" when it is blank / missing
  - the group label is the first-seen record's locationName (else the key)
  - groups come out in order of first appearance; nothing is sorted here

Per group:
  count       — number of recordings
  avg         — mean of effective_average() over the group
  avg_by_dim  — mean of dimension_value() per dimension, computed separately
  has_memory / has_observation — whether any record has that recordingType
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from app.models.ranking import DimensionScores, LocationAggregate
from app.services.projection import AUDIO_URL_PREFIX, group_key, project_recording
from app.services.scoring import DIMENSIONS, dimension_value, effective_average

TOP_EXAMPLES_MAX = 5


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def group_by_location(recordings: Iterable[Any]) -> dict[str, list[Mapping[str, Any]]]:
    """Bucket recordings by group key, preserving first-appearance order."""
    groups: dict[str, list[Mapping[str, Any]]] = {}
    for rec in recordings:
        if not isinstance(rec, Mapping):
            continue
        groups.setdefault(group_key(rec), []).append(rec)
    return groups


def summarise_group(
    location_id: str,
    recs: list[Mapping[str, Any]],
    top_examples: int = 0,
    audio_url_prefix: str = AUDIO_URL_PREFIX,
) -> LocationAggregate:
    """Build the aggregate for one already-grouped location."""
    location_name = str(recs[0].get("locationName") or location_id) if recs else location_id
    averages = [effective_average(r) for r in recs]

    examples = []
    if top_examples > 0:
        # sorted() is stable: equal averages keep their storage order
        ranked = sorted(zip(averages, range(len(recs))), key=lambda pair: pair[0], reverse=True)
        examples = [
            project_recording(recs[i], audio_url_prefix)
            for _, i in ranked[:min(top_examples, TOP_EXAMPLES_MAX)]
        ]

    return LocationAggregate(
        location_id=location_id,
        location_name=location_name,
        count=len(recs),
        avg=_mean(averages),
        avg_by_dim=DimensionScores(
            **{dim: _mean([dimension_value(r, dim) for r in recs]) for dim in DIMENSIONS}
        ),
        has_memory=any(r.get("recordingType") == "memory" for r in recs),
        has_observation=any(r.get("recordingType") == "observation" for r in recs),
        top_examples=examples,
    )


def aggregate_by_location(
    recordings: Iterable[Any],
    top_examples: int = 0,
    audio_url_prefix: str = AUDIO_URL_PREFIX,
) -> list[LocationAggregate]:
    """
    Return one LocationAggregate per locationId seen in `recordings`.

    Non-mapping entries are skipped. An empty input yields an empty list.
    `top_examples` (capped at 5) attaches the best recordings of each group
    for display, with audio links built from `audio_url_prefix`; it has no
    effect on the statistics.
    """
    return [
        summarise_group(location_id, recs, top_examples, audio_url_prefix)
        for location_id, recs in group_by_location(recordings).items()
    ]
