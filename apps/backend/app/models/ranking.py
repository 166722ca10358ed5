"""
ranking.py — Pydantic models for the location-ranking engine.

All models here are derived, read-only snapshots: they are rebuilt from the
current recording collection on every request and never persisted. They are
frozen so the heap (and any other consumer) can only reorder references,
never edit node content.

  DimensionScores   — the four per-dimension values for a record or a group
  RankedRecording   — denormalised projection of one recording
  LocationAggregate — per-location count / average / per-dimension average
  HeapNode          — the heap's ordering key (projection of an aggregate)
  RankingResponse   — GET /api/rankings
  HierarchyResponse — GET /api/rankings/hierarchy
"""

from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Kind = Literal["locations", "recordings"]
Metric = Literal["average", "importance", "emotion", "intensity", "aesthetic", "count"]
Direction = Literal["asc", "desc"]


class _Snapshot(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class DimensionScores(_Snapshot):
    importance: float = 0.0
    emotion:    float = 0.0
    intensity:  float = 0.0
    aesthetic:  float = 0.0


class RankedRecording(_Snapshot):
    """One recording with every score resolved to the 0–10 scale."""

    id:             str
    title:          str
    location_id:    str
    location_name:  str
    recording_type: Optional[str] = None
    audio_url:      Optional[str] = None
    average:        float
    importance:     float
    emotion:        float
    intensity:      float
    aesthetic:      float
    lat:            Optional[float] = None
    lng:            Optional[float] = None
    date:           Optional[str] = None


class LocationAggregate(_Snapshot):
    """Statistics for every recording grouped under one locationId."""

    location_id:     str
    location_name:   str
    count:           int = Field(ge=0)
    avg:             float = 0.0
    avg_by_dim:      DimensionScores = Field(default_factory=DimensionScores)
    has_memory:      bool = False
    has_observation: bool = False
    top_examples:    list[RankedRecording] = Field(default_factory=list)


class HeapNode(_Snapshot):
    """A location as seen by the max-heap: keyed on average_score."""

    location_id:      str
    location_name:    str
    average_score:    float
    total_recordings: int = 0
    has_memory:       bool = False
    has_observation:  bool = False

    @classmethod
    def from_aggregate(cls, aggregate: LocationAggregate) -> "HeapNode":
        return cls(
            location_id=aggregate.location_id,
            location_name=aggregate.location_name,
            average_score=aggregate.avg,
            total_recordings=aggregate.count,
            has_memory=aggregate.has_memory,
            has_observation=aggregate.has_observation,
        )


class RankingResponse(_Snapshot):
    """Response shape for GET /api/rankings."""

    kind:      Kind
    metric:    Metric
    direction: Direction
    total:     int
    items:     Union[list[LocationAggregate], list[RankedRecording]]


class HierarchyResponse(_Snapshot):
    """Response shape for GET /api/rankings/hierarchy."""

    size:   int
    root:   Optional[HeapNode] = None
    sorted: list[HeapNode]
    levels: list[list[HeapNode]]
