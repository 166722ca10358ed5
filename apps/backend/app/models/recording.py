"""
recording.py — Pydantic schemas for recording request / response bodies.

Separation of concerns:
  FourScores      — the four 0–10 dimension scores sent by the upload form
  RecordingCreate — what the client sends to POST /api/recordings
  RecordingOut    — a stored recording as returned by GET /api/recordings

Wire format is camelCase (locationId, studentName, averageScore …) to stay
compatible with metadata documents written by the original file-backed store.
Python attribute names are snake_case; aliases are generated.

Note: the ranking core does NOT consume these models. Stored documents may be
legacy or malformed (numeric strings, NaN, missing fields), so the services
in app/services/ read raw mappings and clamp everything themselves.
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

RecordingType = Literal["memory", "observation"]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FourScores(_CamelModel):
    """Per-dimension scores; omitted dimensions count as 0 when averaged."""

    importance: Optional[float] = Field(default=None, ge=0, le=10)
    emotion:    Optional[float] = Field(default=None, ge=0, le=10)
    intensity:  Optional[float] = Field(default=None, ge=0, le=10)
    aesthetic:  Optional[float] = Field(default=None, ge=0, le=10)


class RecordingCreate(_CamelModel):
    """Payload for POST /api/recordings."""

    title:          str = Field(..., min_length=1, max_length=200)
    student_name:   str = Field(..., min_length=1, max_length=100)
    location_id:    str = Field(..., min_length=1, max_length=64)
    location_name:  str = Field(..., min_length=1, max_length=200)
    recording_type: RecordingType = "memory"
    description:    str = Field(default="", max_length=2000)

    # ── Scoring payload (any one of the three shapes) ─────────────────────────
    score:         Optional[float] = Field(default=None, ge=0, le=10)  # legacy
    scores:        Optional[FourScores] = None
    average_score: Optional[float] = Field(default=None, ge=0, le=10)

    # ── Audio reference — the bytes themselves are stored elsewhere ──────────
    audio_url: Optional[str] = Field(default=None, max_length=500)
    filename:  Optional[str] = Field(default=None, max_length=255)

    lat: Optional[float] = Field(default=None, ge=-90, le=90)
    lng: Optional[float] = Field(default=None, ge=-180, le=180)


class RecordingOut(_CamelModel):
    """A stored recording. Unknown legacy keys are passed through untouched."""

    model_config = ConfigDict(extra="allow")

    id:             str
    location_id:    Optional[str] = None
    location_name:  Optional[str] = None
    title:          Optional[str] = None
    description:    Optional[str] = None
    student_name:   Optional[str] = None
    recording_type: Optional[str] = None
    score:          Optional[Any] = None
    scores:         Optional[dict[str, Any]] = None
    average_score:  Optional[Any] = None
    filename:       Optional[str] = None
    audio_url:      Optional[str] = None
    date:           Optional[str] = None
    lat:            Optional[float] = None
    lng:            Optional[float] = None
