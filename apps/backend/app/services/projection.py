"""
projection.py — Flatten a raw recording document into a RankedRecording.

Shared by the ranker (kind="recordings") and by the aggregator's optional
top-examples sample, so both show a recording the same way.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, Optional

from app.models.ranking import RankedRecording
from app.services.scoring import dimension_values, effective_average

UNTITLED = "(untitled)"
UNKNOWN_LOCATION = "unknown"
AUDIO_URL_PREFIX = "/recordings"


def group_key(rec: Mapping[str, Any]) -> str:
    """The locationId a recording is grouped under ("unknown" when blank)."""
    return str(rec.get("locationId") or UNKNOWN_LOCATION)


def audio_reference(rec: Mapping[str, Any], prefix: str = AUDIO_URL_PREFIX) -> Optional[str]:
    """Stored audioUrl, else a URL derived from the stored filename."""
    if rec.get("audioUrl"):
        return str(rec["audioUrl"])
    if rec.get("filename"):
        return f"{prefix.rstrip('/')}/{rec['filename']}"
    return None


def _coordinate(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        return float(value) if math.isfinite(value) else None
    except OverflowError:
        return None


def project_recording(rec: Mapping[str, Any], audio_url_prefix: str = AUDIO_URL_PREFIX) -> RankedRecording:
    location_id = group_key(rec)
    dims = dimension_values(rec)
    date = rec.get("date")
    return RankedRecording(
        id=str(rec.get("id", "")),
        title=str(rec.get("title") or UNTITLED),
        location_id=location_id,
        location_name=str(rec.get("locationName") or location_id),
        recording_type=str(rec["recordingType"]) if rec.get("recordingType") else None,
        audio_url=audio_reference(rec, audio_url_prefix),
        average=effective_average(rec),
        lat=_coordinate(rec.get("lat")),
        lng=_coordinate(rec.get("lng")),
        date=str(date) if date else None,
        **dims,
    )
