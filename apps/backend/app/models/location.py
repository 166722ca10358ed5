"""
location.py — Pydantic schema for entries in the static location catalog.

The catalog itself lives in app/core/catalog.py; this module only defines
the shape of one entry so both the catalog loader and GET /api/locations
share it.
"""

from pydantic import BaseModel, ConfigDict, Field


class Location(BaseModel):
    """A named campus location students can record at."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)   # e.g. "roycehall"
    name: str                            # display label, e.g. "Royce Hall"
    description: str = ""
    lat: float = Field(default=0.0, ge=-90, le=90)
    lng: float = Field(default=0.0, ge=-180, le=180)
