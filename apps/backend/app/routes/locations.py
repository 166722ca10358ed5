"""
locations.py — Read-only access to the static location catalog.

Routes:
  GET /api/locations  — the catalog in display order (AT LARGE first when enabled)
"""

from fastapi import APIRouter, Depends

from app.core.catalog import get_catalog
from app.models.location import Location

router = APIRouter(prefix="/api/locations", tags=["locations"])


@router.get("", response_model=list[Location])
async def list_locations(catalog: tuple[Location, ...] = Depends(get_catalog)):
    """Return every location students can record at."""
    return list(catalog)
