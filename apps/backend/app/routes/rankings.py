"""
rankings.py — Location and recording rankings.

Routes:
  GET /api/rankings            — flat ranking (locations or recordings)
  GET /api/rankings/hierarchy  — max-heap view over the whole location catalog

Query parameters for GET /api/rankings:
  kind         locations | recordings                            (default locations)
  metric       average | importance | emotion | intensity | aesthetic | count
  direction    asc | desc                                        (default desc)
  location_id  only consider recordings with this locationId
  limit        clamped to [1, 1000] — out-of-range values are clamped, not rejected
  examples     attach the top 5 recordings to each location       (kind=locations)

Both routes rebuild everything from the stored recordings on every call; an
unreachable or unreadable collection just produces an empty ranking.

  curl "http://localhost:8000/api/rankings?metric=emotion&limit=5"
  curl "http://localhost:8000/api/rankings?kind=recordings&location_id=roycehall"
  curl http://localhost:8000/api/rankings/hierarchy
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.core.catalog import get_catalog
from app.core.config import settings
from app.core.database import get_db
from app.models.location import Location
from app.models.ranking import Direction, HierarchyResponse, Kind, Metric, RankingResponse
from app.routes.recordings import load_recordings
from app.services.aggregation import TOP_EXAMPLES_MAX
from app.services.hierarchy import build_hierarchy
from app.services.ranker import rank

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/rankings", tags=["rankings"])


@router.get("", response_model=RankingResponse)
async def get_rankings(
    kind: Kind = Query(default="locations"),
    metric: Metric = Query(default="average"),
    direction: Direction = Query(default="desc"),
    location_id: Optional[str] = Query(default=None, description="Restrict to one locationId"),
    limit: Optional[int] = Query(default=None, description="Clamped to 1–1000"),
    examples: bool = Query(default=False, description="Attach top recordings per location"),
    db=Depends(get_db),
):
    """Rank locations (aggregated) or individual recordings by one metric."""
    recordings = await load_recordings(db)
    items = rank(
        recordings,
        kind=kind,
        metric=metric,
        direction=direction,
        location_id=location_id or None,
        limit=limit,
        top_examples=TOP_EXAMPLES_MAX if examples else 0,
        audio_url_prefix=settings.audio_url_prefix,
    )
    return RankingResponse(kind=kind, metric=metric, direction=direction, total=len(items), items=items)


@router.get("/hierarchy", response_model=HierarchyResponse)
async def get_hierarchy(
    db=Depends(get_db),
    catalog: tuple[Location, ...] = Depends(get_catalog),
):
    """Heap root, size, max-first order and tree levels for every catalog location."""
    recordings = await load_recordings(db)
    hierarchy = build_hierarchy(recordings, catalog)
    logger.debug("Built hierarchy over %d locations from %d recordings", hierarchy.size, len(recordings))
    return hierarchy
