"""
Health check endpoint.

Returns status + DB connectivity so callers can distinguish between
"API down" and "API up but DB unreachable" (in which case rankings are
empty and uploads answer 503), plus the size of the loaded location
catalog the hierarchy is built over.
"""

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.core import database as db_module
from app.core.catalog import get_catalog
from app.core.config import settings
from app.models.location import Location

logger = logging.getLogger(__name__)
router = APIRouter()

API_VERSION = "0.1.0"


class HealthResponse(BaseModel):
    status: str  # Always "ok" if the API process is alive
    version: str
    database: str  # "connected" | "disconnected"
    environment: str
    locations: int  # Entries in the location catalog, AT LARGE included


@router.get("", response_model=HealthResponse, summary="API health check")
async def health_check(catalog: tuple[Location, ...] = Depends(get_catalog)) -> HealthResponse:
    """
    Returns the liveness status of the API and its database connection.

    The API is considered healthy (HTTP 200) even when the database is
    disconnected.
    """
    db_status = "disconnected"
    try:
        # Access via module reference so tests can patch db_module.db_client
        if db_module.db_client.client is not None:
            await db_module.db_client.client.admin.command("ping")
            db_status = "connected"
    except Exception as exc:
        logger.warning("DB ping failed: %s", exc)

    return HealthResponse(
        status="ok",
        version=API_VERSION,
        database=db_status,
        environment=settings.environment,
        locations=len(catalog),
    )
