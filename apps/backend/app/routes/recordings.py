"""
recordings.py — Recording metadata routes.

Routes:
  GET  /api/recordings  — every stored recording, in storage order
  POST /api/recordings  — store metadata for a new recording (rate limited)

Documents in the recordings collection keep the original metadata.json
shape (camelCase keys, string id, ISO date), so a legacy export can be
imported as-is with scripts/seed_db.py. Audio bytes are not handled here;
a recording only carries an audioUrl / filename reference.

load_recordings() is also used by routes/rankings.py: it is the single
place where stored documents are read, and it turns every read failure
into an empty list so rankings degrade to "no data" instead of a 500.
"""

import logging
import time
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import ValidationError

from app.core.config import settings
from app.core.database import get_db
from app.core.rate_limit import limiter
from app.models.recording import RecordingCreate, RecordingOut
from app.services.projection import audio_reference
from app.services.scoring import effective_average

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/recordings", tags=["recordings"])


# ── Helpers ───────────────────────────────────────────────────────────────────

async def load_recordings(db) -> list[dict[str, Any]]:
    """Read all recording documents; [] when the DB is down or the read fails."""
    if db is None:
        return []
    recordings: list[dict[str, Any]] = []
    try:
        async for doc in db[settings.recordings_collection].find({}, {"_id": 0}):
            if isinstance(doc, dict):
                recordings.append(doc)
    except Exception as exc:
        logger.warning("Reading recordings failed, treating collection as empty: %s", exc)
        return []
    return recordings


def _doc_to_recording(doc: dict[str, Any]) -> RecordingOut:
    return RecordingOut(**{
        **doc,
        "id": str(doc.get("id", "")),  # legacy exports sometimes stored numeric ids
        "audioUrl": audio_reference(doc, settings.audio_url_prefix),
    })


def _build_document(payload: RecordingCreate) -> dict[str, Any]:
    doc = payload.model_dump(by_alias=True)
    if payload.scores is not None:
        doc["scores"] = payload.scores.model_dump(exclude_none=True)
        if payload.average_score is None:
            # Store the precise mean plus a rounded legacy score, like the upload form does.
            average = effective_average({"scores": doc["scores"]})
            doc["averageScore"] = average
            if payload.score is None:
                doc["score"] = round(average)

    now = datetime.now(tz=timezone.utc)
    doc["id"] = str(int(time.time() * 1000))
    doc["date"] = now.isoformat()
    doc["audioUrl"] = audio_reference(doc, settings.audio_url_prefix)
    return {key: value for key, value in doc.items() if value is not None}


# ── Routes ────────────────────────────────────────────────────────────────────

@router.get("", response_model=list[RecordingOut])
async def list_recordings(db=Depends(get_db)):
    """Return every stored recording; entries without audioUrl get one derived."""
    items = []
    for doc in await load_recordings(db):
        try:
            items.append(_doc_to_recording(doc))
        except ValidationError as exc:
            logger.warning("Skipping malformed recording doc %s: %s", doc.get("id"), exc)
    return items


@router.post("", response_model=RecordingOut, status_code=201)
@limiter.limit(settings.recordings_rate_limit)
async def create_recording(request: Request, payload: RecordingCreate, db=Depends(get_db)):
    """Store metadata for a new recording."""
    if db is None:
        raise HTTPException(status_code=503, detail="Database unavailable")

    doc = _build_document(payload)
    await db[settings.recordings_collection].insert_one(dict(doc))
    logger.info("Stored recording %s at %s", doc["id"], doc["locationId"])

    return _doc_to_recording(doc)
