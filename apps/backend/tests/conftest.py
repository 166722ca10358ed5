"""
pytest configuration and shared fixtures for the Sound Recorder API tests.

Key concern: tests must not require a live MongoDB. We achieve this by:
  1. Patching connect_to_mongo / close_mongo_connection to no-ops so
     FastAPI's lifespan doesn't try to reach a real database.
  2. Setting db_client.client = None (disconnected) so health check
     correctly reports "disconnected" — a valid test-mode state.
  3. Injecting in-memory fake collections through app.dependency_overrides
     for routes that read or write recordings.
"""

import os
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest
from httpx import ASGITransport, AsyncClient

# Set env vars BEFORE importing the app so Settings picks them up correctly
os.environ.setdefault("ENVIRONMENT", "test")


# ── In-memory stand-ins for Motor collections ─────────────────────────────────

class FakeCursor:
    def __init__(self, docs):
        self._docs = docs

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for doc in self._docs:
            yield {k: v for k, v in doc.items() if k != "_id"}


class FakeRecordingsCollection:
    def __init__(self, docs=None):
        self.docs = [dict(d) for d in (docs or [])]

    def find(self, _query=None, _projection=None):
        return FakeCursor(self.docs)

    async def insert_one(self, doc):
        doc["_id"] = f"oid-{len(self.docs)}"
        self.docs.append(doc)
        return SimpleNamespace(inserted_id=doc["_id"])


class BrokenRecordingsCollection:
    """Every read blows up, like a corrupt collection or a dropped connection."""

    def find(self, _query=None, _projection=None):
        raise RuntimeError("cursor exploded")


class FakeDB:
    def __init__(self, collection):
        self.collection = collection

    def __getitem__(self, _name):
        return self.collection


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture(autouse=True)
async def mock_db():
    """
    Patch the MongoDB lifecycle for every test.

    - connect_to_mongo → no-op AsyncMock (startup doesn't attempt real connection)
    - close_mongo_connection → no-op AsyncMock
    - db_client.client / db_client.db → None
    - rate limiter storage reset so POST-heavy tests never hit 429
    """
    with (
        patch("app.core.database.connect_to_mongo", new_callable=AsyncMock),
        patch("app.core.database.close_mongo_connection", new_callable=AsyncMock),
    ):
        import app.core.database as db_module
        from app.core.rate_limit import limiter

        original_client = db_module.db_client.client
        original_db = db_module.db_client.db

        db_module.db_client.client = None
        db_module.db_client.db = None
        limiter.reset()

        yield

        db_module.db_client.client = original_client
        db_module.db_client.db = original_db


@pytest.fixture()
async def client(mock_db):  # noqa: ARG001 — mock_db must run first
    """HTTPX async test client wired to the FastAPI app (no database)."""
    from app.main import app

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture()
def recordings_collection():
    """Empty fake collection; tests append documents to `.docs` as needed."""
    return FakeRecordingsCollection()


@pytest.fixture()
async def db_client(recordings_collection):
    """HTTPX client whose get_db dependency returns a FakeDB over recordings_collection."""
    from app.core.database import get_db
    from app.main import app

    app.dependency_overrides[get_db] = lambda: FakeDB(recordings_collection)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture()
async def broken_db_client():
    """HTTPX client whose recordings collection raises on every read."""
    from app.core.database import get_db
    from app.main import app

    app.dependency_overrides[get_db] = lambda: FakeDB(BrokenRecordingsCollection())
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture()
def end_to_end_recordings():
    """Three recordings across two locations, one per score shape."""
    return [
        {
            "id": "A", "locationId": "roycehall", "locationName": "Royce Hall",
            "title": "Choir warmup", "recordingType": "memory",
            "scores": {"importance": 8, "emotion": 6, "intensity": 4, "aesthetic": 10},
        },
        {
            "id": "B", "locationId": "roycehall", "locationName": "Royce Hall",
            "title": "Lobby chatter", "recordingType": "observation", "score": 3,
        },
        {
            "id": "C", "locationId": "ackerman", "locationName": "Ackerman",
            "title": "Lunch rush", "recordingType": "observation", "averageScore": 9,
        },
    ]
