"""
test_rankings.py — Tests for GET /api/rankings and GET /api/rankings/hierarchy.

Uses the in-memory recordings collection from conftest, so no real MongoDB
is needed.
"""

import pytest

from app.core.catalog import get_catalog
from app.core.config import settings
from app.models.location import Location


@pytest.fixture()
def seeded(recordings_collection, end_to_end_recordings):
    recordings_collection.docs.extend(end_to_end_recordings)
    return recordings_collection


class TestRankingsEndpoint:

    async def test_default_is_locations_by_average_desc(self, db_client, seeded):
        r = await db_client.get("/api/rankings")
        assert r.status_code == 200

        data = r.json()
        assert data["kind"] == "locations"
        assert data["metric"] == "average"
        assert data["direction"] == "desc"
        assert data["total"] == 2
        assert [i["locationId"] for i in data["items"]] == ["ackerman", "roycehall"]

    async def test_location_item_shape(self, db_client, seeded):
        royce = (await db_client.get("/api/rankings")).json()["items"][1]
        assert royce["locationName"] == "Royce Hall"
        assert royce["count"] == 2
        assert royce["avg"] == pytest.approx(5.0)
        assert set(royce["avgByDim"]) == {"importance", "emotion", "intensity", "aesthetic"}
        assert royce["hasMemory"] is True
        assert royce["hasObservation"] is True
        assert royce["topExamples"] == []

    async def test_examples_flag_attaches_top_recordings(self, db_client, seeded):
        items = (await db_client.get("/api/rankings", params={"examples": "true"})).json()["items"]
        royce = next(i for i in items if i["locationId"] == "roycehall")
        assert [e["id"] for e in royce["topExamples"]] == ["A", "B"]

    async def test_recordings_kind(self, db_client, seeded):
        data = (await db_client.get("/api/rankings", params={"kind": "recordings", "metric": "emotion"})).json()
        assert data["kind"] == "recordings"
        assert [i["id"] for i in data["items"]] == ["C", "A", "B"]
        assert data["items"][0]["emotion"] == pytest.approx(9.0)
        assert data["items"][0]["title"] == "Lunch rush"

    async def test_location_filter(self, db_client, seeded):
        data = (await db_client.get(
            "/api/rankings", params={"kind": "recordings", "location_id": "roycehall"},
        )).json()
        assert [i["id"] for i in data["items"]] == ["A", "B"]

    async def test_ascending(self, db_client, seeded):
        data = (await db_client.get("/api/rankings", params={"direction": "asc"})).json()
        assert [i["locationId"] for i in data["items"]] == ["roycehall", "ackerman"]

    async def test_count_metric(self, db_client, seeded):
        data = (await db_client.get("/api/rankings", params={"metric": "count"})).json()
        assert [i["count"] for i in data["items"]] == [2, 1]

    @pytest.mark.parametrize("limit, expected", [("0", 1), ("-5", 1), ("1", 1), ("99999", 2)])
    async def test_limit_is_clamped_not_rejected(self, db_client, seeded, limit, expected):
        r = await db_client.get("/api/rankings", params={"limit": limit})
        assert r.status_code == 200
        assert r.json()["total"] == expected

    @pytest.mark.parametrize("params", [
        {"metric": "loudness"},
        {"kind": "students"},
        {"direction": "sideways"},
        {"limit": "ten"},
    ])
    async def test_invalid_query_returns_422(self, db_client, params):
        r = await db_client.get("/api/rankings", params=params)
        assert r.status_code == 422

    async def test_empty_collection(self, db_client):
        data = (await db_client.get("/api/rankings")).json()
        assert data["total"] == 0
        assert data["items"] == []

    async def test_no_database_gives_empty_ranking(self, client):
        r = await client.get("/api/rankings")
        assert r.status_code == 200
        assert r.json()["items"] == []

    async def test_unreadable_collection_gives_empty_ranking(self, broken_db_client):
        r = await broken_db_client.get("/api/rankings", params={"kind": "recordings"})
        assert r.status_code == 200
        assert r.json()["total"] == 0

    async def test_audio_url_prefix_setting_is_shared_with_recordings(
        self, db_client, recordings_collection, monkeypatch,
    ):
        monkeypatch.setattr(settings, "audio_url_prefix", "/media")
        recordings_collection.docs.append(
            {"id": "a", "locationId": "yrl", "filename": "a.webm", "score": 6},
        )

        (listed,) = (await db_client.get("/api/recordings")).json()
        (ranked,) = (await db_client.get("/api/rankings", params={"kind": "recordings"})).json()["items"]
        (location,) = (await db_client.get("/api/rankings", params={"examples": "true"})).json()["items"]

        assert listed["audioUrl"] == "/media/a.webm"
        assert ranked["audioUrl"] == "/media/a.webm"
        assert location["topExamples"][0]["audioUrl"] == "/media/a.webm"

    async def test_malformed_documents_do_not_break_ranking(self, db_client, recordings_collection):
        recordings_collection.docs.extend([
            {"id": "nan", "locationId": "yrl", "averageScore": float("nan"), "scores": {"emotion": "loud"}},
            {"id": "big", "locationId": "yrl", "score": 1e9},
            {"id": "bare"},
        ])
        data = (await db_client.get("/api/rankings", params={"kind": "recordings"})).json()
        assert [i["id"] for i in data["items"]] == ["big", "nan", "bare"]
        assert data["items"][0]["average"] == 10.0


class TestHierarchyEndpoint:

    @pytest.fixture()
    def small_catalog(self):
        from app.main import app

        catalog = (
            Location(id="atlarge", name="AT LARGE"),
            Location(id="roycehall", name="Royce Hall"),
            Location(id="ackerman", name="Ackerman Union"),
        )
        app.dependency_overrides[get_catalog] = lambda: catalog
        return catalog

    async def test_hierarchy_shape(self, db_client, seeded, small_catalog):
        r = await db_client.get("/api/rankings/hierarchy")
        assert r.status_code == 200

        data = r.json()
        assert data["size"] == 3
        assert data["root"]["locationId"] == "ackerman"
        assert data["root"]["locationName"] == "Ackerman Union"
        assert data["root"]["averageScore"] == pytest.approx(9.0)
        assert data["root"]["totalRecordings"] == 1
        assert [n["locationId"] for n in data["sorted"]] == ["ackerman", "roycehall", "atlarge"]
        assert [len(level) for level in data["levels"]] == [1, 2]

    async def test_hierarchy_without_recordings_is_empty(self, db_client, small_catalog):
        data = (await db_client.get("/api/rankings/hierarchy")).json()
        assert data == {"size": 0, "root": None, "sorted": [], "levels": []}

    async def test_hierarchy_without_database_is_empty(self, client):
        r = await client.get("/api/rankings/hierarchy")
        assert r.status_code == 200
        assert r.json()["size"] == 0
        assert r.json()["root"] is None

    async def test_hierarchy_uses_full_catalog_by_default(self, db_client, seeded):
        data = (await db_client.get("/api/rankings/hierarchy")).json()
        assert data["size"] == len(get_catalog())
        assert data["root"]["locationId"] == "ackerman"
