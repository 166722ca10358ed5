#!/usr/bin/env python3
"""
seed_db.py — Populate the recordings collection for local development.

Usage (from the repo root):
    python scripts/seed_db.py                               # sample recordings
    python scripts/seed_db.py --metadata path/to/metadata.json
    python scripts/seed_db.py --append                      # keep existing docs

Prerequisites:
    • MONGO_URI env var set (or .env file present); defaults to a local mongod
    • `pip install -e .` (motor, certifi, python-dotenv)

--metadata imports the array written by the old file-backed store as-is
(camelCase keys, numeric or string ids). Without it a small sample set
covering every score shape (scores / averageScore / legacy score) is used.

Not idempotent with --append: each run inserts the documents again.
"""

import argparse
import asyncio
import json
import os
from datetime import datetime, timedelta, timezone
from pathlib import Path

ROOT = Path(__file__).parent.parent

from dotenv import load_dotenv

load_dotenv(ROOT / ".env")

import certifi  # noqa: E402
from motor.motor_asyncio import AsyncIOMotorClient  # noqa: E402

MONGO_URI = os.environ.get("MONGO_URI", "mongodb://localhost:27017/soundrecorder")
MONGO_DB_NAME = os.environ.get("MONGO_DB_NAME", "soundrecorder")
COLLECTION = os.environ.get("RECORDINGS_COLLECTION", "recordings")


def _sample(offset_hours, **fields):
    when = datetime.now(timezone.utc) - timedelta(hours=offset_hours)
    return {
        "id": str(int(when.timestamp() * 1000)),
        "date": when.isoformat(),
        "description": "",
        **fields,
    }


# One recording per score shape, so every ranking path has data:
# four-dimension scores, precomputed averageScore, legacy single score.
SAMPLE_RECORDINGS = [
    _sample(
        1, title="Choir warmup", studentName="Ana", recordingType="memory",
        locationId="roycehall", locationName="Royce Hall", filename="choir.webm",
        scores={"importance": 8, "emotion": 6, "intensity": 4, "aesthetic": 10},
        averageScore=7.0, score=7,
    ),
    _sample(
        2, title="Lobby chatter", studentName="Ben", recordingType="observation",
        locationId="roycehall", locationName="Royce Hall", filename="lobby.webm", score=3,
    ),
    _sample(
        3, title="Lunch rush", studentName="Chloe", recordingType="observation",
        locationId="ackerman", locationName="Ackerman", filename="lunch.webm", averageScore=9,
    ),
    _sample(
        5, title="Pages turning", studentName="Dev", recordingType="memory",
        locationId="yrl", locationName="YRL", filename="pages.webm",
        scores={"importance": 5, "emotion": 7, "intensity": 2, "aesthetic": 8},
        averageScore=5.5, score=6,
    ),
    _sample(
        8, title="Fountain", studentName="Eli", recordingType="observation",
        locationId="sculpturegarden", locationName="Sculpture Garden", filename="fountain.webm",
        scores={"importance": 6, "emotion": 8, "intensity": 3, "aesthetic": 9},
        averageScore=6.5, score=7,
    ),
    _sample(
        12, title="Tour group", studentName="Fay", recordingType="observation",
        locationId="bruinwalk", locationName="Bruin Walk", filename="tour.webm", score=5,
    ),
]


def load_metadata(path: Path) -> list[dict]:
    """Read a legacy metadata.json; non-object entries are dropped."""
    raw = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(raw, list):
        raise SystemExit(f"{path} must contain a JSON array of recordings")
    docs = [dict(entry) for entry in raw if isinstance(entry, dict)]
    for doc in docs:
        if "id" in doc:
            doc["id"] = str(doc["id"])
    if len(docs) != len(raw):
        print(f"Skipped {len(raw) - len(docs)} non-object entries.")
    return docs


async def seed(docs: list[dict], append: bool = False) -> None:
    print("Connecting to MongoDB...")
    options: dict = {"serverSelectionTimeoutMS": 5000}
    if MONGO_URI.startswith("mongodb+srv://"):
        options["tlsCAFile"] = certifi.where()
    client = AsyncIOMotorClient(MONGO_URI, **options)
    db = client[MONGO_DB_NAME]

    try:
        # Verify connection
        await client.admin.command("ping")
        print("Connected.")

        # ─── Clean up previous data ───────────────────────────────────────────
        if not append:
            deleted = await db[COLLECTION].delete_many({})
            print(f"Removed {deleted.deleted_count} existing recordings.")

        # ─── Insert recordings ────────────────────────────────────────────────
        if docs:
            result = await db[COLLECTION].insert_many(docs)
            print(f"Inserted {len(result.inserted_ids)} recordings.")

        # ─── Ensure indexes exist ─────────────────────────────────────────────
        await db[COLLECTION].create_index([("locationId", 1)])
        await db[COLLECTION].create_index([("id", 1)])
        print("Indexes ensured.")

        print("\nSeed complete! Recordings per location:")
        pipeline = [{"$group": {"_id": "$locationId", "count": {"$sum": 1}}}, {"$sort": {"count": -1}}]
        async for doc in db[COLLECTION].aggregate(pipeline):
            print(f"  {doc['_id'] or 'unknown'}: {doc['count']} recordings")

    finally:
        client.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed Sound Recorder recordings into MongoDB")
    parser.add_argument(
        "--metadata",
        type=Path,
        help="Legacy metadata.json to import instead of the sample recordings",
    )
    parser.add_argument(
        "--append",
        action="store_true",
        help="Insert without clearing the collection first",
    )
    args = parser.parse_args()

    recordings = load_metadata(args.metadata) if args.metadata else SAMPLE_RECORDINGS

    print(f"Sound Recorder Seeder  (db: {MONGO_DB_NAME}, collection: {COLLECTION})")
    print(f"Mode: {'append' if args.append else 'replace'}\n")

    asyncio.run(seed(recordings, append=args.append))
