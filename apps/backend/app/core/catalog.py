"""
catalog.py — The static catalog of recordable campus locations.

Twelve named locations plus the "atlarge" pseudo-location, in the fixed
order the UI lists them. The catalog is configuration: it is loaded once
(from the built-in table or a JSON override file named by CATALOG_PATH)
and handed to routes through the get_catalog() dependency, never imported
as a global by the ranking services. Tests override get_catalog with any
synthetic catalog they like.
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from app.core.config import settings
from app.models.location import Location

logger = logging.getLogger(__name__)

AT_LARGE_ID = "atlarge"

AT_LARGE = Location(
    id=AT_LARGE_ID,
    name="AT LARGE",
    description="Recording at your current location",
    lat=0,
    lng=0,
)

CAMPUS_LOCATIONS: tuple[Location, ...] = (
    Location(id="northernlights",       name="Northern Lights",                lat=34.07442071255393,  lng=-118.44235863646719),
    Location(id="luvalle",              name="Lu Valle Commons",               lat=34.07358407052256,  lng=-118.43924636157925),
    Location(id="sculpturegarden",      name="Sculpture Garden",               lat=34.07490402208068,  lng=-118.44005202769344),
    Location(id="roycehall",            name="Royce Hall",                     lat=34.07270663598194,  lng=-118.44217093540396),
    Location(id="printlab",             name="Print Lab",                      lat=34.07601991731391,  lng=-118.44069145779318),
    Location(id="newwightgallery",      name="New Wight Gallery",              lat=34.076009768873966, lng=-118.44076522496871),
    Location(id="mathsciencesbuilding", name="Mathematical Sciences Building", lat=34.069749,           lng=-118.442560),
    Location(id="ackerman",             name="Ackerman",                       lat=34.07049151137256,  lng=-118.44412719235386),
    Location(id="yrl",                  name="YRL",                            lat=34.07493725669435,  lng=-118.44145607313261),
    Location(id="bruinwalk",            name="Bruin Walk",                     lat=34.07099341426743,  lng=-118.44507296793255),
    Location(id="kerckhoff",            name="Kerckhoff",                      lat=34.07057784312767,  lng=-118.44340944785897),
    Location(id="tongvasteps",          name="Tongva (Kuruvungna) Steps",      lat=34.07219172773654,  lng=-118.44326816984622),
)


def load_catalog(path: Optional[str] = None, include_at_large: bool = True) -> tuple[Location, ...]:
    """
    Return the location catalog as an ordered, immutable tuple.

    With `path`, the file must hold a JSON list of location objects; it
    replaces the built-in campus table. Raises ValueError on a malformed
    file: a bad catalog is a deployment error, not something to paper over.
    """
    if path:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(raw, list):
            raise ValueError(f"Catalog file {path} must contain a JSON list")
        locations = tuple(Location(**entry) for entry in raw)
        logger.info("Loaded %d catalog locations from %s", len(locations), path)
    else:
        locations = CAMPUS_LOCATIONS

    if include_at_large and all(loc.id != AT_LARGE_ID for loc in locations):
        locations = (AT_LARGE, *locations)
    return locations


@lru_cache(maxsize=1)
def get_catalog() -> tuple[Location, ...]:
    """FastAPI dependency — the catalog configured in settings, loaded once."""
    return load_catalog(settings.catalog_path or None, settings.catalog_include_at_large)
