import json
import logging
from pathlib import Path
from typing import List, Sequence

from tripalbum.domain.geo import distance_m
from tripalbum.domain.places.base import RadiusPlaceSearch
from tripalbum.schemas.place import NearbySearchResponse, PlaceCandidate

logger = logging.getLogger(__name__)


class LocalPlaceSearch(RadiusPlaceSearch):
    """Serves nearby-search results from an in-memory place list."""

    def __init__(self, places: Sequence[PlaceCandidate]):
        self.places = list(places)
        logger.debug(f"LocalPlaceSearch initialized with {len(self.places)} places")

    @classmethod
    def from_file(cls, path: str) -> "LocalPlaceSearch":
        """Loads either a bare list of places or a `{"results": [...]}` response."""
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        if isinstance(raw, list):
            raw = {"results": raw}
        return cls(NearbySearchResponse.model_validate(raw).results)

    async def search(self, lat: float, lon: float, radius_m: float) -> List[PlaceCandidate]:
        return [
            place for place in self.places
            if distance_m(lat, lon, place.lat, place.lng) <= radius_m
        ]
