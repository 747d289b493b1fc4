import asyncio
import logging
from typing import List, Optional, Sequence

from tripalbum.common.exceptions import PlaceSearchError
from tripalbum.core.config import configs
from tripalbum.domain.places.base import PlaceSearchService, RadiusPlaceSearch
from tripalbum.schemas.place import PlaceCandidate

logger = logging.getLogger(__name__)


class HybridPlaceSearch(PlaceSearchService):
    """
    Runs a wide landmark search and a close proximity search at the same time and
    merges the results, keeping the first occurrence of each place id.
    """

    def __init__(self, searcher: RadiusPlaceSearch, radii_m: Optional[Sequence[float]] = None):
        self.searcher = searcher
        self.radii_m = tuple(configs.PLACE_SEARCH_RADII_M if radii_m is None else radii_m)

    async def find_nearby(self, lat: float, lon: float) -> List[PlaceCandidate]:
        try:
            results = await asyncio.gather(
                *(self.searcher.search(lat, lon, radius) for radius in self.radii_m)
            )
        except PlaceSearchError:
            raise
        except Exception as e:
            raise PlaceSearchError(f"Nearby search failed at ({lat}, {lon}): {e}") from e

        unique_places: List[PlaceCandidate] = []
        seen_place_ids = set()
        for places in results:
            for place in places:
                if place.place_id not in seen_place_ids:
                    seen_place_ids.add(place.place_id)
                    unique_places.append(place)

        logger.debug(f"Hybrid search at ({lat}, {lon}) found {len(unique_places)} unique places.")
        return unique_places
