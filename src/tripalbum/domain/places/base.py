from abc import ABC, abstractmethod
from typing import List

from tripalbum.schemas.place import PlaceCandidate


class PlaceSearchService(ABC):
    """Finds named places around a coordinate."""

    @abstractmethod
    async def find_nearby(self, lat: float, lon: float) -> List[PlaceCandidate]:
        """
        Args:
            lat: Latitude of the query point.
            lon: Longitude of the query point.

        Returns:
            Nearby places, possibly empty.

        Raises:
            PlaceSearchError: The lookup itself failed.
        """
        pass


class RadiusPlaceSearch(ABC):
    """A single nearby search bounded by a radius."""

    @abstractmethod
    async def search(self, lat: float, lon: float, radius_m: float) -> List[PlaceCandidate]:
        pass
