import logging
from typing import List, Optional

from tripalbum.common.exceptions import InvalidOrderError
from tripalbum.core.config import configs
from tripalbum.domain.clusterers.base import Clusterer
from tripalbum.models.photo import PhotoRecord

logger = logging.getLogger(__name__)


class TripSplitClusterer(Clusterer):
    def __init__(self, separation_sec: Optional[float] = None):
        self.separation_sec = configs.TRIP_SEPARATION_SEC if separation_sec is None else separation_sec
        logger.debug(f"TripSplitClusterer initialized with separation_sec: {self.separation_sec}")

    async def cluster(self, photos: List[PhotoRecord]) -> List[List[PhotoRecord]]:
        return self.split(photos)

    def split(self, photos: List[PhotoRecord]) -> List[List[PhotoRecord]]:
        """
        Splits time-ordered photos into trips.

        A new trip starts when the gap to the previous photo reaches the separation
        threshold. Raises InvalidOrderError if the input is not sorted by timestamp.
        """
        if not photos:
            return []

        logger.info(f"Starting trip splitting for {len(photos)} photos.")
        trips: List[List[PhotoRecord]] = []
        current_trip: List[PhotoRecord] = [photos[0]]

        for index in range(1, len(photos)):
            prev_photo = photos[index - 1]
            current_photo = photos[index]

            time_gap = current_photo.timestamp - prev_photo.timestamp
            if time_gap < 0:
                raise InvalidOrderError(index, prev_photo.timestamp, current_photo.timestamp)

            if time_gap < self.separation_sec:
                current_trip.append(current_photo)
            else:
                logger.debug(f"Time gap of {time_gap:.2f}s reached threshold. Starting new trip.")
                trips.append(current_trip)
                current_trip = [current_photo]

        trips.append(current_trip)

        logger.info(
            f"Trip splitting resulted in {len(trips)} trips.",
            extra={"photos": len(photos), "trips": len(trips)},
        )
        return trips
