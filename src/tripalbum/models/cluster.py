from typing import List, Optional, Tuple

from tripalbum.models.photo import PhotoRecord
from tripalbum.models.ranking import RankedCandidate


class MomentCluster:
    """
    Accumulator for one place visit.

    Seeded with a single photo and grown by `add`. The representative location is
    the location of the first added photo that has one.
    """

    def __init__(self, seed: PhotoRecord):
        self.photos: List[PhotoRecord] = [seed]
        self.representative_location: Optional[Tuple[float, float]] = (
            (seed.lat, seed.lon) if seed.has_location else None
        )
        self.start_time: float = seed.timestamp
        self.end_time: float = seed.timestamp

        self.identified_poi_name: Optional[str] = None
        self.poi_candidates: List[RankedCandidate] = []

    def add(self, photo: PhotoRecord) -> None:
        self.photos.append(photo)
        if self.representative_location is None and photo.has_location:
            self.representative_location = (photo.lat, photo.lon)
        if photo.timestamp > self.end_time:
            self.end_time = photo.timestamp
        if photo.timestamp < self.start_time:
            self.start_time = photo.timestamp

    @property
    def cover_photo(self) -> Optional[PhotoRecord]:
        if not self.photos:
            return None
        return min(self.photos, key=lambda p: p.timestamp)

    def __len__(self) -> int:
        return len(self.photos)

    def __repr__(self) -> str:
        return (
            f"MomentCluster(photos={len(self.photos)}, start={self.start_time}, "
            f"end={self.end_time}, name={self.identified_poi_name!r})"
        )
