import math
from typing import List, Optional, Sequence

import numpy as np

from tripalbum.domain.embedding import PrecomputedEmbeddingSpace
from tripalbum.models.photo import PhotoRecord
from tripalbum.schemas.place import PlaceCandidate

BASE_LAT = 37.5665
BASE_LON = 126.9780
METERS_PER_DEG_LAT = 111_320.0

# 2024-05-01 09:00:00 UTC
T0 = 1714554000.0
HOUR = 3600.0


def north_of(meters: float, lat: float = BASE_LAT) -> float:
    """Latitude `meters` north of `lat` (approximate, good to well under 1%)."""
    return lat + meters / METERS_PER_DEG_LAT


def angle_vector(degrees: float) -> np.ndarray:
    """Unit vector in the plane at the given angle from the x axis."""
    rad = math.radians(degrees)
    return np.array([math.cos(rad), math.sin(rad), 0.0], dtype=np.float32)


def make_photo(
    photo_id: str,
    timestamp: float,
    lat: Optional[float] = BASE_LAT,
    lon: Optional[float] = BASE_LON,
    embedding: Optional[Sequence[float]] = None,
) -> PhotoRecord:
    return PhotoRecord(
        id=photo_id,
        timestamp=timestamp,
        lat=lat,
        lon=lon,
        embedding=None if embedding is None else np.asarray(embedding, dtype=np.float32),
    )


def make_place(place_id: str, name: str, lat: float, lng: float, types: Optional[List[str]] = None) -> PlaceCandidate:
    return PlaceCandidate(place_id=place_id, name=name, lat=lat, lng=lng, types=types or [])


class RecordingEmbeddingSpace(PrecomputedEmbeddingSpace):
    """Precomputed space that remembers which labels were asked for."""

    def __init__(self, label_vectors=None):
        super().__init__(label_vectors)
        self.requested_labels: List[str] = []

    async def embed_text(self, label: str):
        self.requested_labels.append(label)
        return await super().embed_text(label)
