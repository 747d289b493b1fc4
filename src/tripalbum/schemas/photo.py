from typing import List, Optional

import numpy as np
from pydantic import BaseModel

from tripalbum.models.photo import PhotoRecord


class PhotoInput(BaseModel):
    id: str
    timestamp: float
    lat: Optional[float] = None
    lon: Optional[float] = None
    embedding: Optional[List[float]] = None
    path: Optional[str] = None

    def to_record(self) -> PhotoRecord:
        embedding = None if self.embedding is None else np.asarray(self.embedding, dtype=np.float32)
        return PhotoRecord(
            id=self.id,
            timestamp=self.timestamp,
            lat=self.lat,
            lon=self.lon,
            embedding=embedding,
            path=self.path,
        )
