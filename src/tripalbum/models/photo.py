from dataclasses import dataclass, field
from typing import Optional

import numpy as np


@dataclass(frozen=True)
class PhotoRecord:
    """
    A single photo as delivered by ingestion.

    `timestamp` is the creation time in epoch seconds. `lat`/`lon` are None when
    the photo carries no GPS fix, `embedding` is None when image embedding failed.
    """
    id: str
    timestamp: float
    lat: Optional[float] = None
    lon: Optional[float] = None
    embedding: Optional[np.ndarray] = field(default=None, compare=False, repr=False)
    path: Optional[str] = field(default=None, compare=False)

    @property
    def has_location(self) -> bool:
        return self.lat is not None and self.lon is not None

    @property
    def has_embedding(self) -> bool:
        return self.embedding is not None
