import logging
from typing import List, Optional

import numpy as np

from tripalbum.core.config import configs
from tripalbum.domain.clusterers.base import Clusterer
from tripalbum.domain.embedding import cosine_distance
from tripalbum.models.photo import PhotoRecord

logger = logging.getLogger(__name__)


class OutlierFilter(Clusterer):
    """
    Drops visually anomalous photos from a cluster.

    Each photo's cosine distance to the per-dimension median embedding is scored
    with a robust z-score, |d - median(d)| / MAD. Photos scoring at or above the
    threshold are removed. Photos without an embedding are kept and do not take
    part in the statistics.
    """

    def __init__(self, threshold: Optional[float] = None):
        self.threshold = configs.OUTLIER_MAD_THRESHOLD if threshold is None else threshold
        logger.debug(f"OutlierFilter initialized with threshold: {self.threshold}")

    def condition(self, photos: List[PhotoRecord]) -> bool:
        return len(photos) > 2

    async def cluster(self, photos: List[PhotoRecord]) -> List[List[PhotoRecord]]:
        filtered = self.remove_outliers(photos)
        return [filtered] if filtered else []

    def remove_outliers(self, photos: List[PhotoRecord]) -> List[PhotoRecord]:
        if len(photos) <= 2:
            return photos

        embedded = [p for p in photos if p.has_embedding]
        if not embedded:
            return photos

        embeddings = np.stack([np.asarray(p.embedding, dtype=np.float64).ravel() for p in embedded])
        median_embedding = np.median(embeddings, axis=0)

        distances = np.array([cosine_distance(median_embedding, e) for e in embeddings])
        median_distance = float(np.median(distances))
        mad = float(np.median(np.abs(distances - median_distance)))

        if mad == 0:
            return photos

        scores = {p.id: abs(d - median_distance) / mad for p, d in zip(embedded, distances)}
        filtered = []
        for photo in photos:
            score = scores.get(photo.id)
            if score is not None and score >= self.threshold:
                logger.warning(
                    f"Outlier detected and removed: photo {photo.id} (score={score:.2f})",
                    extra={"photo_id": photo.id, "score": round(score, 3)},
                )
                continue
            filtered.append(photo)
        return filtered
