import logging
from typing import List, Optional

import numpy as np
from scipy.spatial.distance import pdist, squareform

from tripalbum.core.config import configs
from tripalbum.domain.clusterers.base import Clusterer
from tripalbum.domain.clusterers.dbscan import DBSCAN
from tripalbum.domain.geo import distance_matrix_m
from tripalbum.models.photo import PhotoRecord

logger = logging.getLogger(__name__)

# Cosine distance assigned to any pair involving a photo without an embedding
MAX_VISUAL_DISTANCE = 2.0


class DensityPhotoClusterer(Clusterer):
    """
    Unordered alternative to moment clustering: DBSCAN over a weighted sum of
    normalized visual distance (cosine distance / 2) and normalized geographic
    distance (meters / max_geo_dist_m, capped at 1).
    """

    def __init__(
        self,
        eps: Optional[float] = None,
        min_pts: Optional[int] = None,
        visual_weight: Optional[float] = None,
        geo_weight: Optional[float] = None,
        max_geo_dist_m: Optional[float] = None,
    ):
        self.eps = configs.DBSCAN_EPS if eps is None else eps
        self.min_pts = configs.DBSCAN_MIN_PTS if min_pts is None else min_pts
        self.visual_weight = configs.DBSCAN_VISUAL_WEIGHT if visual_weight is None else visual_weight
        self.geo_weight = configs.DBSCAN_GEO_WEIGHT if geo_weight is None else geo_weight
        self.max_geo_dist_m = configs.DBSCAN_MAX_GEO_DIST_M if max_geo_dist_m is None else max_geo_dist_m
        logger.debug(
            f"DensityPhotoClusterer initialized. eps={self.eps}, min_pts={self.min_pts}, "
            f"visual_weight={self.visual_weight}, geo_weight={self.geo_weight}, "
            f"max_geo_dist_m={self.max_geo_dist_m}"
        )

    async def cluster(self, photos: List[PhotoRecord]) -> List[List[PhotoRecord]]:
        return self.execute(photos)

    def execute(self, photos: List[PhotoRecord]) -> List[List[PhotoRecord]]:
        if len(photos) < self.min_pts:
            logger.info(f"Only {len(photos)} photos, fewer than min_pts={self.min_pts}. No density clusters.")
            return []

        dist_matrix = self.compute_distance_matrix(photos)
        runner = DBSCAN(lambda i, j: dist_matrix[i][j], eps=self.eps, min_pts=self.min_pts)
        index_clusters = runner.fit_clusters(list(range(len(photos))))

        clusters = [[photos[i] for i in members] for members in index_clusters]
        logger.info(
            f"Density clustering of {len(photos)} photos resulted in {len(clusters)} clusters.",
            extra={"photos": len(photos), "clusters": len(clusters)},
        )
        return clusters

    def compute_distance_matrix(self, photos: List[PhotoRecord]) -> np.ndarray:
        visual = self._compute_visual_matrix(photos) / 2.0
        geo = self._compute_geo_matrix(photos)
        return visual * self.visual_weight + geo * self.geo_weight

    def _compute_visual_matrix(self, photos: List[PhotoRecord]) -> np.ndarray:
        """
        Cosine distance matrix (0..2), MAX_VISUAL_DISTANCE between any two distinct
        photos when either lacks an embedding. The diagonal stays 0 for every photo,
        so each photo counts towards its own neighborhood.
        """
        n = len(photos)
        dist_matrix = np.full((n, n), MAX_VISUAL_DISTANCE)
        np.fill_diagonal(dist_matrix, 0.0)

        indices = [i for i, p in enumerate(photos) if p.has_embedding]
        if len(indices) < 2:
            return dist_matrix

        feature_matrix = np.stack([np.asarray(photos[i].embedding, dtype=np.float64).ravel() for i in indices])
        with np.errstate(invalid="ignore", divide="ignore"):
            sub_matrix = squareform(pdist(feature_matrix, metric="cosine"))
        # zero vectors have no direction; treat them as orthogonal
        sub_matrix = np.nan_to_num(sub_matrix, nan=1.0)
        dist_matrix[np.ix_(indices, indices)] = sub_matrix
        np.fill_diagonal(dist_matrix, 0.0)
        return dist_matrix

    def _compute_geo_matrix(self, photos: List[PhotoRecord]) -> np.ndarray:
        """Geographic distance normalized by max_geo_dist_m and capped at 1.0."""
        meters = distance_matrix_m([p.lat for p in photos], [p.lon for p in photos])
        return np.minimum(1.0, meters / self.max_geo_dist_m)
