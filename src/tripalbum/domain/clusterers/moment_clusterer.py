import logging
from typing import List, Optional

from tripalbum.core.config import configs
from tripalbum.domain.clusterers.base import Clusterer
from tripalbum.domain.geo import distance_m
from tripalbum.models.cluster import MomentCluster
from tripalbum.models.photo import PhotoRecord

logger = logging.getLogger(__name__)


class MomentClusterer(Clusterer):
    """
    Sequential spatio-temporal clustering of one trip into place visits.

    Each photo is compared only with the most recently created cluster, so a photo
    taken back near an earlier place opens a new cluster instead of rejoining it.
    """

    def __init__(self, max_dist_m: Optional[float] = None, max_time_gap_sec: Optional[float] = None):
        self.max_dist_m = configs.MOMENT_MAX_DIST_M if max_dist_m is None else max_dist_m
        self.max_time_gap_sec = configs.MOMENT_MAX_TIME_GAP_SEC if max_time_gap_sec is None else max_time_gap_sec
        logger.debug(
            f"MomentClusterer initialized with max_dist_m: {self.max_dist_m}, "
            f"max_time_gap_sec: {self.max_time_gap_sec}"
        )

    async def cluster(self, photos: List[PhotoRecord]) -> List[List[PhotoRecord]]:
        return [moment.photos for moment in self.execute(photos)]

    def execute(self, photos: List[PhotoRecord]) -> List[MomentCluster]:
        clusters: List[MomentCluster] = []

        for photo in photos:
            if clusters and self._belongs_to(photo, clusters[-1]):
                clusters[-1].add(photo)
            else:
                clusters.append(MomentCluster(photo))

        clusters = [c for c in clusters if c.photos]
        logger.info(
            f"Moment clustering of {len(photos)} photos resulted in {len(clusters)} moments.",
            extra={"photos": len(photos), "moments": len(clusters)},
        )
        return clusters

    def _belongs_to(self, photo: PhotoRecord, cluster: MomentCluster) -> bool:
        time_gap = photo.timestamp - cluster.end_time
        if time_gap >= self.max_time_gap_sec:
            return False

        # Without a location on either side only the time rule applies
        if not photo.has_location or cluster.representative_location is None:
            return True

        lat, lon = cluster.representative_location
        dist = distance_m(photo.lat, photo.lon, lat, lon)
        return dist < self.max_dist_m
