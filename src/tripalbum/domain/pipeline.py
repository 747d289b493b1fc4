import asyncio
import logging
import time
from typing import List, Optional

from tripalbum.domain.album_assembler import AlbumAssembler
from tripalbum.domain.clusterers.base import Clusterer
from tripalbum.domain.clusterers.density_clusterer import DensityPhotoClusterer
from tripalbum.domain.clusterers.outlier_filter import OutlierFilter
from tripalbum.domain.clusterers.trip_clusterer import TripSplitClusterer
from tripalbum.domain.embedding import EmbeddingSpace
from tripalbum.domain.places.base import PlaceSearchService
from tripalbum.models.photo import PhotoRecord
from tripalbum.schemas.album import TripAlbum

logger = logging.getLogger(__name__)


class ClusterRunner:
    def __init__(self, clusterers: List[Clusterer]):
        self.clusterers = clusterers

    async def process(self, photos: List[PhotoRecord]) -> List[List[PhotoRecord]]:
        """
        Processes photos by applying a series of clusterers in sequence.
        """
        # Start with a single cluster containing all photos
        clusters = [photos]

        for clusterer in self.clusterers:
            logger.info(f"Applying clusterer: {clusterer.__class__.__name__}")

            new_clusters = []
            # Apply the clusterer to each existing cluster
            for cluster in clusters:
                if not cluster:
                    continue
                if clusterer.condition(cluster):
                    sub_clusters = await clusterer.cluster(cluster)
                    new_clusters.extend(sub_clusters)
                else:
                    new_clusters.append(cluster)

            clusters = new_clusters
            logger.info(f"Resulted in {len(clusters)} clusters.")
        return clusters


class PhotoClusteringPipeline:
    def __init__(
        self,
        embedding_space: EmbeddingSpace,
        place_search: PlaceSearchService,
        trip_clusterer: Optional[TripSplitClusterer] = None,
        assembler: Optional[AlbumAssembler] = None,
    ):
        self.trip_clusterer = trip_clusterer or TripSplitClusterer()
        self.assembler = assembler or AlbumAssembler(embedding_space, place_search)

    @staticmethod
    def _sorted(photos: List[PhotoRecord]) -> List[PhotoRecord]:
        return sorted(photos, key=lambda p: (p.timestamp, p.id))

    async def run(self, photos: List[PhotoRecord]) -> List[TripAlbum]:
        """Builds one album per trip. Trips are assembled concurrently."""
        start_time = time.time()
        if not photos:
            logger.warning("No photos given. Skipping album generation.")
            return []

        trips = self.trip_clusterer.split(self._sorted(photos))
        logger.info(f"Detected {len(trips)} trips in {len(photos)} photos.")

        albums = await asyncio.gather(*(self.assembler.create_album(trip) for trip in trips))

        logger.info(f"Done. {len(albums)} albums in {time.time() - start_time:.2f} seconds.")
        return list(albums)

    async def density_clusters(self, photos: List[PhotoRecord]) -> List[List[PhotoRecord]]:
        """
        Alternative unordered grouping: trips, then density clusters over visual
        and geographic distance, then outlier removal inside each cluster.
        """
        runner = ClusterRunner([self.trip_clusterer, DensityPhotoClusterer(), OutlierFilter()])
        return await runner.process(self._sorted(photos))
