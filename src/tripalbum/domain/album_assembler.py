import logging
from datetime import datetime, tzinfo
from typing import Dict, List, Optional
from zoneinfo import ZoneInfo

import numpy as np

from tripalbum.core.config import configs
from tripalbum.domain.categories import map_categories
from tripalbum.domain.clusterers.highlight_clusterer import HighlightClusterer
from tripalbum.domain.clusterers.moment_clusterer import MomentClusterer
from tripalbum.domain.embedding import EmbeddingSpace
from tripalbum.domain.places.base import PlaceSearchService
from tripalbum.domain.ranking import POIRanker
from tripalbum.models.cluster import MomentCluster
from tripalbum.models.photo import PhotoRecord
from tripalbum.models.ranking import RankedCandidate
from tripalbum.schemas.album import Day, Moment, POICandidate, TripAlbum

logger = logging.getLogger(__name__)

UNKNOWN_PLACE = "Unknown Place"
NO_NEARBY_PLACES = "No Nearby Places"
PLACE_SEARCH_FAILED = "Place Search Failed"
RECOMMENDED_PLACE = "Recommended Place"


class AlbumAssembler:
    """
    Builds the album of one trip: moments, their place names, highlights, and the
    day grouping.
    """

    def __init__(
        self,
        embedding_space: EmbeddingSpace,
        place_search: PlaceSearchService,
        moment_clusterer: Optional[MomentClusterer] = None,
        highlight_clusterer: Optional[HighlightClusterer] = None,
        ranker: Optional[POIRanker] = None,
        timezone: Optional[tzinfo] = None,
        max_candidates: Optional[int] = None,
    ):
        self.embedding_space = embedding_space
        self.place_search = place_search
        self.moment_clusterer = moment_clusterer or MomentClusterer()
        self.highlight_clusterer = highlight_clusterer or HighlightClusterer()
        self.ranker = ranker or POIRanker(embedding_space)
        self.timezone = timezone or ZoneInfo(configs.TIMEZONE)
        self.max_candidates = configs.POI_MAX_CANDIDATES if max_candidates is None else max_candidates

    async def create_album(self, photos: List[PhotoRecord]) -> TripAlbum:
        """Creates the album of one trip. `photos` must be sorted by timestamp."""
        logger.info(f"Step 1/3: Finding moments in {len(photos)} photos...")
        clusters = self.moment_clusterer.execute(photos)

        logger.info(f"Step 2/3: Analyzing places for {len(clusters)} moments...")
        for index, cluster in enumerate(clusters, start=1):
            logger.debug(f"Analyzing places... ({index}/{len(clusters)})")
            await self.identify_poi_name(cluster)

        logger.info("Step 3/3: Creating highlights...")
        album = self.generate_album_structure(clusters)
        logger.info(f"Album '{album.album_title}' created with {len(album.days)} days.")
        return album

    async def identify_poi_name(self, cluster: MomentCluster) -> None:
        """Sets the cluster's place name and candidate list. Never raises for a failed lookup."""
        cover = cluster.cover_photo
        if cover is None or not cover.has_location:
            cluster.identified_poi_name = UNKNOWN_PLACE
            return

        image_embedding = await self._representative_embedding(cover)
        if image_embedding is None:
            cluster.identified_poi_name = UNKNOWN_PLACE
            return

        try:
            places = await self.place_search.find_nearby(cover.lat, cover.lon)
        except Exception as e:
            # Any lookup failure is confined to this moment
            logger.warning(f"Error identifying POI name for photo {cover.id}: {e!r}")
            cluster.identified_poi_name = PLACE_SEARCH_FAILED
            return

        if not places:
            cluster.identified_poi_name = NO_NEARBY_PLACES
            return

        ranked = await self.ranker.rank_places(places, image_embedding, cover.lat, cover.lon)
        cluster.identified_poi_name = ranked[0].place.name if ranked else RECOMMENDED_PLACE
        cluster.poi_candidates = ranked[: self.max_candidates]

    async def _representative_embedding(self, photo: PhotoRecord) -> Optional[np.ndarray]:
        if photo.embedding is not None:
            return photo.embedding
        try:
            return await self.embedding_space.embed_image(photo)
        except Exception as e:
            logger.warning(f"Image embedding failed for photo {photo.id}: {e}")
            return None

    def generate_album_structure(self, clusters: List[MomentCluster]) -> TripAlbum:
        grouped_by_date: Dict[str, List[MomentCluster]] = {}
        for cluster in clusters:
            grouped_by_date.setdefault(self._format(cluster.start_time, "%Y-%m-%d"), []).append(cluster)

        days: List[Day] = []
        for date_string in sorted(grouped_by_date):
            moments = [m for m in map(self._build_moment, grouped_by_date[date_string]) if m is not None]
            if not moments:
                continue

            summary = ", ".join(m.name for m in moments[:3]) + " & more"
            days.append(
                Day(
                    date=date_string,
                    cover_image=moments[0].representative_asset_id,
                    summary=summary,
                    moments=moments,
                )
            )

        return TripAlbum(album_title=self.generate_album_title([d.date for d in days]), days=days)

    def _build_moment(self, cluster: MomentCluster) -> Optional[Moment]:
        cover = cluster.cover_photo
        if cover is None:
            return None

        highlights, optional_ids = self.highlight_clusterer.create_highlights(cluster.photos)
        if not highlights and not optional_ids:
            return None

        return Moment(
            name=cluster.identified_poi_name or UNKNOWN_PLACE,
            time=self._format(cluster.start_time, "%H:%M"),
            representative_asset_id=cover.id,
            highlights=highlights,
            optional_asset_ids=optional_ids,
            poi_candidates=[self._to_poi_candidate(c) for c in cluster.poi_candidates],
        )

    @staticmethod
    def _to_poi_candidate(candidate: RankedCandidate) -> POICandidate:
        place = candidate.place
        return POICandidate(
            id=place.place_id,
            name=place.name,
            score=candidate.final_score,
            latitude=place.lat,
            longitude=place.lng,
            categories=[c.value for c in map_categories(place.types)],
        )

    @staticmethod
    def generate_album_title(dates: List[str]) -> str:
        if not dates:
            return "A Trip Album"
        first, last = dates[0], dates[-1]
        if first == last:
            return f"Trip of {first}"
        return f"Trip: {first} - {last}"

    def _format(self, timestamp: float, fmt: str) -> str:
        return datetime.fromtimestamp(timestamp, self.timezone).strftime(fmt)
