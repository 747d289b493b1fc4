import logging
from typing import List, Optional, Tuple

from tripalbum.core.config import configs
from tripalbum.domain.clusterers.base import Clusterer
from tripalbum.domain.embedding import cosine_similarity
from tripalbum.models.photo import PhotoRecord
from tripalbum.schemas.album import Highlight

logger = logging.getLogger(__name__)


class HighlightClusterer(Clusterer):
    """
    Groups near-duplicate photos of one moment.

    Every photo is compared with the first member of each open group and joins the
    most similar group above the threshold, or opens a new one. Groups of two or
    more become highlights, singletons become optional photos. Photos without an
    embedding are never grouped and always end up optional.
    """

    def __init__(self, similarity_threshold: Optional[float] = None):
        self.similarity_threshold = (
            configs.HIGHLIGHT_SIMILARITY_THRESHOLD if similarity_threshold is None else similarity_threshold
        )
        logger.debug(f"HighlightClusterer initialized with similarity_threshold: {self.similarity_threshold}")

    async def cluster(self, photos: List[PhotoRecord]) -> List[List[PhotoRecord]]:
        return self.group(photos)

    def group(self, photos: List[PhotoRecord]) -> List[List[PhotoRecord]]:
        groups: List[List[PhotoRecord]] = []

        for photo in photos:
            if not photo.has_embedding:
                continue

            best_index = None
            max_similarity = 0.0
            for index, group in enumerate(groups):
                similarity = cosine_similarity(photo.embedding, group[0].embedding)
                if similarity > self.similarity_threshold and similarity > max_similarity:
                    max_similarity = similarity
                    best_index = index

            if best_index is None:
                groups.append([photo])
            else:
                groups[best_index].append(photo)

        return groups

    def create_highlights(self, photos: List[PhotoRecord]) -> Tuple[List[Highlight], List[str]]:
        """Returns (highlights, optional photo ids sorted by timestamp)."""
        highlights: List[Highlight] = []
        optionals: List[PhotoRecord] = [p for p in photos if not p.has_embedding]

        for group in self.group(photos):
            if len(group) > 1:
                highlights.append(
                    Highlight(representative_asset_id=group[0].id, asset_ids=[p.id for p in group])
                )
            else:
                optionals.append(group[0])

        optionals.sort(key=lambda p: p.timestamp)
        logger.debug(f"{len(photos)} photos -> {len(highlights)} highlights, {len(optionals)} optionals")
        return highlights, [p.id for p in optionals]
