import logging
import math
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from tripalbum.core.config import configs
from tripalbum.domain.embedding import EmbeddingSpace
from tripalbum.domain.geo import distance_m
from tripalbum.models.ranking import RankedCandidate
from tripalbum.schemas.place import PlaceCandidate

logger = logging.getLogger(__name__)

GENERIC_TAGS_BLACKLIST: FrozenSet[str] = frozenset({"point_of_interest", "establishment", "store"})

# Checked in order, first match wins
PRIORITY_TIERS: Tuple[Tuple[FrozenSet[str], float], ...] = (
    # landmarks, transit and campus hubs
    (frozenset({
        "airport", "university", "stadium", "amusement_park", "national_park",
        "train_station", "subway_station", "transit_station",
    }), 0.12),
    # major sights and large venues
    (frozenset({
        "tourist_attraction", "historical_landmark", "resort", "golf_course",
        "shopping_mall", "museum", "art_gallery", "zoo", "aquarium",
    }), 0.09),
    # everyday destinations
    (frozenset({"restaurant", "park", "hotel", "market", "cafe", "bar"}), 0.06),
    # specific-purpose shops and services
    (frozenset({
        "bakery", "ice_cream_shop", "department_store", "clothing_store", "book_store",
        "car_rental", "movie_theater", "spa",
    }), 0.03),
)

LODGING_TYPES: FrozenSet[str] = frozenset({"hotel", "resort"})
LODGING_PROXIMITY_M = 80.0
LODGING_PROXIMITY_BONUS = 0.25
PROXIMITY_M = 40.0
PROXIMITY_BONUS = 0.20


def extract_high_quality_tags(place_types: Iterable[str]) -> List[str]:
    """Drops generic tags and turns the rest into readable labels ("art_gallery" -> "art gallery")."""
    return [t.replace("_", " ") for t in place_types if t not in GENERIC_TAGS_BLACKLIST]


def priority_bonus(place_types: Iterable[str]) -> float:
    types = set(place_types)
    for tier, bonus in PRIORITY_TIERS:
        if not types.isdisjoint(tier):
            return bonus
    return 0.0


def proximity_bonus(distance: float, place_types: Iterable[str]) -> float:
    types = set(place_types)
    if not types.isdisjoint(LODGING_TYPES) and distance < LODGING_PROXIMITY_M:
        return LODGING_PROXIMITY_BONUS
    if distance < PROXIMITY_M:
        return PROXIMITY_BONUS
    return 0.0


class POIRanker:
    """
    Ranks nearby places for a photo.

    final = clip_weight * clip_score + distance_weight * exp(-distance / scale)
            + priority_bonus + proximity_bonus
    """

    def __init__(
        self,
        embedding_space: EmbeddingSpace,
        clip_weight: Optional[float] = None,
        distance_weight: Optional[float] = None,
        distance_scale_m: Optional[float] = None,
    ):
        self.embedding_space = embedding_space
        self.clip_weight = configs.POI_CLIP_WEIGHT if clip_weight is None else clip_weight
        self.distance_weight = configs.POI_DISTANCE_WEIGHT if distance_weight is None else distance_weight
        self.distance_scale_m = configs.POI_DISTANCE_SCALE_M if distance_scale_m is None else distance_scale_m

    async def rank_places(
        self,
        places: Sequence[PlaceCandidate],
        image_embedding: Optional[np.ndarray],
        photo_lat: float,
        photo_lon: float,
    ) -> List[RankedCandidate]:
        if image_embedding is None:
            logger.warning("No image embedding available, places cannot be ranked.")
            return []
        if not places:
            return []

        candidates = [
            RankedCandidate(place=place, distance=distance_m(photo_lat, photo_lon, place.lat, place.lng))
            for place in places
        ]

        tag_embeddings = await self._embed_tags(candidates)

        for candidate in candidates:
            candidate.clip_score = self._clip_score(candidate, image_embedding, tag_embeddings)
            candidate.final_score = self.score(candidate.clip_score, candidate.distance, candidate.place.types)

        # sorted() is stable, equal scores keep input order
        ranked = sorted(candidates, key=lambda c: c.final_score, reverse=True)
        logger.info(
            f"Ranked {len(ranked)} places, top: "
            f"{ranked[0].place.name!r} ({ranked[0].final_score:.3f})"
        )
        return ranked

    def score(self, clip_score: float, distance: float, place_types: Sequence[str]) -> float:
        distance_score = math.exp(-distance / self.distance_scale_m)
        return (
            clip_score * self.clip_weight
            + distance_score * self.distance_weight
            + priority_bonus(place_types)
            + proximity_bonus(distance, place_types)
        )

    async def _embed_tags(self, candidates: List[RankedCandidate]) -> Dict[str, np.ndarray]:
        """One text embedding per distinct tag across all candidates."""
        all_tags: List[str] = []
        seen = set()
        for candidate in candidates:
            for tag in extract_high_quality_tags(candidate.place.types):
                if tag not in seen:
                    seen.add(tag)
                    all_tags.append(tag)

        if not all_tags:
            return {}

        embeddings = await self.embedding_space.embed_texts(all_tags)
        return {tag: emb for tag, emb in zip(all_tags, embeddings) if emb is not None}

    def _clip_score(
        self,
        candidate: RankedCandidate,
        image_embedding: np.ndarray,
        tag_embeddings: Dict[str, np.ndarray],
    ) -> float:
        max_score = 0.0
        for tag in extract_high_quality_tags(candidate.place.types):
            text_embedding = tag_embeddings.get(tag)
            if text_embedding is None:
                continue
            similarity = self.embedding_space.similarity(image_embedding, text_embedding)
            if similarity > max_score:
                max_score = similarity
        return max_score
