from dataclasses import dataclass

from tripalbum.schemas.place import PlaceCandidate


@dataclass
class RankedCandidate:
    place: PlaceCandidate
    distance: float
    clip_score: float = 0.0
    final_score: float = 0.0
