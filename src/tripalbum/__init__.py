import logging

from tripalbum.domain.pipeline import PhotoClusteringPipeline
from tripalbum.models.photo import PhotoRecord
from tripalbum.schemas.album import Day, Highlight, Moment, POICandidate, TripAlbum

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Day",
    "Highlight",
    "Moment",
    "POICandidate",
    "PhotoClusteringPipeline",
    "PhotoRecord",
    "TripAlbum",
]
