from abc import ABC, abstractmethod
from typing import List

from tripalbum.models.photo import PhotoRecord


class Clusterer(ABC):
    """Abstract base class for a clustering step."""

    def condition(self, photos: List[PhotoRecord]) -> bool:
        """Whether this step should be applied to the given cluster."""
        return True

    @abstractmethod
    async def cluster(self, photos: List[PhotoRecord]) -> List[List[PhotoRecord]]:
        """
        Applies a clustering step to a list of photos.

        Args:
            photos: A list of PhotoRecord objects to cluster.

        Returns:
            A list of clusters, where each cluster is a list of PhotoRecord objects.
        """
        pass
