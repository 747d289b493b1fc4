import logging
from collections import deque
from typing import Callable, Generic, List, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

NOISE = -1
UNDEFINED = 0


class DBSCAN(Generic[T]):
    """
    Density-based clustering over any finite sequence.

    Labels are kept per element position: UNDEFINED (0) before a point is visited,
    NOISE (-1) when its neighborhood is too sparse, otherwise the 1-based cluster
    id. A noise point reached later from a core point is absorbed into that
    cluster; cluster ids are final.
    """

    def __init__(self, distance: Callable[[T, T], float], eps: float, min_pts: int):
        self.distance = distance
        self.eps = eps
        self.min_pts = min_pts
        self.labels: List[int] = []

    def fit(self, items: Sequence[T]) -> List[int]:
        n = len(items)
        self.labels = [UNDEFINED] * n
        cluster_id = 0

        for i in range(n):
            if self.labels[i] != UNDEFINED:
                continue

            neighbors = self._range_query(items, i)
            if len(neighbors) < self.min_pts:
                self.labels[i] = NOISE
                continue

            cluster_id += 1
            self.labels[i] = cluster_id
            self._expand(items, neighbors, cluster_id)

        logger.debug(
            f"DBSCAN over {n} items found {cluster_id} clusters, "
            f"{self.labels.count(NOISE)} noise points."
        )
        return list(self.labels)

    def fit_clusters(self, items: Sequence[T]) -> List[List[T]]:
        """Runs the clustering and returns member lists in discovery order, noise dropped."""
        labels = self.fit(items)
        clusters: dict = {}
        for item, label in zip(items, labels):
            if label == NOISE:
                continue
            clusters.setdefault(label, []).append(item)
        return [clusters[label] for label in sorted(clusters)]

    def _expand(self, items: Sequence[T], seeds: List[int], cluster_id: int) -> None:
        frontier = deque(seeds)
        queued = set(seeds)

        while frontier:
            j = frontier.popleft()

            if self.labels[j] == NOISE:
                self.labels[j] = cluster_id
            if self.labels[j] != UNDEFINED:
                continue

            self.labels[j] = cluster_id
            neighbors = self._range_query(items, j)
            if len(neighbors) >= self.min_pts:
                for k in neighbors:
                    if k not in queued and self.labels[k] in (UNDEFINED, NOISE):
                        frontier.append(k)
                        queued.add(k)

    def _range_query(self, items: Sequence[T], index: int) -> List[int]:
        anchor = items[index]
        return [j for j, other in enumerate(items) if self.distance(anchor, other) <= self.eps]
