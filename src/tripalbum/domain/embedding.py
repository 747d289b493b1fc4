import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence

import numpy as np

from tripalbum.common.exceptions import EmbeddingDimensionError
from tripalbum.models.photo import PhotoRecord

logger = logging.getLogger(__name__)


def cosine_similarity(a: np.ndarray, b: np.ndarray) -> float:
    """
    Cosine similarity in [-1, 1]. A zero-magnitude vector scores 0.0.

    Raises EmbeddingDimensionError for empty or mismatched vectors.
    """
    a = np.asarray(a, dtype=np.float64).ravel()
    b = np.asarray(b, dtype=np.float64).ravel()
    if a.size == 0 or a.size != b.size:
        raise EmbeddingDimensionError(f"Cannot compare vectors of length {a.size} and {b.size}")

    magnitude = np.linalg.norm(a) * np.linalg.norm(b)
    if magnitude == 0:
        return 0.0
    similarity = float(np.dot(a, b) / magnitude)
    return max(-1.0, min(1.0, similarity))


def cosine_distance(a: np.ndarray, b: np.ndarray) -> float:
    return 1.0 - cosine_similarity(a, b)


class EmbeddingSpace(ABC):
    """
    Shared image/text embedding model.

    Only the interface lives here; concrete models are provided by the caller.
    """

    @abstractmethod
    async def embed_image(self, photo: PhotoRecord) -> Optional[np.ndarray]:
        """
        Embed the image behind a photo.

        Returns:
            The embedding vector, or None when the image cannot be embedded.
        """
        pass

    @abstractmethod
    async def embed_text(self, label: str) -> Optional[np.ndarray]:
        """Embed a text label. Returns None on failure."""
        pass

    async def embed_texts(self, labels: Sequence[str]) -> List[Optional[np.ndarray]]:
        """Embeds every label concurrently, preserving input order."""
        if not labels:
            return []
        results = await asyncio.gather(*(self.embed_text(label) for label in labels), return_exceptions=True)

        embeddings: List[Optional[np.ndarray]] = []
        for label, result in zip(labels, results):
            if isinstance(result, BaseException):
                logger.warning(f"Text embedding failed for '{label}': {result}")
                embeddings.append(None)
            else:
                embeddings.append(result)
        return embeddings

    def similarity(self, a: np.ndarray, b: np.ndarray) -> float:
        return cosine_similarity(a, b)


class PrecomputedEmbeddingSpace(EmbeddingSpace):
    """
    Embedding space backed by vectors computed ahead of time: image embeddings come
    from the photo records, text embeddings from a label -> vector table.
    """

    def __init__(self, label_vectors: Optional[Dict[str, Sequence[float]]] = None):
        self.label_vectors = {
            label: np.asarray(vector, dtype=np.float32) for label, vector in (label_vectors or {}).items()
        }

    async def embed_image(self, photo: PhotoRecord) -> Optional[np.ndarray]:
        return photo.embedding

    async def embed_text(self, label: str) -> Optional[np.ndarray]:
        vector = self.label_vectors.get(label)
        if vector is None:
            logger.debug(f"No precomputed vector for label '{label}'")
        return vector
