"""Vector index for query-scoped similarity search.

Abstracts the nearest-neighbour lookup so the ranker only deals with
embedded chunks and a query vector.
"""

from abc import ABC, abstractmethod

import numpy as np
import structlog

from web_retrieval.errors import EmbeddingError
from web_retrieval.retrieval.models import EmbeddedChunk

logger = structlog.get_logger(__name__)


class VectorIndex(ABC):
    """Abstract base class for vector index implementations."""

    @abstractmethod
    async def add(self, items: list[EmbeddedChunk]) -> None:
        """
        Add embedded chunks to the index.

        Args:
            items: Chunks with their vectors, in insertion order
        """
        pass

    @abstractmethod
    async def search(self, query_vector: list[float], top_k: int) -> list[tuple[EmbeddedChunk, float]]:
        """
        Return the ``top_k`` most similar chunks.

        Ties are broken by insertion order, earliest first.

        Args:
            query_vector: Query embedding
            top_k: Number of results to return

        Returns:
            (chunk, score) pairs, best first
        """
        pass


class InMemoryVectorIndex(VectorIndex):
    """Brute-force cosine similarity over vectors held in memory."""

    def __init__(self, dimension: int | None = None):
        """
        Initialize index.

        Args:
            dimension: Expected vector dimension; inferred from the first add when None
        """
        self.dimension = dimension
        self.items: list[EmbeddedChunk] = []
        self._matrix: np.ndarray | None = None

    async def add(self, items: list[EmbeddedChunk]) -> None:
        """Add chunks and rebuild the normalised vector matrix."""
        if not items:
            return

        dimensions = {len(item.vector) for item in items}
        if self.dimension is not None:
            dimensions.add(self.dimension)
        if len(dimensions) != 1:
            raise EmbeddingError(f"Inconsistent embedding dimensions: {sorted(dimensions)}")

        vectors = self._normalise(np.array([item.vector for item in items], dtype=np.float64))
        self._matrix = vectors if self._matrix is None else np.vstack([self._matrix, vectors])
        self.items.extend(items)
        self.dimension = self._matrix.shape[1]

        logger.debug("Added vectors to index", count=len(items), total_vectors=len(self.items))

    async def search(self, query_vector: list[float], top_k: int) -> list[tuple[EmbeddedChunk, float]]:
        """Search by cosine similarity."""
        if self._matrix is None or top_k <= 0:
            return []

        query = np.array(query_vector, dtype=np.float64)
        if query.shape != (self._matrix.shape[1],):
            raise EmbeddingError(
                f"Query dimension {query.shape[0]} does not match index dimension {self._matrix.shape[1]}"
            )

        scores = self._matrix @ self._normalise(query[np.newaxis, :])[0]
        # Stable sort keeps insertion order among equal scores
        order = np.argsort(-scores, kind="stable")[:top_k]
        return [(self.items[i], float(scores[i])) for i in order]

    @staticmethod
    def _normalise(vectors: np.ndarray) -> np.ndarray:
        norms = np.linalg.norm(vectors, axis=1, keepdims=True)
        norms[norms == 0] = 1.0
        return vectors / norms
