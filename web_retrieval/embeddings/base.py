"""Embedding provider interface used by the chunk ranker."""

from abc import ABC, abstractmethod


class EmbeddingProvider(ABC):
    """Turns chunk and query text into vectors of one fixed dimension."""

    @abstractmethod
    async def embed_text(self, text: str) -> list[float]:
        """Embed a single text, typically the query."""
        pass

    @abstractmethod
    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """
        Embed chunk texts.

        Args:
            texts: Chunk texts in document order

        Returns:
            One vector per text, same order

        Raises:
            EmbeddingError: If the embedding service fails
        """
        pass

    @abstractmethod
    def get_dimension(self) -> int:
        """
        Vector dimension produced by this provider.

        Remote providers may only know it after their first response, so
        callers read it after embedding.
        """
        pass
