"""Embedding-based chunk ranking."""

from typing import Callable

import structlog

from web_retrieval.embeddings.base import EmbeddingProvider
from web_retrieval.errors import EmbeddingError
from web_retrieval.retrieval.models import EmbeddedChunk, RankedResult, TextChunk
from web_retrieval.retrieval.vector_index import InMemoryVectorIndex, VectorIndex

logger = structlog.get_logger(__name__)


class ChunkRanker:
    """Rank text chunks by semantic similarity to a query."""

    def __init__(
        self,
        embedding_provider: EmbeddingProvider,
        index_factory: Callable[[int], VectorIndex] = InMemoryVectorIndex,
    ):
        """
        Initialize chunk ranker.

        Args:
            embedding_provider: Provider used for both chunks and query
            index_factory: Creates a fresh index of the given dimension for every ranking call
        """
        self.embedding_provider = embedding_provider
        self.index_factory = index_factory

    async def embed_and_rank(self, chunks: list[TextChunk], query: str, top_k: int = 3) -> list[RankedResult]:
        """
        Return the ``top_k`` chunks most similar to the query.

        Args:
            chunks: Chunks to rank, in document order
            query: Search query
            top_k: Number of results to return

        Returns:
            Ranked results, best first; empty if there are no chunks

        Raises:
            EmbeddingError: If the embedding service fails
        """
        if not chunks:
            logger.info("No chunks to rank", query=query)
            return []

        vectors = await self.embedding_provider.embed_batch([chunk.text for chunk in chunks])
        if len(vectors) != len(chunks):
            raise EmbeddingError(f"Expected {len(chunks)} embeddings, got {len(vectors)}")

        query_vector = await self.embedding_provider.embed_text(query)

        index = self.index_factory(self.embedding_provider.get_dimension())
        await index.add([EmbeddedChunk(chunk=chunk, vector=vector) for chunk, vector in zip(chunks, vectors)])
        matches = await index.search(query_vector, top_k)

        logger.info(
            "Chunks ranked",
            query=query,
            candidates=len(chunks),
            returned=len(matches),
            top_score=round(matches[0][1], 4) if matches else None,
        )

        return [RankedResult(url=item.chunk.source_url, content=item.chunk.text) for item, _ in matches]
