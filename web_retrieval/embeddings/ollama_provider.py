"""Ollama embedding provider for local embeddings."""

import asyncio

import aiohttp
import structlog

from web_retrieval.embeddings.base import EmbeddingProvider
from web_retrieval.errors import EmbeddingError

logger = structlog.get_logger(__name__)


class OllamaEmbeddingProvider(EmbeddingProvider):
    """Ollama embedding provider for local models."""

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:11434",
        model: str = "nomic-embed-text",
        timeout: float = 60.0,
    ):
        """
        Initialize Ollama embedding provider.

        Args:
            base_url: Ollama server URL
            model: Model name
            timeout: Per-request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._dimension: int | None = None

    async def _embed(self, session: aiohttp.ClientSession, text: str) -> list[float]:
        async with session.post(
            f"{self.base_url}/api/embeddings",
            json={"model": self.model, "prompt": text},
        ) as response:
            response.raise_for_status()
            data = await response.json()

        embedding = data.get("embedding") if isinstance(data, dict) else None
        if not embedding:
            raise EmbeddingError(f"Ollama returned no embedding for model {self.model!r}")

        if self._dimension is None:
            self._dimension = len(embedding)
        return [float(value) for value in embedding]

    async def embed_text(self, text: str) -> list[float]:
        """Generate embedding for single text."""
        embeddings = await self.embed_batch([text])
        return embeddings[0]

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings for batch of texts."""
        if not texts:
            return []

        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                # Sequential: a local server handles one request at a time anyway
                embeddings = []
                for text in texts:
                    embeddings.append(await self._embed(session, text))
                return embeddings
        except (aiohttp.ClientError, asyncio.TimeoutError, TypeError, ValueError) as e:
            logger.error(
                "Failed to generate Ollama embedding",
                error=str(e) or type(e).__name__,
                model=self.model,
                base_url=self.base_url,
            )
            raise EmbeddingError(f"Ollama embedding request failed: {e or type(e).__name__}") from e

    def get_dimension(self) -> int:
        """Get embedding dimension."""
        if self._dimension is None:
            # nomic-embed-text is 768 dimensions by default
            return 768
        return self._dimension
