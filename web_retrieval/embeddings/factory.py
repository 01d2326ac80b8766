"""Factory for creating embedding providers."""

import structlog

from web_retrieval.config.retrieval import RetrievalConfig
from web_retrieval.embeddings.base import EmbeddingProvider
from web_retrieval.embeddings.mock_provider import MockEmbeddingProvider
from web_retrieval.embeddings.ollama_provider import OllamaEmbeddingProvider
from web_retrieval.errors import ConfigurationError

logger = structlog.get_logger(__name__)


def create_embedding_provider(
    config: RetrievalConfig, provider: str = "ollama", timeout: float = 60.0
) -> EmbeddingProvider:
    """
    Create embedding provider for one retrieval run.

    Args:
        config: Retrieval config carrying the model name and service URL
        provider: Provider name ("ollama" or "mock")
        timeout: Per-request timeout in seconds

    Returns:
        Embedding provider instance

    Raises:
        ConfigurationError: If provider is not supported or the model is missing
    """
    provider = provider.lower()

    if provider == "ollama":
        if not config.embedding_model:
            raise ConfigurationError("An embedding model name is required for the Ollama provider")

        logger.info(
            "Creating Ollama embedding provider",
            base_url=config.embedding_base_url,
            model=config.embedding_model,
        )
        return OllamaEmbeddingProvider(
            base_url=config.embedding_base_url,
            model=config.embedding_model,
            timeout=timeout,
        )

    if provider == "mock":
        logger.info("Creating mock embedding provider")
        return MockEmbeddingProvider()

    raise ConfigurationError(f"Unsupported embedding provider: {provider}")
