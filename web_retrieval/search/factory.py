"""Search provider factory."""

import structlog

from web_retrieval.config.settings import Settings
from web_retrieval.errors import ConfigurationError
from web_retrieval.search.base import SearchProvider
from web_retrieval.search.duckduckgo_provider import DuckDuckGoSearchProvider
from web_retrieval.search.mock_provider import MockSearchProvider

logger = structlog.get_logger(__name__)


def create_search_provider(settings: Settings) -> SearchProvider:
    """
    Create search provider based on configuration.

    Args:
        settings: Application settings

    Returns:
        Configured SearchProvider instance

    Raises:
        ConfigurationError: If search provider configuration is invalid
    """
    if settings.search_provider == "mock":
        logger.info("Creating MockSearchProvider")
        return MockSearchProvider()

    if settings.search_provider == "duckduckgo":
        logger.info("Creating DuckDuckGoSearchProvider", base_url=settings.search_base_url)
        return DuckDuckGoSearchProvider(
            base_url=settings.search_base_url,
            timeout=settings.search_timeout,
            user_agent=settings.loader_user_agent,
        )

    raise ConfigurationError(
        f"Unknown search provider: {settings.search_provider}. "
        f"Supported providers: duckduckgo, mock"
    )
