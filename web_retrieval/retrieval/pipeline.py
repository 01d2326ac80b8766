"""Web search retrieval pipeline.

Sequence for one query::

    fetch -> limit -> simple mode: snippets
                   -> full mode:   load pages -> chunk -> embed & rank

The pipeline is the only component that reads settings; everything it calls
receives its configuration as arguments.
"""

import asyncio
from typing import Callable

import structlog

from web_retrieval.chunking.splitter import split_documents
from web_retrieval.config.retrieval import RetrievalConfig
from web_retrieval.config.settings import Settings, get_settings
from web_retrieval.embeddings.base import EmbeddingProvider
from web_retrieval.embeddings.factory import create_embedding_provider
from web_retrieval.errors import SearchFetchError
from web_retrieval.loaders.base import PageLoader
from web_retrieval.loaders.html_loader import HtmlPageLoader
from web_retrieval.retrieval.models import RankedResult, RetrievedDocument
from web_retrieval.retrieval.ranker import ChunkRanker
from web_retrieval.retrieval.selection import hits_to_results, is_simple_mode, limit_results
from web_retrieval.search.base import SearchProvider
from web_retrieval.search.factory import create_search_provider
from web_retrieval.search.models import SearchHit

logger = structlog.get_logger(__name__)


class WebSearchPipeline:
    """Answer a query with web snippets or with the page chunks most relevant to it."""

    def __init__(
        self,
        settings_provider: Callable[[], Settings] = get_settings,
        search_provider: SearchProvider | None = None,
        page_loader: PageLoader | None = None,
        embedding_factory: Callable[[RetrievalConfig], EmbeddingProvider] | None = None,
    ):
        """
        Initialize pipeline.

        Collaborators left as None are built from whatever
        ``settings_provider`` returns on each call. The default provider is
        cached, so environment changes need ``get_settings.cache_clear()``.

        Args:
            settings_provider: Returns the current settings
            search_provider: Search provider override
            page_loader: Page loader override
            embedding_factory: Builds the embedding provider from the retrieval config
        """
        self.settings_provider = settings_provider
        self.search_provider = search_provider
        self.page_loader = page_loader
        self.embedding_factory = embedding_factory

    async def retrieve(self, query: str) -> list[RankedResult]:
        """
        Retrieve web content for a query.

        Args:
            query: User query

        Returns:
            ``{url, content}`` results, same shape in both modes

        Raises:
            ConfigurationError: Invalid settings, raised before any network I/O
            SearchFetchError: The search request failed
            EmbeddingError: The embedding service failed in full mode
        """
        settings = self.settings_provider()
        config = RetrievalConfig.from_settings(settings)
        simple = is_simple_mode(config)

        # Built up front so a bad embedding setup fails before any request is sent
        embedding_provider = None if simple else self._embedding_provider(config, settings)

        log = logger.bind(query=query, simple_mode=simple)

        if not query or not query.strip():
            log.info("Empty query, nothing to retrieve")
            return []

        search_provider = self.search_provider or create_search_provider(settings)
        outcome = await search_provider.fetch(query)
        if not outcome.ok:
            log.error("Search failed", error=outcome.error)
            raise SearchFetchError(query, outcome.error)

        hits = limit_results(outcome.hits, config.max_results)
        log.info("Search results limited", fetched=len(outcome.hits), kept=len(hits))

        if simple:
            return hits_to_results(hits)

        loader = self.page_loader or HtmlPageLoader(
            timeout=settings.loader_timeout,
            user_agent=settings.loader_user_agent,
            extract_markdown=settings.loader_extract_markdown,
        )
        documents = await self._load_pages(hits, loader)
        chunks = split_documents(documents, config.chunk_size, config.chunk_overlap)

        ranker = ChunkRanker(embedding_provider)
        results = await ranker.embed_and_rank(chunks, query, top_k=config.top_k)

        log.info(
            "Retrieval completed",
            pages=len(hits),
            documents=len(documents),
            chunks=len(chunks),
            results=len(results),
        )
        return results

    def _embedding_provider(self, config: RetrievalConfig, settings: Settings) -> EmbeddingProvider:
        if self.embedding_factory is not None:
            return self.embedding_factory(config)
        return create_embedding_provider(
            config,
            provider=settings.embedding_provider,
            timeout=settings.embedding_timeout,
        )

    async def _load_pages(self, hits: list[SearchHit], loader: PageLoader) -> list[RetrievedDocument]:
        """Load every hit concurrently; a failed page contributes no documents."""

        async def load_one(hit: SearchHit) -> list[RetrievedDocument]:
            try:
                return await loader.load_by_url(hit.link)
            except Exception as e:
                logger.warning("Page load failed, skipping", url=hit.link, error=str(e))
                return []

        per_page = await asyncio.gather(*(load_one(hit) for hit in hits))

        # Hit order, not completion order
        documents = [doc for docs in per_page for doc in docs]
        logger.info(
            "Pages loaded",
            requested=len(hits),
            succeeded=sum(1 for docs in per_page if docs),
            documents=len(documents),
        )
        return documents
