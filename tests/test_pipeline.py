"""End-to-end tests for the retrieval pipeline with mocked collaborators."""

import pytest

from web_retrieval.config.settings import Settings
from web_retrieval.embeddings.mock_provider import MockEmbeddingProvider
from web_retrieval.errors import ConfigurationError, EmbeddingError, SearchFetchError
from web_retrieval.retrieval.pipeline import WebSearchPipeline
from tests.mocks import (
    FailingEmbeddingProvider,
    FailingSearchProvider,
    MockPageLoader,
    StaticSearchProvider,
    make_hits,
)

PAGE_TEXT = (
    "Rust ownership rules decide when memory is freed. Every value has exactly one owner.\n\n"
    "Moving a value transfers ownership, and the previous binding can no longer be used. "
    "Borrowing lets code read a value without taking ownership of it.\n\n"
    "Mutable references are exclusive, which rules out data races at compile time. "
    "Lifetimes describe how long references stay valid.\n\n"
    "The borrow checker enforces these rules before the program ever runs, "
    "so ownership errors never reach production builds."
)


def _settings(**overrides) -> Settings:
    values = dict(
        total_search_results=3,
        simple_internet_search=True,
        chunk_size=500,
        chunk_overlap=50,
        embedding_provider="mock",
        retrieval_top_k=3,
    )
    values.update(overrides)
    return Settings(**values)


def _pipeline(settings: Settings, search=None, loader=None, embeddings=None) -> WebSearchPipeline:
    embedding_provider = embeddings or MockEmbeddingProvider()
    return WebSearchPipeline(
        settings_provider=lambda: settings,
        search_provider=search or StaticSearchProvider(make_hits(5)),
        page_loader=loader or MockPageLoader(),
        embedding_factory=lambda config: embedding_provider,
    )


@pytest.mark.asyncio
async def test_simple_mode_returns_limited_snippets_in_order():
    hits = make_hits(5)
    loader = MockPageLoader()
    pipeline = _pipeline(_settings(), search=StaticSearchProvider(hits), loader=loader)

    results = await pipeline.retrieve("rust ownership")

    assert [(r.url, r.content) for r in results] == [(h.link, h.content) for h in hits[:3]]
    assert loader.requested == []


@pytest.mark.asyncio
async def test_simple_mode_never_builds_embedding_provider():
    def fail_factory(config):
        raise AssertionError("embedding provider built in simple mode")

    pipeline = WebSearchPipeline(
        settings_provider=lambda: _settings(),
        search_provider=StaticSearchProvider(make_hits(2)),
        page_loader=MockPageLoader(),
        embedding_factory=fail_factory,
    )

    results = await pipeline.retrieve("rust ownership")

    assert len(results) == 2


@pytest.mark.asyncio
async def test_full_mode_ranks_chunks_from_loaded_pages():
    hits = make_hits(5)
    pages = {hit.link: f"{hit.title}. {PAGE_TEXT}" for hit in hits}
    loader = MockPageLoader(pages=pages)
    pipeline = _pipeline(_settings(simple_internet_search=False), search=StaticSearchProvider(hits), loader=loader)

    results = await pipeline.retrieve("rust ownership")

    fetched = {hit.link for hit in hits[:3]}
    assert len(results) == 3
    assert all(len(r.content) <= 500 for r in results)
    assert all(r.url in fetched for r in results)
    assert sorted(loader.requested) == sorted(fetched)


@pytest.mark.asyncio
async def test_full_mode_skips_failed_pages():
    hits = make_hits(3)
    loader = MockPageLoader(pages={hits[1].link: PAGE_TEXT}, failing={hits[0].link, hits[2].link})
    pipeline = _pipeline(_settings(simple_internet_search=False), search=StaticSearchProvider(hits), loader=loader)

    results = await pipeline.retrieve("rust ownership")

    assert results
    assert {r.url for r in results} == {hits[1].link}


@pytest.mark.asyncio
async def test_full_mode_with_no_loadable_pages_returns_empty_list():
    hits = make_hits(3)
    loader = MockPageLoader(failing={hit.link for hit in hits})
    pipeline = _pipeline(_settings(simple_internet_search=False), search=StaticSearchProvider(hits), loader=loader)

    assert await pipeline.retrieve("rust ownership") == []


@pytest.mark.asyncio
async def test_page_loads_keep_hit_order_regardless_of_completion():
    hits = make_hits(3)
    pages = {hit.link: f"page {idx}" for idx, hit in enumerate(hits)}
    loader = MockPageLoader(pages=pages, delays={hits[0].link: 0.05, hits[1].link: 0.02})
    pipeline = _pipeline(_settings(simple_internet_search=False), loader=loader)

    documents = await pipeline._load_pages(hits, loader)

    assert [doc.url for doc in documents] == [hit.link for hit in hits]


@pytest.mark.asyncio
async def test_overlap_not_below_chunk_size_fails_before_fetch():
    search = StaticSearchProvider(make_hits(5))
    pipeline = _pipeline(
        _settings(simple_internet_search=False, chunk_size=500, chunk_overlap=600),
        search=search,
    )

    with pytest.raises(ConfigurationError):
        await pipeline.retrieve("rust ownership")

    assert search.fetch_count == 0


@pytest.mark.asyncio
async def test_search_failure_surfaces_as_pipeline_error():
    search = FailingSearchProvider()
    pipeline = _pipeline(_settings(), search=search)

    with pytest.raises(SearchFetchError) as exc_info:
        await pipeline.retrieve("rust ownership")

    assert "timed out" in exc_info.value.reason
    assert search.fetch_count == 1


@pytest.mark.asyncio
async def test_embedding_failure_is_fatal_in_full_mode():
    hits = make_hits(2)
    loader = MockPageLoader(pages={hit.link: PAGE_TEXT for hit in hits})
    pipeline = _pipeline(
        _settings(simple_internet_search=False),
        search=StaticSearchProvider(hits),
        loader=loader,
        embeddings=FailingEmbeddingProvider(),
    )

    with pytest.raises(EmbeddingError):
        await pipeline.retrieve("rust ownership")


@pytest.mark.asyncio
async def test_blank_query_does_no_io():
    search = StaticSearchProvider(make_hits(5))
    pipeline = _pipeline(_settings(), search=search)

    assert await pipeline.retrieve("   ") == []
    assert search.fetch_count == 0


@pytest.mark.asyncio
async def test_default_collaborators_come_from_settings():
    pipeline = WebSearchPipeline(settings_provider=lambda: _settings(search_provider="mock"))

    results = await pipeline.retrieve("rust ownership")

    assert len(results) == 3
    assert results[0].url.startswith("https://example.com/")


@pytest.mark.asyncio
async def test_settings_provider_is_read_on_every_query():
    current = {"settings": _settings(total_search_results=1)}
    pipeline = WebSearchPipeline(
        settings_provider=lambda: current["settings"],
        search_provider=StaticSearchProvider(make_hits(5)),
        page_loader=MockPageLoader(),
    )

    assert len(await pipeline.retrieve("rust ownership")) == 1

    current["settings"] = _settings(total_search_results=4)
    assert len(await pipeline.retrieve("rust ownership")) == 4
