"""Mock search provider for offline testing."""

from __future__ import annotations

from urllib.parse import quote_plus

from web_retrieval.search.base import SearchProvider
from web_retrieval.search.models import SearchHit, SearchOutcome


class MockSearchProvider(SearchProvider):
    """Return deterministic mock search results."""

    def __init__(self, result_count: int = 5) -> None:
        self.result_count = result_count

    async def fetch(self, query: str) -> SearchOutcome:
        safe_query = quote_plus(query.strip() or "query")
        hits = [
            SearchHit(
                title=f"Mock Result {idx + 1} for {query}",
                link=f"https://example.com/{safe_query}/{idx + 1}",
                content=f"Mock snippet {idx + 1} about {query}.",
            )
            for idx in range(self.result_count)
        ]
        return SearchOutcome(query=query, hits=hits)
