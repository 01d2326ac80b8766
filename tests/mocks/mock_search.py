"""Mock search providers for testing."""

from web_retrieval.search.base import SearchProvider
from web_retrieval.search.models import SearchHit, SearchOutcome


def make_hits(count: int, topic: str = "rust ownership") -> list[SearchHit]:
    return [
        SearchHit(
            title=f"Result {idx + 1}",
            link=f"https://site{idx + 1}.example.org/article",
            content=f"Snippet {idx + 1} about {topic}.",
        )
        for idx in range(count)
    ]


class StaticSearchProvider(SearchProvider):
    """Return a fixed list of hits and count calls."""

    def __init__(self, hits: list[SearchHit]):
        self.hits = hits
        self.fetch_count = 0

    async def fetch(self, query: str) -> SearchOutcome:
        self.fetch_count += 1
        return SearchOutcome(query=query, hits=list(self.hits))


class FailingSearchProvider(SearchProvider):
    """Report every request as failed."""

    def __init__(self, error: str = "timed out after 10.0s"):
        self.error = error
        self.fetch_count = 0

    async def fetch(self, query: str) -> SearchOutcome:
        self.fetch_count += 1
        return SearchOutcome.failed(query, self.error)
