"""Result limiting and retrieval mode selection."""

from web_retrieval.config.retrieval import RetrievalConfig
from web_retrieval.retrieval.models import RankedResult
from web_retrieval.search.models import SearchHit


def limit_results(hits: list[SearchHit], max_count: int) -> list[SearchHit]:
    """Keep the first ``max_count`` hits, preserving order."""
    if max_count < 0:
        raise ValueError(f"max_count must be non-negative, got {max_count}")
    return list(hits[:max_count])


def is_simple_mode(config: RetrievalConfig) -> bool:
    """Whether snippets are returned directly instead of loading and ranking pages."""
    return config.simple_mode


def hits_to_results(hits: list[SearchHit]) -> list[RankedResult]:
    """Map hits to results using their snippet verbatim as content."""
    return [RankedResult(url=hit.link, content=hit.content) for hit in hits]
