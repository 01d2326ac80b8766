"""Mock objects for testing."""

from tests.mocks.mock_embeddings import FailingEmbeddingProvider, ZeroEmbeddingProvider
from tests.mocks.mock_loader import MockPageLoader
from tests.mocks.mock_search import FailingSearchProvider, StaticSearchProvider, make_hits

__all__ = [
    "FailingEmbeddingProvider",
    "ZeroEmbeddingProvider",
    "MockPageLoader",
    "FailingSearchProvider",
    "StaticSearchProvider",
    "make_hits",
]
