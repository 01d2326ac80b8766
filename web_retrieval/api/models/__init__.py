"""API request and response models."""

from web_retrieval.api.models.health import HealthResponse
from web_retrieval.api.models.search import SearchRequest, SearchResponse

__all__ = [
    "HealthResponse",
    "SearchRequest",
    "SearchResponse",
]
