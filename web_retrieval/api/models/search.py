"""Web search request and response models."""

from pydantic import BaseModel, Field

from web_retrieval.retrieval.models import RankedResult


class SearchRequest(BaseModel):
    """Web search request."""

    query: str = Field(..., min_length=1, description="User query")


class SearchResponse(BaseModel):
    """Web search response."""

    query: str = Field(..., description="Original query")
    results: list[RankedResult] = Field(default_factory=list, description="Retrieved {url, content} entries")
    total: int = Field(default=0, description="Number of results")
