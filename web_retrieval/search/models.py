"""Search result models."""

from pydantic import BaseModel, Field


class SearchHit(BaseModel):
    """Single parsed search result."""

    title: str = Field(..., description="Result title")
    link: str = Field(..., description="Decoded absolute target URL")
    content: str = Field(default="", description="Result snippet text")


class SearchOutcome(BaseModel):
    """Result of one search request: either hits or the reason it failed."""

    query: str = Field(..., description="Original search query")
    hits: list[SearchHit] = Field(default_factory=list, description="Parsed results, in listing order")
    error: str | None = Field(default=None, description="Failure reason when the request failed")

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failed(cls, query: str, error: str) -> "SearchOutcome":
        return cls(query=query, hits=[], error=error)
