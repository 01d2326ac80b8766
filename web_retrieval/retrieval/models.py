"""Document, chunk and result models for the retrieval pipeline."""

from typing import Any
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator, model_validator


def _require_absolute_url(value: str) -> str:
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"expected an absolute http(s) URL, got {value!r}")
    return value


class RetrievedDocument(BaseModel):
    """Textual content of one loaded page (or one section of it)."""

    url: str = Field(..., description="Source page URL")
    page_content: str = Field(default="", description="Extracted text content")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Loader metadata, always holds 'url'")

    @field_validator("url")
    @classmethod
    def _validate_url(cls, value: str) -> str:
        return _require_absolute_url(value)

    @model_validator(mode="after")
    def _sync_metadata_url(self) -> "RetrievedDocument":
        existing = self.metadata.get("url")
        if existing is None:
            self.metadata["url"] = self.url
        elif existing != self.url:
            raise ValueError(f"metadata url {existing!r} does not match document url {self.url!r}")
        return self


class TextChunk(BaseModel):
    """Contiguous slice of a document's content."""

    text: str
    source_url: str
    index: int = Field(default=0, description="Position of the chunk within its document")


class EmbeddedChunk(BaseModel):
    """Chunk paired with its embedding vector."""

    chunk: TextChunk
    vector: list[float]


class RankedResult(BaseModel):
    """Final output unit, identical in simple and full mode."""

    url: str = Field(..., description="Source URL")
    content: str = Field(..., description="Snippet or matched chunk text")
