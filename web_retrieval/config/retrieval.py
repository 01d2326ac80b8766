"""Per-query retrieval configuration.

Built once by the pipeline from the settings store and handed to every
component, so components never read settings themselves.
"""

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from web_retrieval.config.settings import Settings
from web_retrieval.errors import ConfigurationError


class RetrievalConfig(BaseModel):
    """Immutable snapshot of the settings one retrieval run depends on."""

    model_config = ConfigDict(frozen=True)

    max_results: int = Field(..., ge=0, description="Search results kept after limiting")
    simple_mode: bool = Field(..., description="Return snippets without loading pages")
    search_timeout: float = Field(..., gt=0, description="Search request timeout in seconds")
    embedding_model: str = Field(..., description="Embedding model name")
    embedding_base_url: str = Field(..., description="Embedding service base URL")
    chunk_size: int = Field(..., gt=0, description="Maximum chunk length in characters")
    chunk_overlap: int = Field(..., ge=0, description="Characters shared by consecutive chunks")
    top_k: int = Field(default=3, gt=0, description="Ranked chunks returned in full mode")

    @model_validator(mode="after")
    def _check_overlap(self) -> "RetrievalConfig":
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError(
                f"chunk_overlap ({self.chunk_overlap}) must be smaller than "
                f"chunk_size ({self.chunk_size})"
            )
        return self

    @classmethod
    def from_settings(cls, settings: Settings) -> "RetrievalConfig":
        """
        Build a validated config from settings.

        Raises:
            ConfigurationError: If any value is out of range
        """
        try:
            return cls(
                max_results=settings.total_search_results,
                simple_mode=settings.simple_internet_search,
                search_timeout=settings.search_timeout,
                embedding_model=settings.embedding_model,
                embedding_base_url=settings.ollama_base_url.rstrip("/"),
                chunk_size=settings.chunk_size,
                chunk_overlap=settings.chunk_overlap,
                top_k=settings.retrieval_top_k,
            )
        except ValidationError as e:
            messages = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'config'}: {err['msg']}"
                for err in e.errors()
            )
            raise ConfigurationError(f"Invalid retrieval configuration: {messages}") from e
