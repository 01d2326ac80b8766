"""Application settings with environment variable support."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API Settings
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")
    reload: bool = Field(default=False, description="Reload the API server on code changes")
    log_level: str = Field(default="INFO", description="Log level")

    # Search Settings
    search_provider: Literal["duckduckgo", "mock"] = Field(
        default="duckduckgo", description="Search provider"
    )
    search_base_url: str = Field(
        default="https://html.duckduckgo.com", description="Search engine base URL"
    )
    search_timeout: float = Field(default=10.0, description="Search request timeout in seconds")
    total_search_results: int = Field(default=2, description="Max search results to keep")
    simple_internet_search: bool = Field(
        default=True, description="Return raw snippets instead of fetching and ranking pages"
    )

    # Embedding Settings
    embedding_provider: Literal["ollama", "mock"] = Field(
        default="ollama", description="Embedding provider"
    )
    ollama_base_url: str = Field(default="http://127.0.0.1:11434", description="Ollama base URL")
    embedding_model: str = Field(default="nomic-embed-text", description="Embedding model name")
    embedding_timeout: float = Field(default=60.0, description="Embedding request timeout in seconds")

    # Chunking / Retrieval Settings
    chunk_size: int = Field(default=1000, description="Chunk size for text splitting")
    chunk_overlap: int = Field(default=200, description="Chunk overlap")
    retrieval_top_k: int = Field(default=3, description="Chunks returned in full mode")

    # Page Loader Settings
    loader_timeout: float = Field(default=30.0, description="Page load timeout in seconds")
    loader_user_agent: str = Field(default=DEFAULT_USER_AGENT, description="User agent for HTTP requests")
    loader_extract_markdown: bool = Field(
        default=False, description="Convert page content to markdown instead of plain text"
    )

    debug_mode: bool = Field(default=False, description="Enable debug logging")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
