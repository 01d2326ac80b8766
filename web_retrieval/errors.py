"""Exceptions raised by the retrieval pipeline."""


class RetrievalError(Exception):
    """Base class for retrieval pipeline failures."""


class ConfigurationError(RetrievalError):
    """Invalid configuration, detected before any network I/O."""


class SearchFetchError(RetrievalError):
    """The search request failed (network error, timeout or non-2xx status)."""

    def __init__(self, query: str, reason: str):
        super().__init__(f"Search request failed for {query!r}: {reason}")
        self.query = query
        self.reason = reason


class PageLoadError(RetrievalError):
    """A single page could not be loaded or parsed."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Failed to load {url}: {reason}")
        self.url = url
        self.reason = reason


class EmbeddingError(RetrievalError):
    """The embedding service failed or returned unusable vectors."""
