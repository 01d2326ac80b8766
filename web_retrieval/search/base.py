"""Base search provider interface."""

from abc import ABC, abstractmethod

from web_retrieval.search.models import SearchOutcome


class SearchProvider(ABC):
    """Abstract base class for search providers."""

    @abstractmethod
    async def fetch(self, query: str) -> SearchOutcome:
        """
        Search the web for a query.

        Implementations never raise for network failures; they report them
        through ``SearchOutcome.error`` so callers can tell an empty result
        listing from a failed request.

        Args:
            query: Search query string

        Returns:
            SearchOutcome with parsed hits or the failure reason
        """
        pass
