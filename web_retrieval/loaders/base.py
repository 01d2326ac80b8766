"""Base page loader interface."""

from abc import ABC, abstractmethod

from web_retrieval.retrieval.models import RetrievedDocument


class PageLoader(ABC):
    """Abstract base class for page content loaders."""

    @abstractmethod
    async def load_by_url(self, url: str) -> list[RetrievedDocument]:
        """
        Load and extract the textual content of a page.

        Args:
            url: Absolute page URL

        Returns:
            Zero or more documents for the page

        Raises:
            PageLoadError: If the page cannot be fetched or parsed
        """
        pass
