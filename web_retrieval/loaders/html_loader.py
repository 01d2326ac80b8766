"""HTTP page loader with HTML, PDF and plain text extraction."""

import asyncio
import io
import re

import aiohttp
import structlog
from bs4 import BeautifulSoup
from markdownify import markdownify as md
from pypdf import PdfReader
from pypdf.errors import PyPdfError

from web_retrieval.errors import PageLoadError
from web_retrieval.loaders.base import PageLoader
from web_retrieval.retrieval.models import RetrievedDocument

logger = structlog.get_logger(__name__)

REMOVED_TAGS = ["script", "style", "noscript", "nav", "header", "footer", "aside", "svg", "form"]
BLOCK_TAGS = [
    "p", "div", "section", "article", "main", "li", "ul", "ol", "table", "tr",
    "h1", "h2", "h3", "h4", "h5", "h6", "pre", "blockquote", "dd", "dt", "figcaption",
]

# Private-use markers survive whitespace collapsing and become line breaks afterwards
_BLOCK_MARK = "\ue000"
_BREAK_MARK = "\ue001"


class HtmlPageLoader(PageLoader):
    """Fetch a page over HTTP and extract its readable text."""

    def __init__(
        self,
        timeout: float = 30.0,
        user_agent: str | None = None,
        extract_markdown: bool = False,
    ):
        """
        Initialize page loader.

        Args:
            timeout: Request timeout in seconds
            user_agent: Custom user agent string
            extract_markdown: Return main content as markdown instead of plain text
        """
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.user_agent = user_agent or "Mozilla/5.0 (compatible; WebRetrieval/1.0)"
        self.headers = {"User-Agent": self.user_agent}
        self.extract_markdown = extract_markdown

    async def load_by_url(self, url: str) -> list[RetrievedDocument]:
        """Load a page and return its content as documents."""
        try:
            async with aiohttp.ClientSession(timeout=self.timeout, headers=self.headers) as session:
                async with session.get(url) as response:
                    response.raise_for_status()
                    content_type = response.headers.get("Content-Type", "").lower()

                    if "application/pdf" in content_type or url.lower().endswith(".pdf"):
                        body = await response.read()
                        return self._parse_pdf(body, url)

                    text = await response.text(errors="replace")
        except asyncio.TimeoutError as e:
            logger.warning("Page load timed out", url=url, timeout=self.timeout.total)
            raise PageLoadError(url, f"timed out after {self.timeout.total}s") from e
        except aiohttp.ClientResponseError as e:
            logger.warning("Page load returned error status", url=url, status=e.status)
            raise PageLoadError(url, f"HTTP {e.status}") from e
        except aiohttp.ClientError as e:
            logger.warning("Page load failed - connection error", url=url, error=str(e))
            raise PageLoadError(url, f"connection error: {e}") from e

        if "text/plain" in content_type:
            return self._build_documents(url, text.strip(), title="", content_type="text/plain")

        return self._parse_html(text, url)

    def _parse_html(self, html: str, url: str) -> list[RetrievedDocument]:
        """Parse HTML and extract the main content."""
        soup = BeautifulSoup(html, "html.parser")
        title = self._extract_title(soup)

        for element in soup(REMOVED_TAGS):
            element.decompose()

        main_content = soup.find("article") or soup.find("main") or soup.find("body") or soup

        if self.extract_markdown:
            content = self._html_to_markdown(str(main_content))
        else:
            content = self._extract_text(main_content)

        return self._build_documents(url, content, title=title, content_type="text/html")

    def _parse_pdf(self, data: bytes, url: str) -> list[RetrievedDocument]:
        """Extract text from every page of a PDF."""
        try:
            reader = PdfReader(io.BytesIO(data))
            pages = [(page.extract_text() or "").strip() for page in reader.pages]
            metadata = reader.metadata
            title = metadata.title if metadata and metadata.title else url.rstrip("/").split("/")[-1]
        except PyPdfError as e:
            logger.warning("PDF text extraction failed", url=url, error=str(e))
            raise PageLoadError(url, f"unreadable PDF: {e}") from e

        content = "\n\n".join(page for page in pages if page)
        logger.debug("PDF parsed", url=url, pages=len(pages))
        return self._build_documents(url, content, title=title, content_type="application/pdf")

    def _build_documents(self, url: str, content: str, title: str, content_type: str) -> list[RetrievedDocument]:
        if not content:
            logger.info("Page has no extractable content", url=url)
            return []

        logger.info("Page loaded", url=url, content_length=len(content), content_type=content_type)
        return [
            RetrievedDocument(
                url=url,
                page_content=content,
                metadata={"url": url, "source": url, "title": title, "content_type": content_type},
            )
        ]

    def _extract_title(self, soup: BeautifulSoup) -> str:
        """Extract page title."""
        if soup.title and soup.title.string:
            return soup.title.string.strip()

        og_title = soup.find("meta", property="og:title")
        if og_title and og_title.get("content"):
            return og_title["content"].strip()

        h1 = soup.find("h1")
        if h1:
            return h1.get_text(strip=True)

        return ""

    def _extract_text(self, root) -> str:
        """Extract text keeping paragraph and line structure."""
        for br in root.find_all("br"):
            br.replace_with(_BREAK_MARK)
        for block in root.find_all(BLOCK_TAGS):
            block.insert_before(_BLOCK_MARK)
            block.append(_BLOCK_MARK)

        text = re.sub(r"\s+", " ", root.get_text())
        text = re.sub(rf"\s*{_BREAK_MARK}\s*", "\n", text)
        text = re.sub(rf"\s*(?:{_BLOCK_MARK}\s*)+", "\n\n", text)
        text = re.sub(r"\n{3,}", "\n\n", text)
        return text.strip()

    def _html_to_markdown(self, html: str) -> str:
        """Convert HTML to markdown."""
        markdown = md(html, heading_style="ATX", bullets="-", strip=["img"])
        return re.sub(r"\n{3,}", "\n\n", markdown).strip()
