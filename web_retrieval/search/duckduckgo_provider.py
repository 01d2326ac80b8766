"""DuckDuckGo HTML search provider implementation."""

import asyncio
from urllib.parse import parse_qs, urlparse

import aiohttp
import structlog
from bs4 import BeautifulSoup, Tag

from web_retrieval.search.base import SearchProvider
from web_retrieval.search.models import SearchHit, SearchOutcome

logger = structlog.get_logger(__name__)

REDIRECT_PARAM = "uddg"


def unwrap_link(href: str | None) -> str | None:
    """
    Resolve a result link to its decoded absolute target URL.

    Result links are wrapped in a redirect such as
    ``//duckduckgo.com/l/?uddg=https%3A%2F%2Fexample.com%2F&rut=...``.

    Args:
        href: Raw ``href`` attribute from the listing

    Returns:
        Absolute http(s) URL, or None when the link cannot be resolved
    """
    if not href or not href.strip():
        return None

    href = href.strip()
    if href.startswith("//"):
        href = "https:" + href

    parsed = urlparse(href)
    params = parse_qs(parsed.query)

    if REDIRECT_PARAM in params:
        target = params[REDIRECT_PARAM][0]
    elif not parsed.netloc or parsed.netloc.endswith("duckduckgo.com"):
        # Ads and internal navigation carry no external target
        return None
    else:
        target = href

    target_parsed = urlparse(target)
    if target_parsed.scheme not in ("http", "https") or not target_parsed.netloc:
        return None
    return target


def _text(anchor: Tag | None) -> str:
    if anchor is None:
        return ""
    return " ".join(anchor.get_text().split())


def _parse_block(block: Tag) -> SearchHit | None:
    title_anchor = block.select_one("a.result__a")
    snippet_anchor = block.select_one("a.result__snippet")

    href = None
    if snippet_anchor is not None:
        href = snippet_anchor.get("href")
    if not href and title_anchor is not None:
        href = title_anchor.get("href")

    link = unwrap_link(href)
    if link is None:
        return None

    title = _text(title_anchor)
    content = _text(snippet_anchor)
    return SearchHit(title=title, link=link, content=content)


def parse_results(html: str) -> list[SearchHit]:
    """
    Parse a DuckDuckGo HTML result listing.

    Blocks that cannot be parsed are skipped; the rest are returned in
    listing order.

    Args:
        html: Raw listing markup

    Returns:
        Parsed search hits
    """
    soup = BeautifulSoup(html or "", "html.parser")
    hits = []

    for idx, block in enumerate(soup.select("div.results_links_deep")):
        hit = _parse_block(block)
        if hit is None:
            logger.debug("Skipping result without usable link", index=idx)
            continue
        hits.append(hit)

    return hits


class DuckDuckGoSearchProvider(SearchProvider):
    """Search provider scraping the DuckDuckGo HTML endpoint."""

    def __init__(
        self,
        base_url: str = "https://html.duckduckgo.com",
        timeout: float = 10.0,
        user_agent: str | None = None,
    ):
        """
        Initialize DuckDuckGo provider.

        Args:
            base_url: Search host (e.g., https://html.duckduckgo.com)
            timeout: Hard request timeout in seconds
            user_agent: User agent header sent with the request
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.headers = {"User-Agent": user_agent} if user_agent else {}

    async def fetch(self, query: str) -> SearchOutcome:
        """
        Fetch and parse search results for a query.

        Args:
            query: Search query

        Returns:
            SearchOutcome with hits, or with ``error`` set on failure
        """
        url = f"{self.base_url}/html/"
        logger.info("DuckDuckGo search request", url=url, query=query)

        try:
            async with aiohttp.ClientSession(timeout=self.timeout, headers=self.headers) as session:
                async with session.get(url, params={"q": query}) as response:
                    html = await response.text(errors="replace")

                    if response.status < 200 or response.status >= 300:
                        logger.warning(
                            "DuckDuckGo returned non-2xx status",
                            status=response.status,
                            query=query,
                            body_preview=html[:200],
                        )
                        return SearchOutcome.failed(query, f"HTTP {response.status}")
        except asyncio.TimeoutError:
            logger.error("DuckDuckGo search timed out", query=query, timeout=self.timeout.total)
            return SearchOutcome.failed(query, f"timed out after {self.timeout.total}s")
        except aiohttp.ClientError as e:
            logger.error("DuckDuckGo search failed - connection error", error=str(e), query=query)
            return SearchOutcome.failed(query, f"connection error: {e}")

        hits = parse_results(html)
        logger.info("DuckDuckGo search completed", query=query, results_count=len(hits))
        return SearchOutcome(query=query, hits=hits)
