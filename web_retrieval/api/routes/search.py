"""Web search endpoint."""

import structlog
from fastapi import APIRouter, HTTPException, Request

from web_retrieval.api.models.search import SearchRequest, SearchResponse
from web_retrieval.errors import ConfigurationError, EmbeddingError, SearchFetchError

router = APIRouter(prefix="/api", tags=["search"])
logger = structlog.get_logger(__name__)


@router.post("/search", response_model=SearchResponse)
async def web_search(search_request: SearchRequest, app_request: Request) -> SearchResponse:
    """
    Retrieve web content for a query.

    Returns search snippets in simple mode, or the page chunks most relevant
    to the query in full mode; the response shape is the same either way.
    """
    logger.info("Web search request", query=search_request.query[:100])
    pipeline = app_request.app.state.pipeline

    try:
        results = await pipeline.retrieve(search_request.query)
    except ConfigurationError as e:
        logger.error("Web search rejected - configuration error", error=str(e))
        raise HTTPException(status_code=400, detail=str(e))
    except (SearchFetchError, EmbeddingError) as e:
        logger.error("Web search failed - upstream error", error=str(e))
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        logger.error("Web search failed", error=str(e), exc_info=True)
        raise HTTPException(status_code=500, detail=f"Web search failed: {str(e)}")

    logger.info("Web search completed", results_count=len(results))
    return SearchResponse(query=search_request.query, results=results, total=len(results))
