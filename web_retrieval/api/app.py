"""FastAPI application initialization and configuration."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from web_retrieval import __version__
from web_retrieval.api.routes import health_router, search_router
from web_retrieval.config.logging_config import configure_logging
from web_retrieval.config.settings import get_settings
from web_retrieval.retrieval.pipeline import WebSearchPipeline

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI app.

    Handles startup and shutdown events.
    """
    settings = get_settings()
    configure_logging(debug_mode=settings.debug_mode)
    logger.info(
        "Starting up Web Retrieval API...",
        search_provider=settings.search_provider,
        embedding_provider=settings.embedding_provider,
        simple_mode=settings.simple_internet_search,
    )

    if not hasattr(app.state, "pipeline"):
        app.state.pipeline = WebSearchPipeline(settings_provider=get_settings)

    yield

    logger.info("Web Retrieval API shutdown complete")


def create_app(pipeline: WebSearchPipeline | None = None) -> FastAPI:
    """Create and configure FastAPI application."""

    app = FastAPI(
        title="Web Retrieval API",
        description="Web search retrieval for locally hosted language models",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if pipeline is not None:
        app.state.pipeline = pipeline

    app.include_router(health_router)
    app.include_router(search_router)

    logger.info("FastAPI app created")

    return app


app = create_app()
