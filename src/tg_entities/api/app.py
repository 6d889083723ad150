"""
FastAPI application for the entity extraction service.

This is the main application that wires endpoints and middleware.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
import structlog

from ..version import API_VERSION
from ..config import settings
from ..extraction.providers import resolve_model
from ..logging_config import setup_logging
from .routes import analysis, health, version
from .middleware import (
    setup_logging_middleware,
    setup_error_handling_middleware,
)

# Setup logging on module import
setup_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown events.
    """
    resolved = resolve_model(settings)
    logger.info(
        "service_starting",
        version=API_VERSION,
        log_level=settings.log_level,
        llm_provider=resolved.provider.value,
        llm_model=resolved.model_id,
    )
    yield
    logger.info("service_stopping")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI app instance
    """
    app = FastAPI(
        title="Telegram Post Entity Extraction",
        description="Named entity extraction (LLM structured output with regex fallback)",
        version=API_VERSION,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # Last added is outermost: request logging wraps error handling
    setup_error_handling_middleware(app)
    setup_logging_middleware(app)

    app.include_router(health.router, tags=["Health"])
    app.include_router(version.router, prefix="/api/v1", tags=["Version"])
    app.include_router(analysis.router, prefix="/api/v1", tags=["Analysis"])

    return app


# Create app instance
app = create_app()


def main() -> None:
    """
    Entry point for running the API server directly.

    For development use. In production, use uvicorn directly.
    """
    import uvicorn

    uvicorn.run(
        "tg_entities.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
