"""
FastAPI Application
===================

Application factory for the AI query generation service.
"""

import os
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ai_query import __version__
from ai_query.api.middleware import TelemetryMiddleware
from ai_query.api.routes.catalog import router as catalog_router
from ai_query.api.routes.health import router as health_router
from ai_query.api.routes.query import router as query_router
from ai_query.api.schemas import ErrorResponse
from ai_query.catalog import CatalogService, SQLiteCatalog
from ai_query.config import ConfigManager
from ai_query.generator import QueryGenerator
from ai_query.logging_config import configure_logging, get_logger
from ai_query.providers.factory import ClientFactory, create_client

DATABASE_ENV = "AI_QUERY_DATABASE"


def create_app(
    config_manager: ConfigManager | None = None,
    catalog: CatalogService | None = None,
    client_factory: ClientFactory | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config_manager: Configuration (loaded from the default path if omitted)
        catalog: Catalog service (SQLite at $AI_QUERY_DATABASE if omitted)
        client_factory: Provider client factory (HTTP clients if omitted)
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator:
        manager = config_manager or ConfigManager()
        config = manager.get()
        configure_logging(config)
        logger = get_logger(__name__)
        logger.info("Starting AI query API", version=__version__)

        owned_catalog = None
        service = catalog
        if service is None:
            owned_catalog = SQLiteCatalog(os.getenv(DATABASE_ENV, ":memory:"))
            service = owned_catalog

        app.state.catalog = service
        app.state.generator = QueryGenerator(
            manager,
            service,
            client_factory=client_factory or create_client,
        )

        yield

        if owned_catalog is not None:
            owned_catalog.close()
        logger.info("Shutting down AI query API")

    app = FastAPI(
        title="AI Query Generator API",
        description=(
            "Converts natural language into validated SQL using interchangeable "
            "AI providers grounded in live schema metadata."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(TelemetryMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router)
    app.include_router(query_router)
    app.include_router(catalog_router)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle uncaught exceptions."""
        get_logger(__name__).exception("Unhandled error", error=str(exc))
        request_id = getattr(request.state, "request_id", None)
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error="InternalServerError",
                message="An unexpected error occurred",
                request_id=request_id,
            ).model_dump(),
        )

    return app


def run() -> None:
    """Console entry point."""
    import uvicorn

    uvicorn.run(
        "ai_query.api.main:create_app",
        factory=True,
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
    )


if __name__ == "__main__":
    run()
