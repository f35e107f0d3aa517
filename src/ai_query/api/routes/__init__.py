"""API Routes."""

from ai_query.api.routes.catalog import router as catalog_router
from ai_query.api.routes.health import router as health_router
from ai_query.api.routes.query import router as query_router

__all__ = ["query_router", "catalog_router", "health_router"]
