"""
Catalog Routes
==============

Read-only views of the database schema used for prompt grounding.
"""

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, Request

from ai_query.api.schemas import ErrorResponse, TableDetailsResponse, TablesResponse
from ai_query.catalog.base import CatalogError, CatalogService

router = APIRouter(prefix="/api/v1", tags=["Catalog"])


def get_catalog(request: Request) -> CatalogService:
    """Dependency to get the catalog service from app state."""
    return request.app.state.catalog


@router.get(
    "/tables",
    response_model=TablesResponse,
    responses={500: {"model": ErrorResponse}},
    summary="List user tables",
)
def list_tables(catalog: CatalogService = Depends(get_catalog)) -> TablesResponse:
    try:
        schema = catalog.get_database_tables()
    except CatalogError as e:
        raise HTTPException(
            status_code=500,
            detail={"error": "CatalogError", "message": str(e)},
        )
    return TablesResponse(tables=[asdict(table) for table in schema.tables])


@router.get(
    "/tables/{table_name}",
    response_model=TableDetailsResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Describe a table",
)
def get_table_details(
    table_name: str,
    schema_name: str | None = None,
    catalog: CatalogService = Depends(get_catalog),
) -> TableDetailsResponse:
    try:
        details = catalog.get_table_details(table_name, schema_name)
    except CatalogError as e:
        raise HTTPException(
            status_code=404,
            detail={"error": "CatalogError", "message": str(e)},
        )
    return TableDetailsResponse(**asdict(details))
