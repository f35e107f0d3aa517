"""
Query Routes
============

Endpoints for SQL generation and execution plan explanation.
"""

import time
import uuid

from fastapi import APIRouter, Depends, Request

from ai_query.api.schemas import (
    ErrorResponse,
    ExplainRequestBody,
    ExplainResponse,
    QueryRequestBody,
    QueryResponse,
)
from ai_query.formatter import ResponseFormatter
from ai_query.generator import QueryGenerator
from ai_query.models import ExplainRequest, QueryRequest

router = APIRouter(prefix="/api/v1", tags=["Query"])


def get_generator(request: Request) -> QueryGenerator:
    """Dependency to get the configured generator from app state."""
    return request.app.state.generator


def get_request_id(request: Request) -> str:
    """Request ID set by the telemetry middleware, or a fresh one."""
    return getattr(request.state, "request_id", None) or str(uuid.uuid4())


@router.post(
    "/query",
    response_model=QueryResponse,
    responses={500: {"model": ErrorResponse, "description": "Internal server error"}},
    summary="Convert natural language to validated SQL",
)
def generate_query(
    body: QueryRequestBody,
    generator: QueryGenerator = Depends(get_generator),
    request_id: str = Depends(get_request_id),
) -> QueryResponse:
    """
    Generate SQL for a natural language request.

    Failures (no API key, provider errors, unsafe output) are reported in the
    body with ``success`` false rather than as HTTP errors.
    """
    start_time = time.perf_counter()

    result = generator.generate_query(
        QueryRequest(
            natural_language=body.query,
            api_key=body.api_key or "",
            provider=body.provider,
        )
    )
    config = generator.config_manager.get()

    return QueryResponse(
        success=result.success,
        query=result.generated_query,
        explanation=result.explanation,
        warnings=list(result.warnings),
        row_limit_applied=result.row_limit_applied,
        suggested_visualization=result.suggested_visualization,
        error_message=result.error_message,
        formatted=ResponseFormatter.format_response(result, config),
        request_id=request_id,
        processing_time_ms=(time.perf_counter() - start_time) * 1000,
    )


@router.post(
    "/explain",
    response_model=ExplainResponse,
    responses={500: {"model": ErrorResponse, "description": "Internal server error"}},
    summary="Explain a query's execution plan",
)
def explain_query(
    body: ExplainRequestBody,
    generator: QueryGenerator = Depends(get_generator),
    request_id: str = Depends(get_request_id),
) -> ExplainResponse:
    """Run EXPLAIN on a query and return the AI's reading of the plan."""
    start_time = time.perf_counter()

    result = generator.explain_query(
        ExplainRequest(
            query_text=body.query,
            api_key=body.api_key or "",
            provider=body.provider,
        )
    )

    return ExplainResponse(
        success=result.success,
        query=result.query,
        explain_output=result.explain_output,
        ai_explanation=result.ai_explanation,
        error_message=result.error_message,
        request_id=request_id,
        processing_time_ms=(time.perf_counter() - start_time) * 1000,
    )
