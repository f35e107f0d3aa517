"""
API Schemas
===========

Pydantic models for API request/response validation.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class QueryRequestBody(BaseModel):
    """Request body for SQL generation."""

    query: str = Field(
        ...,
        description="Natural language request to convert to SQL",
        examples=["Show me all premium customers"],
    )
    api_key: str | None = Field(
        default=None,
        description="API key for the AI provider (configuration is used if omitted)",
    )
    provider: str = Field(
        default="auto",
        description="Provider name: openai, anthropic, gemini or auto",
    )


class QueryResponse(BaseModel):
    """Response body for SQL generation."""

    success: bool = Field(..., description="Whether a trustworthy result was produced")
    query: str = Field("", description="Generated SQL (empty when no query was needed)")
    explanation: str = Field("", description="Model explanation of the query")
    warnings: list[str] = Field(default_factory=list)
    row_limit_applied: bool = Field(False, description="Whether a row limit was injected")
    suggested_visualization: str = Field("", description="Suggested chart type")
    error_message: str = Field("", description="Failure reason")
    formatted: str = Field(..., description="Result rendered per the response settings")
    request_id: str = Field(..., description="Unique request identifier")
    processing_time_ms: float = Field(..., description="Processing time in milliseconds")


class ExplainRequestBody(BaseModel):
    """Request body for plan explanation."""

    query: str = Field(..., description="SQL query to analyze")
    api_key: str | None = Field(default=None)
    provider: str = Field(default="auto")


class ExplainResponse(BaseModel):
    """Response body for plan explanation."""

    success: bool
    query: str = ""
    explain_output: str = ""
    ai_explanation: str = ""
    error_message: str = ""
    request_id: str
    processing_time_ms: float


class TableInfoResponse(BaseModel):
    table_name: str
    schema_name: str
    table_type: str
    estimated_rows: int


class TablesResponse(BaseModel):
    """Listing of user tables."""

    tables: list[TableInfoResponse] = Field(default_factory=list)


class ColumnInfoResponse(BaseModel):
    column_name: str
    data_type: str
    is_nullable: bool
    column_default: str = ""
    is_primary_key: bool = False
    is_foreign_key: bool = False
    foreign_table: str = ""
    foreign_column: str = ""


class TableDetailsResponse(BaseModel):
    """Columns and indexes of one table."""

    table_name: str
    schema_name: str
    columns: list[ColumnInfoResponse] = Field(default_factory=list)
    indexes: list[str] = Field(default_factory=list)


class HealthStatus(str, Enum):
    """Health check status values."""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


class HealthResponse(BaseModel):
    """Health check response."""

    status: HealthStatus = Field(..., description="Overall health status")
    version: str = Field(..., description="API version")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    checks: dict[str, bool] = Field(
        default_factory=dict,
        description="Individual component health checks",
    )


class ReadinessResponse(BaseModel):
    """Readiness check response."""

    ready: bool = Field(..., description="Whether the service is ready to handle requests")
    checks: dict[str, bool] = Field(
        default_factory=dict,
        description="Individual readiness checks",
    )


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    request_id: str | None = Field(None, description="Request ID if available")
    details: dict[str, Any] | None = Field(None, description="Additional error details")
