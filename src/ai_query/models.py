"""
Data Models
===========

Core data structures for the query generation pipeline.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ai_query.config import Provider, ProviderConfig


class VerificationStatus(Enum):
    """Status of a verification check."""

    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class VerificationResult:
    """Result of a single verification step."""

    verifier_name: str
    status: VerificationStatus
    message: str
    details: dict = field(default_factory=dict)

    @property
    def passed(self) -> bool:
        return self.status != VerificationStatus.FAILED


@dataclass
class QueryRequest:
    """A natural language request for SQL generation."""

    natural_language: str
    api_key: str = ""
    provider: str = ""


@dataclass
class ExplainRequest:
    """A request to explain the execution plan of a query."""

    query_text: str
    api_key: str = ""
    provider: str = ""


@dataclass(frozen=True)
class ProviderSelectionResult:
    """Outcome of resolving which provider and credential to use."""

    provider: Provider = Provider.UNKNOWN
    config: Optional[ProviderConfig] = None
    api_key: str = ""
    api_key_source: str = ""
    success: bool = False
    error_message: str = ""


@dataclass(frozen=True)
class QueryResult:
    """Final, validated result of a generation request."""

    generated_query: str = ""
    explanation: str = ""
    warnings: tuple[str, ...] = ()
    row_limit_applied: bool = False
    suggested_visualization: str = "table"
    success: bool = False
    error_message: str = ""

    @classmethod
    def failure(cls, error_message: str) -> "QueryResult":
        """Build a bare failure result carrying only an error message."""
        return cls(suggested_visualization="", success=False, error_message=error_message)


@dataclass
class ExplainResult:
    """Execution plan plus the AI's reading of it."""

    query: str = ""
    explain_output: str = ""
    ai_explanation: str = ""
    success: bool = False
    error_message: str = ""


@dataclass
class LLMResponse:
    """Response from an LLM call."""

    content: str
    model: str
    tokens_used: int = 0
    error_message: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error_message is None


@dataclass(frozen=True)
class TableInfo:
    """A user table as listed by the catalog service."""

    table_name: str
    schema_name: str
    table_type: str = "BASE TABLE"
    estimated_rows: int = 0


@dataclass(frozen=True)
class DatabaseSchema:
    """Snapshot of the tables available for querying."""

    tables: tuple[TableInfo, ...] = ()


@dataclass(frozen=True)
class ColumnInfo:
    """Column metadata for a single table."""

    column_name: str
    data_type: str
    is_nullable: bool = True
    column_default: str = ""
    is_primary_key: bool = False
    is_foreign_key: bool = False
    foreign_table: str = ""
    foreign_column: str = ""


@dataclass(frozen=True)
class TableDetails:
    """Columns and indexes of a single table."""

    table_name: str
    schema_name: str
    columns: tuple[ColumnInfo, ...] = ()
    indexes: tuple[str, ...] = ()
