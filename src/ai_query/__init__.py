"""
AI Query Generator
==================

Natural language to validated SQL, grounded in live schema metadata and
served by interchangeable AI providers.
"""

from ai_query.catalog import CatalogError, CatalogService, SQLiteCatalog
from ai_query.config import (
    ConfigManager,
    Configuration,
    Provider,
    ProviderConfig,
    provider_to_string,
    string_to_provider,
)
from ai_query.formatter import ResponseFormatter
from ai_query.generator import QueryGenerator
from ai_query.models import (
    ExplainRequest,
    ExplainResult,
    ProviderSelectionResult,
    QueryRequest,
    QueryResult,
)
from ai_query.parser import extract_structured_payload, parse_query_response
from ai_query.prompts import PromptBuilder
from ai_query.providers import LLMInterface, MockLLM, create_client
from ai_query.selector import ProviderSelector
from ai_query.verifiers import accesses_restricted_catalogs, has_error_indicators

__version__ = "0.1.0"

__all__ = [
    # Configuration
    "ConfigManager",
    "Configuration",
    "Provider",
    "ProviderConfig",
    "provider_to_string",
    "string_to_provider",
    # Models
    "QueryRequest",
    "QueryResult",
    "ExplainRequest",
    "ExplainResult",
    "ProviderSelectionResult",
    # Pipeline
    "ProviderSelector",
    "PromptBuilder",
    "QueryGenerator",
    "ResponseFormatter",
    "extract_structured_payload",
    "parse_query_response",
    "accesses_restricted_catalogs",
    "has_error_indicators",
    # Collaborators
    "CatalogError",
    "CatalogService",
    "SQLiteCatalog",
    "LLMInterface",
    "MockLLM",
    "create_client",
]
