"""
Prompt Builder
==============

Grounds a natural language request in live schema metadata.
"""

import structlog

from ai_query.catalog.base import CatalogService
from ai_query.config import ConfigManager
from ai_query.models import DatabaseSchema, QueryRequest, TableDetails

logger = structlog.get_logger(__name__)

# Tables mentioned in the request that get full column/index detail
MAX_DETAILED_TABLES = 3

SYSTEM_PROMPT = """You are an expert SQL query generator. Convert natural language
requests into a single SQL query for the database described in the prompt.

Rules:
- Only use tables and columns listed in the schema information
- Never query information_schema or pg_catalog
- Generate read-only SELECT queries unless explicitly asked otherwise
- If the request cannot be answered with the available tables, leave "sql"
  empty and explain why, naming the tables that do exist

Respond with a single JSON object and nothing else:
{
  "sql": "the SQL query",
  "explanation": "what the query does",
  "warnings": ["anything the user should double-check"],
  "row_limit_applied": false,
  "suggested_visualization": "table | bar | line | pie | scatter"
}"""

EXPLAIN_SYSTEM_PROMPT = """You are a database performance expert. Given a SQL query and its
execution plan, explain in plain language:
- How the database executes the query
- Which steps are likely to be expensive and why
- Concrete optimizations (indexes, rewrites) that would help

Be concise and specific to the plan provided."""


def format_schema(schema: DatabaseSchema) -> str:
    """Render the table listing as the schema block of a prompt."""
    lines = [
        "=== DATABASE SCHEMA ===",
        "IMPORTANT: These are the ONLY tables available in this database:",
        "",
    ]
    for table in schema.tables:
        lines.append(
            f"- {table.schema_name}.{table.table_name} "
            f"({table.table_type}, ~{table.estimated_rows} rows)"
        )
    if not schema.tables:
        lines.append("- No user tables found in database")

    lines.append("")
    lines.append(
        "CRITICAL: If user asks for tables not listed above, return an error "
        "with available table names."
    )
    lines.append("Do NOT query information_schema or pg_catalog tables.")
    return "\n".join(lines) + "\n"


def format_table_details(details: TableDetails) -> str:
    """Render columns and indexes of one table for a prompt."""
    lines = [f"=== TABLE: {details.schema_name}.{details.table_name} ===", "", "COLUMNS:"]

    for col in details.columns:
        line = f"- {col.column_name} ({col.data_type})"
        if col.is_primary_key:
            line += " [PRIMARY KEY]"
        if col.is_foreign_key:
            line += f" [FK -> {col.foreign_table}.{col.foreign_column}]"
        if not col.is_nullable:
            line += " [NOT NULL]"
        if col.column_default:
            line += f" [DEFAULT: {col.column_default}]"
        lines.append(line)

    if details.indexes:
        lines.append("")
        lines.append("INDEXES:")
        lines.extend(f"- {index}" for index in details.indexes)

    return "\n".join(lines) + "\n"


def build_explain_prompt(query_text: str, explain_output: str) -> str:
    return (
        "Please analyze this EXPLAIN output:\n\n"
        f"Query:\n{query_text}\n\n"
        f"EXPLAIN Output:\n{explain_output}"
    )


class PromptBuilder:
    """Builds schema-grounded generation prompts."""

    def __init__(self, config_manager: ConfigManager, catalog: CatalogService) -> None:
        self.config_manager = config_manager
        self.catalog = catalog

    def build_prompt(self, request: QueryRequest) -> str:
        """
        Build the user prompt for a generation request.

        Schema gathering is best effort: if the catalog fails the prompt is
        still returned, with whatever context was collected.

        Args:
            request: The natural language request

        Returns:
            Prompt text
        """
        config = self.config_manager.get()
        parts = [
            "Generate a SQL query for this request:\n\n",
            f"Request: {request.natural_language}\n",
        ]

        schema_context = self._schema_context(request.natural_language)
        if schema_context:
            parts.append(f"Schema info:\n{schema_context}\n")

        if config.enforce_limit:
            parts.append(
                f"\nRow limit policy: add LIMIT {config.default_limit} to SELECT queries "
                "that do not already limit their results, and set "
                '"row_limit_applied" to true when you do.\n'
            )

        return "".join(parts)

    def _schema_context(self, natural_language: str) -> str:
        try:
            schema = self.catalog.get_database_tables()
        except Exception as e:
            logger.warning("Schema listing unavailable, building prompt without it", error=str(e))
            return ""

        context = format_schema(schema)

        mentioned = [t for t in schema.tables if t.table_name in natural_language]
        for table in mentioned[:MAX_DETAILED_TABLES]:
            try:
                details = self.catalog.get_table_details(table.table_name, table.schema_name)
            except Exception as e:
                logger.debug("Skipping table details", table=table.table_name, error=str(e))
                continue
            context += "\n" + format_table_details(details)

        return context
