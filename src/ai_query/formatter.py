"""
Response Formatter
==================

Renders a QueryResult as structured JSON or annotated SQL text.
"""

from typing import Optional

from pydantic import BaseModel

from ai_query.config import Configuration
from ai_query.models import ExplainResult, QueryResult

ROW_LIMIT_NOTE = "-- Note: Row limit was automatically applied to this query for safety"


class FormattedQueryResponse(BaseModel):
    """Structured output document. Optional fields are omitted, never null."""

    query: str
    success: bool
    explanation: Optional[str] = None
    warnings: Optional[list[str]] = None
    suggested_visualization: Optional[str] = None
    row_limit_applied: Optional[bool] = None


def format_warnings(warnings: list[str] | tuple[str, ...]) -> str:
    if len(warnings) == 1:
        return f"-- Warning: {warnings[0]}"
    lines = ["-- Warnings:"]
    lines.extend(f"--   {i}. {warning}" for i, warning in enumerate(warnings, start=1))
    return "\n".join(lines)


def format_visualization(visualization: str) -> str:
    return f"-- Suggested Visualization:\n-- {visualization}"


class ResponseFormatter:
    """Formats query results according to the ``[response]`` settings."""

    @staticmethod
    def format_response(result: QueryResult, config: Configuration) -> str:
        """
        Format a result for the caller.

        Args:
            result: Pipeline result
            config: Configuration holding the show-flags

        Returns:
            JSON document if ``use_formatted_response`` is set, else SQL text
        """
        if config.use_formatted_response:
            return ResponseFormatter.create_json_response(result, config)
        return ResponseFormatter.create_plain_text_response(result, config)

    @staticmethod
    def build_document(result: QueryResult, config: Configuration) -> FormattedQueryResponse:
        document = FormattedQueryResponse(query=result.generated_query, success=result.success)

        if config.show_explanation and result.explanation:
            document.explanation = result.explanation
        if config.show_warnings and result.warnings:
            document.warnings = list(result.warnings)
        if config.show_suggested_visualization and result.suggested_visualization:
            document.suggested_visualization = result.suggested_visualization
        if result.row_limit_applied:
            document.row_limit_applied = True

        return document

    @staticmethod
    def create_json_response(result: QueryResult, config: Configuration) -> str:
        document = ResponseFormatter.build_document(result, config)
        return document.model_dump_json(exclude_none=True, indent=2)

    @staticmethod
    def create_plain_text_response(result: QueryResult, config: Configuration) -> str:
        sections = [result.generated_query] if result.generated_query else []
        show_explanation = config.show_explanation and bool(result.explanation)

        # A shown explanation already carries a model-reported error
        if not result.success and result.error_message:
            if not (show_explanation and result.explanation == result.error_message):
                sections.append(f"-- Error: {result.error_message}")
        if show_explanation:
            sections.append(f"-- Explanation:\n-- {result.explanation}")
        if config.show_warnings and result.warnings:
            sections.append(format_warnings(result.warnings))
        if config.show_suggested_visualization and result.suggested_visualization:
            sections.append(format_visualization(result.suggested_visualization))
        if result.row_limit_applied:
            sections.append(ROW_LIMIT_NOTE)

        return "\n\n".join(sections)

    @staticmethod
    def format_explain_result(result: ExplainResult) -> str:
        if not result.success:
            return f"Error: {result.error_message}"
        return result.ai_explanation
