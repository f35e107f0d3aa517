"""
Query Generator
===============

Orchestrates a natural language request through provider selection,
prompt building, generation and response validation.
"""

import structlog

from ai_query.catalog.base import CatalogError, CatalogService
from ai_query.config import ConfigManager, provider_to_string
from ai_query.models import (
    ExplainRequest,
    ExplainResult,
    ProviderSelectionResult,
    QueryRequest,
    QueryResult,
)
from ai_query.parser import parse_query_response
from ai_query.prompts import (
    EXPLAIN_SYSTEM_PROMPT,
    SYSTEM_PROMPT,
    PromptBuilder,
    build_explain_prompt,
)
from ai_query.providers.base import GenerateOptions
from ai_query.providers.factory import ClientCreationResult, ClientFactory, create_client
from ai_query.selector import ProviderSelector
from ai_query.utils import format_api_error, validate_natural_language_query

logger = structlog.get_logger(__name__)

EMPTY_RESPONSE_MESSAGE = "Empty response from AI service"


class QueryGenerator:
    """
    Main entry point of the generation pipeline.

    Every call returns a result object; errors never escape as exceptions.
    The generator is stateless per request and safe to share.
    """

    def __init__(
        self,
        config_manager: ConfigManager,
        catalog: CatalogService,
        client_factory: ClientFactory = create_client,
        selector: ProviderSelector | None = None,
    ) -> None:
        """
        Initialize the generator.

        Args:
            config_manager: Loaded configuration
            catalog: Catalog service for schema grounding and EXPLAIN
            client_factory: Builds the provider client for a selection
            selector: Provider selector (defaults to one over config_manager)
        """
        self.config_manager = config_manager
        self.catalog = catalog
        self.client_factory = client_factory
        self.selector = selector or ProviderSelector(config_manager)
        self.prompt_builder = PromptBuilder(config_manager, catalog)

    def _options_for(
        self, client_result: ClientCreationResult, selection: ProviderSelectionResult
    ) -> GenerateOptions:
        options = GenerateOptions(model=client_result.model_name)
        if selection.config:
            options.max_tokens = selection.config.default_max_tokens
            options.temperature = selection.config.default_temperature
        logger.info(
            "Using model",
            model=options.model,
            max_tokens=options.max_tokens,
            temperature=options.temperature,
        )
        return options

    def generate_query(self, request: QueryRequest) -> QueryResult:
        """
        Convert a natural language request into a validated SQL query.

        Args:
            request: The user's request with optional key and provider

        Returns:
            QueryResult with the query or a failure message
        """
        try:
            config = self.config_manager.get()

            error = validate_natural_language_query(
                request.natural_language, config.max_query_length
            )
            if error:
                return QueryResult.failure(error)

            selection = self.selector.select_provider(request.api_key, request.provider)
            if not selection.success:
                return QueryResult.failure(selection.error_message)

            client_result = self.client_factory(selection, config)
            if not client_result.success:
                return QueryResult.failure(client_result.error_message)

            prompt = self.prompt_builder.build_prompt(request)
            options = self._options_for(client_result, selection)

            response = client_result.client.generate(prompt, SYSTEM_PROMPT, options)
            if not response.success:
                logger.warning(
                    "Provider returned an error",
                    provider=provider_to_string(selection.provider),
                )
                return QueryResult.failure(f"AI API error: {format_api_error(response.error_message)}")

            if not response.content:
                return QueryResult.failure(EMPTY_RESPONSE_MESSAGE)

            result = parse_query_response(response.content, config.allow_system_tables)
            logger.info(
                "Query generation finished",
                success=result.success,
                provider=provider_to_string(selection.provider),
                tokens_used=response.tokens_used,
            )
            return result

        except Exception as e:
            logger.exception("Unexpected error during query generation")
            return QueryResult.failure(f"Internal error: {e}")

    def explain_query(self, request: ExplainRequest) -> ExplainResult:
        """
        Run EXPLAIN on a query and have the provider interpret the plan.

        Args:
            request: Query text with optional key and provider

        Returns:
            ExplainResult with the raw plan and the AI's explanation
        """
        try:
            if not request.query_text.strip():
                return ExplainResult(error_message="Query text cannot be empty")

            result = ExplainResult(query=request.query_text)

            try:
                result.explain_output = self.catalog.explain(request.query_text)
            except CatalogError as e:
                result.error_message = str(e)
                return result

            selection = self.selector.select_provider(request.api_key, request.provider)
            if not selection.success:
                result.error_message = selection.error_message
                return result

            client_result = self.client_factory(selection, self.config_manager.get())
            if not client_result.success:
                result.error_message = client_result.error_message
                return result

            prompt = build_explain_prompt(request.query_text, result.explain_output)
            options = self._options_for(client_result, selection)

            response = client_result.client.generate(prompt, EXPLAIN_SYSTEM_PROMPT, options)
            if not response.success:
                result.error_message = f"AI API error: {format_api_error(response.error_message)}"
                return result

            if not response.content:
                result.error_message = EMPTY_RESPONSE_MESSAGE
                return result

            result.ai_explanation = response.content
            result.success = True
            return result

        except Exception as e:
            logger.exception("Unexpected error during query explanation")
            return ExplainResult(query=request.query_text, error_message=f"Internal error: {e}")
