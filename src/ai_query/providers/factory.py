"""
Client Factory
==============

Builds the provider client for a resolved provider selection.
"""

from dataclasses import dataclass
from typing import Callable, Optional

import httpx

from ai_query.config import PROVIDER_DEFAULTS, Configuration, Provider, provider_to_string
from ai_query.models import ProviderSelectionResult
from ai_query.providers.base import LLMInterface
from ai_query.providers.http import AnthropicClient, GeminiClient, HTTPProviderClient, OpenAIClient

CLIENT_CLASSES: dict[Provider, type[HTTPProviderClient]] = {
    Provider.OPENAI: OpenAIClient,
    Provider.ANTHROPIC: AnthropicClient,
    Provider.GEMINI: GeminiClient,
}


@dataclass
class ClientCreationResult:
    """A ready client plus the model it should be asked for."""

    client: Optional[LLMInterface] = None
    model_name: str = ""
    success: bool = False
    error_message: str = ""


ClientFactory = Callable[[ProviderSelectionResult, Configuration], ClientCreationResult]


def create_client(
    selection: ProviderSelectionResult,
    config: Configuration,
    http_client: httpx.Client | None = None,
) -> ClientCreationResult:
    """
    Create the client for a successful provider selection.

    Args:
        selection: Resolved provider and API key
        config: Configuration supplying timeout and retry values
        http_client: Optional shared httpx client

    Returns:
        ClientCreationResult, with success False for unsupported providers
    """
    client_class = CLIENT_CLASSES.get(selection.provider)
    if client_class is None:
        return ClientCreationResult(
            error_message=f"Unsupported provider: {provider_to_string(selection.provider)}"
        )

    provider_config = selection.config
    model_name = (
        provider_config.default_model
        if provider_config and provider_config.default_model
        else PROVIDER_DEFAULTS[selection.provider][0]
    )

    client = client_class(
        api_key=selection.api_key,
        endpoint=provider_config.api_endpoint if provider_config else None,
        timeout_ms=config.request_timeout_ms,
        max_retries=config.max_retries,
        http_client=http_client,
    )
    return ClientCreationResult(client=client, model_name=model_name, success=True)
