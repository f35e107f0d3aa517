"""
Providers Module
================

Pluggable AI text-generation providers.
"""

from ai_query.providers.base import GenerateOptions, LLMInterface
from ai_query.providers.factory import ClientCreationResult, ClientFactory, create_client
from ai_query.providers.http import AnthropicClient, GeminiClient, OpenAIClient
from ai_query.providers.mock import MockLLM

__all__ = [
    "GenerateOptions",
    "LLMInterface",
    "MockLLM",
    "OpenAIClient",
    "AnthropicClient",
    "GeminiClient",
    "ClientCreationResult",
    "ClientFactory",
    "create_client",
]
