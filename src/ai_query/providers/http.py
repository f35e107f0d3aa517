"""
HTTP Provider Clients
=====================

httpx-based clients for the OpenAI, Anthropic and Gemini generation APIs.
"""

from abc import abstractmethod
from typing import Any

import httpx
import structlog

from ai_query.config import PROVIDER_DEFAULTS, Provider
from ai_query.models import LLMResponse
from ai_query.providers.base import GenerateOptions, LLMInterface

logger = structlog.get_logger(__name__)


class HTTPProviderClient(LLMInterface):
    """
    Shared plumbing for JSON-over-HTTP providers.

    Non-2xx responses and network errors come back as ``LLMResponse`` with
    ``error_message`` set; they are never raised.
    """

    provider: Provider = Provider.UNKNOWN

    def __init__(
        self,
        api_key: str,
        endpoint: str | None = None,
        timeout_ms: int = 30000,
        max_retries: int = 3,
        http_client: httpx.Client | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            api_key: Provider API key
            endpoint: Base URL override (provider default if empty)
            timeout_ms: Request timeout in milliseconds
            max_retries: Connection retries at the transport level
            http_client: Pre-built client (tests inject a mock transport here)
        """
        self.api_key = api_key
        self.endpoint = (endpoint or PROVIDER_DEFAULTS[self.provider][2]).rstrip("/")
        self.http_client = http_client or httpx.Client(
            timeout=timeout_ms / 1000,
            transport=httpx.HTTPTransport(retries=max_retries),
        )

    def generate(
        self,
        prompt: str,
        system_prompt: str | None = None,
        options: GenerateOptions | None = None,
    ) -> LLMResponse:
        options = options or GenerateOptions(model=PROVIDER_DEFAULTS[self.provider][0])
        url = self.build_url(options)
        body = self.build_request_body(prompt, system_prompt, options)

        logger.debug("Sending generation request", provider=self.provider.value, model=options.model)
        try:
            response = self.http_client.post(url, json=body, headers=self.build_headers())
        except httpx.HTTPError as e:
            logger.warning("Provider request failed", provider=self.provider.value, error=str(e))
            return LLMResponse(content="", model=options.model, error_message=str(e))

        if not response.is_success:
            return LLMResponse(
                content="",
                model=options.model,
                error_message=self.format_error(response),
            )

        try:
            data = response.json()
        except ValueError as e:
            return LLMResponse(
                content="", model=options.model, error_message=f"JSON parse error: {e}"
            )

        return self.parse_response(data, options.model)

    def format_error(self, response: httpx.Response) -> str:
        """Raw error body, left for ``format_api_error`` to interpret."""
        return response.text or f"HTTP {response.status_code}"

    @abstractmethod
    def build_url(self, options: GenerateOptions) -> str:
        pass

    @abstractmethod
    def build_headers(self) -> dict[str, str]:
        pass

    @abstractmethod
    def build_request_body(
        self, prompt: str, system_prompt: str | None, options: GenerateOptions
    ) -> dict[str, Any]:
        pass

    @abstractmethod
    def parse_response(self, data: Any, model: str) -> LLMResponse:
        pass


class OpenAIClient(HTTPProviderClient):
    """Chat Completions API."""

    provider = Provider.OPENAI

    def build_url(self, options: GenerateOptions) -> str:
        return f"{self.endpoint}/chat/completions"

    def build_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}"}

    def build_request_body(
        self, prompt: str, system_prompt: str | None, options: GenerateOptions
    ) -> dict[str, Any]:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        body: dict[str, Any] = {"model": options.model, "messages": messages}
        if options.max_tokens is not None:
            body["max_tokens"] = options.max_tokens
        if options.temperature is not None:
            body["temperature"] = options.temperature
        return body

    def parse_response(self, data: Any, model: str) -> LLMResponse:
        try:
            content = data["choices"][0]["message"]["content"] or ""
        except (KeyError, IndexError, TypeError):
            return LLMResponse(
                content="",
                model=model,
                error_message="Invalid response format: missing message content",
            )
        tokens = (data.get("usage") or {}).get("total_tokens", 0)
        return LLMResponse(content=content, model=data.get("model", model), tokens_used=tokens)


class AnthropicClient(HTTPProviderClient):
    """Messages API."""

    provider = Provider.ANTHROPIC
    API_VERSION = "2023-06-01"

    def build_url(self, options: GenerateOptions) -> str:
        return f"{self.endpoint}/v1/messages"

    def build_headers(self) -> dict[str, str]:
        return {"x-api-key": self.api_key, "anthropic-version": self.API_VERSION}

    def build_request_body(
        self, prompt: str, system_prompt: str | None, options: GenerateOptions
    ) -> dict[str, Any]:
        body: dict[str, Any] = {
            "model": options.model,
            "messages": [{"role": "user", "content": prompt}],
            # max_tokens is mandatory for this API
            "max_tokens": options.max_tokens or PROVIDER_DEFAULTS[self.provider][1],
        }
        if system_prompt:
            body["system"] = system_prompt
        if options.temperature is not None:
            body["temperature"] = options.temperature
        return body

    def parse_response(self, data: Any, model: str) -> LLMResponse:
        try:
            blocks = data["content"]
            content = "".join(b.get("text", "") for b in blocks if b.get("type") == "text")
        except (KeyError, TypeError, AttributeError):
            return LLMResponse(
                content="",
                model=model,
                error_message="Invalid response format: missing text content",
            )
        usage = data.get("usage") or {}
        tokens = usage.get("input_tokens", 0) + usage.get("output_tokens", 0)
        return LLMResponse(content=content, model=data.get("model", model), tokens_used=tokens)


class GeminiClient(HTTPProviderClient):
    """generateContent API."""

    provider = Provider.GEMINI
    API_VERSION = "v1beta"

    def build_url(self, options: GenerateOptions) -> str:
        return f"{self.endpoint}/{self.API_VERSION}/models/{options.model}:generateContent"

    def build_headers(self) -> dict[str, str]:
        return {"x-goog-api-key": self.api_key}

    def build_request_body(
        self, prompt: str, system_prompt: str | None, options: GenerateOptions
    ) -> dict[str, Any]:
        body: dict[str, Any] = {"contents": [{"parts": [{"text": prompt}]}]}
        if system_prompt:
            body["systemInstruction"] = {"parts": [{"text": system_prompt}]}

        generation_config: dict[str, Any] = {}
        if options.temperature is not None:
            generation_config["temperature"] = options.temperature
        if options.max_tokens is not None:
            generation_config["maxOutputTokens"] = options.max_tokens
        if generation_config:
            body["generationConfig"] = generation_config
        return body

    def format_error(self, response: httpx.Response) -> str:
        try:
            data = response.json()
        except ValueError:
            return f"HTTP {response.status_code}: {response.text}"

        error = data.get("error") if isinstance(data, dict) else None
        if not isinstance(error, dict):
            return f"HTTP {response.status_code}"

        message = error.get("message", "Unknown error")
        if "code" in error:
            return f"Error {error['code']}: {message}"
        return message

    def parse_response(self, data: Any, model: str) -> LLMResponse:
        try:
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            return LLMResponse(
                content="",
                model=model,
                error_message="Invalid response format: missing text content",
            )
        tokens = (data.get("usageMetadata") or {}).get("totalTokenCount", 0)
        return LLMResponse(content=text, model=model, tokens_used=tokens)
