"""
Mock LLM
========

Mock LLM implementation for testing and demonstration.
"""

from ai_query.models import LLMResponse
from ai_query.providers.base import GenerateOptions, LLMInterface


class MockLLM(LLMInterface):
    """
    Mock LLM returning canned output.

    In production, use one of the HTTP provider clients.
    """

    def __init__(
        self,
        responses: dict[str, list[str]] | None = None,
        default: str = '{"sql": "", "explanation": "No matching mock response"}',
        error_message: str | None = None,
    ) -> None:
        """
        Initialize with canned responses.

        Args:
            responses: Dict mapping prompt substrings to lists of raw outputs.
                       Each output is returned in sequence, the last one repeating.
            default: Output when no key matches the prompt
            error_message: If set, every call fails with this transport error
        """
        self.responses = responses or {}
        self.default = default
        self.error_message = error_message
        self.call_counts: dict[str, int] = {}
        self.calls: list[dict] = []

    def generate(
        self,
        prompt: str,
        system_prompt: str | None = None,
        options: GenerateOptions | None = None,
    ) -> LLMResponse:
        """Return the next canned output whose key appears in the prompt."""
        model = options.model if options else "mock-llm-v1"
        self.calls.append({"prompt": prompt, "system_prompt": system_prompt, "options": options})

        if self.error_message is not None:
            return LLMResponse(content="", model=model, error_message=self.error_message)

        for key, outputs in self.responses.items():
            if key.lower() in prompt.lower():
                count = self.call_counts.get(key, 0)
                self.call_counts[key] = count + 1
                return LLMResponse(content=outputs[min(count, len(outputs) - 1)], model=model)

        return LLMResponse(content=self.default, model=model)

    def reset(self) -> None:
        """Reset call tracking for fresh test runs."""
        self.call_counts = {}
        self.calls = []
