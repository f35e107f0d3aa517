"""
Base LLM Interface
==================

Abstract interface for LLM providers.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ai_query.models import LLMResponse


@dataclass
class GenerateOptions:
    """Per-call model parameters."""

    model: str
    max_tokens: Optional[int] = None
    temperature: Optional[float] = None


class LLMInterface(ABC):
    """Abstract interface for LLM providers."""

    @abstractmethod
    def generate(
        self,
        prompt: str,
        system_prompt: str | None = None,
        options: GenerateOptions | None = None,
    ) -> LLMResponse:
        """
        Generate a response from the LLM.

        Transport failures are reported through ``LLMResponse.error_message``
        rather than raised.

        Args:
            prompt: The user prompt
            system_prompt: Optional system prompt for context
            options: Model name and sampling parameters

        Returns:
            LLMResponse with generated content or error details
        """
        pass
