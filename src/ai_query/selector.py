"""
Provider Selector
=================

Resolves which AI provider and API key serve a single request.
"""

import structlog

from ai_query.config import ConfigManager, Provider, provider_to_string
from ai_query.models import ProviderSelectionResult

logger = structlog.get_logger(__name__)

# Auto-selection priority
PROVIDER_PRIORITY = (Provider.OPENAI, Provider.ANTHROPIC, Provider.GEMINI)

# Preference literals that trigger explicit selection
EXPLICIT_PROVIDERS = {provider_to_string(p): p for p in PROVIDER_PRIORITY}

API_KEY_SOURCE_PARAMETER = "parameter"

NO_API_KEY_MESSAGE = (
    "API key required. Pass as parameter or set OpenAI, Anthropic, "
    "or Gemini API key in the configuration file."
)


class ProviderSelector:
    """
    Chooses a provider from an explicit preference, an inline key and config.

    Preference names are matched case-sensitively by default, so ``"OPENAI"``
    falls through to auto-selection. This keeps compatibility with existing
    callers; pass ``case_sensitive=False`` to route any casing explicitly.
    """

    def __init__(self, config_manager: ConfigManager, case_sensitive: bool = True) -> None:
        self.config_manager = config_manager
        self.case_sensitive = case_sensitive

    def select_provider(
        self, api_key: str = "", provider_preference: str = ""
    ) -> ProviderSelectionResult:
        """
        Select a provider for one request.

        Args:
            api_key: Inline API key, empty if not supplied
            provider_preference: Provider name, "auto" or empty

        Returns:
            ProviderSelectionResult, with success False if no key resolves
        """
        api_key = api_key or ""
        preference = provider_preference or ""
        if not self.case_sensitive:
            preference = preference.lower()

        provider = EXPLICIT_PROVIDERS.get(preference)
        if provider is not None:
            return self._select_explicit(api_key, provider)

        return self._auto_select(api_key)

    def _select_explicit(self, api_key: str, provider: Provider) -> ProviderSelectionResult:
        name = provider_to_string(provider)
        config = self.config_manager.get_provider_config(provider)
        logger.info("Explicit provider selection", provider=name)

        if api_key:
            return ProviderSelectionResult(
                provider=provider,
                config=config,
                api_key=api_key,
                api_key_source=API_KEY_SOURCE_PARAMETER,
                success=True,
            )

        if config and config.api_key:
            logger.info("Using API key from configuration", provider=name)
            return ProviderSelectionResult(
                provider=provider,
                config=config,
                api_key=config.api_key,
                api_key_source=f"{name}_config",
                success=True,
            )

        return ProviderSelectionResult(
            provider=provider,
            config=config,
            success=False,
            error_message=(
                f"No API key available for {name} provider. Please provide API key "
                "as parameter or configure it in the configuration file."
            ),
        )

    def _auto_select(self, api_key: str) -> ProviderSelectionResult:
        if api_key:
            provider = PROVIDER_PRIORITY[0]
            logger.info(
                "Auto-selecting provider for inline API key",
                provider=provider_to_string(provider),
            )
            return ProviderSelectionResult(
                provider=provider,
                config=self.config_manager.get_provider_config(provider),
                api_key=api_key,
                api_key_source=API_KEY_SOURCE_PARAMETER,
                success=True,
            )

        for provider in PROVIDER_PRIORITY:
            config = self.config_manager.get_provider_config(provider)
            if config and config.api_key:
                name = provider_to_string(provider)
                logger.info("Auto-selecting provider from configuration", provider=name)
                return ProviderSelectionResult(
                    provider=provider,
                    config=config,
                    api_key=config.api_key,
                    api_key_source=f"{name}_config",
                    success=True,
                )

        logger.warning("No API key found in configuration")
        return ProviderSelectionResult(success=False, error_message=NO_API_KEY_MESSAGE)
