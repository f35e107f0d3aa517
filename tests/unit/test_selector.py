"""
Unit Tests for Provider Selection
=================================

Tests for explicit and automatic provider resolution.
"""

from ai_query.config import ConfigManager, Provider
from ai_query.selector import NO_API_KEY_MESSAGE, ProviderSelector


def make_manager(write_config, content: str) -> ConfigManager:
    manager = ConfigManager()
    manager.load(write_config(content))
    return manager


class TestExplicitSelection:
    """Tests for a named provider preference."""

    def test_inline_key_wins(self, anthropic_config_manager: ConfigManager) -> None:
        """Test that an inline key is used over the configured one."""
        selector = ProviderSelector(anthropic_config_manager)
        result = selector.select_provider("sk-inline", "anthropic")
        assert result.success
        assert result.provider == Provider.ANTHROPIC
        assert result.api_key == "sk-inline"
        assert result.api_key_source == "parameter"
        assert result.config.default_model == "claude-test"

    def test_configured_key(self, anthropic_config_manager: ConfigManager) -> None:
        """Test that the provider's configured key is used."""
        result = ProviderSelector(anthropic_config_manager).select_provider("", "anthropic")
        assert result.success
        assert result.api_key == "sk-ant-test"
        assert result.api_key_source == "anthropic_config"

    def test_missing_key_fails(self, anthropic_config_manager: ConfigManager) -> None:
        """Test that an explicit provider without a key fails."""
        result = ProviderSelector(anthropic_config_manager).select_provider("", "gemini")
        assert not result.success
        assert result.provider == Provider.GEMINI
        assert result.error_message == (
            "No API key available for gemini provider. Please provide API key "
            "as parameter or configure it in the configuration file."
        )

    def test_explicit_does_not_fall_back(self, write_config) -> None:
        """Test that an explicit choice never switches to another provider."""
        manager = make_manager(write_config, "[openai]\napi_key = sk-open\n")
        result = ProviderSelector(manager).select_provider("", "anthropic")
        assert not result.success
        assert result.provider == Provider.ANTHROPIC


class TestAutoSelection:
    """Tests for automatic provider resolution."""

    def test_inline_key_defaults_to_openai(self, anthropic_config_manager: ConfigManager) -> None:
        """Test that an inline key without preference goes to OpenAI."""
        result = ProviderSelector(anthropic_config_manager).select_provider("sk-x", "auto")
        assert result.success
        assert result.provider == Provider.OPENAI
        assert result.api_key_source == "parameter"

    def test_priority_order(self, write_config) -> None:
        """Test that OpenAI outranks Anthropic which outranks Gemini."""
        manager = make_manager(
            write_config,
            "[gemini]\napi_key = g\n[anthropic]\napi_key = a\n[openai]\napi_key = o\n",
        )
        result = ProviderSelector(manager).select_provider()
        assert result.provider == Provider.OPENAI
        assert result.api_key == "o"
        assert result.api_key_source == "openai_config"

    def test_skips_unconfigured(self, anthropic_config_manager: ConfigManager) -> None:
        """Test that the seeded OpenAI entry without a key is skipped."""
        result = ProviderSelector(anthropic_config_manager).select_provider()
        assert result.provider == Provider.ANTHROPIC
        assert result.api_key_source == "anthropic_config"

    def test_gemini_last_resort(self, write_config) -> None:
        """Test that Gemini is chosen when it is the only configured provider."""
        manager = make_manager(write_config, "[gemini]\napi_key = g\n")
        result = ProviderSelector(manager).select_provider("", "")
        assert result.provider == Provider.GEMINI

    def test_no_keys(self, config_manager: ConfigManager) -> None:
        """Test that selection fails when no key is available."""
        result = ProviderSelector(config_manager).select_provider()
        assert not result.success
        assert result.provider == Provider.UNKNOWN
        assert result.error_message == NO_API_KEY_MESSAGE

    def test_unknown_preference_is_auto(self, anthropic_config_manager: ConfigManager) -> None:
        """Test that unrecognized preferences fall through to auto."""
        result = ProviderSelector(anthropic_config_manager).select_provider("", "mistral")
        assert result.success
        assert result.provider == Provider.ANTHROPIC


class TestPreferenceCase:
    """Tests for preference name matching."""

    def test_uppercase_falls_through_by_default(self, write_config) -> None:
        """Test that 'GEMINI' is not treated as an explicit choice by default."""
        manager = make_manager(write_config, "[openai]\napi_key = o\n[gemini]\napi_key = g\n")
        result = ProviderSelector(manager).select_provider("", "GEMINI")
        assert result.provider == Provider.OPENAI

    def test_case_insensitive_option(self, write_config) -> None:
        """Test that case-insensitive matching routes any casing explicitly."""
        manager = make_manager(write_config, "[openai]\napi_key = o\n[gemini]\napi_key = g\n")
        result = ProviderSelector(manager, case_sensitive=False).select_provider("", "GEMINI")
        assert result.provider == Provider.GEMINI
        assert result.api_key == "g"
