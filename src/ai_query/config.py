"""
Configuration Store
===================

Provider credentials, generation policy and response shaping settings.

The configuration file is a small INI-like format::

    [general]
    log_level = INFO
    enable_logging = false

    [openai]
    api_key = "sk-..."
    default_model = gpt-4o

A ``ConfigManager`` is created once at startup and handed to every component
that needs configuration. Once loaded the ``Configuration`` it holds is
treated as read-only.
"""

import os
import threading
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

import structlog

logger = structlog.get_logger(__name__)

CONFIG_FILE_NAME = ".ai_query.config"
CONFIG_PATH_ENV = "AI_QUERY_CONFIG"

SECTION_GENERAL = "general"
SECTION_QUERY = "query"
SECTION_RESPONSE = "response"

DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 4096


class Provider(Enum):
    """Supported AI providers."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GEMINI = "gemini"
    UNKNOWN = "unknown"


# Built-in per-provider defaults: (model, max_tokens, endpoint)
PROVIDER_DEFAULTS: dict[Provider, tuple[str, int, str]] = {
    Provider.OPENAI: ("gpt-4o", DEFAULT_MAX_TOKENS, "https://api.openai.com/v1"),
    Provider.ANTHROPIC: (
        "claude-sonnet-4-5-20250929",
        8192,
        "https://api.anthropic.com",
    ),
    Provider.GEMINI: (
        "gemini-2.0-flash",
        8192,
        "https://generativelanguage.googleapis.com",
    ),
}


def provider_to_string(provider: Provider) -> str:
    """Return the canonical lower-case name of a provider."""
    return provider.value


def string_to_provider(name: str) -> Provider:
    """
    Parse a provider name case-insensitively.

    Unrecognized names map to ``Provider.UNKNOWN`` rather than raising.
    """
    try:
        provider = Provider(name.strip().lower())
    except ValueError:
        return Provider.UNKNOWN
    return provider


@dataclass
class ProviderConfig:
    """Settings for a single AI provider."""

    provider: Provider = Provider.UNKNOWN
    api_key: str = ""
    default_model: str = ""
    default_max_tokens: int = DEFAULT_MAX_TOKENS
    default_temperature: float = DEFAULT_TEMPERATURE
    api_endpoint: str = ""

    @classmethod
    def with_defaults(cls, provider: Provider) -> "ProviderConfig":
        """Create a config seeded with the provider's built-in defaults."""
        model, max_tokens, endpoint = PROVIDER_DEFAULTS.get(
            provider, ("", DEFAULT_MAX_TOKENS, "")
        )
        return cls(
            provider=provider,
            default_model=model,
            default_max_tokens=max_tokens,
            api_endpoint=endpoint,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)


def _default_providers() -> list[ProviderConfig]:
    return [ProviderConfig.with_defaults(Provider.OPENAI)]


@dataclass
class Configuration:
    """Process-wide settings, immutable once loaded."""

    # General
    log_level: str = "INFO"
    enable_logging: bool = False
    request_timeout_ms: int = 30000
    max_retries: int = 3

    # Query generation
    enforce_limit: bool = True
    default_limit: int = 1000
    max_query_length: int = 4000
    allow_system_tables: bool = False

    # Response format
    show_explanation: bool = True
    show_warnings: bool = True
    show_suggested_visualization: bool = False
    use_formatted_response: bool = False

    providers: list[ProviderConfig] = field(default_factory=_default_providers)

    @property
    def default_provider(self) -> ProviderConfig | None:
        """The first configured provider entry."""
        return self.providers[0] if self.providers else None

    def get_provider_config(self, provider: Provider) -> ProviderConfig | None:
        for entry in self.providers:
            if entry.provider == provider:
                return entry
        return None


def _parse_bool(value: str) -> bool:
    return value == "true"


# key -> (attribute, converter)
_GENERAL_KEYS = {
    "log_level": ("log_level", str),
    "enable_logging": ("enable_logging", _parse_bool),
    "request_timeout_ms": ("request_timeout_ms", int),
    "max_retries": ("max_retries", int),
}

_QUERY_KEYS = {
    "enforce_limit": ("enforce_limit", _parse_bool),
    "default_limit": ("default_limit", int),
    "max_query_length": ("max_query_length", int),
    "allow_system_tables": ("allow_system_tables", _parse_bool),
}

_RESPONSE_KEYS = {
    "show_explanation": ("show_explanation", _parse_bool),
    "show_warnings": ("show_warnings", _parse_bool),
    "show_suggested_visualization": ("show_suggested_visualization", _parse_bool),
    "use_formatted_response": ("use_formatted_response", _parse_bool),
}

_PROVIDER_KEYS = {
    "api_key": ("api_key", str),
    "default_model": ("default_model", str),
    "max_tokens": ("default_max_tokens", int),
    "temperature": ("default_temperature", float),
    "api_endpoint": ("api_endpoint", str),
}

_SECTION_KEYS = {
    SECTION_GENERAL: _GENERAL_KEYS,
    SECTION_QUERY: _QUERY_KEYS,
    SECTION_RESPONSE: _RESPONSE_KEYS,
}

_PROVIDER_SECTIONS = {
    provider.value: provider for provider in PROVIDER_DEFAULTS
}


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == '"' and value[-1] == '"':
        return value[1:-1]
    return value


def parse_config(content: str) -> Configuration:
    """
    Parse configuration file content into a fresh ``Configuration``.

    Unknown sections and keys are ignored. Malformed numeric values raise
    ``ValueError``.

    Args:
        content: Full text of the configuration file

    Returns:
        Configuration with file values overlaid on the defaults
    """
    config = Configuration()
    section = ""

    for raw_line in content.splitlines():
        line = raw_line.strip(" \t\r")
        if not line or line.startswith("#"):
            continue

        if line.startswith("[") and line.endswith("]"):
            section = line[1:-1]
            continue

        key, sep, value = line.partition("=")
        if not sep:
            continue
        key = key.strip(" \t")
        value = _strip_quotes(value.strip(" \t"))

        if section in _SECTION_KEYS:
            target = _SECTION_KEYS[section].get(key)
            if target:
                attr, convert = target
                setattr(config, attr, convert(value))
        elif section in _PROVIDER_SECTIONS:
            provider = _PROVIDER_SECTIONS[section]
            entry = config.get_provider_config(provider)
            if entry is None:
                entry = ProviderConfig.with_defaults(provider)
                config.providers.append(entry)
            target = _PROVIDER_KEYS.get(key)
            if target:
                attr, convert = target
                setattr(entry, attr, convert(value))

    return config


def default_config_path() -> Path:
    """Config file location: ``$AI_QUERY_CONFIG`` or ``~/.ai_query.config``."""
    env_path = os.getenv(CONFIG_PATH_ENV)
    if env_path:
        return Path(env_path)
    return Path.home() / CONFIG_FILE_NAME


class ConfigManager:
    """
    Loads and holds the process configuration.

    Create one instance at startup and pass it to the components that need
    it. ``get()`` loads from the default path on first access; ``reset()``
    restores defaults for test isolation.
    """

    def __init__(self, default_path: str | Path | None = None) -> None:
        """
        Initialize the manager with defaults.

        Args:
            default_path: File used by ``load()``/``get()`` when no path is
                          given. Defaults to ``default_config_path()``.
        """
        self.default_path = Path(default_path) if default_path else None
        self._config = Configuration()
        self._loaded = False
        self._lock = threading.Lock()

    @property
    def loaded(self) -> bool:
        return self._loaded

    def load(self, path: str | Path | None = None) -> bool:
        """
        Load configuration from a file.

        A missing file is not an error: defaults are used. A malformed value
        leaves the defaults in place and reports failure.

        Args:
            path: Configuration file path (default location if omitted)

        Returns:
            True if configuration is usable, False on parse failure
        """
        with self._lock:
            return self._load(path)

    def _load(self, path: str | Path | None) -> bool:
        config_path = Path(path) if path else (self.default_path or default_config_path())
        self._config = Configuration()
        logger.info("Loading configuration", path=str(config_path))

        try:
            content = config_path.read_text(encoding="utf-8")
        except OSError:
            logger.warning(
                "Could not read config file, using defaults", path=str(config_path)
            )
            self._loaded = True
            return True

        try:
            self._config = parse_config(content)
        except ValueError as e:
            logger.error(
                "Failed to parse configuration file", path=str(config_path), error=str(e)
            )
            self._config = Configuration()
            return False

        self._loaded = True
        logger.info(
            "Configuration loaded",
            providers=[
                provider_to_string(p.provider) for p in self._config.providers if p.is_configured
            ],
        )
        return True

    def get(self) -> Configuration:
        """Return the current configuration, loading it on first access."""
        if not self._loaded:
            with self._lock:
                if not self._loaded:
                    self._load(None)
        return self._config

    def get_provider_config(self, provider: Provider) -> ProviderConfig | None:
        """Return the configuration entry for a provider, if present."""
        return self.get().get_provider_config(provider)

    def reset(self) -> None:
        """Restore defaults and forget that a load happened."""
        with self._lock:
            self._config = Configuration()
            self._loaded = False
