"""Create provider instances with resolved credentials."""

from typing import Any, Dict, List, Optional, Type

from release_notes_translator import credential_resolver
from release_notes_translator.errors import MissingCredentialError, UnknownProviderError
from release_notes_translator.providers.anthropic import AnthropicProvider
from release_notes_translator.providers.base import BaseProvider
from release_notes_translator.providers.deepl import DeepLProvider
from release_notes_translator.providers.gemini import GeminiProvider
from release_notes_translator.providers.openai import OpenAIProvider


PROVIDERS: Dict[str, Type[BaseProvider]] = {
    OpenAIProvider.provider_name: OpenAIProvider,
    AnthropicProvider.provider_name: AnthropicProvider,
    GeminiProvider.provider_name: GeminiProvider,
    DeepLProvider.provider_name: DeepLProvider,
}

DEFAULT_PROVIDER = "openai"

# Configuration key every provider reads its API key from
API_TOKEN_KEY = "api_token"


def _normalize_name(provider_name: Optional[str]) -> str:
    return str(provider_name or "").strip().lower()


def _provider_class(provider_name: str) -> Type[BaseProvider]:
    provider_class = PROVIDERS.get(provider_name)
    if provider_class is None:
        raise UnknownProviderError(
            f"Unknown provider '{provider_name}'. "
            f"Available: {', '.join(available_provider_names())}"
        )
    return provider_class


def create_provider(provider_name: Optional[str], config: Optional[Dict[str, Any]] = None) -> BaseProvider:
    """
    Create a provider, resolving its API key automatically.

    Args:
        provider_name: Provider identifier, case-insensitive.
            None or empty selects "openai".
        config: Provider configuration. May carry ``<provider>_api_key``.

    Returns:
        Provider instance with ``api_token`` set to the resolved key

    Raises:
        UnknownProviderError: If the provider is not supported
        MissingCredentialError: If no API key can be resolved
    """
    provider_name = _normalize_name(provider_name) or DEFAULT_PROVIDER
    provider_class = _provider_class(provider_name)
    config = config or {}

    api_key = credential_resolver.resolve(provider_name, config)
    if api_key is None:
        raise MissingCredentialError(
            f"No API key found for provider '{provider_name}'. "
            f"{credential_resolver.credential_help(provider_name)}"
        )

    return provider_class({**config, API_TOKEN_KEY: api_key})


def create_provider_with_key(
    provider_name: Optional[str],
    api_key: Optional[str],
    config: Optional[Dict[str, Any]] = None
) -> BaseProvider:
    """
    Create a provider with an explicit API key, skipping credential resolution.

    The key is not checked here: an empty key gives an instance whose
    ``is_valid`` is False.

    Raises:
        UnknownProviderError: If the provider is not supported
    """
    provider_class = _provider_class(_normalize_name(provider_name))
    return provider_class({**(config or {}), API_TOKEN_KEY: api_key})


def is_valid_provider(provider_name: Optional[str]) -> bool:
    return _normalize_name(provider_name) in PROVIDERS


def provider_config(provider_name: Optional[str]) -> Dict[str, Any]:
    """
    Describe a provider.

    Returns:
        Dict with name, display_name, required_credentials, optional_params
        and credential_help; empty dict for an unknown provider
    """
    provider_class = PROVIDERS.get(_normalize_name(provider_name))
    if provider_class is None:
        return {}

    description = provider_class.describe()
    description["credential_help"] = credential_resolver.credential_help(provider_class.provider_name)
    return description


def available_provider_names() -> List[str]:
    return list(PROVIDERS)


def provider_display_names() -> Dict[str, str]:
    return {name: provider_class.display_name for name, provider_class in PROVIDERS.items()}
