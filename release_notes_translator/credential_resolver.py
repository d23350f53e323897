"""Resolve provider API keys from configuration or environment variables."""

import os
from typing import Any, Dict, List, Optional


# Per provider: environment variables to probe (in order) and the
# configuration key holding an explicit override.
PROVIDER_CREDENTIALS: Dict[str, Dict[str, Any]] = {
    "openai": {
        "env_vars": ["OPENAI_API_KEY", "GPT_API_KEY"],  # GPT_API_KEY is the legacy name
        "param_key": "openai_api_key",
    },
    "anthropic": {
        "env_vars": ["ANTHROPIC_API_KEY"],
        "param_key": "anthropic_api_key",
    },
    "gemini": {
        "env_vars": ["GEMINI_API_KEY"],
        "param_key": "gemini_api_key",
    },
    "deepl": {
        "env_vars": ["DEEPL_API_KEY"],
        "param_key": "deepl_api_key",
    },
}


def _credential_config(provider_name: Optional[str]) -> Optional[Dict[str, Any]]:
    if provider_name is None:
        return None
    return PROVIDER_CREDENTIALS.get(str(provider_name).lower())


def _present(value: Any) -> Optional[str]:
    """Return the stripped value, or None if it is missing or blank."""
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def resolve(provider_name: Optional[str], config: Optional[Dict[str, Any]] = None) -> Optional[str]:
    """
    Resolve the API key for a provider.

    Priority:
        1. The provider's parameter in ``config`` (e.g. ``openai_api_key``)
        2. The provider's environment variables, in order

    Args:
        provider_name: Provider identifier, matched case-insensitively
        config: Configuration mapping that may hold an explicit key

    Returns:
        The stripped API key, or None if no non-blank value was found
        or the provider is unknown
    """
    credentials = _credential_config(provider_name)
    if not credentials:
        return None

    config = config or {}

    value = _present(config.get(credentials["param_key"]))
    if value:
        return value

    for env_var in credentials["env_vars"]:
        value = _present(os.environ.get(env_var))
        if value:
            return value

    return None


def credentials_exist(provider_name: Optional[str], config: Optional[Dict[str, Any]] = None) -> bool:
    """Check whether an API key can be resolved for a provider."""
    return resolve(provider_name, config) is not None


def available_providers(config: Optional[Dict[str, Any]] = None) -> List[str]:
    """Return the providers that currently have credentials configured."""
    return [
        name for name in PROVIDER_CREDENTIALS
        if credentials_exist(name, config)
    ]


def credential_help(provider_name: Optional[str]) -> str:
    """
    Explain how to configure credentials for a provider.

    Args:
        provider_name: Provider identifier

    Returns:
        Help text naming every environment variable and the parameter key,
        e.g. "Set OPENAI_API_KEY or GPT_API_KEY environment variable, or pass
        the openai_api_key parameter"
    """
    credentials = _credential_config(provider_name)
    if not credentials:
        return f"Unknown provider: {provider_name if provider_name is not None else ''}"

    env_vars = " or ".join(credentials["env_vars"])
    return (
        f"Set {env_vars} environment variable, "
        f"or pass the {credentials['param_key']} parameter"
    )


def all_providers() -> List[str]:
    """Return every supported provider name."""
    return list(PROVIDER_CREDENTIALS)
