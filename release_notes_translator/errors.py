"""User-facing errors raised while setting up a translation run."""


class TranslatorError(Exception):
    """Base class for errors that should stop the current run."""
    pass


class UnknownProviderError(TranslatorError, ValueError):
    """Raised when a provider name is not in the provider table."""
    pass


class MissingCredentialError(TranslatorError, ValueError):
    """Raised when no API key can be resolved for a provider."""
    pass


class ProviderConfigurationError(TranslatorError):
    """Raised when a constructed provider reports configuration errors."""

    def __init__(self, provider_name: str, errors: list):
        self.provider_name = provider_name
        self.errors = list(errors)
        super().__init__(
            f"Provider configuration errors ({provider_name}): {', '.join(self.errors)}"
        )
