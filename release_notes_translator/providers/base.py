"""Base provider interface for translation."""

import os
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from release_notes_translator.logging_config import get_logger
from release_notes_translator.prompts.translate import (
    ANDROID_LIMITATION_CLAUSE,
    apply_android_limitations,
    build_prompt,
)

logger = get_logger(__name__)


class BaseProvider(ABC):
    """
    Base class for translation providers.

    Subclasses describe themselves through class attributes and implement
    ``translate``. Construction never raises on bad configuration: problems
    are collected in ``config_errors`` and ``is_valid`` turns False. Callers
    must check ``is_valid`` before translating.
    """

    provider_name: str = ""
    display_name: str = ""
    required_credentials: List[str] = ["api_token"]
    # parameter name -> {"default": ..., "description": ..., "env": optional env var}
    optional_params: Dict[str, Dict[str, Any]] = {}

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize provider and validate its configuration.

        Args:
            config: Flat configuration mapping (api_token, model_name,
                temperature, platform, context, ...). Unknown keys are ignored.
        """
        self.config: Dict[str, Any] = dict(config or {})
        self.config_errors: List[str] = []
        self.validate_config()

    @abstractmethod
    def translate(self, text: str, source_locale: str, target_locale: str) -> Optional[str]:
        """
        Translate text from source locale to target locale.

        Performs exactly one attempt. Must not raise: any failure is logged
        and reported as None.

        Args:
            text: Text to translate
            source_locale: Source locale (e.g., "en-US")
            target_locale: Target locale (e.g., "de-DE")

        Returns:
            Translated text, or None if no translation was produced
        """
        pass

    def validate_config(self) -> None:
        """Check required credentials; populates ``config_errors``."""
        for key in self.required_credentials:
            self.require_credential(key)

    @property
    def is_valid(self) -> bool:
        return not self.config_errors

    @property
    def platform(self) -> str:
        return str(self.config.get("platform") or "").strip().lower()

    def add_config_error(self, message: str) -> None:
        self.config_errors.append(message)
        logger.error("[%s] %s", self.display_name, message)

    def credential(self, key: str) -> Optional[str]:
        """
        Look up a credential value.

        ``TRANSLATE_<PROVIDER>_<KEY>`` in the environment takes precedence
        over the configuration mapping.
        """
        env_var = f"TRANSLATE_{self.provider_name.upper()}_{key.upper()}"
        return os.environ.get(env_var) or self.config.get(key)

    def require_credential(self, key: str) -> bool:
        value = self.credential(key)
        if value is None or not str(value).strip():
            self.add_config_error(f"Missing required credential: {key}")
            return False
        return True

    def option(self, key: str) -> Any:
        """
        Value of an optional parameter.

        Configuration wins when set; then the environment variable named in
        ``optional_params`` (if any); then the declared default.
        """
        value = self.config.get(key)
        if value is not None and str(value).strip() != "":
            return value

        spec = self.optional_params.get(key, {})
        env_var = spec.get("env")
        if env_var and os.environ.get(env_var, "").strip():
            return os.environ[env_var]

        return spec.get("default")

    def timeout_option(self) -> int:
        """``request_timeout`` in whole seconds; a bad value falls back to the default."""
        raw_timeout = self.option("request_timeout")
        default = self.optional_params.get("request_timeout", {}).get("default")
        try:
            return int(float(raw_timeout))
        except (TypeError, ValueError):
            logger.warning(
                "[%s] Invalid request_timeout %r, using %ss",
                self.display_name,
                raw_timeout,
                default
            )
            return default

    def build_prompt(self, text: str, source_locale: str, target_locale: str) -> str:
        return build_prompt(
            text,
            source_locale,
            target_locale,
            context=self.config.get("context"),
            android_limitations=bool(self.config.get("android_limitations"))
        )

    def prepare_prompt(self, text: str, source_locale: str, target_locale: str) -> str:
        """Build the prompt and add the length clause for Android."""
        prompt = self.build_prompt(text, source_locale, target_locale)
        if self.platform == "android" and ANDROID_LIMITATION_CLAUSE not in prompt:
            prompt = apply_android_limitations(prompt)
        return prompt

    @classmethod
    def describe(cls) -> Dict[str, Any]:
        return {
            "name": cls.provider_name,
            "display_name": cls.display_name,
            "required_credentials": list(cls.required_credentials),
            "optional_params": {k: dict(v) for k, v in cls.optional_params.items()},
        }

    def __repr__(self) -> str:
        state = "valid" if self.is_valid else "invalid"
        return f"<{self.__class__.__name__} {self.provider_name} ({state})>"
