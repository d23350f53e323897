"""OpenAI provider for release-note translation."""

from typing import Any, Dict, Optional

import requests

from release_notes_translator.logging_config import get_logger
from release_notes_translator.providers.base import BaseProvider
from release_notes_translator.providers.utils import error_message, read_json, strip_text

logger = get_logger(__name__)


class OpenAIProvider(BaseProvider):
    """OpenAI provider using the Chat Completions API."""

    DEFAULT_MODEL = "gpt-5.2"
    DEFAULT_TEMPERATURE = 0.5
    DEFAULT_TIMEOUT = 30
    # Flex processing is slower and needs a long timeout
    FLEX_MIN_TIMEOUT = 900
    BASE_URL = "https://api.openai.com/v1"

    provider_name = "openai"
    display_name = "OpenAI GPT"
    required_credentials = ["api_token"]
    optional_params = {
        "model_name": {"default": DEFAULT_MODEL, "description": "OpenAI model to use"},
        "temperature": {"default": DEFAULT_TEMPERATURE, "description": "Sampling temperature (0-2)"},
        "service_tier": {"default": None, "description": 'Service tier (e.g., "flex")'},
        "request_timeout": {"default": DEFAULT_TIMEOUT, "description": "Request timeout in seconds"},
    }

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize OpenAI provider.

        Args:
            config: Configuration mapping. Recognized keys: api_token,
                model_name, temperature, service_tier, request_timeout,
                context, platform, android_limitations.
        """
        super().__init__(config)
        self.api_key = self.credential("api_token")
        self.base_url = self.BASE_URL
        self.timeout = self._normalized_timeout()

    @property
    def service_tier(self) -> str:
        return str(self.config.get("service_tier") or "").strip()

    def _normalized_timeout(self) -> int:
        timeout = self.timeout_option()

        if self.service_tier == "flex" and 0 < timeout < self.FLEX_MIN_TIMEOUT:
            logger.info(
                "Flex processing detected; increasing request_timeout to %ss.",
                self.FLEX_MIN_TIMEOUT
            )
            return self.FLEX_MIN_TIMEOUT

        return timeout

    def _build_payload(self, prompt: str) -> Dict[str, Any]:
        payload = {
            "model": self.option("model_name"),
            "messages": [{"role": "user", "content": prompt}],
            "temperature": float(self.option("temperature")),
        }
        if self.service_tier:
            payload["service_tier"] = self.service_tier
        return payload

    def _call_openai(self, prompt: str) -> Optional[str]:
        """
        Call the Chat Completions API once.

        Returns:
            Message content, or None if OpenAI reported an error

        Raises:
            requests.exceptions.RequestException: On transport/HTTP failure
        """
        response = requests.post(
            f"{self.base_url}/chat/completions",
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json"
            },
            json=self._build_payload(prompt),
            timeout=self.timeout
        )

        data = read_json(response)
        error = error_message(data)
        if error:
            logger.error("%s translation error: %s", self.display_name, error)
            return None
        response.raise_for_status()

        choices = data.get("choices") or []
        if not choices:
            return None
        message = choices[0].get("message") or {}
        return strip_text(message.get("content"))

    def translate(self, text: str, source_locale: str, target_locale: str) -> Optional[str]:
        try:
            prompt = self.prepare_prompt(text, source_locale, target_locale)
            return self._call_openai(prompt)
        except Exception as e:
            logger.error("%s provider error: %s", self.display_name, e)
            return None
