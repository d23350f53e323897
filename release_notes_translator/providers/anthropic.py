"""Anthropic (Claude) provider for release-note translation."""

from typing import Any, Dict, Optional

import requests

from release_notes_translator.logging_config import get_logger
from release_notes_translator.providers.base import BaseProvider
from release_notes_translator.providers.utils import error_message, read_json, strip_text

logger = get_logger(__name__)


class AnthropicProvider(BaseProvider):
    """Anthropic provider using the single-turn Text Completions API."""

    DEFAULT_MODEL = "claude-sonnet-4.5"
    DEFAULT_MAX_TOKENS = 1024
    DEFAULT_TEMPERATURE = 0.5
    DEFAULT_TIMEOUT = 60
    BASE_URL = "https://api.anthropic.com/v1"
    API_VERSION = "2023-06-01"

    provider_name = "anthropic"
    display_name = "Anthropic Claude"
    required_credentials = ["api_token"]
    optional_params = {
        "model_name": {
            "default": DEFAULT_MODEL,
            "description": "Anthropic model to use",
            "env": "ANTHROPIC_MODEL_NAME"
        },
        "max_tokens": {
            "default": DEFAULT_MAX_TOKENS,
            "description": "Maximum tokens in response",
            "env": "ANTHROPIC_MAX_TOKENS"
        },
        "temperature": {
            "default": DEFAULT_TEMPERATURE,
            "description": "Sampling temperature (0-1)",
            "env": "ANTHROPIC_TEMPERATURE"
        },
        "request_timeout": {
            "default": DEFAULT_TIMEOUT,
            "description": "Request timeout in seconds",
            "env": "ANTHROPIC_REQUEST_TIMEOUT"
        },
    }

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        super().__init__(config)
        self.api_key = self.credential("api_token")
        self.base_url = self.BASE_URL
        self.timeout = self.timeout_option()

    @staticmethod
    def wrap_prompt(prompt: str) -> str:
        """Wrap a prompt in the Human/Assistant turn markers."""
        return f"\n\nHuman: {prompt}\n\nAssistant:"

    def _call_claude_complete(self, prompt: str) -> Optional[str]:
        """
        Call the Text Completions API once.

        Returns:
            Completion text, or None if Anthropic reported an error or
            returned no completion

        Raises:
            requests.exceptions.RequestException: On transport/HTTP failure
        """
        payload = {
            "model": self.option("model_name"),
            "max_tokens_to_sample": int(self.option("max_tokens")),
            "temperature": float(self.option("temperature")),
            "prompt": self.wrap_prompt(prompt),
        }

        response = requests.post(
            f"{self.base_url}/complete",
            headers={
                "x-api-key": self.api_key,
                "anthropic-version": self.API_VERSION,
                "Content-Type": "application/json"
            },
            json=payload,
            timeout=self.timeout
        )

        data = read_json(response)
        error = error_message(data)
        if error:
            logger.error("%s translation error: %s", self.display_name, error)
            return None
        response.raise_for_status()

        return strip_text(data.get("completion"))

    def translate(self, text: str, source_locale: str, target_locale: str) -> Optional[str]:
        try:
            prompt = self.prepare_prompt(text, source_locale, target_locale)
            return self._call_claude_complete(prompt)
        except Exception as e:
            logger.error("%s provider error: %s", self.display_name, e)
            return None
