"""Google Gemini provider for release-note translation (direct HTTP calls)."""

from typing import Any, Dict, Optional

import requests

from release_notes_translator.logging_config import get_logger
from release_notes_translator.providers.base import BaseProvider
from release_notes_translator.providers.utils import read_json, strip_text

logger = get_logger(__name__)


def extract_text(data: Dict[str, Any]) -> Optional[str]:
    """
    Extract the translated text from a generateContent response.

    A response without candidates, content, parts or text means the model
    produced nothing; that is reported as None rather than an error.

    Args:
        data: Parsed JSON response

    Returns:
        Stripped text of the first part of the first candidate, or None
    """
    candidates = data.get("candidates") or []
    if not candidates:
        return None

    content = candidates[0].get("content")
    if not content:
        return None

    parts = content.get("parts") or []
    if not parts:
        return None

    return strip_text(parts[0].get("text"))


class GeminiProvider(BaseProvider):
    """Gemini provider using the Generative Language REST API."""

    DEFAULT_MODEL = "gemini-2.5-flash"
    DEFAULT_TEMPERATURE = 0.5
    DEFAULT_TIMEOUT = 60
    API_BASE_URL = "https://generativelanguage.googleapis.com"

    provider_name = "gemini"
    display_name = "Google Gemini"
    required_credentials = ["api_token"]
    optional_params = {
        "model_name": {
            "default": DEFAULT_MODEL,
            "description": "Gemini model to use",
            "env": "GEMINI_MODEL_NAME"
        },
        "temperature": {
            "default": DEFAULT_TEMPERATURE,
            "description": "Sampling temperature (0-1)",
            "env": "GEMINI_TEMPERATURE"
        },
        "request_timeout": {
            "default": DEFAULT_TIMEOUT,
            "description": "Request timeout in seconds",
            "env": "GEMINI_REQUEST_TIMEOUT"
        },
    }

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        super().__init__(config)
        self.api_key = self.credential("api_token")
        self.model = self.option("model_name")
        self.timeout = self.timeout_option()

    @property
    def endpoint(self) -> str:
        return f"{self.API_BASE_URL}/v1beta/models/{self.model}:generateContent"

    def _make_api_request(self, prompt: str) -> Dict[str, Any]:
        """
        POST the prompt to generateContent.

        Raises:
            requests.exceptions.RequestException: On transport/HTTP failure
        """
        payload = {
            "contents": [{
                "role": "user",
                "parts": [{"text": prompt}]
            }],
            "generationConfig": {
                "temperature": float(self.option("temperature"))
            }
        }

        response = requests.post(
            self.endpoint,
            params={"key": self.api_key},
            headers={"Content-Type": "application/json"},
            json=payload,
            timeout=self.timeout
        )
        response.raise_for_status()
        return read_json(response)

    def translate(self, text: str, source_locale: str, target_locale: str) -> Optional[str]:
        try:
            prompt = self.prepare_prompt(text, source_locale, target_locale)
            return extract_text(self._make_api_request(prompt))
        except Exception as e:
            logger.error("%s provider error: %s", self.display_name, e)
            return None
