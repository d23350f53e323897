"""DeepL provider for release-note translation."""

from typing import Any, Dict, Optional

import requests

from release_notes_translator.logging_config import get_logger
from release_notes_translator.prompts.translate import ANDROID_CHAR_LIMIT
from release_notes_translator.providers.base import BaseProvider
from release_notes_translator.providers.utils import read_json, strip_text

logger = get_logger(__name__)


def normalize_locale(locale: str) -> str:
    """
    Convert a locale to the two-letter code DeepL expects.

    "en-US" -> "EN", "zh-Hans" -> "ZH", "FR-fr" -> "FR", "de" -> "DE"
    """
    return str(locale).split("-")[0].upper()


class DeepLProvider(BaseProvider):
    """
    DeepL provider using the v2 translate endpoint.

    DeepL is a dedicated translation service, not an LLM: it receives the
    raw text plus explicit language codes, and its output is truncated
    rather than prompted to fit the Play Store limit.
    """

    DEFAULT_TIMEOUT = 30
    # Free-tier keys end with ":fx" and must use the free host
    FREE_KEY_SUFFIX = ":fx"
    API_HOST_PAID = "https://api.deepl.com"
    API_HOST_FREE = "https://api-free.deepl.com"

    provider_name = "deepl"
    display_name = "DeepL"
    required_credentials = ["api_token"]
    optional_params = {
        "request_timeout": {
            "default": DEFAULT_TIMEOUT,
            "description": "Request timeout in seconds",
            "env": "DEEPL_REQUEST_TIMEOUT"
        },
        "formality": {
            "default": "default",
            "description": "Formality level: default, more, or less",
            "env": "DEEPL_FORMALITY"
        },
    }

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        super().__init__(config)
        self.api_key = str(self.credential("api_token") or "").strip()
        self.timeout = self.timeout_option()
        self.server_url = self.host_for_key(self.api_key) if self.api_key else None

    @classmethod
    def host_for_key(cls, api_key: str) -> str:
        if api_key.endswith(cls.FREE_KEY_SUFFIX):
            return cls.API_HOST_FREE
        return cls.API_HOST_PAID

    def _build_payload(self, text: str, source_locale: str, target_locale: str) -> Dict[str, Any]:
        payload = {
            "text": [text],
            "source_lang": normalize_locale(source_locale),
            "target_lang": normalize_locale(target_locale),
        }

        # Not supported for every target language
        formality = str(self.option("formality") or "").strip()
        if formality and formality != "default":
            payload["formality"] = formality

        context = self.config.get("context")
        if context and str(context).strip():
            payload["context"] = context

        return payload

    def _call_deepl(self, text: str, source_locale: str, target_locale: str) -> Optional[str]:
        """
        Call the translate endpoint once.

        Returns:
            Translated text, or None if DeepL reported an error

        Raises:
            requests.exceptions.RequestException: On transport failure or a
                non-JSON error body
        """
        response = requests.post(
            f"{self.server_url}/v2/translate",
            headers={
                "Authorization": f"DeepL-Auth-Key {self.api_key}",
                "Content-Type": "application/json"
            },
            json=self._build_payload(text, source_locale, target_locale),
            timeout=self.timeout
        )

        data = read_json(response)
        if response.status_code >= 400:
            message = data.get("message") or f"HTTP {response.status_code}"
            logger.error("DeepL API error: %s", message)
            return None

        translations = data.get("translations") or []
        if not translations:
            return None
        return strip_text(translations[0].get("text"))

    def translate(self, text: str, source_locale: str, target_locale: str) -> Optional[str]:
        try:
            translated = self._call_deepl(text, source_locale, target_locale)
        except Exception as e:
            logger.error("%s provider error: %s", self.display_name, e)
            return None

        if translated and self.platform == "android" and len(translated) > ANDROID_CHAR_LIMIT:
            logger.warning(
                "DeepL translation exceeds %s characters (%s), truncating...",
                ANDROID_CHAR_LIMIT,
                len(translated)
            )
            translated = translated[:ANDROID_CHAR_LIMIT]

        return translated
