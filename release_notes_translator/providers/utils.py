"""Shared utilities for HTTP-based translation providers."""

from typing import Any, Dict, Optional

import requests


def read_json(response: requests.Response) -> Dict[str, Any]:
    """
    Parse a vendor response body as JSON.

    Vendors send error payloads as JSON with a non-2xx status, so the body is
    parsed before the status is checked. A body that is not JSON raises the
    HTTP error if there is one, otherwise the decode error.

    Args:
        response: Response from requests

    Returns:
        Parsed JSON object (empty dict for a JSON body that is not an object)
    """
    try:
        data = response.json()
    except ValueError:
        response.raise_for_status()
        raise
    return data if isinstance(data, dict) else {}


def error_message(data: Dict[str, Any]) -> Optional[str]:
    """
    Extract a vendor-reported error message.

    Both OpenAI and Anthropic report failures as
    ``{"error": {"message": "..."}}``.

    Returns:
        The message, or None if the payload carries no error
    """
    error = data.get("error")
    if isinstance(error, dict):
        message = error.get("message")
        return str(message) if message else None
    if isinstance(error, str) and error:
        return error
    return None


def strip_text(value: Any) -> Optional[str]:
    """Strip a text value, passing None through."""
    if value is None:
        return None
    return str(value).strip()
