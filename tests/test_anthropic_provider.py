"""Tests for Anthropic (Claude) provider."""

import os
import pytest
from unittest.mock import Mock, patch
from requests.exceptions import HTTPError, Timeout

from release_notes_translator.prompts.translate import ANDROID_LIMITATION_CLAUSE
from release_notes_translator.providers.anthropic import AnthropicProvider


def _completion_response(completion=" Hola mundo "):
    mock_response = Mock()
    mock_response.status_code = 200
    mock_response.json.return_value = {
        "type": "completion",
        "completion": completion,
        "stop_reason": "stop_sequence"
    }
    return mock_response


def test_anthropic_provider_descriptor():
    assert AnthropicProvider.provider_name == "anthropic"
    assert AnthropicProvider.display_name == "Anthropic Claude"
    assert AnthropicProvider.required_credentials == ["api_token"]
    params = AnthropicProvider.optional_params
    assert set(params) == {"model_name", "max_tokens", "temperature", "request_timeout"}
    assert params["model_name"]["default"] == "claude-sonnet-4.5"
    assert params["max_tokens"]["default"] == 1024
    assert params["max_tokens"]["env"] == "ANTHROPIC_MAX_TOKENS"


def test_anthropic_provider_init():
    with patch.dict(os.environ, {}, clear=True):
        provider = AnthropicProvider({"api_token": "test-key"})
        assert provider.is_valid
        assert provider.timeout == 60

        provider = AnthropicProvider({"api_token": "test-key", "request_timeout": "90"})
        assert provider.timeout == 90


def test_anthropic_provider_init_missing_api_key():
    with patch.dict(os.environ, {}, clear=True):
        provider = AnthropicProvider({"api_token": ""})
    assert not provider.is_valid
    assert provider.config_errors == ["Missing required credential: api_token"]


def test_anthropic_wrap_prompt():
    assert AnthropicProvider.wrap_prompt("Translate") == "\n\nHuman: Translate\n\nAssistant:"


@patch('release_notes_translator.providers.anthropic.requests.post')
def test_anthropic_provider_translate_success(mock_post):
    """Test successful translation with default options."""
    with patch.dict(os.environ, {}, clear=True):
        provider = AnthropicProvider({"api_token": "test-key"})
        mock_post.return_value = _completion_response()

        result = provider.translate("Hello world", "en-US", "es-ES")

    assert result == "Hola mundo"

    call_args = mock_post.call_args
    assert call_args[0][0] == "https://api.anthropic.com/v1/complete"
    headers = call_args[1]["headers"]
    assert headers["x-api-key"] == "test-key"
    assert headers["anthropic-version"] == "2023-06-01"

    payload = call_args[1]["json"]
    assert payload["model"] == "claude-sonnet-4.5"
    assert payload["max_tokens_to_sample"] == 1024
    assert payload["temperature"] == 0.5
    assert payload["prompt"].startswith("\n\nHuman: Translate the following text from en-US to es-ES:")
    assert payload["prompt"].endswith("\n\nAssistant:")


@patch('release_notes_translator.providers.anthropic.requests.post')
def test_anthropic_provider_custom_options(mock_post):
    """Test options are converted to the right types."""
    provider = AnthropicProvider({
        "api_token": "test-key",
        "model_name": "claude-3-haiku",
        "max_tokens": "256",
        "temperature": "0.1",
    })
    mock_post.return_value = _completion_response()

    provider.translate("Hello", "en", "es")

    payload = mock_post.call_args[1]["json"]
    assert payload["model"] == "claude-3-haiku"
    assert payload["max_tokens_to_sample"] == 256
    assert payload["temperature"] == 0.1


@patch('release_notes_translator.providers.anthropic.requests.post')
def test_anthropic_provider_env_options(mock_post):
    with patch.dict(os.environ, {"ANTHROPIC_MODEL_NAME": "claude-env", "ANTHROPIC_MAX_TOKENS": "512"}, clear=True):
        provider = AnthropicProvider({"api_token": "test-key"})
        mock_post.return_value = _completion_response()
        provider.translate("Hello", "en", "es")

    payload = mock_post.call_args[1]["json"]
    assert payload["model"] == "claude-env"
    assert payload["max_tokens_to_sample"] == 512


@patch('release_notes_translator.providers.anthropic.requests.post')
def test_anthropic_provider_android_and_context(mock_post):
    provider = AnthropicProvider({"api_token": "test-key", "platform": "android", "context": "Travel app"})
    mock_post.return_value = _completion_response()

    provider.translate("Hello", "en", "es")

    prompt = mock_post.call_args[1]["json"]["prompt"]
    assert "Context: Travel app" in prompt
    assert ANDROID_LIMITATION_CLAUSE in prompt


@patch('release_notes_translator.providers.anthropic.requests.post')
def test_anthropic_provider_error_payload(mock_post, caplog):
    provider = AnthropicProvider({"api_token": "test-key"})

    mock_response = Mock()
    mock_response.status_code = 429
    mock_response.json.return_value = {
        "type": "error",
        "error": {"type": "rate_limit_error", "message": "Rate limit exceeded"}
    }
    mock_response.raise_for_status.side_effect = HTTPError("429 Client Error")
    mock_post.return_value = mock_response

    assert provider.translate("Hello", "en", "es") is None
    assert "Anthropic Claude translation error: Rate limit exceeded" in caplog.text


@patch('release_notes_translator.providers.anthropic.requests.post')
def test_anthropic_provider_missing_completion(mock_post):
    provider = AnthropicProvider({"api_token": "test-key"})

    mock_response = Mock()
    mock_response.status_code = 200
    mock_response.json.return_value = {"type": "completion"}
    mock_post.return_value = mock_response

    assert provider.translate("Hello", "en", "es") is None


@pytest.mark.parametrize("exception", [Timeout("Read timed out"), KeyError("boom")])
@patch('release_notes_translator.providers.anthropic.requests.post')
def test_anthropic_provider_exception_returns_none(mock_post, exception, caplog):
    provider = AnthropicProvider({"api_token": "test-key"})
    mock_post.side_effect = exception

    assert provider.translate("Hello", "en", "es") is None
    assert "Anthropic Claude provider error" in caplog.text
