"""Tests for the translation run."""

import json
import os
import pytest
from pathlib import Path
from unittest.mock import Mock, call, patch

from release_notes_translator.errors import MissingCredentialError, ProviderConfigurationError
from release_notes_translator.providers.openai import OpenAIProvider
from release_notes_translator.run_logging import RunLogger
from release_notes_translator.translate import build_provider, run_release_notes, translate_locales


TRANSLATIONS = {"de-DE": "Fehlerbehebungen", "fr-FR": "Corrections de bugs"}


def _mock_provider(translations=None):
    translations = TRANSLATIONS if translations is None else translations
    provider = Mock()
    provider.provider_name = "openai"
    provider.display_name = "OpenAI GPT"
    provider.is_valid = True
    provider.translate.side_effect = lambda text, source, target: translations.get(target)
    return provider


def _make_project(tmp_path: Path, locales=("en-US", "de-DE", "fr-FR")) -> Path:
    base = tmp_path / "fastlane" / "metadata"
    for locale in locales:
        (base / locale).mkdir(parents=True)
    master = base / "en-US" / "release_notes.txt"
    master.write_text("Bug fixes", encoding="utf-8")
    os.utime(master, (1700000000, 1700000000))
    return base


def test_translate_locales_skips_source():
    provider = _mock_provider()

    result = translate_locales(provider, "Bug fixes", "en-US", ["de-DE", "en-US", "fr-FR"])

    assert result == TRANSLATIONS
    assert provider.translate.call_args_list == [
        call("Bug fixes", "en-US", "de-DE"),
        call("Bug fixes", "en-US", "fr-FR"),
    ]


def test_translate_locales_keeps_failures():
    provider = _mock_provider({"de-DE": "Fehlerbehebungen"})

    result = translate_locales(provider, "Bug fixes", "en-US", ["de-DE", "ja"])

    assert result == {"de-DE": "Fehlerbehebungen", "ja": None}


@patch('release_notes_translator.translate.time.sleep')
def test_translate_locales_pause_between_requests(mock_sleep):
    provider = _mock_provider()

    translate_locales(provider, "Bug fixes", "en-US", ["de-DE", "fr-FR", "ja"], pause=1.5)

    assert mock_sleep.call_args_list == [call(1.5), call(1.5)]


@patch('release_notes_translator.translate.time.sleep')
def test_translate_locales_no_pause_by_default(mock_sleep):
    translate_locales(_mock_provider(), "Bug fixes", "en-US", ["de-DE", "fr-FR"])
    mock_sleep.assert_not_called()


def test_translate_locales_run_logger(tmp_path: Path):
    run_logger = RunLogger(tmp_path / "runs", run_id="test-run")
    provider = _mock_provider({"de-DE": "Fehlerbehebungen"})

    translate_locales(provider, "Bug fixes", "en-US", ["de-DE", "ja"], run_logger=run_logger)

    summary = run_logger.get_summary()
    assert summary["locales_requested"] == 2
    assert summary["locales_translated"] == 1
    assert summary["locales_failed"] == 1

    failures = run_logger.failures_file.read_text(encoding="utf-8").splitlines()
    failure = json.loads(failures[0])
    assert failure["target_locale"] == "ja"
    assert failure["error_type"] == "no_translation"


def test_build_provider():
    with patch.dict(os.environ, {}, clear=True):
        provider = build_provider({"provider": "openai", "openai_api_key": "key"})
    assert isinstance(provider, OpenAIProvider)


def test_build_provider_unknown_falls_back_to_openai(caplog):
    with patch.dict(os.environ, {}, clear=True):
        provider = build_provider({"provider": "babelfish", "openai_api_key": "key"})
    assert isinstance(provider, OpenAIProvider)
    assert "falling back to openai" in caplog.text


def test_build_provider_missing_key():
    with patch.dict(os.environ, {}, clear=True):
        with pytest.raises(MissingCredentialError):
            build_provider({"provider": "anthropic"})


def test_build_provider_invalid_configuration():
    """Test that a blank TRANSLATE_ override leaves the provider without a key."""
    with patch.dict(os.environ, {"TRANSLATE_OPENAI_API_TOKEN": "   "}, clear=True):
        with pytest.raises(ProviderConfigurationError) as exc_info:
            build_provider({"provider": "openai", "openai_api_key": "key"})
    assert "Provider configuration errors (openai)" in str(exc_info.value)
    assert "Missing required credential: api_token" in str(exc_info.value)


def test_build_provider_bad_timeout_is_not_fatal():
    with patch.dict(os.environ, {}, clear=True):
        provider = build_provider({"provider": "openai", "openai_api_key": "key", "request_timeout": "soon"})
    assert provider.is_valid
    assert provider.timeout == 30


@patch('release_notes_translator.translate.create_provider')
def test_run_release_notes_ios(mock_create, tmp_path: Path):
    base = _make_project(tmp_path)
    mock_create.return_value = _mock_provider()

    report = run_release_notes({"provider": "openai", "platform": "ios"}, root=tmp_path)

    assert report["provider"] == "openai"
    assert report["translated"] == 2
    assert report["failed"] == 0
    assert (base / "de-DE" / "release_notes.txt").read_text(encoding="utf-8") == "Fehlerbehebungen"
    assert (base / "fr-FR" / "release_notes.txt").read_text(encoding="utf-8") == "Corrections de bugs"
    assert (tmp_path / "last_successful_run.txt").exists()


@patch('release_notes_translator.translate.create_provider')
def test_run_release_notes_skips_unchanged_source(mock_create, tmp_path: Path):
    _make_project(tmp_path)
    last_run_file = tmp_path / "state" / "last_run.txt"
    last_run_file.parent.mkdir()
    last_run_file.write_text("1700000001", encoding="utf-8")

    assert run_release_notes({"provider": "openai"}, root=tmp_path, last_run_file=last_run_file) is None
    mock_create.assert_not_called()


@patch('release_notes_translator.translate.create_provider')
def test_run_release_notes_force(mock_create, tmp_path: Path):
    _make_project(tmp_path)
    last_run_file = tmp_path / "last_successful_run.txt"
    last_run_file.write_text("1700000001", encoding="utf-8")
    mock_create.return_value = _mock_provider()

    report = run_release_notes({"provider": "openai"}, root=tmp_path, force=True)

    assert report["translated"] == 2


@patch('release_notes_translator.translate.create_provider')
def test_run_release_notes_android(mock_create, tmp_path: Path):
    base = tmp_path / "fastlane" / "metadata" / "android"
    master_dir = base / "en-US" / "changelogs"
    master_dir.mkdir(parents=True)
    (master_dir / "41.txt").write_text("Old", encoding="utf-8")
    (master_dir / "42.txt").write_text("Bug fixes", encoding="utf-8")
    (base / "de-DE").mkdir()
    (base / "ja").mkdir()
    mock_create.return_value = _mock_provider({"de-DE": "x" * 501})

    report = run_release_notes({"provider": "openai", "platform": "android"}, root=tmp_path)

    assert (base / "de-DE" / "changelogs" / "42.txt").read_text(encoding="utf-8") == "x" * 501
    assert not (base / "ja" / "changelogs").exists()
    assert report["failed_locales"] == ["ja"]
    assert report["over_limit"] == ["de-DE"]
    mock_create.return_value.translate.assert_any_call("Bug fixes", "en-US", "de-DE")


@patch('release_notes_translator.translate.create_provider')
def test_run_release_notes_missing_master(mock_create, tmp_path: Path):
    (tmp_path / "fastlane" / "metadata" / "de-DE").mkdir(parents=True)

    assert run_release_notes({"provider": "openai"}, root=tmp_path) is None
    mock_create.assert_not_called()


def test_run_release_notes_missing_metadata(tmp_path: Path):
    assert run_release_notes({"provider": "openai"}, root=tmp_path) is None


@patch('release_notes_translator.translate.create_provider')
def test_run_release_notes_invalid_provider_does_not_record_run(mock_create, tmp_path: Path):
    _make_project(tmp_path)
    provider = _mock_provider()
    provider.is_valid = False
    provider.config_errors = ["Missing required credential: api_token"]
    mock_create.return_value = provider

    with pytest.raises(ProviderConfigurationError):
        run_release_notes({"provider": "openai"}, root=tmp_path)
    assert not (tmp_path / "last_successful_run.txt").exists()
