"""Translate release notes into every configured locale."""

import time
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from release_notes_translator import release_notes
from release_notes_translator.errors import ProviderConfigurationError
from release_notes_translator.logging_config import get_logger
from release_notes_translator.providers.base import BaseProvider
from release_notes_translator.providers.factory import (
    DEFAULT_PROVIDER,
    create_provider,
    is_valid_provider,
)
from release_notes_translator.report import generate_summary_report
from release_notes_translator.run_logging import RunLogger

logger = get_logger(__name__)

DEFAULT_LAST_RUN_FILE = Path("last_successful_run.txt")
DEFAULT_MASTER_LOCALE = "en-US"


def build_provider(config: Dict[str, Any]) -> BaseProvider:
    """
    Create a ready-to-use provider from the run configuration.

    An unknown ``provider`` falls back to OpenAI with a warning.

    Raises:
        MissingCredentialError: If no API key can be resolved
        ProviderConfigurationError: If the provider reports config errors
    """
    provider_name = config.get("provider") or DEFAULT_PROVIDER

    if not is_valid_provider(provider_name):
        logger.warning("Unknown provider '%s', falling back to %s", provider_name, DEFAULT_PROVIDER)
        provider_name = DEFAULT_PROVIDER

    provider = create_provider(provider_name, config)

    if not provider.is_valid:
        raise ProviderConfigurationError(provider.provider_name, provider.config_errors)

    return provider


def translate_locales(
    provider: BaseProvider,
    text: str,
    source_locale: str,
    target_locales: Iterable[str],
    run_logger: Optional[RunLogger] = None,
    pause: float = 0.0
) -> Dict[str, Optional[str]]:
    """
    Translate text into each target locale, one request at a time.

    Args:
        provider: Valid provider instance
        text: Source text
        source_locale: Source locale; skipped if it appears in target_locales
        target_locales: Locales to translate into
        run_logger: Optional run logger
        pause: Seconds to wait between requests (vendor rate limits)

    Returns:
        Mapping of locale -> translated text, or None where translation failed
    """
    translations: Dict[str, Optional[str]] = {}
    targets = [locale for locale in target_locales if locale != source_locale]

    for index, locale in enumerate(targets):
        if index > 0 and pause > 0:
            time.sleep(pause)

        logger.info("Translating %s -> %s with %s", source_locale, locale, provider.display_name)
        if run_logger:
            run_logger.log_request(provider.provider_name, source_locale, locale, text)

        translated = provider.translate(text, source_locale, locale)
        translations[locale] = translated

        if translated is None:
            logger.error("No translation produced for %s", locale)
            if run_logger:
                run_logger.log_failure(locale, "no_translation", f"{provider.display_name} returned no text")
        elif run_logger:
            run_logger.log_response(locale, translated)

    return translations


def run_release_notes(
    config: Dict[str, Any],
    root: Path = Path("."),
    last_run_file: Optional[Path] = None,
    run_logger: Optional[RunLogger] = None,
    pause: float = 0.0,
    force: bool = False
) -> Optional[Dict[str, Any]]:
    """
    Translate the master release notes of a fastlane project.

    Steps: locate the metadata directory for the platform, read the master
    locale's notes, skip if they have not changed since the last successful
    run, translate into every other locale directory, write the results and
    record the run.

    Args:
        config: Run configuration (provider, platform, master_locale, API keys,
            provider options)
        root: Project root containing ``fastlane/``
        last_run_file: Timestamp file (default: last_successful_run.txt in root)
        run_logger: Optional run logger
        pause: Seconds to wait between requests
        force: Translate even if the master file is unchanged

    Returns:
        Summary report dict, or None if nothing was translated

    Raises:
        TranslatorError: If the provider cannot be set up
    """
    platform = config.get("platform") or "ios"
    master_locale = config.get("master_locale") or DEFAULT_MASTER_LOCALE
    ios = release_notes.is_ios(platform)
    last_run_file = last_run_file or root / DEFAULT_LAST_RUN_FILE

    base_dir = release_notes.metadata_directory(root, platform)
    if not base_dir.is_dir():
        logger.error("Directory does not exist: %s", base_dir)
        return None

    locales = release_notes.list_locales(base_dir)
    master_text, master_path = release_notes.fetch_master_text(base_dir, master_locale, ios)
    if master_text is None:
        logger.info("Master file not found, skipping translation.")
        return None

    if not force and not release_notes.source_changed_since(master_path, last_run_file):
        logger.info("No changes in source file detected, translation skipped.")
        return None

    provider = build_provider(config)
    if run_logger:
        run_logger.update_summary(provider=provider.provider_name, master_locale=master_locale)

    translations = translate_locales(
        provider,
        master_text,
        master_locale,
        locales,
        run_logger=run_logger,
        pause=pause
    )

    written = release_notes.write_translations(base_dir, translations, ios, master_locale)
    logger.info("Wrote %s translated file(s)", len(written))

    release_notes.write_last_run(last_run_file)

    return generate_summary_report(translations, master_locale, provider.provider_name, platform=platform)
