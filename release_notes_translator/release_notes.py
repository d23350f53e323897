"""Read and write release notes in the fastlane metadata layout.

iOS:      fastlane/metadata/<locale>/release_notes.txt
Android:  fastlane/metadata/android/<locale>/changelogs/<version code>.txt
"""

import time
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from release_notes_translator.logging_config import get_logger

logger = get_logger(__name__)

IOS_METADATA_DIR = Path("fastlane/metadata")
ANDROID_METADATA_DIR = Path("fastlane/metadata/android")
IOS_RELEASE_NOTES_FILE = "release_notes.txt"
ANDROID_CHANGELOGS_DIR = "changelogs"


def is_ios(platform: Optional[str]) -> bool:
    return str(platform or "ios").strip().lower() == "ios"


def metadata_directory(root: Path, platform: Optional[str]) -> Path:
    """Return the metadata directory for a platform under ``root``."""
    return root / (IOS_METADATA_DIR if is_ios(platform) else ANDROID_METADATA_DIR)


def list_locales(base_dir: Path) -> List[str]:
    """
    List locale directories.

    Args:
        base_dir: Metadata directory

    Returns:
        Sorted names of the child directories (e.g. ["de-DE", "en-US"])
    """
    if not base_dir.is_dir():
        return []
    return sorted(entry.name for entry in base_dir.iterdir() if entry.is_dir())


def _version_number(path: Path) -> int:
    try:
        return int(path.stem)
    except ValueError:
        return 0


def highest_numbered_file(directory: Path) -> Optional[str]:
    """
    Find the changelog with the highest version code.

    Args:
        directory: A ``changelogs`` directory

    Returns:
        File name such as "1042.txt", or None if there are no .txt files.
        Non-numeric names count as version 0.
    """
    changelogs = sorted(directory.glob("*.txt"))
    if not changelogs:
        return None
    return max(changelogs, key=_version_number).name


def locale_directory(base_dir: Path, locale: str, ios: bool) -> Path:
    if ios:
        return base_dir / locale
    return base_dir / locale / ANDROID_CHANGELOGS_DIR


def master_text_path(base_dir: Path, locale: str, ios: bool) -> Optional[Path]:
    """Path of a locale's release notes; None if an Android locale has no changelogs."""
    directory = locale_directory(base_dir, locale, ios)
    if ios:
        return directory / IOS_RELEASE_NOTES_FILE
    filename = highest_numbered_file(directory) if directory.is_dir() else None
    return directory / filename if filename else None


def fetch_master_text(base_dir: Path, master_locale: str, ios: bool) -> Tuple[Optional[str], Optional[Path]]:
    """
    Read the master locale's release notes.

    Args:
        base_dir: Metadata directory
        master_locale: Source locale (e.g. "en-US")
        ios: True for the iOS layout, False for Android

    Returns:
        (text, path), or (None, None) if the directory or file is missing
    """
    master_dir = locale_directory(base_dir, master_locale, ios)
    if not master_dir.is_dir():
        logger.error("Master path does not exist: %s", master_dir)
        return None, None

    file_path = master_text_path(base_dir, master_locale, ios)
    if file_path is None:
        logger.error("No changelog files found in: %s", master_dir)
        return None, None

    if not file_path.is_file():
        logger.error("File does not exist: %s", file_path)
        return None, None

    return file_path.read_text(encoding="utf-8"), file_path


def write_translations(
    base_dir: Path,
    translations: Dict[str, Optional[str]],
    ios: bool,
    master_locale: str
) -> List[Path]:
    """
    Write translated release notes next to the master file.

    The master locale and failed translations (None) are skipped. Android
    changelogs reuse the master's file name (the current version code).

    Args:
        base_dir: Metadata directory
        translations: Mapping of locale -> translated text or None
        ios: True for the iOS layout, False for Android
        master_locale: Source locale

    Returns:
        Paths of the written files
    """
    if ios:
        filename = IOS_RELEASE_NOTES_FILE
    else:
        filename = highest_numbered_file(locale_directory(base_dir, master_locale, ios))
        if filename is None:
            logger.error("No master changelog to name translated files after")
            return []

    written = []
    for locale, text in translations.items():
        if locale == master_locale:
            continue
        if text is None:
            logger.warning("No translation for %s, leaving it unchanged", locale)
            continue

        target_dir = locale_directory(base_dir, locale, ios)
        target_dir.mkdir(parents=True, exist_ok=True)

        target_file = target_dir / filename
        target_file.write_text(text, encoding="utf-8")
        written.append(target_file)

    return written


def read_last_run(last_run_file: Path) -> Optional[int]:
    """Read the Unix timestamp of the last successful run, if recorded."""
    if not last_run_file.is_file():
        return None
    try:
        return int(last_run_file.read_text(encoding="utf-8").strip())
    except ValueError:
        logger.warning("Ignoring malformed last-run file: %s", last_run_file)
        return None


def write_last_run(last_run_file: Path, timestamp: Optional[int] = None) -> int:
    """Record a successful run (default: now). Returns the stored timestamp."""
    timestamp = int(time.time()) if timestamp is None else int(timestamp)
    last_run_file.parent.mkdir(parents=True, exist_ok=True)
    last_run_file.write_text(str(timestamp), encoding="utf-8")
    return timestamp


def source_changed_since(master_file: Path, last_run_file: Path) -> bool:
    """True unless the master file is no newer than the last recorded run."""
    last_run = read_last_run(last_run_file)
    if last_run is None or not master_file.exists():
        return True
    return int(master_file.stat().st_mtime) > last_run
