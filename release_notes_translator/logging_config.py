"""
Logging setup shared by the providers and the orchestration layer.

Usage:
    from release_notes_translator.logging_config import setup_logging, get_logger

    setup_logging()
    logger = get_logger(__name__)
    logger.info("Translating release notes")
"""

import logging
import sys


DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_LOG_LEVEL = logging.INFO

# HTTP libraries log every connection at INFO/DEBUG
THIRD_PARTY_LOGGERS = ("urllib3", "requests")


def setup_logging(
    level: int = DEFAULT_LOG_LEVEL,
    log_format: str = DEFAULT_LOG_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
    suppress_third_party: bool = True
) -> None:
    """
    Configure the root logger.

    Should be called once at startup (the CLI does this). Messages go to
    stderr so that stdout stays free for the summary report.

    Args:
        level: Logging threshold (default: INFO)
        log_format: Format string for log records
        date_format: strftime format for timestamps
        suppress_third_party: Raise HTTP client loggers to WARNING
    """
    logging.basicConfig(
        level=level,
        format=log_format,
        datefmt=date_format,
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True
    )

    if suppress_third_party:
        for name in THIRD_PARTY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module (use ``__name__``)."""
    return logging.getLogger(name)
