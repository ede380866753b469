"""
CivicReport - Logging Configuration
Stdout logging for the API process and the map script.
"""

import logging
import sys
from typing import Iterable, Optional

from src.core.config import settings

APP_LOGGER = "civicreport"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Nominatim and Google client libraries log every request at INFO
QUIET_LOGGERS = ("httpx", "httpcore", "google", "urllib3")


def resolve_level(level: Optional[str] = None) -> int:
    """Numeric level for a name like "debug". Unknown names fall back to INFO."""
    value = logging.getLevelName((level or settings.log_level).upper())
    return value if isinstance(value, int) else logging.INFO


def setup_logging(
    level: Optional[str] = None,
    quiet: Iterable[str] = QUIET_LOGGERS,
) -> logging.Logger:
    """
    Configure root logging and return the application logger.

    Args:
        level: Log level name, defaults to settings.log_level
        quiet: Third-party loggers capped at WARNING

    Returns:
        The "civicreport" logger
    """
    log_level = resolve_level(level)

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger = logging.getLogger(APP_LOGGER)
    logger.setLevel(log_level)
    return logger
