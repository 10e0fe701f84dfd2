"""
Logging configuration for the drug tracker service.

Writes rotating logs to <LOG_DIR>/drug_tracker.log and warnings to the console.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from settings import get_settings

SERVICE_LOGGER_NAME = "drug_tracker"
LOG_FILE_NAME = "drug_tracker.log"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

MAX_BYTES = 10 * 1024 * 1024  # 10 MB
BACKUP_COUNT = 5


def _setup_file_logger(name: str, log_file: Path, level: int) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.setLevel(level)
    # Avoid duplicate handlers if setup_logging is called multiple times
    for handler in logger.handlers:
        handler.close()
    logger.handlers = []

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=MAX_BYTES,
        backupCount=BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)
    return logger


def setup_logging() -> None:
    """
    Configure root + service loggers.
    """
    settings = get_settings()
    level = getattr(logging, settings.log_level, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    log_dir = settings.log_dir
    log_dir.mkdir(parents=True, exist_ok=True)
    _setup_file_logger(SERVICE_LOGGER_NAME, log_dir / LOG_FILE_NAME, level)


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the service namespace so it shares its handlers."""
    if name == SERVICE_LOGGER_NAME or name.startswith(SERVICE_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{SERVICE_LOGGER_NAME}.{name}")
