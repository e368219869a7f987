"""
Logging configuration shared by the loader, the search core and the UI.
"""

import logging
from logging.handlers import RotatingFileHandler

import config

ROOT_LOGGER = "college_finder"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
MAX_LOG_SIZE = 10 * 1024 * 1024  # 10 MB
BACKUP_COUNT = 3


def setup_logging(level: str | None = None, log_file: str | None = None) -> logging.Logger:
    """
    Configure the application logger once.

    Console output always; a rotating file handler only when a log file is
    configured. Calling again is a no-op apart from the level.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel((level or config.LOG_LEVEL).upper())

    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    logger.addHandler(console)

    log_file = log_file or config.LOG_FILE
    if log_file:
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=MAX_LOG_SIZE,
            backupCount=BACKUP_COUNT,
            delay=True,
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(module_name: str | None = None) -> logging.Logger:
    """Return the application logger, or a child of it for ``module_name``."""
    if module_name:
        return logging.getLogger(f"{ROOT_LOGGER}.{module_name}")
    return logging.getLogger(ROOT_LOGGER)
