"""
Logging setup.

Every module logs through logging.getLogger(__name__); this
module attaches the handlers to the package logger once, at
application startup.
"""

import logging
from logging.handlers import RotatingFileHandler

from pos_ledger.config import get_settings

LOG_FORMAT = (
    "%(asctime)s.%(msecs)03d - %(name)s - %(funcName)s - "
    "%(levelname)s - %(message)s"
)
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

PACKAGE_LOGGER = "pos_ledger"


def setup_logging(level: str | None = None, log_file: str | None = None) -> logging.Logger:
    """
    Configure the package logger with a console handler and,
    when a log file is configured, a rotating file handler.

    Safe to call more than once: existing handlers are replaced
    so log lines are never duplicated.
    """
    settings = get_settings()
    level = (level or settings.LOG_LEVEL).upper()
    log_file = log_file or settings.LOG_FILE

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = RotatingFileHandler(
            log_file, maxBytes=5 * 1024 * 1024, backupCount=3
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # Avoid duplicate lines through the root logger
    logger.propagate = False
    return logger
