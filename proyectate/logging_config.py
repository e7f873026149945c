"""Logging setup for Proyectate.

Modules log through ``logging.getLogger(__name__)``; this configures
the ``proyectate`` logger once for the CLI.
"""

import logging
from pathlib import Path

LOGGER_NAME = "proyectate"
CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(funcName)s:%(lineno)d - %(message)s"


def setup_logging(level: int | str = logging.WARNING, log_file: Path | None = None) -> logging.Logger:
    """Configure the package logger.

    Args:
        level: Console log level.
        log_file: Optional file receiving DEBUG and above.

    Returns:
        The configured ``proyectate`` logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    logger.handlers.clear()
    logger.propagate = False

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
        )
        logger.addHandler(file_handler)

    return logger
