"""Logging setup.

The query TUI owns the terminal, so records never go to stderr: they are
written to an optional log file, or dropped by a NullHandler.
"""

import logging
from pathlib import Path
from typing import Optional

LOGGER_NAME = "pb"
LOG_FORMAT = "%(asctime)s %(levelname)-5s [%(name)s] %(message)s"


def configure_logging(log_file: Optional[Path] = None, verbose: bool = False) -> logging.Logger:
    """Attach a file handler (or a NullHandler) to the ``pb`` logger."""
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False

    if log_file is None:
        logger.addHandler(logging.NullHandler())
        return logger

    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger
