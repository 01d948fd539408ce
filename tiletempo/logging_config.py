"""tiletempo/logging_config.py — Handlers for command-line runs.

Library modules only call ``logging.getLogger(__name__)``; nothing is
emitted until :func:`setup_logging` attaches handlers to the ``tiletempo``
logger. Records go to stderr so stdout carries nothing but the report.
"""

import logging
import sys
from typing import Optional

LOGGER_NAME = "tiletempo"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """Route ``tiletempo.*`` records at *level* to stderr and, if given, *log_file*.

    Calling it again replaces the previous handlers.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        # Fresh file per run
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging to stderr%s", f" and {log_file}" if log_file else "")
