"""Console logging setup shared by the API process and scripts."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Libraries that log every query or connection at INFO.
NOISY_LOGGERS = [
    "aiosqlite",
    "asyncio",
    "httpcore",
    "httpx",
    "sqlalchemy.engine",
]


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configure the root logger with a single console handler.

    Safe to call more than once: existing handlers on the root logger are
    replaced rather than duplicated.
    """

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    root_logger.addHandler(console_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root_logger
