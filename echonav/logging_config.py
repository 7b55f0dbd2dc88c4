"""Logging configuration for echonav.

stdout carries announcements, so log records go to stderr or to a file.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: int = logging.WARNING, log_file: Path | None = None) -> logging.Logger:
    """Attach one handler to the ``echonav`` logger.

    Calling again only updates the level; handlers are never duplicated.
    """
    logger = logging.getLogger("echonav")
    logger.setLevel(level)
    if logger.handlers:
        return logger

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
