"""Logging configuration for CareerSpark AI."""

import logging
import os
import sys
from typing import Optional

_ROOT_NAME = "careerspark_ai"
_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"


def _default_level() -> int:
    level = logging.getLevelName(os.getenv("LOG_LEVEL", "INFO").strip().upper())
    return level if isinstance(level, int) else logging.INFO


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """Get a logger under the package namespace; the stdout handler lives on the package root."""
    root = logging.getLogger(_ROOT_NAME)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root.addHandler(handler)
        root.setLevel(_default_level())
    if not name.startswith(_ROOT_NAME):
        name = f"{_ROOT_NAME}.{name}"
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger


def set_log_level(level: int) -> None:
    """Change verbosity for every careerspark_ai logger (e.g. from the CLI)."""
    logging.getLogger(_ROOT_NAME).setLevel(level)
