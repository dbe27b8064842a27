"""Logging helpers shared by every module."""

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
HANDLER_NAME = "liberator"


def get_logger(name: str) -> logging.Logger:
    """Return a module logger; handlers are installed by configure_logging()."""
    return logging.getLogger(name)


def configure_logging(level: Optional[str] = None) -> None:
    """
    Install a single stderr handler on the package root logger.

    Args:
        level: Level name (DEBUG, INFO, ...). Defaults to INFO.
    """
    root = logging.getLogger("liberator")
    root.setLevel((level or "INFO").upper())
    if not any(h.get_name() == HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
