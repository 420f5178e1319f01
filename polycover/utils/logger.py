"""Logging setup for the solver and its command line."""

from __future__ import annotations

import logging
from typing import Optional


LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
DATE_FORMAT = "%H:%M:%S"


def configure_logging(level: int = logging.INFO) -> None:
    """Install a single stream handler on the root logger.

    Only entrypoints call this. Library modules log through
    :func:`get_logger` and leave handler setup to the application.
    """

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger under the ``polycover`` namespace."""

    return logging.getLogger(name or "polycover")
