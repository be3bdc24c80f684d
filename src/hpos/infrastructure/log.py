"""Logging setup for the ``hpos`` logger hierarchy."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_handler: logging.Handler | None = None


def configure_logging(level: str = "WARNING") -> logging.Logger:
    """Attach a single stderr handler to the ``hpos`` logger.

    Safe to call more than once; later calls only change the level.
    """
    global _handler
    logger = logging.getLogger("hpos")
    logger.setLevel(level)
    if _handler is None or _handler not in logger.handlers:
        _handler = logging.StreamHandler()
        _handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(_handler)
    logger.propagate = False
    return logger
