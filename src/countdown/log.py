"""Logging setup for the ``countdown`` command."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s:%(filename)s:%(lineno)d] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_HANDLER_NAME = "countdown:console"


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Attach a stderr handler to the ``countdown`` logger.

    Calling this again only adjusts the level; the handler is installed once.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logger = logging.getLogger("countdown")
    logger.setLevel(level)

    handler = next((h for h in logger.handlers if h.get_name() == _HANDLER_NAME), None)
    if handler is None:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))
        handler.set_name(_HANDLER_NAME)
        logger.addHandler(handler)
    handler.setLevel(level)
    return logger
