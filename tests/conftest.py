"""Shared test fixtures."""

from collections.abc import Iterator
import logging

import pytest


@pytest.fixture(autouse=True)
def _clean_countdown_logger() -> Iterator[None]:
    """Drop handlers installed by the CLI so they never outlive a CliRunner stream."""
    yield
    logger = logging.getLogger("countdown")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
