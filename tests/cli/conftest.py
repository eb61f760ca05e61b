"""CLI test fixtures."""

from loguru import logger
import pytest


@pytest.fixture(autouse=True)
def reset_loguru_sinks():
    """Drop sinks the CLI callback bound to the runner's temporary streams."""
    yield
    logger.remove()
