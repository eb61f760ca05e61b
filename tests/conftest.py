"""Shared fixtures for trackbridge tests."""

from unittest.mock import AsyncMock, Mock

from loguru import logger
import pytest

from trackbridge.domain.entities import CanonicalTrack


@pytest.fixture
def blinding_lights():
    """Source track with full metadata and an ISRC."""
    return CanonicalTrack(
        id="sp-0VjIjW4GlUZAMYd2vXMi3b",
        name="Blinding Lights",
        artists=("The Weeknd",),
        album_name="After Hours",
        duration_ms=200040,
        isrc="USUM71703861",
        explicit=False,
    )


@pytest.fixture
def catalog_blinding_lights():
    """Target-catalog counterpart of ``blinding_lights``."""
    return CanonicalTrack(
        id="am-1488408568",
        name="Blinding Lights",
        artists=("The Weeknd",),
        album_name="After Hours",
        duration_ms=201570,
        isrc="USUM71703861",
    )


@pytest.fixture
def mock_catalog():
    """Target catalog whose lookups return nothing unless configured."""
    catalog = Mock()
    catalog.lookup_by_isrc = AsyncMock(return_value=[])
    catalog.search_by_text = AsyncMock(return_value=[])
    return catalog


@pytest.fixture
def mock_logger():
    """Diagnostic logger recording every call."""
    return Mock()


@pytest.fixture
def log_messages():
    """Formatted messages reaching a real loguru sink at DEBUG and above."""
    messages: list[str] = []
    handler_id = logger.add(
        lambda message: messages.append(message.record["message"]), level="DEBUG"
    )
    yield messages
    logger.remove(handler_id)
