"""Application layer test fixtures."""

import pytest

from trackbridge.application.services import CandidateResolver
from trackbridge.config import MatchingConfig
from trackbridge.domain.entities import CanonicalTrack


@pytest.fixture
def matching_config():
    """Default matching parameters, independent of the environment."""
    return MatchingConfig()


@pytest.fixture
def resolver(matching_config, mock_logger):
    """Resolver with default parameters and a recording logger."""
    return CandidateResolver(config=matching_config, logger=mock_logger)


@pytest.fixture
def playlist():
    """Three-track source playlist without ISRCs."""
    return [
        CanonicalTrack(id="s-1", name="Karma Police", artists=["Radiohead"], duration_ms=264000),
        CanonicalTrack(id="s-2", name="Hyperballad", artists=["Björk"], duration_ms=321000),
        CanonicalTrack(id="s-3", name="Windowlicker", artists=["Aphex Twin"], duration_ms=367000),
    ]
