"""Domain layer test fixtures - pure value objects with no dependencies."""

import pytest

from trackbridge.domain.entities import CanonicalTrack


@pytest.fixture
def make_track():
    """Factory for canonical tracks with sensible defaults."""

    def _make(**overrides):
        fields = {
            "id": "t-1",
            "name": "Paranoid Android",
            "artists": ("Radiohead",),
            "album_name": "OK Computer",
            "duration_ms": 386000,
        }
        fields.update(overrides)
        return CanonicalTrack(**fields)

    return _make
