"""Tests for settings and logging configuration."""

from pydantic import ValidationError
import pytest

from trackbridge.config import (
    BatchConfig,
    MatchingConfig,
    Settings,
    get_config,
    get_logger,
    settings,
)


class TestMatchingConfig:
    """Validation of product-tuned matching parameters."""

    def test_defaults(self):
        config = MatchingConfig()

        assert config.accept_threshold == 80
        assert config.high_confidence_threshold == 90
        assert config.isrc_timeout_seconds == 2.0
        assert config.search_timeout_seconds == 1.5
        assert config.search_limit == 10
        assert config.isrc_max_alternatives == 5
        assert config.metadata_max_alternatives == 4

    def test_high_below_accept_rejected(self):
        """Test that the high cutoff cannot sit below acceptance."""
        with pytest.raises(ValidationError, match="high_confidence_threshold"):
            MatchingConfig(accept_threshold=85, high_confidence_threshold=80)

    @pytest.mark.parametrize(
        "overrides",
        [{"isrc_timeout_seconds": 0}, {"search_timeout_seconds": -1.0}],
    )
    def test_non_positive_timeouts_rejected(self, overrides):
        with pytest.raises(ValidationError, match="timeouts"):
            MatchingConfig(**overrides)

    def test_duration_windows_ordered(self):
        with pytest.raises(ValidationError):
            MatchingConfig(duration_close_ms=6000, duration_near_ms=5000)

    def test_threshold_range(self):
        with pytest.raises(ValidationError):
            MatchingConfig(accept_threshold=120, high_confidence_threshold=130)


class TestSettings:
    """Environment-driven settings."""

    def test_nested_environment_override(self, monkeypatch):
        """Test the prefix and nested delimiter."""
        monkeypatch.setenv("TRACKBRIDGE_MATCHING__ACCEPT_THRESHOLD", "75")
        monkeypatch.setenv("TRACKBRIDGE_BATCH__CONCURRENCY", "4")

        configured = Settings(_env_file=None)

        assert configured.matching.accept_threshold == 75
        assert configured.batch.concurrency == 4

    def test_batch_concurrency_must_be_positive(self):
        with pytest.raises(ValidationError):
            BatchConfig(concurrency=0)


class TestFlatKeyAccess:
    def test_known_key(self):
        assert get_config("MATCH_ACCEPT_THRESHOLD") == settings.matching.accept_threshold
        assert get_config("BATCH_CONCURRENCY") == settings.batch.concurrency

    def test_unknown_key_returns_default(self):
        assert get_config("NOT_A_KEY", "fallback") == "fallback"


def test_get_logger_binds_module_and_service():
    """Test that module loggers carry structured context."""
    records = []
    logger = get_logger("tests.config")
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    try:
        logger.info("hello", track_count=3)
    finally:
        logger.remove(handler_id)

    extra = records[0]["extra"]
    assert extra["module"] == "tests.config"
    assert extra["service"] == "trackbridge"
    assert extra["track_count"] == 3
