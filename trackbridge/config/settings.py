"""Configuration management using Pydantic Settings.

This module provides type-safe configuration with automatic environment
variable loading and validation.

The configuration is organized into logical groups:
- MatchingConfig: Thresholds, score weights and per-call timeouts for track resolution
- BatchConfig: Batch concurrency and progress reporting settings
- LoggingConfig: Logging levels, files, and debugging options
"""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class MatchingConfig(BaseModel):
    """Product-tuned parameters for the two resolution tiers.

    None of these are protocol requirements; they were tuned against real
    playlists and stay overridable from the environment.
    """

    # Metadata tier acceptance
    accept_threshold: int = Field(default=80, ge=0, le=100)
    high_confidence_threshold: int = Field(default=90, ge=0, le=100)

    # Composite score weights (sum to 100)
    title_weight: float = 40.0
    artist_weight: float = 35.0
    album_weight: float = 15.0
    duration_weight: float = 10.0
    duration_close_ms: int = 3000
    duration_near_ms: int = 5000

    # External calls
    isrc_timeout_seconds: float = 2.0
    search_timeout_seconds: float = 1.5
    search_limit: int = Field(default=10, ge=1)
    default_storefront: str = "us"

    # Runner-up caps
    isrc_max_alternatives: int = Field(default=5, ge=0)
    metadata_max_alternatives: int = Field(default=4, ge=0)

    @model_validator(mode="after")
    def check_consistency(self) -> "MatchingConfig":
        """Reject threshold and timeout combinations that can never work."""
        if self.high_confidence_threshold < self.accept_threshold:
            raise ValueError(
                "high_confidence_threshold must be >= accept_threshold "
                f"({self.high_confidence_threshold} < {self.accept_threshold})"
            )
        if self.isrc_timeout_seconds <= 0 or self.search_timeout_seconds <= 0:
            raise ValueError("Lookup timeouts must be positive")
        if self.duration_near_ms < self.duration_close_ms:
            raise ValueError("duration_near_ms must be >= duration_close_ms")
        return self


class BatchConfig(BaseModel):
    """Batch processing and progress reporting configuration."""

    concurrency: int = Field(default=1, ge=1)  # 1 = sequential baseline
    progress_log_frequency: int = Field(default=10, ge=1)


class LoggingConfig(BaseModel):
    """Logging configuration for console and file output."""

    console_level: str = "INFO"
    file_level: str = "DEBUG"
    log_file: Path = Path("logs/trackbridge.log")
    file_logging: bool = False
    real_time_debug: bool = True


class Settings(BaseSettings):
    """Main application settings with environment variable support.

    Environment variables use the ``TRACKBRIDGE_`` prefix and nested naming:
    - TRACKBRIDGE_MATCHING__ACCEPT_THRESHOLD=85
    - TRACKBRIDGE_BATCH__CONCURRENCY=4
    - TRACKBRIDGE_LOGGING__CONSOLE_LEVEL=DEBUG

    The .env file is automatically loaded for development convenience.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="TRACKBRIDGE_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    matching: MatchingConfig = MatchingConfig()
    batch: BatchConfig = BatchConfig()
    logging: LoggingConfig = LoggingConfig()


# Singleton instance for application use
settings = Settings()


# =============================================================================
# FLAT KEY ACCESS
# =============================================================================

_FLAT_KEY_MAP = {
    # Matching thresholds
    "MATCH_ACCEPT_THRESHOLD": lambda: settings.matching.accept_threshold,
    "MATCH_HIGH_CONFIDENCE_THRESHOLD": lambda: settings.matching.high_confidence_threshold,
    # Score weights
    "MATCH_TITLE_WEIGHT": lambda: settings.matching.title_weight,
    "MATCH_ARTIST_WEIGHT": lambda: settings.matching.artist_weight,
    "MATCH_ALBUM_WEIGHT": lambda: settings.matching.album_weight,
    "MATCH_DURATION_WEIGHT": lambda: settings.matching.duration_weight,
    # External calls
    "ISRC_TIMEOUT_SECONDS": lambda: settings.matching.isrc_timeout_seconds,
    "SEARCH_TIMEOUT_SECONDS": lambda: settings.matching.search_timeout_seconds,
    "SEARCH_LIMIT": lambda: settings.matching.search_limit,
    "DEFAULT_STOREFRONT": lambda: settings.matching.default_storefront,
    # Batch processing
    "BATCH_CONCURRENCY": lambda: settings.batch.concurrency,
    "BATCH_PROGRESS_LOG_FREQUENCY": lambda: settings.batch.progress_log_frequency,
    # Logging
    "CONSOLE_LOG_LEVEL": lambda: settings.logging.console_level,
    "FILE_LOG_LEVEL": lambda: settings.logging.file_level,
    "LOG_FILE": lambda: settings.logging.log_file,
}


def get_config(key: str, default: Any = None) -> Any:
    """Get configuration value by flat key with optional default.

    Args:
        key: Configuration key to retrieve
        default: Default value if key not found

    Returns:
        Configuration value or default

    Example:
        >>> threshold = get_config("MATCH_ACCEPT_THRESHOLD", 80)
    """
    if key in _FLAT_KEY_MAP:
        return _FLAT_KEY_MAP[key]()

    return default
