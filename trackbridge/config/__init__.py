"""Configuration module for Trackbridge.

Type-safe settings via Pydantic Settings plus Loguru logging helpers.

Usage:
------
```python
from trackbridge.config import settings
threshold = settings.matching.accept_threshold

from trackbridge.config import get_config
threshold = get_config("MATCH_ACCEPT_THRESHOLD", 80)

from trackbridge.config import get_logger
logger = get_logger(__name__)
```
"""

from .logging import get_logger, setup_loguru_logger
from .settings import (
    BatchConfig,
    LoggingConfig,
    MatchingConfig,
    Settings,
    get_config,
    settings,
)

__all__ = [
    "BatchConfig",
    "LoggingConfig",
    "MatchingConfig",
    "Settings",
    "get_config",
    "get_logger",
    "settings",
    "setup_loguru_logger",
]
