"""
Configuration Module

This module provides centralized, type-safe configuration management
for the comic aggregator cache service.

Components:
-----------
- **settings.py**: Pydantic-based configuration with environment variable loading
- **constants.py**: System-wide constants, enums, and magic numbers

Usage:
------
```python
from src.core.config import get_settings
from src.core.config.constants import CacheLevel, Stage

settings = get_settings()
max_size = settings.cache.CACHE_MAX_SIZE
```

Environment Variables:
---------------------
Configuration is loaded from environment variables or `.env` file:

```bash
# Cache
ENABLE_CACHING=true
CACHE_DEFAULT_TTL=300
CACHE_MAX_SIZE=1000
CACHE_CLEANUP_INTERVAL=60
CACHE_COMPRESSION_ENABLED=true
CACHE_COMPRESSION_THRESHOLD=1024

# Logging
LOG_LEVEL=INFO
LOG_FORMAT=json

# Application
ENVIRONMENT=production
API_BASE_PATH=/api/v1
```

Testing:
-------
```python
import os
from src.core.config import reload_settings

os.environ["CACHE_MAX_SIZE"] = "10"
settings = reload_settings()
assert settings.cache.CACHE_MAX_SIZE == 10
```
"""

from src.core.config.constants import (
    DEFAULT_CLEANUP_INTERVAL,
    DEFAULT_COMPRESSION_THRESHOLD,
    DEFAULT_MAX_SIZE,
    DEFAULT_TTL_SECONDS,
    HEADER_CACHE_STATUS,
    HEADER_REQUEST_ID,
    HEADER_RESPONSE_TIME,
    L1_ADMISSION_THRESHOLD,
    L1_PRESSURE_THRESHOLD,
    SLOW_REQUEST_THRESHOLD,
    VOLATILE_QUERY_PARAMS,
    CacheLevel,
    CacheStatus,
    Stage,
)
from src.core.config.settings import Settings, get_settings, reload_settings

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    "reload_settings",
    # Enums
    "Stage",
    "CacheLevel",
    "CacheStatus",
    # Cache defaults
    "DEFAULT_TTL_SECONDS",
    "DEFAULT_MAX_SIZE",
    "DEFAULT_CLEANUP_INTERVAL",
    "DEFAULT_COMPRESSION_THRESHOLD",
    "L1_ADMISSION_THRESHOLD",
    "L1_PRESSURE_THRESHOLD",
    "VOLATILE_QUERY_PARAMS",
    # HTTP headers
    "HEADER_CACHE_STATUS",
    "HEADER_REQUEST_ID",
    "HEADER_RESPONSE_TIME",
    # Thresholds
    "SLOW_REQUEST_THRESHOLD",
]
