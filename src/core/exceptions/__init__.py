"""
Exception Module

Structured exception hierarchy for the comic aggregator cache service.
Exceptions are organized by theme.

Module Structure:
-----------------
- **base.py**: ComicAPIError base class + ConfigurationError
- **cache.py**: Cache and payload codec exceptions
- **validation.py**: Admin request validation exceptions

Usage:
------
```python
from src.core.exceptions import CacheError, DecompressionError
from src.core.exceptions.validation import InvalidInputError
```
"""

# Base exception
from src.core.exceptions.base import ComicAPIError, ConfigurationError

# Cache exceptions
from src.core.exceptions.cache import (
    CacheCodecError,
    CacheError,
    CacheNotInitializedError,
    CompressionError,
    DecompressionError,
)

# Validation exceptions
from src.core.exceptions.validation import InvalidInputError, ValidationError

__all__ = [
    # Base
    "ComicAPIError",
    "ConfigurationError",
    # Cache
    "CacheError",
    "CacheCodecError",
    "CompressionError",
    "DecompressionError",
    "CacheNotInitializedError",
    # Validation
    "ValidationError",
    "InvalidInputError",
]
