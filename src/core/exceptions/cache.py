"""
Cache-Related Exceptions

All exceptions related to the in-memory response cache. Codec errors never
leave the cache manager: they are caught there and degrade to "no entry".
"""

from src.core.exceptions.base import ComicAPIError


class CacheError(ComicAPIError):
    """Base exception for cache-related errors."""
    pass


class CacheCodecError(CacheError):
    """Base exception for payload encode/decode failures."""
    pass


class CompressionError(CacheCodecError):
    """
    Raised when a payload cannot be serialized or compressed.

    Common causes:
    - Value is not JSON-serializable (sets, arbitrary objects)
    - Dict keys that are not strings
    """
    pass


class DecompressionError(CacheCodecError):
    """
    Raised when a stored compressed payload cannot be restored.

    Common causes:
    - Truncated or corrupted gzip stream
    - Decompressed bytes are not valid JSON
    """
    pass


class CacheNotInitializedError(CacheError):
    """Raised when the cache is used before the application created it."""
    pass
