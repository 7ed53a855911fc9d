"""
Payload Codec

Optional gzip compression of cached payloads. Payloads are serialized with
orjson, so only JSON-shaped values (dicts with string keys, lists, strings,
numbers, booleans, None) survive a round trip; ensure_round_trip() rejects
the rest before they are compressed.

Failures are raised as CompressionError / DecompressionError; the cache
manager catches both and degrades instead of propagating.
"""

import gzip
import zlib
from typing import Any

import orjson

from src.core.exceptions.cache import CompressionError, DecompressionError


class PayloadCodec:
    """
    Serialize-and-compress for large payloads.

    Usage:
        codec = PayloadCodec(compress_level=6)
        size = codec.serialized_size(value)
        blob = codec.encode(value)
        assert codec.decode(blob) == value
    """

    def __init__(self, compress_level: int = 6):
        self._compress_level = compress_level

    @staticmethod
    def serialize(value: Any) -> bytes:
        """
        Serialize a payload to JSON bytes.

        Raises:
            CompressionError: value is not JSON-serializable
        """
        try:
            return orjson.dumps(value)
        except (orjson.JSONEncodeError, TypeError) as e:
            raise CompressionError.from_exception(
                e, "Payload is not serializable", value_type=type(value).__name__
            ) from e

    @staticmethod
    def ensure_round_trip(value: Any, raw: bytes) -> None:
        """
        Check that ``raw`` decodes back to a value equal to ``value``.

        orjson accepts tuples, datetimes, UUIDs, enums and dataclasses but
        reads them back as lists, strings and dicts.

        Raises:
            CompressionError: the serialized form is lossy
        """
        if orjson.loads(raw) != value:
            raise CompressionError(
                "Payload does not survive a JSON round trip",
                details={"value_type": type(value).__name__},
            )

    def serialized_size(self, value: Any) -> int:
        """Length in bytes of the serialized payload."""
        return len(self.serialize(value))

    def compress(self, raw: bytes) -> bytes:
        """
        Gzip already-serialized payload bytes.

        Raises:
            CompressionError: compression failed
        """
        try:
            return gzip.compress(raw, compresslevel=self._compress_level)
        except (OSError, zlib.error, ValueError) as e:
            raise CompressionError.from_exception(e, "Payload compression failed", size=len(raw)) from e

    def encode(self, value: Any) -> bytes:
        """
        Serialize and gzip a payload.

        Raises:
            CompressionError: serialization or compression failed
        """
        return self.compress(self.serialize(value))

    @staticmethod
    def decode(blob: bytes) -> Any:
        """
        Restore a payload produced by :meth:`encode`.

        Raises:
            DecompressionError: blob is corrupt or not valid JSON
        """
        try:
            raw = gzip.decompress(blob)
        except (OSError, EOFError, zlib.error, TypeError) as e:
            raise DecompressionError.from_exception(e, "Payload decompression failed") from e

        try:
            return orjson.loads(raw)
        except orjson.JSONDecodeError as e:
            raise DecompressionError.from_exception(
                e, "Decompressed payload is not valid JSON", size=len(raw)
            ) from e
