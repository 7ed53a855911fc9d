"""
Unit Tests for PayloadCodec
"""

import gzip
from datetime import datetime
from uuid import UUID

import pytest

from src.core.exceptions import CompressionError, DecompressionError
from src.infrastructure.cache.codec import PayloadCodec


@pytest.mark.unit
class TestPayloadCodec:
    """Test gzip + orjson payload encoding."""

    @pytest.fixture
    def codec(self):
        return PayloadCodec()

    def test_encode_decode_restores_payload(self, codec):
        payload = {"title": "Omniscient Reader", "chapters": list(range(50)), "ongoing": True}

        assert codec.decode(codec.encode(payload)) == payload

    def test_encoded_payload_is_gzip(self, codec):
        blob = codec.encode({"a": 1})

        assert blob[:2] == b"\x1f\x8b"

    def test_serialized_size(self, codec):
        assert codec.serialized_size({"a": 1}) == 7

    def test_unserializable_value_raises_compression_error(self, codec):
        with pytest.raises(CompressionError) as exc_info:
            codec.encode({"ids": {1, 2}})

        assert exc_info.value.details["value_type"] == "dict"
        assert "original_error" in exc_info.value.details

    def test_round_trip_check_accepts_json_shaped_values(self, codec):
        payload = {"items": [1, 2.5, "x", None, True]}

        codec.ensure_round_trip(payload, codec.serialize(payload))

    @pytest.mark.parametrize(
        "payload",
        [(1, 2, 3), {"ts": datetime(2024, 1, 1)}, {"id": UUID(int=7)}],
    )
    def test_round_trip_check_rejects_lossy_values(self, codec, payload):
        with pytest.raises(CompressionError):
            codec.ensure_round_trip(payload, codec.serialize(payload))

    def test_corrupt_blob_raises_decompression_error(self, codec):
        with pytest.raises(DecompressionError):
            codec.decode(b"definitely not gzip")

    def test_gzip_of_non_json_raises_decompression_error(self, codec):
        with pytest.raises(DecompressionError) as exc_info:
            codec.decode(gzip.compress(b"<html>"))

        assert exc_info.value.details["size"] == 6

    def test_truncated_blob_raises_decompression_error(self, codec):
        blob = codec.encode({"items": list(range(100))})

        with pytest.raises(DecompressionError):
            codec.decode(blob[: len(blob) // 2])
