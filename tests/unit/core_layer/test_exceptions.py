"""
Unit Tests for Core Exceptions

Tests the exception hierarchy and its structured context helpers.
"""

import pytest

from src.core.exceptions import (
    CacheCodecError,
    CacheError,
    CacheNotInitializedError,
    ComicAPIError,
    CompressionError,
    ConfigurationError,
    DecompressionError,
    InvalidInputError,
    ValidationError,
)


@pytest.mark.unit
class TestComicAPIError:
    """Test the base exception class."""

    def test_base_error_creation(self):
        """Test that ComicAPIError can be created."""
        error = ComicAPIError("Test message")
        assert str(error) == "Test message"

    def test_base_error_default_values(self):
        error = ComicAPIError("Test")
        assert error.details == {}
        assert error.request_id is None

    def test_details_are_copied(self):
        details = {"cache_key": "/api/v1/comics"}
        error = ComicAPIError("Test", details=details)

        error.with_context(extra=1)

        assert details == {"cache_key": "/api/v1/comics"}

    def test_to_dict(self):
        error = DecompressionError("Bad payload", request_id="req-1", details={"size": 12})

        assert error.to_dict() == {
            "error_type": "DecompressionError",
            "message": "Bad payload",
            "request_id": "req-1",
            "details": {"size": 12},
        }

    def test_with_context_chains(self):
        error = CacheError("Failed").with_context(cache_key="k", tier="l1")

        assert isinstance(error, CacheError)
        assert error.details == {"cache_key": "k", "tier": "l1"}

    def test_from_exception_wraps_original(self):
        original = ValueError("bad gzip header")

        error = DecompressionError.from_exception(original, size=3)

        assert isinstance(error, DecompressionError)
        assert error.message == "bad gzip header"
        assert error.details == {
            "original_error": "ValueError",
            "original_message": "bad gzip header",
            "size": 3,
        }

    def test_from_exception_custom_message(self):
        error = CompressionError.from_exception(TypeError("x"), "Payload is not serializable")

        assert error.message == "Payload is not serializable"

    def test_repr_includes_context(self):
        error = CacheError("Failed", request_id="req-9", details={"a": 1})

        assert repr(error) == "CacheError(message='Failed', request_id='req-9', details={'a': 1})"


@pytest.mark.unit
class TestExceptionHierarchy:
    """Test that exceptions can be caught at the right level."""

    @pytest.mark.parametrize(
        "exc_type, parent",
        [
            (CacheError, ComicAPIError),
            (CacheCodecError, CacheError),
            (CompressionError, CacheCodecError),
            (DecompressionError, CacheCodecError),
            (CacheNotInitializedError, CacheError),
            (ConfigurationError, ComicAPIError),
            (ValidationError, ComicAPIError),
            (InvalidInputError, ValidationError),
        ],
    )
    def test_inheritance(self, exc_type, parent):
        assert issubclass(exc_type, parent)

    def test_codec_errors_are_not_validation_errors(self):
        assert not issubclass(DecompressionError, ValidationError)
