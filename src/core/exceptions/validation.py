"""
Validation Exceptions

All exceptions related to request validation on the admin surface.
"""

from src.core.exceptions.base import ComicAPIError


class ValidationError(ComicAPIError):
    """
    Raised when request validation fails.

    This is the base class for all validation-related errors.
    """
    pass


class InvalidInputError(ValidationError):
    """
    Raised when input validation fails.

    Common causes:
    - Empty tag list for tag invalidation
    - Warm item without a key
    - Negative TTL
    """
    pass
