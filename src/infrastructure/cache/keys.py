"""
Cache Key Derivation

Turns a resource path plus query parameters into a canonical cache key.

    derive_key("/api/v1/comics", {"page": 2, "genre": "action", "_t": 1699})
    -> "/api/v1/comics?genre=action&page=2"

Two parameter sets that differ only in ordering or in volatile parameters
(cache busters such as ``_t``) produce the same key.
"""

from collections.abc import Mapping
from typing import Any

from src.core.config.constants import VOLATILE_QUERY_PARAMS

_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def _render_value(value: Any) -> str:
    # Query strings carry lowercase booleans
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _render_pair(name: str, value: Any) -> str:
    # Repeated parameters keep their order: genre=a&genre=b
    if isinstance(value, (list, tuple)):
        return "&".join(f"{name}={_render_value(item)}" for item in value)
    return f"{name}={_render_value(value)}"


def derive_key(path: str, params: Mapping[str, Any] | None = None) -> str:
    """
    Build the canonical cache key for a request.

    STAGE-1.0: Key derivation

    Args:
        path: Resource path (no query string)
        params: Query parameters; ``None`` values and volatile keys are dropped.
            A list or tuple value is a repeated parameter and renders once
            per item, in order

    Returns:
        ``path`` alone, or ``path?k1=v1&k2=v2`` with keys sorted
    """
    if not params:
        return path

    kept = {
        name: value
        for name, value in dict(params).items()
        if name not in VOLATILE_QUERY_PARAMS and value is not None
    }
    query = "&".join(filter(None, (_render_pair(name, kept[name]) for name in sorted(kept))))
    return f"{path}?{query}" if query else path


def digest_key(key: str) -> str:
    """
    Short base-36 digest of a key, for spreading keys over buckets.

    Folds characters into a signed 32-bit integer (h = h * 31 + ord(c)).
    Not used by lookups.
    """
    h = 0
    for char in key:
        h = (h * 31 + ord(char)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    h = abs(h)

    if h == 0:
        return "0"
    digits = []
    while h:
        h, rem = divmod(h, 36)
        digits.append(_BASE36_DIGITS[rem])
    return "".join(reversed(digits))
