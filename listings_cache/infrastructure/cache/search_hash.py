"""
Search Parameter Hasher

Turns a search-parameter mapping into a short, order-independent key
fragment for ``listings:search:<hash>``.

Algorithm:
    1. Sort the top-level keys.
    2. Render ``key=<canonical JSON>`` for each, joined with ``&``.
    3. Rolling hash ``h = (h << 5) - h + byte`` over the UTF-8 bytes, mod 2**32.
    4. Absolute value of the signed 32-bit result, in base 36.

Nested mappings are canonicalized with their keys sorted at every level, so
``{"f": {"a": 1, "b": 2}}`` and ``{"f": {"b": 2, "a": 1}}`` share a hash.

Not cryptographically secure. A collision only means two searches share a
cached result until the next listings mutation sweeps the search namespace.
"""

from collections.abc import Mapping
from typing import Any

import orjson

_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"
_CANONICAL_JSON = orjson.OPT_SORT_KEYS | orjson.OPT_NON_STR_KEYS


def canonical_json(value: Any) -> str:
    """Compact JSON with sorted mapping keys at every nesting level."""
    return orjson.dumps(value, option=_CANONICAL_JSON).decode("utf-8")


def canonicalize_params(params: Mapping[str, Any]) -> str:
    return "&".join(f"{key}={canonical_json(params[key])}" for key in sorted(params))


def _rolling_hash(data: bytes) -> int:
    h = 0
    for byte in data:
        h = ((h << 5) - h + byte) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return abs(h)


def _to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


def create_search_hash(params: Mapping[str, Any]) -> str:
    """
    Compute the search hash for a parameter mapping.

    Args:
        params: Search parameters (JSON-representable values, possibly nested)

    Returns:
        Base-36 hash string, never empty. ``{}`` hashes to ``"0"``.
    """
    return _to_base36(_rolling_hash(canonicalize_params(params).encode("utf-8")))
