"""Hashing utilities for cache key generation."""

import hashlib
import json
from typing import Any
from urllib.parse import quote


def hash_value(value: Any, length: int = 32) -> str:
    """Create a deterministic hash of a value.

    Mappings are encoded with sorted keys at every nesting level, so two
    argument dicts holding the same pairs in a different order hash the same.

    Args:
        value: Any JSON-serializable value.
        length: Number of hex characters of the SHA-256 digest to keep.

    Returns:
        A hexadecimal hash string.
    """
    if value is None:
        return "none"

    normalized = json.dumps(
        value,
        sort_keys=True,
        separators=(",", ":"),
        default=str,
    )
    return hashlib.sha256(normalized.encode()).hexdigest()[:length]


def key_segment(value: Any) -> str:
    """Render a value as a single, colon-free key segment.

    Identity values and viewer ids come from user data, so they are
    percent-encoded to keep them from forging extra key segments.
    """
    return quote(str(value), safe="")
