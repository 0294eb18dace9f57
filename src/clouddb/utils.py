"""Path escaping and response key normalization."""

import re
from typing import Any
from urllib.parse import quote

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def escape(value: object) -> str:
    """Percent-escape an identifier for use as a single path segment."""
    return quote(str(value), safe="")


def canonical_key(key: str) -> str:
    """Convert a wire key to its snake_case form.

    Example: rootEnabled -> root_enabled, character_set -> character_set
    """
    return _CAMEL_BOUNDARY.sub("_", key).lower()


def normalize_keys(value: Any) -> Any:
    """Recursively rewrite mapping keys to canonical snake_case.

    Lists keep their order. Non-container values are returned as-is.
    """
    if isinstance(value, dict):
        return {
            canonical_key(k) if isinstance(k, str) else k: normalize_keys(v)
            for k, v in value.items()
        }
    if isinstance(value, list):
        return [normalize_keys(item) for item in value]
    return value
