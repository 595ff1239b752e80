"""
Query string encoding for Directus REST endpoints.

Directus list endpoints accept a fixed set of global query parameters. Lists
are sent comma-joined (fields=id,title) and structured values are sent as
JSON (filter={"status":{"_eq":"published"}}). This module turns the parameter
bag that tools receive into that wire format.

Example:

    >>> build_query_string({"fields": ["id", "title"], "limit": 10})
    '?fields=id%2Ctitle&limit=10'
"""

import json
from collections.abc import Mapping
from typing import Any

import httpx

# Each key is emitted only when present, in this order. The encoder for a key
# decides how its value becomes a single string.
_LIST_KEYS = ("fields", "sort", "groupBy")
_JSON_KEYS = ("filter", "aggregate", "deep")
_NUMBER_KEYS = ("limit", "offset", "page")

QUERY_KEYS: tuple[str, ...] = (
    "fields",
    "filter",
    "search",
    "sort",
    "limit",
    "offset",
    "page",
    "aggregate",
    "groupBy",
    "deep",
    "meta",
    "export",
)


def _join_list(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ",".join(str(item) for item in value)
    return str(value)


def _to_json(value: Any) -> str:
    # Compact separators match what browsers and the Directus SDK send.
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def _encode_value(key: str, value: Any) -> str | None:
    """Return the string form of one parameter, or None if it is absent."""
    if key in _NUMBER_KEYS:
        return None if value is None else str(value)
    # Empty lists and objects are sent; only missing and blank values are not.
    if value is None or value == "":
        return None
    if key in _LIST_KEYS:
        return _join_list(value)
    if key in _JSON_KEYS:
        return _to_json(value)
    return str(value)


def build_query_string(params: Mapping[str, Any] | None) -> str:
    """
    Encode a Directus query parameter bag as a URL query string.

    Args:
        params: Mapping using the Directus parameter names (fields, filter,
                search, sort, limit, offset, page, aggregate, groupBy, deep,
                meta, export). Unknown keys are ignored.

    Returns:
        "" when nothing is present, otherwise "?key=value&..." with each
        value percent-encoded.
    """
    if not params:
        return ""

    pairs: list[tuple[str, str]] = []
    for key in QUERY_KEYS:
        encoded = _encode_value(key, params.get(key))
        if encoded is not None:
            pairs.append((key, encoded))

    if not pairs:
        return ""
    return f"?{httpx.QueryParams(pairs)}"
