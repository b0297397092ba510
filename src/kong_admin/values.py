"""Small value helpers shared across the SDK."""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

from kong_admin.exceptions import KongBadRequestError


def dedupe[T](items: Iterable[T]) -> list[T]:
    """Remove duplicates keeping the first occurrence of each item."""
    seen: set[T] = set()
    result: list[T] = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result


def string_list(*items: str | None) -> list[str]:
    """Build a list of strings, skipping None entries."""
    return [item for item in items if item is not None]


def deep_copy_config(config: dict[str, Any] | None) -> dict[str, Any] | None:
    """Deep-copy a free-form plugin or partial configuration.

    The copy goes through a JSON round trip, so the result only holds JSON
    types (dict, list, str, int, float, bool, None).

    Raises:
        KongBadRequestError: If the configuration holds non-JSON values.
    """
    if config is None:
        return None
    try:
        return json.loads(json.dumps(config))
    except (TypeError, ValueError) as e:
        raise KongBadRequestError(f"configuration is not JSON-serializable: {e}") from e


def ensure_identifier(value: str | None, what: str) -> str:
    """Validate an identifier that will be used as a single URL path segment.

    Args:
        value: UUID or natural key supplied by the caller.
        what: Name of the identifier for the error message.

    Returns:
        The identifier, unchanged.

    Raises:
        KongBadRequestError: If the identifier is empty or contains a slash.
    """
    if value is None or not str(value):
        raise KongBadRequestError(f"{what} cannot be empty")
    value = str(value)
    if "/" in value:
        raise KongBadRequestError(f"{what} '{value}' must not contain '/'")
    return value


def require_value(value: str | None, what: str) -> str:
    """Validate a value sent as a query parameter; only emptiness is rejected.

    Raises:
        KongBadRequestError: If the value is empty.
    """
    if value is None or not str(value):
        raise KongBadRequestError(f"{what} cannot be empty")
    return str(value)
