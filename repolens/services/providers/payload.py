"""Field-access helpers shared by the provider adapters.

Adapters never index raw payloads directly. Required fields go through
``require`` (raising ProviderSchemaError), optional ones through the
``optional_*`` accessors which return None instead of a zero or empty value.
"""

from datetime import UTC, datetime
from typing import Any

from repolens.services.providers.exceptions import ProviderSchemaError


def dig(raw: Any, *path: str) -> Any:
    """Walk nested dicts, returning None as soon as a hop is missing or null."""
    current = raw
    for key in path:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
        if current is None:
            return None
    return current


def require(raw: Any, *path: str, provider: str, entity: str) -> Any:
    """Return a nested value or raise ProviderSchemaError naming the field."""
    value = dig(raw, *path)
    if value is None or value == "":
        raise ProviderSchemaError(provider, entity, ".".join(path), raw)
    return value


def require_int(raw: Any, *path: str, provider: str, entity: str) -> int:
    """Like ``require``, but the value must also convert to an int."""
    value = require(raw, *path, provider=provider, entity=entity)
    if isinstance(value, bool):
        raise ProviderSchemaError(provider, entity, ".".join(path), raw)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ProviderSchemaError(provider, entity, ".".join(path), raw) from None


def optional_int(raw: Any, *path: str) -> int | None:
    value = dig(raw, *path)
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def optional_str(raw: Any, *path: str) -> str | None:
    value = dig(raw, *path)
    if value is None:
        return None
    return str(value)


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO 8601 timestamp into an aware UTC datetime.

    Naive timestamps are taken to be UTC.
    """
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def require_timestamp(raw: Any, *path: str, provider: str, entity: str) -> datetime:
    value = require(raw, *path, provider=provider, entity=entity)
    try:
        return parse_timestamp(str(value))
    except ValueError:
        raise ProviderSchemaError(provider, entity, ".".join(path), raw) from None


def optional_timestamp(raw: Any, *path: str) -> datetime | None:
    value = dig(raw, *path)
    if not value:
        return None
    try:
        return parse_timestamp(str(value))
    except ValueError:
        return None


def first_present(*values: Any, default: Any = None) -> Any:
    """Return the first truthy value, else ``default``."""
    for value in values:
        if value:
            return value
    return default
