"""Safe accessors for untyped option bags.

Query options arrive as loosely-typed mappings; these helpers narrow values
without ever raising, so malformed fields simply read as "not provided".
"""

from __future__ import annotations

from collections.abc import Mapping


def ensure_mapping(obj: object) -> Mapping[str, object]:
    """Narrow a value to a mapping, returning ``{}`` if it is not one.

    :param obj: Raw value.
    """
    return obj if isinstance(obj, Mapping) else {}


def safe_str_list(obj: object, key: str) -> list[str] | None:
    """Extract a list of strings from a mapping.

    Non-string members are dropped. Returns ``None`` when the key is missing
    or its value is not a list/tuple, so callers can tell "absent" from "empty".

    :param obj: Raw value (expected to be a mapping).
    :param key: Key to look up.
    """
    value = ensure_mapping(obj).get(key)
    if not isinstance(value, (list, tuple)):
        return None
    return [item for item in value if isinstance(item, str)]


def safe_positive_int(obj: object, key: str) -> int | None:
    """Extract an integer ``>= 1`` from a mapping.

    Booleans and floats are rejected even though Python treats ``True`` as ``1``.

    :param obj: Raw value (expected to be a mapping).
    :param key: Key to look up.
    """
    value = ensure_mapping(obj).get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if value >= 1 else None


def safe_str(obj: object, key: str) -> str | None:
    """Extract a string value from a mapping.

    :param obj: Raw value (expected to be a mapping).
    :param key: Key to look up.
    """
    value = ensure_mapping(obj).get(key)
    return value if isinstance(value, str) else None
