"""Common type aliases for the codebase."""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import JsonValue

# JSON types: Python's standard representation for JSON objects/arrays
type JSONValue = JsonValue
"""Type alias for JSON values."""

type JSONObject = dict[str, JSONValue]
"""Type alias for JSON objects (dictionaries with string keys)."""

type JSONArray = list[JSONValue]
"""Type alias for JSON arrays."""

type RawOptions = Mapping[str, object]
"""Caller-supplied query options, before lenient parsing."""

type DictionaryResult = dict[str, list[JSONObject]]
"""Shape returned by every dictionary operation: ``{"items": [...]}``."""

