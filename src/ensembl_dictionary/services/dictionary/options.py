"""Lenient parsing of dictionary query options.

Callers hand in a loosely-typed mapping such as::

    {"filter": {"id": [...], "dictID": [...]}, "page": 2, "perPage": 20,
     "sort": "str", "z": ["species"]}

Anything absent or malformed is read as "not provided"; parsing never raises.
"""

from __future__ import annotations

from dataclasses import dataclass

from ensembl_dictionary.platform.json_helpers import (
    ensure_mapping,
    safe_positive_int,
    safe_str,
    safe_str_list,
)
from ensembl_dictionary.platform.types import RawOptions

SORT_KEYS: frozenset[str] = frozenset({"id", "dictID", "str"})


@dataclass(frozen=True, slots=True)
class QueryOptions:
    """Typed view over a raw options mapping."""

    filter_ids: tuple[str, ...] = ()
    filter_dict_ids: tuple[str, ...] | None = None
    page: int | None = None
    per_page: int | None = None
    sort: str | None = None
    z: object = None

    @classmethod
    def from_raw(cls, raw: RawOptions | None) -> QueryOptions:
        options = ensure_mapping(raw)
        filters = ensure_mapping(options.get("filter"))

        ids = safe_str_list(filters, "id") or []
        dict_ids = safe_str_list(filters, "dictID")
        sort = safe_str(options, "sort")

        return cls(
            filter_ids=tuple(i for i in ids if i.strip()),
            filter_dict_ids=tuple(dict_ids) if dict_ids else None,
            page=safe_positive_int(options, "page"),
            per_page=safe_positive_int(options, "perPage"),
            sort=sort if sort in SORT_KEYS else None,
            z=options.get("z"),
        )

    @property
    def has_id_filter(self) -> bool:
        """True when at least one non-blank identifier was requested."""
        return bool(self.filter_ids)
