"""Contract shared by every dictionary data source.

A dictionary source answers three questions, each with ``{"items": [...]}``:
which dictionaries it serves, which entries match a set of IDs, and which
entries match a free-text string. The helpers here are applied identically
whatever the backing service.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from ensembl_dictionary.platform.types import (
    DictionaryResult,
    JSONObject,
    RawOptions,
)
from ensembl_dictionary.services.dictionary.options import QueryOptions


@runtime_checkable
class DictionarySource(Protocol):
    """Anything that can serve dictionary infos, entries and string matches."""

    async def get_dict_infos(
        self, options: RawOptions | None = None
    ) -> DictionaryResult: ...

    async def get_entries(
        self, options: RawOptions | None = None
    ) -> DictionaryResult: ...

    async def get_entry_matches_for_string(
        self, query: str, options: RawOptions | None = None
    ) -> DictionaryResult: ...


def z_prop_prune(items: Sequence[JSONObject], z: object) -> list[JSONObject]:
    """Trim each item's ``z`` block to what the caller asked for.

    - ``None`` or ``True``: keep ``z`` untouched.
    - ``False`` or ``[]``: drop ``z``.
    - a key or a list of keys: keep only those keys, dropping ``z`` if none remain.
    - anything else: treated like ``None``.

    Items are shallow-copied; the input list is never mutated.
    """
    if z is None or z is True or not isinstance(z, (bool, str, list, tuple)):
        return list(items)
    if isinstance(z, str):
        z = [z]

    pruned: list[JSONObject] = []
    for item in items:
        copy = dict(item)
        current = copy.get("z")
        if isinstance(z, bool) or not z:
            copy.pop("z", None)
        elif isinstance(current, dict):
            kept = {k: current[k] for k in z if isinstance(k, str) and k in current}
            if kept:
                copy["z"] = kept
            else:
                copy.pop("z", None)
        pruned.append(copy)
    return pruned


def filter_dict_infos(
    infos: Sequence[JSONObject], options: QueryOptions
) -> list[JSONObject]:
    """Keep only infos whose ``id`` appears in ``filter.id`` (when one is given)."""
    if not options.filter_ids:
        return list(infos)
    wanted = set(options.filter_ids)
    return [info for info in infos if info.get("id") in wanted]


def excludes_dict_id(options: QueryOptions, dict_id: str) -> bool:
    """True when ``filter.dictID`` is given and does not name *dict_id*."""
    wanted = options.filter_dict_ids
    return wanted is not None and dict_id not in wanted
