"""Local sort and page trimming for identifier-filtered entry lists.

EBI Search already sorts and paginates the "all genes" listing, so these only
apply to batch lookups by ID, where the service returns records in its own order.
"""

from __future__ import annotations

from collections.abc import Sequence

from ensembl_dictionary.platform.types import JSONObject
from ensembl_dictionary.services.dictionary.options import QueryOptions
from ensembl_dictionary.services.dictionary.urls import PER_PAGE_DEFAULT


def _id_key(entry: JSONObject) -> str:
    return str(entry.get("id", "")).lower()


def _main_term_key(entry: JSONObject) -> str:
    terms = entry.get("terms")
    if isinstance(terms, list) and terms and isinstance(terms[0], dict):
        return str(terms[0].get("str", "")).lower()
    return ""


def sort_entries(
    entries: Sequence[JSONObject], options: QueryOptions
) -> list[JSONObject]:
    """Return *entries* in a new, case-insensitively sorted list.

    ``sort="str"`` orders by canonical term, then id; anything else
    (including no sort) orders by id.
    """
    if options.sort == "str":
        return sorted(entries, key=lambda e: (_main_term_key(e), _id_key(e)))
    return sorted(entries, key=_id_key)


def paginate_entries(
    entries: Sequence[JSONObject],
    options: QueryOptions,
    *,
    per_page_default: int = PER_PAGE_DEFAULT,
) -> list[JSONObject]:
    """Slice out page ``page`` of ``perPage`` items; past the end gives ``[]``."""
    page = options.page or 1
    per_page = options.per_page or per_page_default
    return list(entries[(page - 1) * per_page : min(page * per_page, len(entries))])
