"""Small string helpers shared by the URL builder and the response mapper."""

from __future__ import annotations

from collections.abc import Iterable
from urllib.parse import quote


def remove_duplicates(values: Iterable[str]) -> list[str]:
    """Drop repeated strings, keeping the first occurrence of each."""
    return list(dict.fromkeys(values))


def fixed_encode_uri_component(value: str) -> str:
    """Percent-encode *value* for use inside a single URL component.

    Only RFC 3986 unreserved characters (letters, digits, ``-_.~``) are left
    as-is, so ``,``, ``:``, ``!``, ``'``, ``(``, ``)`` and ``*`` are all escaped.
    """
    return quote(value, safe="")


def get_last_part_of_url(url: str) -> str:
    """Return the trailing path segment, e.g. ``.../id/ENSG01`` -> ``ENSG01``."""
    return url.rsplit("/", 1)[-1]
