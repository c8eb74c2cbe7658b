"""EBI Search URL construction.

EBI Search exposes two endpoints with disjoint query grammars:

- batch entry lookup: ``{base}/entry/{id1,id2,...}?fields=...&format=...``
- free-text search: ``{base}?query=...&fields=...&size=...&start=...&format=...``

Listing "all" genes (an entry lookup without usable IDs) goes through the
search endpoint with a ``domain_source:`` query sorted by ``id``.
"""

from __future__ import annotations

from ensembl_dictionary.services.dictionary.options import QueryOptions
from ensembl_dictionary.services.dictionary.strings import (
    fixed_encode_uri_component,
    get_last_part_of_url,
)

EBI_SEARCH_REST_URL = "https://www.ebi.ac.uk/ebisearch/ws/rest/"
EBI_SEARCH_DOMAIN = "ensembl_gene"
ENSEMBL_FIELDS = "id,name,description,gene_name,gene_synonym,transcript_count,species"

EBI_SEARCH_MAX_PAGE_SIZE = 100
EBI_SEARCH_MIN_START = 0
EBI_SEARCH_MAX_START = 1_000_000
PER_PAGE_DEFAULT = 50

IDS_PLACEHOLDER = "$ids"
QUERY_PLACEHOLDER = "$queryString"


class EbiSearchUrlBuilder:
    """Builds entry-lookup and match-search URLs for one EBI Search domain."""

    def __init__(
        self,
        *,
        entries_url: str,
        matches_url: str,
        domain: str = EBI_SEARCH_DOMAIN,
        fields: str = ENSEMBL_FIELDS,
        response_format: str = "json",
        max_page_size: int = EBI_SEARCH_MAX_PAGE_SIZE,
        min_start: int = EBI_SEARCH_MIN_START,
        max_start: int = EBI_SEARCH_MAX_START,
        per_page_default: int = PER_PAGE_DEFAULT,
    ) -> None:
        self.entries_url = entries_url
        self.matches_url = matches_url
        self.domain = domain
        self.fields = fields
        self.response_format = response_format
        self.max_page_size = max_page_size
        self.min_start = min_start
        self.max_start = max_start
        self.per_page_default = per_page_default

    def page_size(self, options: QueryOptions) -> int:
        """``perPage`` when within the service ceiling, else the default."""
        if options.per_page is not None and options.per_page <= self.max_page_size:
            return options.per_page
        return self.per_page_default

    def start(self, options: QueryOptions, page_size: int) -> int:
        """Zero-based offset for ``page``, clamped below the service's max start."""
        if options.page is None:
            return self.min_start
        offset = (options.page - 1) * page_size
        if offset >= self.max_start:
            return self.max_start - 1
        return offset

    def _pagination(self, options: QueryOptions) -> str:
        size = self.page_size(options)
        return f"&size={size}&start={self.start(options, size)}"

    def _fields(self) -> str:
        return fixed_encode_uri_component(self.fields)

    def entry_lookup_url(self, options: QueryOptions) -> str:
        """URL for ``get_entries``.

        With identifiers, a batch lookup of their last path segments; without,
        a paginated listing of the whole domain.
        """
        if options.filter_ids:
            ids = ",".join(get_last_part_of_url(i) for i in options.filter_ids)
            url = (
                self.entries_url.replace(IDS_PLACEHOLDER, ids)
                + f"?fields={self._fields()}"
            )
        else:
            url = (
                self.entries_url.replace(
                    f"/entry/{IDS_PLACEHOLDER}", f"?query=domain_source:{self.domain}"
                )
                + f"&fields={self._fields()}&sort=id"
                + self._pagination(options)
            )
        return url + f"&format={self.response_format}"

    def match_search_url(self, query: str, options: QueryOptions) -> str:
        """URL for ``get_entry_matches_for_string``."""
        encoded = fixed_encode_uri_component(query)
        return (
            self.matches_url.replace(QUERY_PLACEHOLDER, encoded)
            + f"&fields={self._fields()}"
            + self._pagination(options)
            + f"&format={self.response_format}"
        )
