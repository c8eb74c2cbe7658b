"""Ensembl gene dictionary over EBI Search."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Self

from pydantic import BaseModel, ConfigDict, Field

from ensembl_dictionary.integrations.ebisearch import EbiSearchClient, Fetcher
from ensembl_dictionary.platform.config import Settings, get_settings
from ensembl_dictionary.platform.logging import get_logger
from ensembl_dictionary.platform.types import (
    DictionaryResult,
    JSONObject,
    JSONValue,
    RawOptions,
)
from ensembl_dictionary.services.dictionary.base import (
    excludes_dict_id,
    filter_dict_infos,
    z_prop_prune,
)
from ensembl_dictionary.services.dictionary.mapping import (
    ENSEMBL_DICT_ID,
    map_to_entities,
    map_to_matches,
    parse_search_response,
)
from ensembl_dictionary.services.dictionary.options import QueryOptions
from ensembl_dictionary.services.dictionary.postprocess import (
    paginate_entries,
    sort_entries,
)
from ensembl_dictionary.services.dictionary.urls import (
    EBI_SEARCH_DOMAIN,
    EBI_SEARCH_REST_URL,
    IDS_PLACEHOLDER,
    QUERY_PLACEHOLDER,
    EbiSearchUrlBuilder,
)

logger = get_logger(__name__)


class EnsemblDictionaryConfig(BaseModel):
    """Construction options; unknown keys are ignored."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    base_url: str | None = Field(default=None, alias="baseURL")
    response_format: str = Field(default="json", alias="format")
    log: bool = False
    url_get_entries: str | None = Field(default=None, alias="urlGetEntries")
    url_get_matches: str | None = Field(default=None, alias="urlGetMatches")
    optimap: bool = False
    timeout_seconds: float = Field(default=15.0, gt=0, alias="timeout")

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> Self:
        settings = settings or get_settings()
        return cls(
            base_url=settings.ebi_search_base_url,
            response_format=settings.ebi_search_format,
            log=settings.dictionary_log_urls,
            optimap=settings.dictionary_optimap,
            timeout_seconds=settings.ebi_search_timeout_seconds,
        )


class EnsemblDictionary:
    """Dictionary source for Ensembl genes.

    Implements :class:`~ensembl_dictionary.services.dictionary.base.DictionarySource`.
    The *fetch* transport is chosen once, here; when omitted an
    :class:`EbiSearchClient` is created and owned by this instance.
    """

    dict_id = ENSEMBL_DICT_ID
    dict_infos: tuple[JSONObject, ...] = (
        {"id": ENSEMBL_DICT_ID, "abbrev": "Ensembl", "name": "Ensembl"},
    )

    def __init__(
        self,
        config: EnsemblDictionaryConfig | Mapping[str, object] | None = None,
        *,
        fetch: Fetcher | None = None,
    ) -> None:
        if not isinstance(config, EnsemblDictionaryConfig):
            config = EnsemblDictionaryConfig.model_validate(config or {})
        self.config = config

        base_url = config.base_url or EBI_SEARCH_REST_URL + EBI_SEARCH_DOMAIN
        self.urls = EbiSearchUrlBuilder(
            entries_url=(
                config.url_get_entries or f"{base_url}/entry/{IDS_PLACEHOLDER}"
            ),
            matches_url=(
                config.url_get_matches or f"{base_url}?query={QUERY_PLACEHOLDER}"
            ),
            response_format=config.response_format,
        )

        self._owned_client: EbiSearchClient | None = None
        if fetch is None:
            self._owned_client = EbiSearchClient(timeout_seconds=config.timeout_seconds)
            fetch = self._owned_client
        self._fetch = fetch

    async def close(self) -> None:
        """Release the HTTP client if this instance created it."""
        if self._owned_client is not None:
            await self._owned_client.close()

    async def _request(self, url: str) -> JSONValue:
        if self.config.log:
            logger.info("EBI Search request", url=url)
        return await self._fetch(url)

    async def get_dict_infos(
        self, options: RawOptions | None = None
    ) -> DictionaryResult:
        return {
            "items": filter_dict_infos(
                [dict(info) for info in self.dict_infos], QueryOptions.from_raw(options)
            )
        }

    async def get_entries(self, options: RawOptions | None = None) -> DictionaryResult:
        """Look up entries by ``filter.id``, or list all genes page by page."""
        opts = QueryOptions.from_raw(options)
        if excludes_dict_id(opts, self.dict_id):
            return {"items": []}

        payload = await self._request(self.urls.entry_lookup_url(opts))
        entries = map_to_entities(
            parse_search_response(payload),
            dict_id=self.dict_id,
            optimap=self.config.optimap,
        )

        # Batch lookups come back in service order and unpaginated.
        if opts.has_id_filter:
            entries = paginate_entries(
                sort_entries(entries, opts),
                opts,
                per_page_default=self.urls.per_page_default,
            )

        return {"items": z_prop_prune(entries, opts.z)}

    async def get_entry_matches_for_string(
        self, query: str, options: RawOptions | None = None
    ) -> DictionaryResult:
        """Free-text search; a blank *query* returns no items without a request."""
        if not query or not query.strip():
            return {"items": []}
        opts = QueryOptions.from_raw(options)
        if excludes_dict_id(opts, self.dict_id):
            return {"items": []}

        payload = await self._request(self.urls.match_search_url(query, opts))
        matches = map_to_matches(
            parse_search_response(payload),
            query,
            dict_id=self.dict_id,
            optimap=self.config.optimap,
        )
        return {"items": z_prop_prune(matches, opts.z)}
