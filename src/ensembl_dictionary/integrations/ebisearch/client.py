"""HTTP client for the EBI Search REST API."""

from __future__ import annotations

from typing import Protocol, cast

import httpx

from ensembl_dictionary.platform.errors import ResponseParseError, TransportError
from ensembl_dictionary.platform.logging import get_logger
from ensembl_dictionary.platform.types import JSONValue

logger = get_logger(__name__)

USER_AGENT = "ensembl-dictionary/0.1 (+https://www.ensembl.org)"


class Fetcher(Protocol):
    """Fetch a fully built URL and return its decoded JSON body."""

    async def __call__(self, url: str) -> JSONValue: ...


class EbiSearchClient:
    """GET-only EBI Search client.

    One instance is created at startup and shared; it keeps a pooled
    ``httpx.AsyncClient`` until :meth:`close` is awaited. No retries: a failed
    request surfaces as :class:`TransportError` straight away.
    """

    def __init__(
        self,
        *,
        timeout_seconds: float = 15.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._timeout = timeout_seconds
        self._client = client

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                follow_redirects=True,
                headers={"Accept": "application/json", "User-Agent": USER_AGENT},
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __call__(self, url: str) -> JSONValue:
        client = await self._get_client()
        try:
            response = await client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error(
                "EBI Search HTTP error",
                url=url,
                status_code=status,
                response_text=e.response.text[:500],
            )
            raise TransportError(
                f"GET {url} -> HTTP {status}: {e.response.text[:200]}",
                upstream_status=status,
            ) from e
        except httpx.RequestError as e:
            logger.error("EBI Search request error", url=url, error=str(e))
            raise TransportError(f"Request failed: {e}") from e

        try:
            return cast(JSONValue, response.json())
        except ValueError as e:
            logger.error(
                "EBI Search returned non-JSON body",
                url=url,
                response_text=response.text[:500],
            )
            raise ResponseParseError(f"GET {url} returned a non-JSON body") from e
