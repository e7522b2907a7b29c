"""Catalog fetcher: async httpx implementation."""

from __future__ import annotations

import json
from typing import Any

import httpx
import structlog

from stationcast.domain.exceptions import FetchFailure, ParseFailure

log = structlog.get_logger(__name__)


class HttpxCatalogFetcher:
    """Downloads the catalog document with a shared ``httpx.AsyncClient``.

    Implements ``CatalogFetcherPort`` from domain.ports.catalog_source.
    One GET per call and no retries; the caller owns the retry policy.

    Args:
        http_client: Shared client (timeouts, headers, redirects).
        encoding: Codec used to decode the body. ``None`` uses the
            charset declared by the server (httpx falls back to
            charset detection when none is declared).
    """

    def __init__(
        self,
        *,
        http_client: httpx.AsyncClient,
        encoding: str | None = "iso-8859-1",
    ) -> None:
        self._http = http_client
        self._encoding = encoding

    def _decode(self, resp: httpx.Response) -> str:
        if self._encoding is None:
            return resp.text
        try:
            return resp.content.decode(self._encoding)
        except (LookupError, UnicodeDecodeError) as exc:
            raise ParseFailure(
                f"cannot decode catalog body as {self._encoding}: {exc}"
            ) from exc

    async def fetch(self, url: str) -> dict[str, Any]:
        """GET ``url`` and return the parsed JSON object."""
        try:
            resp = await self._http.get(url)
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise FetchFailure(
                f"catalog request returned HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise FetchFailure(f"catalog request failed: {exc!r}") from exc

        body = self._decode(resp)
        try:
            document = json.loads(body)
        except json.JSONDecodeError as exc:
            raise ParseFailure(f"catalog body is not valid JSON: {exc}") from exc

        if not isinstance(document, dict):
            raise ParseFailure(
                f"catalog root must be a JSON object, got {type(document).__name__}"
            )

        log.debug(
            "catalog_fetched",
            url=url,
            status=resp.status_code,
            size_bytes=len(resp.content),
        )
        return document
