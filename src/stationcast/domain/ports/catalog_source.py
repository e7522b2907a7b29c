"""Port for retrieving the raw catalog document."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CatalogFetcherPort(Protocol):
    """Async interface for downloading and parsing the catalog document."""

    async def fetch(self, url: str) -> dict[str, Any]:
        """Fetch ``url`` and return the parsed JSON object.

        Raises:
            FetchFailure: network error, timeout or non-2xx response.
            ParseFailure: body is not a JSON object.
        """
        ...
