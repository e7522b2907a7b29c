"""Shared test fixtures for the stationcast test suite."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest
import respx

from stationcast.domain.entities.station import StationRecord

CATALOG_URL = "https://api.example.com/v1/stations?with=streams,images"
BASE_PATH = "https://api.example.com/v1/"

# ---------------------------------------------------------------------------
# Catalog documents
# ---------------------------------------------------------------------------


def make_entry(
    station_id: int,
    name: str,
    *,
    stream: str | None = None,
    logo: str | None = None,
) -> dict[str, Any]:
    """Build one catalog entry in the remote JSON shape."""
    return {
        "id": station_id,
        "name": name,
        "streams": [
            {"url": stream or f"https://streams.example.com/{station_id}.m3u8"},
            {"url": f"https://backup.example.com/{station_id}.mp3"},
        ],
        "images": {
            "logo": {
                "ori": logo or f"https://img.example.com/{station_id}.png",
                "thumb": f"https://img.example.com/{station_id}_t.png",
            },
        },
    }


@pytest.fixture()
def catalog_document() -> dict[str, Any]:
    """Three valid stations, one with relative URLs."""
    return {
        "data": [
            make_entry(1, "CKOI"),
            make_entry(2, "Rythme FM", stream="/streams/rythme.m3u8", logo="/logos/rythme.png"),
            make_entry(3, "Énergie"),
        ]
    }


@pytest.fixture()
def station_records() -> list[StationRecord]:
    return [
        StationRecord(
            station_id="1",
            title="CKOI",
            stream_url="https://streams.example.com/1.m3u8",
            artwork_url="https://img.example.com/1.png",
        ),
        StationRecord(
            station_id="2",
            title="Rythme FM",
            stream_url="https://api.example.com/v1/streams/rythme.m3u8",
            artwork_url="https://api.example.com/v1/logos/rythme.png",
        ),
    ]


# ---------------------------------------------------------------------------
# Fake ports
# ---------------------------------------------------------------------------


class FakeFetcher:
    """CatalogFetcherPort returning queued outcomes, optionally gated.

    Each call pops the next outcome: a dict is returned, an exception is
    raised. The last outcome repeats once the queue is exhausted. When
    ``gate`` is set, every call waits on it first, which lets tests pile
    up concurrent callers while a fetch is in flight.
    """

    def __init__(self, *outcomes: Any, gate: asyncio.Event | None = None) -> None:
        self._outcomes = list(outcomes)
        self.gate = gate
        self.calls: list[str] = []

    async def fetch(self, url: str) -> dict[str, Any]:
        self.calls.append(url)
        if self.gate is not None:
            await self.gate.wait()
        outcome = self._outcomes.pop(0) if len(self._outcomes) > 1 else self._outcomes[0]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


# ---------------------------------------------------------------------------
# Fixture accessors
# ---------------------------------------------------------------------------


@pytest.fixture()
def catalog_url() -> str:
    return CATALOG_URL


@pytest.fixture()
def entry_factory():
    return make_entry


@pytest.fixture()
def fake_fetcher_cls() -> type[FakeFetcher]:
    return FakeFetcher


@pytest.fixture()
def respx_mock() -> respx.MockRouter:
    """Explicit respx mock router for request interception."""
    with respx.mock(assert_all_called=False) as router:
        yield router
