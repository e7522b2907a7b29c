"""Port used by browsing collaborators to read the station catalog."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from stationcast.domain.entities.station import CatalogIndex, StationRecord


@runtime_checkable
class CatalogReaderPort(Protocol):
    """Readiness and query operations exposed to collaborators."""

    def is_ready(self) -> bool:
        """True only once the catalog has been loaded. Never blocks."""
        ...

    def current_index(self) -> CatalogIndex:
        """Published index, or an empty index when not ready. Never blocks."""
        ...

    def get_station(self, station_id: str) -> StationRecord | None:
        """Lookup a single station in the current index."""
        ...

    async def ensure_ready(self) -> bool:
        """Load the catalog if needed; True when it is available."""
        ...
