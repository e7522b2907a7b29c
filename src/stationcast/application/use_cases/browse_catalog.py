"""Browse use case: station listing and playback resolution."""

from __future__ import annotations

import structlog

from stationcast.domain.entities.station import (
    MediaItem,
    PlayableStation,
    StationRecord,
)
from stationcast.domain.ports.catalog_reader import CatalogReaderPort

log = structlog.get_logger(__name__)

ROOT_ID = "root"


def _to_media_item(station: StationRecord) -> MediaItem:
    return MediaItem(
        media_id=station.station_id,
        title=station.title,
        icon_uri=station.artwork_url,
        media_uri=station.stream_url,
    )


def _to_playable(station: StationRecord) -> PlayableStation:
    return PlayableStation(
        media_id=station.station_id,
        stream_url=station.stream_url,
        title=station.title,
        artwork_url=station.artwork_url,
    )


class BrowseCatalogUseCase:
    """Serves the station catalog to media-session front ends.

    A catalog that cannot be loaded is presented as empty; callers never
    see a loading error.
    """

    def __init__(
        self,
        catalog: CatalogReaderPort,
        *,
        default_station_id: str | None = None,
    ) -> None:
        self._catalog = catalog
        self._default_station_id = default_station_id

    async def _ready(self) -> bool:
        try:
            ready = await self._catalog.ensure_ready()
        except Exception:
            log.warning("browse_catalog_ensure_ready_error", exc_info=True)
            return False
        if not ready:
            log.info("browse_catalog_not_ready")
        return ready

    async def children(self, parent_id: str = ROOT_ID) -> list[MediaItem]:
        """List playable items under ``parent_id``.

        Args:
            parent_id: ``"root"`` for every station, or a group key.
                Any other id yields an empty list, not the full catalog.

        Returns:
            Items in browsing order (empty when the catalog is not ready
            or the parent is unknown).
        """
        if not await self._ready():
            return []

        index = self._catalog.current_index()
        if parent_id == ROOT_ID:
            stations = index.stations
        else:
            stations = index.groups.get(parent_id, ())
        return [_to_media_item(s) for s in stations]

    async def resolve(self, station_id: str) -> PlayableStation | None:
        """Resolve a station id into its stream URL and metadata."""
        if not await self._ready():
            return None

        station = self._catalog.get_station(station_id)
        if station is None:
            log.debug("browse_station_not_found", station_id=station_id)
            return None
        return _to_playable(station)

    async def default_station(self) -> PlayableStation | None:
        """The configured default station, if configured and present."""
        if self._default_station_id is None:
            return None
        return await self.resolve(self._default_station_id)
