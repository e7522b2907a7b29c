"""Station catalog API endpoints (status, browse, station lookup)."""

from __future__ import annotations

from typing import Any, cast

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from stationcast.application.use_cases.browse_catalog import ROOT_ID
from stationcast.domain.entities.station import MediaItem, PlayableStation
from stationcast.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(prefix="/catalog", tags=["catalog"])


def _format_media_item(item: MediaItem) -> dict[str, Any]:
    return {
        "id": item.media_id,
        "title": item.title,
        "iconUri": item.icon_uri,
        "mediaUri": item.media_uri,
        "playable": item.playable,
    }


def _format_station(station: PlayableStation) -> dict[str, str]:
    return {
        "id": station.media_id,
        "title": station.title,
        "streamUrl": station.stream_url,
        "artworkUrl": station.artwork_url,
    }


def _not_found(station_id: str) -> JSONResponse:
    return JSONResponse(
        status_code=404,
        content={"error": "station_not_found", "id": station_id},
    )


@router.get("/status")
async def catalog_status(request: Request) -> JSONResponse:
    """Report catalog state without triggering a load."""
    state = cast(AppState, request.app.state)
    store = state.catalog_store
    return JSONResponse(
        content={
            "state": store.state.value,
            "ready": store.is_ready(),
            "stations": len(store.current_index()),
        }
    )


@router.get("/browse")
@router.get("/browse/{parent_id}")
async def catalog_browse(request: Request, parent_id: str = ROOT_ID) -> JSONResponse:
    """List browsable items; empty when the catalog is unavailable."""
    state = cast(AppState, request.app.state)
    items = await state.browse_uc.children(parent_id)
    return JSONResponse(content={"items": [_format_media_item(i) for i in items]})


@router.get("/default")
async def catalog_default_station(request: Request) -> JSONResponse:
    """Serve the configured default station."""
    state = cast(AppState, request.app.state)
    station = await state.browse_uc.default_station()
    if station is None:
        return JSONResponse(status_code=404, content={"error": "no_default_station"})
    return JSONResponse(content=_format_station(station))


@router.get("/stations/{station_id}")
async def catalog_station(request: Request, station_id: str) -> JSONResponse:
    """Resolve a station id into a playable stream URL plus metadata."""
    state = cast(AppState, request.app.state)
    station = await state.browse_uc.resolve(station_id)
    if station is None:
        log.debug("catalog_station_lookup_miss", station_id=station_id)
        return _not_found(station_id)
    return JSONResponse(content=_format_station(station))
