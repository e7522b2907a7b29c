"""Composition root: dependency injection via FastAPI lifespan."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, cast

import httpx
import structlog
from fastapi import FastAPI

from stationcast.application.use_cases import BrowseCatalogUseCase, CatalogCoordinator
from stationcast.infrastructure.catalog import CatalogStore, HttpxCatalogFetcher
from stationcast.interfaces.app_state import AppState

log = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan Hook: Initialize and cleanup all resources (DI Composition Root).

    Order matters:
        1. HTTP Client (required by the fetcher)
        2. Catalog store (fetcher + catalog URL)
        3. Coordinator (bound to the running loop)
        4. Browse use case
        5. Optional background preload
    """
    state = cast(AppState, app.state)
    config = state.config

    # 1) Shared HTTP client
    state.http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(config.http_timeout_seconds),
        headers={"User-Agent": config.http_user_agent},
        follow_redirects=config.http_follow_redirects,
    )
    log.info("http_client_initialized", timeout=config.http_timeout_seconds)

    # 2) Catalog store
    state.catalog_store = CatalogStore(
        fetcher=HttpxCatalogFetcher(
            http_client=state.http_client,
            encoding=config.catalog.encoding,
        ),
        catalog_url=config.catalog.url,
        fetch_timeout=config.catalog.fetch_timeout_seconds,
    )
    log.info("catalog_store_initialized", url=config.catalog.url)

    # 3) Coordinator
    state.catalog = CatalogCoordinator(
        state.catalog_store,
        loop=asyncio.get_running_loop(),
    )

    # 4) Browse use case
    state.browse_uc = BrowseCatalogUseCase(
        state.catalog,
        default_station_id=config.catalog.default_station_id,
    )

    # 5) Preload
    state._preload_task = None
    if config.catalog.preload:
        state._preload_task = asyncio.create_task(state.catalog.ensure_ready())
        log.info("catalog_preload_scheduled")

    log.info("app_startup_complete")

    try:
        yield
    finally:
        await state.catalog_store.aclose()
        if state._preload_task is not None:
            await asyncio.gather(state._preload_task, return_exceptions=True)

        await state.http_client.aclose()
        log.info("http_client_closed")

        log.info("app_shutdown_complete")
