"""Application state container for FastAPI dependency injection."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
from starlette.datastructures import State

from stationcast.infrastructure.config import AppConfig

if TYPE_CHECKING:
    import asyncio

    from stationcast.application.use_cases import (
        BrowseCatalogUseCase,
        CatalogCoordinator,
    )
    from stationcast.infrastructure.catalog import CatalogStore


class AppState(State):
    """FastAPI application state with all DI resources.

    Lifecycle managed by composition.py::lifespan().
    """

    # Configuration
    config: AppConfig

    # Infrastructure
    http_client: httpx.AsyncClient
    catalog_store: CatalogStore

    # Application Services
    catalog: CatalogCoordinator
    browse_uc: BrowseCatalogUseCase

    # Background preload (only when catalog.preload=True)
    _preload_task: asyncio.Task | None
