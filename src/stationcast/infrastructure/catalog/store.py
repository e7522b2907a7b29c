"""Catalog store: fetch-once state machine and published station index.

State transitions::

    NOT_INITIALIZED --ensure_ready()--> INITIALIZING
    INITIALIZING    --load ok-------->  INITIALIZED   (terminal)
    INITIALIZING    --load failed---->  NOT_INITIALIZED (next caller retries)

Exactly one load runs at a time. Callers arriving while it is in flight
await the same future and all receive the same outcome. The index is
published before the outcome is delivered, so a caller that sees ``True``
also sees the complete index.
"""

from __future__ import annotations

import asyncio
import time
from typing import Any, Callable, Iterable, Mapping

import structlog

from stationcast.domain.entities.station import (
    CatalogIndex,
    InitializationState,
    StationRecord,
)
from stationcast.domain.exceptions import CatalogError, FetchFailure
from stationcast.domain.ports.catalog_source import CatalogFetcherPort
from stationcast.infrastructure.catalog.translator import (
    base_path_from_url,
    translate_catalog,
)

log = structlog.get_logger(__name__)

TranslateFn = Callable[[Mapping[str, Any], str], list[StationRecord]]


class CatalogStore:
    """Owns the initialization state and the current :class:`CatalogIndex`.

    Read operations (:meth:`is_ready`, :meth:`current_index`,
    :meth:`get_station`) never await. Only :meth:`ensure_ready` waits,
    and only while a load is in flight.

    Args:
        fetcher: Source of the raw catalog document.
        catalog_url: URL of the catalog; its directory is the base path
            for relative stream and artwork URLs.
        fetch_timeout: Bound (seconds) for one fetch + translate run.
            ``None`` waits indefinitely.
        translate: Document -> records conversion.
    """

    def __init__(
        self,
        *,
        fetcher: CatalogFetcherPort,
        catalog_url: str,
        fetch_timeout: float | None = 60.0,
        translate: TranslateFn = translate_catalog,
    ) -> None:
        self._fetcher = fetcher
        self._catalog_url = catalog_url
        self._base_path = base_path_from_url(catalog_url)
        self._fetch_timeout = fetch_timeout
        self._translate = translate

        self._state = InitializationState.NOT_INITIALIZED
        self._index = CatalogIndex.empty()
        self._lock = asyncio.Lock()
        self._inflight: asyncio.Future[bool] | None = None
        self._load_task: asyncio.Task[None] | None = None

    @property
    def state(self) -> InitializationState:
        return self._state

    @property
    def catalog_url(self) -> str:
        return self._catalog_url

    def is_ready(self) -> bool:
        return self._state is InitializationState.INITIALIZED

    def current_index(self) -> CatalogIndex:
        """Published index when initialized, otherwise an empty index."""
        if self._state is not InitializationState.INITIALIZED:
            return CatalogIndex.empty()
        return self._index

    def get_station(self, station_id: str) -> StationRecord | None:
        return self.current_index().get(station_id)

    def build_index_by_id(self, records: Iterable[StationRecord]) -> CatalogIndex:
        """Build a fresh index from ``records`` and publish it in one swap."""
        index = CatalogIndex.from_records(records)
        self._index = index
        return index

    async def ensure_ready(self) -> bool:
        """Make sure the catalog is loaded.

        Returns immediately with ``True`` once initialized. Otherwise the
        first caller starts a background load and every caller (first or
        late) awaits its outcome. Cancelling a caller does not cancel the
        shared load.
        """
        if self._state is InitializationState.INITIALIZED:
            return True

        async with self._lock:
            if self._state is InitializationState.INITIALIZED:
                return True
            if self._inflight is None:
                loop = asyncio.get_running_loop()
                self._state = InitializationState.INITIALIZING
                self._inflight = loop.create_future()
                self._load_task = loop.create_task(self._load())
                self._load_task.add_done_callback(self._finish_load)
                log.info("catalog_load_started", url=self._catalog_url)
            inflight = self._inflight

        return await asyncio.shield(inflight)

    async def aclose(self) -> None:
        """Cancel an in-flight load, if any. Its waiters receive ``False``."""
        task = self._load_task
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _fetch_and_translate(self) -> list[StationRecord]:
        document = await self._fetcher.fetch(self._catalog_url)
        return self._translate(document, self._base_path)

    async def _load(self) -> bool:
        started = time.perf_counter()
        try:
            if self._fetch_timeout is None:
                records = await self._fetch_and_translate()
            else:
                try:
                    records = await asyncio.wait_for(
                        self._fetch_and_translate(), timeout=self._fetch_timeout
                    )
                except asyncio.TimeoutError as exc:
                    raise FetchFailure(
                        f"catalog load exceeded {self._fetch_timeout}s"
                    ) from exc
        except CatalogError as exc:
            log.warning(
                "catalog_load_failed",
                url=self._catalog_url,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            return False
        except Exception:
            log.error("catalog_load_crashed", url=self._catalog_url, exc_info=True)
            return False

        index = self.build_index_by_id(records)
        log.info(
            "catalog_initialized",
            url=self._catalog_url,
            stations=len(index),
            duration_ms=round((time.perf_counter() - started) * 1000.0, 2),
        )
        return True

    def _finish_load(self, task: asyncio.Task[bool]) -> None:
        # Runs for every outcome, including a task cancelled before its first step.
        success = False
        if task.cancelled():
            log.info("catalog_load_cancelled", url=self._catalog_url)
        elif task.exception() is not None:
            log.error(
                "catalog_load_crashed",
                url=self._catalog_url,
                error=repr(task.exception()),
            )
        else:
            success = task.result()

        self._state = (
            InitializationState.INITIALIZED
            if success
            else InitializationState.NOT_INITIALIZED
        )
        inflight = self._inflight
        self._inflight = None
        self._load_task = None
        if inflight is not None and not inflight.done():
            inflight.set_result(success)
