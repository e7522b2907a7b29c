"""Entry point used by collaborators to wait for the station catalog."""

from __future__ import annotations

import asyncio
import concurrent.futures
from typing import Callable

import structlog

from stationcast.domain.entities.station import CatalogIndex, StationRecord
from stationcast.domain.ports.catalog_reader import CatalogReaderPort

log = structlog.get_logger(__name__)

ReadyCallback = Callable[[bool], None]


class CatalogCoordinator:
    """Exposes "ensure the catalog is ready, then tell me" in three flavours.

    - ``await ensure_ready()`` for coroutines on the event loop,
    - ``ensure_ready_callback(fn)`` for callback-style collaborators,
    - ``ensure_ready_threadsafe()`` for code running on other threads.

    Each caller is notified exactly once with the boolean outcome. Callers
    must not assume which thread delivers it.
    """

    def __init__(
        self,
        store: CatalogReaderPort,
        *,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._store = store
        self._loop = loop
        self._pending: set[asyncio.Task[bool]] = set()

    def _bind_loop(self) -> asyncio.AbstractEventLoop:
        loop = asyncio.get_running_loop()
        if self._loop is None:
            self._loop = loop
        return loop

    # ------------------------------------------------------------------
    # Reads (never block)
    # ------------------------------------------------------------------

    def is_ready(self) -> bool:
        return self._store.is_ready()

    def current_index(self) -> CatalogIndex:
        return self._store.current_index()

    def get_station(self, station_id: str) -> StationRecord | None:
        return self._store.get_station(station_id)

    # ------------------------------------------------------------------
    # Readiness
    # ------------------------------------------------------------------

    async def ensure_ready(self) -> bool:
        self._bind_loop()
        return await self._store.ensure_ready()

    def ensure_ready_callback(self, on_complete: ReadyCallback) -> asyncio.Task[bool]:
        """Schedule a readiness wait and call ``on_complete(success)`` once.

        Must be called from the event loop thread. A wait that is
        cancelled or raises reports ``False``.
        """
        loop = self._bind_loop()
        task = loop.create_task(self._store.ensure_ready())
        self._pending.add(task)

        def _deliver(done: asyncio.Task[bool]) -> None:
            self._pending.discard(done)
            if done.cancelled():
                success = False
            elif done.exception() is not None:
                log.warning(
                    "catalog_ready_wait_failed",
                    error=repr(done.exception()),
                )
                success = False
            else:
                success = done.result()
            on_complete(success)

        task.add_done_callback(_deliver)
        return task

    def ensure_ready_threadsafe(self) -> concurrent.futures.Future[bool]:
        """Submit a readiness wait from a thread other than the loop's.

        Blocking on ``.result()`` from the event loop thread deadlocks:
        the loop cannot run the wait it is blocked on. Coroutines on the
        loop use :meth:`ensure_ready` instead.

        Raises:
            RuntimeError: no event loop is bound to the coordinator yet.
        """
        if self._loop is None:
            raise RuntimeError("CatalogCoordinator is not bound to an event loop")
        return asyncio.run_coroutine_threadsafe(self._store.ensure_ready(), self._loop)
