"""Fixed-interval polling with at most one request in flight.

A poller owns one background task that calls ``fetch`` every ``interval``
seconds while visible. Starting a fetch cancels the one still running, so a
slow response can never overwrite a newer one.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Poller(Generic[T]):
    def __init__(
        self,
        fetch: Callable[[], Awaitable[T]],
        interval_seconds: float,
        on_result: Callable[[T], None] | None = None,
        on_error: Callable[[Exception], None] | None = None,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be > 0")
        self._fetch = fetch
        self._interval_seconds = interval_seconds
        self._on_result = on_result
        self._on_error = on_error
        self._visible = True
        self._loop_task: asyncio.Task[None] | None = None
        self._in_flight: asyncio.Future[T] | None = None
        self._wakeup: asyncio.Task[None] | None = None

    @property
    def interval_seconds(self) -> float:
        return self._interval_seconds

    @property
    def visible(self) -> bool:
        return self._visible

    @property
    def running(self) -> bool:
        return self._loop_task is not None and not self._loop_task.done()

    def start(self) -> None:
        if self.running:
            return
        self._loop_task = asyncio.get_running_loop().create_task(self._run())

    async def stop(self) -> None:
        tasks = [task for task in (self._loop_task, self._wakeup, self._in_flight) if task]
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._loop_task = None
        self._wakeup = None
        self._in_flight = None

    def set_visible(self, visible: bool) -> None:
        if visible == self._visible:
            return
        self._visible = visible
        if not visible:
            self._cancel_in_flight()
            return
        if self.running:
            self._wakeup = asyncio.get_running_loop().create_task(self._tick())

    async def refresh(self) -> T | None:
        """User initiated fetch. Errors reach ``on_error`` and are re-raised."""
        try:
            return await self._fetch_latest()
        except Exception as exc:
            if self._on_error is not None:
                self._on_error(exc)
            raise

    async def _run(self) -> None:
        while True:
            if self._visible:
                await self._tick()
            await asyncio.sleep(self._interval_seconds)

    async def _tick(self) -> None:
        try:
            await self._fetch_latest()
        except Exception:
            logger.debug("poll_tick_failed", exc_info=True)

    async def _fetch_latest(self) -> T | None:
        self._cancel_in_flight()
        task = asyncio.ensure_future(self._fetch())
        self._in_flight = task
        await asyncio.wait({task})
        if task.cancelled():
            # Superseded by a newer fetch or hidden meanwhile.
            return None
        if self._in_flight is task:
            self._in_flight = None
        result = task.result()
        if self._on_result is not None:
            self._on_result(result)
        return result

    def _cancel_in_flight(self) -> None:
        if self._in_flight is not None and not self._in_flight.done():
            self._in_flight.cancel()
        self._in_flight = None
