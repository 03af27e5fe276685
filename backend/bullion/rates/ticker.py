"""Periodic task that drives RateStore.tick()."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from .market_hours import always_open
from .store import RateStore

logger = logging.getLogger(__name__)


class RateTicker:
    """Background asyncio task calling ``store.tick()`` every ``interval`` seconds.

    The ticker owns no rate state. Pausing only stops further ticks, so the
    store's running high/low survive a pause/resume cycle.

    Lifecycle:
        ticker = RateTicker(store, interval=5.0)
        await ticker.start()
        ticker.pause()   # e.g. nobody is watching
        ticker.resume()
        await ticker.stop()
    """

    def __init__(
        self,
        store: RateStore,
        interval: float = 5.0,
        market_open: Callable[[], bool] = always_open,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"Tick interval must be positive, got {interval}")
        self._store = store
        self._interval = interval
        self._market_open = market_open
        self._paused = False
        self._task: asyncio.Task | None = None

    async def start(self) -> None:
        """Tick once immediately, then keep ticking in the background. No-op if running."""
        if self.is_running:
            return
        await self._tick_once()
        self._task = asyncio.create_task(self._run_loop(), name="rate-ticker")
        logger.info("Rate ticker started: %.1fs interval", self._interval)

    async def stop(self) -> None:
        """Cancel the background task. Safe to call multiple times."""
        if self._task and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        self._task = None
        logger.info("Rate ticker stopped")

    def pause(self) -> None:
        if not self._paused:
            self._paused = True
            logger.info("Rate ticker paused")

    def resume(self) -> None:
        if self._paused:
            self._paused = False
            logger.info("Rate ticker resumed")

    @property
    def is_paused(self) -> bool:
        return self._paused

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def interval(self) -> float:
        return self._interval

    # --- Internal ---

    async def _tick_once(self) -> None:
        """Run one tick in a worker thread; the store may do blocking file I/O."""
        if self._paused or not self._market_open():
            return
        try:
            await asyncio.to_thread(self._store.tick)
        except Exception:
            logger.exception("Rate tick failed")

    async def _run_loop(self) -> None:
        """Core loop: sleep, then tick unless paused or the market is closed."""
        while True:
            await asyncio.sleep(self._interval)
            await self._tick_once()
