"""Composition root: wires storage, rate store, ticker and HTTP routes."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .booking.service import BookingService
from .config import Settings
from .formatting import format_change, format_rate
from .rates.market_hours import always_open, is_market_open
from .rates.store import RateStore
from .rates.stream import create_stream_router
from .rates.ticker import RateTicker
from .storage import InMemoryStore, JsonFileStore, KeyValueStore

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_storage(settings: Settings) -> KeyValueStore:
    """JSON files under BULLION_STATE_DIR if set, otherwise in-memory."""
    if settings.state_dir is not None:
        logger.info("Storage: JSON files in %s", settings.state_dir)
        return JsonFileStore(settings.state_dir)
    logger.info("Storage: in-memory")
    return InMemoryStore()


def create_app(settings: Settings | None = None, storage: KeyValueStore | None = None) -> FastAPI:
    """Build the FastAPI app. The rate store, ticker and booking service live on ``app.state``."""
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)
    storage = storage if storage is not None else create_storage(settings)

    rate_store = RateStore(settings.metals, storage=storage)
    ticker = RateTicker(
        rate_store,
        interval=settings.tick_interval,
        market_open=is_market_open if settings.respect_market_hours else always_open,
    )
    booking_service = BookingService(rate_store, storage, settings.validation)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        rate_store.load_persisted()
        await ticker.start()
        try:
            yield
        finally:
            await ticker.stop()

    app = FastAPI(title="Bullion Desk", lifespan=lifespan)
    app.state.settings = settings
    app.state.storage = storage
    app.state.rate_store = rate_store
    app.state.ticker = ticker
    app.state.booking_service = booking_service

    @app.get("/api/rates")
    async def get_rates() -> dict:
        """Current snapshot for every metal, with display strings."""
        return {
            metal.value: {
                **snap.to_dict(),
                "display_price": format_rate(snap),
                "display_change": format_change(snap),
            }
            for metal, snap in rate_store.get_all().items()
        }

    app.include_router(create_stream_router(rate_store, ticker))
    return app
