"""SSE streaming endpoint for live metal rates."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Request
from fastapi.responses import StreamingResponse

from .store import RateStore
from .ticker import RateTicker

logger = logging.getLogger(__name__)


class ViewerTracker:
    """Counts connected stream viewers and pauses the ticker while there are none."""

    def __init__(self, ticker: RateTicker | None = None) -> None:
        self._ticker = ticker
        self._count = 0

    def connect(self) -> None:
        self._count += 1
        if self._count == 1 and self._ticker is not None:
            self._ticker.resume()

    def disconnect(self) -> None:
        self._count = max(0, self._count - 1)
        if self._count == 0 and self._ticker is not None:
            self._ticker.pause()

    @property
    def count(self) -> int:
        return self._count


def create_stream_router(
    rate_store: RateStore,
    ticker: RateTicker | None = None,
    interval: float = 0.5,
) -> APIRouter:
    """Create the SSE streaming router bound to a rate store.

    When a ticker is supplied it is resumed on the first viewer and paused
    after the last one leaves.
    """
    router = APIRouter(prefix="/api/stream", tags=["streaming"])
    viewers = ViewerTracker(ticker)

    @router.get("/rates")
    async def stream_rates(request: Request) -> StreamingResponse:
        """SSE endpoint for live rates.

        Events look like:

            data: {"gold": {"metal": "gold", "price": 99320.0, ...}, "silver": {...}}
        """
        return StreamingResponse(
            _generate_events(rate_store, request, interval=interval, viewers=viewers),
            media_type="text/event-stream",
            headers={
                "Cache-Control": "no-cache",
                "Connection": "keep-alive",
                "X-Accel-Buffering": "no",
            },
        )

    return router


async def _generate_events(
    rate_store: RateStore,
    request: Request,
    interval: float = 0.5,
    viewers: ViewerTracker | None = None,
) -> AsyncGenerator[str, None]:
    """Yield SSE-formatted rate events whenever the store version changes.

    Stops when the client disconnects.
    """
    yield "retry: 1000\n\n"

    last_version = -1
    client_ip = request.client.host if request.client else "unknown"
    logger.info("SSE client connected: %s", client_ip)
    if viewers is not None:
        viewers.connect()

    try:
        while True:
            if await request.is_disconnected():
                logger.info("SSE client disconnected: %s", client_ip)
                break

            current_version = rate_store.version
            if current_version != last_version:
                last_version = current_version
                payload = json.dumps(rate_store.to_dict())
                yield f"data: {payload}\n\n"

            await asyncio.sleep(interval)
    except asyncio.CancelledError:
        logger.info("SSE stream cancelled for: %s", client_ip)
    finally:
        if viewers is not None:
            viewers.disconnect()
