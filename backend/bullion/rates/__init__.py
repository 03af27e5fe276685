"""Rate subsystem: simulated gold/silver prices.

Public API:
    Metal               - Bookable metal enum
    RateSnapshot        - Immutable per-metal price snapshot
    RateStore           - Owned rate state, advanced by tick()
    BoundedRandomWalk   - Random-walk price perturbation
    RateTicker          - Pausable periodic task driving the store
    is_market_open      - Trading-hours check (IST)
    create_stream_router - FastAPI router factory for the SSE endpoint
"""

from .market_hours import is_market_open
from .models import GRAMS_PER_QUOTE, Metal, RateSnapshot, percentage_change
from .simulator import BoundedRandomWalk
from .store import RateStore
from .stream import create_stream_router
from .ticker import RateTicker

__all__ = [
    "GRAMS_PER_QUOTE",
    "Metal",
    "RateSnapshot",
    "percentage_change",
    "BoundedRandomWalk",
    "RateStore",
    "RateTicker",
    "is_market_open",
    "create_stream_router",
]
