"""Trading-hours calendar for the Indian bullion market."""

from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

MARKET_TZ = ZoneInfo("Asia/Kolkata")

# weekday() -> (open_hour, close_hour); Sunday is closed
TRADING_HOURS: dict[int, tuple[int, int]] = {
    0: (9, 18),
    1: (9, 18),
    2: (9, 18),
    3: (9, 18),
    4: (9, 18),
    5: (10, 16),
}


def is_market_open(now: datetime | None = None) -> bool:
    """True if ``now`` (default: current time) falls in trading hours, IST.

    Naive datetimes are taken to be in IST already.
    """
    if now is None:
        now = datetime.now(MARKET_TZ)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=MARKET_TZ)
    else:
        now = now.astimezone(MARKET_TZ)

    hours = TRADING_HOURS.get(now.weekday())
    if hours is None:
        return False
    open_hour, close_hour = hours
    return open_hour <= now.hour < close_hour


def always_open() -> bool:
    """Market-hours check that never closes, for around-the-clock simulation."""
    return True
