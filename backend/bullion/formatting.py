"""Display formatting for rupee amounts, rate changes and timestamps (en-IN)."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal

from .rates.market_hours import MARKET_TZ
from .rates.models import Metal, RateSnapshot

CURRENCY_SYMBOL = "₹"

QUOTE_UNIT_LABELS: dict[Metal, str] = {
    Metal.GOLD: "10g",
    Metal.SILVER: "kg",
}


def _group_indian(digits: str) -> str:
    """Group an unsigned integer string the Indian way: 12,34,56,789."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups) + "," + tail


def format_currency(amount: float, show_symbol: bool = True, decimals: int = 0) -> str:
    """Format a rupee amount with lakh/crore grouping.

    >>> format_currency(106780)
    '₹1,06,780'
    >>> format_currency(-890.5, decimals=2)
    '-₹890.50'
    """
    quantum = Decimal(1).scaleb(-decimals)
    value = Decimal(str(amount)).quantize(quantum, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    text = f"{abs(value):.{decimals}f}"
    whole, _, fraction = text.partition(".")
    body = _group_indian(whole) + (f".{fraction}" if fraction else "")
    symbol = CURRENCY_SYMBOL if show_symbol else ""
    return f"{sign}{symbol}{body}"


def format_change(snapshot: RateSnapshot) -> str:
    """Signed change against baseline, e.g. '+₹1,250 (+1.28%)'."""
    sign = "+" if snapshot.change >= 0 else "-"
    amount = format_currency(abs(snapshot.change))
    percent = f"{abs(snapshot.change_percent):.2f}"
    return f"{sign}{amount} ({sign}{percent}%)"


def format_rate(snapshot: RateSnapshot) -> str:
    """Quoted price with its unit, e.g. '₹99,320/10g'."""
    return f"{format_currency(snapshot.price)}/{quote_unit_label(snapshot.metal)}"


def quote_unit_label(metal: Metal | str) -> str:
    return QUOTE_UNIT_LABELS[Metal.parse(metal)]


def format_datetime(moment: datetime | float, include_time: bool = True) -> str:
    """Render a timestamp in IST, e.g. '17 Oct 2026, 02:30:05 pm'.

    Accepts an aware/naive datetime (naive is treated as UTC) or Unix seconds.
    """
    if isinstance(moment, (int, float)):
        moment = datetime.fromtimestamp(moment, tz=timezone.utc)
    elif moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    local = moment.astimezone(MARKET_TZ)

    date_part = f"{local.day} {local:%b %Y}"
    if not include_time:
        return date_part
    hour = local.hour % 12 or 12
    meridiem = "am" if local.hour < 12 else "pm"
    return f"{date_part}, {hour:02d}:{local:%M:%S} {meridiem}"
