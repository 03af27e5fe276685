"""Tests for display formatting."""

from datetime import datetime, timezone

import pytest

from bullion.formatting import (
    format_change,
    format_currency,
    format_datetime,
    format_rate,
    quote_unit_label,
)
from bullion.rates.models import Metal, RateSnapshot


class TestFormatCurrency:
    @pytest.mark.parametrize(
        "amount, expected",
        [
            (0, "₹0"),
            (999, "₹999"),
            (99320, "₹99,320"),
            (106780, "₹1,06,780"),
            (12345678, "₹1,23,45,678"),
            (-890, "-₹890"),
        ],
    )
    def test_indian_grouping(self, amount, expected):
        assert format_currency(amount) == expected

    def test_rounds_half_up(self):
        assert format_currency(5338.5) == "₹5,339"

    def test_decimals(self):
        assert format_currency(106.784, decimals=2) == "₹106.78"

    def test_without_symbol(self):
        assert format_currency(106780, show_symbol=False) == "1,06,780"


class TestFormatChange:
    def test_positive(self):
        snap = RateSnapshot(Metal.GOLD, 100570.0, 1250.0, 1.2585, 100570.0, 99320.0, 0.0)
        assert format_change(snap) == "+₹1,250 (+1.26%)"

    def test_negative(self):
        snap = RateSnapshot(Metal.SILVER, 105890.0, -890.0, -0.8335, 106780.0, 105890.0, 0.0)
        assert format_change(snap) == "-₹890 (-0.83%)"

    def test_flat(self):
        assert format_change(RateSnapshot.seed(Metal.GOLD, 100.0)) == "+₹0 (+0.00%)"


class TestQuoteUnits:
    def test_labels(self):
        assert quote_unit_label(Metal.GOLD) == "10g"
        assert quote_unit_label("Silver") == "kg"

    def test_format_rate(self):
        assert format_rate(RateSnapshot.seed(Metal.GOLD, 99320.0)) == "₹99,320/10g"


class TestFormatDatetime:
    def test_converts_to_ist(self):
        moment = datetime(2026, 10, 17, 9, 0, 5, tzinfo=timezone.utc)
        assert format_datetime(moment) == "17 Oct 2026, 02:30:05 pm"

    def test_date_only(self):
        assert format_datetime(datetime(2026, 10, 17, 20, 0, tzinfo=timezone.utc), include_time=False) == "18 Oct 2026"

    def test_unix_seconds(self):
        # 2026-10-17T00:00:00Z
        assert format_datetime(1792195200.0) == "17 Oct 2026, 05:30:00 am"
