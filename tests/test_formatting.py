"""Tests for display formatting helpers."""

import math

import pytest

from marketsim.config import AssetClass
from marketsim.formatting import (
    format_change,
    format_compact_usd,
    format_inr,
    format_market_cap_inr,
    format_pips,
    format_price,
    format_spread,
)


class TestFormatInr:
    @pytest.mark.parametrize(
        "amount,expected",
        [
            (0, "₹0.00"),
            (999.5, "₹999.50"),
            (1234.5, "₹1,234.50"),
            (99999.5, "₹99,999.50"),
            (150_000, "₹1.5 L"),
            (12_345_678, "₹1.2 Cr"),
            (2_500_000_000, "₹250 Cr"),
            (-500, "-₹500.00"),
        ],
    )
    def test_amounts(self, amount, expected):
        assert format_inr(amount) == expected

    def test_without_symbol(self):
        assert format_inr(1234.5, show_symbol=False) == "1,234.50"

    @pytest.mark.parametrize("bad", [math.nan, math.inf, "12"])
    def test_invalid_input(self, bad):
        assert format_inr(bad) == "₹0.00"


class TestFormatMarketCap:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (20_000_000_000_000, "₹2.0 L Cr"),
            (1_662_000_000_000, "₹166 K Cr"),
            (50_000_000, "₹5 Cr"),
            (250_000, "₹2.5 L"),
            (12_345, "₹12,345"),
        ],
    )
    def test_bands(self, value, expected):
        assert format_market_cap_inr(value) == expected


class TestFormatCompactUsd:
    @pytest.mark.parametrize(
        "value,expected",
        [(885e9, "$885.0B"), (2.5e6, "$2.5M"), (1500, "$1.5K"), (7.891, "$7.89")],
    )
    def test_bands(self, value, expected):
        assert format_compact_usd(value) == expected


class TestFormatPrice:
    def test_forex_quote(self):
        assert format_price(1.085, AssetClass.FOREX) == "$1.0850"

    def test_accepts_string_class(self):
        assert format_price(1.085, "forex") == "$1.0850"

    def test_stock_in_rupees(self):
        assert format_price(2456.75, AssetClass.STOCKS) == "₹2,456.75"


class TestForexHelpers:
    def test_spread(self):
        assert format_spread(0.0002) == "0.0002"

    def test_pips(self):
        assert format_pips(0.0025, 0.0001) == "25.0 pips"
        assert format_pips(-0.15, 0.01) == "15.0 pips"


class TestFormatChange:
    def test_positive(self):
        assert format_change(12.34, 0.56) == "+12.34 (+0.56%)"

    def test_negative(self):
        assert format_change(-1.5, -0.25) == "-1.50 (-0.25%)"

    def test_decimals(self):
        assert format_change(0.0012, 0.11, decimals=4) == "+0.0012 (+0.11%)"
