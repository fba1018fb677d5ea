"""Display formatting for prices, volumes and market caps."""

from __future__ import annotations

import math

from marketsim.config import AssetClass

_CRORE = 10_000_000
_LAKH = 100_000


def _group_indian(integer: int) -> str:
    """Indian digit grouping: last three digits, then pairs (12,34,567)."""
    digits = str(integer)
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs) + "," + tail


def format_inr(amount: float, show_symbol: bool = True) -> str:
    """Rupee amount with crore/lakh abbreviations above one lakh."""
    symbol = "₹" if show_symbol else ""
    if not isinstance(amount, (int, float)) or not math.isfinite(amount):
        return f"{symbol}0.00"

    if amount >= _CRORE:
        crores = amount / _CRORE
        if crores >= 100:
            return f"{symbol}{crores:.0f} Cr"
        return f"{symbol}{crores:.1f} Cr"
    if amount >= _LAKH:
        return f"{symbol}{amount / _LAKH:.1f} L"

    sign = "-" if amount < 0 else ""
    whole, frac = f"{abs(amount):.2f}".split(".")
    return f"{sign}{symbol}{_group_indian(int(whole))}.{frac}"


def format_market_cap_inr(market_cap: float) -> str:
    if market_cap >= 10_000_000_000_000:
        return f"₹{market_cap / 10_000_000_000_000:.1f} L Cr"
    if market_cap >= 10_000_000_000:
        return f"₹{market_cap / 10_000_000_000:.0f} K Cr"
    if market_cap >= _CRORE:
        return f"₹{market_cap / _CRORE:.0f} Cr"
    if market_cap >= _LAKH:
        return f"₹{market_cap / _LAKH:.1f} L"
    return f"₹{_group_indian(int(market_cap))}"


def format_compact_usd(value: float, decimals: int = 2) -> str:
    """``$1.2B`` / ``$3.4M`` / ``$5.6K`` / ``$7.89``."""
    if value >= 1e9:
        return f"${value / 1e9:.1f}B"
    if value >= 1e6:
        return f"${value / 1e6:.1f}M"
    if value >= 1e3:
        return f"${value / 1e3:.1f}K"
    return f"${value:.{decimals}f}"


def format_price(price: float, asset_class: AssetClass | str) -> str:
    """Stocks and crypto in rupee notation; forex as a four-decimal quote."""
    asset_class = AssetClass(asset_class) if isinstance(asset_class, str) else asset_class
    if asset_class is AssetClass.FOREX:
        return f"${price:.4f}"
    return format_inr(price)


def format_spread(spread: float) -> str:
    return f"{spread:.4f}"


def format_pips(value: float, pip_value: float) -> str:
    pips = abs(value / pip_value)
    return f"{pips:.1f} pips"


def format_change(change: float, change_percent: float, decimals: int = 2) -> str:
    """``+12.34 (+0.56%)`` style change label."""
    sign = "+" if change >= 0 else "-"
    return f"{sign}{abs(change):.{decimals}f} ({sign}{abs(change_percent):.2f}%)"
