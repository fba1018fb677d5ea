"""Instrument data model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Instrument:
    """Current market state of one tradable symbol.

    Attributes:
        symbol: Ticker or pair symbol, unique within its feed.
        name: Display name.
        asset_class: Feed family ("stocks", "forex", "crypto").
        price: Last price, always positive.
        change: ``price - previous_close``.
        change_percent: ``change / previous_close * 100``.
        volume: Traded volume (24h volume for crypto).
        day_open: Session opening price.
        day_high: Running session high.
        day_low: Running session low.
        previous_close: Reference close the change is measured against.
        market_cap: Market capitalization.
        sector: Sector classification (stocks).
        exchange: Listing exchange (stocks).
        spread: Quoted bid/ask spread (forex).
        pip_value: Size of one pip (forex).
        rank: Market-cap rank (crypto).
        coin_id: Slug identifier (crypto).
        updated_at: Time of the tick that produced this record.
    """

    symbol: str
    name: str
    asset_class: str
    price: float
    change: float
    change_percent: float
    volume: float
    day_open: float
    day_high: float
    day_low: float
    previous_close: float
    market_cap: float | None = None
    sector: str | None = None
    exchange: str | None = None
    spread: float | None = None
    pip_value: float | None = None
    rank: int | None = None
    coin_id: str | None = None
    updated_at: datetime | None = None

    @property
    def is_up(self) -> bool:
        """True when trading above the previous close."""
        return self.change > 0

    @property
    def day_range(self) -> float:
        """Session high minus session low."""
        return self.day_high - self.day_low
