"""Candle (OHLC) data model for chart series."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Candle:
    """Single chart candle.

    Attributes:
        date: Calendar day the candle is plotted at.
        open: Opening price.
        high: High price.
        low: Low price.
        close: Closing price.
    """

    date: date
    open: float
    high: float
    low: float
    close: float

    @property
    def is_bullish(self) -> bool:
        return self.close >= self.open
