"""Deterministic chart series: the same symbol always draws the same chart.

The symbol is folded into a signed 32-bit seed; every value is then derived
from ``frac(sin(x) * 10000)`` of fixed offsets from that seed, so identical
``(symbol, period)`` inputs give bit-identical prices on every call. Only the
dates move, anchored on ``as_of`` (today by default).
"""

from __future__ import annotations

import math
from datetime import date, timedelta
from enum import Enum

import pandas as pd

from marketsim.errors import MarketSimError, MarketSimErrorCode
from marketsim.models.candle import Candle

# Candle shape parameters, as fractions of the running price.
CANDLE_VOLATILITY = 0.03
TREND_SCALE = 0.01
WICK_SCALE = 0.02

# Offsets that give each candle four independent sub-seeds.
_TREND_OFFSET = 0
_CHANGE_OFFSET = 1000
_HIGH_OFFSET = 2000
_LOW_OFFSET = 3000
_LINE_OFFSET = 4000


class ChartPeriod(Enum):
    """Chart windows: point count and spacing in days."""

    FIVE_DAYS = "5D"
    ONE_MONTH = "1M"
    ONE_YEAR = "1Y"
    FIVE_YEARS = "5Y"
    YEAR_TO_DATE = "YTD"

    @classmethod
    def parse(cls, value: ChartPeriod | str) -> ChartPeriod:
        if isinstance(value, ChartPeriod):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError as e:
            valid = ", ".join(p.value for p in cls)
            raise MarketSimError(
                f"Unknown chart period {value!r} (expected one of {valid})",
                code=MarketSimErrorCode.INVALID_PERIOD,
            ) from e

    @property
    def step_days(self) -> int:
        return _STEP_DAYS[self]

    def point_count(self, as_of: date | None = None) -> int:
        if self is ChartPeriod.YEAR_TO_DATE:
            return (as_of or date.today()).month
        return _POINT_COUNTS[self]


_POINT_COUNTS = {
    ChartPeriod.FIVE_DAYS: 5,
    ChartPeriod.ONE_MONTH: 30,
    ChartPeriod.ONE_YEAR: 52,
    ChartPeriod.FIVE_YEARS: 60,
}

_STEP_DAYS = {
    ChartPeriod.FIVE_DAYS: 1,
    ChartPeriod.ONE_MONTH: 1,
    ChartPeriod.ONE_YEAR: 7,
    ChartPeriod.FIVE_YEARS: 30,
    ChartPeriod.YEAR_TO_DATE: 30,
}


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def symbol_seed(symbol: str) -> int:
    """Fold the symbol's UTF-16 code units through ``h = h * 31 + c`` (int32)."""
    data = symbol.encode("utf-16-le")
    h = 0
    for i in range(0, len(data), 2):
        code = data[i] | (data[i + 1] << 8)
        h = _to_int32((h << 5) - h + code)
    return h


def seeded_random(seed: float) -> float:
    """Deterministic value in [0, 1) for ``seed``."""
    x = math.sin(seed) * 10000
    return x - math.floor(x)


def base_price(seed: int) -> float:
    """Starting price in [100, 1000) derived from the seed.

    The remainder keeps the sign of the seed before ``abs``.
    """
    return 100 + abs(math.fmod(seed, 900))


def generate(
    symbol: str,
    period: ChartPeriod | str,
    as_of: date | None = None,
) -> list[Candle]:
    """Generate the OHLC series for ``symbol`` over ``period``.

    Candles are ordered oldest first; the last one falls on ``as_of``.

    Raises:
        MarketSimError: ``period`` is not a known chart period.
    """
    chart_period = ChartPeriod.parse(period)
    as_of = as_of or date.today()
    seed = symbol_seed(symbol)
    count = chart_period.point_count(as_of)
    step = chart_period.step_days

    current = base_price(seed)
    candles: list[Candle] = []
    for i in range(count - 1, -1, -1):
        trend = (seeded_random(seed + i + _TREND_OFFSET) - 0.5) * TREND_SCALE
        open_ = current
        change = (seeded_random(seed + i + _CHANGE_OFFSET) - 0.5) * CANDLE_VOLATILITY * current
        close = open_ + change + trend * current
        high = max(open_, close) + seeded_random(seed + i + _HIGH_OFFSET) * WICK_SCALE * current
        low = min(open_, close) - seeded_random(seed + i + _LOW_OFFSET) * WICK_SCALE * current

        candles.append(Candle(
            date=as_of - timedelta(days=i * step),
            open=open_,
            high=high,
            low=low,
            close=close,
        ))
        current = close

    return candles


def line_series(
    symbol: str,
    points: int = 7,
    as_of: date | None = None,
) -> list[tuple[date, float]]:
    """Daily closing line around 100 with a sine-shaped trend.

    Used by the compact line chart; deterministic per symbol like ``generate``.
    """
    if points < 1:
        raise ValueError(f"points must be >= 1, got {points}")
    as_of = as_of or date.today()
    seed = symbol_seed(symbol)
    line: list[tuple[date, float]] = []
    for i in range(points - 1, -1, -1):
        trend = math.sin(i * 0.5) * 0.05
        noise = (seeded_random(seed + i + _LINE_OFFSET) - 0.5) * 0.1
        line.append((as_of - timedelta(days=i), round(100 * (1 + trend + noise), 2)))
    return line


def series_to_frame(candles: list[Candle]) -> pd.DataFrame:
    """Candles as a DataFrame indexed by date (columns: open, high, low, close)."""
    if not candles:
        frame = pd.DataFrame(columns=["open", "high", "low", "close"])
        frame.index = pd.DatetimeIndex([], name="date")
        return frame

    records = [
        {
            "date": pd.Timestamp(c.date),
            "open": float(c.open),
            "high": float(c.high),
            "low": float(c.low),
            "close": float(c.close),
        }
        for c in candles
    ]
    return pd.DataFrame(records).set_index("date")
