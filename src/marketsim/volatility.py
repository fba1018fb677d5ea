"""Volatility policy: per-tick percentage bounds for the random walk.

Bounds are literal tables so the ordering between asset classes can be
checked directly: every crypto bound is above every equity bound, and every
equity bound is above every forex bound.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from marketsim.config import AssetClass

# Percent of price, maximum magnitude of a single tick.
STOCK_VOLATILITY: Mapping[str, float] = MappingProxyType({
    "RELIANCE": 0.20,
    "TCS": 0.18,
    "HDFCBANK": 0.18,
    "INFY": 0.20,
    "ICICIBANK": 0.22,
    "HINDUNILVR": 0.15,
    "ITC": 0.15,
    "SBIN": 0.25,
    "BHARTIARTL": 0.20,
    "ASIANPAINT": 0.18,
    "GOLDPETAL": 0.30,
    "CRUDEOIL": 0.40,
    "CDSL": 0.30,
    "NSDL": 0.30,
    "WHEAT": 0.25,
    "SUGARCANE": 0.25,
})

FOREX_VOLATILITY: Mapping[str, float] = MappingProxyType({
    "USDINR": 0.02,
    "EURUSD": 0.04,
    "GBPUSD": 0.05,
    "USDJPY": 0.05,
    "AUDUSD": 0.06,
    "USDCAD": 0.04,
    "NZDUSD": 0.06,
    "USDCHF": 0.04,
})

CRYPTO_VOLATILITY: Mapping[str, float] = MappingProxyType({
    "BTC/USDT": 2.5,
    "ETH/USDT": 3.0,
    "BNB/USDT": 3.5,
    "XRP/USDT": 4.0,
    "ADA/USDT": 4.5,
    "SOL/USDT": 5.0,
    "DOGE/USDT": 6.0,
    "MATIC/USDT": 4.5,
})

DEFAULT_VOLATILITY: Mapping[AssetClass, float] = MappingProxyType({
    AssetClass.STOCKS: 0.20,
    AssetClass.FOREX: 0.05,
    AssetClass.CRYPTO: 3.0,
})

_TABLES: Mapping[AssetClass, Mapping[str, float]] = MappingProxyType({
    AssetClass.STOCKS: STOCK_VOLATILITY,
    AssetClass.FOREX: FOREX_VOLATILITY,
    AssetClass.CRYPTO: CRYPTO_VOLATILITY,
})


class VolatilityPolicy:
    """Symbol -> per-tick percentage bound, with a fallback default.

    Lookups never raise: unknown or malformed symbols get the default.
    """

    def __init__(self, bounds: Mapping[str, float], default: float) -> None:
        if default <= 0:
            raise ValueError(f"default volatility must be positive, got {default}")
        self._bounds = {symbol.upper(): float(v) for symbol, v in bounds.items()}
        self.default = float(default)

    @classmethod
    def for_asset_class(cls, asset_class: AssetClass) -> VolatilityPolicy:
        return cls(_TABLES[asset_class], DEFAULT_VOLATILITY[asset_class])

    def volatility_for(self, symbol: str) -> float:
        if not isinstance(symbol, str):
            return self.default
        bound = self._bounds.get(symbol.upper())
        if bound is None or bound <= 0:
            return self.default
        return bound

    def __contains__(self, symbol: object) -> bool:
        return isinstance(symbol, str) and symbol.upper() in self._bounds

    def bounds(self) -> dict[str, float]:
        return dict(self._bounds)


def volatility_for(symbol: str, asset_class: AssetClass) -> float:
    """Module-level shortcut over the reference tables."""
    return VolatilityPolicy.for_asset_class(asset_class).volatility_for(symbol)
