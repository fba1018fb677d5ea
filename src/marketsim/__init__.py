"""marketsim: synthetic market-data engine for trading app front ends.

Three independent simulated feeds (Indian equities, forex, crypto) with
bounded random-walk ticks, derived market indices and snapshot broadcast to
subscribers, plus a deterministic symbol-seeded chart series generator.

Quick start::

    from marketsim import create_manager_from_env
    mgr = create_manager_from_env()
    unsubscribe = mgr.feed("stocks").subscribe(lambda instruments, indices: ...)
    candles = mgr.series("RELIANCE", "1M")
"""

from __future__ import annotations

from marketsim.config import AssetClass, FeedConfig
from marketsim.errors import MarketSimError, MarketSimErrorCode
from marketsim.feeds import PRICE_FLOOR, BaseFeed, create_feed
from marketsim.feeds.crypto import CryptoFeed
from marketsim.feeds.forex import ForexFeed
from marketsim.feeds.stocks import StockFeed
from marketsim.indices import IndexDefinition, StepKind
from marketsim.manager import MarketFeedManager
from marketsim.models.candle import Candle
from marketsim.models.index_metric import IndexMetric
from marketsim.models.instrument import Instrument
from marketsim.models.snapshot import FeedSnapshot
from marketsim.quality import validate_series, validate_snapshot
from marketsim.registry import SubscriberRegistry
from marketsim.series import ChartPeriod, generate, line_series, series_to_frame, symbol_seed
from marketsim.volatility import VolatilityPolicy, volatility_for

__version__ = "0.1.0"

__all__ = [
    # Manager
    "MarketFeedManager",
    "create_manager_from_env",
    # Feeds
    "BaseFeed",
    "StockFeed",
    "ForexFeed",
    "CryptoFeed",
    "create_feed",
    "PRICE_FLOOR",
    "SubscriberRegistry",
    # Config
    "FeedConfig",
    "AssetClass",
    # Errors
    "MarketSimError",
    "MarketSimErrorCode",
    # Models
    "Instrument",
    "IndexMetric",
    "FeedSnapshot",
    "Candle",
    # Volatility & indices
    "VolatilityPolicy",
    "volatility_for",
    "IndexDefinition",
    "StepKind",
    # Chart series
    "ChartPeriod",
    "generate",
    "line_series",
    "series_to_frame",
    "symbol_seed",
    # Validation
    "validate_snapshot",
    "validate_series",
]


def create_manager_from_env() -> MarketFeedManager:
    """Zero-config factory that reads feed settings from ``MARKETSIM_*`` env vars.

    See ``FeedConfig.from_env`` for the variables.
    """
    return MarketFeedManager(FeedConfig.from_env())
