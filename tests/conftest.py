"""Shared fixtures for marketsim tests."""

from __future__ import annotations

import random
import sys
from datetime import date
from pathlib import Path

import pytest
from loguru import logger

# Ensure src/ is on the path for editable-style imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from marketsim.config import AssetClass, FeedConfig
from marketsim.feeds.base import make_instrument
from marketsim.feeds.crypto import CryptoFeed
from marketsim.feeds.forex import ForexFeed
from marketsim.feeds.stocks import StockFeed
from marketsim.models.instrument import Instrument


@pytest.fixture
def manual_config() -> FeedConfig:
    """Seeded config with the timer decoupled from subscribers."""
    return FeedConfig(auto_start=False, seed=42, tick_interval=0.01)


@pytest.fixture
def stock_feed(manual_config) -> StockFeed:
    return StockFeed(config=manual_config)


@pytest.fixture
def forex_feed(manual_config) -> ForexFeed:
    return ForexFeed(config=manual_config)


@pytest.fixture
def crypto_feed(manual_config) -> CryptoFeed:
    return CryptoFeed(config=manual_config)


@pytest.fixture(params=[StockFeed, ForexFeed, CryptoFeed], ids=["stocks", "forex", "crypto"])
def any_feed(request, manual_config):
    feed = request.param(config=manual_config)
    yield feed
    feed.stop()


@pytest.fixture
def flat_instrument() -> Instrument:
    """Instrument X at 100 with a flat session (open = high = low = close = 100)."""
    return make_instrument(
        symbol="X",
        name="Test Instrument",
        asset_class=AssetClass.STOCKS,
        price=100.0,
        previous_close=100.0,
        volume=1000.0,
    )


@pytest.fixture
def rng() -> random.Random:
    return random.Random(7)


@pytest.fixture
def as_of() -> date:
    return date(2024, 6, 14)


@pytest.fixture
def log_messages():
    """Capture loguru output as plain messages."""
    messages: list[str] = []
    token = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(token)
