"""Tests for MarketFeedManager."""

import pytest

from marketsim import create_manager_from_env
from marketsim.config import AssetClass, FeedConfig
from marketsim.errors import MarketSimError, MarketSimErrorCode
from marketsim.feeds.crypto import CryptoFeed
from marketsim.manager import MarketFeedManager
from marketsim.series import generate


@pytest.fixture
def manager():
    mgr = MarketFeedManager(FeedConfig(auto_start=False, seed=11, tick_interval=0.01))
    yield mgr
    mgr.stop()


class TestFeedLookup:
    def test_builds_all_feeds_in_order(self, manager):
        assert list(manager.feeds) == [AssetClass.STOCKS, AssetClass.FOREX, AssetClass.CRYPTO]

    def test_feed_by_string(self, manager):
        assert isinstance(manager.feed("CRYPTO"), CryptoFeed)
        assert manager.feed(AssetClass.CRYPTO) is manager.feed("crypto")

    def test_unknown_asset_class(self, manager):
        with pytest.raises(MarketSimError) as exc_info:
            manager.feed("bonds")
        assert exc_info.value.code == MarketSimErrorCode.UNKNOWN_ASSET_CLASS

    def test_unconfigured_feed(self):
        mgr = MarketFeedManager(FeedConfig(asset_classes=[AssetClass.CRYPTO], auto_start=False))
        with pytest.raises(MarketSimError) as exc_info:
            mgr.feed(AssetClass.STOCKS)
        assert exc_info.value.code == MarketSimErrorCode.UNKNOWN_ASSET_CLASS

    def test_duplicate_asset_classes_collapse(self):
        mgr = MarketFeedManager(
            FeedConfig(asset_classes=[AssetClass.FOREX, AssetClass.FOREX], auto_start=False)
        )
        assert list(mgr.feeds) == [AssetClass.FOREX]

    def test_find_instrument_across_feeds(self, manager):
        assert manager.find_instrument("reliance").asset_class == "stocks"
        assert manager.find_instrument("EURUSD").asset_class == "forex"
        assert manager.find_instrument("btc/usdt").asset_class == "crypto"
        assert manager.find_instrument("NOPE") is None


class TestTicking:
    def test_tick_all_advances_every_feed(self, manager):
        snaps = manager.tick_all()
        assert set(snaps) == set(manager.feeds)
        assert all(s.sequence == 1 for s in snaps.values())

    def test_snapshot_all_does_not_tick(self, manager):
        snaps = manager.snapshot_all()
        assert all(s.sequence == 0 for s in snaps.values())

    def test_feeds_are_independent(self, manager):
        manager.feed("stocks").tick()
        assert manager.feed("stocks").sequence == 1
        assert manager.feed("forex").sequence == 0

    def test_same_seed_reproduces(self):
        config = FeedConfig(auto_start=False, seed=5)
        a = MarketFeedManager(config).tick_all()
        b = MarketFeedManager(config).tick_all()
        for ac in a:
            assert [i.price for i in a[ac].instruments] == [i.price for i in b[ac].instruments]


class TestLifecycle:
    def test_context_manager_starts_and_stops(self):
        with MarketFeedManager(FeedConfig(auto_start=False, tick_interval=0.05)) as mgr:
            assert mgr.is_running
        assert not mgr.is_running


class TestSeries:
    def test_delegates_to_generator(self, manager, as_of):
        assert manager.series("TCS", "1M", as_of=as_of) == generate("TCS", "1M", as_of=as_of)


class TestFromEnv:
    def test_create_manager_from_env(self, monkeypatch):
        monkeypatch.setenv("MARKETSIM_FEEDS", "crypto")
        monkeypatch.setenv("MARKETSIM_AUTO_START", "false")
        mgr = create_manager_from_env()
        assert list(mgr.feeds) == [AssetClass.CRYPTO]
        assert mgr.config.auto_start is False
