"""MarketFeedManager: composition root owning one feed per asset class."""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from types import TracebackType

from loguru import logger

from marketsim.config import AssetClass, FeedConfig
from marketsim.errors import MarketSimError, MarketSimErrorCode
from marketsim.feeds import create_feed
from marketsim.feeds.base import BaseFeed
from marketsim.models.candle import Candle
from marketsim.models.instrument import Instrument
from marketsim.models.snapshot import FeedSnapshot
from marketsim.series import ChartPeriod, generate


class MarketFeedManager:
    """Builds and owns the configured feeds; feeds share no state.

    Usage::

        from marketsim import MarketFeedManager, FeedConfig
        with MarketFeedManager(FeedConfig(tick_interval=1.0)) as mgr:
            unsubscribe = mgr.feed("crypto").subscribe(on_tick)
            ...
    """

    def __init__(self, config: FeedConfig | None = None) -> None:
        self.config = config or FeedConfig()

        self.feeds: dict[AssetClass, BaseFeed] = {}
        for i, asset_class in enumerate(self.config.asset_classes):
            if asset_class in self.feeds:
                continue
            feed_config = self.config
            if self.config.seed is not None:
                # Distinct, still reproducible streams per feed.
                feed_config = replace(self.config, seed=self.config.seed + i)
            self.feeds[asset_class] = create_feed(asset_class, config=feed_config)

    # ------------------------------------------------------------- feeds

    def feed(self, asset_class: AssetClass | str) -> BaseFeed:
        if isinstance(asset_class, str):
            try:
                asset_class = AssetClass(asset_class.lower())
            except ValueError as e:
                raise MarketSimError(
                    f"Unknown asset class {asset_class!r}",
                    code=MarketSimErrorCode.UNKNOWN_ASSET_CLASS,
                ) from e
        try:
            return self.feeds[asset_class]
        except KeyError:
            raise MarketSimError(
                f"Feed {asset_class.value!r} is not configured",
                code=MarketSimErrorCode.UNKNOWN_ASSET_CLASS,
            ) from None

    def find_instrument(self, symbol: str) -> Instrument | None:
        """Search every feed, in configured order."""
        for feed in self.feeds.values():
            inst = feed.get_instrument(symbol)
            if inst is not None:
                return inst
        return None

    def snapshot_all(self) -> dict[AssetClass, FeedSnapshot]:
        return {ac: feed.snapshot() for ac, feed in self.feeds.items()}

    def tick_all(self) -> dict[AssetClass, FeedSnapshot]:
        """Advance every feed once, without the timers."""
        return {ac: feed.tick() for ac, feed in self.feeds.items()}

    # ------------------------------------------------------------- charts

    def series(
        self,
        symbol: str,
        period: ChartPeriod | str = ChartPeriod.FIVE_DAYS,
        as_of: date | None = None,
    ) -> list[Candle]:
        return generate(symbol, period, as_of=as_of)

    # ---------------------------------------------------------- lifecycle

    def start(self) -> None:
        for feed in self.feeds.values():
            feed.start()
        logger.info(f"Started feeds: {', '.join(ac.value for ac in self.feeds)}")

    def stop(self) -> None:
        for feed in self.feeds.values():
            feed.stop()
        logger.info("Stopped all feeds")

    @property
    def is_running(self) -> bool:
        return any(feed.is_running for feed in self.feeds.values())

    def __enter__(self) -> MarketFeedManager:
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.stop()
