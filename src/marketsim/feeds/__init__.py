"""Simulated feed registry."""

from __future__ import annotations

from marketsim.config import AssetClass
from marketsim.errors import MarketSimError, MarketSimErrorCode
from marketsim.feeds.base import PRICE_FLOOR, BaseFeed, make_instrument

# Lazy registry: feed modules (and their seed tables) load on demand.
FEED_CLASSES: dict[AssetClass, str] = {
    AssetClass.STOCKS: "marketsim.feeds.stocks.StockFeed",
    AssetClass.FOREX: "marketsim.feeds.forex.ForexFeed",
    AssetClass.CRYPTO: "marketsim.feeds.crypto.CryptoFeed",
}


def create_feed(
    asset_class: AssetClass | str,
    **kwargs,
) -> BaseFeed:
    """Instantiate a feed by asset class, forwarding kwargs to its constructor."""
    import importlib

    if isinstance(asset_class, str):
        try:
            asset_class = AssetClass(asset_class.lower())
        except ValueError as e:
            raise MarketSimError(
                f"Unknown asset class {asset_class!r}",
                code=MarketSimErrorCode.UNKNOWN_ASSET_CLASS,
            ) from e

    dotted = FEED_CLASSES[asset_class]
    module_path, cls_name = dotted.rsplit(".", 1)
    module = importlib.import_module(module_path)
    cls = getattr(module, cls_name)
    return cls(**kwargs)


__all__ = ["BaseFeed", "FEED_CLASSES", "PRICE_FLOOR", "create_feed", "make_instrument"]
