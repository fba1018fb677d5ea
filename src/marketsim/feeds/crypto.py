"""Cryptocurrency pairs feed (USDT-quoted)."""

from __future__ import annotations

from marketsim.config import AssetClass
from marketsim.feeds.base import BaseFeed, make_instrument
from marketsim.indices import IndexDefinition, StepKind
from marketsim.models.instrument import Instrument

# coin id, symbol, name, price, 24h change, 24h volume, market cap, rank
_CRYPTO_SEEDS: tuple[tuple, ...] = (
    ("bitcoin", "BTC/USDT", "Bitcoin", 45234.56, 1234.56, 28_450_000_000, 885_000_000_000, 1),
    ("ethereum", "ETH/USDT", "Ethereum", 2834.89, -45.67, 15_230_000_000, 341_000_000_000, 2),
    ("binancecoin", "BNB/USDT", "BNB", 312.45, 8.92, 1_850_000_000, 48_000_000_000, 3),
    ("ripple", "XRP/USDT", "XRP", 0.6234, 0.0456, 2_340_000_000, 33_000_000_000, 4),
    ("cardano", "ADA/USDT", "Cardano", 0.4567, -0.0234, 890_000_000, 16_000_000_000, 5),
    ("solana", "SOL/USDT", "Solana", 89.76, 4.32, 1_230_000_000, 38_000_000_000, 6),
    ("dogecoin", "DOGE/USDT", "Dogecoin", 0.0789, 0.0023, 456_000_000, 11_000_000_000, 7),
    ("polygon", "MATIC/USDT", "Polygon", 0.8934, -0.0456, 678_000_000, 8_500_000_000, 8),
)


class CryptoFeed(BaseFeed):
    """Top-cap crypto pairs with 24h change measured against the price a day ago.

    Sub-dollar coins keep six decimals. Indices cover total and DeFi market
    cap, 24h volume, BTC/ETH dominance and the Fear & Greed score.
    """

    asset_class = AssetClass.CRYPTO
    unit_precision = 2
    sub_unit_precision = 6
    volume_drift = 0.05

    def _seed_instruments(self) -> list[Instrument]:
        seeds = []
        for coin_id, symbol, name, price, change_24h, volume, mcap, rank in _CRYPTO_SEEDS:
            prev = round(price - change_24h, 6)
            seeds.append(make_instrument(
                symbol=symbol,
                name=name,
                asset_class=self.asset_class,
                price=price,
                previous_close=prev,
                volume=float(volume),
                market_cap=float(mcap),
                rank=rank,
                coin_id=coin_id,
                exchange="BINANCE",
            ))
        return seeds

    def _index_definitions(self) -> list[IndexDefinition]:
        return [
            IndexDefinition("total_market_cap", "Total Market Cap", 1_750_000_000_000, bound=1.0,
                            precision=0),
            IndexDefinition("total_volume_24h", "24h Volume", 85_000_000_000, bound=5.0,
                            precision=0),
            IndexDefinition("btc_dominance", "BTC Dominance", 50.6, bound=0.1,
                            kind=StepKind.ABSOLUTE, domain=(40.0, 60.0)),
            IndexDefinition("eth_dominance", "ETH Dominance", 19.4, bound=0.1,
                            kind=StepKind.ABSOLUTE, domain=(15.0, 25.0)),
            IndexDefinition("defi_market_cap", "DeFi Market Cap", 65_000_000_000, bound=1.5,
                            precision=0),
            IndexDefinition("fear_greed", "Fear & Greed", 72.0, bound=1.0,
                            kind=StepKind.ABSOLUTE, domain=(0.0, 100.0), precision=1),
        ]

    def by_rank(self) -> list[Instrument]:
        return sorted(self.get_instruments(), key=lambda i: i.rank or 0)

    def sentiment(self) -> str:
        """Fear & Greed bucket label for the current score.

        "Neutral" when the feed carries no Fear & Greed index.
        """
        metric = self.get_indices().get("fear_greed")
        if metric is None:
            return "Neutral"
        score = metric.value
        if score < 25:
            return "Extreme Fear"
        if score < 45:
            return "Fear"
        if score <= 55:
            return "Neutral"
        if score <= 75:
            return "Greed"
        return "Extreme Greed"
