"""Indian equities and commodity futures feed."""

from __future__ import annotations

from marketsim.config import AssetClass
from marketsim.feeds.base import BaseFeed, make_instrument
from marketsim.indices import IndexDefinition
from marketsim.models.instrument import Instrument

# symbol, name, price, previous close, open, high, low, volume, market cap, sector, exchange
_STOCK_SEEDS: tuple[tuple, ...] = (
    ("RELIANCE", "Reliance Industries Ltd.", 2456.75, 2433.30, 2435.60, 2489.30, 2425.80,
     4567890, 16_600_000_000_000, "Oil & Gas", "NSE"),
    ("TCS", "Tata Consultancy Services Ltd.", 3567.80, 3613.00, 3590.20, 3598.45, 3545.60,
     2345678, 13_000_000_000_000, "IT Services", "NSE"),
    ("HDFCBANK", "HDFC Bank Ltd.", 1678.95, 1666.60, 1669.40, 1689.75, 1665.20,
     3456789, 12_800_000_000_000, "Banking", "NSE"),
    ("INFY", "Infosys Ltd.", 1534.50, 1515.75, 1525.80, 1548.90, 1521.30,
     1876543, 6_400_000_000_000, "IT Services", "NSE"),
    ("ICICIBANK", "ICICI Bank Ltd.", 1089.45, 1098.35, 1098.30, 1105.60, 1085.20,
     4123456, 7_600_000_000_000, "Banking", "NSE"),
    ("HINDUNILVR", "Hindustan Unilever Ltd.", 2234.60, 2199.80, 2215.70, 2245.90, 2210.40,
     987654, 5_200_000_000_000, "FMCG", "NSE"),
    ("ITC", "ITC Ltd.", 456.30, 458.75, 458.90, 461.80, 454.20,
     5678901, 5_700_000_000_000, "FMCG", "BSE"),
    ("SBIN", "State Bank of India", 645.80, 637.35, 641.20, 652.30, 638.90,
     6789012, 5_800_000_000_000, "Banking", "BSE"),
    ("BHARTIARTL", "Bharti Airtel Ltd.", 1298.75, 1283.15, 1289.30, 1308.40, 1285.90,
     2345671, 7_100_000_000_000, "Telecom", "BSE"),
    ("ASIANPAINT", "Asian Paints Ltd.", 2987.45, 2999.80, 2998.90, 3005.80, 2975.60,
     876543, 2_900_000_000_000, "Paints", "BSE"),
    ("GOLDPETAL", "Gold Petals Ltd.", 52340.50, 52095.20, 52150.80, 52580.20, 52100.40,
     125000, 850_000_000_000, "Commodities", "MCX"),
    ("CRUDEOIL", "Crude Oil Futures", 6789.25, 6912.70, 6845.60, 6890.75, 6745.30,
     875000, 450_000_000_000, "Energy", "MCX"),
    ("CDSL", "Central Depository Services Ltd.", 1456.80, 1433.35, 1450.60, 1475.20, 1442.30,
     234567, 150_000_000_000, "Financial Services", "CDSL"),
    ("NSDL", "National Securities Depository Ltd.", 2234.50, 2250.30, 2248.90, 2265.40, 2225.70,
     156789, 180_000_000_000, "Financial Services", "CDSL"),
    ("WHEAT", "Wheat Futures", 2145.75, 2113.25, 2135.80, 2165.20, 2128.40,
     567890, 75_000_000_000, "Agriculture", "NCDEX"),
    ("SUGARCANE", "Sugar Futures", 3456.90, 3524.15, 3498.40, 3534.80, 3445.60,
     345678, 65_000_000_000, "Agriculture", "NCDEX"),
)

EXCHANGES = ("NSE", "BSE", "MCX", "CDSL", "NCDEX")


class StockFeed(BaseFeed):
    """NSE/BSE equities plus MCX, CDSL and NCDEX listings.

    Indices: NIFTY 50, SENSEX and BANK NIFTY, each walking up to 0.1% a tick.
    """

    asset_class = AssetClass.STOCKS
    unit_precision = 2
    sub_unit_precision = 4
    volume_drift = 0.02

    def _seed_instruments(self) -> list[Instrument]:
        return [
            make_instrument(
                symbol=symbol,
                name=name,
                asset_class=self.asset_class,
                price=price,
                previous_close=prev,
                day_open=open_,
                day_high=high,
                day_low=low,
                volume=float(volume),
                market_cap=float(mcap),
                sector=sector,
                exchange=exchange,
            )
            for symbol, name, price, prev, open_, high, low, volume, mcap, sector, exchange
            in _STOCK_SEEDS
        ]

    def _index_definitions(self) -> list[IndexDefinition]:
        return [
            IndexDefinition("nifty50", "NIFTY 50", 19674.25, bound=0.1, base_value=19550.80),
            IndexDefinition("sensex", "SENSEX", 65953.48, bound=0.1, base_value=65707.81),
            IndexDefinition("bank_nifty", "BANK NIFTY", 45234.80, bound=0.1, base_value=45324.05),
        ]

    def by_exchange(self, exchange: str) -> list[Instrument]:
        key = exchange.upper()
        return [i for i in self.get_instruments() if (i.exchange or "").upper() == key]

    def by_sector(self, sector: str) -> list[Instrument]:
        key = sector.lower()
        return [i for i in self.get_instruments() if (i.sector or "").lower() == key]

    def sectors(self) -> list[str]:
        seen: dict[str, None] = {}
        for inst in self.get_instruments():
            if inst.sector:
                seen.setdefault(inst.sector, None)
        return list(seen)
