"""Major currency pairs feed."""

from __future__ import annotations

from marketsim.config import AssetClass
from marketsim.feeds.base import BaseFeed, make_instrument
from marketsim.indices import IndexDefinition, StepKind
from marketsim.models.instrument import Instrument

# symbol, name, price, previous close, open, high, low, volume, spread, pip value
_FOREX_SEEDS: tuple[tuple, ...] = (
    ("USDINR", "US Dollar / Indian Rupee", 83.2450, 83.1200, 83.2100, 83.3200, 83.1800,
     2567890, 0.0050, 0.0001),
    ("EURUSD", "Euro / US Dollar", 1.0850, 1.0875, 1.0865, 1.0875, 1.0835,
     4567890, 0.0002, 0.0001),
    ("GBPUSD", "British Pound / US Dollar", 1.2650, 1.2615, 1.2635, 1.2675, 1.2620,
     3456789, 0.0003, 0.0001),
    ("USDJPY", "US Dollar / Japanese Yen", 149.850, 150.170, 150.050, 150.200, 149.650,
     2876543, 0.050, 0.01),
    ("AUDUSD", "Australian Dollar / US Dollar", 0.6580, 0.6565, 0.6575, 0.6595, 0.6565,
     1876543, 0.0002, 0.0001),
    ("USDCAD", "US Dollar / Canadian Dollar", 1.3620, 1.3665, 1.3640, 1.3655, 1.3610,
     1567890, 0.0003, 0.0001),
    ("NZDUSD", "New Zealand Dollar / US Dollar", 0.6120, 0.6095, 0.6105, 0.6135, 0.6095,
     987654, 0.0003, 0.0001),
    ("USDCHF", "US Dollar / Swiss Franc", 0.8750, 0.8765, 0.8760, 0.8775, 0.8740,
     1234567, 0.0002, 0.0001),
)


class ForexFeed(BaseFeed):
    """Eight major pairs quoted to four decimals.

    Indices: the dollar index (DXY) and EUR/GBP currency indices, each with a
    plausible clamp band.
    """

    asset_class = AssetClass.FOREX
    # Quotes keep four decimals on both sides of 1.0; pips sit at the 4th place.
    unit_precision = 4
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
                spread=spread,
                pip_value=pip,
            )
            for symbol, name, price, prev, open_, high, low, volume, spread, pip
            in _FOREX_SEEDS
        ]

    def _index_definitions(self) -> list[IndexDefinition]:
        return [
            IndexDefinition(
                "dxy", "US Dollar Index", 103.85, bound=0.1, kind=StepKind.ABSOLUTE,
                base_value=104.00, domain=(90.0, 115.0),
            ),
            IndexDefinition(
                "eur", "Euro Index", 1.0850, bound=0.001, kind=StepKind.ABSOLUTE,
                base_value=1.0875, domain=(0.9, 1.3), precision=4,
            ),
            IndexDefinition(
                "gbp", "Pound Index", 1.2650, bound=0.001, kind=StepKind.ABSOLUTE,
                base_value=1.2615, domain=(1.0, 1.5), precision=4,
            ),
        ]

    def pip_change(self, symbol: str) -> float | None:
        """Distance from the previous close in pips; None for unknown pairs."""
        inst = self.get_instrument(symbol)
        if inst is None or not inst.pip_value:
            return None
        return round(inst.change / inst.pip_value, 1)

    def pip_distance(self, symbol: str, price_a: float, price_b: float) -> float | None:
        """Absolute distance between two quotes of ``symbol`` in pips."""
        inst = self.get_instrument(symbol)
        if inst is None or not inst.pip_value:
            return None
        return round(abs(price_a - price_b) / inst.pip_value, 1)
