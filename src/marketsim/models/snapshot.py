"""Feed snapshot data model: one consistent view of a feed at one tick."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Mapping

from marketsim.models.index_metric import IndexMetric
from marketsim.models.instrument import Instrument


@dataclass(frozen=True)
class FeedSnapshot:
    """Immutable view of every instrument and index at one tick.

    Attributes:
        asset_class: Feed family that produced the snapshot.
        sequence: Tick number (0 before the first tick).
        timestamp: When the snapshot was taken.
        instruments: Instrument records in seed order.
        indices: Index metrics keyed by name (read-only mapping).
    """

    asset_class: str
    sequence: int
    timestamp: datetime
    instruments: tuple[Instrument, ...]
    indices: Mapping[str, IndexMetric] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self) -> None:
        if not isinstance(self.indices, MappingProxyType):
            object.__setattr__(self, "indices", MappingProxyType(dict(self.indices)))

    def get(self, symbol: str) -> Instrument | None:
        key = symbol.upper()
        for inst in self.instruments:
            if inst.symbol.upper() == key:
                return inst
        return None

    @property
    def gainers(self) -> list[Instrument]:
        """Instruments trading up, best first."""
        up = [i for i in self.instruments if i.change_percent > 0]
        return sorted(up, key=lambda i: i.change_percent, reverse=True)

    @property
    def losers(self) -> list[Instrument]:
        """Instruments trading down, worst first."""
        down = [i for i in self.instruments if i.change_percent < 0]
        return sorted(down, key=lambda i: i.change_percent)
