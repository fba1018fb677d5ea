"""Market simulator models."""

from marketsim.models.candle import Candle
from marketsim.models.index_metric import IndexMetric
from marketsim.models.instrument import Instrument
from marketsim.models.snapshot import FeedSnapshot

__all__ = [
    "Candle",
    "FeedSnapshot",
    "IndexMetric",
    "Instrument",
]
