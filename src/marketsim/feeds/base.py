"""Abstract base class for simulated feeds.

A feed owns an instrument table and an index set, advances both on every
tick and broadcasts an immutable snapshot to its subscribers.
"""

from __future__ import annotations

import random
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any

from loguru import logger

from marketsim.config import AssetClass, FeedConfig
from marketsim.errors import MarketSimError, MarketSimErrorCode
from marketsim.indices import IndexDefinition, advance_indices
from marketsim.models.index_metric import IndexMetric
from marketsim.models.instrument import Instrument
from marketsim.models.snapshot import FeedSnapshot
from marketsim.quality import validate_snapshot
from marketsim.registry import SubscriberRegistry, Unsubscribe
from marketsim.timer import TickTimer
from marketsim.volatility import VolatilityPolicy

# Smallest price a random step may produce.
PRICE_FLOOR = 1e-6

SnapshotCallback = Callable[[list[Instrument], dict[str, IndexMetric]], Any]


def make_instrument(
    symbol: str,
    name: str,
    asset_class: AssetClass,
    price: float,
    previous_close: float,
    volume: float,
    day_open: float | None = None,
    day_high: float | None = None,
    day_low: float | None = None,
    **extra: Any,
) -> Instrument:
    """Build a seed record, deriving change fields from price and previous close.

    Missing session fields default to the previous close (open) and to the
    range spanned by open and price (high/low).
    """
    if price <= 0 or previous_close <= 0:
        raise ValueError(f"{symbol}: prices must be positive")
    day_open = previous_close if day_open is None else day_open
    day_high = max(day_open, price) if day_high is None else max(day_high, day_open, price)
    day_low = min(day_open, price) if day_low is None else min(day_low, day_open, price)
    change = price - previous_close
    return Instrument(
        symbol=symbol,
        name=name,
        asset_class=asset_class.value,
        price=price,
        change=change,
        change_percent=round(change / previous_close * 100, 4),
        volume=volume,
        day_open=day_open,
        day_high=day_high,
        day_low=day_low,
        previous_close=previous_close,
        **extra,
    )


class BaseFeed(ABC):
    """Instrument table + tick engine + subscriber registry for one asset class.

    Subclasses provide the seed list and the index definitions. Every
    mutation happens under the feed lock inside ``tick``; subscribers are
    called after the lock is released, with copies they are free to mutate.

    Prices at or above 1.0 round to ``unit_precision`` decimals, sub-unit
    prices to ``sub_unit_precision`` so small quotes still move visibly.
    """

    asset_class: AssetClass
    unit_precision: int = 2
    sub_unit_precision: int = 4
    # Maximum relative volume move per tick.
    volume_drift: float = 0.02

    def __init__(
        self,
        config: FeedConfig | None = None,
        volatility: VolatilityPolicy | None = None,
        instruments: Iterable[Instrument] | None = None,
        index_definitions: Iterable[IndexDefinition] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config or FeedConfig()
        self.volatility = volatility or VolatilityPolicy.for_asset_class(self.asset_class)
        self.rng = rng or random.Random(self.config.seed)

        seeds = list(instruments) if instruments is not None else self._seed_instruments()
        symbols = [i.symbol.upper() for i in seeds]
        if len(set(symbols)) != len(symbols):
            raise MarketSimError(
                f"{self.name}: duplicate symbols in seed list",
                code=MarketSimErrorCode.INVALID_CONFIG,
            )
        self._instruments: list[Instrument] = seeds

        defs = (
            list(index_definitions)
            if index_definitions is not None
            else self._index_definitions()
        )
        self._index_defs: dict[str, IndexDefinition] = {d.name: d for d in defs}
        self._indices: dict[str, IndexMetric] = {d.name: d.to_metric() for d in defs}

        self._sequence = 0
        self._timestamp = datetime.now(timezone.utc)
        self._lock = threading.RLock()
        self._lifecycle_lock = threading.Lock()
        self._registry = SubscriberRegistry(
            name=self.name,
            on_first=self._on_first_subscriber,
            on_empty=self._on_last_unsubscribed,
        )
        self._timer = TickTimer(self.tick, self.config.tick_interval, name=self.name)

    # --- Seed data (subclasses) ---

    @abstractmethod
    def _seed_instruments(self) -> list[Instrument]:
        """Return the fixed seed list, in display order."""
        ...

    @abstractmethod
    def _index_definitions(self) -> list[IndexDefinition]:
        """Return the index set definitions, in display order."""
        ...

    @property
    def name(self) -> str:
        return self.asset_class.value

    # --- Read API ---

    def get_instruments(self) -> list[Instrument]:
        """Current instruments. The list is a fresh copy; records are frozen."""
        with self._lock:
            return list(self._instruments)

    def get_indices(self) -> dict[str, IndexMetric]:
        with self._lock:
            return dict(self._indices)

    def get_instrument(self, symbol: str) -> Instrument | None:
        """Look up one instrument by symbol (case-insensitive); None if unknown."""
        if not isinstance(symbol, str):
            return None
        key = symbol.strip().upper()
        with self._lock:
            for inst in self._instruments:
                if inst.symbol.upper() == key:
                    return inst
        return None

    def require_instrument(self, symbol: str) -> Instrument:
        """Strict variant of ``get_instrument`` for callers that need a hit."""
        inst = self.get_instrument(symbol)
        if inst is None:
            raise MarketSimError(
                f"{self.name}: unknown symbol {symbol!r}",
                code=MarketSimErrorCode.NOT_FOUND,
            )
        return inst

    def symbols(self) -> list[str]:
        with self._lock:
            return [i.symbol for i in self._instruments]

    def snapshot(self) -> FeedSnapshot:
        with self._lock:
            return self._take_snapshot()

    @property
    def sequence(self) -> int:
        return self._sequence

    # --- Subscriptions & lifecycle ---

    def subscribe(self, callback: SnapshotCallback) -> Unsubscribe:
        """Register for every future tick's ``(instruments, indices)``.

        Nothing is delivered on registration; read ``get_instruments`` and
        ``get_indices`` for the initial state. Call the returned handle to
        unsubscribe.
        """
        return self._registry.subscribe(callback)

    @property
    def subscriber_count(self) -> int:
        return len(self._registry)

    @property
    def is_running(self) -> bool:
        return self._timer.is_running

    def start(self) -> None:
        self._timer.start()

    def stop(self) -> None:
        self._timer.stop()

    # Registry hooks run outside the registry lock: re-check the count under
    # the lifecycle lock, and join the worker only after releasing it.

    def _on_first_subscriber(self) -> None:
        if not self.config.auto_start:
            return
        with self._lifecycle_lock:
            if len(self._registry) > 0:
                self._timer.start()

    def _on_last_unsubscribed(self) -> None:
        if not self.config.auto_start:
            return
        with self._lifecycle_lock:
            if len(self._registry) > 0:
                return
            worker = self._timer.stop(wait=False)
        if worker is not None:
            worker.join()

    # --- Tick engine ---

    def tick(self) -> FeedSnapshot:
        """Advance instruments and indices once, then broadcast the snapshot."""
        with self._lock:
            self.advance_one_tick()
            self.advance_indices()
            self._sequence += 1
            snap = self._take_snapshot()

        if self.config.validate:
            result = validate_snapshot(snap)
            if not result.passed:
                msgs = "; ".join(c.message for c in result.failed_checks)
                logger.warning(f"[{self.name}] tick {snap.sequence} failed validation: {msgs}")

        delivered = self._registry.broadcast(list(snap.instruments), dict(snap.indices))
        logger.debug(
            f"[{self.name}] tick {snap.sequence}: {len(snap.instruments)} instruments, "
            f"{delivered} subscribers notified"
        )
        return snap

    def advance_one_tick(self) -> None:
        """Step every instrument; a failing record keeps its previous state."""
        with self._lock:
            now = datetime.now(timezone.utc)
            for idx, inst in enumerate(self._instruments):
                try:
                    self._instruments[idx] = self._step_instrument(inst, now)
                except Exception:
                    logger.exception(f"[{self.name}] failed to advance {inst.symbol}")
            self._timestamp = now

    def advance_indices(self) -> None:
        with self._lock:
            self._indices = advance_indices(self._indices, self._index_defs, self.rng)

    def price_decimals(self, price: float) -> int:
        return self.unit_precision if price >= 1.0 else self.sub_unit_precision

    def round_price(self, price: float) -> float:
        return round(price, self.price_decimals(price))

    def _step_instrument(self, inst: Instrument, now: datetime) -> Instrument:
        v = self.volatility.volatility_for(inst.symbol)
        r = self.rng.uniform(-v, v)
        new_price = max(PRICE_FLOOR, self.round_price(inst.price * (1 + r / 100)))

        change = round(new_price - inst.previous_close, self.sub_unit_precision)
        change_percent = round(change / inst.previous_close * 100, 4)

        drift = self.rng.uniform(-self.volume_drift, self.volume_drift)
        volume = max(0.0, float(round(inst.volume * (1 + drift))))

        return replace(
            inst,
            price=new_price,
            change=change,
            change_percent=change_percent,
            volume=volume,
            day_high=max(inst.day_high, new_price),
            day_low=min(inst.day_low, new_price),
            updated_at=now,
        )

    def _take_snapshot(self) -> FeedSnapshot:
        return FeedSnapshot(
            asset_class=self.name,
            sequence=self._sequence,
            timestamp=self._timestamp,
            instruments=tuple(self._instruments),
            indices=dict(self._indices),
        )

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(instruments={len(self._instruments)}, "
            f"indices={len(self._indices)}, running={self.is_running})"
        )
