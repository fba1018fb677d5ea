"""Invariant checks for feed snapshots and chart series."""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from marketsim.models.candle import Candle
from marketsim.models.index_metric import IndexMetric
from marketsim.models.instrument import Instrument
from marketsim.models.snapshot import FeedSnapshot

# Allowed gap between stored change_percent and change / previous_close * 100.
CHANGE_PERCENT_TOLERANCE = 1e-3


@dataclass
class ValidationCheck:
    """Single validation check result."""

    name: str
    passed: bool
    message: str = ""


@dataclass
class ValidationResult:
    """Aggregate validation result."""

    checks: list[ValidationCheck] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(c.passed for c in self.checks)

    @property
    def failed_checks(self) -> list[ValidationCheck]:
        return [c for c in self.checks if not c.passed]

    def check(self, name: str) -> ValidationCheck:
        return next(c for c in self.checks if c.name == name)


def _record(result: ValidationResult, name: str, bad: list[str], what: str) -> None:
    if bad:
        shown = ", ".join(bad[:5])
        more = f" (+{len(bad) - 5} more)" if len(bad) > 5 else ""
        result.checks.append(ValidationCheck(name, False, f"{what}: {shown}{more}"))
    else:
        result.checks.append(ValidationCheck(name, True))


def validate_instruments(instruments: Iterable[Instrument]) -> ValidationResult:
    """Check instrument invariants.

    Checks:
        1. Not empty
        2. Finite numbers
        3. Positive price
        4. Day range brackets open and price
        5. change_percent consistent with change / previous_close
        6. Non-negative volume
    """
    instruments = list(instruments)
    result = ValidationResult()

    if not instruments:
        result.checks.append(ValidationCheck("not_empty", False, "No instruments provided"))
        return result
    result.checks.append(ValidationCheck("not_empty", True, f"{len(instruments)} instruments"))

    non_finite = [
        i.symbol for i in instruments
        if not all(
            math.isfinite(v)
            for v in (i.price, i.change, i.change_percent, i.day_high, i.day_low, i.volume)
        )
    ]
    _record(result, "finite", non_finite, "NaN/Inf values")

    _record(
        result, "positive_price",
        [i.symbol for i in instruments if not i.price > 0],
        "non-positive price",
    )

    _record(
        result, "day_range",
        [
            i.symbol for i in instruments
            if i.day_high < max(i.day_open, i.price) or i.day_low > min(i.day_open, i.price)
        ],
        "day range does not bracket open/price",
    )

    inconsistent = []
    for i in instruments:
        if i.previous_close <= 0:
            inconsistent.append(i.symbol)
            continue
        expected = i.change / i.previous_close * 100
        if abs(expected - i.change_percent) > CHANGE_PERCENT_TOLERANCE:
            inconsistent.append(i.symbol)
    _record(result, "change_consistency", inconsistent, "change_percent mismatch")

    _record(
        result, "volume_sanity",
        [i.symbol for i in instruments if i.volume < 0],
        "negative volume",
    )
    return result


def validate_indices(indices: Mapping[str, IndexMetric]) -> ValidationResult:
    """Check that finite values stay inside their declared domain."""
    result = ValidationResult()
    _record(
        result, "index_finite",
        [name for name, m in indices.items() if not math.isfinite(m.value)],
        "NaN/Inf index values",
    )
    _record(
        result, "index_domain",
        [name for name, m in indices.items() if not m.in_domain()],
        "index outside domain",
    )
    return result


def validate_snapshot(snapshot: FeedSnapshot) -> ValidationResult:
    result = validate_instruments(snapshot.instruments)
    result.checks.extend(validate_indices(snapshot.indices).checks)
    return result


def validate_series(candles: list[Candle]) -> ValidationResult:
    """Check a chart series.

    Checks:
        1. Not empty
        2. OHLC consistency (low <= open/close <= high)
        3. Positive prices
        4. Strictly increasing dates
    """
    result = ValidationResult()
    if not candles:
        result.checks.append(ValidationCheck("not_empty", False, "No candles provided"))
        return result
    result.checks.append(ValidationCheck("not_empty", True, f"{len(candles)} candles"))

    _record(
        result, "ohlc_consistency",
        [
            c.date.isoformat() for c in candles
            if c.high < max(c.open, c.close) or c.low > min(c.open, c.close)
        ],
        "candles with H<O/C or L>O/C",
    )
    _record(
        result, "positive_price",
        [c.date.isoformat() for c in candles if c.low <= 0],
        "non-positive low",
    )
    _record(
        result, "date_order",
        [
            candles[i].date.isoformat() for i in range(1, len(candles))
            if candles[i].date <= candles[i - 1].date
        ],
        "out of order",
    )
    return result
