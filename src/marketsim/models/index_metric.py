"""Aggregate index metric data model."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class IndexMetric:
    """A derived aggregate such as a composite index or a dominance share.

    Attributes:
        name: Key within the feed's index set (e.g. ``"nifty50"``).
        label: Display label (e.g. ``"NIFTY 50"``).
        value: Current value.
        change: ``value - base_value``.
        change_percent: ``change / base_value * 100``.
        base_value: Reference value the change is measured against.
        domain: Optional ``(min, max)`` clamp bounds for ``value``.
    """

    name: str
    label: str
    value: float
    change: float
    change_percent: float
    base_value: float
    domain: tuple[float, float] | None = None

    def in_domain(self) -> bool:
        if self.domain is None:
            return True
        low, high = self.domain
        return low <= self.value <= high
