"""Index set: aggregate metrics updated alongside the instruments.

Each metric walks independently. A relative step moves the value by up to
``bound`` percent; an absolute step moves it by up to ``bound`` points.
Metrics with a domain are clamped after the step so they never leave it.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum

from loguru import logger

from marketsim.models.index_metric import IndexMetric


class StepKind(Enum):
    RELATIVE = "relative"
    ABSOLUTE = "absolute"


@dataclass(frozen=True)
class IndexDefinition:
    """Seed value and walk parameters for one index metric.

    Attributes:
        name: Key within the index set.
        label: Display label.
        value: Starting value.
        base_value: Reference for change. Defaults to ``value``.
        bound: Maximum step, percent (relative) or points (absolute).
        kind: How ``bound`` is applied.
        domain: Optional ``(min, max)`` clamp.
        precision: Decimal places the value is rounded to.
    """

    name: str
    label: str
    value: float
    bound: float
    kind: StepKind = StepKind.RELATIVE
    base_value: float | None = None
    domain: tuple[float, float] | None = None
    precision: int = 2

    def to_metric(self) -> IndexMetric:
        base = self.base_value if self.base_value is not None else self.value
        change = self.value - base
        return IndexMetric(
            name=self.name,
            label=self.label,
            value=float(self.value),
            change=round(change, self.precision),
            change_percent=round(change / base * 100, 4) if base else 0.0,
            base_value=float(base),
            domain=self.domain,
        )


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def step_index(
    metric: IndexMetric,
    definition: IndexDefinition,
    rng: random.Random,
) -> IndexMetric:
    """Advance one metric by a bounded random step."""
    r = rng.uniform(-definition.bound, definition.bound)
    if definition.kind is StepKind.RELATIVE:
        delta = metric.value * r / 100
    else:
        delta = r

    value = round(metric.value + delta, definition.precision)
    if metric.domain is not None:
        value = clamp(value, *metric.domain)

    change = value - metric.base_value
    change_percent = change / metric.base_value * 100 if metric.base_value else 0.0
    return IndexMetric(
        name=metric.name,
        label=metric.label,
        value=value,
        change=round(change, definition.precision),
        change_percent=round(change_percent, 4),
        base_value=metric.base_value,
        domain=metric.domain,
    )


def advance_indices(
    indices: dict[str, IndexMetric],
    definitions: dict[str, IndexDefinition],
    rng: random.Random,
) -> dict[str, IndexMetric]:
    """Step every metric.

    Metrics without a definition are carried over, as is any metric whose
    step fails.
    """
    advanced: dict[str, IndexMetric] = {}
    for name, metric in indices.items():
        definition = definitions.get(name)
        if definition is None:
            advanced[name] = metric
            continue
        try:
            advanced[name] = step_index(metric, definition, rng)
        except Exception:
            logger.exception(f"failed to advance index {name}")
            advanced[name] = metric
    return advanced
