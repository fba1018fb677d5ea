"""Feed configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum

from marketsim.errors import MarketSimError, MarketSimErrorCode


class AssetClass(Enum):
    """Simulated feed families."""

    STOCKS = "stocks"
    FOREX = "forex"
    CRYPTO = "crypto"


_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise MarketSimError(
        f"{name} must be a boolean, got {raw!r}",
        code=MarketSimErrorCode.INVALID_CONFIG,
    )


@dataclass
class FeedConfig:
    """Configuration for feeds and MarketFeedManager.

    Attributes:
        asset_classes: Feeds to build, in display order.
        tick_interval: Seconds between ticks while a feed is running.
        auto_start: Start the tick timer when the first subscriber arrives and
            stop it when the last one leaves.
        seed: Seed for each feed's random walk. ``None`` draws from OS entropy.
        validate: Run quality checks on every snapshot and log failures.
    """

    asset_classes: list[AssetClass] = field(
        default_factory=lambda: [AssetClass.STOCKS, AssetClass.FOREX, AssetClass.CRYPTO]
    )
    tick_interval: float = 3.0
    auto_start: bool = True
    seed: int | None = None
    validate: bool = False

    def __post_init__(self) -> None:
        if self.tick_interval <= 0:
            raise MarketSimError(
                f"tick_interval must be positive, got {self.tick_interval}",
                code=MarketSimErrorCode.INVALID_CONFIG,
            )

    @classmethod
    def from_env(cls) -> FeedConfig:
        """Build a config from environment variables.

        Environment variables:
            MARKETSIM_FEEDS: Comma-separated asset classes (default: all three).
            MARKETSIM_TICK_INTERVAL: Seconds between ticks (default: 3.0).
            MARKETSIM_AUTO_START: Couple the timer to subscriber count (default: true).
            MARKETSIM_SEED: Integer seed for reproducible walks (default: unset).
            MARKETSIM_VALIDATE: Validate every snapshot (default: false).
        """
        feeds_str = os.getenv("MARKETSIM_FEEDS", "stocks,forex,crypto")
        try:
            asset_classes = [
                AssetClass(name.strip().lower())
                for name in feeds_str.split(",")
                if name.strip()
            ]
        except ValueError as e:
            raise MarketSimError(
                f"MARKETSIM_FEEDS: {e}",
                code=MarketSimErrorCode.UNKNOWN_ASSET_CLASS,
            ) from e

        try:
            tick_interval = float(os.getenv("MARKETSIM_TICK_INTERVAL", "3.0"))
        except ValueError as e:
            raise MarketSimError(
                f"MARKETSIM_TICK_INTERVAL: {e}",
                code=MarketSimErrorCode.INVALID_CONFIG,
            ) from e

        seed_raw = os.getenv("MARKETSIM_SEED")
        seed: int | None = None
        if seed_raw:
            try:
                seed = int(seed_raw)
            except ValueError as e:
                raise MarketSimError(
                    f"MARKETSIM_SEED: {e}",
                    code=MarketSimErrorCode.INVALID_CONFIG,
                ) from e

        return cls(
            asset_classes=asset_classes,
            tick_interval=tick_interval,
            auto_start=_parse_bool(
                "MARKETSIM_AUTO_START", os.getenv("MARKETSIM_AUTO_START", "true")
            ),
            seed=seed,
            validate=_parse_bool(
                "MARKETSIM_VALIDATE", os.getenv("MARKETSIM_VALIDATE", "false")
            ),
        )
