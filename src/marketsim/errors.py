"""Market simulator error types."""

from __future__ import annotations

from enum import Enum


class MarketSimErrorCode(Enum):
    """Error classification codes."""

    NOT_FOUND = "not_found"
    INVALID_PERIOD = "invalid_period"
    INVALID_CONFIG = "invalid_config"
    UNKNOWN_ASSET_CLASS = "unknown_asset_class"


class MarketSimError(Exception):
    """Simulator exception with an error code.

    Only raised for caller mistakes (bad configuration, unknown chart period,
    strict lookups). The tick loop itself never raises.

    Attributes:
        message: Human-readable error description.
        code: Structured error code for programmatic handling.
    """

    def __init__(
        self,
        message: str,
        code: MarketSimErrorCode = MarketSimErrorCode.NOT_FOUND,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
