"""Tests for the volatility policy tables and lookups."""

import pytest

from marketsim.config import AssetClass
from marketsim.volatility import (
    CRYPTO_VOLATILITY,
    DEFAULT_VOLATILITY,
    FOREX_VOLATILITY,
    STOCK_VOLATILITY,
    VolatilityPolicy,
    volatility_for,
)


class TestReferenceTables:
    def test_crypto_above_equities(self):
        assert min(CRYPTO_VOLATILITY.values()) > max(STOCK_VOLATILITY.values())

    def test_equities_above_forex(self):
        assert min(STOCK_VOLATILITY.values()) > max(FOREX_VOLATILITY.values())

    def test_defaults_follow_same_ordering(self):
        assert (
            DEFAULT_VOLATILITY[AssetClass.CRYPTO]
            > DEFAULT_VOLATILITY[AssetClass.STOCKS]
            > DEFAULT_VOLATILITY[AssetClass.FOREX]
        )

    def test_tables_read_only(self):
        with pytest.raises(TypeError):
            CRYPTO_VOLATILITY["BTC/USDT"] = 0.1  # type: ignore[index]

    def test_known_crypto_bounds(self):
        assert volatility_for("BTC/USDT", AssetClass.CRYPTO) == 2.5
        assert volatility_for("DOGE/USDT", AssetClass.CRYPTO) == 6.0


class TestPolicy:
    def test_unknown_symbol_gets_default(self):
        policy = VolatilityPolicy.for_asset_class(AssetClass.CRYPTO)
        assert policy.volatility_for("SHIB/USDT") == 3.0

    def test_malformed_symbol_gets_default(self):
        policy = VolatilityPolicy.for_asset_class(AssetClass.STOCKS)
        assert policy.volatility_for(None) == 0.20  # type: ignore[arg-type]
        assert policy.volatility_for("") == 0.20

    def test_case_insensitive(self):
        policy = VolatilityPolicy.for_asset_class(AssetClass.FOREX)
        assert policy.volatility_for("eurusd") == FOREX_VOLATILITY["EURUSD"]

    def test_non_positive_entry_falls_back(self):
        policy = VolatilityPolicy({"X": 0.0, "Y": -1.0}, default=1.5)
        assert policy.volatility_for("X") == 1.5
        assert policy.volatility_for("Y") == 1.5

    def test_default_must_be_positive(self):
        with pytest.raises(ValueError):
            VolatilityPolicy({}, default=0)

    def test_contains_and_bounds(self):
        policy = VolatilityPolicy({"abc": 1.0}, default=2.0)
        assert "ABC" in policy
        assert "XYZ" not in policy
        assert policy.bounds() == {"ABC": 1.0}
