"""Tests for the console entry point."""

import sys

import pytest
from loguru import logger

from marketsim.cli import main


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    logger.remove()
    logger.add(sys.stderr)


class TestSeriesCommand:
    def test_prints_frame(self, capsys):
        assert main(["series", "BTC/USDT", "5D"]) == 0
        out = capsys.readouterr().out
        assert "close" in out
        assert len(out.strip().splitlines()) == 2 + 5

    def test_default_period(self, capsys):
        assert main(["series", "TCS"]) == 0
        assert "open" in capsys.readouterr().out

    def test_period_is_case_insensitive(self, capsys):
        assert main(["series", "TCS", "5d"]) == 0
        assert len(capsys.readouterr().out.strip().splitlines()) == 2 + 5

    def test_rejects_unknown_period(self):
        with pytest.raises(SystemExit):
            main(["series", "TCS", "2W"])


class TestRunCommand:
    def test_runs_fixed_ticks(self):
        assert main(["run", "--ticks", "2", "--interval", "0.01", "--seed", "1"]) == 0

    def test_single_feed_with_validation(self):
        args = ["run", "--feeds", "crypto", "--ticks", "1", "--interval", "0.01", "--validate"]
        assert main(args) == 0

    def test_rejects_negative_ticks(self):
        with pytest.raises(SystemExit):
            main(["run", "--ticks", "-1"])

    def test_unknown_feed_returns_error(self):
        assert main(["run", "--feeds", "bonds", "--ticks", "1"]) == 1

    def test_bad_interval_returns_error(self):
        assert main(["run", "--interval", "0", "--ticks", "1"]) == 1
