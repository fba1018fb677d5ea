"""Console entry point: run the feeds or print a chart series."""

from __future__ import annotations

import argparse
import sys
import time

from loguru import logger

from marketsim.config import AssetClass, FeedConfig
from marketsim.errors import MarketSimError
from marketsim.formatting import format_change
from marketsim.manager import MarketFeedManager
from marketsim.models.index_metric import IndexMetric
from marketsim.models.instrument import Instrument
from marketsim.series import ChartPeriod, generate, series_to_frame


def configure_logging(level: str = "INFO") -> None:
    """Replace loguru's default sink with a stderr sink at ``level``."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
    )


def _non_negative_int(value: str) -> int:
    count = int(value)
    if count < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {count}")
    return count


def _chart_period(value: str) -> ChartPeriod:
    try:
        return ChartPeriod.parse(value)
    except MarketSimError as e:
        raise argparse.ArgumentTypeError(e.message) from e


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="marketsim", description=__doc__)
    parser.add_argument("--log-level", default="INFO")
    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="tick the feeds and log the movers")
    run.add_argument(
        "--feeds",
        default="stocks,forex,crypto",
        help="comma-separated asset classes",
    )
    run.add_argument("--interval", type=float, default=3.0, help="seconds between ticks")
    run.add_argument(
        "--ticks", type=_non_negative_int, default=10, help="number of ticks (0 = forever)"
    )
    run.add_argument("--seed", type=int, default=None)
    run.add_argument("--validate", action="store_true")

    series = sub.add_parser("series", help="print the chart series for a symbol")
    series.add_argument("symbol")
    series.add_argument(
        "period",
        nargs="?",
        type=_chart_period,
        default=ChartPeriod.FIVE_DAYS,
        help="one of " + ", ".join(p.value for p in ChartPeriod) + " (any case)",
    )
    return parser


def _log_tick(feed_name: str):
    def on_tick(instruments: list[Instrument], indices: dict[str, IndexMetric]) -> None:
        best = max(instruments, key=lambda i: i.change_percent)
        worst = min(instruments, key=lambda i: i.change_percent)
        idx = ", ".join(f"{m.label} {m.value:,.2f}" for m in indices.values())
        logger.info(
            f"[{feed_name}] top {best.symbol} "
            f"{format_change(best.change, best.change_percent)} | "
            f"bottom {worst.symbol} {format_change(worst.change, worst.change_percent)} | {idx}"
        )

    return on_tick


def run_feeds(args: argparse.Namespace) -> int:
    config = FeedConfig(
        asset_classes=[AssetClass(name.strip().lower()) for name in args.feeds.split(",") if name.strip()],
        tick_interval=args.interval,
        auto_start=False,
        seed=args.seed,
        validate=args.validate,
    )
    manager = MarketFeedManager(config)
    handles = [
        feed.subscribe(_log_tick(feed.name)) for feed in manager.feeds.values()
    ]

    count = 0
    try:
        while args.ticks == 0 or count < args.ticks:
            manager.tick_all()
            count += 1
            if args.ticks == 0 or count < args.ticks:
                time.sleep(args.interval)
    except KeyboardInterrupt:
        logger.warning("Interrupted")
    finally:
        for unsubscribe in handles:
            unsubscribe()
    logger.info(f"Ran {count} ticks")
    return 0


def print_series(args: argparse.Namespace) -> int:
    candles = generate(args.symbol, args.period)
    frame = series_to_frame(candles)
    print(frame.round(2).to_string())
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        if args.command == "series":
            return print_series(args)
        return run_feeds(args)
    except (MarketSimError, ValueError) as e:
        logger.error(f"Configuration error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
