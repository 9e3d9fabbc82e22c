"""Command-line front end: fetch market data, price a European stock option.

Examples
--------
Price with fetched data (needs ``config.json`` with API keys)::

    quant-engine --symbol AAPL --strike 200 --maturity 0.5

Price fully offline by supplying the market triple::

    quant-engine --spot 100 --vol 0.2 --rate 0.05 --strike 100 --maturity 1 --put
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from dataclasses import replace

from .config import FetcherConfig, load_config
from .data.fetcher import DataFetcher
from .exceptions import QuantEngineError
from .instruments import european_option_from_stock_data
from .logging_config import DEFAULT_FORMAT, setup_logging
from .pricers import BlackScholesEngine
from .types import StockData

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="quant-engine",
        description="Price a European stock option with Black-Scholes.",
    )
    p.add_argument("--symbol", help="Ticker to fetch market data for, e.g. AAPL.")
    p.add_argument("--strike", type=float, required=True, help="Strike price.")
    p.add_argument(
        "--maturity", type=float, required=True, help="Time to maturity in years."
    )
    p.add_argument(
        "--notional", type=float, default=1.0, help="Contract notional (default 1)."
    )
    p.add_argument("--put", action="store_true", help="Price a put (default: call).")

    ov = p.add_argument_group(
        "market overrides",
        "Replace fetched values. Giving all three skips the network entirely.",
    )
    ov.add_argument("--spot", type=float, default=None)
    ov.add_argument("--vol", type=float, default=None)
    ov.add_argument("--rate", type=float, default=None)

    p.add_argument(
        "--config",
        default=None,
        help="Path to the API-key config (default: $QUANT_ENGINE_CONFIG or config.json).",
    )

    log = p.add_argument_group("logging")
    log.add_argument("--log-level", default="WARNING", help="e.g. INFO, DEBUG.")
    log.add_argument("--log-file", default=None, help="Optional log file path.")
    log.add_argument(
        "--color", dest="log_color", action="store_true", help="Colored console logs."
    )
    log.add_argument("--no-color", dest="log_color", action="store_false")
    p.set_defaults(log_color=False)
    return p


def _overrides(args: argparse.Namespace) -> dict[str, float]:
    out = {}
    if args.spot is not None:
        out["spot_price"] = args.spot
    if args.vol is not None:
        out["volatility"] = args.vol
    if args.rate is not None:
        out["risk_free_rate"] = args.rate
    return out


def resolve_stock_data(args: argparse.Namespace) -> StockData:
    """Fetch the market triple unless fully overridden, then apply overrides."""
    overrides = _overrides(args)
    if len(overrides) == 3:
        return StockData(**overrides)

    if not args.symbol:
        raise QuantEngineError(
            "--symbol is required unless --spot, --vol and --rate are all given"
        )

    fetcher = DataFetcher(api_keys=load_config(args.config), config=FetcherConfig())
    stock = fetcher.fetch_stock_data(args.symbol)
    if overrides:
        logger.info("Overriding fetched values: %s", sorted(overrides))
        stock = replace(stock, **overrides)
    return stock


def _print_report(stock: StockData, price: float, greeks: dict[str, float]) -> None:
    print("=== Market Data ===")
    print(f"Spot price: {stock.spot_price:.6f}")
    print(f"Volatility: {stock.volatility:.6f}")
    print(f"Risk-free rate: {stock.risk_free_rate:.6f}")
    print()
    print("=== Pricing Results ===")
    print(f"Option Price: {price:.6f}")
    print()
    print("=== Greeks ===")
    for name in sorted(greeks):
        print(f"{name}: {float(greeks[name]):.6f}")


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(
        args.log_level,
        fmt_console=DEFAULT_FORMAT,
        log_file=args.log_file,
        colored=args.log_color,
    )

    try:
        stock = resolve_stock_data(args)
        option = european_option_from_stock_data(
            stock,
            strike=args.strike,
            maturity=args.maturity,
            notional=args.notional,
            is_call=not args.put,
            engine=BlackScholesEngine(),
        )
        price = float(option.price())
        greeks = option.greeks()
    except QuantEngineError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    _print_report(stock, price, greeks)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
