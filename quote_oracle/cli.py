"""Command-line entry point: run price-equivalence scenarios against RPC backends.

Usage:
    quote-oracle --rpc-url http://127.0.0.1:8545 \
        --estimator-address 0x... --pair WBTC:USDT

    quote-oracle --config oracle.json --pair WETH:DAI --amount 1.5 --verbose

Exit codes: 0 if every scenario passes, 1 if any fails, 2 on configuration error.
"""

from __future__ import annotations

import argparse
import asyncio
import decimal
import logging
import sys
from collections.abc import Callable, Sequence
from decimal import Decimal
from pathlib import Path

import structlog

from quote_oracle.backends.base import QuoteBackend
from quote_oracle.config import OracleConfig, load_config
from quote_oracle.engine import EquivalenceOracle, ScenarioOutcome, build_onchain_backends
from quote_oracle.errors import InvalidTrade
from quote_oracle.oracle.checker import to_tolerance
from quote_oracle.oracle.normalizer import parse_units
from quote_oracle.scenarios import Scenario

logger = structlog.get_logger()

BackendFactory = Callable[[OracleConfig], Sequence[QuoteBackend]]


def parse_pair(value: str) -> tuple[str, str]:
    """Parse a FROM:TO pair argument (e.g., "WBTC:USDT")."""
    parts = value.split(":")
    if len(parts) != 2 or not all(p.strip() for p in parts):
        raise argparse.ArgumentTypeError(f"Pair must look like FROM:TO, got '{value}'")
    return parts[0].strip().upper(), parts[1].strip().upper()


def parse_amount(value: str) -> Decimal:
    """Parse a non-negative decimal amount argument (e.g., "1.5")."""
    try:
        amount = Decimal(value)
    except decimal.InvalidOperation:
        raise argparse.ArgumentTypeError(f"Not a decimal amount: '{value}'") from None
    if not amount.is_finite() or amount < 0:
        raise argparse.ArgumentTypeError(f"Amount must be non-negative, got '{value}'")
    return amount


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quote-oracle",
        description="Compare a custom quoter against the Uniswap V3 lens quoter.",
    )
    parser.add_argument("--config", type=Path, help="JSON config file (OracleSettings)")
    parser.add_argument("--rpc-url", help="HTTP RPC endpoint (default: $ORACLE_RPC_URL)")
    parser.add_argument(
        "--estimator-address",
        help="Custom quoter address (default: $ORACLE_ESTIMATOR_ADDRESS)",
    )
    parser.add_argument(
        "--pair",
        action="append",
        type=parse_pair,
        dest="pairs",
        help="Pair to compare as FROM:TO (repeatable, default: WBTC:USDT)",
    )
    parser.add_argument(
        "--amount",
        type=parse_amount,
        help="Trade size in whole input-token units (default: config amountIn)",
    )
    parser.add_argument("--fee", type=int, help="Pool fee tier (default: 3000)")
    parser.add_argument("--tolerance", help="Max relative deviation (default: 0.01)")
    parser.add_argument("--timeout", type=float, help="Timeout per scenario in seconds")
    parser.add_argument(
        "--concurrent",
        action="store_true",
        default=None,
        help="Query backends concurrently",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser


def configure_logging(verbose: bool = False) -> None:
    log_level = logging.DEBUG if verbose else logging.INFO
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
    )


def resolve_config(args: argparse.Namespace) -> OracleConfig:
    """Merge config file, environment and command-line overrides."""
    config = load_config(args.config)
    return config.with_overrides(
        rpc_url=args.rpc_url,
        estimator_address=args.estimator_address,
        pairs=tuple(args.pairs) if args.pairs else None,
        fee=args.fee,
        tolerance=to_tolerance(args.tolerance) if args.tolerance is not None else None,
        timeout_seconds=args.timeout,
        concurrent=args.concurrent,
    )


def build_scenarios(config: OracleConfig, amount: Decimal | None = None) -> list[Scenario]:
    """One scenario per configured pair.

    A human-readable amount is converted using each pair's input decimals.
    Every pair is resolved up front so unknown symbols fail before any
    backend is queried.

    Raises:
        InvalidTrade: If a pair names an unknown or identical asset
    """
    scenarios = []
    for from_symbol, to_symbol in config.pairs:
        amount_in = None
        if amount is not None:
            amount_in = parse_units(amount, config.asset(from_symbol).decimals)
        scenario = Scenario(from_symbol, to_symbol, amount_in=amount_in)
        scenario.to_trade(config)
        scenarios.append(scenario)
    return scenarios


def print_summary(outcomes: Sequence[ScenarioOutcome]) -> None:
    print("=" * 60)
    for outcome in outcomes:
        status = "PASS" if outcome.passed else "FAIL"
        print(f"[{status}] {outcome.scenario.name}")
        if outcome.result is not None:
            for quote in outcome.result.quotes:
                print(f"    {quote.source:<12} {quote.formatted}")
            print(f"    deviation    {outcome.result.relative_deviation:.6f}")
        if outcome.failure:
            print(f"    {outcome.failure}")
    passed = sum(1 for o in outcomes if o.passed)
    print("=" * 60)
    print(f"{passed}/{len(outcomes)} scenarios passed")


def main(
    argv: Sequence[str] | None = None,
    backend_factory: BackendFactory = build_onchain_backends,
) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = resolve_config(args)
        scenarios = build_scenarios(config, args.amount)
        backends = backend_factory(config)
        oracle = EquivalenceOracle(backends, config)
    except (ValueError, FileNotFoundError, InvalidTrade) as e:
        logger.error("invalid_configuration", error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 2

    outcomes = asyncio.run(oracle.run_all(scenarios))
    print_summary(outcomes)
    return 0 if all(o.passed for o in outcomes) else 1


if __name__ == "__main__":
    sys.exit(main())
