"""Equivalence oracle: collect, normalize and check quotes for a trade.

The oracle asks every backend for the same exact-input quote, normalizes the
answers to whole token units and asserts that their relative deviation is
below the configured tolerance. The whole invocation runs under a timeout.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import structlog

from quote_oracle.backends.base import QuoteBackend
from quote_oracle.backends.onchain import EstimatorBackend, LensQuoterBackend
from quote_oracle.config import DEFAULT_ORACLE_CONFIG, OracleConfig
from quote_oracle.errors import OracleError, OracleTimeout
from quote_oracle.models.trade import ComparisonResult, TradeSpec
from quote_oracle.oracle.checker import assert_converged, check_convergence
from quote_oracle.oracle.collector import collect_quotes
from quote_oracle.scenarios import Scenario

logger = structlog.get_logger()


@dataclass(frozen=True)
class ScenarioOutcome:
    """Pass/fail record of one scenario run.

    Attributes:
        scenario: The scenario that was run
        passed: True if the quotes converged
        result: Comparison result, or None if no comparison was made
        failure: Human-readable failure message, None on success
        error: Name of the oracle error that aborted the run, if any
    """

    scenario: Scenario
    passed: bool
    result: ComparisonResult | None = None
    failure: str | None = None
    error: str | None = None


class EquivalenceOracle:
    """Compare quotes from two or more backends for the same trade."""

    def __init__(
        self,
        backends: Sequence[QuoteBackend],
        config: OracleConfig = DEFAULT_ORACLE_CONFIG,
    ) -> None:
        """Initialize the oracle.

        Args:
            backends: Backends to compare (at least two), in query order
            config: Tolerance, timeout and concurrency settings
        """
        if len(backends) < 2:
            raise ValueError(f"At least two backends are required, got {len(backends)}")
        self.backends = list(backends)
        self.config = config

    async def _compare(self, trade: TradeSpec) -> ComparisonResult:
        quotes = await collect_quotes(trade, self.backends, concurrent=self.config.concurrent)
        result = check_convergence(quotes, self.config.tolerance)
        logger.info(
            "comparison_complete",
            pair=trade.pair,
            minimum=str(result.minimum),
            maximum=str(result.maximum),
            relative_deviation=str(result.relative_deviation),
            tolerance=str(result.tolerance),
            passed=result.passed,
        )
        return result

    async def compare(self, trade: TradeSpec) -> ComparisonResult:
        """Collect, normalize and check quotes for a trade.

        Returns:
            ComparisonResult (passed may be False)

        Raises:
            BackendUnavailable: If any backend fails
            InvalidTrade: If any backend rejects the trade
            DegenerateComparison: If the baseline quote is zero
            OracleTimeout: If the comparison exceeds config.timeout_seconds
        """
        try:
            return await asyncio.wait_for(
                self._compare(trade), timeout=self.config.timeout_seconds
            )
        except TimeoutError:
            logger.warning(
                "oracle_timeout",
                pair=trade.pair,
                timeout_seconds=self.config.timeout_seconds,
            )
            raise OracleTimeout(self.config.timeout_seconds) from None

    async def assert_equivalent(self, trade: TradeSpec) -> ComparisonResult:
        """Compare and raise PriceMismatch unless the quotes converge."""
        return assert_converged(await self.compare(trade))

    async def run_scenario(self, scenario: Scenario) -> ScenarioOutcome:
        """Run one scenario, converting oracle errors into a failed outcome."""
        logger.info("scenario_started", name=scenario.name)
        try:
            result = await self.compare(scenario.to_trade(self.config))
        except OracleError as e:
            logger.error(
                "scenario_failed",
                name=scenario.name,
                error=type(e).__name__,
                detail=str(e),
            )
            return ScenarioOutcome(
                scenario=scenario,
                passed=False,
                failure=str(e),
                error=type(e).__name__,
            )

        if not result.passed:
            logger.error("scenario_failed", name=scenario.name, detail=result.message)
            return ScenarioOutcome(
                scenario=scenario,
                passed=False,
                result=result,
                failure=result.message,
                error="PriceMismatch",
            )

        logger.info("scenario_passed", name=scenario.name)
        return ScenarioOutcome(scenario=scenario, passed=True, result=result)

    async def run_all(self, scenarios: Iterable[Scenario]) -> list[ScenarioOutcome]:
        """Run scenarios one after another."""
        return [await self.run_scenario(s) for s in scenarios]


def build_onchain_backends(config: OracleConfig) -> list[QuoteBackend]:
    """Create the reference lens and custom estimator backends from config.

    The reference is queried first, then the custom quoter.

    Raises:
        ValueError: If rpc_url or estimator_address is not configured
    """
    if not config.rpc_url:
        raise ValueError("rpc_url is required for on-chain backends (set ORACLE_RPC_URL)")
    if not config.estimator_address:
        raise ValueError(
            "estimator_address is required for on-chain backends (set ORACLE_ESTIMATOR_ADDRESS)"
        )

    return [
        LensQuoterBackend.from_rpc(config.rpc_url, address=config.reference_quoter),
        EstimatorBackend.from_rpc(config.rpc_url, address=config.estimator_address),
    ]


__all__ = ["EquivalenceOracle", "ScenarioOutcome", "build_onchain_backends"]
