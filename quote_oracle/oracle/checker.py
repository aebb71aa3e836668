"""Convergence checking across normalized quotes.

Given quotes for one trade from two or more backends, compute the relative
deviation between the smallest and largest normalized amounts:

    deviation = (max - min) / min

The check passes when deviation is strictly below the tolerance. A zero
baseline is handled explicitly: all-zero quotes trivially agree, while a zero
minimum with a non-zero maximum is a DegenerateComparison.
"""

from __future__ import annotations

import decimal
from collections.abc import Sequence
from decimal import Decimal

import structlog

from quote_oracle.constants import DEFAULT_TOLERANCE
from quote_oracle.errors import DegenerateComparison, PriceMismatch
from quote_oracle.models.trade import ComparisonResult, Quote
from quote_oracle.oracle.normalizer import (
    DECIMAL_HIGH_PREC_CONTEXT,
    decimal_lt,
    normalize_quotes,
)

logger = structlog.get_logger()


def to_tolerance(value: Decimal | str | int | float) -> Decimal:
    """Coerce a tolerance into a non-negative Decimal.

    Floats go through str() so that 0.01 means exactly Decimal("0.01").
    """
    if isinstance(value, float):
        value = str(value)
    try:
        tolerance = Decimal(value)
    except decimal.InvalidOperation as err:
        raise ValueError(f"Invalid tolerance: {value!r}") from err
    if not tolerance.is_finite() or tolerance < 0:
        raise ValueError(f"Tolerance must be a non-negative number, got {value!r}")
    return tolerance


def check_convergence(
    quotes: Sequence[Quote],
    tolerance: Decimal | str | int | float = DEFAULT_TOLERANCE,
) -> ComparisonResult:
    """Compare normalized quotes and report whether they converge.

    Args:
        quotes: Quotes for the same trade, at least two
        tolerance: Maximum allowed relative deviation (exclusive)

    Returns:
        ComparisonResult with min, max, deviation and pass/fail

    Raises:
        ValueError: If fewer than two quotes are given or they quote different trades
        DegenerateComparison: If the minimum is zero but the maximum is not
    """
    if len(quotes) < 2:
        raise ValueError(f"At least two quotes are required, got {len(quotes)}")

    trade = quotes[0].trade
    for quote in quotes[1:]:
        if quote.trade != trade:
            raise ValueError(
                f"Quotes must share the same trade: {quote.source} quoted "
                f"{quote.trade.pair}, expected {trade.pair}"
            )

    tol = to_tolerance(tolerance)
    amounts = normalize_quotes(quotes)
    minimum = min(amounts)
    maximum = max(amounts)

    if minimum == 0:
        if maximum != 0:
            logger.warning(
                "degenerate_comparison",
                pair=trade.pair,
                sources=[q.source for q in quotes],
                maximum=str(maximum),
            )
            raise DegenerateComparison(
                f"Zero baseline quote for {trade.pair} while another backend quoted {maximum}"
            )
        deviation = Decimal(0)
    else:
        with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
            deviation = (maximum - minimum) / minimum

    return ComparisonResult(
        minimum=minimum,
        maximum=maximum,
        relative_deviation=deviation,
        tolerance=tol,
        passed=decimal_lt(deviation, tol),
        quotes=tuple(quotes),
    )


def assert_converged(result: ComparisonResult) -> ComparisonResult:
    """Raise PriceMismatch if the comparison did not pass.

    Returns:
        The same result, for chaining
    """
    if not result.passed:
        raise PriceMismatch(result.message)
    return result


__all__ = [
    "check_convergence",
    "assert_converged",
    "to_tolerance",
]
