"""Oracle pipeline steps: collect, normalize, check.

Usage:
    from quote_oracle.oracle import collect_quotes, check_convergence

    quotes = await collect_quotes(trade, [custom, reference])
    result = check_convergence(quotes, tolerance="0.01")
    if not result.passed:
        handle_mismatch(result.message)
"""

from quote_oracle.oracle.checker import assert_converged, check_convergence, to_tolerance
from quote_oracle.oracle.collector import collect_quotes, fetch_quote
from quote_oracle.oracle.normalizer import (
    DECIMAL_HIGH_PREC_CONTEXT,
    format_units,
    normalize_amount,
    normalize_quotes,
    parse_units,
)

__all__ = [
    # Collector
    "collect_quotes",
    "fetch_quote",
    # Normalizer
    "DECIMAL_HIGH_PREC_CONTEXT",
    "normalize_amount",
    "normalize_quotes",
    "format_units",
    "parse_units",
    # Checker
    "check_convergence",
    "assert_converged",
    "to_tolerance",
]
