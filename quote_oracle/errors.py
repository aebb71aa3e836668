"""Oracle error classes.

Every failure of a comparison surfaces as one of these. None of them are
retried: the oracle is a point-in-time consistency check.
"""

from __future__ import annotations


class OracleError(Exception):
    """Base error for quote oracle operations."""

    pass


class BackendUnavailable(OracleError):
    """A quoting backend could not be reached or returned a malformed result."""

    def __init__(self, source: str, detail: str) -> None:
        self.source = source
        self.detail = detail
        super().__init__(f"Backend '{source}' unavailable: {detail}")


class InvalidTrade(OracleError):
    """Unsupported trade inputs (unknown asset, same asset, reverting pair or fee tier)."""

    pass


class DegenerateComparison(OracleError):
    """Zero baseline quote with a non-zero maximum; relative deviation is undefined."""

    pass


class OracleTimeout(OracleError):
    """The comparison did not finish within the configured timeout."""

    def __init__(self, timeout_seconds: float) -> None:
        self.timeout_seconds = timeout_seconds
        super().__init__(f"Oracle comparison timed out after {timeout_seconds}s")


class PriceMismatch(OracleError, AssertionError):
    """Quotes deviate by at least the configured tolerance."""

    pass


__all__ = [
    "OracleError",
    "BackendUnavailable",
    "InvalidTrade",
    "DegenerateComparison",
    "OracleTimeout",
    "PriceMismatch",
]
