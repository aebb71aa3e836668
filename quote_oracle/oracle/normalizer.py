"""Decimal normalization of quotes and parsing of human-readable amounts.

The per-amount conversions live in quote_oracle.models.units and are
re-exported here with the rest of the pipeline helpers.
"""

from __future__ import annotations

import decimal
from collections.abc import Iterable
from decimal import Decimal
from typing import TYPE_CHECKING

from quote_oracle.models.units import (
    DECIMAL_HIGH_PREC_CONTEXT,
    check_decimals,
    format_units,
    normalize_amount,
)

if TYPE_CHECKING:
    from quote_oracle.models.trade import Quote


def normalize_quotes(quotes: Iterable[Quote]) -> list[Decimal]:
    """Normalize a sequence of quotes, preserving order."""
    return [normalize_amount(q.raw_amount, q.decimals) for q in quotes]


def parse_units(value: str | Decimal | int, decimals: int) -> int:
    """Convert a human-readable amount into base units.

    Args:
        value: Amount in whole token units (e.g., "1.5")
        decimals: Token decimals

    Returns:
        Amount in base units

    Raises:
        ValueError: If value is negative, not a number, or has more
            fractional digits than the token supports
    """
    check_decimals(decimals)
    try:
        amount = Decimal(str(value).strip())
    except decimal.InvalidOperation as err:
        raise ValueError(f"Not a decimal amount: '{value}'") from err

    if not amount.is_finite():
        raise ValueError(f"Amount must be finite: '{value}'")
    if amount < 0:
        raise ValueError(f"Amount cannot be negative: '{value}'")

    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        scaled = amount.scaleb(decimals)
        if scaled != scaled.to_integral_value():
            raise ValueError(f"Amount '{value}' has more than {decimals} fractional digits")
        return int(scaled)


def decimal_lt(a: Decimal, b: Decimal) -> bool:
    """Compare a < b with high precision for exactness."""
    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        return (a - b) < 0


__all__ = [
    "DECIMAL_HIGH_PREC_CONTEXT",
    "normalize_amount",
    "normalize_quotes",
    "format_units",
    "parse_units",
    "decimal_lt",
]
