"""Conversions between raw base-unit amounts and whole token units.

All conversions run in a high-precision Decimal context so that every
uint256 amount (up to ~10^77) is represented exactly. Floats are never used.
"""

import decimal
from decimal import Decimal

from quote_oracle.models.types import MAX_DECIMALS

# 78 digits of precision: enough for uint256 values (up to ~10^77)
DECIMAL_HIGH_PREC_CONTEXT = decimal.Context(prec=78)


def check_decimals(decimals: int) -> None:
    """Raise ValueError unless decimals is an int in [0, MAX_DECIMALS]."""
    if isinstance(decimals, bool) or not isinstance(decimals, int):
        raise ValueError(f"decimals must be int, got {type(decimals).__name__}")
    if not 0 <= decimals <= MAX_DECIMALS:
        raise ValueError(f"decimals must be in [0, {MAX_DECIMALS}], got {decimals}")


def normalize_amount(raw: int, decimals: int) -> Decimal:
    """Convert a raw integer amount into whole token units.

    Args:
        raw: Amount in base units (e.g., 6501234567800 for 6,501,234.5678 USDT)
        decimals: Token decimals

    Returns:
        Exact Decimal value of raw / 10**decimals
    """
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise TypeError(f"raw amount must be int, got {type(raw).__name__}")
    check_decimals(decimals)
    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        return Decimal(raw).scaleb(-decimals)


def format_units(raw: int, decimals: int) -> str:
    """Format a raw amount as a fixed-point string.

    Trailing fractional zeros are dropped but at least one fractional digit
    is kept, so 10**8 with 8 decimals formats as "1.0".
    """
    check_decimals(decimals)
    sign = "-" if raw < 0 else ""
    whole, fraction = divmod(abs(raw), 10**decimals)
    fraction_str = str(fraction).rjust(decimals, "0").rstrip("0") or "0"
    return f"{sign}{whole}.{fraction_str}"


__all__ = [
    "DECIMAL_HIGH_PREC_CONTEXT",
    "check_decimals",
    "normalize_amount",
    "format_units",
]
