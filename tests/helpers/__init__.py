"""Test helpers module for shared test utilities.

- constants: Token addresses and reference quote amounts
- factories: Trade, quote and mock backend factory functions
"""

from tests.helpers.constants import (
    DAI,
    ESTIMATOR_QUOTE,
    FEE_3000,
    HIGH_QUOTE,
    LENS_QUOTE,
    LINK,
    ONE_WBTC,
    UNI,
    USDT,
    WBTC,
    WETH,
)
from tests.helpers.factories import make_backend, make_quote, make_trade

__all__ = [
    # Constants
    "WETH",
    "DAI",
    "LINK",
    "UNI",
    "USDT",
    "WBTC",
    "ONE_WBTC",
    "FEE_3000",
    "LENS_QUOTE",
    "ESTIMATOR_QUOTE",
    "HIGH_QUOTE",
    # Factories
    "make_trade",
    "make_quote",
    "make_backend",
]
