"""Core oracle data model: assets, trades, quotes and comparison results."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from quote_oracle.errors import InvalidTrade
from quote_oracle.models.types import (
    MAX_DECIMALS,
    UINT256_MAX,
    is_valid_address,
    normalize_address,
)
from quote_oracle.models.units import check_decimals, format_units, normalize_amount

MISMATCH_MESSAGE = "Oracle price mismatch"


@dataclass(frozen=True)
class Asset:
    """A token known to the oracle.

    Attributes:
        symbol: Ticker symbol (e.g., "WBTC")
        address: Token contract address
        decimals: ERC20 decimals used to normalize raw amounts
    """

    symbol: str
    address: str
    decimals: int

    def __post_init__(self) -> None:
        if not is_valid_address(self.address):
            raise ValueError(f"Invalid {self.symbol} address: {self.address}")
        if not 0 <= self.decimals <= MAX_DECIMALS:
            raise ValueError(f"Invalid {self.symbol} decimals: {self.decimals}")

    def same_token(self, other: Asset) -> bool:
        """True if both assets point at the same contract (case-insensitive)."""
        return normalize_address(self.address) == normalize_address(other.address)


@dataclass(frozen=True)
class TradeSpec:
    """An exact-input swap to be quoted by every backend.

    Attributes:
        asset_in: Token being sold
        asset_out: Token being bought
        amount_in: Input amount in asset_in base units
        fee: Pool fee tier in Uniswap units (e.g., 3000 for 0.3%)
    """

    asset_in: Asset
    asset_out: Asset
    amount_in: int
    fee: int

    def __post_init__(self) -> None:
        if self.asset_in.same_token(self.asset_out):
            raise InvalidTrade(f"Cannot quote {self.asset_in.symbol} against itself")
        if not 0 <= self.amount_in <= UINT256_MAX:
            raise InvalidTrade(f"amount_in out of uint256 range: {self.amount_in}")
        if self.fee < 0:
            raise InvalidTrade(f"Fee tier cannot be negative: {self.fee}")

    @property
    def pair(self) -> str:
        """Human-readable pair label (e.g., "WBTC -> USDT")."""
        return f"{self.asset_in.symbol} -> {self.asset_out.symbol}"


@dataclass(frozen=True)
class Quote:
    """One backend's answer for a trade.

    Attributes:
        source: Label of the backend that produced the quote
        raw_amount: Output amount as returned by the backend
        decimals: Decimal places of raw_amount
        trade: The trade that was quoted
    """

    source: str
    raw_amount: int
    decimals: int
    trade: TradeSpec

    def __post_init__(self) -> None:
        if isinstance(self.raw_amount, bool) or not isinstance(self.raw_amount, int):
            raise ValueError(
                f"{self.source}: raw amount must be int, got {type(self.raw_amount).__name__}"
            )
        if not 0 <= self.raw_amount <= UINT256_MAX:
            raise ValueError(f"{self.source}: raw amount out of uint256 range: {self.raw_amount}")
        check_decimals(self.decimals)

    @property
    def amount(self) -> Decimal:
        """Output amount in whole token units."""
        return normalize_amount(self.raw_amount, self.decimals)

    @property
    def formatted(self) -> str:
        """Output amount as a fixed-point string."""
        return format_units(self.raw_amount, self.decimals)


@dataclass(frozen=True)
class ComparisonResult:
    """Outcome of comparing normalized quotes.

    Attributes:
        minimum: Smallest normalized amount
        maximum: Largest normalized amount
        relative_deviation: (maximum - minimum) / minimum
        tolerance: Tolerance the deviation was checked against
        passed: True if relative_deviation < tolerance
        quotes: The quotes that were compared, in collection order
    """

    minimum: Decimal
    maximum: Decimal
    relative_deviation: Decimal
    tolerance: Decimal
    passed: bool
    quotes: tuple[Quote, ...] = field(default=())

    @property
    def trade(self) -> TradeSpec | None:
        return self.quotes[0].trade if self.quotes else None

    @property
    def message(self) -> str:
        """Human-readable summary; failures start with the mismatch message."""
        pair = self.trade.pair if self.trade is not None else "quotes"
        detail = (
            f"{pair}: deviation {self.relative_deviation:.6f} "
            f"(min {self.minimum}, max {self.maximum}, tolerance {self.tolerance})"
        )
        if self.passed:
            return f"Oracle prices agree for {detail}"
        return f"{MISMATCH_MESSAGE} for {detail}"


__all__ = [
    "Asset",
    "TradeSpec",
    "Quote",
    "ComparisonResult",
    "MISMATCH_MESSAGE",
]
