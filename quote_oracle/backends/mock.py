"""Scripted quoting backend for tests and dry runs."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

from quote_oracle.errors import InvalidTrade
from quote_oracle.models.trade import Asset
from quote_oracle.models.types import normalize_address


@dataclass
class QuoteKey:
    """Key for looking up quotes in MockQuoteBackend."""

    token_in: str
    token_out: str
    fee: int
    amount_in: int

    def __hash__(self) -> int:
        return hash(
            (
                normalize_address(self.token_in),
                normalize_address(self.token_out),
                self.fee,
                self.amount_in,
            )
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, QuoteKey):
            return False
        return (
            normalize_address(self.token_in) == normalize_address(other.token_in)
            and normalize_address(self.token_out) == normalize_address(other.token_out)
            and self.fee == other.fee
            and self.amount_in == other.amount_in
        )


class MockQuoteBackend:
    """Mock backend for testing without RPC calls.

    Configure with expected quotes, and track calls for assertions.
    """

    def __init__(
        self,
        label: str = "mock",
        quotes: dict[QuoteKey, int] | None = None,
        default_rate: tuple[int, int] | None = None,
        error: Exception | None = None,
        delay: float = 0.0,
        output_decimals: int | None = None,
    ):
        """Initialize mock backend.

        Args:
            label: Backend name reported on quotes
            quotes: Mapping of QuoteKey -> output amount for specific quotes
            default_rate: If set, (numerator, denominator) ratio for any unconfigured quote:
                         amount_out = amount_in * num // denom
            error: If set, raised from every quote() call
            delay: Seconds to sleep before answering (for timeout tests)
            output_decimals: Decimals of returned amounts, if not the output asset's
        """
        self.label = label
        self.quotes = quotes or {}
        self.default_rate = default_rate
        self.error = error
        self.delay = delay
        self.output_decimals = output_decimals
        self.calls: list[tuple[str, str, int, int]] = []  # (in, out, amount_in, fee)

    async def quote(
        self,
        asset_in: Asset,
        asset_out: Asset,
        amount_in: int,
        fee: int,
    ) -> int:
        """Get output amount for exact input."""
        self.calls.append((asset_in.address, asset_out.address, amount_in, fee))

        if self.delay:
            await asyncio.sleep(self.delay)

        if self.error is not None:
            raise self.error

        key = QuoteKey(asset_in.address, asset_out.address, fee, amount_in)
        if key in self.quotes:
            return self.quotes[key]

        if self.default_rate is not None:
            num, denom = self.default_rate
            # Floor division for output amount (conservative for receiver)
            return amount_in * num // denom

        raise InvalidTrade(
            f"{self.label}: no quote configured for {asset_in.symbol} -> "
            f"{asset_out.symbol} fee={fee} amount_in={amount_in}"
        )


__all__ = ["QuoteKey", "MockQuoteBackend"]
