"""Quoting backend protocol."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from quote_oracle.models.trade import Asset


@runtime_checkable
class QuoteBackend(Protocol):
    """Protocol for quoting backends compared by the oracle.

    This allows swapping between on-chain quoters and mocks for testing.

    Attributes:
        label: Name used in logs and results (e.g., "lens")
        output_decimals: Decimal places of the returned amount. None means the
            amount is expressed in the output asset's own decimals.
    """

    label: str
    output_decimals: int | None

    async def quote(
        self,
        asset_in: Asset,
        asset_out: Asset,
        amount_in: int,
        fee: int,
    ) -> int:
        """Get output amount for an exact-input swap.

        Args:
            asset_in: Token being sold
            asset_out: Token being bought
            amount_in: Input amount in asset_in base units
            fee: Pool fee tier (e.g., 3000)

        Returns:
            Output amount

        Raises:
            BackendUnavailable: If the backend cannot be reached
            InvalidTrade: If the pair or fee tier is not supported
        """
        ...


__all__ = ["QuoteBackend"]
