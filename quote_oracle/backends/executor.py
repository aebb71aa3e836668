"""Adapter running a synchronous quoter in the event loop's executor."""

from __future__ import annotations

import asyncio
from collections.abc import Callable

import structlog

from quote_oracle.errors import BackendUnavailable, InvalidTrade, OracleError
from quote_oracle.models.trade import Asset

logger = structlog.get_logger()

# quote_fn(token_in, token_out, fee, amount_in) -> amount_out or None
SyncQuoteFn = Callable[[str, str, int, int], "int | None"]


class ExecutorBackend:
    """Wrap a blocking quote function as an async backend.

    The function follows the exact-input quoter shape
    ``quote_fn(token_in, token_out, fee, amount_in) -> int | None``, where None
    means the quote failed for these inputs.
    """

    def __init__(
        self,
        label: str,
        quote_fn: SyncQuoteFn,
        output_decimals: int | None = None,
    ) -> None:
        self.label = label
        self.quote_fn = quote_fn
        self.output_decimals = output_decimals

    async def quote(
        self,
        asset_in: Asset,
        asset_out: Asset,
        amount_in: int,
        fee: int,
    ) -> int:
        """Run quote_fn without blocking the event loop."""
        loop = asyncio.get_running_loop()
        try:
            result = await loop.run_in_executor(
                None, self.quote_fn, asset_in.address, asset_out.address, fee, amount_in
            )
        except OracleError:
            raise
        except Exception as e:
            logger.warning(
                "executor_quote_failed",
                source=self.label,
                pair=f"{asset_in.symbol} -> {asset_out.symbol}",
                fee=fee,
                amount_in=amount_in,
                error=str(e),
            )
            raise BackendUnavailable(self.label, str(e)) from e

        if result is None:
            raise InvalidTrade(
                f"{self.label}: no quote for {asset_in.symbol} -> {asset_out.symbol} fee={fee}"
            )
        return result


__all__ = ["ExecutorBackend", "SyncQuoteFn"]
