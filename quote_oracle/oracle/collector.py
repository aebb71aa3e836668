"""Quote collection: ask every backend the same question."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence

import structlog

from quote_oracle.backends.base import QuoteBackend
from quote_oracle.errors import BackendUnavailable, OracleError
from quote_oracle.models.trade import Quote, TradeSpec
from quote_oracle.models.types import UINT256_MAX
from quote_oracle.oracle.normalizer import format_units

logger = structlog.get_logger()


async def fetch_quote(backend: QuoteBackend, trade: TradeSpec) -> Quote:
    """Query one backend and wrap its answer in a Quote.

    Raises:
        BackendUnavailable: If the backend fails or returns a malformed amount
        InvalidTrade: If the backend rejects the trade
    """
    try:
        amount_out = await backend.quote(
            trade.asset_in,
            trade.asset_out,
            trade.amount_in,
            trade.fee,
        )
    except OracleError:
        raise
    except Exception as e:
        logger.warning(
            "backend_quote_failed",
            source=backend.label,
            pair=trade.pair,
            fee=trade.fee,
            amount_in=trade.amount_in,
            error=repr(e),
        )
        raise BackendUnavailable(backend.label, str(e) or type(e).__name__) from e

    if isinstance(amount_out, bool) or not isinstance(amount_out, int):
        raise BackendUnavailable(
            backend.label, f"expected integer amount, got {type(amount_out).__name__}"
        )
    if not 0 <= amount_out <= UINT256_MAX:
        raise BackendUnavailable(backend.label, f"amount out of uint256 range: {amount_out}")

    decimals = getattr(backend, "output_decimals", None)
    if decimals is None:
        decimals = trade.asset_out.decimals

    try:
        quote = Quote(
            source=backend.label,
            raw_amount=amount_out,
            decimals=decimals,
            trade=trade,
        )
    except ValueError as e:
        raise BackendUnavailable(backend.label, str(e)) from e

    logger.info(
        "quote_collected",
        source=quote.source,
        pair=trade.pair,
        fee=trade.fee,
        amount_in=trade.amount_in,
        amount_out=quote.raw_amount,
        formatted=format_units(quote.raw_amount, quote.decimals),
    )
    return quote


async def _collect_concurrently(
    trade: TradeSpec, backends: Sequence[QuoteBackend]
) -> list[Quote]:
    try:
        async with asyncio.TaskGroup() as tg:
            tasks = [tg.create_task(fetch_quote(b, trade)) for b in backends]
    except ExceptionGroup as eg:
        # Siblings are already cancelled; surface the first failure unwrapped
        raise eg.exceptions[0] from None
    return [task.result() for task in tasks]


async def collect_quotes(
    trade: TradeSpec,
    backends: Sequence[QuoteBackend],
    *,
    concurrent: bool = False,
) -> list[Quote]:
    """Collect quotes for a trade from every backend.

    Calls are sequential by default so logs come out in backend order. With
    concurrent=True they run in a TaskGroup, but results keep backend order.
    The first failure aborts collection, cancelling any calls still in
    flight; nothing is retried.

    Args:
        trade: The trade every backend quotes
        backends: Backends to query, at least one
        concurrent: Issue the calls concurrently

    Returns:
        One Quote per backend, in backend order

    Raises:
        BackendUnavailable: If a backend fails or returns a malformed amount
        InvalidTrade: If a backend rejects the trade
    """
    if not backends:
        raise ValueError("At least one backend is required")

    logger.debug(
        "collecting_quotes",
        pair=trade.pair,
        backends=[b.label for b in backends],
        concurrent=concurrent,
    )

    if concurrent:
        return await _collect_concurrently(trade, backends)

    quotes = []
    for backend in backends:
        quotes.append(await fetch_quote(backend, trade))
    return quotes


__all__ = ["fetch_quote", "collect_quotes"]
