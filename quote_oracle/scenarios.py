"""Named comparison scenarios, one per token pair."""

from __future__ import annotations

from dataclasses import dataclass

from quote_oracle.config import DEFAULT_PAIRS, OracleConfig
from quote_oracle.models.trade import TradeSpec


@dataclass(frozen=True)
class Scenario:
    """A pair to compare, resolved against an OracleConfig.

    Attributes:
        from_symbol: Symbol of the token sold
        to_symbol: Symbol of the token bought
        amount_in: Input amount in base units (None uses the config default)
        fee: Pool fee tier (None uses the config default)
    """

    from_symbol: str
    to_symbol: str
    amount_in: int | None = None
    fee: int | None = None

    @property
    def name(self) -> str:
        return (
            "Should return the same price of Uniswap lens quoter for the pair "
            f"{self.from_symbol} -> {self.to_symbol}"
        )

    def to_trade(self, config: OracleConfig) -> TradeSpec:
        """Build the TradeSpec for this scenario.

        Raises:
            InvalidTrade: If a symbol is unknown or the trade is invalid
        """
        return TradeSpec(
            asset_in=config.asset(self.from_symbol),
            asset_out=config.asset(self.to_symbol),
            amount_in=config.amount_in if self.amount_in is None else self.amount_in,
            fee=config.fee if self.fee is None else self.fee,
        )


def scenarios_from_config(config: OracleConfig) -> list[Scenario]:
    """One scenario per configured pair, using the config's amount and fee."""
    return [Scenario(from_symbol, to_symbol) for from_symbol, to_symbol in config.pairs]


DEFAULT_SCENARIOS = tuple(Scenario(f, t) for f, t in DEFAULT_PAIRS)

__all__ = ["Scenario", "scenarios_from_config", "DEFAULT_SCENARIOS"]
