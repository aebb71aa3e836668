"""Oracle configuration.

Configuration is static: the asset registry, quoter addresses and comparison
parameters are fixed before a run and passed into the oracle explicitly.

Sources, in increasing priority:
1. DEFAULT_ORACLE_CONFIG (mainnet tokens, lens Quoter, 1% tolerance)
2. An optional JSON file validated by OracleSettings
3. Environment variables (ORACLE_RPC_URL, ORACLE_ESTIMATOR_ADDRESS,
   ORACLE_TOLERANCE, ORACLE_TIMEOUT)
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from decimal import Decimal
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from quote_oracle.constants import (
    DEFAULT_AMOUNT_IN,
    DEFAULT_FEE_TIER,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_TOLERANCE,
    KNOWN_TOKENS,
    LENS_QUOTER_ADDRESS,
)
from quote_oracle.errors import InvalidTrade
from quote_oracle.models.trade import Asset
from quote_oracle.models.types import Address, Decimals, Uint256, is_valid_address
from quote_oracle.oracle.checker import to_tolerance

DEFAULT_ASSETS = tuple(Asset(symbol, address, decimals) for symbol, address, decimals in KNOWN_TOKENS)

# (from_symbol, to_symbol) pairs checked when none are given
DEFAULT_PAIRS = (("WBTC", "USDT"),)


@dataclass(frozen=True)
class OracleConfig:
    """Centralized, immutable configuration for an oracle run.

    Attributes:
        assets: Known assets, looked up by symbol
        reference_quoter: Address of the trusted reference quoter (lens Quoter)
        estimator_address: Address of the custom quoter under test, if deployed
        rpc_url: HTTP RPC endpoint for on-chain backends
        tolerance: Maximum relative deviation (exclusive), default 1%
        amount_in: Default trade size in input-token base units
        fee: Default pool fee tier
        timeout_seconds: Overall timeout for one comparison
        pairs: (from_symbol, to_symbol) scenarios to run
        concurrent: Issue backend calls concurrently instead of sequentially
    """

    assets: tuple[Asset, ...] = DEFAULT_ASSETS
    reference_quoter: str = LENS_QUOTER_ADDRESS
    estimator_address: str | None = None
    rpc_url: str | None = None
    tolerance: Decimal = DEFAULT_TOLERANCE
    amount_in: int = DEFAULT_AMOUNT_IN
    fee: int = DEFAULT_FEE_TIER
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    pairs: tuple[tuple[str, str], ...] = DEFAULT_PAIRS
    concurrent: bool = False
    _by_symbol: dict[str, Asset] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        by_symbol: dict[str, Asset] = {}
        for asset in self.assets:
            key = asset.symbol.upper()
            if key in by_symbol:
                raise ValueError(f"Duplicate asset symbol: {asset.symbol}")
            by_symbol[key] = asset
        object.__setattr__(self, "_by_symbol", by_symbol)

        if not is_valid_address(self.reference_quoter):
            raise ValueError(f"Invalid reference quoter address: {self.reference_quoter}")
        if self.estimator_address is not None and not is_valid_address(self.estimator_address):
            raise ValueError(f"Invalid estimator address: {self.estimator_address}")
        if self.tolerance < 0:
            raise ValueError(f"Tolerance cannot be negative: {self.tolerance}")
        if self.timeout_seconds <= 0:
            raise ValueError(f"Timeout must be positive: {self.timeout_seconds}")

    def asset(self, symbol: str) -> Asset:
        """Look up an asset by symbol (case-insensitive).

        Raises:
            InvalidTrade: If the symbol is not configured
        """
        try:
            return self._by_symbol[symbol.upper()]
        except KeyError:
            raise InvalidTrade(
                f"Unknown asset '{symbol}' (known: {', '.join(a.symbol for a in self.assets)})"
            ) from None

    def with_overrides(self, **changes: Any) -> OracleConfig:
        """Return a copy with the given non-None fields replaced."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


# Default configuration instance
DEFAULT_ORACLE_CONFIG = OracleConfig()


# =============================================================================
# File-based settings (validated with pydantic)
# =============================================================================


class AssetSettings(BaseModel):
    """An asset entry in the config file."""

    symbol: str
    address: Address
    decimals: Decimals


class PairSettings(BaseModel):
    """A scenario pair in the config file."""

    from_token: str = Field(alias="fromToken")
    to_token: str = Field(alias="toToken")

    model_config = {"populate_by_name": True}


class OracleSettings(BaseModel):
    """JSON representation of OracleConfig.

    Example:
        {
            "assets": [{"symbol": "WBTC", "address": "0x2260...", "decimals": 8}],
            "estimatorAddress": "0x...",
            "tolerance": "0.01",
            "amountIn": "100000000",
            "fee": 3000,
            "pairs": [{"fromToken": "WBTC", "toToken": "USDT"}]
        }

    Omitted fields keep their defaults.
    """

    assets: list[AssetSettings] | None = None
    reference_quoter: Address | None = Field(default=None, alias="referenceQuoter")
    estimator_address: Address | None = Field(default=None, alias="estimatorAddress")
    rpc_url: str | None = Field(default=None, alias="rpcUrl")
    tolerance: Decimal | None = Field(default=None, ge=0)
    amount_in: Uint256 | None = Field(default=None, alias="amountIn")
    fee: int | None = Field(default=None, ge=0)
    timeout_seconds: float | None = Field(default=None, gt=0, alias="timeoutSeconds")
    pairs: list[PairSettings] | None = None
    concurrent: bool | None = None

    model_config = {"populate_by_name": True, "extra": "forbid"}

    def to_config(self, base: OracleConfig = DEFAULT_ORACLE_CONFIG) -> OracleConfig:
        """Merge these settings over a base configuration."""
        assets = (
            tuple(Asset(a.symbol, a.address, a.decimals) for a in self.assets)
            if self.assets is not None
            else None
        )
        pairs = (
            tuple((p.from_token, p.to_token) for p in self.pairs)
            if self.pairs is not None
            else None
        )
        return base.with_overrides(
            assets=assets,
            reference_quoter=self.reference_quoter,
            estimator_address=self.estimator_address,
            rpc_url=self.rpc_url,
            tolerance=self.tolerance,
            amount_in=self.amount_in,
            fee=self.fee,
            timeout_seconds=self.timeout_seconds,
            pairs=pairs,
            concurrent=self.concurrent,
        )


def config_from_env(
    base: OracleConfig = DEFAULT_ORACLE_CONFIG,
    environ: Mapping[str, str] | None = None,
) -> OracleConfig:
    """Apply ORACLE_* environment variables over a base configuration."""
    env = os.environ if environ is None else environ
    tolerance = env.get("ORACLE_TOLERANCE")
    timeout = env.get("ORACLE_TIMEOUT")
    return base.with_overrides(
        rpc_url=env.get("ORACLE_RPC_URL") or None,
        estimator_address=env.get("ORACLE_ESTIMATOR_ADDRESS") or None,
        tolerance=to_tolerance(tolerance) if tolerance else None,
        timeout_seconds=float(timeout) if timeout else None,
    )


def load_config(
    path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> OracleConfig:
    """Load configuration from an optional JSON file plus environment overrides.

    Args:
        path: JSON file matching OracleSettings, or None for defaults
        environ: Environment mapping (defaults to os.environ)

    Returns:
        The merged OracleConfig

    Raises:
        FileNotFoundError: If path does not exist
        pydantic.ValidationError: If the file content is invalid
    """
    config = DEFAULT_ORACLE_CONFIG
    if path is not None:
        with open(path) as f:
            data = json.load(f)
        config = OracleSettings.model_validate(data).to_config(config)
    return config_from_env(config, environ)


__all__ = [
    "OracleConfig",
    "DEFAULT_ORACLE_CONFIG",
    "DEFAULT_ASSETS",
    "DEFAULT_PAIRS",
    "AssetSettings",
    "PairSettings",
    "OracleSettings",
    "config_from_env",
    "load_config",
]
