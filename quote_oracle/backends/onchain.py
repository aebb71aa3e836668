"""On-chain quoting backends via web3 RPC.

Each backend makes a static eth_call to a quoting contract:
- LensQuoterBackend: Uniswap V3 Quoter (V1) lens contract, the reference
- QuoterV2Backend: Uniswap V3 QuoterV2
- EstimatorBackend: custom quoter exposing estimateMaxSwapUniswapV3

Reverts (unsupported pair or fee tier) surface as InvalidTrade; every other
call failure surfaces as BackendUnavailable.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import structlog
from web3 import AsyncHTTPProvider, AsyncWeb3, Web3
from web3.exceptions import BadFunctionCallOutput, ContractLogicError

from quote_oracle.constants import LENS_QUOTER_ADDRESS, QUOTER_V2_ADDRESS
from quote_oracle.errors import BackendUnavailable, InvalidTrade
from quote_oracle.models.trade import Asset

logger = structlog.get_logger()


# Quoter (V1) ABI - minimal, flat arguments, single return value
LENS_QUOTER_ABI = [
    {
        "name": "quoteExactInputSingle",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "tokenIn", "type": "address"},
            {"name": "tokenOut", "type": "address"},
            {"name": "fee", "type": "uint24"},
            {"name": "amountIn", "type": "uint256"},
            {"name": "sqrtPriceLimitX96", "type": "uint160"},
        ],
        "outputs": [{"name": "amountOut", "type": "uint256"}],
    },
]

# QuoterV2 ABI - minimal, struct argument, tuple return value
QUOTER_V2_ABI = [
    {
        "name": "quoteExactInputSingle",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {
                "name": "params",
                "type": "tuple",
                "components": [
                    {"name": "tokenIn", "type": "address"},
                    {"name": "tokenOut", "type": "address"},
                    {"name": "amountIn", "type": "uint256"},
                    {"name": "fee", "type": "uint24"},
                    {"name": "sqrtPriceLimitX96", "type": "uint160"},
                ],
            }
        ],
        "outputs": [
            {"name": "amountOut", "type": "uint256"},
            {"name": "sqrtPriceX96After", "type": "uint160"},
            {"name": "initializedTicksCrossed", "type": "uint32"},
            {"name": "gasEstimate", "type": "uint256"},
        ],
    },
]

# Custom quoter ABI - walks the pool price curve to estimate swap output
ESTIMATOR_ABI = [
    {
        "name": "estimateMaxSwapUniswapV3",
        "type": "function",
        "stateMutability": "view",
        "inputs": [
            {"name": "tokenIn", "type": "address"},
            {"name": "tokenOut", "type": "address"},
            {"name": "amountIn", "type": "uint256"},
            {"name": "fee", "type": "uint24"},
        ],
        "outputs": [{"name": "amountOut", "type": "uint256"}],
    },
]


class ContractQuoterBackend(ABC):
    """Base class for backends that quote through a contract call."""

    abi: list[dict[str, Any]] = []

    def __init__(
        self,
        w3: AsyncWeb3,
        address: str,
        label: str,
        output_decimals: int | None = None,
    ) -> None:
        """Initialize backend with an async web3 instance.

        Args:
            w3: Connected AsyncWeb3 instance
            address: Quoting contract address
            label: Backend name reported on quotes
            output_decimals: Decimals of returned amounts, if not the output asset's
        """
        self.w3 = w3
        self.label = label
        self.output_decimals = output_decimals
        self.address = Web3.to_checksum_address(address)
        self.contract = w3.eth.contract(address=self.address, abi=self.abi)

    @classmethod
    def from_rpc(cls, rpc_url: str, **kwargs: Any) -> ContractQuoterBackend:
        """Create a backend connected to an HTTP RPC endpoint.

        Args:
            rpc_url: HTTP RPC URL (e.g., "http://127.0.0.1:8545")
            **kwargs: Forwarded to the constructor
        """
        return cls(AsyncWeb3(AsyncHTTPProvider(rpc_url)), **kwargs)

    @abstractmethod
    def build_call(self, asset_in: Asset, asset_out: Asset, amount_in: int, fee: int) -> Any:
        """Return the bound contract function for this quote."""
        ...

    def parse_result(self, result: Any) -> int:
        """Extract the output amount from the decoded call result."""
        return int(result)

    async def quote(
        self,
        asset_in: Asset,
        asset_out: Asset,
        amount_in: int,
        fee: int,
    ) -> int:
        """Get output amount for exact input via a static RPC call."""
        call = self.build_call(asset_in, asset_out, amount_in, fee)
        try:
            result = await call.call()
        except (ContractLogicError, BadFunctionCallOutput) as e:
            logger.warning(
                "backend_quote_reverted",
                source=self.label,
                pair=f"{asset_in.symbol} -> {asset_out.symbol}",
                fee=fee,
                amount_in=amount_in,
                error=str(e),
            )
            raise InvalidTrade(
                f"{self.label}: quote reverted for {asset_in.symbol} -> "
                f"{asset_out.symbol} fee={fee}: {e}"
            ) from e
        except Exception as e:
            logger.warning(
                "backend_quote_failed",
                source=self.label,
                pair=f"{asset_in.symbol} -> {asset_out.symbol}",
                fee=fee,
                amount_in=amount_in,
                error=str(e),
            )
            raise BackendUnavailable(self.label, str(e)) from e

        try:
            return self.parse_result(result)
        except (TypeError, ValueError, IndexError) as e:
            raise BackendUnavailable(self.label, f"malformed result {result!r}") from e


class LensQuoterBackend(ContractQuoterBackend):
    """Reference backend: Uniswap V3 lens Quoter (V1)."""

    abi = LENS_QUOTER_ABI

    def __init__(
        self,
        w3: AsyncWeb3,
        address: str = LENS_QUOTER_ADDRESS,
        label: str = "lens",
        output_decimals: int | None = None,
    ) -> None:
        super().__init__(w3, address, label, output_decimals)

    def build_call(self, asset_in: Asset, asset_out: Asset, amount_in: int, fee: int) -> Any:
        return self.contract.functions.quoteExactInputSingle(
            Web3.to_checksum_address(asset_in.address),
            Web3.to_checksum_address(asset_out.address),
            fee,
            amount_in,
            0,  # sqrtPriceLimitX96 = 0 means no limit
        )


class QuoterV2Backend(ContractQuoterBackend):
    """Uniswap V3 QuoterV2 backend."""

    abi = QUOTER_V2_ABI

    def __init__(
        self,
        w3: AsyncWeb3,
        address: str = QUOTER_V2_ADDRESS,
        label: str = "quoter_v2",
        output_decimals: int | None = None,
    ) -> None:
        super().__init__(w3, address, label, output_decimals)

    def build_call(self, asset_in: Asset, asset_out: Asset, amount_in: int, fee: int) -> Any:
        return self.contract.functions.quoteExactInputSingle(
            (
                Web3.to_checksum_address(asset_in.address),
                Web3.to_checksum_address(asset_out.address),
                amount_in,
                fee,
                0,  # sqrtPriceLimitX96 = 0 means no limit
            )
        )

    def parse_result(self, result: Any) -> int:
        # Result is (amountOut, sqrtPriceX96After, initializedTicksCrossed, gasEstimate)
        return int(result[0])


class EstimatorBackend(ContractQuoterBackend):
    """Custom quoter backend exposing estimateMaxSwapUniswapV3."""

    abi = ESTIMATOR_ABI

    def __init__(
        self,
        w3: AsyncWeb3,
        address: str,
        label: str = "estimator",
        output_decimals: int | None = None,
    ) -> None:
        super().__init__(w3, address, label, output_decimals)

    def build_call(self, asset_in: Asset, asset_out: Asset, amount_in: int, fee: int) -> Any:
        return self.contract.functions.estimateMaxSwapUniswapV3(
            Web3.to_checksum_address(asset_in.address),
            Web3.to_checksum_address(asset_out.address),
            amount_in,
            fee,
        )


__all__ = [
    "ContractQuoterBackend",
    "LensQuoterBackend",
    "QuoterV2Backend",
    "EstimatorBackend",
    "LENS_QUOTER_ABI",
    "QUOTER_V2_ABI",
    "ESTIMATOR_ABI",
]
