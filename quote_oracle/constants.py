"""Well-known addresses and default parameters for the quote oracle.

Centralizes mainnet contract addresses, token metadata and the default
comparison parameters.
"""

from decimal import Decimal

from quote_oracle.models.types import is_valid_address


def _validate_address(name: str, address: str) -> str:
    """Validate and return a contract or token address.

    Args:
        name: Name of the contract or token (for error messages)
        address: The address to validate

    Returns:
        The validated address

    Raises:
        ValueError: If the address is invalid
    """
    if not is_valid_address(address):
        raise ValueError(f"Invalid {name} address: {address} (must be 0x + 40 hex chars)")
    return address


# V3 Fee tiers in Uniswap units (hundredths of a basis point)
# Fee = units / 1,000,000 (e.g., 3000 = 0.3%)
V3_FEE_LOWEST = 100  # 0.01%
V3_FEE_LOW = 500  # 0.05%
V3_FEE_MEDIUM = 3000  # 0.30%
V3_FEE_HIGH = 10000  # 1.00%

V3_FEE_TIERS = (V3_FEE_LOWEST, V3_FEE_LOW, V3_FEE_MEDIUM, V3_FEE_HIGH)

# Contract addresses (mainnet)
LENS_QUOTER_ADDRESS = _validate_address(
    "Quoter", "0xb27308f9F90D607463bb33eA1BeBb41C27CE5AB6"
)
QUOTER_V2_ADDRESS = _validate_address("QuoterV2", "0x61fFE014bA17989E743c5F6cB21bF9697530B21e")
V3_FACTORY_ADDRESS = _validate_address(
    "UniswapV3Factory", "0x1F98431c8aD98523631AE4a59f267346ea31F984"
)

# Well-known token addresses on mainnet, with their ERC20 decimals
# All addresses are validated at import time to catch typos early
WETH = _validate_address("WETH", "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2")
DAI = _validate_address("DAI", "0x6B175474E89094C44Da98b954EedeAC495271d0F")
LINK = _validate_address("LINK", "0x514910771AF9Ca656af840dff83E8264EcF986CA")
UNI = _validate_address("UNI", "0x1f9840a85d5aF5bf1D1762F925BDADdC4201F984")
USDT = _validate_address("USDT", "0xdAC17F958D2ee523a2206206994597C13D831ec7")
WBTC = _validate_address("WBTC", "0x2260FAC5E5542a773Aa44fBCfeDf7C193bc2C599")

# (symbol, address, decimals)
KNOWN_TOKENS = (
    ("WETH", WETH, 18),
    ("DAI", DAI, 18),
    ("LINK", LINK, 18),
    ("UNI", UNI, 18),
    ("USDT", USDT, 6),
    ("WBTC", WBTC, 8),
)

# Default comparison parameters
DEFAULT_TOLERANCE = Decimal("0.01")  # 1%
DEFAULT_TIMEOUT_SECONDS = 60.0
DEFAULT_FEE_TIER = V3_FEE_MEDIUM
DEFAULT_AMOUNT_IN = 100_000_000  # 1 WBTC (8 decimals)

__all__ = [
    "V3_FEE_LOWEST",
    "V3_FEE_LOW",
    "V3_FEE_MEDIUM",
    "V3_FEE_HIGH",
    "V3_FEE_TIERS",
    "LENS_QUOTER_ADDRESS",
    "QUOTER_V2_ADDRESS",
    "V3_FACTORY_ADDRESS",
    "WETH",
    "DAI",
    "LINK",
    "UNI",
    "USDT",
    "WBTC",
    "KNOWN_TOKENS",
    "DEFAULT_TOLERANCE",
    "DEFAULT_TIMEOUT_SECONDS",
    "DEFAULT_FEE_TIER",
    "DEFAULT_AMOUNT_IN",
]
