"""Oracle data models."""

from quote_oracle.models.trade import (
    MISMATCH_MESSAGE,
    Asset,
    ComparisonResult,
    Quote,
    TradeSpec,
)
from quote_oracle.models.types import (
    UINT256_MAX,
    Address,
    Uint256,
    is_valid_address,
    normalize_address,
    validate_uint256,
)

__all__ = [
    "Asset",
    "TradeSpec",
    "Quote",
    "ComparisonResult",
    "MISMATCH_MESSAGE",
    "Address",
    "Uint256",
    "UINT256_MAX",
    "is_valid_address",
    "normalize_address",
    "validate_uint256",
]
