"""Quoting backends.

This package provides the backends compared by the oracle:
- QuoteBackend protocol
- Scripted mock (MockQuoteBackend) for tests
- ExecutorBackend adapting synchronous quote functions
- On-chain backends over web3 (lens Quoter, QuoterV2, custom estimator)
"""

from .base import QuoteBackend
from .executor import ExecutorBackend
from .mock import MockQuoteBackend, QuoteKey
from .onchain import (
    ESTIMATOR_ABI,
    LENS_QUOTER_ABI,
    QUOTER_V2_ABI,
    ContractQuoterBackend,
    EstimatorBackend,
    LensQuoterBackend,
    QuoterV2Backend,
)

__all__ = [
    # Protocol
    "QuoteBackend",
    # Mock
    "MockQuoteBackend",
    "QuoteKey",
    # Adapters
    "ExecutorBackend",
    # On-chain
    "ContractQuoterBackend",
    "LensQuoterBackend",
    "QuoterV2Backend",
    "EstimatorBackend",
    "LENS_QUOTER_ABI",
    "QUOTER_V2_ABI",
    "ESTIMATOR_ABI",
]
