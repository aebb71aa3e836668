"""Pytest configuration and fixtures."""

import pytest

from quote_oracle.backends.mock import MockQuoteBackend
from quote_oracle.config import DEFAULT_ORACLE_CONFIG, OracleConfig
from quote_oracle.engine import EquivalenceOracle
from quote_oracle.models.trade import Asset, TradeSpec
from tests.helpers import ESTIMATOR_QUOTE, LENS_QUOTE, make_backend, make_trade

ORACLE_ENV_VARS = (
    "ORACLE_RPC_URL",
    "ORACLE_ESTIMATOR_ADDRESS",
    "ORACLE_TOLERANCE",
    "ORACLE_TIMEOUT",
)


@pytest.fixture(autouse=True)
def clean_oracle_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep ORACLE_* variables from the outer environment out of tests."""
    for name in ORACLE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config() -> OracleConfig:
    """The default oracle configuration."""
    return DEFAULT_ORACLE_CONFIG


@pytest.fixture
def wbtc(config: OracleConfig) -> Asset:
    return config.asset("WBTC")


@pytest.fixture
def usdt(config: OracleConfig) -> Asset:
    return config.asset("USDT")


@pytest.fixture
def wbtc_usdt_trade() -> TradeSpec:
    """1 WBTC -> USDT on the 0.3% fee tier."""
    return make_trade()


@pytest.fixture
def reference_backend() -> MockQuoteBackend:
    """A mock lens quoter answering the reference trade."""
    return make_backend("lens", LENS_QUOTE)


@pytest.fixture
def custom_backend() -> MockQuoteBackend:
    """A mock custom quoter answering within 1% of the reference."""
    return make_backend("estimator", ESTIMATOR_QUOTE)


@pytest.fixture
def oracle(
    reference_backend: MockQuoteBackend,
    custom_backend: MockQuoteBackend,
    config: OracleConfig,
) -> EquivalenceOracle:
    """An oracle comparing the mock reference and custom backends."""
    return EquivalenceOracle([reference_backend, custom_backend], config)
