"""Tests for the scripted mock backend."""

import asyncio

import pytest

from quote_oracle.backends import MockQuoteBackend, QuoteBackend, QuoteKey
from quote_oracle.errors import BackendUnavailable, InvalidTrade
from tests.helpers import FEE_3000, ONE_WBTC, USDT, WBTC


class TestQuoteKey:
    """Tests for QuoteKey equality and hashing."""

    def test_address_case_insensitive(self):
        upper = QuoteKey(WBTC, USDT, FEE_3000, ONE_WBTC)
        lower = QuoteKey(WBTC.lower(), USDT.lower(), FEE_3000, ONE_WBTC)

        assert upper == lower
        assert hash(upper) == hash(lower)

    def test_fee_distinguishes_keys(self):
        assert QuoteKey(WBTC, USDT, 3000, ONE_WBTC) != QuoteKey(WBTC, USDT, 500, ONE_WBTC)

    def test_not_equal_to_other_types(self):
        assert QuoteKey(WBTC, USDT, FEE_3000, ONE_WBTC) != (WBTC, USDT, FEE_3000, ONE_WBTC)


class TestMockQuoteBackend:
    """Tests for MockQuoteBackend behavior."""

    def test_satisfies_protocol(self):
        assert isinstance(MockQuoteBackend(), QuoteBackend)

    def test_configured_quote(self, wbtc, usdt):
        backend = MockQuoteBackend(
            quotes={QuoteKey(WBTC, USDT, FEE_3000, ONE_WBTC): 65_000_000_000}
        )

        assert asyncio.run(backend.quote(wbtc, usdt, ONE_WBTC, FEE_3000)) == 65_000_000_000

    def test_default_rate_floors(self, wbtc, usdt):
        backend = MockQuoteBackend(default_rate=(2, 3))

        assert asyncio.run(backend.quote(wbtc, usdt, 10, FEE_3000)) == 6

    def test_configured_quote_wins_over_default_rate(self, wbtc, usdt):
        backend = MockQuoteBackend(
            quotes={QuoteKey(WBTC, USDT, FEE_3000, ONE_WBTC): 1},
            default_rate=(1, 1),
        )

        assert asyncio.run(backend.quote(wbtc, usdt, ONE_WBTC, FEE_3000)) == 1

    def test_unconfigured_quote_is_invalid_trade(self, wbtc, usdt):
        backend = MockQuoteBackend(label="empty")

        with pytest.raises(InvalidTrade, match="empty"):
            asyncio.run(backend.quote(wbtc, usdt, ONE_WBTC, FEE_3000))

    def test_error_is_raised_and_call_recorded(self, wbtc, usdt):
        backend = MockQuoteBackend(error=BackendUnavailable("mock", "rpc down"))

        with pytest.raises(BackendUnavailable, match="rpc down"):
            asyncio.run(backend.quote(wbtc, usdt, ONE_WBTC, FEE_3000))

        assert backend.calls == [(WBTC, USDT, ONE_WBTC, FEE_3000)]
