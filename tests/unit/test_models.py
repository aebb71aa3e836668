"""Tests for the oracle data model."""

from decimal import Decimal

import pytest

from quote_oracle.errors import InvalidTrade
from quote_oracle.models import UINT256_MAX, Asset, ComparisonResult, TradeSpec, validate_uint256
from tests.helpers import USDT, WBTC, make_quote, make_trade


class TestAsset:
    def test_valid(self):
        asset = Asset("WBTC", WBTC, 8)

        assert asset.symbol == "WBTC"
        assert asset.decimals == 8

    def test_invalid_address(self):
        with pytest.raises(ValueError, match="Invalid FOO address"):
            Asset("FOO", "0x1234", 18)

    @pytest.mark.parametrize("decimals", [-1, 78])
    def test_decimals_out_of_range(self, decimals):
        with pytest.raises(ValueError, match="decimals"):
            Asset("FOO", WBTC, decimals)

    def test_same_token_ignores_case(self):
        assert Asset("WBTC", WBTC, 8).same_token(Asset("wbtc", WBTC.lower(), 8))
        assert not Asset("WBTC", WBTC, 8).same_token(Asset("USDT", USDT, 6))


class TestTradeSpec:
    def test_pair(self):
        assert make_trade().pair == "WBTC -> USDT"

    def test_same_asset_rejected(self):
        wbtc = Asset("WBTC", WBTC, 8)

        with pytest.raises(InvalidTrade):
            TradeSpec(wbtc, Asset("WBTC2", WBTC.lower(), 8), 1, 3000)

    def test_negative_amount_rejected(self):
        with pytest.raises(InvalidTrade, match="uint256"):
            make_trade(amount_in=-1)

    def test_amount_above_uint256_rejected(self):
        with pytest.raises(InvalidTrade):
            make_trade(amount_in=UINT256_MAX + 1)

    def test_negative_fee_rejected(self):
        with pytest.raises(InvalidTrade, match="Fee"):
            make_trade(fee=-1)


class TestQuote:
    def test_amount_and_formatted(self):
        quote = make_quote("lens", 65_012_345_678)

        assert quote.amount == Decimal("65012.345678")
        assert quote.formatted == "65012.345678"

    def test_whole_amount_formats_with_trailing_zero(self):
        assert make_quote("lens", 65_000_000_000).formatted == "65000.0"

    @pytest.mark.parametrize("raw_amount", [-1, UINT256_MAX + 1])
    def test_raw_amount_out_of_range_rejected(self, raw_amount):
        with pytest.raises(ValueError, match="uint256"):
            make_quote("lens", raw_amount)

    @pytest.mark.parametrize("raw_amount", [True, 65000.5, "65000"])
    def test_non_integer_raw_amount_rejected(self, raw_amount):
        with pytest.raises(ValueError, match="must be int"):
            make_quote("lens", raw_amount)

    @pytest.mark.parametrize("decimals", [-1, 78])
    def test_decimals_out_of_range_rejected(self, decimals):
        with pytest.raises(ValueError, match="decimals"):
            make_quote("lens", 1, decimals=decimals)


class TestComparisonResult:
    def test_failure_message(self):
        result = ComparisonResult(
            minimum=Decimal(100),
            maximum=Decimal(105),
            relative_deviation=Decimal("0.05"),
            tolerance=Decimal("0.01"),
            passed=False,
            quotes=(make_quote("a", 100_000_000), make_quote("b", 105_000_000)),
        )

        assert result.trade == make_trade()
        assert result.message == (
            "Oracle price mismatch for WBTC -> USDT: deviation 0.050000 "
            "(min 100, max 105, tolerance 0.01)"
        )

    def test_passing_message_without_quotes(self):
        result = ComparisonResult(
            minimum=Decimal(1),
            maximum=Decimal(1),
            relative_deviation=Decimal(0),
            tolerance=Decimal("0.01"),
            passed=True,
        )

        assert result.trade is None
        assert result.message.startswith("Oracle prices agree for quotes")


class TestValidateUint256:
    def test_accepts_int_and_string(self):
        assert validate_uint256(5) == 5
        assert validate_uint256("5") == 5
        assert validate_uint256(str(UINT256_MAX)) == UINT256_MAX

    @pytest.mark.parametrize("value", [True, 1.5, "1e3", "-1", UINT256_MAX + 1])
    def test_rejects(self, value):
        with pytest.raises(ValueError):
            validate_uint256(value)
