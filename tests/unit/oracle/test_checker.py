"""Tests for the convergence checker."""

import decimal
from decimal import Decimal

import pytest

from quote_oracle.errors import DegenerateComparison, PriceMismatch
from quote_oracle.models.trade import MISMATCH_MESSAGE
from quote_oracle.oracle.checker import assert_converged, check_convergence, to_tolerance
from quote_oracle.oracle.normalizer import DECIMAL_HIGH_PREC_CONTEXT
from tests.helpers import ESTIMATOR_QUOTE, HIGH_QUOTE, LENS_QUOTE, make_quote, make_trade


class TestCheckConvergence:
    """Tests for check_convergence."""

    def test_quotes_within_one_percent_pass(self):
        """Two backends within 1% of each other converge."""
        quotes = [make_quote("lens", LENS_QUOTE), make_quote("estimator", ESTIMATOR_QUOTE)]

        result = check_convergence(quotes)

        assert result.passed is True
        assert result.minimum == Decimal("65000")
        assert result.maximum == Decimal("65012.345678")
        assert result.relative_deviation < Decimal("0.01")
        assert result.tolerance == Decimal("0.01")
        assert result.quotes == tuple(quotes)

    def test_five_percent_gap_fails(self):
        quotes = [make_quote("lens", HIGH_QUOTE), make_quote("estimator", ESTIMATOR_QUOTE)]

        result = check_convergence(quotes)

        assert result.passed is False
        assert result.relative_deviation == Decimal("0.05")
        assert MISMATCH_MESSAGE in result.message

    def test_deviation_exactly_at_tolerance_fails(self):
        """The comparison is strict: deviation == tolerance is a mismatch."""
        quotes = [make_quote("a", 100_000_000), make_quote("b", 101_000_000)]

        result = check_convergence(quotes, tolerance="0.01")

        assert result.relative_deviation == Decimal("0.01")
        assert result.passed is False

    def test_order_of_quotes_does_not_matter(self):
        a = make_quote("a", LENS_QUOTE)
        b = make_quote("b", ESTIMATOR_QUOTE)

        forward = check_convergence([a, b])
        backward = check_convergence([b, a])

        assert forward.relative_deviation == backward.relative_deviation
        assert forward.passed == backward.passed

    def test_n_backends_use_overall_min_and_max(self):
        quotes = [
            make_quote("a", 100_000_000),
            make_quote("b", 100_500_000),
            make_quote("c", 100_200_000),
        ]

        result = check_convergence(quotes)

        assert result.minimum == Decimal(100)
        assert result.maximum == Decimal("100.5")
        assert result.relative_deviation == Decimal("0.005")
        assert result.passed is True

    def test_mismatched_decimals_are_normalized(self):
        """A backend reporting 18 decimals agrees with one reporting 6."""
        quotes = [
            make_quote("six", 65_000_000_000, decimals=6),
            make_quote("eighteen", 65_000 * 10**18, decimals=18),
        ]

        result = check_convergence(quotes)

        assert result.relative_deviation == 0
        assert result.passed is True

    def test_uint256_scale_values_keep_full_precision(self):
        """A one-unit difference on 2^255-sized amounts is still visible."""
        quotes = [
            make_quote("a", 2**255, decimals=18),
            make_quote("b", 2**255 + 1, decimals=18),
        ]

        result = check_convergence(quotes)

        with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
            assert result.maximum - result.minimum == Decimal(1).scaleb(-18)
        assert result.relative_deviation > 0
        assert result.passed is True

    def test_both_zero_is_trivially_equal(self):
        quotes = [make_quote("a", 0), make_quote("b", 0)]

        result = check_convergence(quotes)

        assert result.relative_deviation == 0
        assert result.passed is True

    def test_zero_baseline_is_degenerate(self):
        quotes = [make_quote("a", 0), make_quote("b", 1)]

        with pytest.raises(DegenerateComparison):
            check_convergence(quotes)

    def test_negative_quote_cannot_be_compared(self):
        """A negative minimum would give a negative deviation and a false pass."""
        with pytest.raises(ValueError, match="uint256"):
            check_convergence([make_quote("a", -100_000_000), make_quote("b", 100_000_000)])

    def test_requires_two_quotes(self):
        with pytest.raises(ValueError, match="At least two quotes"):
            check_convergence([make_quote("a", LENS_QUOTE)])

    def test_rejects_quotes_for_different_trades(self):
        quotes = [
            make_quote("a", LENS_QUOTE),
            make_quote("b", LENS_QUOTE, trade=make_trade(amount_in=2 * 10**8)),
        ]

        with pytest.raises(ValueError, match="same trade"):
            check_convergence(quotes)

    def test_identical_inputs_give_identical_results(self):
        quotes = [make_quote("lens", LENS_QUOTE), make_quote("estimator", ESTIMATOR_QUOTE)]

        assert check_convergence(quotes) == check_convergence(list(quotes))

    def test_zero_tolerance_never_passes(self):
        same = [make_quote("a", LENS_QUOTE), make_quote("b", LENS_QUOTE)]
        different = [make_quote("a", LENS_QUOTE), make_quote("b", LENS_QUOTE + 1)]

        assert check_convergence(same, tolerance=0).passed is False
        assert check_convergence(different, tolerance=0).passed is False


class TestAssertConverged:
    """Tests for assert_converged."""

    def test_passing_result_is_returned(self):
        result = check_convergence(
            [make_quote("lens", LENS_QUOTE), make_quote("estimator", ESTIMATOR_QUOTE)]
        )

        assert assert_converged(result) is result

    def test_failing_result_raises_price_mismatch(self):
        result = check_convergence(
            [make_quote("lens", HIGH_QUOTE), make_quote("estimator", ESTIMATOR_QUOTE)]
        )

        with pytest.raises(PriceMismatch, match="Oracle price mismatch"):
            assert_converged(result)

    def test_price_mismatch_is_an_assertion_error(self):
        result = check_convergence(
            [make_quote("lens", HIGH_QUOTE), make_quote("estimator", ESTIMATOR_QUOTE)]
        )

        with pytest.raises(AssertionError):
            assert_converged(result)


class TestToTolerance:
    """Tests for tolerance coercion."""

    def test_float_is_exact(self):
        assert to_tolerance(0.01) == Decimal("0.01")

    def test_string_and_int(self):
        assert to_tolerance("0.05") == Decimal("0.05")
        assert to_tolerance(0) == Decimal(0)

    def test_negative_rejected(self):
        with pytest.raises(ValueError, match="non-negative"):
            to_tolerance("-0.01")

    def test_garbage_rejected(self):
        with pytest.raises(ValueError, match="Invalid tolerance"):
            to_tolerance("one percent")

    def test_nan_rejected(self):
        with pytest.raises(ValueError):
            to_tolerance("NaN")
