"""Tests for backend/core/money.py rounding, formatting and fee helpers."""

import math

import pytest

from backend.core.hedge import solve_hedge
from backend.core.money import (
    OUTCOME_GUARANTEED_PROFIT,
    OUTCOME_LOSS_EITHER_WAY,
    OUTCOME_MIXED,
    classify_outcome,
    format_amount,
    format_money,
    round_money,
    total_fee,
)


class TestRounding:

    def test_half_up(self):
        assert round_money(2.675) == 2.68
        assert round_money(0.125) == 0.13
        assert round_money(-16.666666) == -16.67

    def test_negative_zero_normalised(self):
        assert format_amount(-0.001) == "0.00"

    def test_format_amount(self):
        assert format_amount(136.363636) == "136.36"
        assert format_amount(250) == "250.00"

    def test_amounts_beyond_default_decimal_precision(self):
        assert round_money(1e27) == 1e27
        assert round_money(-3.5e40) == -3.5e40
        assert format_amount(1e27).endswith(".00")

    def test_non_finite_passes_through(self):
        assert round_money(float("inf")) == float("inf")
        assert round_money(float("-inf")) == float("-inf")
        assert math.isnan(round_money(float("nan")))

    def test_hedge_display_with_huge_stake(self):
        result = solve_hedge(1e27, 150, -120)
        display = result.as_display()
        assert display["hedge_stake"] == f"{result.hedge_stake:.2f}"
        assert display["total_fee"] == "0.00"


class TestFormatMoney:

    def test_plain(self):
        assert format_money(13.636) == "$13.64"
        assert format_money(1234.5) == "$1,234.50"

    def test_negative(self):
        assert format_money(-16.666) == "-$16.67"

    def test_signed(self):
        assert format_money(50, signed=True) == "+$50.00"
        assert format_money(-50, signed=True) == "-$50.00"


class TestTotalFee:

    def test_doubled(self):
        assert total_fee(0.5) == 1.0
        assert total_fee(0.35) == pytest.approx(0.7)

    def test_not_included(self):
        assert total_fee(0.5, include_fee=False) == 0.0

    def test_zero_fee(self):
        assert total_fee(0.0) == 0.0


class TestClassifyOutcome:

    def test_guaranteed(self):
        assert classify_outcome(13.64, 13.64) == OUTCOME_GUARANTEED_PROFIT
        assert classify_outcome(5.0, 0.0) == OUTCOME_GUARANTEED_PROFIT

    def test_loss(self):
        assert classify_outcome(-1.0, -2.0) == OUTCOME_LOSS_EITHER_WAY

    def test_mixed(self):
        assert classify_outcome(50.0, -16.67) == OUTCOME_MIXED

    def test_zero_on_both_sides_is_guaranteed(self):
        assert classify_outcome(0.0, 0.0) == OUTCOME_GUARANTEED_PROFIT
        assert classify_outcome(1e-12, -1e-12) == OUTCOME_GUARANTEED_PROFIT

    def test_rounded_cent_loss_is_mixed(self):
        assert classify_outcome(0.0, -0.005) == OUTCOME_MIXED
