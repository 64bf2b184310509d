"""
Tests for backend/core/odds_math.py

Run with: pytest tests/test_odds_math.py -v
"""

import pytest

from backend.core.odds_math import (
    ConversionFailure,
    Failure,
    american_to_decimal,
    convert_odds,
    implied_prob,
)


class TestConvertOdds:
    """Value-returning conversion used by the hedge engine."""

    def test_positive_odds(self):
        assert convert_odds(150) == 2.5
        assert convert_odds(100) == pytest.approx(2.0)
        assert convert_odds(200) == pytest.approx(3.0)

    def test_negative_odds(self):
        assert convert_odds(-110) == pytest.approx(1.9091, abs=1e-4)
        assert convert_odds(-120) == pytest.approx(1.8333, abs=1e-4)
        assert convert_odds(-200) == pytest.approx(1.5)

    def test_even_money_both_signs(self):
        assert convert_odds(100) == convert_odds(-100) == 2.0

    def test_text_input(self):
        assert convert_odds("150") == 2.5
        assert convert_odds(" -110 ") == pytest.approx(1.9091, abs=1e-4)
        assert convert_odds("+150") == 2.5

    def test_zero_fails(self):
        result = convert_odds(0)
        assert isinstance(result, ConversionFailure)
        assert not result

    @pytest.mark.parametrize("price", ["abc", "", "   ", None, float("nan"), "nan", float("inf"), "-inf"])
    def test_unparseable_fails(self, price):
        assert isinstance(convert_odds(price), ConversionFailure)

    @pytest.mark.parametrize("price", [50, -50, 99.9, -99])
    def test_sub_100_magnitude_fails(self, price):
        result = convert_odds(price)
        assert isinstance(result, ConversionFailure)
        assert "magnitude" in result.reason

    def test_bool_is_not_a_price(self):
        assert isinstance(convert_odds(True), ConversionFailure)

    def test_failure_keeps_input(self):
        result = convert_odds("xyz")
        assert result.price == "xyz"
        assert isinstance(result, Failure)

    def test_multiplier_always_above_one(self):
        for price in (100, 101, 250, 10000, -100, -101, -250, -10000):
            assert convert_odds(price) > 1.0


class TestAmericanToDecimal:
    """Strict conversion raises instead of returning a failure."""

    def test_matches_convert_odds(self):
        for price in (150, -110, 100, -300, 475):
            assert american_to_decimal(price) == convert_odds(price)

    @pytest.mark.parametrize("price", [0, 50, -99, "abc", float("nan")])
    def test_invalid_raises(self, price):
        with pytest.raises(ValueError):
            american_to_decimal(price)


class TestImpliedProb:

    def test_implied_prob(self):
        assert implied_prob(-110) == pytest.approx(0.5238, abs=1e-4)
        assert implied_prob(150) == pytest.approx(0.4)

    def test_invalid_raises(self):
        with pytest.raises(ValueError):
            implied_prob(0)
