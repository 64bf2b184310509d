"""Tests for jurisdictions.py fee table and fees.py fee resolution."""

import pytest
from unittest.mock import MagicMock

from backend.services.fees import (
    FeeMode,
    FeeSelection,
    parse_custom_fee,
    resolve_fee_per_bet,
    total_fee_for_selection,
)
from backend.services.geolocation import GeolocationError
from backend.services.jurisdictions import (
    STATE_BETTING_FEES,
    US_STATES,
    UnknownJurisdictionError,
    canonical_state,
    fee_for_state,
    fee_for_state_strict,
    list_state_fees,
)


# ---------------------------------------------------------------------------
# Fee table
# ---------------------------------------------------------------------------

class TestJurisdictionTable:

    def test_every_state_has_a_fee(self):
        assert len(US_STATES) == 51
        assert set(US_STATES) == set(STATE_BETTING_FEES)

    def test_known_fees(self):
        assert fee_for_state("New York") == 0.50
        assert fee_for_state("Pennsylvania") == 0.45
        assert fee_for_state("Nevada") == 0.0

    def test_lookup_is_forgiving(self):
        assert canonical_state("  new   york ") == "New York"
        assert fee_for_state("DISTRICT OF COLUMBIA") == 0.35

    def test_unknown_state_defaults_to_zero(self):
        assert fee_for_state("Ontario") == 0.0

    def test_strict_lookup_raises(self):
        with pytest.raises(UnknownJurisdictionError):
            fee_for_state_strict("Ontario")
        with pytest.raises(KeyError):
            canonical_state("")

    def test_list_in_picker_order(self):
        pairs = list_state_fees()
        assert [state for state, _ in pairs] == list(US_STATES)
        assert ("Illinois", 0.50) in pairs


# ---------------------------------------------------------------------------
# Custom fee parsing
# ---------------------------------------------------------------------------

class TestParseCustomFee:

    def test_amounts(self):
        assert parse_custom_fee("0.35") == 0.35
        assert parse_custom_fee(" $1.25 ") == 1.25
        assert parse_custom_fee(2) == 2.0

    def test_blank_or_garbage_is_no_fee(self):
        assert parse_custom_fee(None) == 0.0
        assert parse_custom_fee("") == 0.0
        assert parse_custom_fee("abc") == 0.0

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            parse_custom_fee("-1")


# ---------------------------------------------------------------------------
# Fee resolution
# ---------------------------------------------------------------------------

class TestResolveFeePerBet:

    def test_state_mode(self):
        selection = FeeSelection(mode=FeeMode.STATE, state="new jersey", include_fee=True)
        assert resolve_fee_per_bet(selection) == (0.35, "New Jersey")

    def test_state_mode_requires_state(self):
        with pytest.raises(ValueError):
            resolve_fee_per_bet(FeeSelection(mode=FeeMode.STATE))

    def test_custom_mode(self):
        selection = FeeSelection(mode=FeeMode.CUSTOM, custom_fee="0.60")
        assert resolve_fee_per_bet(selection) == (0.60, None)

    def test_location_mode_uses_locator(self):
        locator = MagicMock()
        locator.state_for_coordinates.return_value = "Illinois"
        selection = FeeSelection(mode=FeeMode.LOCATION, latitude=41.88, longitude=-87.63)

        assert resolve_fee_per_bet(selection, locator) == (0.50, "Illinois")
        locator.state_for_coordinates.assert_called_once_with(41.88, -87.63)

    def test_location_outside_table(self):
        locator = MagicMock()
        locator.state_for_coordinates.return_value = "Ontario"
        selection = FeeSelection(mode=FeeMode.LOCATION, latitude=43.65, longitude=-79.38)

        assert resolve_fee_per_bet(selection, locator) == (0.0, "Ontario")

    def test_location_requires_coordinates_and_locator(self):
        with pytest.raises(ValueError):
            resolve_fee_per_bet(FeeSelection(mode=FeeMode.LOCATION), MagicMock())
        with pytest.raises(ValueError):
            resolve_fee_per_bet(
                FeeSelection(mode=FeeMode.LOCATION, latitude=1.0, longitude=1.0)
            )

    def test_locator_error_propagates(self):
        locator = MagicMock()
        locator.state_for_coordinates.side_effect = GeolocationError("Geocoding failed")
        selection = FeeSelection(mode=FeeMode.LOCATION, latitude=1.0, longitude=1.0)
        with pytest.raises(GeolocationError):
            resolve_fee_per_bet(selection, locator)


class TestTotalFeeForSelection:

    def test_no_selection(self):
        assert total_fee_for_selection(None) == (0.0, None)

    def test_not_included_skips_lookup(self):
        locator = MagicMock()
        selection = FeeSelection(mode=FeeMode.LOCATION, latitude=1.0, longitude=1.0)
        assert total_fee_for_selection(selection, locator) == (0.0, None)
        locator.state_for_coordinates.assert_not_called()

    def test_fee_charged_on_both_legs(self):
        selection = FeeSelection(mode=FeeMode.STATE, state="New York", include_fee=True)
        assert total_fee_for_selection(selection) == (1.0, "New York")

    def test_zero_fee_state(self):
        selection = FeeSelection(mode=FeeMode.STATE, state="Texas", include_fee=True)
        assert total_fee_for_selection(selection) == (0.0, "Texas")
