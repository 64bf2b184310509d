"""
Fee resolution: turn the user's fee choice into the total fee for a hedge.

Three ways to pick the per-bet fee are supported:

  LOCATION  coordinates → state (reverse geocoding) → fee table
  STATE     state picked by name → fee table
  CUSTOM    amount typed by the user

The per-bet fee is then charged on both legs when the user opts in
(see :func:`backend.core.money.total_fee`).
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol, Tuple

from backend.core.money import total_fee
from backend.services.jurisdictions import (
    STATE_BETTING_FEES,
    UnknownJurisdictionError,
    canonical_state,
)

logger = logging.getLogger(__name__)


class FeeMode(str, Enum):
    LOCATION = "location"
    STATE = "state"
    CUSTOM = "custom"


class StateLocator(Protocol):
    def state_for_coordinates(self, latitude: float, longitude: float) -> str: ...


@dataclass(frozen=True)
class FeeSelection:
    """What the user chose on the fee card."""

    mode: FeeMode = FeeMode.CUSTOM
    include_fee: bool = False
    state: Optional[str] = None
    custom_fee: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


def parse_custom_fee(raw) -> float:
    """
    Parse a typed fee amount.

    Blank or unparseable input counts as no fee (0.0), matching how a
    half-typed form field behaves.  A negative amount is a user error.

    Raises:
        ValueError: the amount is negative or not finite.
    """
    if raw is None:
        return 0.0
    try:
        fee = float(str(raw).strip().lstrip("$"))
    except ValueError:
        return 0.0
    if not math.isfinite(fee) or fee < 0:
        raise ValueError(f"Fee per bet must be a non-negative amount, got {raw!r}")
    return fee


def resolve_fee_per_bet(
    selection: FeeSelection,
    locator: Optional[StateLocator] = None,
) -> Tuple[float, Optional[str]]:
    """
    Resolve the per-bet fee for *selection*.

    Returns:
        (fee per bet, jurisdiction name or None for custom amounts)

    Raises:
        ValueError: STATE mode without a state, LOCATION mode without
            coordinates or locator, or an invalid custom amount.
        GeolocationError: the locator could not resolve the coordinates.
    """
    if selection.mode == FeeMode.CUSTOM:
        return parse_custom_fee(selection.custom_fee), None

    if selection.mode == FeeMode.STATE:
        if not selection.state:
            raise ValueError("A state is required for the state fee mode")
        state = selection.state
    else:
        if selection.latitude is None or selection.longitude is None:
            raise ValueError("Coordinates are required for the location fee mode")
        if locator is None:
            raise ValueError("No locator configured for the location fee mode")
        state = locator.state_for_coordinates(selection.latitude, selection.longitude)

    try:
        state = canonical_state(state)
    except UnknownJurisdictionError:
        # Outside the table (e.g. a location abroad): no fee
        logger.warning("No fee entry for jurisdiction %r, using 0.00", state)
        return 0.0, state

    fee = STATE_BETTING_FEES[state]
    logger.debug("Fee per bet for %s: %.2f", state, fee)
    return fee, state


def total_fee_for_selection(
    selection: Optional[FeeSelection],
    locator: Optional[StateLocator] = None,
) -> Tuple[float, Optional[str]]:
    """
    Total fee across both legs for *selection*, plus the jurisdiction used.

    No selection, or a selection with ``include_fee`` off, costs nothing and
    skips any lookup.
    """
    if selection is None or not selection.include_fee:
        return 0.0, None
    fee_per_bet, state = resolve_fee_per_bet(selection, locator)
    return total_fee(fee_per_bet, include_fee=True), state
