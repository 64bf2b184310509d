"""
Per-jurisdiction betting fee table.

Fees are flat per-transaction amounts in dollars, one entry per US state
plus the District of Columbia.  They are approximate and are a display aid
only: the calculation core never looks them up itself, it receives the
resolved amount from the caller.
"""

import logging
from typing import Dict, List, Tuple

logger = logging.getLogger(__name__)

# Display order for state pickers
US_STATES: Tuple[str, ...] = (
    "Alabama", "Alaska", "Arizona", "Arkansas", "California", "Colorado",
    "Connecticut", "Delaware", "District of Columbia", "Florida", "Georgia",
    "Hawaii", "Idaho", "Illinois", "Indiana", "Iowa", "Kansas", "Kentucky",
    "Louisiana", "Maine", "Maryland", "Massachusetts", "Michigan", "Minnesota",
    "Mississippi", "Missouri", "Montana", "Nebraska", "Nevada", "New Hampshire",
    "New Jersey", "New Mexico", "New York", "North Carolina", "North Dakota",
    "Ohio", "Oklahoma", "Oregon", "Pennsylvania", "Rhode Island", "South Carolina",
    "South Dakota", "Tennessee", "Texas", "Utah", "Vermont", "Virginia",
    "Washington", "West Virginia", "Wisconsin", "Wyoming",
)

# Fee per bet in dollars
STATE_BETTING_FEES: Dict[str, float] = {
    "Alabama": 0.00,
    "Alaska": 0.00,
    "Arizona": 0.25,
    "Arkansas": 0.00,
    "California": 0.00,
    "Colorado": 0.25,
    "Connecticut": 0.35,
    "Delaware": 0.00,
    "District of Columbia": 0.35,
    "Florida": 0.00,
    "Georgia": 0.00,
    "Hawaii": 0.00,
    "Idaho": 0.00,
    "Illinois": 0.50,
    "Indiana": 0.25,
    "Iowa": 0.30,
    "Kansas": 0.25,
    "Kentucky": 0.00,
    "Louisiana": 0.35,
    "Maine": 0.00,
    "Maryland": 0.40,
    "Massachusetts": 0.35,
    "Michigan": 0.25,
    "Minnesota": 0.00,
    "Mississippi": 0.00,
    "Missouri": 0.00,
    "Montana": 0.00,
    "Nebraska": 0.00,
    "Nevada": 0.00,
    "New Hampshire": 0.25,
    "New Jersey": 0.35,
    "New Mexico": 0.00,
    "New York": 0.50,
    "North Carolina": 0.00,
    "North Dakota": 0.00,
    "Ohio": 0.30,
    "Oklahoma": 0.00,
    "Oregon": 0.25,
    "Pennsylvania": 0.45,
    "Rhode Island": 0.30,
    "South Carolina": 0.00,
    "South Dakota": 0.00,
    "Tennessee": 0.35,
    "Texas": 0.00,
    "Utah": 0.00,
    "Vermont": 0.00,
    "Virginia": 0.30,
    "Washington": 0.25,
    "West Virginia": 0.25,
    "Wisconsin": 0.00,
    "Wyoming": 0.25,
}

_CANONICAL: Dict[str, str] = {name.casefold(): name for name in STATE_BETTING_FEES}


class UnknownJurisdictionError(KeyError):
    """Raised by strict lookups for a name that is not in the fee table."""


def canonical_state(name: str) -> str:
    """
    Return the table spelling of *name* ("new york " → "New York").

    Raises:
        UnknownJurisdictionError: name is not a known jurisdiction.
    """
    key = " ".join(str(name).split()).casefold()
    try:
        return _CANONICAL[key]
    except KeyError:
        raise UnknownJurisdictionError(name) from None


def fee_for_state_strict(name: str) -> float:
    """Fee per bet for *name*; unknown names raise UnknownJurisdictionError."""
    return STATE_BETTING_FEES[canonical_state(name)]


def fee_for_state(name: str) -> float:
    """Fee per bet for *name*, 0.0 when the jurisdiction is not in the table."""
    try:
        return fee_for_state_strict(name)
    except UnknownJurisdictionError:
        logger.warning("No fee entry for jurisdiction %r, using 0.00", name)
        return 0.0


def list_state_fees() -> List[Tuple[str, float]]:
    """(state, fee per bet) pairs in picker order."""
    return [(state, STATE_BETTING_FEES[state]) for state in US_STATES]
