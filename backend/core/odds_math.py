"""Fundamental odds mathematics — the single source of truth.

Every function here is **pure**: no I/O, no logging, no side effects.
Import from this module; never reimplement locally in services or the API.

Two flavours of the same conversion are exposed:

1. :func:`american_to_decimal` — the strict primitive.  Raises
   ``ValueError`` on anything that is not a representable American price.
2. :func:`convert_odds` — the value-returning variant used by the hedge
   engine.  Never raises; returns a :class:`ConversionFailure` instead so
   callers can render a generic "enter valid values" state.

Design decisions
----------------
* Prices with ``|odds| < 100`` (including 0) are rejected.  The region
  between -100 and +100 is not a quoting convention any US book uses, and
  guessing one would silently produce wrong hedge stakes.
* Text input is accepted by :func:`convert_odds` because the values usually
  come straight out of a form field.  ``bool`` is rejected even though it
  is an ``int`` subclass.

Run tests with::

    pytest tests/test_odds_math.py -v
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Final, Optional, Union

# ---------------------------------------------------------------------------
# Module-level constants
# ---------------------------------------------------------------------------

#: American-odds magnitude floor.  No book quotes |odds| < 100; values below
#: this are a typing error on the caller's side.
MIN_ODDS_MAGNITUDE: Final[int] = 100

PriceInput = Union[int, float, str]


# ---------------------------------------------------------------------------
# Failure values
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Failure:
    """Base class for failure values returned by the engine.

    Failure values are always falsy so the coarse check ``if not result:``
    distinguishes "valid result" from "no result" without inspecting the
    failure type.
    """

    reason: str

    def __bool__(self) -> bool:
        return False


@dataclass(frozen=True)
class ConversionFailure(Failure):
    """A price could not be turned into a decimal multiplier."""

    price: object = None


# ---------------------------------------------------------------------------
# Odds conversion
# ---------------------------------------------------------------------------


def _parse_price(price: PriceInput) -> Optional[float]:
    """Parse *price* to a finite float, or ``None`` when that is impossible."""
    if isinstance(price, bool):
        return None
    if isinstance(price, str):
        price = price.strip()
        if not price:
            return None
    try:
        value = float(price)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value):
        return None
    return value


def _check_price(price: PriceInput) -> tuple[Optional[float], str]:
    value = _parse_price(price)
    if value is None:
        return None, f"Price {price!r} is not a finite number"
    if abs(value) < MIN_ODDS_MAGNITUDE:
        return None, (
            f"Price {price!r} is not valid American odds: "
            f"magnitude must be >= {MIN_ODDS_MAGNITUDE}"
        )
    return value, ""


def american_to_decimal(american: PriceInput) -> float:
    """Convert American odds to decimal (European) format.

    Decimal odds represent the total payout per unit staked, **including**
    the return of the stake itself.  Examples::

        american_to_decimal(-110) → 1.9091   (risk 110 to win 100)
        american_to_decimal(+150) → 2.5000   (risk 100 to win 150)

    Args:
        american: American odds.  Sign convention: negative = favourite
            (risk more than you win), positive = underdog (win more than
            you risk).

    Returns:
        Decimal odds ≥ 2.0 for underdogs, in ``(1.0, 2.0]`` for favourites.

    Raises:
        ValueError: If the input is not a finite number or ``|american| < 100``.

    Note:
        Even-money (+100 / -100) returns 2.0 in both conventions.
    """
    value, reason = _check_price(american)
    if value is None:
        raise ValueError(reason)
    if value > 0:
        return value / 100.0 + 1.0
    # Negative: risk |american| to win 100
    return 100.0 / abs(value) + 1.0


def convert_odds(price: PriceInput) -> Union[float, ConversionFailure]:
    """Convert American odds to a decimal multiplier without raising.

    Same arithmetic as :func:`american_to_decimal`.  Unparseable, non-finite,
    zero or sub-100 prices yield a :class:`ConversionFailure`.

    Examples::

        convert_odds(150)    → 2.5
        convert_odds("-110") → 1.9090909...
        convert_odds(0)      → ConversionFailure(...)
    """
    value, reason = _check_price(price)
    if value is None:
        return ConversionFailure(reason=reason, price=price)
    if value > 0:
        return value / 100.0 + 1.0
    return 100.0 / abs(value) + 1.0


def implied_prob(american: PriceInput) -> float:
    """Raw implied probability from American odds (vig-inclusive).

    Examples::

        implied_prob(-110) → 0.5238
        implied_prob(+150) → 0.4000
    """
    return 1.0 / american_to_decimal(american)
