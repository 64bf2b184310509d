"""Money rounding, formatting and fee helpers shared by the engine and its callers.

All functions are pure.  Rounding is half-up to two decimals, which is what
a bettor expects to see on a ticket; arithmetic upstream always runs at full
float precision and only the presented value is rounded.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Final

#: Display precision for every monetary amount.
MONEY_DECIMALS: Final[int] = 2

#: Fees are charged once per leg, and a hedge always has two legs.
FEE_LEGS: Final[int] = 2

_QUANT: Final[Decimal] = Decimal(1).scaleb(-MONEY_DECIMALS)

# Outcome labels for presentation
OUTCOME_GUARANTEED_PROFIT: Final[str] = "guaranteed_profit"
OUTCOME_LOSS_EITHER_WAY: Final[str] = "loss_either_way"
OUTCOME_MIXED: Final[str] = "mixed"


def round_money(amount: float) -> float:
    """Round *amount* half-up to two decimals.

    Goes through ``repr`` so that 2.675 rounds to 2.68 the way a person
    reading the number would expect, not to 2.67 as binary ``round`` does.
    Non-finite amounts are returned unchanged.
    """
    value = float(amount)
    if not math.isfinite(value):
        return value
    exact = Decimal(repr(value))
    with localcontext() as ctx:
        # Room for every integer digit plus the cents
        ctx.prec = max(ctx.prec, exact.adjusted() + MONEY_DECIMALS + 2)
        rounded = exact.quantize(_QUANT, rounding=ROUND_HALF_UP)
    # Normalise -0.00 to 0.00
    if rounded == 0:
        rounded = abs(rounded)
    return float(rounded)


def format_amount(amount: float) -> str:
    """Two-decimal string without currency symbol, e.g. ``"136.36"``."""
    return f"{round_money(amount):.{MONEY_DECIMALS}f}"


def format_money(amount: float, signed: bool = False) -> str:
    """Currency string, e.g. ``"$13.64"``, ``"-$16.67"`` or ``"+$50.00"``."""
    value = round_money(amount)
    body = f"${abs(value):,.{MONEY_DECIMALS}f}"
    if value < 0:
        return f"-{body}"
    if signed:
        return f"+{body}"
    return body


def total_fee(fee_per_bet: float, include_fee: bool = True) -> float:
    """Total fee for a hedge: the per-bet fee charged on both legs.

    Returns 0.0 when fees are not engaged or the per-bet fee is not positive.
    """
    if not include_fee or fee_per_bet <= 0:
        return 0.0
    return fee_per_bet * FEE_LEGS


def classify_outcome(profit_if_original_wins: float, profit_if_hedge_wins: float) -> str:
    """Label a pair of outcome profits for display.

    Works on the rounded figures so that float noise around zero does not
    flip a break-even hedge into a "loss".  Zero on both sides counts as a
    guaranteed profit.
    """
    a = round_money(profit_if_original_wins)
    b = round_money(profit_if_hedge_wins)
    if a >= 0 and b >= 0:
        return OUTCOME_GUARANTEED_PROFIT
    if a < 0 and b < 0:
        return OUTCOME_LOSS_EITHER_WAY
    return OUTCOME_MIXED
