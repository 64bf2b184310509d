"""Two-leg hedge mathematics: solve and evaluate.

Every function here is **pure**: no I/O, no logging, no side effects.

Two entry points cover the two ways a bettor uses a hedge calculator:

1. :func:`solve_hedge` — given the original stake and both prices, find the
   hedge stake that makes the profit identical whichever leg wins.
2. :func:`evaluate_manual` — given both stakes already chosen, report the
   gross payout and net profit of each outcome.

Wagering semantics
------------------
The original leg is either a **cash** bet (own money, forfeited on a loss)
or a **free** bet (promotional credit: the principal is never returned on a
win and nothing real is lost on a loss).  Only the decimal profit above the
stake is realised when a free bet wins, which changes the equalising
equation:

* Cash:  ``H = dO · S / dH``
* Free:  ``H = (dO − 1) · S / dH``

where ``S`` is the original stake, ``dO`` / ``dH`` the decimal multipliers
and ``H`` the hedge stake.

Fees
----
``total_fee`` is the already-doubled per-bet fee (see
:func:`backend.core.money.total_fee`).  It is subtracted once from each
outcome branch, so it shifts both profits down by the same amount and never
changes the solved hedge stake.

Failures are returned, not raised: both functions give back a
:class:`CalculationFailure` (falsy) and never a partially filled result.

Run tests with::

    pytest tests/test_hedge.py -v
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from backend.core.money import format_amount
from backend.core.odds_math import (
    ConversionFailure,
    Failure,
    PriceInput,
    convert_odds,
)


class WagerSemantics(str, Enum):
    """How the original leg's stake is treated."""

    CASH = "cash"
    FREE = "free"

    @classmethod
    def from_flag(cls, is_free_bet: Union[bool, "WagerSemantics"]) -> "WagerSemantics":
        if isinstance(is_free_bet, WagerSemantics):
            return is_free_bet
        return cls.FREE if is_free_bet else cls.CASH


@dataclass(frozen=True)
class CalculationFailure(Failure):
    """Invalid stake, fee or nested price conversion failure."""

    cause: Optional[ConversionFailure] = None


@dataclass(frozen=True)
class HedgeResult:
    """Output of :func:`solve_hedge`.

    Amounts are kept at full float precision; use :meth:`as_display` for the
    two-decimal presentation values.
    """

    hedge_stake: float
    profit_if_original_wins: float
    profit_if_hedge_wins: float
    guaranteed_profit: float
    total_fee: float
    semantics: WagerSemantics

    def as_display(self) -> dict[str, str]:
        return {
            "hedge_stake": format_amount(self.hedge_stake),
            "profit_if_original_wins": format_amount(self.profit_if_original_wins),
            "profit_if_hedge_wins": format_amount(self.profit_if_hedge_wins),
            "guaranteed_profit": format_amount(self.guaranteed_profit),
            "total_fee": format_amount(self.total_fee),
        }


@dataclass(frozen=True)
class EvaluationResult:
    """Output of :func:`evaluate_manual`.

    ``total_staked`` is real money at risk: free-bet principal is excluded.
    """

    original_payout: float
    hedge_payout: float
    profit_if_original_wins: float
    profit_if_hedge_wins: float
    total_staked: float
    total_fee: float
    semantics: WagerSemantics

    def as_display(self) -> dict[str, str]:
        return {
            "original_payout": format_amount(self.original_payout),
            "hedge_payout": format_amount(self.hedge_payout),
            "profit_if_original_wins": format_amount(self.profit_if_original_wins),
            "profit_if_hedge_wins": format_amount(self.profit_if_hedge_wins),
            "total_staked": format_amount(self.total_staked),
            "total_fee": format_amount(self.total_fee),
        }


# ---------------------------------------------------------------------------
# Input validation
# ---------------------------------------------------------------------------


def _positive_amount(value: object) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        amount = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if not math.isfinite(amount) or amount <= 0:
        return None
    return amount


def _fee_amount(value: object) -> Optional[float]:
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return None
    try:
        fee = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if not math.isfinite(fee) or fee < 0:
        return None
    return fee


def _convert_both(
    original_price: PriceInput, hedge_price: PriceInput
) -> Union[tuple[float, float], CalculationFailure]:
    decimal_original = convert_odds(original_price)
    if isinstance(decimal_original, ConversionFailure):
        return CalculationFailure(
            reason=f"Original price: {decimal_original.reason}", cause=decimal_original
        )
    decimal_hedge = convert_odds(hedge_price)
    if isinstance(decimal_hedge, ConversionFailure):
        return CalculationFailure(
            reason=f"Hedge price: {decimal_hedge.reason}", cause=decimal_hedge
        )
    return decimal_original, decimal_hedge


# ---------------------------------------------------------------------------
# Solve
# ---------------------------------------------------------------------------


def solve_hedge(
    original_stake: float,
    original_price: PriceInput,
    hedge_price: PriceInput,
    is_free_bet: Union[bool, WagerSemantics] = False,
    total_fee: Optional[float] = 0.0,
) -> Union[HedgeResult, CalculationFailure]:
    """Solve the hedge stake that equalises profit across both outcomes.

    Args:
        original_stake: Stake on the original leg.  Must be positive.
        original_price: American odds of the original leg.
        hedge_price: American odds of the opposing leg.
        is_free_bet: ``True`` / :attr:`WagerSemantics.FREE` when the original
            stake is promotional credit.
        total_fee: Total fee across both legs.  ``None`` means no fee.

    Returns:
        :class:`HedgeResult`, or :class:`CalculationFailure` when a price
        does not convert, the stake is not positive or the fee is invalid.

    Example::

        solve_hedge(100, +150, -120)
        → hedge_stake 136.36, both profits 13.64
    """
    stake = _positive_amount(original_stake)
    if stake is None:
        return CalculationFailure(
            reason=f"Original stake {original_stake!r} must be a positive number"
        )
    fee = _fee_amount(total_fee)
    if fee is None:
        return CalculationFailure(reason=f"Fee {total_fee!r} must be a non-negative number")

    converted = _convert_both(original_price, hedge_price)
    if isinstance(converted, CalculationFailure):
        return converted
    d_orig, d_hedge = converted

    semantics = WagerSemantics.from_flag(is_free_bet)
    if semantics is WagerSemantics.FREE:
        # Only the profit above the free stake is ever paid out
        hedge_stake = (d_orig - 1.0) * stake / d_hedge
        profit_orig = (d_orig - 1.0) * stake - hedge_stake - fee
        profit_hedge = hedge_stake * (d_hedge - 1.0) - fee
    else:
        hedge_stake = d_orig * stake / d_hedge
        profit_orig = d_orig * stake - stake - hedge_stake - fee
        profit_hedge = d_hedge * hedge_stake - stake - hedge_stake - fee

    return HedgeResult(
        hedge_stake=hedge_stake,
        profit_if_original_wins=profit_orig,
        profit_if_hedge_wins=profit_hedge,
        # Branches are equal by construction; min absorbs float asymmetry
        guaranteed_profit=min(profit_orig, profit_hedge),
        total_fee=fee,
        semantics=semantics,
    )


# ---------------------------------------------------------------------------
# Evaluate
# ---------------------------------------------------------------------------


def evaluate_manual(
    original_stake: float,
    original_price: PriceInput,
    hedge_stake: float,
    hedge_price: PriceInput,
    is_free_bet: Union[bool, WagerSemantics] = False,
    total_fee: Optional[float] = 0.0,
) -> Union[EvaluationResult, CalculationFailure]:
    """Payout and profit of each outcome for two caller-chosen stakes.

    Payouts are gross returns (stake included).  Under free-bet semantics
    the original payout is reduced by the promotional principal, which is
    never returned, and only the hedge stake counts as money at risk.
    """
    stake = _positive_amount(original_stake)
    if stake is None:
        return CalculationFailure(
            reason=f"Original stake {original_stake!r} must be a positive number"
        )
    hedge = _positive_amount(hedge_stake)
    if hedge is None:
        return CalculationFailure(
            reason=f"Hedge stake {hedge_stake!r} must be a positive number"
        )
    fee = _fee_amount(total_fee)
    if fee is None:
        return CalculationFailure(reason=f"Fee {total_fee!r} must be a non-negative number")

    converted = _convert_both(original_price, hedge_price)
    if isinstance(converted, CalculationFailure):
        return converted
    d_orig, d_hedge = converted

    original_payout = d_orig * stake
    hedge_payout = d_hedge * hedge

    semantics = WagerSemantics.from_flag(is_free_bet)
    if semantics is WagerSemantics.FREE:
        total_staked = hedge
        profit_orig = (original_payout - stake) - hedge - fee
        profit_hedge = hedge_payout - hedge - fee
    else:
        total_staked = stake + hedge
        profit_orig = original_payout - total_staked - fee
        profit_hedge = hedge_payout - total_staked - fee

    return EvaluationResult(
        original_payout=original_payout,
        hedge_payout=hedge_payout,
        profit_if_original_wins=profit_orig,
        profit_if_hedge_wins=profit_hedge,
        total_staked=total_staked,
        total_fee=fee,
        semantics=semantics,
    )
