"""
Pydantic request/response schemas for the Hedge Calculator API.

Request models only check shape (numbers are numbers, flags are flags).
Whether a stake or price is *usable* is decided by the calculation core, so
the API and the in-process engine reject exactly the same inputs.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field

from backend.services.fees import FeeMode, FeeSelection


# ---------------------------------------------------------------------------
# Fee selection
# ---------------------------------------------------------------------------

class FeeSelectionIn(BaseModel):
    """
    The fee card.

    ``include_fee`` must be true for any fee to be charged.  The per-bet fee
    is charged on both legs.
    """

    mode: Literal["location", "state", "custom"] = Field("custom")
    include_fee: bool = Field(False, description="Charge the fee as an expense")
    state: Optional[str] = Field(None, max_length=60, description='e.g. "New York"')
    custom_fee: Optional[str] = Field(
        None, max_length=20, description="Fee per bet in dollars, as typed"
    )
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)

    def to_selection(self) -> FeeSelection:
        return FeeSelection(
            mode=FeeMode(self.mode),
            include_fee=self.include_fee,
            state=self.state,
            custom_fee=self.custom_fee,
            latitude=self.latitude,
            longitude=self.longitude,
        )


# ---------------------------------------------------------------------------
# Solve
# ---------------------------------------------------------------------------

class HedgeSolveRequest(BaseModel):
    """Payload for POST /api/hedge/solve."""

    original_stake: float = Field(..., description="Stake on the original bet")
    original_odds: float = Field(..., description="American odds of the original bet")
    hedge_odds: float = Field(..., description="American odds of the hedge bet")
    is_free_bet: bool = Field(False, description="Original stake is a free bet")
    fee: Optional[FeeSelectionIn] = None

    model_config = {
        "json_schema_extra": {
            "example": {
                "original_stake": 100,
                "original_odds": 150,
                "hedge_odds": -120,
                "is_free_bet": False,
                "fee": {"mode": "state", "state": "New York", "include_fee": True},
            }
        }
    }


class HedgeSolveResponse(BaseModel):
    """Solved hedge, amounts rounded to cents."""
    semantics: Literal["cash", "free"]
    hedge_stake: float
    profit_if_original_wins: float
    profit_if_hedge_wins: float
    guaranteed_profit: float
    total_fee: float
    fee_jurisdiction: Optional[str] = None
    display: dict[str, str]


# ---------------------------------------------------------------------------
# Evaluate
# ---------------------------------------------------------------------------

class HedgeEvaluateRequest(BaseModel):
    """Payload for POST /api/hedge/evaluate."""

    original_stake: float
    original_odds: float
    hedge_stake: float
    hedge_odds: float
    is_free_bet: bool = False
    fee: Optional[FeeSelectionIn] = None

    model_config = {
        "json_schema_extra": {
            "example": {
                "original_stake": 100,
                "original_odds": 150,
                "hedge_stake": 100,
                "hedge_odds": -120,
                "is_free_bet": False,
            }
        }
    }


class HedgeEvaluateResponse(BaseModel):
    """Evaluated stakes, amounts rounded to cents."""
    semantics: Literal["cash", "free"]
    original_payout: float
    hedge_payout: float
    profit_if_original_wins: float
    profit_if_hedge_wins: float
    total_staked: float
    total_fee: float
    fee_jurisdiction: Optional[str] = None
    outcome: Literal["guaranteed_profit", "loss_either_way", "mixed"]
    display: dict[str, str]


# ---------------------------------------------------------------------------
# Odds and fees
# ---------------------------------------------------------------------------

class OddsConversionResponse(BaseModel):
    american: float
    decimal: float
    implied_prob: float


class StateFeeResponse(BaseModel):
    state: str
    fee_per_bet: float
    total_fee: float = Field(..., description="Fee charged across both legs")


class StateFeeListResponse(BaseModel):
    total_states: int
    states: list[StateFeeResponse]


class LocateRequest(BaseModel):
    """Payload for POST /api/fees/locate."""
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class CalculationErrorResponse(BaseModel):
    """422 body when the engine returns a failure."""
    detail: str = "Enter valid values"
    reason: str
