"""
FastAPI application for the Hedge Calculator
Exposes odds conversion, hedge solving, manual evaluation and fee lookups
"""

from fastapi import FastAPI, Depends, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from datetime import datetime, timezone
from typing import Optional, Tuple
import logging

from backend.auth import verify_api_key
from backend.config import get_settings
from backend.core.hedge import (
    CalculationFailure,
    evaluate_manual,
    solve_hedge,
)
from backend.core.money import classify_outcome, round_money, total_fee
from backend.core.odds_math import ConversionFailure, convert_odds, implied_prob
from backend.schemas import (
    CalculationErrorResponse,
    FeeSelectionIn,
    HedgeEvaluateRequest,
    HedgeEvaluateResponse,
    HedgeSolveRequest,
    HedgeSolveResponse,
    LocateRequest,
    OddsConversionResponse,
    StateFeeListResponse,
    StateFeeResponse,
)
from backend.services.fees import StateLocator, total_fee_for_selection
from backend.services.geolocation import GeolocationError, ReverseGeocoder
from backend.services.jurisdictions import (
    UnknownJurisdictionError,
    canonical_state,
    fee_for_state_strict,
    list_state_fees,
)

settings = get_settings()

# Logging setup
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

APP_VERSION = "1.0"
INVALID_INPUT_DETAIL = "Enter valid values"

# Body of the 422 raised for InvalidCalculation
INVALID_INPUT_RESPONSES = {422: {"model": CalculationErrorResponse}}

app = FastAPI(
    title=settings.app_name,
    description="Two-leg hedge solver and evaluator for cash and free bets",
    version=APP_VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class InvalidCalculation(Exception):
    """Engine failure surfaced as a 422 response."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


def get_locator() -> StateLocator:
    """Reverse geocoder used by the location fee mode."""
    return ReverseGeocoder()


def _resolve_total_fee(
    fee: Optional[FeeSelectionIn], locator: StateLocator
) -> Tuple[float, Optional[str]]:
    if fee is None:
        return 0.0, None
    try:
        return total_fee_for_selection(fee.to_selection(), locator)
    except ValueError as exc:
        raise InvalidCalculation(str(exc))


# ============================================================================
# PUBLIC ENDPOINTS
# ============================================================================

@app.get("/")
async def root():
    """Service banner"""
    return {
        "app": settings.app_name,
        "version": APP_VERSION,
        "status": "operational",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@app.get("/health")
async def health_check():
    """Health check endpoint: runs one reference calculation"""
    check = solve_hedge(100, 150, -120)
    if isinstance(check, CalculationFailure):
        logger.error("Health check calculation failed: %s", check.reason)
        return JSONResponse(status_code=503, content={"status": "degraded"})
    return {"status": "healthy"}


# ============================================================================
# AUTHENTICATED ENDPOINTS - CALCULATOR
# ============================================================================

@app.get(
    "/api/odds/convert",
    response_model=OddsConversionResponse,
    responses=INVALID_INPUT_RESPONSES,
)
async def convert(
    price: str = Query(..., description="American odds, e.g. -110 or +150"),
    user: str = Depends(verify_api_key),
):
    """Convert American odds to a decimal multiplier."""
    decimal = convert_odds(price)
    if isinstance(decimal, ConversionFailure):
        raise InvalidCalculation(decimal.reason)
    return OddsConversionResponse(
        american=float(price),
        decimal=decimal,
        implied_prob=implied_prob(price),
    )


@app.post(
    "/api/hedge/solve",
    response_model=HedgeSolveResponse,
    responses=INVALID_INPUT_RESPONSES,
)
async def solve(
    payload: HedgeSolveRequest,
    user: str = Depends(verify_api_key),
    locator: StateLocator = Depends(get_locator),
):
    """Hedge stake that locks in the same profit whichever leg wins."""
    fee, jurisdiction = _resolve_total_fee(payload.fee, locator)
    result = solve_hedge(
        payload.original_stake,
        payload.original_odds,
        payload.hedge_odds,
        is_free_bet=payload.is_free_bet,
        total_fee=fee,
    )
    if isinstance(result, CalculationFailure):
        raise InvalidCalculation(result.reason)

    logger.info(
        "Solved hedge for %s: stake=%.2f %s/%s %s -> hedge=%.2f guaranteed=%.2f",
        user, payload.original_stake, payload.original_odds, payload.hedge_odds,
        result.semantics.value, result.hedge_stake, result.guaranteed_profit,
    )
    return HedgeSolveResponse(
        semantics=result.semantics.value,
        hedge_stake=round_money(result.hedge_stake),
        profit_if_original_wins=round_money(result.profit_if_original_wins),
        profit_if_hedge_wins=round_money(result.profit_if_hedge_wins),
        guaranteed_profit=round_money(result.guaranteed_profit),
        total_fee=round_money(result.total_fee),
        fee_jurisdiction=jurisdiction,
        display=result.as_display(),
    )


@app.post(
    "/api/hedge/evaluate",
    response_model=HedgeEvaluateResponse,
    responses=INVALID_INPUT_RESPONSES,
)
async def evaluate(
    payload: HedgeEvaluateRequest,
    user: str = Depends(verify_api_key),
    locator: StateLocator = Depends(get_locator),
):
    """Payout and profit of each outcome for two stakes already chosen."""
    fee, jurisdiction = _resolve_total_fee(payload.fee, locator)
    result = evaluate_manual(
        payload.original_stake,
        payload.original_odds,
        payload.hedge_stake,
        payload.hedge_odds,
        is_free_bet=payload.is_free_bet,
        total_fee=fee,
    )
    if isinstance(result, CalculationFailure):
        raise InvalidCalculation(result.reason)

    return HedgeEvaluateResponse(
        semantics=result.semantics.value,
        original_payout=round_money(result.original_payout),
        hedge_payout=round_money(result.hedge_payout),
        profit_if_original_wins=round_money(result.profit_if_original_wins),
        profit_if_hedge_wins=round_money(result.profit_if_hedge_wins),
        total_staked=round_money(result.total_staked),
        total_fee=round_money(result.total_fee),
        fee_jurisdiction=jurisdiction,
        outcome=classify_outcome(result.profit_if_original_wins, result.profit_if_hedge_wins),
        display=result.as_display(),
    )


# ============================================================================
# AUTHENTICATED ENDPOINTS - FEES
# ============================================================================

@app.get("/api/fees/states", response_model=StateFeeListResponse)
async def get_state_fees(user: str = Depends(verify_api_key)):
    """Fee per bet for every jurisdiction, in picker order."""
    states = [
        StateFeeResponse(state=state, fee_per_bet=fee, total_fee=total_fee(fee))
        for state, fee in list_state_fees()
    ]
    return StateFeeListResponse(total_states=len(states), states=states)


@app.get("/api/fees/states/{state}", response_model=StateFeeResponse)
async def get_state_fee(state: str, user: str = Depends(verify_api_key)):
    """Fee per bet for a single jurisdiction."""
    try:
        fee = fee_for_state_strict(state)
    except UnknownJurisdictionError:
        raise HTTPException(status_code=404, detail=f"Unknown state: {state}")
    return StateFeeResponse(
        state=canonical_state(state), fee_per_bet=fee, total_fee=total_fee(fee)
    )


@app.post("/api/fees/locate", response_model=StateFeeResponse)
async def locate_fee(
    payload: LocateRequest,
    user: str = Depends(verify_api_key),
    locator: StateLocator = Depends(get_locator),
):
    """Detect the state from coordinates and return its fee."""
    try:
        detected = locator.state_for_coordinates(payload.latitude, payload.longitude)
    except GeolocationError as exc:
        raise HTTPException(status_code=502, detail=str(exc))

    try:
        state = canonical_state(detected)
        fee = fee_for_state_strict(state)
    except UnknownJurisdictionError:
        logger.info("Located %r outside the fee table, no fee", detected)
        state, fee = detected, 0.0
    return StateFeeResponse(state=state, fee_per_bet=fee, total_fee=total_fee(fee))


# ============================================================================
# ERROR HANDLING
# ============================================================================

@app.exception_handler(InvalidCalculation)
async def invalid_calculation_handler(request, exc: InvalidCalculation):
    """Engine rejected the inputs: one generic message plus the reason"""
    logger.debug("Rejected %s: %s", request.url.path, exc.reason)
    return JSONResponse(
        status_code=422,
        content=CalculationErrorResponse(
            detail=INVALID_INPUT_DETAIL, reason=exc.reason
        ).model_dump(),
    )


@app.exception_handler(GeolocationError)
async def geolocation_error_handler(request, exc: GeolocationError):
    """Location fee mode could not resolve a state"""
    return JSONResponse(status_code=502, content={"detail": str(exc)})


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Catch-all exception handler"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "type": type(exc).__name__}
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
