"""Core mathematics for the hedge calculator.

This package contains pure building blocks:

- ``odds_math`` — American ↔ decimal conversion, failure values
- ``hedge``     — solve the equalising hedge stake, evaluate two stakes
- ``money``     — two-decimal rounding, formatting, fee doubling

Nothing in this package imports from ``backend.services`` or the API.
All modules are side-effect-free and unit-testable in isolation.
"""

from backend.core.hedge import (
    CalculationFailure,
    EvaluationResult,
    HedgeResult,
    WagerSemantics,
    evaluate_manual,
    solve_hedge,
)
from backend.core.odds_math import ConversionFailure, Failure, convert_odds

__all__ = [
    "CalculationFailure",
    "ConversionFailure",
    "EvaluationResult",
    "Failure",
    "HedgeResult",
    "WagerSemantics",
    "convert_odds",
    "evaluate_manual",
    "solve_hedge",
]
