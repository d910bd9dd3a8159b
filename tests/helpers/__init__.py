"""Test helpers: shared pool parameters and reference math."""

from .params import (
    BALANCED,
    ONE_MILLION,
    TWO_TO_ONE,
    TYPICAL_ANN,
    TYPICAL_GAMMA,
    invariant_residual,
)

__all__ = [
    "BALANCED",
    "ONE_MILLION",
    "TWO_TO_ONE",
    "TYPICAL_ANN",
    "TYPICAL_GAMMA",
    "invariant_residual",
]
