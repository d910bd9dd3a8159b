"""Crypto pool swap simulation.

Pool snapshots, fee-less swap math built on the invariant solvers, and
the AMM facade used by routing callers.
"""

from .amm import CryptoSwapAMM
from .base import SwapResult
from .pools import CryptoSwapPool
from .swap_math import calc_in_given_out, calc_out_given_in

__all__ = [
    "CryptoSwapAMM",
    "CryptoSwapPool",
    "SwapResult",
    "calc_in_given_out",
    "calc_out_given_in",
]
