"""Mathematical core of the crypto pool engine.

This package provides the pure fixed-point functions:
- mul_div / mul_div_rounding_up: 512-bit safe multiply-divide
- geometric_mean, newton_d, newton_y: invariant and balance solvers
- halfpow, sqrt_int: decay weight and square root
"""

from cryptoswap.math.crypto_math import geometric_mean, newton_d, newton_y, validate_a_gamma
from cryptoswap.math.exp_math import halfpow, sqrt_int
from cryptoswap.math.full_math import mul_div, mul_div_rounding_up, mulmod

__all__ = [
    "geometric_mean",
    "halfpow",
    "mul_div",
    "mul_div_rounding_up",
    "mulmod",
    "newton_d",
    "newton_y",
    "sqrt_int",
    "validate_a_gamma",
]
