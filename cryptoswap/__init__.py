"""Two-coin crypto pool invariant engine."""

from cryptoswap.math import halfpow, mul_div, mul_div_rounding_up, newton_d, newton_y

__version__ = "0.1.0"
__all__ = [
    "halfpow",
    "mul_div",
    "mul_div_rounding_up",
    "newton_d",
    "newton_y",
    "__version__",
]
