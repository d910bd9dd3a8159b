"""Error classes for the crypto pool math engine.

Every failure of the engine is fatal to the calling operation: nothing is
retried internally and callers should treat any of these as a rejected
trade.
"""


class CryptoMathError(Exception):
    """Base error for crypto pool math operations."""

    pass


# --- Arithmetic ---


class MathOverflowError(CryptoMathError, ArithmeticError):
    """Unsigned 256-bit arithmetic failed: overflow, underflow or division by zero."""

    pass


class DivisionByZero(MathOverflowError):
    """Division or mul_div by zero."""

    pass


class Underflow(MathOverflowError):
    """Subtraction would produce a negative result."""

    pass


class Uint256Overflow(MathOverflowError):
    """Value exceeds 2^256 - 1."""

    pass


# --- Parameter and balance safety ---


class UnsafeParameterError(CryptoMathError, ValueError):
    """A model parameter is outside its validated range."""

    pass


class UnsafeAmplification(UnsafeParameterError):
    """dev: unsafe values A"""

    pass


class UnsafeGamma(UnsafeParameterError):
    """dev: unsafe values gamma"""

    pass


class UnsafeInvariant(UnsafeParameterError):
    """dev: unsafe values D"""

    pass


class UnsafeBalanceError(CryptoMathError, ValueError):
    """A reserve or recovered balance is outside its validated window."""

    pass


# --- Convergence ---


class NonConvergenceError(CryptoMathError):
    """Iteration ceiling reached without meeting the tolerance."""

    pass


class GeometricMeanDidNotConverge(NonConvergenceError):
    """Newton iteration for the geometric mean did not converge."""

    pass


class InvariantDidNotConverge(NonConvergenceError):
    """Newton-Raphson iteration for invariant D did not converge."""

    pass


class BalanceDidNotConverge(NonConvergenceError):
    """Newton-Raphson iteration for balance y did not converge."""

    pass


class HalfpowDidNotConverge(NonConvergenceError):
    """Series expansion for 0.5 ** x did not converge."""

    pass


class SqrtDidNotConverge(NonConvergenceError):
    """Newton iteration for the fixed-point square root did not converge."""

    pass
