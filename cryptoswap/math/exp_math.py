"""Fixed-point power and root helpers.

halfpow() gives the exponential decay weight 0.5 ** t used to age moving
averages, and sqrt_int() the fixed-point square root. Both are bounded
iterations over 18-decimal integers.
"""

from __future__ import annotations

from cryptoswap.constants import EXP_PRECISION, MAX_ITERATIONS, PRECISION
from cryptoswap.errors import HalfpowDidNotConverge, SqrtDidNotConverge
from cryptoswap.math.full_math import mul_div
from cryptoswap.uint256 import checked_sub, signed_sub, to_uint256

__all__ = [
    "halfpow",
    "sqrt_int",
]

# Beyond 2**59 the integer part alone rounds 1e18 down to zero
_MAX_HALVINGS = 59

_HALF = 5 * 10**17


def halfpow(power: int) -> int:
    """Compute 1e18 * 0.5 ** (power / 1e18).

    The integer part of the exponent is a shift; the fractional part is
    the binomial series of (1 - 0.5) ** frac, summed until a term drops
    below EXP_PRECISION. Inspired by Balancer's bpowApprox:
    https://github.com/balancer-labs/balancer-core/blob/master/contracts/BNum.sol#L128

    Args:
        power: Exponent as 18-decimal fixed-point

    Returns:
        The decay weight as 18-decimal fixed-point; 0 once power >= 60e18

    Raises:
        HalfpowDidNotConverge: If the series has not settled after 255 terms
    """
    to_uint256(power)
    intpow = power // PRECISION
    otherpow = power - intpow * PRECISION
    if intpow > _MAX_HALVINGS:
        return 0

    result = PRECISION // 2**intpow
    if otherpow == 0:
        return result

    term = PRECISION
    s = PRECISION
    neg = False

    for i in range(1, MAX_ITERATIONS + 1):
        k = i * PRECISION
        # (k - 1) - frac, tracking the sign flips of the binomial coefficient
        c, flipped = signed_sub(k - PRECISION, otherpow)
        if flipped:
            neg = not neg
        term = mul_div(term, mul_div(c, _HALF, PRECISION), k)
        if neg:
            s = checked_sub(s, term)
        else:
            s += term
        if term < EXP_PRECISION:
            return mul_div(result, s, PRECISION)

    raise HalfpowDidNotConverge(f"halfpow({power}) did not converge")


def sqrt_int(x: int) -> int:
    """Fixed-point square root: sqrt(x / 1e18) * 1e18.

    Originating from: https://github.com/vyperlang/vyper/issues/1266

    Raises:
        SqrtDidNotConverge: If 256 iterations are not enough
    """
    to_uint256(x)
    if x == 0:
        return 0

    z = (x + PRECISION) // 2
    y = x

    for _ in range(MAX_ITERATIONS + 1):
        if z == y:
            return y
        y = z
        z = (mul_div(x, PRECISION, z) + z) // 2

    raise SqrtDidNotConverge(f"sqrt_int({x}) did not converge")
