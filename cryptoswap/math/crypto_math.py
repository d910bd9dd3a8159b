"""Two-coin crypto pool invariant math.

Core solvers for the amplified, gamma-shaped constant-function invariant
used by two-asset crypto pools (Curve v2 style):
https://github.com/curvefi/curve-crypto-contract/blob/master/contracts/two/CurveCryptoMath2.vy

The invariant D satisfies

    K0 * D^(N-1) * S + D^N = K0 * D^N + (D/N)^N,
    K0 = A * gamma^2 * (N^N * prod(x) / D^N) / (gamma + 1 - N^N * prod(x) / D^N)^2

and both D (from the balances) and one balance (from D and the other
balance) are found with bounded Newton-Raphson iteration.

All values are 18-decimal fixed-point integers. Products that are divided
right away go through mul_div() so that no intermediate ever needs more
than 256 bits.
"""

from __future__ import annotations

from collections.abc import Sequence

from cryptoswap.constants import (
    A_MULTIPLIER,
    CURVE_CONSTANTS,
    MAX_A,
    MAX_GAMMA,
    MAX_ITERATIONS,
    MIN_A,
    MIN_GAMMA,
    N_COINS,
    PRECISION,
)
from cryptoswap.errors import (
    BalanceDidNotConverge,
    GeometricMeanDidNotConverge,
    InvariantDidNotConverge,
    UnsafeAmplification,
    UnsafeBalanceError,
    UnsafeGamma,
    UnsafeInvariant,
)
from cryptoswap.math.full_math import mul_div
from cryptoswap.uint256 import abs_diff, checked_div, checked_sub, signed_sub, to_uint256

__all__ = [
    "geometric_mean",
    "newton_d",
    "newton_y",
    "validate_a_gamma",
]


def validate_a_gamma(ann: int, gamma: int) -> None:
    """Check ANN and gamma against the engine bounds.

    Raises:
        UnsafeAmplification: If ANN is outside [MIN_A, MAX_A]
        UnsafeGamma: If gamma is outside [MIN_GAMMA, MAX_GAMMA]
    """
    if not MIN_A <= ann <= MAX_A:
        raise UnsafeAmplification(f"dev: unsafe values A: {ann} not in [{MIN_A}, {MAX_A}]")
    if not MIN_GAMMA <= gamma <= MAX_GAMMA:
        raise UnsafeGamma(f"dev: unsafe values gamma: {gamma} not in [{MIN_GAMMA}, {MAX_GAMMA}]")


def _balance_pair(x: Sequence[int]) -> tuple[int, int]:
    if len(x) != N_COINS:
        raise ValueError(f"Expected {N_COINS} balances, got {len(x)}")
    return to_uint256(x[0]), to_uint256(x[1])


def _check_fraction(balance: int, d: int, label: str) -> None:
    frac = mul_div(balance, PRECISION, d)
    if not CURVE_CONSTANTS.min_fraction <= frac <= CURVE_CONSTANTS.max_fraction:
        raise UnsafeBalanceError(f"dev: unsafe value for {label}: {balance} * 1e18 / {d} = {frac}")


def _g1k0(gamma: int, k0: int) -> int:
    # |gamma + 1 - K0| + 1
    return abs_diff(gamma + PRECISION, k0) + 1


def _mul1(ann: int, gamma: int, d: int, g1k0: int) -> int:
    # D / (A * N**N) * g1k0**2 / gamma**2, one division at a time
    mul1 = mul_div(PRECISION, d, gamma)
    mul1 = mul_div(mul1, g1k0, gamma)
    return mul_div(mul1, g1k0 * A_MULTIPLIER, ann)


def geometric_mean(unsorted_x: Sequence[int], sort: bool = True) -> int:
    """Geometric mean sqrt(x[0] * x[1]) by Newton iteration.

    Args:
        unsorted_x: Two balances
        sort: Order the balances high to low before iterating. The result
            does not depend on the order; sorting only seeds from the
            larger value.

    Returns:
        The geometric mean

    Raises:
        GeometricMeanDidNotConverge: If 255 iterations are not enough
    """
    x0, x1 = _balance_pair(unsorted_x)
    if sort and x0 < x1:
        x0, x1 = x1, x0

    d = x0
    for _ in range(MAX_ITERATIONS):
        d_prev = d
        # (D + x0 * x1 / D) / N
        d = (d + mul_div(x0, x1, d)) // N_COINS
        diff = abs_diff(d, d_prev)
        if diff <= 1 or diff * PRECISION < d:
            return d

    raise GeometricMeanDidNotConverge(
        f"Geometric mean did not converge after {MAX_ITERATIONS} iterations"
    )


def newton_d(ann: int, gamma: int, x_unsorted: Sequence[int]) -> int:
    """Find the invariant D for two balances using Newton's method.

    ANN is A * N**N, and is higher by the factor A_MULTIPLIER.

    Algorithm:
        1. Initial guess: D = N * geometric_mean(x), the constant-product D
        2. Newton step split into D_plus - D_minus to stay unsigned
        3. Stop when |D - D_prev| * 1e14 < max(1e16, D); at most 255 steps

    Args:
        ann: Amplification coefficient
        gamma: Convexity parameter
        x_unsorted: Two balances, any order

    Returns:
        The invariant D

    Raises:
        UnsafeAmplification, UnsafeGamma: If ANN or gamma is out of range
        UnsafeBalanceError: If the balances fall outside the safe domain,
            either on entry or relative to the converged D
        InvariantDidNotConverge: If 255 iterations are not enough
    """
    validate_a_gamma(ann, gamma)

    x0, x1 = _balance_pair(x_unsorted)
    if x0 < x1:
        x0, x1 = x1, x0

    if not CURVE_CONSTANTS.min_balance <= x0 <= CURVE_CONSTANTS.max_balance:
        raise UnsafeBalanceError(f"dev: unsafe values x[0]: {x0}")
    if mul_div(x1, PRECISION, x0) < CURVE_CONSTANTS.min_balance_ratio:
        raise UnsafeBalanceError(f"dev: unsafe values x[1] (input): {x1} / {x0}")

    d = N_COINS * geometric_mean((x0, x1), sort=False)
    s = x0 + x1

    for _ in range(MAX_ITERATIONS):
        d_prev = d

        # K0 = 1e18 * N**N * x0 * x1 / D**2, collapsed for two coins
        k0 = mul_div(mul_div(PRECISION * N_COINS**2, x0, d), x1, d)

        g1k0 = _g1k0(gamma, k0)
        mul1 = _mul1(ann, gamma, d, g1k0)

        # 2 * N * K0 / g1k0
        mul2 = mul_div(2 * PRECISION * N_COINS, k0, g1k0)

        neg_fprime = checked_sub(
            s + mul_div(s, mul2, PRECISION) + checked_div(mul1 * N_COINS, k0),
            mul_div(mul2, d, PRECISION),
        )

        # D -= f / fprime
        d_plus = mul_div(d, neg_fprime + s, neg_fprime)
        d_minus = mul_div(d, d, neg_fprime)
        curvature, k0_above_one = signed_sub(PRECISION, k0)
        correction = mul_div(
            mul_div(d, checked_div(mul1, neg_fprime), PRECISION), curvature, k0
        )
        if k0_above_one:
            d_minus = checked_sub(d_minus, correction)
        else:
            d_minus += correction

        step, overshoot = signed_sub(d_plus, d_minus)
        d = step // 2 if overshoot else step

        diff = abs_diff(d, d_prev)
        if diff * 10**14 < max(10**16, d):
            # Make sure the next newton_y stays in its safe domain
            _check_fraction(x0, d, "x[0]")
            _check_fraction(x1, d, "x[1]")
            return d

    raise InvariantDidNotConverge(
        f"Invariant D did not converge after {MAX_ITERATIONS} iterations"
    )


def _newton_y_step(ann: int, gamma: int, x_j: int, k0_i: int, d: int, y: int) -> int | None:
    """One damped Newton update of y, or None if f'(y) * y went negative."""
    k0 = mul_div(k0_i * N_COINS, y, d)
    s = x_j + y

    g1k0 = _g1k0(gamma, k0)
    mul1 = _mul1(ann, gamma, d, g1k0)

    # 1 + 2 * K0 / g1k0
    mul2 = PRECISION + mul_div(2 * PRECISION, k0, g1k0)

    yfprime, negative = signed_sub(PRECISION * y + s * mul2 + mul1, d * mul2)
    if negative:
        return None
    fprime = checked_div(yfprime, y)

    # y -= f / f_prime;  y = (y * fprime - f) / fprime
    y_minus = checked_div(mul1, fprime)
    y_plus = checked_div(yfprime + PRECISION * d, fprime) + mul_div(y_minus, PRECISION, k0)
    y_minus += mul_div(PRECISION, s, fprime)

    step, overshoot = signed_sub(y_plus, y_minus)
    return y // 2 if overshoot else step


def newton_y(ann: int, gamma: int, x: Sequence[int], d: int, i: int) -> int:
    """Calculate x[i] given the other balance and the invariant D.

    Whenever a raw Newton step would go negative the solver falls back to
    halving the previous iterate.

    Args:
        ann: Amplification coefficient
        gamma: Convexity parameter
        x: Both balances; only x[1 - i] is read
        d: The invariant to preserve
        i: Index of the balance to solve for (0 or 1)

    Returns:
        The balance y = x[i] that keeps the invariant at D

    Raises:
        UnsafeAmplification, UnsafeGamma: If ANN or gamma is out of range
        UnsafeInvariant: If D is outside [1e17, 1e33]
        UnsafeBalanceError: If x[1 - i] / D or y / D is outside [0.01, 100]
        BalanceDidNotConverge: If 255 iterations are not enough
        IndexError: If i is not 0 or 1
    """
    validate_a_gamma(ann, gamma)
    if not CURVE_CONSTANTS.min_invariant <= d <= CURVE_CONSTANTS.max_balance:
        raise UnsafeInvariant(f"dev: unsafe values D: {d}")
    if i not in (0, 1):
        raise IndexError(f"index {i} out of range for {N_COINS} coins")

    x_j = _balance_pair(x)[1 - i]

    # frac = x_j * 1e18 / D, so K0_i = N * frac
    k0_i = mul_div(PRECISION * N_COINS, x_j, d)
    if not (
        CURVE_CONSTANTS.min_fraction * N_COINS <= k0_i <= CURVE_CONSTANTS.max_fraction * N_COINS
    ):
        raise UnsafeBalanceError(f"dev: unsafe values x[{1 - i}]: {x_j}")

    # Constant-product guess: y = D**2 / (N**2 * x_j)
    y = mul_div(d, d, x_j * N_COINS**2)

    convergence_limit = max(x_j // 10**14, d // 10**14, 100)

    for _ in range(MAX_ITERATIONS):
        y_prev = y
        next_y = _newton_y_step(ann, gamma, x_j, k0_i, d, y_prev)
        if next_y is None:
            # Derivative went negative: halve and retry, no convergence check
            y = y_prev // 2
            continue
        y = next_y

        diff = abs_diff(y, y_prev)
        if diff < max(convergence_limit, y // 10**14):
            _check_fraction(y, d, "y")
            return y

    raise BalanceDidNotConverge(
        f"Balance y did not converge after {MAX_ITERATIONS} iterations"
    )
