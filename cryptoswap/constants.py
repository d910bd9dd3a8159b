"""Engine constants for the two-coin crypto pool math.

These values gate every safety check in the solvers, so they are fixed at
import time in a frozen dataclass and re-exported as module-level names.
"""

from dataclasses import dataclass

# Fixed-point unit (1.0 == 10**18)
PRECISION = 10**18


@dataclass(frozen=True)
class CurveConstants:
    """Parameter bounds and tolerances for the invariant engine.

    Attributes:
        n_coins: Number of assets in the pool (always 2)
        a_multiplier: Extra precision factor carried by ANN
        min_gamma: Smallest accepted gamma (1e-8 in fixed point)
        max_gamma: Largest accepted gamma (0.02 in fixed point)
        min_a: Smallest accepted ANN, i.e. A = 0.1
        max_a: Largest accepted ANN, i.e. A = 100_000
        max_iterations: Hard Newton iteration ceiling for every solver
        exp_precision: Series term size at which halfpow stops
    """

    n_coins: int = 2
    a_multiplier: int = 10000

    min_gamma: int = 10**10
    max_gamma: int = 2 * 10**16

    min_a: int = 2**2 * 10000 // 10
    max_a: int = 2**2 * 10000 * 100000

    max_iterations: int = 255
    exp_precision: int = 10**10

    # Safe domain for x[0] and D
    min_balance: int = 10**9
    max_balance: int = 10**15 * PRECISION
    min_invariant: int = 10**17

    # x[1] * 1e18 / x[0] must not drop below this
    min_balance_ratio: int = 10**14

    # Window for x[k] * 1e18 / D, both on exit from newton_d and newton_y
    min_fraction: int = 10**16
    max_fraction: int = 10**20


# Default constants instance
CURVE_CONSTANTS = CurveConstants()

N_COINS = CURVE_CONSTANTS.n_coins
A_MULTIPLIER = CURVE_CONSTANTS.a_multiplier
MIN_GAMMA = CURVE_CONSTANTS.min_gamma
MAX_GAMMA = CURVE_CONSTANTS.max_gamma
MIN_A = CURVE_CONSTANTS.min_a
MAX_A = CURVE_CONSTANTS.max_a
MAX_ITERATIONS = CURVE_CONSTANTS.max_iterations
EXP_PRECISION = CURVE_CONSTANTS.exp_precision
