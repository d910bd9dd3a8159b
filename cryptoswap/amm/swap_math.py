"""Crypto pool swap math.

Composes the invariant solvers into fee-less exchange quotes:
1. Calculate the current invariant D from the balances
2. Apply the trade to one side
3. Recover the other side with newton_y at the same D

Balances must already be normalised to 18 decimals and to the pool's
internal price scale. Fees are left to the caller.
"""

from __future__ import annotations

from collections.abc import Sequence

from cryptoswap.errors import UnsafeBalanceError
from cryptoswap.math.crypto_math import newton_d, newton_y
from cryptoswap.uint256 import checked_sub

__all__ = [
    "calc_in_given_out",
    "calc_out_given_in",
]


def _validate_indices(n_coins: int, token_index_in: int, token_index_out: int) -> None:
    if token_index_in < 0 or token_index_in >= n_coins:
        raise IndexError(f"token_index_in {token_index_in} out of range for {n_coins} tokens")
    if token_index_out < 0 or token_index_out >= n_coins:
        raise IndexError(f"token_index_out {token_index_out} out of range for {n_coins} tokens")
    if token_index_in == token_index_out:
        raise ValueError("Cannot swap token with itself")


def calc_out_given_in(
    ann: int,
    gamma: int,
    balances: Sequence[int],
    token_index_in: int,
    token_index_out: int,
    amount_in: int,
) -> int:
    """Calculate output amount for a given input.

    Output = old_balance_out - new_balance_out - 1 (1 unit rounding
    protection), floored at zero.

    Raises:
        CryptoMathError: Any solver failure, unchanged
        ValueError: If token_index_in == token_index_out
        IndexError: If token indices are out of range
    """
    _validate_indices(len(balances), token_index_in, token_index_out)

    d = newton_d(ann, gamma, balances)

    new_balances = list(balances)
    new_balances[token_index_in] = balances[token_index_in] + amount_in

    new_balance_out = newton_y(ann, gamma, new_balances, d, token_index_out)

    old_balance_out = balances[token_index_out]
    if new_balance_out >= old_balance_out:
        return 0
    return old_balance_out - new_balance_out - 1


def calc_in_given_out(
    ann: int,
    gamma: int,
    balances: Sequence[int],
    token_index_in: int,
    token_index_out: int,
    amount_out: int,
) -> int:
    """Calculate input amount for a given output.

    Input = new_balance_in - old_balance_in + 1 (1 unit rounding
    protection).

    Raises:
        CryptoMathError: Any solver failure, unchanged
        UnsafeBalanceError: If amount_out >= balance_out
        ValueError: If token_index_in == token_index_out
        IndexError: If token indices are out of range
    """
    _validate_indices(len(balances), token_index_in, token_index_out)

    if amount_out >= balances[token_index_out]:
        raise UnsafeBalanceError("amount_out must be less than balance_out")

    d = newton_d(ann, gamma, balances)

    new_balances = list(balances)
    new_balances[token_index_out] = balances[token_index_out] - amount_out

    new_balance_in = newton_y(ann, gamma, new_balances, d, token_index_in)

    return checked_sub(new_balance_in + 1, balances[token_index_in])
