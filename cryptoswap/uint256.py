"""Unsigned 256-bit integer helpers.

Python integers never overflow, so the engine makes the uint256 contract
explicit at the points where the on-chain arithmetic would trap:
- Values outside [0, 2^256 - 1] raise Uint256Overflow
- Subtraction underflow raises Underflow
- Division by zero raises DivisionByZero

Branches whose control flow depends on the sign of a difference use
signed_sub() instead of a trap.

Usage pattern:
    from cryptoswap.uint256 import checked_div, checked_sub, signed_sub

    diff, negative = signed_sub(d, d_prev)
    if negative:
        ...
"""

from __future__ import annotations

from cryptoswap.errors import DivisionByZero, Uint256Overflow, Underflow

UINT256_MAX = 2**256 - 1


def to_uint256(value: int) -> int:
    """Return value unchanged, validating uint256 bounds.

    Raises:
        Uint256Overflow: If value is negative or exceeds 2^256-1
    """
    if value < 0:
        raise Uint256Overflow(f"Negative value cannot be uint256: {value}")
    if value > UINT256_MAX:
        raise Uint256Overflow(f"Value exceeds uint256 max: {value}")
    return value


def signed_sub(a: int, b: int) -> tuple[int, bool]:
    """Return (|a - b|, a < b).

    The magnitude is always non-negative; the flag carries the sign.
    Equal operands give (0, False).
    """
    if a < b:
        return b - a, True
    return a - b, False


def abs_diff(a: int, b: int) -> int:
    """Absolute difference |a - b|."""
    return signed_sub(a, b)[0]


def checked_sub(a: int, b: int) -> int:
    """Subtract b from a.

    Raises:
        Underflow: If the result would be negative
    """
    result = a - b
    if result < 0:
        raise Underflow(f"Underflow: {a} - {b} = {result}")
    return result


def checked_div(a: int, b: int) -> int:
    """Floor division a // b.

    Raises:
        DivisionByZero: If b is zero
    """
    if b == 0:
        raise DivisionByZero(f"Division by zero: {a} // 0")
    return a // b
