"""Overflow-safe multiply-divide on unsigned 256-bit integers.

This module implements the 512-bit mulDiv primitive (Remco Bloemen's
algorithm, as used by Uniswap V3 FullMath.sol):
https://xn--2-umb.com/21/muldiv/

Python integers are unbounded, so every EVM word operation is emulated
with explicit masking to 256 bits. The result is exact: floor(a * b / d)
or ceil(a * b / d), never anything in between.
"""

from __future__ import annotations

from cryptoswap.errors import DivisionByZero, Uint256Overflow
from cryptoswap.uint256 import UINT256_MAX, to_uint256

__all__ = [
    "mul_div",
    "mul_div_rounding_up",
    "mulmod",
]

# Newton-Raphson steps taking the modular inverse from 8 to 256 bits
_INVERSE_DOUBLINGS = 6


def mulmod(a: int, b: int, modulus: int) -> int:
    """(a * b) % modulus computed over the full product (EVM MULMOD).

    Raises:
        DivisionByZero: If modulus is zero
    """
    if modulus == 0:
        raise DivisionByZero("mulmod by zero")
    return (a * b) % modulus


def _check_operands(a: int, b: int, denominator: int) -> None:
    to_uint256(a)
    to_uint256(b)
    to_uint256(denominator)


def _mul_512(a: int, b: int) -> tuple[int, int]:
    """Split a * b into (prod1, prod0) 256-bit limbs.

    Uses the Chinese Remainder Theorem on the residues modulo 2^256 and
    2^256 - 1, so that a * b == prod1 * 2^256 + prod0.
    """
    mm = mulmod(a, b, UINT256_MAX)
    prod0 = (a * b) & UINT256_MAX
    prod1 = (mm - prod0 - (1 if mm < prod0 else 0)) & UINT256_MAX
    return prod1, prod0


def mul_div(a: int, b: int, denominator: int) -> int:
    """Compute floor(a * b / denominator) with full 512-bit precision.

    The intermediate product may exceed 256 bits; only the quotient has to
    fit.

    Args:
        a: Multiplicand (uint256)
        b: Multiplier (uint256)
        denominator: Divisor (uint256)

    Returns:
        The floored quotient as a uint256

    Raises:
        DivisionByZero: If denominator is zero
        Uint256Overflow: If an operand or the quotient does not fit in uint256
    """
    _check_operands(a, b, denominator)
    if denominator == 0:
        raise DivisionByZero(f"mul_div by zero: {a} * {b} / 0")

    prod1, prod0 = _mul_512(a, b)

    # Short path: product fits in 256 bits
    if prod1 == 0:
        return prod0 // denominator

    # Quotient must fit in 256 bits, which also requires prod1 < denominator
    if denominator <= prod1:
        raise Uint256Overflow(f"mul_div result exceeds uint256: {a} * {b} / {denominator}")

    # Make the 512-bit value exactly divisible by subtracting the remainder
    remainder = mulmod(a, b, denominator)
    prod1 = (prod1 - (1 if remainder > prod0 else 0)) & UINT256_MAX
    prod0 = (prod0 - remainder) & UINT256_MAX

    # Factor the largest power of two out of the denominator
    twos = denominator & -denominator
    denominator //= twos
    prod0 //= twos

    # Shift bits in from prod1 into prod0: flip twos to 2^256 / twos
    twos = (((-twos) & UINT256_MAX) // twos + 1) & UINT256_MAX
    prod0 |= (prod1 * twos) & UINT256_MAX

    # Inverse of the odd denominator mod 2^256; the seed is correct to
    # four bits and each step doubles the number of correct bits.
    inv = ((3 * denominator) ^ 2) & UINT256_MAX
    for _ in range(_INVERSE_DOUBLINGS):
        inv = (inv * (2 - denominator * inv)) & UINT256_MAX

    # Exact division is multiplication by the modular inverse
    return (prod0 * inv) & UINT256_MAX


def mul_div_rounding_up(a: int, b: int, denominator: int) -> int:
    """Compute ceil(a * b / denominator) with full 512-bit precision.

    Raises:
        DivisionByZero: If denominator is zero
        Uint256Overflow: If an operand or the rounded quotient does not fit
    """
    result = mul_div(a, b, denominator)
    if mulmod(a, b, denominator) > 0:
        if result == UINT256_MAX:
            raise Uint256Overflow(f"mul_div_rounding_up result exceeds uint256: {a} * {b} / {denominator}")
        result += 1
    return result
