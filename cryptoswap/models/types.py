"""Shared type definitions for the API models."""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field, PlainSerializer

from cryptoswap.uint256 import UINT256_MAX


def validate_uint256(value: Any) -> int:
    """Validate that a value is a uint256 given as int or decimal string.

    Args:
        value: Value to validate (string or int)

    Returns:
        The value as int

    Raises:
        ValueError: If value is not a non-negative integer within uint256 range
    """
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool):
        raise ValueError("Uint256 must be string or int, got bool")

    if isinstance(value, int):
        int_value = value
    elif isinstance(value, str):
        try:
            int_value = int(value)
        except ValueError as err:
            raise ValueError(f"Uint256 must be a decimal integer string: '{value}'") from err
    else:
        raise ValueError(f"Uint256 must be string or int, got {type(value).__name__}")

    if int_value < 0:
        raise ValueError(f"Uint256 cannot be negative: {value}")
    if int_value > UINT256_MAX:
        raise ValueError(f"Uint256 overflow: {value} > 2^256-1")

    return int_value


# 256-bit unsigned integer; accepted as int or decimal string, emitted as string
Uint256 = Annotated[
    int,
    BeforeValidator(validate_uint256),
    PlainSerializer(str, return_type=str),
    Field(description="256-bit unsigned integer as decimal string"),
]

# Coin index in a two-coin pool
CoinIndex = Annotated[int, Field(ge=0, le=1)]
