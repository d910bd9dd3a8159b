"""API request/response models."""

from cryptoswap.models.requests import (
    BalanceRequest,
    BalanceResponse,
    ErrorResponse,
    HalfpowRequest,
    HalfpowResponse,
    InvariantRequest,
    InvariantResponse,
    PoolParams,
    QuoteRequest,
    QuoteResponse,
)
from cryptoswap.models.types import CoinIndex, Uint256, validate_uint256

__all__ = [
    "BalanceRequest",
    "BalanceResponse",
    "CoinIndex",
    "ErrorResponse",
    "HalfpowRequest",
    "HalfpowResponse",
    "InvariantRequest",
    "InvariantResponse",
    "PoolParams",
    "QuoteRequest",
    "QuoteResponse",
    "Uint256",
    "validate_uint256",
]
