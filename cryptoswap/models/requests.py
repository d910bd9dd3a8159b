"""Pydantic models for the engine HTTP API."""

from pydantic import BaseModel

from cryptoswap.models.types import CoinIndex, Uint256


class PoolParams(BaseModel):
    """Model parameters and balances shared by every pool request."""

    ann: Uint256
    gamma: Uint256
    balances: tuple[Uint256, Uint256]


class InvariantRequest(PoolParams):
    """Compute D for the given balances."""


class InvariantResponse(BaseModel):
    d: Uint256


class BalanceRequest(PoolParams):
    """Recover balances[i] from the other balance and D."""

    d: Uint256
    i: CoinIndex


class BalanceResponse(BaseModel):
    y: Uint256


class QuoteRequest(PoolParams):
    """Fee-less exact-input quote from coin i to coin j."""

    i: CoinIndex
    j: CoinIndex
    amount_in: Uint256


class QuoteResponse(BaseModel):
    amount_out: Uint256


class HalfpowRequest(BaseModel):
    power: Uint256


class HalfpowResponse(BaseModel):
    result: Uint256


class ErrorResponse(BaseModel):
    """Engine failure: error kind plus message."""

    error: str
    detail: str
