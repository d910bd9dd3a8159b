"""API endpoints for the crypto pool engine."""

import structlog
from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse

from cryptoswap.amm.swap_math import calc_out_given_in
from cryptoswap.errors import (
    CryptoMathError,
    MathOverflowError,
    NonConvergenceError,
    UnsafeBalanceError,
    UnsafeParameterError,
)
from cryptoswap.math import halfpow, newton_d, newton_y
from cryptoswap.models import (
    BalanceRequest,
    BalanceResponse,
    ErrorResponse,
    HalfpowRequest,
    HalfpowResponse,
    InvariantRequest,
    InvariantResponse,
    QuoteRequest,
    QuoteResponse,
)

logger = structlog.get_logger()

router = APIRouter()


def error_kind(error: CryptoMathError) -> str:
    """Map an engine exception to its error kind."""
    if isinstance(error, MathOverflowError):
        return "overflow"
    if isinstance(error, UnsafeParameterError):
        return "unsafe_parameter"
    if isinstance(error, UnsafeBalanceError):
        return "unsafe_balance"
    if isinstance(error, NonConvergenceError):
        return "non_convergence"
    return "math_error"


async def crypto_math_error_handler(request: Request, exc: CryptoMathError) -> JSONResponse:
    """Render engine failures as 422 responses with their error kind."""
    kind = error_kind(exc)
    logger.info(
        "engine_call_rejected",
        path=request.url.path,
        kind=kind,
        error_type=type(exc).__name__,
        error=str(exc),
    )
    body = ErrorResponse(error=kind, detail=str(exc))
    return JSONResponse(status_code=422, content=body.model_dump())


@router.post("/invariant")
async def invariant(request: InvariantRequest) -> InvariantResponse:
    """Compute the invariant D for two balances."""
    d = newton_d(request.ann, request.gamma, request.balances)
    return InvariantResponse(d=d)


@router.post("/balance")
async def balance(request: BalanceRequest) -> BalanceResponse:
    """Recover balances[i] given the other balance and D."""
    y = newton_y(request.ann, request.gamma, request.balances, request.d, request.i)
    return BalanceResponse(y=y)


@router.post("/quote")
async def quote(request: QuoteRequest) -> QuoteResponse:
    """Fee-less exact-input quote.

    Error Handling:
        - Invalid request schema: 422 Validation Error (Pydantic)
        - i == j: 422 with a plain detail message
        - Engine failure: 422 with the engine error kind
    """
    if request.i == request.j:
        raise HTTPException(status_code=422, detail="Cannot swap token with itself")

    amount_out = calc_out_given_in(
        request.ann,
        request.gamma,
        request.balances,
        request.i,
        request.j,
        request.amount_in,
    )
    logger.debug(
        "quote_computed",
        i=request.i,
        j=request.j,
        amount_in=request.amount_in,
        amount_out=amount_out,
    )
    return QuoteResponse(amount_out=amount_out)


@router.post("/halfpow")
async def decay_weight(request: HalfpowRequest) -> HalfpowResponse:
    """Compute 1e18 * 0.5 ** (power / 1e18)."""
    return HalfpowResponse(result=halfpow(request.power))
