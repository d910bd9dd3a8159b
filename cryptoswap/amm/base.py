"""Swap result shared by the AMM facade and the API."""

from dataclasses import dataclass


@dataclass
class SwapResult:
    """Result of simulating a swap through a crypto pool."""

    amount_in: int
    amount_out: int
    pool_id: str
    # Coin indices within the pool
    token_in: int
    token_out: int
