"""Crypto pool dataclasses."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CryptoSwapPool:
    """Two-coin crypto pool snapshot.

    Attributes:
        id: Liquidity ID supplied by the caller
        ann: Amplification coefficient, already A * N**N * A_MULTIPLIER
        gamma: Convexity parameter (18-decimal fixed-point)
        balances: Both reserves, normalised to 18 decimals and to the
            pool's internal price scale
    """

    id: str
    ann: int
    gamma: int
    balances: tuple[int, int]

    def __post_init__(self) -> None:
        if len(self.balances) != 2:
            raise ValueError(f"CryptoSwapPool needs 2 balances, got {len(self.balances)}")
