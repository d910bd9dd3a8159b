"""Crypto pool AMM facade.

Wraps the swap math for routing-style callers: engine failures are logged
and reported as None instead of propagating.
"""

from __future__ import annotations

import structlog

from cryptoswap.amm.base import SwapResult
from cryptoswap.amm.pools import CryptoSwapPool
from cryptoswap.amm.swap_math import calc_in_given_out, calc_out_given_in
from cryptoswap.errors import CryptoMathError
from cryptoswap.math.crypto_math import newton_d

logger = structlog.get_logger()


class CryptoSwapAMM:
    """Swap simulation over two-coin crypto pools."""

    def invariant(self, pool: CryptoSwapPool) -> int | None:
        """Current invariant D of the pool, or None if it cannot be computed."""
        try:
            return newton_d(pool.ann, pool.gamma, pool.balances)
        except CryptoMathError as e:
            logger.debug(
                "crypto_amm_invariant_failed",
                pool_id=pool.id,
                balances=pool.balances,
                error=str(e),
            )
            return None

    def simulate_swap(
        self,
        pool: CryptoSwapPool,
        token_in: int,
        token_out: int,
        amount_in: int,
    ) -> SwapResult | None:
        """Simulate an exact-input swap (sell order).

        Args:
            pool: The crypto pool
            token_in: Index of the input coin
            token_out: Index of the output coin
            amount_in: Input amount (18-decimal, price-scaled)

        Returns:
            SwapResult, or None if the swap fails or yields no output
        """
        if token_in == token_out:
            logger.debug("crypto_amm_self_swap", pool_id=pool.id, token=token_in)
            return None

        try:
            amount_out = calc_out_given_in(
                pool.ann, pool.gamma, pool.balances, token_in, token_out, amount_in
            )
        except (CryptoMathError, IndexError) as e:
            logger.debug(
                "crypto_amm_swap_failed",
                pool_id=pool.id,
                token_in=token_in,
                token_out=token_out,
                amount_in=amount_in,
                error=str(e),
            )
            return None

        if amount_out == 0:
            logger.debug(
                "crypto_amm_zero_output",
                pool_id=pool.id,
                token_in=token_in,
                token_out=token_out,
                amount_in=amount_in,
            )
            return None

        return SwapResult(
            amount_in=amount_in,
            amount_out=amount_out,
            pool_id=pool.id,
            token_in=token_in,
            token_out=token_out,
        )

    def simulate_swap_exact_output(
        self,
        pool: CryptoSwapPool,
        token_in: int,
        token_out: int,
        amount_out: int,
    ) -> SwapResult | None:
        """Simulate a swap for an exact output amount (buy order).

        Returns:
            SwapResult with the required input, or None if the swap fails
        """
        if token_in == token_out:
            logger.debug("crypto_amm_self_swap", pool_id=pool.id, token=token_in)
            return None

        try:
            amount_in = calc_in_given_out(
                pool.ann, pool.gamma, pool.balances, token_in, token_out, amount_out
            )
        except (CryptoMathError, IndexError) as e:
            logger.debug(
                "crypto_amm_exact_output_failed",
                pool_id=pool.id,
                token_in=token_in,
                token_out=token_out,
                amount_out=amount_out,
                error=str(e),
            )
            return None

        return SwapResult(
            amount_in=amount_in,
            amount_out=amount_out,
            pool_id=pool.id,
            token_in=token_in,
            token_out=token_out,
        )
