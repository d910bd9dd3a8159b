"""Tests for crypto pool swap math and the AMM facade."""

import pytest
from structlog.testing import capture_logs

from cryptoswap.amm import (
    CryptoSwapPool,
    SwapResult,
    calc_in_given_out,
    calc_out_given_in,
    swap_math,
)
from cryptoswap.errors import UnsafeAmplification, UnsafeBalanceError
from tests.helpers import BALANCED, ONE_MILLION, TWO_TO_ONE, TYPICAL_ANN, TYPICAL_GAMMA

AMOUNT = ONE_MILLION // 1000

# Two independent solver round trips on 1e24-sized balances
QUOTE_TOLERANCE = 10**11


class TestCalcOutGivenIn:
    """Tests for calc_out_given_in."""

    @pytest.mark.parametrize("i,j", [(0, 1), (1, 0)])
    def test_balanced_pool_small_trade(self, i, j):
        """A 0.1% trade at balance gets slightly less than 1:1."""
        out = calc_out_given_in(TYPICAL_ANN, TYPICAL_GAMMA, BALANCED, i, j, AMOUNT)
        assert AMOUNT * 99 // 100 < out < AMOUNT

    def test_balanced_pool_is_symmetric(self):
        forward = calc_out_given_in(TYPICAL_ANN, TYPICAL_GAMMA, BALANCED, 0, 1, AMOUNT)
        backward = calc_out_given_in(TYPICAL_ANN, TYPICAL_GAMMA, BALANCED, 1, 0, AMOUNT)
        assert forward == backward

    def test_scarce_side_is_more_expensive(self):
        """Selling the abundant coin for the scarce one yields less."""
        into_scarce = calc_out_given_in(TYPICAL_ANN, TYPICAL_GAMMA, TWO_TO_ONE, 0, 1, AMOUNT)
        into_abundant = calc_out_given_in(TYPICAL_ANN, TYPICAL_GAMMA, TWO_TO_ONE, 1, 0, AMOUNT)
        assert into_scarce < AMOUNT < into_abundant

    def test_larger_trade_has_worse_rate(self):
        small = calc_out_given_in(TYPICAL_ANN, TYPICAL_GAMMA, BALANCED, 0, 1, AMOUNT)
        large = calc_out_given_in(TYPICAL_ANN, TYPICAL_GAMMA, BALANCED, 0, 1, 100 * AMOUNT)
        assert large < 100 * small

    def test_self_swap_raises(self):
        with pytest.raises(ValueError):
            calc_out_given_in(TYPICAL_ANN, TYPICAL_GAMMA, BALANCED, 0, 0, AMOUNT)

    def test_index_out_of_range(self):
        with pytest.raises(IndexError):
            calc_out_given_in(TYPICAL_ANN, TYPICAL_GAMMA, BALANCED, 0, 2, AMOUNT)

    def test_solver_errors_propagate(self):
        with pytest.raises(UnsafeAmplification):
            calc_out_given_in(0, TYPICAL_GAMMA, BALANCED, 0, 1, AMOUNT)

    def test_no_decrease_in_output_balance_quotes_zero(self, monkeypatch):
        monkeypatch.setattr(swap_math, "newton_y", lambda ann, gamma, x, d, i: BALANCED[i] + 5)
        assert calc_out_given_in(TYPICAL_ANN, TYPICAL_GAMMA, BALANCED, 0, 1, AMOUNT) == 0


class TestCalcInGivenOut:
    """Tests for calc_in_given_out."""

    def test_balanced_pool_small_trade(self):
        """Buying 0.1% at balance costs slightly more than 1:1."""
        amount_in = calc_in_given_out(TYPICAL_ANN, TYPICAL_GAMMA, BALANCED, 0, 1, AMOUNT)
        assert AMOUNT < amount_in < AMOUNT * 101 // 100

    def test_inverts_calc_out_given_in(self):
        """Quoting the output back gives the original input within solver tolerance."""
        amount_out = calc_out_given_in(TYPICAL_ANN, TYPICAL_GAMMA, TWO_TO_ONE, 0, 1, AMOUNT)
        amount_in = calc_in_given_out(TYPICAL_ANN, TYPICAL_GAMMA, TWO_TO_ONE, 0, 1, amount_out)
        assert abs(amount_in - AMOUNT) <= QUOTE_TOLERANCE

    def test_amount_out_exceeds_balance(self):
        with pytest.raises(UnsafeBalanceError):
            calc_in_given_out(TYPICAL_ANN, TYPICAL_GAMMA, BALANCED, 0, 1, ONE_MILLION)

    def test_self_swap_raises(self):
        with pytest.raises(ValueError):
            calc_in_given_out(TYPICAL_ANN, TYPICAL_GAMMA, BALANCED, 1, 1, AMOUNT)


class TestCryptoSwapPool:
    """Tests for the pool dataclass."""

    def test_requires_two_balances(self):
        with pytest.raises(ValueError):
            CryptoSwapPool(id="0", ann=TYPICAL_ANN, gamma=TYPICAL_GAMMA, balances=(1, 2, 3))  # type: ignore[arg-type]


class TestCryptoSwapAMM:
    """Tests for the AMM facade."""

    def test_invariant(self, amm, balanced_pool):
        assert amm.invariant(balanced_pool) == 2 * ONE_MILLION

    def test_simulate_swap(self, amm, balanced_pool):
        result = amm.simulate_swap(balanced_pool, 0, 1, AMOUNT)
        assert isinstance(result, SwapResult)
        assert result.amount_in == AMOUNT
        assert result.amount_out == calc_out_given_in(
            TYPICAL_ANN, TYPICAL_GAMMA, BALANCED, 0, 1, AMOUNT
        )
        assert (result.token_in, result.token_out, result.pool_id) == (0, 1, "0")

    def test_simulate_swap_on_skewed_pool(self, amm, skewed_pool):
        """Buying the scarce coin returns less than the input."""
        result = amm.simulate_swap(skewed_pool, 0, 1, AMOUNT)
        assert result is not None
        assert 0 < result.amount_out < AMOUNT
        assert result.pool_id == "1"

    def test_simulate_swap_exact_output(self, amm, balanced_pool):
        result = amm.simulate_swap_exact_output(balanced_pool, 1, 0, AMOUNT)
        assert result is not None
        assert result.amount_out == AMOUNT
        assert result.amount_in > AMOUNT

    def test_self_swap_returns_none(self, amm, balanced_pool):
        with capture_logs() as logs:
            assert amm.simulate_swap(balanced_pool, 0, 0, AMOUNT) is None
        assert logs[0]["event"] == "crypto_amm_self_swap"

    def test_engine_failure_returns_none_and_logs(self, amm):
        bad_pool = CryptoSwapPool(id="bad", ann=0, gamma=TYPICAL_GAMMA, balances=BALANCED)
        with capture_logs() as logs:
            assert amm.simulate_swap(bad_pool, 0, 1, AMOUNT) is None
        assert logs[0]["event"] == "crypto_amm_swap_failed"
        assert logs[0]["pool_id"] == "bad"
        assert logs[0]["log_level"] == "debug"

    def test_zero_output_returns_none_and_logs(self, amm, balanced_pool, monkeypatch):
        monkeypatch.setattr("cryptoswap.amm.amm.calc_out_given_in", lambda *args: 0)
        with capture_logs() as logs:
            assert amm.simulate_swap(balanced_pool, 0, 1, AMOUNT) is None
        assert logs[0]["event"] == "crypto_amm_zero_output"
        assert logs[0]["amount_in"] == AMOUNT

    def test_exact_output_failure_returns_none(self, amm, balanced_pool):
        with capture_logs() as logs:
            assert amm.simulate_swap_exact_output(balanced_pool, 0, 1, ONE_MILLION) is None
        assert logs[0]["event"] == "crypto_amm_exact_output_failed"

    def test_invariant_failure_returns_none(self, amm):
        bad_pool = CryptoSwapPool(id="bad", ann=TYPICAL_ANN, gamma=0, balances=BALANCED)
        with capture_logs() as logs:
            assert amm.invariant(bad_pool) is None
        assert logs[0]["event"] == "crypto_amm_invariant_failed"
