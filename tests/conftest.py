"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from cryptoswap.amm import CryptoSwapAMM, CryptoSwapPool
from cryptoswap.api.main import app
from tests.helpers import BALANCED, TWO_TO_ONE, TYPICAL_ANN, TYPICAL_GAMMA


@pytest.fixture
def client() -> TestClient:
    """Create a test client for the API."""
    return TestClient(app)


@pytest.fixture
def amm() -> CryptoSwapAMM:
    return CryptoSwapAMM()


@pytest.fixture
def balanced_pool() -> CryptoSwapPool:
    """Typical parameters, 1M of each coin."""
    return CryptoSwapPool(id="0", ann=TYPICAL_ANN, gamma=TYPICAL_GAMMA, balances=BALANCED)


@pytest.fixture
def skewed_pool() -> CryptoSwapPool:
    """Typical parameters, 1M of coin 0 against 0.5M of coin 1."""
    return CryptoSwapPool(id="1", ann=TYPICAL_ANN, gamma=TYPICAL_GAMMA, balances=TWO_TO_ONE)
