"""Pytest configuration and fixtures."""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from station.api.main import app
from station.config import PoolConfig
from station.pool import StationPool

E18 = 10**18

# Four-token pool (amp 10)
TOKEN_BTC = "0x" + "a" * 40
TOKEN_ETH = "0x" + "b" * 40
TOKEN_DAI = "0x" + "c" * 40
TOKEN_USDC = "0x" + "d" * 40
POOL_TOKENS = (TOKEN_BTC, TOKEN_ETH, TOKEN_DAI, TOKEN_USDC)


@pytest.fixture
def pool_config() -> PoolConfig:
    """Four-token pool with amp 10 and a 1/10 withdrawal fee."""
    return PoolConfig(tokens=POOL_TOKENS, amp=10, withdraw_fee_rate=10)


@pytest.fixture
def station_pool(pool_config: PoolConfig) -> StationPool:
    """StationPool over the four-token config."""
    return StationPool(pool_config)


@pytest.fixture
def unit_prices() -> tuple[int, ...]:
    """All four tokens priced at 1.0 (18 decimals)."""
    return (E18,) * len(POOL_TOKENS)


@pytest.fixture
def client() -> Iterator[TestClient]:
    """Create a test client for the API."""
    yield TestClient(app)
    app.dependency_overrides.clear()
