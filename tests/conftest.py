"""Pytest configuration and fixtures."""

import pytest

from dexrouter.config import ChainConfig, RouterConfig, get_chain_config
from dexrouter.multicall import MockCallExecutor, Multicall3Client


class FakeClock:
    """Manually advanced monotonic clock for cache expiry tests."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def base_chain() -> ChainConfig:
    """Base network config; every protocol is deployed there."""
    return get_chain_config("base")


@pytest.fixture
def ethereum_chain() -> ChainConfig:
    """Ethereum mainnet config; no Aerodrome."""
    return get_chain_config("ethereum")


@pytest.fixture
def failing_executor() -> MockCallExecutor:
    """Executor whose every inner call fails."""
    return MockCallExecutor()


@pytest.fixture
def multicall() -> Multicall3Client:
    """Multicall3 client with the default batch size and a short timeout."""
    return Multicall3Client(batch_timeout_seconds=1.0)


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def router_config() -> RouterConfig:
    return RouterConfig(batch_timeout_seconds=1.0)
