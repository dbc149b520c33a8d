"""Per-network chain configuration and router tuning.

Chain configuration is static, read-only data: contract addresses for each
protocol, well-known tokens, and the intermediary registries the path
generator draws from. RouterConfig carries the tunable batching and caching
knobs, overridable from the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict

from dexrouter.constants import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_BATCH_TIMEOUT_SECONDS,
    DEFAULT_CACHE_TTL_SECONDS,
    DEFAULT_MAX_CONCURRENT_BATCHES,
    MULTICALL3_ADDRESS,
)
from dexrouter.errors import ConfigurationError
from dexrouter.models.route import DexProtocol
from dexrouter.models.types import ZERO_ADDRESS, Address, is_zero_address, normalize_address

# Registry order for one-intermediary paths
INTERMEDIARY_SYMBOLS = [
    "usdt",
    "usdc",
    "usds",
    "dai",
    "wbtc",
    "weth",
    "wsteth",
    "uni",
    "aero",
    "virtual",
    "arb",
]

# Curated ordered pairs for two-intermediary paths
INTERMEDIARY_PAIR_SYMBOLS = [
    ("usdc", "weth"),
    ("usdt", "weth"),
    ("dai", "weth"),
    ("usds", "weth"),
    ("weth", "usdc"),
    ("weth", "usdt"),
    ("weth", "dai"),
    ("weth", "usds"),
    ("usdc", "usdt"),
    ("usdc", "dai"),
    ("usdt", "dai"),
    ("weth", "wbtc"),
    ("wbtc", "weth"),
    ("usdc", "wbtc"),
    ("wbtc", "usdc"),
    ("virtual", "weth"),
    ("weth", "virtual"),
    ("aero", "weth"),
    ("weth", "aero"),
]


class TokenAddresses(BaseModel):
    """Well-known token addresses on one network (zero address = not deployed)."""

    model_config = ConfigDict(frozen=True)

    weth: Address
    usdc: Address = ZERO_ADDRESS
    usdt: Address = ZERO_ADDRESS
    dai: Address = ZERO_ADDRESS
    wbtc: Address = ZERO_ADDRESS
    usds: Address = ZERO_ADDRESS
    wsteth: Address = ZERO_ADDRESS
    uni: Address = ZERO_ADDRESS
    aero: Address = ZERO_ADDRESS
    virtual: Address = ZERO_ADDRESS
    arb: Address = ZERO_ADDRESS

    def by_symbol(self, symbol: str) -> str:
        return str(getattr(self, symbol))


class ChainConfig(BaseModel):
    """Static addresses for one network."""

    model_config = ConfigDict(frozen=True)

    name: str
    chain_id: int
    multicall3: Address = MULTICALL3_ADDRESS
    uniswap_v2_router: Address = ZERO_ADDRESS
    uniswap_v3_quoter: Address = ZERO_ADDRESS
    uniswap_v4_quoter: Address = ZERO_ADDRESS
    aerodrome_router: Address = ZERO_ADDRESS
    aerodrome_factory: Address = ZERO_ADDRESS
    tokens: TokenAddresses

    @property
    def wrapped_native(self) -> str:
        return self.tokens.weth

    @property
    def intermediary_tokens(self) -> list[str]:
        """Deployed registry tokens, in registry order."""
        tokens = [self.tokens.by_symbol(symbol) for symbol in INTERMEDIARY_SYMBOLS]
        return [token for token in tokens if not is_zero_address(token)]

    @property
    def intermediary_pairs(self) -> list[tuple[str, str]]:
        """Curated (m1, m2) pairs; entries may hold the zero address."""
        return [
            (self.tokens.by_symbol(first), self.tokens.by_symbol(second))
            for first, second in INTERMEDIARY_PAIR_SYMBOLS
        ]

    @property
    def supported_protocols(self) -> list[DexProtocol]:
        """Protocols whose quote contracts are deployed on this network."""
        supported = []
        if not is_zero_address(self.uniswap_v2_router):
            supported.append(DexProtocol.CONSTANT_PRODUCT)
        if not is_zero_address(self.uniswap_v3_quoter):
            supported.append(DexProtocol.CONCENTRATED_LIQUIDITY)
        if not is_zero_address(self.uniswap_v4_quoter):
            supported.append(DexProtocol.SINGLETON_HOOK_POOL)
        if not is_zero_address(self.aerodrome_router) and not is_zero_address(
            self.aerodrome_factory
        ):
            supported.append(DexProtocol.STABLE_VOLATILE_FORK)
        return supported

    def token_symbol(self, address: str) -> str:
        """Symbol of a well-known token, or a shortened address."""
        if is_zero_address(address):
            return "ETH"
        normalized = normalize_address(address)
        for symbol in INTERMEDIARY_SYMBOLS:
            token = self.tokens.by_symbol(symbol)
            if not is_zero_address(token) and normalize_address(token) == normalized:
                return symbol.upper()
        return normalized[:10]


SUPPORTED_CHAINS: dict[str, ChainConfig] = {
    "ethereum": ChainConfig(
        name="ethereum",
        chain_id=1,
        uniswap_v2_router="0x7a250d5630B4cF539739dF2C5dAcb4c659F2488D",
        uniswap_v3_quoter="0x61fFE014bA17989E743c5F6cB21bF9697530B21e",
        uniswap_v4_quoter="0x52f0e24d1c21c8a0cb1e5a5dd6198556bd9e1203",
        tokens=TokenAddresses(
            weth="0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2",
            usdc="0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48",
            usdt="0xdac17f958d2ee523a2206206994597c13d831ec7",
            dai="0x6b175474e89094c44da98b954eedeac495271d0f",
            wbtc="0x2260fac5e5542a773aa44fbcfedf7c193bc2c599",
            usds="0xdC035D45d973E3EC169d2276DDab16f1e407384F",
            wsteth="0x7f39C581F595B53c5cb19bD0b3f8dA6c935E2Ca0",
            uni="0x1f9840a85d5aF5bf1D1762F925BDADdC4201F984",
        ),
    ),
    "base": ChainConfig(
        name="base",
        chain_id=8453,
        uniswap_v2_router="0x4752ba5dbc23f44d87826276bf6fd6b1c372ad24",
        uniswap_v3_quoter="0x3d4e44Eb1374240CE5F1B871ab261CD16335B76a",
        uniswap_v4_quoter="0x0d5e0f971ed27fbff6c2837bf31316121532048d",
        aerodrome_router="0xcF77a3Ba9A5CA399B7c97c74d54e5b1Beb874E43",
        aerodrome_factory="0x420DD381b31aEf6683db6B902084cB0FFECe40Da",
        tokens=TokenAddresses(
            weth="0x4200000000000000000000000000000000000006",
            usdc="0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913",
            usdt="0xfde4C96c8593536E31F229EA8f37b2ADa2699bb2",
            dai="0x50c5725949A6F0c72E6C4a641F24049A917DB0Cb",
            wbtc="0xcbB7C0000aB88B473b1f5aFd9ef808440eed33Bf",
            wsteth="0xc1CBa3fCea344f92D9239c08C0568f6F2F0ee452",
            aero="0x940181a94A35A4569E4529A3CDfB74e38FD98631",
            virtual="0x0b3e328455c4059EEb9e3f84b5543F74E24e7E1b",
        ),
    ),
    "arbitrum": ChainConfig(
        name="arbitrum",
        chain_id=42161,
        uniswap_v2_router="0x4752ba5dbc23f44d87826276bf6fd6b1c372ad24",
        uniswap_v3_quoter="0x61fFE014bA17989E743c5F6cB21bF9697530B21e",
        uniswap_v4_quoter="0x3972c00f7ed4885e145823eb7c655375d275a1c5",
        tokens=TokenAddresses(
            weth="0x82aF49447D8a07e3bd95BD0d56f35241523fBab1",
            usdc="0xaf88d065e77c8cC2239327C5EDb3A432268e5831",
            usdt="0xFd086bC7CD5C481DCC9C85ebE478A1C0b69FCbb9",
            dai="0xDA10009cBd5D07dd0CeCc66161FC93D7c9000da1",
            wbtc="0x2f2a2543B76A4166549F7aaB2e75Bef0aefC5B0f",
            uni="0xFa7F8980b0f1E64A2062791cc3b0871572f1F7f0",
            arb="0x912CE59144191C1204E64559FE8253a0e49E6548",
        ),
    ),
}


def get_chain_config(network: str) -> ChainConfig:
    """Look up the configuration for a network by name.

    Raises:
        ConfigurationError: If the network is not supported
    """
    config = SUPPORTED_CHAINS.get(network.lower())
    if config is None:
        raise ConfigurationError(
            f"Unsupported network: {network} (supported: {', '.join(sorted(SUPPORTED_CHAINS))})"
        )
    return config


def require_address(value: str | None, name: str) -> str:
    """Return a normalized contract address, failing fast when it is unset.

    Raises:
        ConfigurationError: If the address is missing or the zero address
    """
    if value is None or is_zero_address(value):
        raise ConfigurationError(f"Missing {name} address")
    return normalize_address(value)


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as err:
        raise ConfigurationError(f"{name} must be an integer, got '{raw}'") from err


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError as err:
        raise ConfigurationError(f"{name} must be a number, got '{raw}'") from err


@dataclass(frozen=True)
class RouterConfig:
    """Tunable batching and caching behavior.

    Attributes:
        batch_size: Calls packed into one aggregate3 round trip
        cache_ttl_seconds: Lifetime of a cached route
        batch_timeout_seconds: Per-batch round trip timeout; a timed out
            batch degrades to failed results
        max_concurrent_batches: Batches in flight at once (1 = sequential)
    """

    batch_size: int = DEFAULT_BATCH_SIZE
    cache_ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS
    batch_timeout_seconds: float = DEFAULT_BATCH_TIMEOUT_SECONDS
    max_concurrent_batches: int = DEFAULT_MAX_CONCURRENT_BATCHES

    def __post_init__(self) -> None:
        if self.batch_size < 1:
            raise ConfigurationError(f"batch_size must be >= 1, got {self.batch_size}")
        if self.cache_ttl_seconds < 0:
            raise ConfigurationError(
                f"cache_ttl_seconds must be >= 0, got {self.cache_ttl_seconds}"
            )
        if self.batch_timeout_seconds <= 0:
            raise ConfigurationError(
                f"batch_timeout_seconds must be > 0, got {self.batch_timeout_seconds}"
            )
        if self.max_concurrent_batches < 1:
            raise ConfigurationError(
                f"max_concurrent_batches must be >= 1, got {self.max_concurrent_batches}"
            )

    @classmethod
    def from_env(cls) -> RouterConfig:
        """Build a config from DEXROUTER_* environment variables.

        - DEXROUTER_BATCH_SIZE (default: 15)
        - DEXROUTER_CACHE_TTL_SECONDS (default: 600)
        - DEXROUTER_BATCH_TIMEOUT_SECONDS (default: 10)
        - DEXROUTER_MAX_CONCURRENT_BATCHES (default: 1)
        """
        return cls(
            batch_size=_env_int("DEXROUTER_BATCH_SIZE", DEFAULT_BATCH_SIZE),
            cache_ttl_seconds=_env_float("DEXROUTER_CACHE_TTL_SECONDS", DEFAULT_CACHE_TTL_SECONDS),
            batch_timeout_seconds=_env_float(
                "DEXROUTER_BATCH_TIMEOUT_SECONDS", DEFAULT_BATCH_TIMEOUT_SECONDS
            ),
            max_concurrent_batches=_env_int(
                "DEXROUTER_MAX_CONCURRENT_BATCHES", DEFAULT_MAX_CONCURRENT_BATCHES
            ),
        )


def rpc_url_for(network: str) -> str:
    """Read the RPC endpoint for a network from DEXROUTER_RPC_URL_<NETWORK>.

    Raises:
        ConfigurationError: If the variable is not set
    """
    name = f"DEXROUTER_RPC_URL_{network.upper()}"
    url = os.environ.get(name)
    if not url:
        raise ConfigurationError(f"{name} is not set")
    return url


# Default configuration instance
DEFAULT_ROUTER_CONFIG = RouterConfig()


__all__ = [
    "DEFAULT_ROUTER_CONFIG",
    "INTERMEDIARY_PAIR_SYMBOLS",
    "INTERMEDIARY_SYMBOLS",
    "SUPPORTED_CHAINS",
    "ChainConfig",
    "RouterConfig",
    "TokenAddresses",
    "get_chain_config",
    "require_address",
    "rpc_url_for",
]
