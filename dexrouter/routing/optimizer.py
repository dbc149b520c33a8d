"""Route cache and protocol dispatch.

One RouteOptimizer serves one network: it holds a strategy per protocol
deployed there and a single route cache. Cached routes are served until
their TTL runs out; there is no invalidation on chain state changes and no
stampede protection, so concurrent misses on one key each run a full quote.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any

import structlog

from dexrouter.config import DEFAULT_ROUTER_CONFIG, ChainConfig, RouterConfig, get_chain_config
from dexrouter.errors import ConfigurationError
from dexrouter.models.route import DexProtocol, Route
from dexrouter.multicall.client import CallExecutor, Multicall3Client

from .strategies import (
    AerodromeRoutingStrategy,
    RoutingStrategy,
    UniswapV2RoutingStrategy,
    UniswapV3RoutingStrategy,
    UniswapV4RoutingStrategy,
)

logger = structlog.get_logger()

STRATEGY_CLASSES: dict[DexProtocol, Callable[[ChainConfig, Multicall3Client], RoutingStrategy]] = {
    DexProtocol.CONSTANT_PRODUCT: UniswapV2RoutingStrategy,
    DexProtocol.CONCENTRATED_LIQUIDITY: UniswapV3RoutingStrategy,
    DexProtocol.SINGLETON_HOOK_POOL: UniswapV4RoutingStrategy,
    DexProtocol.STABLE_VOLATILE_FORK: AerodromeRoutingStrategy,
}


def cache_key(token_in: str, amount_in: Any, token_out: str) -> str:
    """Cache key for a request: token_in, decimal amount and token_out joined by '_'."""
    return f"{token_in}_{amount_in}_{token_out}"


class RouteCache:
    """TTL cache of routes keyed by (protocol, request key).

    Entries are kept in expiry order, so every write drops the expired
    prefix and reads drop a stale hit. Routes are copied on the way in and
    out; callers never share a cached instance. The clock is injectable so
    tests can move time without sleeping.
    """

    def __init__(
        self,
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[tuple[DexProtocol, str], tuple[float, Route]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, protocol: DexProtocol, key: str) -> Route | None:
        entry = self._entries.get((protocol, key))
        if entry is None:
            return None
        expires_at, route = entry
        if self._clock() >= expires_at:
            del self._entries[(protocol, key)]
            return None
        return route.copy()

    def set(self, protocol: DexProtocol, key: str, route: Route) -> None:
        now = self._clock()
        self._prune(now)
        # Re-insert so the entry moves to the end of the expiry order
        self._entries.pop((protocol, key), None)
        self._entries[(protocol, key)] = (now + self.ttl_seconds, route.copy())

    def _prune(self, now: float) -> None:
        while self._entries:
            oldest = next(iter(self._entries))
            if now < self._entries[oldest][0]:
                break
            del self._entries[oldest]

    def clear(self) -> None:
        self._entries.clear()


class RouteOptimizer:
    """Cache + dispatch façade over the per-protocol strategies of one network.

    Example:
        executor = Web3CallExecutor(rpc_url_for("base"))
        optimizer = RouteOptimizer("base", executor)
        route = await optimizer.get_best_route(
            DexProtocol.CONCENTRATED_LIQUIDITY, WETH, 10**18, USDC
        )
    """

    def __init__(
        self,
        network: str | ChainConfig,
        executor: CallExecutor,
        config: RouterConfig | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Build one strategy per protocol deployed on the network.

        Args:
            network: Network name or an explicit chain configuration
            executor: Static-call capability for that network
            config: Batching and caching knobs (default: RouterConfig())
            clock: Monotonic clock for cache expiry

        Raises:
            ConfigurationError: If the network is unknown
        """
        self.chain = get_chain_config(network) if isinstance(network, str) else network
        self.config = config or DEFAULT_ROUTER_CONFIG
        self.executor = executor
        self.multicall = Multicall3Client(
            address=self.chain.multicall3,
            batch_size=self.config.batch_size,
            batch_timeout_seconds=self.config.batch_timeout_seconds,
            max_concurrent_batches=self.config.max_concurrent_batches,
        )
        self.cache = RouteCache(self.config.cache_ttl_seconds, clock=clock)
        self._strategies: dict[DexProtocol, RoutingStrategy] = {
            protocol: STRATEGY_CLASSES[protocol](self.chain, self.multicall)
            for protocol in self.chain.supported_protocols
        }

    @property
    def supported_protocols(self) -> list[DexProtocol]:
        return list(self._strategies)

    def strategy_for(self, protocol: DexProtocol | str) -> RoutingStrategy:
        """Return the strategy for a protocol.

        Raises:
            ConfigurationError: If the protocol is unknown or not deployed here
        """
        try:
            resolved = DexProtocol(protocol)
        except ValueError as e:
            raise ConfigurationError(f"Unknown protocol: {protocol}") from e
        strategy = self._strategies.get(resolved)
        if strategy is None:
            raise ConfigurationError(
                f"Protocol {resolved.value} is not supported on {self.chain.name}"
            )
        return strategy

    async def get_best_route(
        self,
        protocol: DexProtocol | str,
        token_in: str,
        amount_in: Any,
        token_out: str,
    ) -> Route:
        """Best route for an exact-input swap, served from cache when fresh.

        Args:
            protocol: Protocol to route on
            token_in: Input token (zero address = native asset)
            amount_in: Exact input amount in smallest units
            token_out: Output token (zero address = native asset)

        Returns:
            The best route, or the empty route when no candidate had output

        Raises:
            ConfigurationError: If the protocol is not supported here
            InvalidInputError: On malformed addresses or amounts
        """
        strategy = self.strategy_for(protocol)
        key = cache_key(token_in, amount_in, token_out)

        cached = self.cache.get(strategy.protocol, key)
        if cached is not None:
            logger.debug("route_cache_hit", protocol=strategy.protocol.value, key=key)
            return cached

        route = await strategy.get_best_route(self.executor, token_in, amount_in, token_out)
        self.cache.set(strategy.protocol, key, route)

        logger.info(
            "route_found" if not route.is_empty else "route_empty",
            network=self.chain.name,
            protocol=strategy.protocol.value,
            amount_in=str(amount_in),
            amount_out=str(route.amount_out),
            hops=route.hop_count,
        )
        return route

    def clear_cache(self) -> None:
        self.cache.clear()


__all__ = ["RouteCache", "RouteOptimizer", "STRATEGY_CLASSES", "cache_key"]
