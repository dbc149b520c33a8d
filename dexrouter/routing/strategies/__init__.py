"""Per-protocol routing strategies."""

from dexrouter.routing.strategies.aerodrome import AerodromeRoutingStrategy
from dexrouter.routing.strategies.base import BaseRoutingStrategy, RoutingStrategy
from dexrouter.routing.strategies.uniswap_v2 import UniswapV2RoutingStrategy
from dexrouter.routing.strategies.uniswap_v3 import UniswapV3RoutingStrategy
from dexrouter.routing.strategies.uniswap_v4 import UniswapV4RoutingStrategy

__all__ = [
    "AerodromeRoutingStrategy",
    "BaseRoutingStrategy",
    "RoutingStrategy",
    "UniswapV2RoutingStrategy",
    "UniswapV3RoutingStrategy",
    "UniswapV4RoutingStrategy",
]
