"""Route enumeration, batched quoting and selection.

This package provides:
- Candidate path generation (direct, one and two intermediaries)
- One routing strategy per protocol
- RouteOptimizer, the cached entry point
"""

from dexrouter.routing.optimizer import RouteCache, RouteOptimizer, cache_key
from dexrouter.routing.pathfinding import (
    direct_path,
    double_intermediary_paths,
    generate_candidate_paths,
    generate_multihop_paths,
    single_intermediary_paths,
)
from dexrouter.routing.strategies import (
    AerodromeRoutingStrategy,
    RoutingStrategy,
    UniswapV2RoutingStrategy,
    UniswapV3RoutingStrategy,
    UniswapV4RoutingStrategy,
)
from dexrouter.routing.types import CandidatePath, QuoteContext

__all__ = [
    # Types
    "CandidatePath",
    "QuoteContext",
    # Path generation
    "direct_path",
    "single_intermediary_paths",
    "double_intermediary_paths",
    "generate_multihop_paths",
    "generate_candidate_paths",
    # Strategies
    "RoutingStrategy",
    "UniswapV2RoutingStrategy",
    "UniswapV3RoutingStrategy",
    "UniswapV4RoutingStrategy",
    "AerodromeRoutingStrategy",
    # Optimizer
    "RouteCache",
    "RouteOptimizer",
    "cache_key",
]
