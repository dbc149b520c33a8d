"""Routing on Aerodrome stable and volatile pools.

A pair can have both a stable and a volatile pool, so every candidate path
is crossed with every stable/volatile assignment of its hops. Direct quotes
try the stable pool first.
"""

from __future__ import annotations

from typing import Any

from dexrouter.amm.aerodrome import (
    AerodromeQuoteEncoder,
    encode_get_amounts_out,
    pool_type_name,
    stable_combinations_for_hops,
)
from dexrouter.config import ChainConfig, require_address
from dexrouter.models.route import DexProtocol, Route
from dexrouter.multicall.client import Multicall3Client
from dexrouter.multicall.types import CallRequest
from dexrouter.routing.selection import (
    candidate_paths,
    expand_parameters,
    prepare_request,
)
from dexrouter.routing.strategies.base import BaseRoutingStrategy
from dexrouter.routing.types import QuoteContext


class AerodromeRoutingStrategy(BaseRoutingStrategy):
    """Quotes every (path, stable flags) pair through Router.getAmountsOut."""

    protocol = DexProtocol.STABLE_VOLATILE_FORK

    def __init__(self, chain: ChainConfig, multicall: Multicall3Client | None = None) -> None:
        self.chain = chain
        self.encoder = AerodromeQuoteEncoder(
            require_address(chain.aerodrome_router, f"{chain.name} Aerodrome router"),
            require_address(chain.aerodrome_factory, f"{chain.name} Aerodrome pool factory"),
        )
        self.multicall = multicall or Multicall3Client(chain.multicall3)

    def build_contexts(self, token_in: str, amount_in: Any, token_out: str) -> list[QuoteContext]:
        token_in, amount, token_out = prepare_request(self.chain, token_in, amount_in, token_out)
        paths = candidate_paths(self.chain, token_in, token_out)

        contexts: list[QuoteContext] = []
        for candidate, flags in expand_parameters(paths, stable_combinations_for_hops):
            path = list(candidate.path)
            stable_flags = [bool(flag) for flag in flags]
            hops = self.encoder.hops(path, stable_flags)
            contexts.append(
                QuoteContext(
                    request_index=len(contexts),
                    request=CallRequest(
                        target=self.encoder.target,
                        call_data=encode_get_amounts_out(amount, hops),
                    ),
                    path=path,
                    description=f"{candidate.description} | {pool_type_name(stable_flags)}",
                    stable_flags=stable_flags,
                    aero_routes=hops,
                )
            )
        return contexts

    def to_route(self, context: QuoteContext, amount_out: int) -> Route:
        return Route(
            amount_out=amount_out,
            path=list(context.path),
            protocol=self.protocol,
            aero_routes=list(context.aero_routes or []),
        )


__all__ = ["AerodromeRoutingStrategy"]
