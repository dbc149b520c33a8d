"""Routing on UniswapV2-style constant-product pools."""

from __future__ import annotations

from typing import Any

from dexrouter.amm.uniswap_v2 import UniswapV2QuoteEncoder
from dexrouter.config import ChainConfig, require_address
from dexrouter.models.route import DexProtocol, Route
from dexrouter.multicall.client import Multicall3Client
from dexrouter.multicall.types import CallRequest
from dexrouter.routing.selection import candidate_paths, prepare_request
from dexrouter.routing.strategies.base import BaseRoutingStrategy
from dexrouter.routing.types import QuoteContext


class UniswapV2RoutingStrategy(BaseRoutingStrategy):
    """Quotes every candidate path through Router02.getAmountsOut.

    V2 pools have no per-hop parameters, so there is exactly one quote per
    candidate path.
    """

    protocol = DexProtocol.CONSTANT_PRODUCT

    def __init__(self, chain: ChainConfig, multicall: Multicall3Client | None = None) -> None:
        self.chain = chain
        self.encoder = UniswapV2QuoteEncoder(
            require_address(chain.uniswap_v2_router, f"{chain.name} UniswapV2 router")
        )
        self.multicall = multicall or Multicall3Client(chain.multicall3)

    def build_contexts(self, token_in: str, amount_in: Any, token_out: str) -> list[QuoteContext]:
        token_in, amount, token_out = prepare_request(self.chain, token_in, amount_in, token_out)

        contexts: list[QuoteContext] = []
        for candidate in candidate_paths(self.chain, token_in, token_out):
            path = list(candidate.path)
            if candidate.is_multihop:
                call_data = self.encoder.encode_multihop_quote(path, amount)
            else:
                call_data = self.encoder.encode_direct_quote(token_in, amount, token_out)
            contexts.append(
                QuoteContext(
                    request_index=len(contexts),
                    request=CallRequest(target=self.encoder.target, call_data=call_data),
                    path=path,
                    description=candidate.description,
                )
            )
        return contexts

    def to_route(self, context: QuoteContext, amount_out: int) -> Route:
        return Route(amount_out=amount_out, path=list(context.path), protocol=self.protocol)


__all__ = ["UniswapV2RoutingStrategy"]
