"""Routing on UniswapV4 singleton pools.

Candidates are enumerated like V3 (fee tiers per hop, tick spacing derived
from the fee, hookless pools). Direct quotes carry the canonical PoolKey and
its pool id; multi-hop quotes carry one PathKey per hop. The V4 quoter takes
a uint128 exact amount, so larger inputs are rejected up front.
"""

from __future__ import annotations

from typing import Any

from dexrouter.amm.uniswap_v3 import fee_combinations_for_hops
from dexrouter.amm.uniswap_v4 import (
    UniswapV4QuoteEncoder,
    compute_pool_id,
    encode_quote_exact_input,
    encode_quote_exact_input_single,
    is_zero_for_one,
)
from dexrouter.config import ChainConfig, require_address
from dexrouter.models.route import DexProtocol, Route
from dexrouter.models.types import UINT128_MAX
from dexrouter.multicall.client import Multicall3Client
from dexrouter.multicall.types import CallRequest
from dexrouter.routing.selection import (
    candidate_paths,
    expand_parameters,
    prepare_request,
)
from dexrouter.routing.strategies.base import BaseRoutingStrategy
from dexrouter.routing.types import QuoteContext


class UniswapV4RoutingStrategy(BaseRoutingStrategy):
    """Quotes every (path, fee assignment) pair through the V4Quoter."""

    protocol = DexProtocol.SINGLETON_HOOK_POOL

    def __init__(self, chain: ChainConfig, multicall: Multicall3Client | None = None) -> None:
        self.chain = chain
        self.encoder = UniswapV4QuoteEncoder(
            require_address(chain.uniswap_v4_quoter, f"{chain.name} UniswapV4 quoter")
        )
        self.multicall = multicall or Multicall3Client(chain.multicall3)

    def build_contexts(self, token_in: str, amount_in: Any, token_out: str) -> list[QuoteContext]:
        token_in, amount, token_out = prepare_request(
            self.chain, token_in, amount_in, token_out, max_amount=UINT128_MAX
        )
        paths = candidate_paths(self.chain, token_in, token_out)

        contexts: list[QuoteContext] = []
        for candidate, fee_tiers in expand_parameters(paths, fee_combinations_for_hops):
            path = list(candidate.path)
            fees = [int(fee) for fee in fee_tiers]
            pool_key = None
            path_keys = None
            if candidate.is_multihop:
                path_keys = self.encoder.path_keys(path, fees)
                call_data = encode_quote_exact_input(path[0], path_keys, amount)
            else:
                pool_key = self.encoder.pool_key(token_in, token_out, fees[0])
                call_data = encode_quote_exact_input_single(
                    pool_key, is_zero_for_one(token_in, pool_key), amount
                )
            contexts.append(
                QuoteContext(
                    request_index=len(contexts),
                    request=CallRequest(target=self.encoder.target, call_data=call_data),
                    path=path,
                    description=f"{candidate.description} | {'-'.join(map(str, fees))}",
                    fees=fees,
                    pool_key=pool_key,
                    path_keys=path_keys,
                )
            )
        return contexts

    def to_route(self, context: QuoteContext, amount_out: int) -> Route:
        route = Route(
            amount_out=amount_out,
            path=list(context.path),
            fees=list(context.fees),
            protocol=self.protocol,
        )
        if context.pool_key is not None:
            route.pool_key = context.pool_key
            route.pool_id = compute_pool_id(context.pool_key)
        else:
            route.path_keys = list(context.path_keys or [])
        return route


__all__ = ["UniswapV4RoutingStrategy"]
