"""Routing on UniswapV3 concentrated-liquidity pools.

Each hop can sit in any of several fee tiers, and the best tier differs per
pool, so every candidate path is crossed with every fee assignment from the
fee-combination tables. Direct quotes use quoteExactInputSingle; multi-hop
quotes pack the path and use quoteExactInput.
"""

from __future__ import annotations

from typing import Any

from dexrouter.amm.uniswap_v3 import (
    UniswapV3QuoteEncoder,
    encode_path,
    encode_quote_exact_input,
    fee_combinations_for_hops,
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


class UniswapV3RoutingStrategy(BaseRoutingStrategy):
    """Quotes every (path, fee assignment) pair through QuoterV2."""

    protocol = DexProtocol.CONCENTRATED_LIQUIDITY

    def __init__(self, chain: ChainConfig, multicall: Multicall3Client | None = None) -> None:
        self.chain = chain
        self.encoder = UniswapV3QuoteEncoder(
            require_address(chain.uniswap_v3_quoter, f"{chain.name} UniswapV3 quoter")
        )
        self.multicall = multicall or Multicall3Client(chain.multicall3)

    def build_contexts(self, token_in: str, amount_in: Any, token_out: str) -> list[QuoteContext]:
        token_in, amount, token_out = prepare_request(self.chain, token_in, amount_in, token_out)
        paths = candidate_paths(self.chain, token_in, token_out)

        contexts: list[QuoteContext] = []
        for candidate, fee_tiers in expand_parameters(paths, fee_combinations_for_hops):
            path = list(candidate.path)
            fees = [int(fee) for fee in fee_tiers]
            encoded_path: bytes | None = None
            if candidate.is_multihop:
                encoded_path = encode_path(path, fees)
                call_data = encode_quote_exact_input(encoded_path, amount)
            else:
                call_data = self.encoder.encode_direct_quote(token_in, amount, token_out, fees[0])
            contexts.append(
                QuoteContext(
                    request_index=len(contexts),
                    request=CallRequest(target=self.encoder.target, call_data=call_data),
                    path=path,
                    description=f"{candidate.description} | {'-'.join(map(str, fees))}",
                    fees=fees,
                    encoded_path=encoded_path,
                )
            )
        return contexts

    def to_route(self, context: QuoteContext, amount_out: int) -> Route:
        # The winner always carries a packed path, direct routes included
        encoded = context.encoded_path or encode_path(context.path, context.fees)
        return Route(
            amount_out=amount_out,
            path=list(context.path),
            fees=list(context.fees),
            protocol=self.protocol,
            encoded_path="0x" + encoded.hex(),
        )


__all__ = ["UniswapV3RoutingStrategy"]
